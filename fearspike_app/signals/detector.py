"""
Fear-spike-then-decline signal detection.

The detector is a memoryless edge detector over consecutive samples: an
event fires at index i when the secondary close at i-1 exceeds the fear
threshold and the secondary close at i is strictly lower. A multi-day
decline from above the threshold fires on every day it keeps falling
while the prior close is still above the threshold.
"""

from enum import Enum
from typing import Sequence

from ..data.models import CombinedSample, SignalEvent
from ..errors import InsufficientDataError
from ..logging.config import get_logger

logger = get_logger(__name__)

FEAR_THRESHOLD = 30.0


class EntryStatus(str, Enum):
    """User-facing status labels."""
    ENTER = "Good Time to Enter"
    HIGH_FEAR = "High Fear: Monitor"
    WAIT = "Wait"
    NO_DATA = "No Data"
    ERROR = "Error"


def is_fear_decline(previous: CombinedSample, current: CombinedSample,
                    threshold: float = FEAR_THRESHOLD) -> bool:
    """Prior secondary above threshold and current secondary strictly lower."""
    return previous.secondary > threshold and current.secondary < previous.secondary


def detect_signals(series: Sequence[CombinedSample],
                   threshold: float = FEAR_THRESHOLD) -> list[SignalEvent]:
    """
    Scan a combined series and emit one event per qualifying index.

    Args:
        series: Date-ordered combined samples
        threshold: Fear threshold the prior secondary close must exceed

    Returns:
        Signal events in series order, forward returns left pending
    """
    events = []

    for i in range(1, len(series)):
        previous = series[i - 1]
        current = series[i]

        if is_fear_decline(previous, current, threshold):
            events.append(SignalEvent(
                date=current.date,
                primary_at_signal=current.primary,
                secondary_at_signal=current.secondary,
            ))

    logger.debug("Signal scan complete", samples=len(series), events=len(events))
    return events


def classify_status(display_series: Sequence[CombinedSample],
                    threshold: float = FEAR_THRESHOLD) -> EntryStatus:
    """
    Classify the latest pair of the display series.

    Returns NO_DATA when fewer than two samples are available.
    """
    if len(display_series) < 2:
        return EntryStatus.NO_DATA

    previous, latest = display_series[-2], display_series[-1]

    if is_fear_decline(previous, latest, threshold):
        return EntryStatus.ENTER
    if latest.secondary > threshold:
        return EntryStatus.HIGH_FEAR
    return EntryStatus.WAIT


def require_status(display_series: Sequence[CombinedSample],
                   threshold: float = FEAR_THRESHOLD) -> EntryStatus:
    """Like classify_status, but raise InsufficientDataError instead of NO_DATA."""
    if len(display_series) < 2:
        raise InsufficientDataError(
            "At least two combined samples are required to classify status",
            required_count=2,
            available_count=len(display_series),
        )
    return classify_status(display_series, threshold)
