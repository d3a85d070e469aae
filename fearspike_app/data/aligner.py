"""Date alignment of the primary and secondary series."""

from datetime import date
from typing import Sequence, TypeVar, Union

from .models import CombinedSample, Sample, SignalEvent

DatedT = TypeVar("DatedT", bound=Union[CombinedSample, SignalEvent])


def combine_series(primary: Sequence[Sample], secondary: Sequence[Sample]) -> list[CombinedSample]:
    """
    Inner join two series on exact date equality.

    Output follows primary order. Dates missing from either side are dropped;
    nothing is interpolated or forward filled.

    Args:
        primary: Parsed equity index samples
        secondary: Parsed volatility index samples

    Returns:
        List of CombinedSample for dates present in both inputs
    """
    secondary_by_date = {sample.date: sample.price for sample in secondary}

    return [
        CombinedSample(date=sample.date, primary=sample.price, secondary=secondary_by_date[sample.date])
        for sample in primary
        if sample.date in secondary_by_date
    ]


def filter_window(items: Sequence[DatedT], start: date, end: date) -> list[DatedT]:
    """Keep items whose date lies within [start, end]."""
    return [item for item in items if start <= item.date <= end]
