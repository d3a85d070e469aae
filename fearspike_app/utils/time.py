"""
Calendar and timestamp helpers.

Upstream timestamps are unix seconds and are mapped to UTC calendar dates.
Month arithmetic keeps the day of month and rolls any overflow into the
following month, so Aug 31 plus six months is early March.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta

from ..errors import InvalidRangeError

# Preset display windows, in years back from today
PRESET_WINDOWS: dict[str, int] = {
    "1Y": 1,
    "2Y": 2,
    "5Y": 5,
    "10Y": 10,
    "20Y": 20,
    "50Y": 50,
}

CUSTOM_WINDOW = "Custom"


def date_from_timestamp(ts: int) -> date:
    """Convert unix seconds to the UTC calendar date."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).date()


def start_of_day_timestamp(day: date) -> int:
    """Unix seconds at UTC midnight of day."""
    return int(datetime.combine(day, time.min, tzinfo=timezone.utc).timestamp())


def end_of_day_timestamp(day: date) -> int:
    """Unix seconds at the last second of day in UTC."""
    return start_of_day_timestamp(day) + 86399


def add_months(day: date, months: int) -> date:
    """
    Shift day by a number of calendar months.

    The day of month is kept; when the target month is shorter the extra
    days roll into the next month (Aug 31 + 6 months -> Mar 2 or Mar 3).
    """
    first_of_month = day.replace(day=1) + relativedelta(months=months)
    return first_of_month + timedelta(days=day.day - 1)


def add_years(day: date, years: int) -> date:
    """Shift day by a number of calendar years; Feb 29 rolls to Mar 1."""
    return add_months(day, 12 * years)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def resolve_window(
    preset: str,
    today: Optional[date] = None,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> tuple[date, date]:
    """
    Derive a display window from a named preset or a custom range.

    Args:
        preset: One of PRESET_WINDOWS or "Custom"
        today: Reference date for presets, defaults to the current UTC date
        custom_start: Start date when preset is "Custom"
        custom_end: End date when preset is "Custom"

    Returns:
        Tuple of (display_start, display_end)

    Raises:
        InvalidRangeError: If the custom range is incomplete or reversed,
            or the preset is unknown
    """
    if preset == CUSTOM_WINDOW:
        if custom_start is None or custom_end is None:
            raise InvalidRangeError(
                "Please select both a start and end date for the custom range.",
                start=custom_start,
                end=custom_end,
            )
        validate_window(custom_start, custom_end)
        return custom_start, custom_end

    if preset not in PRESET_WINDOWS:
        raise InvalidRangeError(f"Unknown preset window: {preset}")

    end = today or utc_today()
    return add_years(end, -PRESET_WINDOWS[preset]), end


def validate_window(start: Optional[date], end: Optional[date]) -> None:
    """Raise InvalidRangeError unless both bounds exist and start <= end."""
    if start is None or end is None:
        raise InvalidRangeError("Display window requires both a start and an end date",
                                start=start, end=end)
    if start > end:
        raise InvalidRangeError(f"Display window start {start} is after end {end}",
                                start=start, end=end)


def fetch_range(
    display_start: date,
    display_end: date,
    overfetch_years: int = 1,
    now: Optional[datetime] = None,
) -> tuple[int, int]:
    """
    Unix-second range to request from the source.

    Forward returns need data past the display end, so the request extends
    overfetch_years beyond it, capped at the present moment.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    period1 = start_of_day_timestamp(display_start)
    period2 = end_of_day_timestamp(add_years(display_end, overfetch_years))
    return period1, min(period2, int(now.timestamp()))
