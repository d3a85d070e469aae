"""
Forward return calculations.

Forward points are looked up in the full retrieved series, which extends
past the display window, using a binary search over sample dates. The
series must be in ascending date order.
"""

from bisect import bisect_left
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..data.models import CombinedSample, SignalEvent
from ..utils.time import add_months


def percent_return(start_price: float, end_price: float) -> float:
    """Percentage change from start_price to end_price."""
    return (end_price - start_price) / start_price * 100


def find_forward_sample(full_series: Sequence[CombinedSample],
                        target: date,
                        dates: Optional[Sequence[date]] = None) -> Optional[CombinedSample]:
    """
    First sample dated on or after target.

    Args:
        full_series: Date-ordered combined samples
        target: Earliest acceptable date
        dates: Precomputed sample dates, avoids rebuilding per lookup

    Returns:
        Matching sample or None if the series ends before target
    """
    if dates is None:
        dates = [sample.date for sample in full_series]

    index = bisect_left(dates, target)
    if index >= len(full_series):
        return None
    return full_series[index]


def forward_return(full_series: Sequence[CombinedSample],
                   origin: date,
                   price: float,
                   months: int,
                   dates: Optional[Sequence[date]] = None,
                   precision: Optional[int] = 2) -> Optional[float]:
    """
    Return from price at origin to the first sample `months` later.

    None when the series does not reach origin + months.
    """
    forward = find_forward_sample(full_series, add_months(origin, months), dates)
    if forward is None:
        return None

    value = percent_return(price, forward.primary)
    return round(value, precision) if precision is not None else value


class ReturnCalculator:
    """Forward return calculator over one full retrieved series."""

    def __init__(self, full_series: Sequence[CombinedSample],
                 short_horizon_months: int = 6, long_horizon_months: int = 12):
        self.full_series = full_series
        self.short_horizon_months = short_horizon_months
        self.long_horizon_months = long_horizon_months
        self._dates = [sample.date for sample in full_series]

    def with_returns(self, events: Sequence[SignalEvent]) -> list[SignalEvent]:
        """Copies of events with both forward horizons filled where data exists."""
        return [
            replace(
                event,
                six_month_return=forward_return(
                    self.full_series, event.date, event.primary_at_signal,
                    self.short_horizon_months, self._dates,
                ),
                twelve_month_return=forward_return(
                    self.full_series, event.date, event.primary_at_signal,
                    self.long_horizon_months, self._dates,
                ),
            )
            for event in events
        ]

    def benchmark_average(self, display_series: Sequence[CombinedSample]) -> Optional[float]:
        """
        Mean long-horizon return over every display sample with a forward point.

        Returns None when no display sample has a forward point.
        """
        returns = []
        for sample in display_series:
            value = forward_return(
                self.full_series, sample.date, sample.primary,
                self.long_horizon_months, self._dates, precision=None,
            )
            if value is not None:
                returns.append(value)

        if not returns:
            return None
        return round(sum(returns) / len(returns), 2)


def with_returns(events: Sequence[SignalEvent],
                 full_series: Sequence[CombinedSample]) -> list[SignalEvent]:
    """Fill six and twelve month returns for events from full_series."""
    return ReturnCalculator(full_series).with_returns(events)


def benchmark_average(display_series: Sequence[CombinedSample],
                      full_series: Sequence[CombinedSample]) -> Optional[float]:
    """Unconditional twelve month forward return averaged over the display series."""
    return ReturnCalculator(full_series).benchmark_average(display_series)


def average_return(values: Sequence[Optional[float]]) -> Optional[float]:
    """Mean of present values rounded to 2 decimals, None if none present."""
    present = [value for value in values if value is not None]
    if not present:
        return None
    return round(sum(present) / len(present), 2)
