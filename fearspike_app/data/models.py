"""
Canonical data models for parsed and combined series.

This module defines immutable data structures that flow through one query:
parsed samples, date-aligned samples, signal events and the result set
handed back to the caller.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Sample:
    """Single daily close of one series. Price is always positive."""
    date: date
    price: float


@dataclass(frozen=True)
class CombinedSample:
    """Date present with a valid price in both series."""
    date: date
    primary: float      # Equity index close
    secondary: float    # Volatility index close


@dataclass(frozen=True)
class SignalEvent:
    """Fear-spike-then-decline occurrence and its forward returns."""
    date: date
    primary_at_signal: float
    secondary_at_signal: float
    six_month_return: Optional[float] = None      # None while pending
    twelve_month_return: Optional[float] = None   # None while pending

    @property
    def is_pending(self) -> bool:
        """True if either forward horizon is not covered by available data."""
        return self.six_month_return is None or self.twelve_month_return is None


@dataclass(frozen=True)
class QueryRange:
    """Display window requested by the caller, both bounds inclusive."""
    display_start: date
    display_end: date


@dataclass(frozen=True)
class ResultSet:
    """Display-window view of one query."""
    display_series: tuple[CombinedSample, ...] = ()
    signal_events: tuple[SignalEvent, ...] = ()
    benchmark_average_return: Optional[float] = None


@dataclass(frozen=True)
class QueryResult:
    """Everything a query produces for the presentation layer."""
    result_set: ResultSet
    status: str
    average_six_month_return: Optional[float] = None
    average_twelve_month_return: Optional[float] = None
    fetch_period: tuple[int, int] = (0, 0)   # Unix seconds requested from the source

    @property
    def display_series(self) -> tuple[CombinedSample, ...]:
        return self.result_set.display_series

    @property
    def signal_events(self) -> tuple[SignalEvent, ...]:
        return self.result_set.signal_events

    @property
    def benchmark_average_return(self) -> Optional[float]:
        return self.result_set.benchmark_average_return


@dataclass(frozen=True)
class QueryFailure:
    """Terminal failure of a query: one message and a degraded status."""
    message: str
    error: Exception
    status: str = "Error"
