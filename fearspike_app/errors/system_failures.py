"""
System failure error classifications.

These exceptions represent a query that could not obtain its inputs. They
are never retried by the core; the caller may re-issue the query.
"""

from typing import TYPE_CHECKING, Optional, Dict, Any

if TYPE_CHECKING:
    from ..retrieval.client import RetrievalAttempt


class SystemFailureError(Exception):
    """Base class for failures that abort a query."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class RetrievalFailedError(SystemFailureError):
    """Every configured relay failed for at least one series."""

    def __init__(self, message: str, attempts: Optional[list["RetrievalAttempt"]] = None,
                 failures_by_series: Optional[Dict[str, list["RetrievalAttempt"]]] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.attempts = list(attempts or [])
        self.failures_by_series = dict(failures_by_series or {})

    def describe_failures(self) -> list[str]:
        """One line per failed relay attempt, prefixed by series when known."""
        lines = []
        if self.failures_by_series:
            for series, attempts in self.failures_by_series.items():
                lines.extend(f"{series}: {attempt.describe()}" for attempt in attempts)
        else:
            lines.extend(attempt.describe() for attempt in self.attempts)
        return lines


class QueryCancelledError(SystemFailureError):
    """Query was abandoned before retrieval finished."""

    def __init__(self, message: str, attempts: Optional[list["RetrievalAttempt"]] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.attempts = list(attempts or [])


class ConfigurationError(SystemFailureError):
    """Configuration failed validation; the engine cannot be built from it."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = list(errors or [])
