"""
Data quality error classifications for series processing.

These exceptions describe problems with the payloads and series handed to
the parsing and signal stages, or with the window a caller asked for.
"""

from datetime import date
from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedPayloadError(DataQualityError):
    """Payload exists but does not have the expected chart structure."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InsufficientDataError(DataQualityError):
    """Not enough combined samples for the requested calculation."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class InvalidRangeError(DataQualityError):
    """Display window is missing a bound or starts after it ends."""

    def __init__(self, message: str, start: Optional[date] = None,
                 end: Optional[date] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.start = start
        self.end = end
