"""
Error classification for the signal query pipeline.

Data quality errors describe bad or insufficient input; system failures
describe a query that could not complete. Both are terminal for a query.
"""

from .data_quality import (
    DataQualityError,
    MalformedPayloadError,
    InsufficientDataError,
    InvalidRangeError,
)
from .system_failures import (
    SystemFailureError,
    RetrievalFailedError,
    QueryCancelledError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedPayloadError",
    "InsufficientDataError",
    "InvalidRangeError",
    # System Failures
    "SystemFailureError",
    "RetrievalFailedError",
    "QueryCancelledError",
    "ConfigurationError",
]
