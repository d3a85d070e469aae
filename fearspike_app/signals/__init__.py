"""
Signal detection module.

Detects fear-spike-then-decline events in the volatility series and
classifies the latest display pair into a user-facing status label.
"""
from .detector import EntryStatus, classify_status, detect_signals, require_status

__all__ = ["EntryStatus", "classify_status", "detect_signals", "require_status"]
