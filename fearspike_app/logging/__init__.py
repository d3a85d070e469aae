"""
Logging configuration and utilities for the fearspike signal engine.
"""
from .config import configure_logging, get_logger, get_retrieval_logger, log_relay_attempt

__all__ = ["configure_logging", "get_logger", "get_retrieval_logger", "log_relay_attempt"]
