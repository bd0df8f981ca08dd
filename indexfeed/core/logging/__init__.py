"""Logging utilities for monitoring and debugging."""

from indexfeed.core.logging.logger import RECORD_FIELDS, add_file_sink, configure_logging, log_context, logger

__all__ = [
    "RECORD_FIELDS",
    "add_file_sink",
    "configure_logging",
    "log_context",
    "logger",
]
