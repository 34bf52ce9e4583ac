"""Utility modules for the MOCO client.

This package provides duration parsing, date formatting and logging setup.

Modules:
    time_utils: Duration parsing and date formatting utilities
    log_utils: File logging setup
"""
from utils.time_utils import (
    DurationError,
    format_entry_date,
    format_hours,
    parse_duration,
    today_iso,
)
from utils.log_utils import setup_logging

__all__ = [
    "DurationError",
    "format_entry_date",
    "format_hours",
    "parse_duration",
    "today_iso",
    "setup_logging",
]
