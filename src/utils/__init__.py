"""
Utils package for common utilities and helper functions.

This module contains logging configuration and calendar extraction utilities.
"""

from .logging_config import setup_logging, get_logger, is_debug_enabled
from .extract_calendar import extract_ical_entries, busy_dates, busy_date_constraints

__all__ = [
    # Logging utilities
    "setup_logging",
    "get_logger",
    "is_debug_enabled",
    # Calendar utilities
    "extract_ical_entries",
    "busy_dates",
    "busy_date_constraints",
]
