"""
Centralized Logging Configuration for Calendar Planner

This module provides a unified logging configuration that:
1. Respects the CALENDAR_PLANNER_DEBUG environment variable for debug logging
2. Uses consistent formatting across the entire codebase
3. Eliminates the need for individual logging.basicConfig() calls

Usage:
    from utils.logging_config import setup_logging, get_logger

    # Initialize logging (typically done once per entry point or service)
    setup_logging()
    logger = get_logger(__name__)

    logger.debug("Debug message - only shown when CALENDAR_PLANNER_DEBUG=true")
    logger.info("Info message - always shown")

Solver modules only call get_logger(); configuring handlers is left to the
application, services and tests.

Environment Variables:
    CALENDAR_PLANNER_DEBUG: Set to "true" to enable debug logging
"""

import os, sys, logging

from typing import Optional

DEBUG_ENV_VAR = "CALENDAR_PLANNER_DEBUG"

_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """
    Set up centralized logging configuration for the application.

    Calling it again only updates the level of the console handler.

    Args:
        level: Override the logging level. If None, uses CALENDAR_PLANNER_DEBUG environment variable.
    """
    global _console_handler

    # Determine logging level
    if level is not None:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = logging.DEBUG if is_debug_enabled() else logging.INFO

    root_logger = logging.getLogger()

    # Only configure if not already configured
    if _console_handler is None or _console_handler not in root_logger.handlers:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Console handler for terminal output
        _console_handler = logging.StreamHandler(sys.stdout)
        _console_handler.setFormatter(formatter)
        root_logger.addHandler(_console_handler)

    _console_handler.setLevel(log_level)
    root_logger.setLevel(log_level)

    logger = logging.getLogger(__name__)
    logger.debug(f"Debug logging enabled via {DEBUG_ENV_VAR} environment variable")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Name for the logger, typically __name__

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def is_debug_enabled() -> bool:
    """Check if debug logging is enabled via environment variable."""
    return os.getenv(DEBUG_ENV_VAR, "false").lower() == "true"
