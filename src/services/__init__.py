"""
Services module for Calendar Planner business logic.

This module contains the solve-and-report orchestration used by the command line.
"""

from .schedule import ScheduleService

__all__ = [
    "ScheduleService",
]
