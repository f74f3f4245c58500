"""
Factory module for problem creation.

This module contains all data creation, loading, and formatting logic
for the Calendar Planner scheduling system, organized into:
- data: Problem generation, JSON loading and DataFrame formatting
"""

from .data.formatters import schedule_to_dataframe, constraints_to_dataframe
from .data.generators import generate_problem, earliest_monday_on_or_after
from .data.provider import generate_demo_problem, load_problem, save_problem

__all__ = [
    # Data formatters - convert domain objects to DataFrames
    "schedule_to_dataframe",
    "constraints_to_dataframe",
    # Data generators - create domain objects
    "generate_problem",
    "earliest_monday_on_or_after",
    # Data providers - orchestrate data creation and loading
    "generate_demo_problem",
    "load_problem",
    "save_problem",
]
