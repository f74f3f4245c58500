"""
Data module for problem generation, loading and formatting.

This module contains all algorithmic data creation, loading, and formatting logic
for the Calendar Planner scheduling system.
"""

from .formatters import schedule_to_dataframe, constraints_to_dataframe
from .generators import generate_problem, earliest_monday_on_or_after
from .provider import generate_demo_problem, load_problem, save_problem

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
