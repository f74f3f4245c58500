"""
Meeting calendar constraint solver module.

This module contains the domain model, constraint handling, consistency
preprocessing and backtracking search used to place meetings on dates.
"""

from .domain import (
    Operator,
    UnaryConstraint,
    BinaryConstraint,
    MeetingVariable,
    MeetingProblem,
    SolveStatus,
    SolveResult,
    SearchStats,
    constraint_from_dict,
)
from .errors import (
    SchedulingInputError,
    InvalidMeetingCountError,
    InvalidRangeError,
    InvalidIndexError,
    InvalidConstraintError,
    SearchBudgetExceededError,
)
from .calendar import date_range, range_size, parse_date
from .constraints import (
    passes_constraint,
    validate_constraints,
    build_variables,
    parse_constraint,
)
from .consistency import enforce_node_consistency, enforce_arc_consistency, preprocess
from .search import (
    SearchStrategy,
    StaticOrdering,
    MostConstrainedFirst,
    STRATEGIES,
    get_strategy,
)
from .solver import solve, solve_problem

__all__ = [
    # Domain models
    "Operator",
    "UnaryConstraint",
    "BinaryConstraint",
    "MeetingVariable",
    "MeetingProblem",
    "SolveStatus",
    "SolveResult",
    "SearchStats",
    "constraint_from_dict",
    # Errors
    "SchedulingInputError",
    "InvalidMeetingCountError",
    "InvalidRangeError",
    "InvalidIndexError",
    "InvalidConstraintError",
    "SearchBudgetExceededError",
    # Calendar
    "date_range",
    "range_size",
    "parse_date",
    # Constraint functions
    "passes_constraint",
    "validate_constraints",
    "build_variables",
    "parse_constraint",
    # Preprocessing
    "enforce_node_consistency",
    "enforce_arc_consistency",
    "preprocess",
    # Search
    "SearchStrategy",
    "StaticOrdering",
    "MostConstrainedFirst",
    "STRATEGIES",
    "get_strategy",
    # Entry points
    "solve",
    "solve_problem",
]
