from datetime import date, datetime
from typing import Iterable

from utils.logging_config import get_logger

from .calendar import date_range, validate_range
from .consistency import preprocess
from .constraints import build_variables, validate_constraints
from .domain import DateConstraint, MeetingProblem, SolveResult
from .errors import InvalidMeetingCountError, InvalidRangeError
from .search import SearchStrategy, get_strategy, search

logger = get_logger(__name__)


def solve(
    meeting_count: int,
    range_start: date,
    range_end: date,
    constraints: Iterable[DateConstraint],
    strategy: "str | SearchStrategy | None" = None,
    max_nodes: int | None = None,
) -> SolveResult:
    """Schedule `meeting_count` meetings on dates in [range_start, range_end].

    Args:
        meeting_count: Number of meetings, indexed 0..meeting_count-1.
        range_start: First allowed date (inclusive), shared by every meeting.
        range_end: Last allowed date (inclusive).
        constraints: Unary and binary date constraints.
        strategy: Search ordering; a name from `search.STRATEGIES`, an instance, or
            None for static ordering.
        max_nodes: Optional bound on expanded search nodes. Unlimited by default.

    Returns:
        SolveResult: SOLVED with one date per meeting, or NO_SOLUTION.

    Raises:
        SchedulingInputError: The problem is malformed. Raised before any search.
        SearchBudgetExceededError: `max_nodes` was given and exceeded.
    """
    if isinstance(meeting_count, bool) or not isinstance(meeting_count, int):
        raise InvalidMeetingCountError(f"Meeting count must be an integer, got {meeting_count!r}")
    if meeting_count < 0:
        raise InvalidMeetingCountError(f"Meeting count must be >= 0, got {meeting_count}")
    for bound in (range_start, range_end):
        # Domains hold whole days; a datetime never compares equal to a date
        if isinstance(bound, datetime) or not isinstance(bound, date):
            raise InvalidRangeError(f"Range bounds must be dates, got {bound!r}")
    validate_range(range_start, range_end)

    if meeting_count == 0:
        return SolveResult.solved([])

    constraints = list(constraints)
    validate_constraints(meeting_count, constraints)
    search_strategy = get_strategy(strategy)

    logger.debug(
        f"Solving {meeting_count} meetings between {range_start.isoformat()} and "
        f"{range_end.isoformat()} with {len(constraints)} constraints"
    )

    variables = build_variables(meeting_count, date_range(range_start, range_end), constraints)

    if not preprocess(variables):
        logger.debug("Problem is unsatisfiable after preprocessing, search skipped")
        return SolveResult.no_solution("preprocessing")

    schedule, stats = search(variables, search_strategy, max_nodes)
    if schedule is None:
        return SolveResult.no_solution("search", stats)

    return SolveResult.solved(schedule, stats)


def solve_problem(
    problem: MeetingProblem,
    strategy: "str | SearchStrategy | None" = None,
    max_nodes: int | None = None,
) -> SolveResult:
    """Solve a MeetingProblem."""
    return solve(
        problem.meeting_count,
        problem.range_start,
        problem.range_end,
        problem.constraints,
        strategy=strategy,
        max_nodes=max_nodes,
    )
