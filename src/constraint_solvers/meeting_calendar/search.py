"""
Backtracking search over meeting dates.

Depth-first: pick an unassigned meeting, try its candidate dates in order,
commit the first one consistent with every constraint whose other side is
already scheduled, recurse, and undo the commitment when the recursion fails.
The schedule list is shared by every frame; each frame restores exactly the
slot it wrote before returning.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from utils.logging_config import get_logger

from .domain import MeetingVariable, Schedule, SearchStats
from .errors import SearchBudgetExceededError

logger = get_logger(__name__)


# =========================
#        STRATEGIES
# =========================


class SearchStrategy:
    """Decides which meeting to schedule next and in which order to try its dates."""

    name = "base"

    def select_variable(
        self, schedule: Schedule, variables: list[MeetingVariable]
    ) -> Optional[MeetingVariable]:
        raise NotImplementedError

    def order_values(
        self, variable: MeetingVariable, schedule: Schedule, variables: list[MeetingVariable]
    ) -> list[date]:
        return sorted(variable.domain)


class StaticOrdering(SearchStrategy):
    """Lowest-indexed unassigned meeting first, dates in ascending order."""

    name = "static"

    def select_variable(self, schedule, variables):
        for index, value in enumerate(schedule):
            if value is None:
                return variables[index]
        return None


class MostConstrainedFirst(SearchStrategy):
    """Fewest remaining candidates first; ties go to the meeting with more binary
    constraints, then to the lowest index."""

    name = "most-constrained"

    def select_variable(self, schedule, variables):
        unassigned = [variables[i] for i, value in enumerate(schedule) if value is None]
        if not unassigned:
            return None

        return min(unassigned, key=lambda v: (len(v.domain), -v.degree, v.index))


STRATEGIES: dict[str, type[SearchStrategy]] = {
    StaticOrdering.name: StaticOrdering,
    MostConstrainedFirst.name: MostConstrainedFirst,
}


def get_strategy(strategy: "str | SearchStrategy | None") -> SearchStrategy:
    """Resolve a strategy instance from a name, an instance, or None (static)."""
    match strategy:
        case None:
            return StaticOrdering()

        case SearchStrategy():
            return strategy

        case str() if strategy in STRATEGIES:
            return STRATEGIES[strategy]()

        case _:
            raise ValueError(
                f"Unknown search strategy {strategy!r}, expected one of {sorted(STRATEGIES)}"
            )


# =========================
#          SEARCH
# =========================


@dataclass
class SearchContext:
    """State shared by every frame of one search."""

    variables: list[MeetingVariable]
    strategy: SearchStrategy = field(default_factory=StaticOrdering)
    max_nodes: int | None = None
    stats: SearchStats = field(default_factory=SearchStats)

    def visit(self) -> None:
        self.stats.nodes_visited += 1
        if self.max_nodes is not None and self.stats.nodes_visited > self.max_nodes:
            raise SearchBudgetExceededError(self.max_nodes, self.stats.nodes_visited)


def is_consistent(variable: MeetingVariable, candidate: date, schedule: Schedule) -> bool:
    """Check `candidate` for `variable` against the partial schedule.

    Unary constraints are always checked. A binary constraint is only checked once
    its peer has a committed date; until then it is deferred.
    """
    for uc in variable.unary_constraints:
        if not uc.evaluate(candidate):
            return False

    for bc in variable.binary_constraints:
        peer_value = schedule[bc.peer_of(variable.index)]
        if peer_value is None:
            continue
        if not bc.evaluate_for(variable.index, candidate, peer_value):
            return False

    return True


def backtrack(schedule: Schedule, context: SearchContext) -> Schedule | None:
    """Extend `schedule` to a complete consistent assignment.

    Returns:
        The complete schedule (the same list object), or None if no extension of
        the current partial schedule exists. On None the schedule is left exactly
        as it was received.
    """
    variable = context.strategy.select_variable(schedule, context.variables)
    if variable is None:
        return schedule

    context.visit()

    for candidate in context.strategy.order_values(variable, schedule, context.variables):
        if not is_consistent(variable, candidate, schedule):
            continue

        schedule[variable.index] = candidate

        result = backtrack(schedule, context)
        if result is not None:
            return result

        schedule[variable.index] = None
        context.stats.backtracks += 1

    return None


def search(
    variables: list[MeetingVariable],
    strategy: SearchStrategy | None = None,
    max_nodes: int | None = None,
) -> tuple[list[date] | None, SearchStats]:
    """Run the backtracking search from the all-unassigned schedule.

    Returns:
        A tuple of (complete schedule or None, search statistics).

    Raises:
        SearchBudgetExceededError: More than `max_nodes` nodes were expanded.
    """
    context = SearchContext(
        variables=variables,
        strategy=strategy or StaticOrdering(),
        max_nodes=max_nodes,
    )
    schedule: Schedule = [None] * len(variables)

    logger.debug(
        f"Starting backtracking search over {len(variables)} meetings "
        f"with '{context.strategy.name}' ordering"
    )

    result = backtrack(schedule, context)

    logger.debug(
        f"Search finished: visited {context.stats.nodes_visited} nodes, "
        f"{context.stats.backtracks} backtracks, "
        f"{'solution found' if result is not None else 'no solution'}"
    )

    return (list(result) if result is not None else None), context.stats
