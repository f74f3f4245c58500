"""
Consistency preprocessing for meeting variables.

Runs once before search:
1. Node consistency: drop candidates failing any unary constraint.
2. Arc consistency: drop candidates with no supporting date in the peer's
   current candidates, for every binary constraint on the variable.

The arc pass visits each (variable, constraint) pair exactly once in index order.
Removals are not propagated back to neighbours that were already visited, so the
result can be weaker than a fixed-point AC-3. The search re-checks every
constraint against committed dates and does not rely on the pruning for
correctness.
"""

from utils.logging_config import get_logger

from .domain import MeetingVariable, BinaryConstraint

logger = get_logger(__name__)


def enforce_node_consistency(variable: MeetingVariable) -> int:
    """Remove every candidate date that fails one of the variable's unary constraints.

    Returns:
        int: Number of candidates removed.
    """
    if not variable.unary_constraints:
        return 0

    before = len(variable.domain)
    variable.domain = [
        candidate
        for candidate in variable.domain
        if all(uc.evaluate(candidate) for uc in variable.unary_constraints)
    ]
    return before - len(variable.domain)


def _has_support(
    variable: MeetingVariable, constraint: BinaryConstraint, candidate, peer: MeetingVariable
) -> bool:
    return any(
        constraint.evaluate_for(variable.index, candidate, peer_value)
        for peer_value in peer.domain
    )


def enforce_arc_consistency(
    variable: MeetingVariable, variables: list[MeetingVariable]
) -> int:
    """Remove candidates of `variable` that have no support in a peer's current domain.

    Args:
        variable: The variable whose domain is revised.
        variables: All variables, indexed by meeting.

    Returns:
        int: Number of candidates removed.
    """
    before = len(variable.domain)

    for constraint in variable.binary_constraints:
        peer = variables[constraint.peer_of(variable.index)]
        variable.domain = [
            candidate
            for candidate in variable.domain
            if _has_support(variable, constraint, candidate, peer)
        ]

    return before - len(variable.domain)


def preprocess(variables: list[MeetingVariable]) -> bool:
    """Prune every variable's domain; node pass first, then arc pass.

    Returns:
        bool: False if some variable was left without candidates, meaning the
        problem is unsatisfiable.
    """
    node_removed = sum(enforce_node_consistency(v) for v in variables)
    arc_removed = sum(enforce_arc_consistency(v, variables) for v in variables)

    logger.debug(
        f"Preprocessing removed {node_removed} candidates by node consistency "
        f"and {arc_removed} by arc consistency"
    )

    empty = [v.index for v in variables if not v.domain]
    if empty:
        logger.debug(f"Meetings without candidates after preprocessing: {empty}")
        return False

    return True
