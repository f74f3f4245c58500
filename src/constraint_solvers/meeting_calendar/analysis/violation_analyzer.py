from datetime import date
from typing import Iterable, List, Optional

from ..domain import (
    BinaryConstraint,
    DateConstraint,
    MeetingVariable,
    SolveResult,
    UnaryConstraint,
)


class ConstraintViolationAnalyzer:
    """
    Service for checking schedules against their constraints and explaining failures.

    A schedule returned by the solver should never have violations; this analyzer
    is the independent check used when reporting results. For unsatisfiable
    problems it lists the meetings left without candidate dates after
    preprocessing, which is usually where the contradiction is easiest to see.
    """

    @staticmethod
    def find_violations(
        schedule: List[Optional[date]],
        range_start: date,
        range_end: date,
        constraints: Iterable[DateConstraint],
    ) -> List[str]:
        """
        List every way in which a schedule breaks its problem.

        Args:
            schedule: One date (or None) per meeting
            range_start: First allowed date
            range_end: Last allowed date
            constraints: The problem's constraints

        Returns:
            Human-readable violations; empty when the schedule is consistent
        """
        violations = []

        violations.extend(
            ConstraintViolationAnalyzer._check_range_violations(
                schedule, range_start, range_end
            )
        )
        violations.extend(
            ConstraintViolationAnalyzer._check_constraint_violations(schedule, constraints)
        )

        return violations

    @staticmethod
    def _check_range_violations(
        schedule: List[Optional[date]], range_start: date, range_end: date
    ) -> List[str]:
        """Check for unassigned meetings and dates outside the range"""
        violations = []

        for meeting, value in enumerate(schedule):
            if value is None:
                violations.append(f"• Unassigned: meeting {meeting} has no date")
            elif not range_start <= value <= range_end:
                violations.append(
                    f"• Out of Range: meeting {meeting} on {value.isoformat()} is outside "
                    f"{range_start.isoformat()}..{range_end.isoformat()}"
                )

        return violations

    @staticmethod
    def _check_constraint_violations(
        schedule: List[Optional[date]], constraints: Iterable[DateConstraint]
    ) -> List[str]:
        """Check every constraint whose meetings are all assigned"""
        violations = []

        for constraint in constraints:
            match constraint:
                case UnaryConstraint(meeting=meeting):
                    value = schedule[meeting]
                    if value is not None and not constraint.evaluate(value):
                        violations.append(
                            f"• Constraint Violation: '{constraint}' fails with "
                            f"m{meeting} = {value.isoformat()}"
                        )

                case BinaryConstraint(left=left, right=right):
                    left_value, right_value = schedule[left], schedule[right]
                    if left_value is None or right_value is None:
                        continue
                    if not constraint.op.evaluate(left_value, right_value):
                        violations.append(
                            f"• Constraint Violation: '{constraint}' fails with "
                            f"m{left} = {left_value.isoformat()}, m{right} = {right_value.isoformat()}"
                        )

        return violations

    @staticmethod
    def explain_unsatisfiable(variables: List[MeetingVariable]) -> str:
        """
        Describe the meetings that ran out of candidate dates.

        Args:
            variables: Variables after preprocessing

        Returns:
            Explanation string
        """
        empty = [v for v in variables if not v.domain]
        if not empty:
            return (
                "Every meeting kept at least one candidate date, but no combination "
                "satisfies all constraints together."
            )

        lines = []
        for variable in empty:
            involved = [str(c) for c in variable.unary_constraints] + [
                str(c) for c in variable.binary_constraints
            ]
            lines.append(
                f"• No Candidates: meeting {variable.index} has no possible date "
                f"(constraints: {', '.join(involved) or 'none'})"
            )

        return "\n".join(lines)

    @staticmethod
    def generate_suggestions(result: SolveResult) -> List[str]:
        """Generate actionable suggestions for an unsolved problem"""
        if result.is_solved:
            return []

        suggestions = [
            "Widen the date range",
            "Relax strict orderings (< or >) to their inclusive forms",
            "Check for contradictory constraints between the same meetings",
        ]
        if result.stage == "preprocessing":
            suggestions.insert(0, "Review the fixed dates (==) and exclusions (!=) of each meeting")

        return suggestions
