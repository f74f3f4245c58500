### GENERAL IMPORTS ###
import re

from datetime import date, datetime
from typing import Iterable

### DOMAIN ###
from .domain import (
    Operator,
    UnaryConstraint,
    BinaryConstraint,
    DateConstraint,
    MeetingVariable,
)
from .errors import InvalidConstraintError, InvalidIndexError


def passes_constraint(lhs: date, rhs: date, op: Operator) -> bool:
    """Check whether `lhs OP rhs` holds.

    Args:
        lhs (date): The left operand.
        rhs (date): The right operand.
        op (Operator): The comparison.

    Returns:
        bool: True if the comparison holds.
    """
    return Operator.parse(op).evaluate(lhs, rhs)


def _check_index(meeting_count: int, index, constraint) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidIndexError(f"Meeting index {index!r} in {constraint!r} is not an integer")

    if not 0 <= index < meeting_count:
        raise InvalidIndexError(
            f"Meeting index {index} in {constraint!r} is outside [0, {meeting_count})"
        )


def _check_operator(constraint) -> None:
    if not isinstance(constraint.op, Operator):
        raise InvalidConstraintError(
            f"Operator {constraint.op!r} in {constraint!r} is not an Operator, use Operator.parse()"
        )


def _check_reference(constraint) -> None:
    # Domains hold whole days; a datetime never compares equal to a date
    if isinstance(constraint.reference, datetime) or not isinstance(constraint.reference, date):
        raise InvalidConstraintError(
            f"Reference {constraint.reference!r} in {constraint!r} must be a date"
        )


def validate_constraints(meeting_count: int, constraints: Iterable[DateConstraint]) -> None:
    """Fail fast on constraints that cannot belong to a problem with `meeting_count` meetings.

    Raises:
        InvalidIndexError: A meeting index is outside [0, meeting_count).
        InvalidConstraintError: A binary constraint relates a meeting to itself, an
            operator is not an `Operator`, a reference is not a plain date, or the
            object is not a date constraint at all.
    """
    for constraint in constraints:
        match constraint:
            case UnaryConstraint():
                _check_index(meeting_count, constraint.meeting, constraint)
                _check_operator(constraint)
                _check_reference(constraint)

            case BinaryConstraint():
                _check_index(meeting_count, constraint.left, constraint)
                _check_index(meeting_count, constraint.right, constraint)
                _check_operator(constraint)
                if constraint.left == constraint.right:
                    raise InvalidConstraintError(
                        f"Binary constraint '{constraint}' must relate two different meetings"
                    )

            case _:
                raise InvalidConstraintError(
                    f"Unsupported constraint {constraint!r}: only unary and binary date constraints are modeled"
                )


def build_variables(
    meeting_count: int, dates: list[date], constraints: Iterable[DateConstraint]
) -> list[MeetingVariable]:
    """Create one variable per meeting and route each constraint to its owner(s).

    Every variable starts with its own copy of `dates`. A binary constraint is
    routed to both of its meetings as the same (frozen) object.
    """
    unary: list[list[UnaryConstraint]] = [[] for _ in range(meeting_count)]
    binary: list[list[BinaryConstraint]] = [[] for _ in range(meeting_count)]

    for constraint in constraints:
        if constraint.arity == 2:
            binary[constraint.left].append(constraint)
            binary[constraint.right].append(constraint)
        else:
            unary[constraint.meeting].append(constraint)

    return [
        MeetingVariable(
            index=index,
            domain=list(dates),
            unary_constraints=tuple(unary[index]),
            binary_constraints=tuple(binary[index]),
        )
        for index in range(meeting_count)
    ]


### PARSING ###
_MEETING_PATTERN = re.compile(r"^m?(\d+)$", re.IGNORECASE)
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CONSTRAINT_PATTERN = re.compile(
    r"^\s*([^\s<>=!]+)\s*(==|!=|<=|>=|<|>|=)\s*([^\s<>=!]+)\s*$"
)


def _parse_operand(token: str):
    meeting = _MEETING_PATTERN.match(token)
    if meeting:
        return int(meeting.group(1))

    if _DATE_PATTERN.match(token):
        try:
            return date.fromisoformat(token)
        except ValueError as e:
            raise InvalidConstraintError(f"Invalid date {token!r}") from e

    raise InvalidConstraintError(f"Operand {token!r} is neither a meeting nor a date")


def parse_constraint(text: str) -> DateConstraint:
    """Parse a textual constraint.

    Meetings are written `m3` or `3`, dates as ISO `YYYY-MM-DD`:

        "m0 < m1"           -> BinaryConstraint(0, <, 1)
        "m2 != 2024-03-05"  -> UnaryConstraint(2, !=, 2024-03-05)
        "2024-03-05 < m2"   -> UnaryConstraint(2, >, 2024-03-05)
    """
    parsed = _CONSTRAINT_PATTERN.match(text or "")
    if not parsed:
        raise InvalidConstraintError(f"Cannot parse constraint {text!r}")

    lhs_token, op_token, rhs_token = parsed.groups()
    op = Operator.parse(op_token)
    lhs = _parse_operand(lhs_token)
    rhs = _parse_operand(rhs_token)

    match (lhs, rhs):
        case (int(), int()):
            return BinaryConstraint(left=lhs, op=op, right=rhs)

        case (int(), date()):
            return UnaryConstraint(meeting=lhs, op=op, reference=rhs)

        case (date(), int()):
            return UnaryConstraint(meeting=rhs, op=op.flipped(), reference=lhs)

        case _:
            raise InvalidConstraintError(f"Constraint {text!r} does not reference any meeting")
