import operator as _operator

from datetime import date
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .errors import InvalidConstraintError


class Operator(str, Enum):
    """Comparison between two dates, evaluated left-relative-to-right."""

    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    LESS_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_OR_EQUAL = ">="

    def evaluate(self, lhs: date, rhs: date) -> bool:
        return _COMPARATORS[self](lhs, rhs)

    def flipped(self) -> "Operator":
        """The operator with its operands swapped (a < b  <=>  b > a)."""
        return _FLIPPED[self]

    @staticmethod
    def parse(symbol) -> "Operator":
        if isinstance(symbol, Operator):
            return symbol

        text = str(symbol).strip().lower()
        if text in _ALIASES:
            return _ALIASES[text]

        try:
            return Operator(text)
        except ValueError as e:
            raise InvalidConstraintError(f"Unknown operator: {symbol!r}") from e


_COMPARATORS: dict[Operator, Callable[[date, date], bool]] = {
    Operator.EQUAL: _operator.eq,
    Operator.NOT_EQUAL: _operator.ne,
    Operator.LESS_THAN: _operator.lt,
    Operator.LESS_OR_EQUAL: _operator.le,
    Operator.GREATER_THAN: _operator.gt,
    Operator.GREATER_OR_EQUAL: _operator.ge,
}

_FLIPPED: dict[Operator, Operator] = {
    Operator.EQUAL: Operator.EQUAL,
    Operator.NOT_EQUAL: Operator.NOT_EQUAL,
    Operator.LESS_THAN: Operator.GREATER_THAN,
    Operator.LESS_OR_EQUAL: Operator.GREATER_OR_EQUAL,
    Operator.GREATER_THAN: Operator.LESS_THAN,
    Operator.GREATER_OR_EQUAL: Operator.LESS_OR_EQUAL,
}

_ALIASES: dict[str, Operator] = {
    "=": Operator.EQUAL,
    "eq": Operator.EQUAL,
    "ne": Operator.NOT_EQUAL,
    "<>": Operator.NOT_EQUAL,
    "lt": Operator.LESS_THAN,
    "le": Operator.LESS_OR_EQUAL,
    "gt": Operator.GREATER_THAN,
    "ge": Operator.GREATER_OR_EQUAL,
}


@dataclass(frozen=True)
class UnaryConstraint:
    """`meeting OP reference`: restricts the date of a single meeting."""

    meeting: int
    op: Operator
    reference: date

    @property
    def arity(self) -> int:
        return 1

    def evaluate(self, candidate: date) -> bool:
        return self.op.evaluate(candidate, self.reference)

    def __str__(self):
        return f"m{self.meeting} {self.op.value} {self.reference.isoformat()}"

    def to_dict(self):
        return {
            "meeting": self.meeting,
            "op": self.op.value,
            "date": self.reference.isoformat(),
        }

    @staticmethod
    def from_dict(d):
        return UnaryConstraint(
            meeting=int(d["meeting"]),
            op=Operator.parse(d["op"]),
            reference=date.fromisoformat(d["date"]),
        )


@dataclass(frozen=True)
class BinaryConstraint:
    """`left OP right`: relates the dates of two different meetings.

    Both meetings hold a reference to the same instance, so a re-check from either
    side sees the same operator and orientation.
    """

    left: int
    op: Operator
    right: int

    @property
    def arity(self) -> int:
        return 2

    def peer_of(self, meeting: int) -> int:
        """Return the index on the other side of the constraint."""
        return self.right if meeting == self.left else self.left

    def evaluate_for(self, meeting: int, candidate: date, peer_value: date) -> bool:
        """Evaluate with `candidate` as the date of `meeting` and `peer_value` as its peer's."""
        if meeting == self.left:
            return self.op.evaluate(candidate, peer_value)
        return self.op.evaluate(peer_value, candidate)

    def __str__(self):
        return f"m{self.left} {self.op.value} m{self.right}"

    def to_dict(self):
        return {"left": self.left, "op": self.op.value, "right": self.right}

    @staticmethod
    def from_dict(d):
        return BinaryConstraint(
            left=int(d["left"]),
            op=Operator.parse(d["op"]),
            right=int(d["right"]),
        )


DateConstraint = UnaryConstraint | BinaryConstraint


def constraint_from_dict(d) -> DateConstraint:
    """Build a unary or binary constraint from its JSON form."""
    match d:
        case {"meeting": _, "op": _, "date": _}:
            return UnaryConstraint.from_dict(d)

        case {"left": _, "op": _, "right": _}:
            return BinaryConstraint.from_dict(d)

        case _:
            raise InvalidConstraintError(f"Unrecognized constraint: {d!r}")


@dataclass
class MeetingVariable:
    index: int
    # Ascending candidate dates. Only the consistency preprocessor shrinks it.
    domain: list[date] = field(default_factory=list)
    unary_constraints: tuple[UnaryConstraint, ...] = ()
    binary_constraints: tuple[BinaryConstraint, ...] = ()

    @property
    def degree(self) -> int:
        return len(self.binary_constraints)


Schedule = list[Optional[date]]


class SolveStatus(str, Enum):
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"


@dataclass
class SearchStats:
    nodes_visited: int = 0
    backtracks: int = 0

    def to_dict(self):
        return {"nodes_visited": self.nodes_visited, "backtracks": self.backtracks}


@dataclass
class SolveResult:
    """Outcome of a solve call: a complete schedule, or a distinguished "no solution"."""

    status: SolveStatus
    schedule: list[date] | None = None
    # "preprocessing" or "search" when unsatisfiable
    stage: str | None = None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def is_solved(self) -> bool:
        return self.status == SolveStatus.SOLVED

    def __bool__(self):
        return self.is_solved

    @staticmethod
    def solved(schedule: list[date], stats: SearchStats | None = None) -> "SolveResult":
        return SolveResult(
            status=SolveStatus.SOLVED,
            schedule=list(schedule),
            stats=stats or SearchStats(),
        )

    @staticmethod
    def no_solution(stage: str, stats: SearchStats | None = None) -> "SolveResult":
        return SolveResult(
            status=SolveStatus.NO_SOLUTION, stage=stage, stats=stats or SearchStats()
        )

    def to_dict(self):
        return {
            "status": self.status.value,
            "schedule": [d.isoformat() for d in self.schedule]
            if self.schedule is not None
            else None,
            "stage": self.stage,
            "stats": self.stats.to_dict(),
        }


@dataclass
class MeetingProblem:
    meeting_count: int
    range_start: date
    range_end: date
    constraints: list[DateConstraint] = field(default_factory=list)
    meeting_names: list[str] = field(default_factory=list)

    def name_of(self, meeting: int) -> str:
        if meeting < len(self.meeting_names):
            return self.meeting_names[meeting]
        return f"Meeting {meeting}"

    def to_dict(self):
        return {
            "meeting_count": self.meeting_count,
            "range_start": self.range_start.isoformat(),
            "range_end": self.range_end.isoformat(),
            "constraints": [c.to_dict() for c in self.constraints],
            "meeting_names": list(self.meeting_names),
        }

    @staticmethod
    def from_dict(d):
        return MeetingProblem(
            meeting_count=d["meeting_count"],
            range_start=date.fromisoformat(d["range_start"]),
            range_end=date.fromisoformat(d["range_end"]),
            constraints=[constraint_from_dict(c) for c in d.get("constraints", [])],
            meeting_names=list(d.get("meeting_names", [])),
        )
