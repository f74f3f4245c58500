from datetime import date, timedelta
from random import Random
from itertools import combinations

from factory.data_models import *
from constraint_solvers.meeting_calendar.domain import *
from constraint_solvers.meeting_calendar.errors import SchedulingInputError


### MEETINGS ###
MEETING_TOPICS = (
    "Kickoff",
    "Design Review",
    "Budget",
    "Retrospective",
    "Planning",
    "Demo",
    "Hiring Panel",
    "Offsite Prep",
    "Security Audit",
    "Roadmap",
)


def earliest_monday_on_or_after(target_date: date) -> date:
    """
    Returns the date of the next Monday on or after the given date.
    If the date is already Monday, returns the same date.
    """
    days = (7 - target_date.weekday()) % 7
    return target_date + timedelta(days=days)


def counts(distributions: tuple[CountDistribution, ...]) -> tuple[int, ...]:
    return tuple(distribution.count for distribution in distributions)


def weights(distributions: tuple[CountDistribution, ...]) -> tuple[float, ...]:
    return tuple(distribution.weight for distribution in distributions)


def generate_meeting_names(parameters: ProblemParameters, random: Random) -> list[str]:
    """Name each meeting after a topic, numbering repeats."""
    names = []
    topics = list(MEETING_TOPICS)
    random.shuffle(topics)

    for i in range(parameters.meeting_count):
        topic = topics[i % len(topics)]
        round_number = i // len(topics)
        names.append(topic if round_number == 0 else f"{topic} {round_number + 1}")

    return names


def generate_unary_constraints(
    parameters: ProblemParameters, random: Random, range_start: date
) -> list[UnaryConstraint]:
    """Random `meeting OP date` constraints with dates inside the range."""
    symbols, symbol_weights = zip(*parameters.operator_weights.unary)
    constraints = []

    for meeting in range(parameters.meeting_count):
        (count,) = random.choices(
            population=counts(parameters.unary_count_distribution),
            weights=weights(parameters.unary_count_distribution),
        )
        for _ in range(count):
            (symbol,) = random.choices(population=symbols, weights=symbol_weights)
            offset = random.randrange(parameters.days_in_range)
            constraints.append(
                UnaryConstraint(
                    meeting=meeting,
                    op=Operator.parse(symbol),
                    reference=range_start + timedelta(days=offset),
                )
            )

    return constraints


def generate_binary_constraints(
    parameters: ProblemParameters, random: Random
) -> list[BinaryConstraint]:
    """Random `meeting OP meeting` constraints between distinct meetings."""
    pairs = list(combinations(range(parameters.meeting_count), 2))
    if not pairs:
        return []

    symbols, symbol_weights = zip(*parameters.operator_weights.binary)
    (count,) = random.choices(
        population=counts(parameters.binary_count_distribution),
        weights=weights(parameters.binary_count_distribution),
    )

    constraints = []
    for left, right in random.sample(pairs, min(count, len(pairs))):
        if random.random() >= 0.5:
            left, right = right, left
        (symbol,) = random.choices(population=symbols, weights=symbol_weights)
        constraints.append(
            BinaryConstraint(left=left, op=Operator.parse(symbol), right=right)
        )

    return constraints


def generate_problem(
    parameters: ProblemParameters, random: Random, range_start: date
) -> MeetingProblem:
    """
    Generates a MeetingProblem with random constraints.
    The same parameters, seed and start date always give the same problem.
    """
    if parameters.days_in_range < 1:
        raise SchedulingInputError(
            f"A problem needs at least one day in range, got {parameters.days_in_range}"
        )
    if parameters.meeting_count < 0:
        raise SchedulingInputError(
            f"Meeting count must be >= 0, got {parameters.meeting_count}"
        )

    range_end = range_start + timedelta(days=parameters.days_in_range - 1)

    return MeetingProblem(
        meeting_count=parameters.meeting_count,
        range_start=range_start,
        range_end=range_end,
        constraints=generate_unary_constraints(parameters, random, range_start)
        + generate_binary_constraints(parameters, random),
        meeting_names=generate_meeting_names(parameters, random),
    )
