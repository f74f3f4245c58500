import os
import json

from datetime import date
from random import Random

from factory.data.generators import earliest_monday_on_or_after, generate_problem
from factory.data_models import *

from constraint_solvers.meeting_calendar.domain import MeetingProblem
from constraint_solvers.meeting_calendar.errors import SchedulingInputError

from utils.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)


# =========================
#        DEMO PARAMS
# =========================
OPERATOR_WEIGHTS = OperatorWeights(
    unary=(("!=", 6), (">=", 2), ("<=", 2), ("==", 1)),
    binary=(("<", 4), ("!=", 3), ("<=", 2), ("==", 1)),
)

DATA_PARAMS = ProblemParameters(
    meeting_count=6,
    days_in_range=10,
    unary_count_distribution=(
        CountDistribution(count=0, weight=3),
        CountDistribution(count=1, weight=2),
        CountDistribution(count=2, weight=1),
    ),
    binary_count_distribution=(
        CountDistribution(count=3, weight=1),
        CountDistribution(count=5, weight=2),
        CountDistribution(count=7, weight=1),
    ),
    operator_weights=OPERATOR_WEIGHTS,
    random_seed=37,
)


# =========================
#        DEMO DATA
# =========================
def generate_demo_problem(
    meeting_count: int = None,
    days_in_range: int = None,
    start_date: date = None,
) -> MeetingProblem:
    """Generate a reproducible demo problem starting on the next Monday."""
    # Use DATA_PARAMS, but allow override
    parameters = DATA_PARAMS
    if meeting_count is not None or days_in_range is not None:
        parameters = ProblemParameters(
            meeting_count=meeting_count
            if meeting_count is not None
            else parameters.meeting_count,
            days_in_range=days_in_range
            if days_in_range is not None
            else parameters.days_in_range,
            unary_count_distribution=parameters.unary_count_distribution,
            binary_count_distribution=parameters.binary_count_distribution,
            operator_weights=parameters.operator_weights,
            random_seed=parameters.random_seed,
        )

    if start_date is None:
        start_date = earliest_monday_on_or_after(date.today())

    randomizer: Random = Random(parameters.random_seed)
    problem = generate_problem(parameters, randomizer, start_date)

    logger.debug(
        f"Generated demo problem: {problem.meeting_count} meetings, "
        f"{len(problem.constraints)} constraints, "
        f"{problem.range_start.isoformat()}..{problem.range_end.isoformat()}"
    )
    return problem


# =========================
#        FILE DATA
# =========================
def load_problem(file) -> MeetingProblem:
    """
    Load a MeetingProblem from JSON.

    Args:
        file: A path, a JSON string, bytes, a file-like object or an already parsed dict

    Returns:
        MeetingProblem

    Raises:
        SchedulingInputError: The content is not a valid problem document
    """
    logger.debug("Processing file object: %s (type: %s)", file, type(file))

    match file:
        case dict():
            data = file

        case file if hasattr(file, "read"):
            data = _parse_json(file.read())

        case bytes():
            data = _parse_json(file)

        case str() if os.path.exists(file):
            with open(file, "rb") as f:
                data = _parse_json(f.read())

        case str():
            data = _parse_json(file)

        case _:
            raise SchedulingInputError(f"Unsupported problem source: {type(file).__name__}")

    try:
        problem = MeetingProblem.from_dict(data)
    except SchedulingInputError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise SchedulingInputError(f"Invalid problem document: {e}") from e

    logger.info(
        f"Loaded problem with {problem.meeting_count} meetings and "
        f"{len(problem.constraints)} constraints"
    )
    return problem


def _parse_json(content) -> dict:
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SchedulingInputError(f"Problem is not UTF-8 text: {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise SchedulingInputError(f"Problem is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SchedulingInputError("Problem document must be a JSON object")

    return data


def save_problem(problem: MeetingProblem, path: str) -> None:
    """Write a problem as JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(problem.to_dict(), f, indent=2)
