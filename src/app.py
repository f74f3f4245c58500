import os, sys, argparse

import pandas as pd

from utils.logging_config import setup_logging, get_logger
from utils.version import __version__

# Initialize logging early - will be reconfigured based on debug mode
setup_logging()
logger = get_logger(__name__)

from constraint_solvers.meeting_calendar.calendar import parse_date
from constraint_solvers.meeting_calendar.constraints import parse_constraint
from constraint_solvers.meeting_calendar.domain import MeetingProblem
from constraint_solvers.meeting_calendar.errors import SchedulingInputError
from constraint_solvers.meeting_calendar.search import STRATEGIES
from factory.data.formatters import constraints_to_dataframe
from factory.data.provider import generate_demo_problem, load_problem
from services.schedule import ScheduleService

EXIT_OK = 0
EXIT_NO_SOLUTION = 1
EXIT_INVALID_INPUT = 2
EXIT_BUDGET_EXCEEDED = 3


# =========================
#           APP
# =========================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Calendar Planner - place meetings on dates satisfying date constraints"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--problem", help="Path to a JSON problem file")
    source.add_argument(
        "--demo", action="store_true", help="Solve a generated demo problem"
    )
    parser.add_argument("--meetings", type=int, help="Number of meetings (inline problem)")
    parser.add_argument("--start", help="First date of the range, YYYY-MM-DD (inline problem)")
    parser.add_argument("--end", help="Last date of the range, YYYY-MM-DD (inline problem)")
    parser.add_argument(
        "--constraint",
        "-c",
        action="append",
        default=[],
        help="Constraint such as 'm0 < m1' or 'm2 != 2024-03-05' (repeatable)",
    )
    parser.add_argument(
        "--busy-calendar",
        help="iCalendar file whose events mark dates no meeting may use",
    )
    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default="static",
        help="Search ordering (default: static)",
    )
    parser.add_argument(
        "--max-nodes", type=int, help="Stop the search after this many nodes"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version", action="version", version=f"Calendar Planner v{__version__}"
    )
    return parser


def build_problem(args: argparse.Namespace) -> MeetingProblem:
    """Create the problem described by the command line arguments."""
    if args.demo:
        return generate_demo_problem()

    if args.problem:
        problem = load_problem(args.problem)
        if args.constraint:
            problem.constraints.extend(parse_constraint(c) for c in args.constraint)
        return problem

    if args.meetings is None or args.start is None or args.end is None:
        raise SchedulingInputError(
            "Give --problem, --demo, or all of --meetings, --start and --end"
        )

    return MeetingProblem(
        meeting_count=args.meetings,
        range_start=parse_date(args.start),
        range_end=parse_date(args.end),
        constraints=[parse_constraint(c) for c in args.constraint],
    )


def main(argv=None) -> int:
    """Run the command line application and return the exit code"""
    args = build_parser().parse_args(argv)

    # Configure logging based on debug mode
    if args.debug:
        os.environ["CALENDAR_PLANNER_DEBUG"] = "true"
        setup_logging("DEBUG")
        logger.info("Application started in DEBUG mode")

    try:
        problem = build_problem(args)

        if args.busy_calendar:
            with open(args.busy_calendar, "rb") as f:
                problem = ScheduleService.with_busy_calendar(problem, f.read())

    except (SchedulingInputError, OSError) as e:
        logger.error(f"Could not build problem: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if args.debug:
        logger.debug("Constraints:\n" + constraints_to_dataframe(problem).to_string())

    schedule_df, status, result = ScheduleService.solve(
        problem, strategy=args.strategy, max_nodes=args.max_nodes
    )

    print(status)
    if result is None:
        if status.startswith(ScheduleService.BUDGET_EXCEEDED_STATUS):
            return EXIT_BUDGET_EXCEEDED
        return EXIT_INVALID_INPUT

    if not result.is_solved:
        return EXIT_NO_SOLUTION

    with pd.option_context("display.max_rows", None, "display.width", 120):
        print(schedule_df.to_string(index=False))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
