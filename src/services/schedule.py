import os, time
from dataclasses import replace
from typing import Tuple, Optional

import pandas as pd

from constraint_solvers.meeting_calendar.domain import MeetingProblem, SolveResult
from constraint_solvers.meeting_calendar.errors import (
    SchedulingInputError,
    SearchBudgetExceededError,
)
from constraint_solvers.meeting_calendar.calendar import date_range
from constraint_solvers.meeting_calendar.constraints import build_variables
from constraint_solvers.meeting_calendar.consistency import preprocess
from constraint_solvers.meeting_calendar.solver import solve_problem
from constraint_solvers.meeting_calendar.analysis import ConstraintViolationAnalyzer

from factory.data.formatters import schedule_to_dataframe

from utils.extract_calendar import (
    extract_ical_entries,
    busy_dates,
    busy_date_constraints,
)
from utils.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)


class ScheduleService:
    """Service for solving meeting problems and reporting the outcome"""

    BUDGET_EXCEEDED_STATUS = "Search stopped"

    @staticmethod
    def solve(
        problem: MeetingProblem,
        strategy: Optional[str] = None,
        max_nodes: Optional[int] = None,
        debug: bool = False,
    ) -> Tuple[pd.DataFrame, str, Optional[SolveResult]]:
        """
        Solve a problem and build a table and a status message for it.

        Args:
            problem: The meeting problem
            strategy: Search ordering name (see search.STRATEGIES)
            max_nodes: Optional bound on search nodes
            debug: Enable debug logging

        Returns:
            Tuple of (schedule_df, status_message, result). The result is None when
            the problem was rejected or the node budget ran out.
        """
        if debug:
            os.environ["CALENDAR_PLANNER_DEBUG"] = "true"
            # Reconfigure logging for debug mode
            setup_logging("DEBUG")

        logger.info(
            f"🚀 Starting solve process for {problem.meeting_count} meetings "
            f"and {len(problem.constraints)} constraints"
        )

        started = time.perf_counter()
        try:
            result = solve_problem(problem, strategy=strategy, max_nodes=max_nodes)

        except SchedulingInputError as e:
            logger.error(f"❌ Invalid problem: {e}")
            return ScheduleService._empty_schedule(problem), f"Invalid problem: {e}", None

        except SearchBudgetExceededError as e:
            logger.warning(f"⏱️ {e}")
            status = f"{ScheduleService.BUDGET_EXCEEDED_STATUS}: {e}"
            return ScheduleService._empty_schedule(problem), status, None

        elapsed = time.perf_counter() - started
        logger.info(
            f"📈 Solver finished in {elapsed:.3f}s: {result.status.value} "
            f"({result.stats.nodes_visited} nodes, {result.stats.backtracks} backtracks)"
        )

        return (
            schedule_to_dataframe(problem, result),
            ScheduleService.describe_result(problem, result),
            result,
        )

    @staticmethod
    def describe_result(problem: MeetingProblem, result: SolveResult) -> str:
        """Build a human-readable status message for a solver outcome"""
        if result.is_solved:
            violations = ConstraintViolationAnalyzer.find_violations(
                result.schedule, problem.range_start, problem.range_end, problem.constraints
            )
            if violations:
                # A solver bug, never an expected outcome
                logger.error("Solved schedule fails verification:\n" + "\n".join(violations))
                return "Schedule found but failed verification:\n" + "\n".join(violations)

            return f"Scheduled {problem.meeting_count} meetings."

        if result.stage == "preprocessing":
            variables = build_variables(
                problem.meeting_count,
                date_range(problem.range_start, problem.range_end),
                problem.constraints,
            )
            preprocess(variables)
            explanation = ConstraintViolationAnalyzer.explain_unsatisfiable(variables)
        else:
            explanation = ConstraintViolationAnalyzer.explain_unsatisfiable([])

        suggestions = ConstraintViolationAnalyzer.generate_suggestions(result)
        return (
            "No solution: the constraints cannot all be satisfied.\n"
            + explanation
            + "\nSuggestions:\n"
            + "\n".join(f"- {s}" for s in suggestions)
        )

    @staticmethod
    def with_busy_calendar(problem: MeetingProblem, file_bytes: bytes) -> MeetingProblem:
        """
        Return a copy of the problem in which no meeting may fall on a busy date.

        Args:
            problem: The meeting problem
            file_bytes: iCalendar content listing busy events

        Raises:
            SchedulingInputError: The calendar could not be read
        """
        entries, error = extract_ical_entries(file_bytes)
        if error is not None:
            raise SchedulingInputError(f"Could not read calendar: {error}")

        dates = busy_dates(entries, problem.range_start, problem.range_end)
        logger.info(f"📅 Calendar has {len(entries)} events covering {len(dates)} busy dates in range")

        return replace(
            problem,
            constraints=list(problem.constraints)
            + busy_date_constraints(problem.meeting_count, dates),
        )

    @staticmethod
    def _empty_schedule(problem: MeetingProblem) -> pd.DataFrame:
        return schedule_to_dataframe(problem, SolveResult.no_solution("search"))
