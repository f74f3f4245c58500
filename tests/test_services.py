import pytest
from datetime import date, timedelta
from pathlib import Path

from tests.test_utils import get_test_logger

# Initialize standardized test logger
logger = get_test_logger(__name__)

from app import (
    main,
    EXIT_OK,
    EXIT_NO_SOLUTION,
    EXIT_INVALID_INPUT,
    EXIT_BUDGET_EXCEEDED,
)
from constraint_solvers.meeting_calendar.constraints import parse_constraint
from constraint_solvers.meeting_calendar.domain import MeetingProblem
from services import ScheduleService

DATA_DIR = Path(__file__).parent / "data"


def create_problem(meeting_count, days, *constraints) -> MeetingProblem:
    return MeetingProblem(
        meeting_count=meeting_count,
        range_start=date(2024, 3, 4),
        range_end=date(2024, 3, 4) + timedelta(days=days - 1),
        constraints=[parse_constraint(c) for c in constraints],
    )


class TestScheduleService:
    def test_solved_problem(self):
        logger.start_test("Solved problems produce a table and a success message")
        problem = create_problem(2, 2, "m0 < m1")

        schedule_df, status, result = ScheduleService.solve(problem)

        assert result.is_solved
        assert status == "Scheduled 2 meetings."
        assert list(schedule_df["Meeting"]) == [0, 1]
        logger.pass_test()

    def test_preprocessing_failure_names_empty_meeting(self):
        problem = create_problem(2, 7, "m0 == m1", "m0 == 2024-03-04", "m1 == 2024-03-05")

        schedule_df, status, result = ScheduleService.solve(problem)

        assert result.stage == "preprocessing"
        assert schedule_df.empty
        assert status.startswith("No solution")
        assert "No Candidates: meeting 0" in status
        assert "Review the fixed dates" in status

    def test_search_failure(self):
        problem = create_problem(3, 10, "m0 < m1", "m1 < m2", "m2 < m0")

        schedule_df, status, result = ScheduleService.solve(problem)

        assert result.stage == "search"
        assert "Every meeting kept at least one candidate date" in status
        assert "Review the fixed dates" not in status

    def test_invalid_problem(self):
        problem = create_problem(2, 3, "m0 < m5")

        schedule_df, status, result = ScheduleService.solve(problem)

        assert result is None
        assert status.startswith("Invalid problem")
        assert schedule_df.empty

    def test_budget_exceeded(self):
        problem = create_problem(3, 30, "m0 < m1", "m1 < m2", "m2 < m0")

        schedule_df, status, result = ScheduleService.solve(problem, max_nodes=1)

        assert result is None
        assert status.startswith(ScheduleService.BUDGET_EXCEEDED_STATUS)


class TestCommandLine:
    def test_inline_problem(self, capsys):
        logger.start_test("Inline problem is solved and printed")
        exit_code = main(
            ["--meetings", "2", "--start", "2024-03-04", "--end", "2024-03-05", "-c", "m0 < m1"]
        )

        output = capsys.readouterr().out
        assert exit_code == EXIT_OK
        assert "Scheduled 2 meetings." in output
        assert "2024-03-04" in output
        assert "2024-03-05" in output
        logger.pass_test()

    def test_no_solution(self):
        exit_code = main(
            [
                "--meetings", "2",
                "--start", "2024-03-04",
                "--end", "2024-03-10",
                "-c", "m0 == m1",
                "-c", "m0 == 2024-03-04",
                "-c", "m1 == 2024-03-05",
            ]
        )

        assert exit_code == EXIT_NO_SOLUTION

    @pytest.mark.parametrize(
        "argv",
        [
            ["--meetings", "2", "--start", "2024-03-05", "--end", "2024-03-04"],
            ["--meetings", "2", "--start", "2024-03-04", "--end", "someday"],
            ["--meetings", "2", "--start", "2024-03-04", "--end", "2024-03-05", "-c", "m0 < m2"],
            ["--meetings", "2", "--start", "2024-03-04", "--end", "2024-03-05", "-c", "m0 ~ m1"],
            ["--meetings", "2"],
            ["--problem", "does-not-exist.json"],
        ],
    )
    def test_invalid_input(self, argv):
        assert main(argv) == EXIT_INVALID_INPUT

    def test_budget_exceeded(self):
        exit_code = main(
            [
                "--meetings", "3",
                "--start", "2024-03-01",
                "--end", "2024-03-30",
                "-c", "m0 < m1",
                "-c", "m1 < m2",
                "-c", "m2 < m0",
                "--max-nodes", "1",
            ]
        )

        assert exit_code == EXIT_BUDGET_EXCEEDED

    def test_problem_file(self, capsys):
        exit_code = main(["--problem", str(DATA_DIR / "problem.json")])

        assert exit_code == EXIT_OK
        assert "Design Review" in capsys.readouterr().out

    def test_problem_file_with_busy_calendar(self):
        # Mar 5 and Mar 7 are busy, leaving no room for three ordered meetings
        exit_code = main(
            [
                "--problem", str(DATA_DIR / "problem.json"),
                "--busy-calendar", str(DATA_DIR / "busy.ics"),
            ]
        )

        assert exit_code == EXIT_NO_SOLUTION

    def test_extra_constraints_on_problem_file(self):
        exit_code = main(
            ["--problem", str(DATA_DIR / "problem.json"), "-c", "m2 < 2024-03-07"]
        )

        assert exit_code == EXIT_NO_SOLUTION

    @pytest.mark.parametrize("strategy", ["static", "most-constrained"])
    def test_demo_problem(self, strategy):
        assert main(["--demo", "--strategy", strategy]) in (EXIT_OK, EXIT_NO_SOLUTION)

    def test_problem_file_that_is_not_utf8(self, tmp_path):
        problem_file = tmp_path / "latin1.json"
        problem_file.write_bytes(b'{"meeting_count": 1, "meeting_names": ["R\xe9union \xff"]}')

        assert main(["--problem", str(problem_file)]) == EXIT_INVALID_INPUT
