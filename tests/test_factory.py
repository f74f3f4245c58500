import json
import pytest
from io import StringIO
from datetime import date
from pathlib import Path
from random import Random

from tests.test_utils import get_test_logger, brute_force_solutions

# Initialize standardized test logger
logger = get_test_logger(__name__)

import factory.data.provider as data_provider
from factory.data.generators import (
    earliest_monday_on_or_after,
    generate_meeting_names,
    generate_problem,
)
from factory.data.formatters import schedule_to_dataframe, constraints_to_dataframe
from factory.data_models import ProblemParameters
from constraint_solvers.meeting_calendar.domain import (
    BinaryConstraint,
    MeetingProblem,
    SolveResult,
    UnaryConstraint,
)
from constraint_solvers.meeting_calendar.errors import SchedulingInputError
from constraint_solvers.meeting_calendar.solver import solve_problem

PROBLEM_PATH = Path(__file__).parent / "data" / "problem.json"


class TestDemoData:
    def test_demo_problem_is_reproducible(self):
        logger.start_test("Demo problems depend only on parameters, seed and start date")
        first = data_provider.generate_demo_problem(start_date=date(2024, 3, 4))
        second = data_provider.generate_demo_problem(start_date=date(2024, 3, 4))

        assert first.to_dict() == second.to_dict()
        logger.pass_test()

    def test_demo_problem_shape(self):
        problem = data_provider.generate_demo_problem(start_date=date(2024, 3, 4))

        assert problem.meeting_count == data_provider.DATA_PARAMS.meeting_count
        assert problem.range_start == date(2024, 3, 4)
        assert problem.range_end == date(2024, 3, 13)
        assert len(problem.meeting_names) == problem.meeting_count

        for constraint in problem.constraints:
            match constraint:
                case UnaryConstraint():
                    assert problem.range_start <= constraint.reference <= problem.range_end
                case BinaryConstraint():
                    assert constraint.left != constraint.right
                    assert 0 <= constraint.left < problem.meeting_count
                    assert 0 <= constraint.right < problem.meeting_count

    @pytest.mark.parametrize("days", [0, -3])
    def test_demo_problem_needs_days_in_range(self, days):
        with pytest.raises(SchedulingInputError):
            data_provider.generate_demo_problem(days_in_range=days, start_date=date(2024, 3, 4))

    def test_demo_problem_overrides(self):
        problem = data_provider.generate_demo_problem(
            meeting_count=3, days_in_range=4, start_date=date(2024, 3, 4)
        )

        assert problem.meeting_count == 3
        assert problem.range_end == date(2024, 3, 7)

    def test_demo_problem_starts_on_a_monday_by_default(self):
        problem = data_provider.generate_demo_problem()

        assert problem.range_start.weekday() == 0
        assert problem.range_start >= date.today()

    def test_generated_problem_solves_like_brute_force(self):
        problem = data_provider.generate_demo_problem(
            meeting_count=4, days_in_range=4, start_date=date(2024, 3, 4)
        )
        expected = brute_force_solutions(
            problem.meeting_count, problem.range_start, problem.range_end, problem.constraints
        )

        result = solve_problem(problem)

        assert result.is_solved == bool(expected)
        if expected:
            assert result.schedule == expected[0]


class TestGenerators:
    def test_earliest_monday(self):
        assert earliest_monday_on_or_after(date(2024, 3, 4)) == date(2024, 3, 4)
        assert earliest_monday_on_or_after(date(2024, 3, 5)) == date(2024, 3, 11)
        assert earliest_monday_on_or_after(date(2024, 3, 10)) == date(2024, 3, 11)

    def test_meeting_names_are_unique(self):
        parameters = data_provider.DATA_PARAMS
        names = generate_meeting_names(
            ProblemParameters(
                meeting_count=25,
                days_in_range=parameters.days_in_range,
                unary_count_distribution=parameters.unary_count_distribution,
                binary_count_distribution=parameters.binary_count_distribution,
                operator_weights=parameters.operator_weights,
            ),
            Random(1),
        )

        assert len(names) == 25
        assert len(set(names)) == 25

    def test_single_meeting_has_no_binary_constraints(self):
        parameters = data_provider.DATA_PARAMS
        problem = generate_problem(
            ProblemParameters(
                meeting_count=1,
                days_in_range=3,
                unary_count_distribution=parameters.unary_count_distribution,
                binary_count_distribution=parameters.binary_count_distribution,
                operator_weights=parameters.operator_weights,
            ),
            Random(5),
            date(2024, 3, 4),
        )

        assert all(isinstance(c, UnaryConstraint) for c in problem.constraints)


class TestLoadProblem:
    def test_load_from_path(self):
        logger.start_test("Problems load from a JSON file")
        problem = data_provider.load_problem(str(PROBLEM_PATH))

        assert problem.meeting_count == 3
        assert problem.range_start == date(2024, 3, 4)
        assert problem.range_end == date(2024, 3, 8)
        assert len(problem.constraints) == 3
        assert problem.name_of(2) == "Demo"
        logger.pass_test()

    def test_load_from_other_sources(self):
        text = PROBLEM_PATH.read_text(encoding="utf-8")
        expected = data_provider.load_problem(str(PROBLEM_PATH))

        assert data_provider.load_problem(text) == expected
        assert data_provider.load_problem(text.encode("utf-8")) == expected
        assert data_provider.load_problem(StringIO(text)) == expected
        assert data_provider.load_problem(json.loads(text)) == expected

    def test_save_and_load(self, tmp_path):
        problem = data_provider.load_problem(str(PROBLEM_PATH))
        target = tmp_path / "saved.json"

        data_provider.save_problem(problem, str(target))

        assert data_provider.load_problem(str(target)) == problem

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[1, 2, 3]",
            '{"meeting_count": 2}',
            '{"meeting_count": 2, "range_start": "2024-03-04", "range_end": "soon"}',
            '{"meeting_count": 2, "range_start": "2024-03-04", "range_end": "2024-03-05",'
            ' "constraints": [{"meeting": 0, "op": "?", "date": "2024-03-04"}]}',
        ],
    )
    def test_invalid_documents(self, content):
        with pytest.raises(SchedulingInputError):
            data_provider.load_problem(content)

    def test_unsupported_source(self):
        with pytest.raises(SchedulingInputError):
            data_provider.load_problem(42)

    def test_bytes_that_are_not_utf8(self, tmp_path):
        content = b'{"meeting_count": 1, "meeting_names": ["R\xe9union"]}'
        target = tmp_path / "latin1.json"
        target.write_bytes(content)

        with pytest.raises(SchedulingInputError):
            data_provider.load_problem(content)

        with pytest.raises(SchedulingInputError):
            data_provider.load_problem(str(target))


class TestFormatters:
    def setup_method(self):
        self.problem = data_provider.load_problem(str(PROBLEM_PATH))

    def test_schedule_dataframe(self):
        result = solve_problem(self.problem)
        df = schedule_to_dataframe(self.problem, result)

        assert list(df.columns) == ["Meeting", "Name", "Date", "Weekday"]
        assert list(df["Name"]) == ["Kickoff", "Design Review", "Demo"]
        assert list(df["Date"]) == [date(2024, 3, 5), date(2024, 3, 6), date(2024, 3, 7)]
        assert list(df["Weekday"]) == ["Tuesday", "Wednesday", "Thursday"]

    def test_unsolved_schedule_dataframe_is_empty(self):
        df = schedule_to_dataframe(self.problem, SolveResult.no_solution("search"))

        assert df.empty
        assert list(df.columns) == ["Meeting", "Name", "Date", "Weekday"]

    def test_constraints_dataframe(self):
        df = constraints_to_dataframe(self.problem)

        assert list(df.columns) == ["Kind", "Left", "Operator", "Right"]
        assert list(df["Kind"]) == ["binary", "binary", "unary"]
        assert df.iloc[0].to_dict() == {
            "Kind": "binary",
            "Left": "Kickoff",
            "Operator": "<",
            "Right": "Design Review",
        }
        assert df.iloc[2]["Right"] == "2024-03-04"

    def test_default_meeting_names(self):
        problem = MeetingProblem(
            meeting_count=2, range_start=date(2024, 3, 4), range_end=date(2024, 3, 4)
        )

        assert problem.name_of(1) == "Meeting 1"
