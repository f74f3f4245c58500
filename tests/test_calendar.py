import pytest
from datetime import date, datetime

from tests.test_utils import get_test_logger, day

logger = get_test_logger(__name__)

from constraint_solvers.meeting_calendar.calendar import date_range, range_size, parse_date
from constraint_solvers.meeting_calendar.errors import InvalidRangeError, SchedulingInputError


class TestDateRange:
    def test_week_is_enumerated_in_ascending_order(self):
        logger.start_test("Enumerating a one-week range")

        dates = date_range(day(1), day(7))

        assert dates == [day(i) for i in range(1, 8)]
        assert dates == sorted(dates)
        logger.pass_test()

    def test_single_day_range(self):
        assert date_range(day(3), day(3)) == [day(3)]
        assert range_size(day(3), day(3)) == 1

    def test_range_crosses_month_and_leap_day(self):
        dates = date_range(date(2024, 2, 27), date(2024, 3, 2))

        assert dates == [
            date(2024, 2, 27),
            date(2024, 2, 28),
            date(2024, 2, 29),
            date(2024, 3, 1),
            date(2024, 3, 2),
        ]
        assert range_size(date(2024, 2, 27), date(2024, 3, 2)) == 5

    def test_reversed_range_is_rejected(self):
        with pytest.raises(InvalidRangeError):
            date_range(day(5), day(1))

        with pytest.raises(InvalidRangeError):
            range_size(day(5), day(1))

    def test_range_error_is_an_input_error(self):
        assert issubclass(InvalidRangeError, SchedulingInputError)
        assert issubclass(InvalidRangeError, ValueError)


class TestParseDate:
    def test_iso_string(self):
        assert parse_date(" 2024-03-04 ") == date(2024, 3, 4)

    def test_date_passes_through(self):
        assert parse_date(day(2)) == day(2)

    @pytest.mark.parametrize("value", ["04/03/2024", "2024-13-01", "", 20240304])
    def test_invalid_values(self, value):
        with pytest.raises(InvalidRangeError):
            parse_date(value)

    def test_datetime_keeps_its_day(self):
        assert parse_date(datetime(2024, 3, 5, 23, 30)) == date(2024, 3, 5)
        assert type(parse_date(datetime(2024, 3, 5, 23, 30))) is date
