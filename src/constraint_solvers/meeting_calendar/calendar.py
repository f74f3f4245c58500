from datetime import date, datetime, timedelta

from .errors import InvalidRangeError

# =========================
#      DOMAIN CALENDAR
# =========================

ONE_DAY = timedelta(days=1)


def parse_date(value) -> date:
    """Convert an ISO date string (YYYY-MM-DD) or a date to a date.

    Args:
        value: A date, a datetime (its day is kept), or a string in ISO format.

    Returns:
        date: The parsed date.
    """
    match value:
        case datetime():
            return value.date()

        case date():
            return value

        case str():
            try:
                return date.fromisoformat(value.strip())
            except ValueError as e:
                raise InvalidRangeError(f"Not an ISO date: {value!r}") from e

        case _:
            raise InvalidRangeError(f"Unsupported date value: {value!r}")


def validate_range(range_start: date, range_end: date) -> None:
    """Raise InvalidRangeError if the range starts after it ends."""
    if range_start > range_end:
        raise InvalidRangeError(
            f"Range start {range_start.isoformat()} is after range end {range_end.isoformat()}"
        )


def date_range(range_start: date, range_end: date) -> list[date]:
    """Every date from range_start to range_end inclusive, in ascending order.

    Args:
        range_start (date): First date of the range.
        range_end (date): Last date of the range.

    Returns:
        list[date]: The dates of the range.
    """
    validate_range(range_start, range_end)

    dates: list[date] = []
    current = range_start
    while current <= range_end:
        dates.append(current)
        current += ONE_DAY

    return dates


def range_size(range_start: date, range_end: date) -> int:
    """Number of days in the inclusive range."""
    validate_range(range_start, range_end)
    return (range_end - range_start).days + 1
