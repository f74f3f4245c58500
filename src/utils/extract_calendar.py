from icalendar import Calendar
from datetime import datetime, date, time, timedelta
from typing import Optional, Tuple, List, Dict, Any

from constraint_solvers.meeting_calendar.domain import Operator, UnaryConstraint


def extract_ical_entries(file_bytes) -> Tuple[Optional[List[Dict[str, Any]]], Optional[str]]:
    """
    Read the VEVENT entries of an iCalendar file.

    Args:
        file_bytes: Raw .ics content

    Returns:
        Tuple of (entries, error). On failure entries is None and error holds the message.
    """
    try:
        cal = Calendar.from_ical(file_bytes)
        entries = []

        for component in cal.walk():
            if component.name == "VEVENT":
                summary = str(component.get("summary", ""))
                dtstart = component.get("dtstart")
                dtend = component.get("dtend")

                def to_value(val):
                    """Unwrap an icalendar property into a date or datetime."""
                    if val is not None and hasattr(val, "dt"):
                        return val.dt
                    return None

                start_value = to_value(dtstart)
                end_value = to_value(dtend)

                entry = {
                    "summary": summary,
                    "dtstart": start_value.isoformat() if start_value else "",
                    "dtend": end_value.isoformat() if end_value else "",
                    "all_day": isinstance(start_value, date)
                    and not isinstance(start_value, datetime),
                }

                if start_value is not None:
                    entry["start"] = start_value
                if end_value is not None:
                    entry["end"] = end_value

                entries.append(entry)

        return entries, None

    except Exception as e:
        return None, str(e)


def entry_dates(entry: Dict[str, Any]) -> List[date]:
    """
    All calendar dates an entry occupies.

    All-day events use an exclusive DTEND; timed events occupy every date from
    their start to their end, except that an end at exactly midnight does not
    occupy the new day.
    """
    start = entry.get("start")
    if start is None:
        return []
    end = entry.get("end")

    if isinstance(start, datetime):
        if start.tzinfo is not None:
            start = start.astimezone().replace(tzinfo=None)
        first = start.date()

        if isinstance(end, datetime):
            if end.tzinfo is not None:
                end = end.astimezone().replace(tzinfo=None)
            last = end.date()
            if end.time() == time.min and end > start:
                last -= timedelta(days=1)
        else:
            last = first
    else:
        first = start
        if isinstance(end, date) and not isinstance(end, datetime) and end > start:
            last = end - timedelta(days=1)
        else:
            last = first

    days = []
    current = first
    while current <= last:
        days.append(current)
        current += timedelta(days=1)
    return days


def busy_dates(
    calendar_entries: List[Dict[str, Any]],
    range_start: Optional[date] = None,
    range_end: Optional[date] = None,
) -> List[date]:
    """
    Collect the dates covered by calendar entries, sorted and clipped to the range.

    Args:
        calendar_entries: Entries from extract_ical_entries
        range_start: Optional lower bound (inclusive)
        range_end: Optional upper bound (inclusive)

    Returns:
        Sorted list of distinct busy dates
    """
    found = set()

    for entry in calendar_entries:
        for day in entry_dates(entry):
            if range_start is not None and day < range_start:
                continue
            if range_end is not None and day > range_end:
                continue
            found.add(day)

    return sorted(found)


def busy_date_constraints(meeting_count: int, dates: List[date]) -> List[UnaryConstraint]:
    """
    Keep every meeting off every busy date.

    Args:
        meeting_count: Number of meetings in the problem
        dates: Busy dates

    Returns:
        One `meeting != date` constraint per meeting and date
    """
    return [
        UnaryConstraint(meeting=meeting, op=Operator.NOT_EQUAL, reference=day)
        for meeting in range(meeting_count)
        for day in dates
    ]
