"""
Recurrence expansion for shift patterns.

``expand_pattern`` is a pure function of the pattern, the generation window
and "today": it never touches storage and never mutates the pattern, so a
generation run can be interrupted and repeated safely.
"""

import calendar
from collections.abc import Iterator
from datetime import date, timedelta

from care_scheduling.models import RecurrenceType, ShiftPattern

ONE_DAY = timedelta(days=1)
ONE_WEEK = timedelta(weeks=1)
TWO_WEEKS = timedelta(weeks=2)


def horizon_end(today: date) -> date:
    """Generation never expands past December 31 of next year."""
    return date(today.year + 1, 12, 31)


def _months(start: date, end: date) -> Iterator[tuple[int, int]]:
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        year, month = (year + 1, 1) if month == 12 else (year, month + 1)


def first_weekday_of_month(year: int, month: int, weekday: int) -> date:
    first = date(year, month, 1)
    return first + timedelta(days=(weekday - first.weekday()) % 7)


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    last = date(year, month, calendar.monthrange(year, month)[1])
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def _daily(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += ONE_DAY


def _weekly(start: date, end: date, weekday: int) -> Iterator[date]:
    current = start + timedelta(days=(weekday - start.weekday()) % 7)
    while current <= end:
        yield current
        current += ONE_WEEK


def _biweekly(anchor: date, start: date, end: date) -> Iterator[date]:
    # skip whole fortnights up to the window so the phase stays on the anchor
    periods = max(0, -(-(start - anchor).days // 14))
    current = anchor + periods * TWO_WEEKS
    while current <= end:
        yield current
        current += TWO_WEEKS


def _monthly(start: date, end: date, weekday: int, *, last: bool) -> Iterator[date]:
    pick = last_weekday_of_month if last else first_weekday_of_month
    for year, month in _months(start, end):
        yield pick(year, month, weekday)


def expand_pattern(
    pattern: ShiftPattern, *, today: date, until: date | None = None
) -> Iterator[date]:
    """
    Yield, oldest first, the dates on which ``pattern`` fires.

    Dates are clipped to ``[max(start_date, today), min(end_date, until)]``
    where ``until`` defaults to the generation horizon.
    """
    window_end = until if until is not None else horizon_end(today)
    lower = max(pattern.start_date, today)
    upper = window_end if pattern.end_date is None else min(pattern.end_date, window_end)
    if lower > upper:
        return

    weekday = pattern.anchor_weekday
    match pattern.recurrence_type:
        case RecurrenceType.DAILY:
            candidates = _daily(lower, upper)
        case RecurrenceType.WEEKLY:
            candidates = _weekly(lower, upper, weekday)
        case RecurrenceType.BIWEEKLY:
            candidates = _biweekly(pattern.start_date, lower, upper)
        case RecurrenceType.FIRST_OF_MONTH:
            candidates = _monthly(lower, upper, weekday, last=False)
        case RecurrenceType.LAST_OF_MONTH:
            candidates = _monthly(lower, upper, weekday, last=True)
        case _:
            raise ValueError(f"Unsupported recurrence type: {pattern.recurrence_type}")

    for candidate in candidates:
        # monthly rules pick dates anywhere in the month, so clip again
        if lower <= candidate <= upper:
            yield candidate
