"""Conversion between absolute calendar dates and course-relative week numbers.

Schedule events persist ``start_week``/``end_week`` relative to the Monday of
the week containing their course's start date, so a course can be moved as a
whole without rewriting its events. Editing and conflict detection need the
absolute dates, because two events can only be compared once both are
resolved against their own course.

All arithmetic uses Monday-start weeks.
"""
from __future__ import annotations

from datetime import date, timedelta

from cronograma.core.exceptions import MalformedInputError

ONE_WEEK = timedelta(weeks=1)


def week_anchor(day: date) -> date:
    """Monday of the calendar week containing ``day``."""
    return day - timedelta(days=day.weekday())


def weeks_between(earlier: date, later: date) -> int:
    """Calendar-week distance between the Monday weeks of two dates."""
    return (week_anchor(later) - week_anchor(earlier)).days // 7


def week_window_to_dates(course_start: date, start_week: int, end_week: int) -> tuple[date, date]:
    anchor = week_anchor(course_start)
    absolute_start = anchor + (start_week - 1) * ONE_WEEK
    absolute_end = anchor + (end_week - 1) * ONE_WEEK + timedelta(days=6)
    return absolute_start, absolute_end


def dates_to_week_window(course_start: date, absolute_start: date, absolute_end: date) -> tuple[int, int]:
    start_week = weeks_between(course_start, absolute_start) + 1
    end_week = weeks_between(course_start, absolute_end) + 1
    if start_week < 1 or end_week < 1:
        raise MalformedInputError(
            "Class dates must fall on or after the start of the course",
            details={
                "course_start": course_start.isoformat(),
                "start_week": start_week,
                "end_week": end_week,
            },
        )
    return start_week, end_week


def course_duration_weeks(start_date: date, end_date: date) -> int:
    """Number of Monday-start calendar weeks touched by ``[start_date, end_date]``."""
    return weeks_between(start_date, end_date) + 1
