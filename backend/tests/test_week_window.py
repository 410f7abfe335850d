from datetime import date, timedelta

import pytest

from cronograma.core.exceptions import MalformedInputError
from cronograma.services.week_window import (
    course_duration_weeks,
    dates_to_week_window,
    week_anchor,
    week_window_to_dates,
    weeks_between,
)


def test_week_anchor_is_monday():
    assert week_anchor(date(2024, 1, 3)) == date(2024, 1, 1)
    assert week_anchor(date(2024, 1, 7)) == date(2024, 1, 1)
    assert week_anchor(date(2024, 1, 8)) == date(2024, 1, 8)


def test_weeks_between_counts_calendar_weeks():
    # Sunday to the following Monday is one calendar week apart.
    assert weeks_between(date(2024, 1, 7), date(2024, 1, 8)) == 1
    assert weeks_between(date(2024, 1, 1), date(2024, 1, 7)) == 0


def test_window_to_dates_spans_full_weeks():
    start, end = week_window_to_dates(date(2024, 1, 3), 1, 2)
    assert start == date(2024, 1, 1)
    assert end == date(2024, 1, 14)


def test_dates_to_window_for_mid_week_dates():
    assert dates_to_week_window(date(2024, 1, 3), date(2024, 1, 10), date(2024, 2, 2)) == (2, 5)


@pytest.mark.parametrize("course_start", [date(2024, 1, 1), date(2024, 2, 29), date(2023, 12, 31), date(2025, 6, 14)])
def test_round_trip_preserves_week_numbers(course_start):
    for start_week in range(1, 20, 3):
        for end_week in range(start_week, start_week + 12, 4):
            dates = week_window_to_dates(course_start, start_week, end_week)
            assert dates_to_week_window(course_start, *dates) == (start_week, end_week)


def test_dates_before_course_start_are_rejected():
    with pytest.raises(MalformedInputError) as excinfo:
        dates_to_week_window(date(2024, 3, 4), date(2024, 2, 26), date(2024, 3, 10))
    assert excinfo.value.status_code == 422
    assert excinfo.value.details["start_week"] == 0


def test_same_week_before_start_date_is_week_one():
    # Earlier days of the course's first week still belong to week 1.
    course_start = date(2024, 3, 6)
    assert dates_to_week_window(course_start, course_start - timedelta(days=2), course_start) == (1, 1)


def test_course_duration_weeks():
    assert course_duration_weeks(date(2024, 1, 1), date(2024, 4, 21)) == 16
    assert course_duration_weeks(date(2024, 1, 5), date(2024, 1, 8)) == 2
