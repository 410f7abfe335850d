from datetime import date

import pytest

from cronograma.services.time_utils import (
    date_ranges_overlap,
    duration_hours,
    intervals_overlap,
    is_valid_time,
    time_to_minutes,
)


@pytest.mark.parametrize("value", ["00:00", "8:05", "08:05", "19:59", "23:59"])
def test_valid_times(value):
    assert is_valid_time(value)


@pytest.mark.parametrize("value", ["", None, "24:00", "12:60", "7", "07:5", "ab:cd", " 08:00"])
def test_invalid_times(value):
    assert not is_valid_time(value)


def test_time_to_minutes():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("08:30") == 510
    assert time_to_minutes("8:30") == 510
    assert time_to_minutes("23:59") == 1439
    assert time_to_minutes("") == 0
    assert time_to_minutes(None) == 0


def test_back_to_back_classes_do_not_overlap():
    assert not intervals_overlap(time_to_minutes("08:00"), time_to_minutes("10:00"), time_to_minutes("10:00"), time_to_minutes("12:00"))


def test_overlap_is_symmetric():
    samples = [(480, 600), (540, 660), (600, 720), (0, 1439), (700, 701), (480, 481)]
    for a, b in samples:
        for c, d in samples:
            assert intervals_overlap(a, b, c, d) == intervals_overlap(c, d, a, b)


def test_contained_interval_overlaps():
    assert intervals_overlap(480, 720, 540, 600)
    assert intervals_overlap(540, 600, 480, 720)


def test_duration_hours():
    assert duration_hours("08:00", "11:00") == 3
    assert duration_hours("09:15", "10:45") == 1.5


def test_date_ranges_are_inclusive():
    assert date_ranges_overlap(date(2024, 1, 1), date(2024, 1, 7), date(2024, 1, 7), date(2024, 1, 14))
    assert not date_ranges_overlap(date(2024, 1, 1), date(2024, 1, 6), date(2024, 1, 7), date(2024, 1, 14))
