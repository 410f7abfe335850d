from __future__ import annotations

from datetime import date
import re

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


def is_valid_time(value: str | None) -> bool:
    return bool(value) and TIME_PATTERN.match(value) is not None


def time_to_minutes(value: str | None) -> int:
    """Minutes since midnight for an ``HH:MM`` wall-clock time.

    Empty input yields 0; callers validate the format before relying on it.
    """
    if not value:
        return 0
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    # Half-open: a class ending at 10:00 does not collide with one starting at 10:00.
    return start_a < end_b and start_b < end_a


def duration_hours(start_time: str, end_time: str) -> float:
    return (time_to_minutes(end_time) - time_to_minutes(start_time)) / 60


def date_ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    # Inclusive on both ends.
    return start_a <= end_b and start_b <= end_a
