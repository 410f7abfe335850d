from __future__ import annotations

from cronograma.models.schedule_event import Weekday
from cronograma.services.time_utils import TIME_PATTERN, time_to_minutes

DAY_VALUES = tuple(day.value for day in Weekday)


def validate_time_value(value: str) -> str:
    value = value.strip()
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return f"{int(hours):02d}:{minutes}"


def ensure_time_order(start_time: str, end_time: str) -> None:
    if time_to_minutes(end_time) <= time_to_minutes(start_time):
        raise ValueError("end_time must be after start_time")
