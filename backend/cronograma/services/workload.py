from __future__ import annotations

from typing import Iterable

from cronograma.models.teacher import ContractType
from cronograma.schemas.conflict import OverloadWarning
from cronograma.services.snapshot import EventRecord, TeacherRecord
from cronograma.services.time_utils import duration_hours

CONTRACT_WEEKLY_HOURS = {
    ContractType.full_time: 40.0,
    ContractType.half_time: 20.0,
    ContractType.hourly: 12.0,
}


def default_max_weekly_hours(contract_type: ContractType | str | None) -> float:
    try:
        return CONTRACT_WEEKLY_HOURS[ContractType(contract_type)]
    except ValueError:
        return CONTRACT_WEEKLY_HOURS[ContractType.hourly]


def resolve_max_weekly_hours(contract_type: ContractType | str | None, requested: float | None) -> float:
    if requested is None:
        return default_max_weekly_hours(contract_type)
    return requested


def teacher_weekly_hours(
    events: Iterable[EventRecord],
    teacher_id: str,
    exclude_ids: frozenset[str] = frozenset(),
) -> float:
    # Every assigned class counts as concurrent weekly load, whatever its week window.
    return sum(
        duration_hours(event.start_time, event.end_time)
        for event in events
        if event.teacher_id == teacher_id and event.id not in exclude_ids
    )


def overload_warning(teacher: TeacherRecord, current_hours: float, added_hours: float) -> OverloadWarning | None:
    total = current_hours + added_hours
    if total <= teacher.max_weekly_hours:
        return None
    return OverloadWarning(
        teacher_id=teacher.id,
        teacher_name=teacher.name,
        total_hours=round(total, 2),
        max_weekly_hours=teacher.max_weekly_hours,
        message=(
            f"With this class {teacher.name} exceeds the weekly maximum "
            f"({total:.2f} / {teacher.max_weekly_hours:g} hours)."
        ),
    )
