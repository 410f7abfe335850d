from __future__ import annotations

from datetime import date
import logging

from cronograma.core.exceptions import MalformedInputError, SchedulingConflictError
from cronograma.schemas.conflict import ConflictDetail, ConflictKind
from cronograma.services.snapshot import ScheduleSnapshot
from cronograma.services.time_utils import date_ranges_overlap

logger = logging.getLogger(__name__)


def find_course_overlap(
    snapshot: ScheduleSnapshot,
    *,
    group_id: str,
    start_date: date,
    end_date: date,
    exclude_course_id: str | None = None,
) -> ConflictDetail | None:
    for other in snapshot.courses.values():
        if other.id == exclude_course_id or other.group_id != group_id:
            continue
        if not date_ranges_overlap(start_date, end_date, other.start_date, other.end_date):
            continue
        module_name = snapshot.module_name_for(other)
        return ConflictDetail(
            kind=ConflictKind.course_overlap,
            message=(
                f"The group is already enrolled in {module_name} from {other.start_date.isoformat()} "
                f"to {other.end_date.isoformat()}, which overlaps these dates."
            ),
            resource_id=other.module_id,
            resource_name=module_name,
            conflicting_course_id=other.id,
        )
    return None


def ensure_course_schedulable(
    snapshot: ScheduleSnapshot,
    *,
    group_id: str,
    start_date: date,
    end_date: date,
    exclude_course_id: str | None = None,
) -> None:
    """Reject a course whose dates are inverted or collide with another course of the same group."""
    if end_date <= start_date:
        raise MalformedInputError(
            "end_date must be after start_date",
            details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )
    conflict = find_course_overlap(
        snapshot,
        group_id=group_id,
        start_date=start_date,
        end_date=end_date,
        exclude_course_id=exclude_course_id,
    )
    if conflict is not None:
        logger.info("Course for group %s blocked by course %s", group_id, conflict.conflicting_course_id)
        raise SchedulingConflictError(conflict)
