from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
import logging
from typing import Iterable

from cronograma.schemas.conflict import AssignmentCheck, ConflictDetail, ConflictKind, ScheduleAuditReport
from cronograma.services.snapshot import ClassroomRecord, CourseRecord, EventRecord, ScheduleSnapshot, TeacherRecord
from cronograma.services.time_utils import date_ranges_overlap, duration_hours, intervals_overlap, time_to_minutes
from cronograma.services.week_window import week_window_to_dates
from cronograma.services.workload import overload_warning, teacher_weekly_hours

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentCandidate:
    course_id: str
    teacher_id: str
    classroom_id: str
    days: tuple[str, ...]
    start_time: str
    end_time: str
    window_start: date
    window_end: date
    # Rows being replaced by an edit; they never conflict with their replacement.
    replaced_ids: frozenset[str] = frozenset()


def event_window(event: EventRecord, course: CourseRecord) -> tuple[date, date]:
    return week_window_to_dates(course.start_date, event.start_week, event.end_week)


def _capacity_conflict(
    snapshot: ScheduleSnapshot,
    course: CourseRecord,
    classroom: ClassroomRecord,
) -> ConflictDetail | None:
    group = snapshot.groups.get(course.group_id)
    if group is None:
        logger.debug("Course %s references missing group %s; capacity not checked", course.id, course.group_id)
        return None
    if group.student_count <= classroom.capacity:
        return None
    return ConflictDetail(
        kind=ConflictKind.capacity,
        message=(
            f"Classroom {classroom.name} ({classroom.capacity}) cannot hold group "
            f"{group.name} ({group.student_count} students)."
        ),
        resource_id=classroom.id,
        resource_name=classroom.name,
    )


def _clash(
    kind: ConflictKind,
    *,
    day: str,
    resource_id: str,
    resource_name: str,
    subject: str,
    existing: EventRecord,
    existing_course: CourseRecord,
    module_name: str,
) -> ConflictDetail:
    return ConflictDetail(
        kind=kind,
        message=(
            f"{subject} already has a class on {day} at that time "
            f"({existing.start_time}-{existing.end_time}, {module_name}) during an overlapping period."
        ),
        day=day,
        resource_id=resource_id,
        resource_name=resource_name,
        conflicting_event_ids=[existing.id],
        conflicting_course_id=existing_course.id,
    )


def _first_clash(
    candidate: AssignmentCandidate,
    snapshot: ScheduleSnapshot,
    course: CourseRecord,
    teacher: TeacherRecord,
    classroom: ClassroomRecord,
) -> ConflictDetail | None:
    new_start = time_to_minutes(candidate.start_time)
    new_end = time_to_minutes(candidate.end_time)

    for day in candidate.days:
        for existing in snapshot.events:
            if existing.id in candidate.replaced_ids or existing.day != day:
                continue
            if not intervals_overlap(
                new_start, new_end, time_to_minutes(existing.start_time), time_to_minutes(existing.end_time)
            ):
                continue

            existing_course = snapshot.courses.get(existing.course_id)
            if existing_course is None:
                continue
            existing_start, existing_end = event_window(existing, existing_course)
            if not date_ranges_overlap(candidate.window_start, candidate.window_end, existing_start, existing_end):
                continue

            module_name = snapshot.module_name_for(existing_course)
            if existing.teacher_id == candidate.teacher_id:
                return _clash(
                    ConflictKind.teacher,
                    day=day,
                    resource_id=teacher.id,
                    resource_name=teacher.name,
                    subject=f"Teacher {teacher.name}",
                    existing=existing,
                    existing_course=existing_course,
                    module_name=module_name,
                )
            if existing.classroom_id == candidate.classroom_id:
                return _clash(
                    ConflictKind.room,
                    day=day,
                    resource_id=classroom.id,
                    resource_name=classroom.name,
                    subject=f"Classroom {classroom.name}",
                    existing=existing,
                    existing_course=existing_course,
                    module_name=module_name,
                )
            if existing_course.group_id == course.group_id:
                group = snapshot.groups.get(course.group_id)
                group_name = group.name if group is not None else course.group_id
                return _clash(
                    ConflictKind.group,
                    day=day,
                    resource_id=course.group_id,
                    resource_name=group_name,
                    subject=f"Group {group_name}",
                    existing=existing,
                    existing_course=existing_course,
                    module_name=module_name,
                )
    return None


def check_assignment(candidate: AssignmentCandidate, snapshot: ScheduleSnapshot) -> AssignmentCheck:
    """Validate a candidate recurring assignment against the snapshot.

    Checks run in a fixed order and the first hard failure wins: classroom
    capacity, then per-day teacher/room/group clashes. Only when both pass is
    the teacher's weekly load compared with their maximum, which yields an
    advisory warning rather than a failure.
    """
    course = snapshot.require_course(candidate.course_id)
    teacher = snapshot.require_teacher(candidate.teacher_id)
    classroom = snapshot.require_classroom(candidate.classroom_id)

    conflict = _capacity_conflict(snapshot, course, classroom)
    if conflict is None:
        conflict = _first_clash(candidate, snapshot, course, teacher, classroom)
    if conflict is not None:
        logger.info("Assignment for course %s blocked: %s conflict on %s", course.id, conflict.kind.value, conflict.resource_name)
        return AssignmentCheck.blocked(conflict)

    current = teacher_weekly_hours(snapshot.events, teacher.id, candidate.replaced_ids)
    added = duration_hours(candidate.start_time, candidate.end_time) * len(candidate.days)
    warning = overload_warning(teacher, current, added)
    if warning is not None:
        logger.warning("Teacher %s over weekly maximum: %.2f / %g", teacher.id, warning.total_hours, teacher.max_weekly_hours)
    return AssignmentCheck.passed(warning)


def _pair_conflicts(
    snapshot: ScheduleSnapshot,
    first: EventRecord,
    second: EventRecord,
) -> Iterable[ConflictDetail]:
    course_a = snapshot.courses.get(first.course_id)
    course_b = snapshot.courses.get(second.course_id)
    if course_a is None or course_b is None:
        return
    if not date_ranges_overlap(*event_window(first, course_a), *event_window(second, course_b)):
        return

    pair = [first.id, second.id]
    if first.teacher_id == second.teacher_id:
        teacher = snapshot.teachers.get(first.teacher_id)
        name = teacher.name if teacher is not None else first.teacher_id
        yield ConflictDetail(
            kind=ConflictKind.teacher,
            message=f"Teacher overlap for {name} on {first.day}",
            day=first.day,
            resource_id=first.teacher_id,
            resource_name=name,
            conflicting_event_ids=pair,
        )
    if first.classroom_id == second.classroom_id:
        classroom = snapshot.classrooms.get(first.classroom_id)
        name = classroom.name if classroom is not None else first.classroom_id
        yield ConflictDetail(
            kind=ConflictKind.room,
            message=f"Classroom overlap in {name} on {first.day}",
            day=first.day,
            resource_id=first.classroom_id,
            resource_name=name,
            conflicting_event_ids=pair,
        )
    if course_a.group_id == course_b.group_id:
        group = snapshot.groups.get(course_a.group_id)
        name = group.name if group is not None else course_a.group_id
        yield ConflictDetail(
            kind=ConflictKind.group,
            message=f"Group overlap for {name} on {first.day}",
            day=first.day,
            resource_id=course_a.group_id,
            resource_name=name,
            conflicting_event_ids=pair,
        )


def detect_schedule_conflicts(snapshot: ScheduleSnapshot) -> ScheduleAuditReport:
    """Report every capacity violation, clash and overload among stored events."""
    conflicts: list[ConflictDetail] = []

    events_by_day: dict[str, list[EventRecord]] = defaultdict(list)
    for event in snapshot.events:
        events_by_day[event.day].append(event)
        course = snapshot.courses.get(event.course_id)
        classroom = snapshot.classrooms.get(event.classroom_id)
        if course is None or classroom is None:
            continue
        capacity = _capacity_conflict(snapshot, course, classroom)
        if capacity is not None:
            capacity.day = event.day
            capacity.conflicting_event_ids = [event.id]
            conflicts.append(capacity)

    for day_events in events_by_day.values():
        for i, first in enumerate(day_events):
            start_a, end_a = time_to_minutes(first.start_time), time_to_minutes(first.end_time)
            for second in day_events[i + 1 :]:
                if not intervals_overlap(
                    start_a, end_a, time_to_minutes(second.start_time), time_to_minutes(second.end_time)
                ):
                    continue
                conflicts.extend(_pair_conflicts(snapshot, first, second))

    for teacher in snapshot.teachers.values():
        warning = overload_warning(teacher, teacher_weekly_hours(snapshot.events, teacher.id), 0)
        if warning is not None:
            conflicts.append(
                ConflictDetail(
                    kind=ConflictKind.workload,
                    message=warning.message,
                    severity="soft",
                    resource_id=teacher.id,
                    resource_name=teacher.name,
                )
            )

    return ScheduleAuditReport(conflicts=conflicts, checked_events=len(snapshot.events))
