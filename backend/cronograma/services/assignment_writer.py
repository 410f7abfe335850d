from __future__ import annotations

from collections import defaultdict
from datetime import date
import logging
from threading import Lock
from typing import Iterable

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cronograma.core.exceptions import PersistenceError, ResourceNotFoundError, SchedulingConflictError
from cronograma.models.schedule_event import RecurringAssignment, ScheduleEvent, Weekday
from cronograma.schemas.schedule import AssignmentCheckOut, AssignmentOut, AssignmentRequest, AssignmentWriteOut
from cronograma.services.audit import log_activity
from cronograma.services.conflict_detector import AssignmentCandidate, check_assignment
from cronograma.services.snapshot import EventRecord, ScheduleSnapshot, event_record, load_snapshot
from cronograma.services.week_window import dates_to_week_window, week_window_to_dates

logger = logging.getLogger(__name__)

# Serialises validate-then-write within this process. Writers in other
# processes are not covered; see DESIGN.md.
_write_lock = Lock()

DAY_ORDER = {day.value: index for index, day in enumerate(Weekday)}


def _shared_fields(event: EventRecord) -> tuple:
    return (
        event.course_id,
        event.teacher_id,
        event.classroom_id,
        event.start_time,
        event.end_time,
        event.start_week,
        event.end_week,
    )


def resolve_assignment_group(events: Iterable[EventRecord], anchor: EventRecord) -> list[EventRecord]:
    """All per-weekday rows belonging to the same recurring assignment as ``anchor``.

    Rows carrying an assignment id are grouped by it. Older rows without one
    fall back to matching every non-day field.
    """
    if anchor.assignment_id:
        return [event for event in events if event.assignment_id == anchor.assignment_id]
    key = _shared_fields(anchor)
    return [event for event in events if event.assignment_id is None and _shared_fields(event) == key]


def summarize_assignment(group: list[EventRecord], snapshot: ScheduleSnapshot) -> AssignmentOut:
    first = group[0]
    start_date: date | None = None
    end_date: date | None = None
    course = snapshot.courses.get(first.course_id)
    if course is not None:
        start_date, end_date = week_window_to_dates(course.start_date, first.start_week, first.end_week)
    days = sorted({event.day for event in group}, key=lambda day: DAY_ORDER.get(day, len(DAY_ORDER)))
    return AssignmentOut(
        assignment_id=first.assignment_id,
        course_id=first.course_id,
        teacher_id=first.teacher_id,
        classroom_id=first.classroom_id,
        days=days,
        start_time=first.start_time,
        end_time=first.end_time,
        start_week=first.start_week,
        end_week=first.end_week,
        start_date=start_date,
        end_date=end_date,
        event_ids=[event.id for event in group],
    )


def list_assignments(snapshot: ScheduleSnapshot) -> list[AssignmentOut]:
    groups: dict[tuple, list[EventRecord]] = defaultdict(list)
    for event in snapshot.events:
        key = ("id", event.assignment_id) if event.assignment_id else ("fields", *_shared_fields(event))
        groups[key].append(event)
    return [summarize_assignment(group, snapshot) for group in groups.values()]


def _find_event(snapshot: ScheduleSnapshot, event_id: str) -> EventRecord:
    for event in snapshot.events:
        if event.id == event_id:
            return event
    raise ResourceNotFoundError("Schedule event", event_id)


def get_assignment_for_event(snapshot: ScheduleSnapshot, event_id: str) -> AssignmentOut:
    anchor = _find_event(snapshot, event_id)
    return summarize_assignment(resolve_assignment_group(snapshot.events, anchor), snapshot)


def _build_candidate(
    request: AssignmentRequest,
    snapshot: ScheduleSnapshot,
    replaced: list[EventRecord],
) -> tuple[AssignmentCandidate, int, int]:
    course = snapshot.require_course(request.course_id)
    # Raises before any conflict scan when the window starts before the course does.
    start_week, end_week = dates_to_week_window(course.start_date, request.start_date, request.end_date)
    window_start, window_end = week_window_to_dates(course.start_date, start_week, end_week)
    candidate = AssignmentCandidate(
        course_id=request.course_id,
        teacher_id=request.teacher_id,
        classroom_id=request.classroom_id,
        days=tuple(day.value for day in request.days),
        start_time=request.start_time,
        end_time=request.end_time,
        window_start=window_start,
        window_end=window_end,
        replaced_ids=frozenset(event.id for event in replaced),
    )
    return candidate, start_week, end_week


def _replaced_group(snapshot: ScheduleSnapshot, replace_event_id: str | None) -> list[EventRecord]:
    if replace_event_id is None:
        return []
    return resolve_assignment_group(snapshot.events, _find_event(snapshot, replace_event_id))


def check_assignment_request(
    db: Session,
    request: AssignmentRequest,
    replace_event_id: str | None = None,
) -> AssignmentCheckOut:
    """Dry run of ``save_assignment``: same validation, nothing written."""
    snapshot = load_snapshot(db)
    replaced = _replaced_group(snapshot, replace_event_id)
    candidate, start_week, end_week = _build_candidate(request, snapshot, replaced)
    result = check_assignment(candidate, snapshot)
    return AssignmentCheckOut(**result.model_dump(), start_week=start_week, end_week=end_week)


def save_assignment(
    db: Session,
    request: AssignmentRequest,
    replace_event_id: str | None = None,
) -> AssignmentWriteOut:
    """Validate and persist one recurring assignment as a single transaction.

    When ``replace_event_id`` is given, every row of that event's assignment is
    deleted in the same transaction that creates the new rows, and is left out
    of the conflict scan. One row is created per requested weekday.
    """
    operation = "update" if replace_event_id else "create"
    with _write_lock:
        snapshot = load_snapshot(db)
        replaced = _replaced_group(snapshot, replace_event_id)
        candidate, start_week, end_week = _build_candidate(request, snapshot, replaced)

        result = check_assignment(candidate, snapshot)
        if not result.ok:
            db.rollback()
            raise SchedulingConflictError(result.conflict)

        assignment_id = next((event.assignment_id for event in replaced if event.assignment_id), None)
        try:
            if replaced:
                db.execute(delete(ScheduleEvent).where(ScheduleEvent.id.in_([event.id for event in replaced])))
            if assignment_id is None:
                assignment = RecurringAssignment(course_id=request.course_id)
                db.add(assignment)
                db.flush()
                assignment_id = assignment.id
            else:
                assignment = db.get(RecurringAssignment, assignment_id)
                if assignment is None:
                    db.add(RecurringAssignment(id=assignment_id, course_id=request.course_id))
                else:
                    assignment.course_id = request.course_id

            rows = [
                ScheduleEvent(
                    assignment_id=assignment_id,
                    course_id=request.course_id,
                    teacher_id=request.teacher_id,
                    classroom_id=request.classroom_id,
                    day=day,
                    start_time=request.start_time,
                    end_time=request.end_time,
                    start_week=start_week,
                    end_week=end_week,
                )
                for day in request.days
            ]
            db.add_all(rows)
            log_activity(
                db,
                action=f"schedule.assignment.{operation}",
                entity_type="recurring_assignment",
                entity_id=assignment_id,
                details={
                    "course_id": request.course_id,
                    "teacher_id": request.teacher_id,
                    "classroom_id": request.classroom_id,
                    "days": [day.value for day in request.days],
                    "replaced_event_ids": sorted(candidate.replaced_ids),
                    "warning": result.warning.message if result.warning else None,
                },
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Schedule store rejected %s of assignment for course %s", operation, request.course_id)
            raise PersistenceError(operation) from exc

    records = [event_record(row) for row in rows]
    logger.info("Saved assignment %s with %d weekday row(s)", assignment_id, len(records))
    return AssignmentWriteOut(assignment=summarize_assignment(records, snapshot), warning=result.warning)


def delete_assignment(db: Session, event_id: str) -> list[str]:
    """Delete every weekday row of the assignment ``event_id`` belongs to."""
    with _write_lock:
        snapshot = load_snapshot(db)
        group = resolve_assignment_group(snapshot.events, _find_event(snapshot, event_id))
        ids = [event.id for event in group]
        assignment_id = group[0].assignment_id
        try:
            db.execute(delete(ScheduleEvent).where(ScheduleEvent.id.in_(ids)))
            if assignment_id is not None:
                db.execute(delete(RecurringAssignment).where(RecurringAssignment.id == assignment_id))
            log_activity(
                db,
                action="schedule.assignment.delete",
                entity_type="recurring_assignment",
                entity_id=assignment_id,
                details={"event_ids": ids},
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Schedule store rejected delete of assignment containing event %s", event_id)
            raise PersistenceError("delete") from exc
    return ids


def delete_event(db: Session, event_id: str) -> None:
    """Remove a single weekday row, leaving the rest of its assignment in place."""
    event = db.get(ScheduleEvent, event_id)
    if event is None:
        raise ResourceNotFoundError("Schedule event", event_id)
    try:
        db.delete(event)
        log_activity(
            db,
            action="schedule.event.delete",
            entity_type="schedule_event",
            entity_id=event_id,
            details={"assignment_id": event.assignment_id, "day": event.day.value},
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Schedule store rejected delete of event %s", event_id)
        raise PersistenceError("delete") from exc
