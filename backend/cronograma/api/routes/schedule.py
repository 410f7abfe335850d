from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from cronograma.api.deps import get_db
from cronograma.models.course import Course
from cronograma.models.schedule_event import ScheduleEvent
from cronograma.models.teacher import Teacher
from cronograma.schemas.schedule import (
    AssignmentCheckOut,
    AssignmentOut,
    AssignmentRequest,
    AssignmentWriteOut,
    ScheduleEventOut,
)
from cronograma.schemas.teacher import TeacherWorkloadOut
from cronograma.services import assignment_writer
from cronograma.services.assignment_writer import DAY_ORDER
from cronograma.services.snapshot import load_snapshot
from cronograma.services.workload import teacher_weekly_hours

router = APIRouter()


@router.get("/events", response_model=list[ScheduleEventOut])
def list_events(
    teacher_id: str | None = Query(default=None),
    classroom_id: str | None = Query(default=None),
    group_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[ScheduleEventOut]:
    query = select(ScheduleEvent)
    if teacher_id is not None:
        query = query.where(ScheduleEvent.teacher_id == teacher_id)
    if classroom_id is not None:
        query = query.where(ScheduleEvent.classroom_id == classroom_id)
    if group_id is not None:
        course_ids = select(Course.id).where(Course.group_id == group_id)
        query = query.where(ScheduleEvent.course_id.in_(course_ids))
    events = db.execute(query).scalars()
    return sorted(events, key=lambda event: (DAY_ORDER[event.day.value], event.start_time))


@router.get("/assignments", response_model=list[AssignmentOut])
def list_assignments(db: Session = Depends(get_db)) -> list[AssignmentOut]:
    return assignment_writer.list_assignments(load_snapshot(db))


@router.post("/assignments/check", response_model=AssignmentCheckOut)
def check_assignment(
    payload: AssignmentRequest,
    replace_event_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> AssignmentCheckOut:
    return assignment_writer.check_assignment_request(db, payload, replace_event_id)


@router.post("/assignments", response_model=AssignmentWriteOut, status_code=status.HTTP_201_CREATED)
def create_assignment(payload: AssignmentRequest, db: Session = Depends(get_db)) -> AssignmentWriteOut:
    return assignment_writer.save_assignment(db, payload)


@router.get("/events/{event_id}/assignment", response_model=AssignmentOut)
def get_event_assignment(event_id: str, db: Session = Depends(get_db)) -> AssignmentOut:
    return assignment_writer.get_assignment_for_event(load_snapshot(db), event_id)


@router.put("/events/{event_id}/assignment", response_model=AssignmentWriteOut)
def replace_event_assignment(
    event_id: str,
    payload: AssignmentRequest,
    db: Session = Depends(get_db),
) -> AssignmentWriteOut:
    return assignment_writer.save_assignment(db, payload, replace_event_id=event_id)


@router.delete("/events/{event_id}/assignment")
def delete_event_assignment(event_id: str, db: Session = Depends(get_db)) -> dict:
    deleted = assignment_writer.delete_assignment(db, event_id)
    return {"success": True, "deleted_event_ids": deleted}


@router.delete("/events/{event_id}")
def delete_event(event_id: str, db: Session = Depends(get_db)) -> dict:
    assignment_writer.delete_event(db, event_id)
    return {"success": True}


@router.get("/teachers/{teacher_id}/workload", response_model=TeacherWorkloadOut)
def teacher_workload(teacher_id: str, db: Session = Depends(get_db)) -> TeacherWorkloadOut:
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    assigned = teacher_weekly_hours(load_snapshot(db).events, teacher_id)
    return TeacherWorkloadOut(
        teacher_id=teacher.id,
        teacher_name=teacher.name,
        assigned_hours=round(assigned, 2),
        max_weekly_hours=teacher.max_weekly_hours,
        remaining_hours=round(teacher.max_weekly_hours - assigned, 2),
        overloaded=assigned > teacher.max_weekly_hours,
    )
