import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from cronograma.api.deps import get_db
from cronograma.models.course import Course
from cronograma.models.group import StudentGroup
from cronograma.models.module import Module
from cronograma.models.schedule_event import RecurringAssignment, ScheduleEvent
from cronograma.models.teacher import Teacher
from cronograma.schemas.course import CourseCreate, CourseOut, CourseUpdate
from cronograma.schemas.teacher import TeacherOut
from cronograma.services.audit import log_activity
from cronograma.services.course_guard import ensure_course_schedulable
from cronograma.services.snapshot import load_snapshot
from cronograma.services.week_window import course_duration_weeks

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_references(db: Session, module_id: str, group_id: str) -> None:
    if db.get(Module, module_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Module not found")
    if db.get(StudentGroup, group_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Group not found")


@router.get("/", response_model=list[CourseOut])
def list_courses(
    group_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[CourseOut]:
    query = select(Course).order_by(Course.start_date)
    if group_id is not None:
        query = query.where(Course.group_id == group_id)
    return list(db.execute(query).scalars())


@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: str, db: Session = Depends(get_db)) -> CourseOut:
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


@router.get("/{course_id}/eligible-teachers", response_model=list[TeacherOut])
def list_eligible_teachers(course_id: str, db: Session = Depends(get_db)) -> list[TeacherOut]:
    """Teachers whose specialties include the module taught by this course."""
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    teachers = db.execute(select(Teacher).order_by(Teacher.name)).scalars()
    # specialties is a JSON list, so membership is checked here rather than in SQL.
    return [teacher for teacher in teachers if course.module_id in (teacher.specialties or [])]


@router.post("/", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, db: Session = Depends(get_db)) -> CourseOut:
    _require_references(db, payload.module_id, payload.group_id)
    ensure_course_schedulable(
        load_snapshot(db),
        group_id=payload.group_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )
    course = Course(
        **payload.model_dump(),
        duration_weeks=course_duration_weeks(payload.start_date, payload.end_date),
    )
    db.add(course)
    db.flush()
    log_activity(db, action="course.create", entity_type="course", entity_id=course.id)
    db.commit()
    db.refresh(course)
    return course


@router.put("/{course_id}", response_model=CourseOut)
def update_course(course_id: str, payload: CourseUpdate, db: Session = Depends(get_db)) -> CourseOut:
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    data = payload.model_dump(exclude_unset=True)
    if not data:
        return course
    merged = {
        "module_id": data.get("module_id") or course.module_id,
        "group_id": data.get("group_id") or course.group_id,
        "start_date": data.get("start_date") or course.start_date,
        "end_date": data.get("end_date") or course.end_date,
    }
    if "module_id" in data or "group_id" in data:
        _require_references(db, merged["module_id"], merged["group_id"])
    ensure_course_schedulable(
        load_snapshot(db),
        group_id=merged["group_id"],
        start_date=merged["start_date"],
        end_date=merged["end_date"],
        exclude_course_id=course_id,
    )

    for key, value in data.items():
        if value is not None:
            setattr(course, key, value)
    course.duration_weeks = course_duration_weeks(course.start_date, course.end_date)
    log_activity(
        db,
        action="course.update",
        entity_type="course",
        entity_id=course_id,
        details={"changed_fields": sorted(data.keys())},
    )
    db.commit()
    db.refresh(course)
    return course


@router.delete("/{course_id}")
def delete_course(course_id: str, db: Session = Depends(get_db)) -> dict:
    course = db.get(Course, course_id)
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    # Events are anchored to the course's start date and meaningless without it.
    removed = db.execute(delete(ScheduleEvent).where(ScheduleEvent.course_id == course_id)).rowcount
    db.execute(delete(RecurringAssignment).where(RecurringAssignment.course_id == course_id))
    db.delete(course)
    log_activity(
        db,
        action="course.delete",
        entity_type="course",
        entity_id=course_id,
        details={"removed_events": removed},
    )
    db.commit()
    logger.info("Deleted course %s and %d schedule event(s)", course_id, removed)
    return {"success": True, "removed_events": removed}
