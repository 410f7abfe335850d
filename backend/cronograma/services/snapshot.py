"""Immutable read snapshots of the scheduling collections.

The conflict detector only ever sees these records, never ORM objects, so
validation is a pure function of the data read at the start of a request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from cronograma.core.exceptions import ResourceNotFoundError
from cronograma.models.classroom import Classroom
from cronograma.models.course import Course
from cronograma.models.group import StudentGroup
from cronograma.models.module import Module
from cronograma.models.schedule_event import ScheduleEvent
from cronograma.models.teacher import Teacher


@dataclass(frozen=True)
class TeacherRecord:
    id: str
    name: str
    max_weekly_hours: float


@dataclass(frozen=True)
class ClassroomRecord:
    id: str
    name: str
    capacity: int


@dataclass(frozen=True)
class ModuleRecord:
    id: str
    name: str


@dataclass(frozen=True)
class GroupRecord:
    id: str
    name: str
    student_count: int


@dataclass(frozen=True)
class CourseRecord:
    id: str
    module_id: str
    group_id: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class EventRecord:
    id: str
    course_id: str
    teacher_id: str
    classroom_id: str
    day: str
    start_time: str
    end_time: str
    start_week: int
    end_week: int
    assignment_id: str | None = None


def _index(records: Iterable) -> Mapping[str, object]:
    return MappingProxyType({record.id: record for record in records})


@dataclass(frozen=True)
class ScheduleSnapshot:
    teachers: Mapping[str, TeacherRecord] = field(default_factory=lambda: MappingProxyType({}))
    classrooms: Mapping[str, ClassroomRecord] = field(default_factory=lambda: MappingProxyType({}))
    modules: Mapping[str, ModuleRecord] = field(default_factory=lambda: MappingProxyType({}))
    groups: Mapping[str, GroupRecord] = field(default_factory=lambda: MappingProxyType({}))
    courses: Mapping[str, CourseRecord] = field(default_factory=lambda: MappingProxyType({}))
    events: tuple[EventRecord, ...] = ()

    @classmethod
    def build(
        cls,
        *,
        teachers: Iterable[TeacherRecord] = (),
        classrooms: Iterable[ClassroomRecord] = (),
        modules: Iterable[ModuleRecord] = (),
        groups: Iterable[GroupRecord] = (),
        courses: Iterable[CourseRecord] = (),
        events: Iterable[EventRecord] = (),
    ) -> "ScheduleSnapshot":
        return cls(
            teachers=_index(teachers),
            classrooms=_index(classrooms),
            modules=_index(modules),
            groups=_index(groups),
            courses=_index(courses),
            events=tuple(events),
        )

    def require_course(self, course_id: str) -> CourseRecord:
        course = self.courses.get(course_id)
        if course is None:
            raise ResourceNotFoundError("Course", course_id)
        return course

    def require_teacher(self, teacher_id: str) -> TeacherRecord:
        teacher = self.teachers.get(teacher_id)
        if teacher is None:
            raise ResourceNotFoundError("Teacher", teacher_id)
        return teacher

    def require_classroom(self, classroom_id: str) -> ClassroomRecord:
        classroom = self.classrooms.get(classroom_id)
        if classroom is None:
            raise ResourceNotFoundError("Classroom", classroom_id)
        return classroom

    def module_name_for(self, course: CourseRecord) -> str:
        module = self.modules.get(course.module_id)
        return module.name if module is not None else course.module_id


def load_snapshot(db: Session) -> ScheduleSnapshot:
    """Fetch every collection the core needs in one pass."""
    return ScheduleSnapshot.build(
        teachers=(
            TeacherRecord(id=item.id, name=item.name, max_weekly_hours=item.max_weekly_hours)
            for item in db.execute(select(Teacher)).scalars()
        ),
        classrooms=(
            ClassroomRecord(id=item.id, name=item.name, capacity=item.capacity)
            for item in db.execute(select(Classroom)).scalars()
        ),
        modules=(ModuleRecord(id=item.id, name=item.name) for item in db.execute(select(Module)).scalars()),
        groups=(
            GroupRecord(id=item.id, name=item.name, student_count=item.student_count)
            for item in db.execute(select(StudentGroup)).scalars()
        ),
        courses=(
            CourseRecord(
                id=item.id,
                module_id=item.module_id,
                group_id=item.group_id,
                start_date=item.start_date,
                end_date=item.end_date,
            )
            for item in db.execute(select(Course)).scalars()
        ),
        events=(event_record(item) for item in db.execute(select(ScheduleEvent)).scalars()),
    )


def event_record(event: ScheduleEvent) -> EventRecord:
    day = event.day.value if hasattr(event.day, "value") else event.day
    return EventRecord(
        id=event.id,
        course_id=event.course_id,
        teacher_id=event.teacher_id,
        classroom_id=event.classroom_id,
        day=day,
        start_time=event.start_time,
        end_time=event.end_time,
        start_week=event.start_week,
        end_week=event.end_week,
        assignment_id=event.assignment_id,
    )
