from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from cronograma.models.schedule_event import Weekday
from cronograma.schemas.common import ensure_time_order, validate_time_value
from cronograma.schemas.conflict import AssignmentCheck, OverloadWarning


class AssignmentRequest(BaseModel):
    """One form submission: a recurring class over one or more weekdays."""

    course_id: str = Field(min_length=1, max_length=36)
    teacher_id: str = Field(min_length=1, max_length=36)
    classroom_id: str = Field(min_length=1, max_length=36)
    days: list[Weekday] = Field(min_length=1, max_length=6)
    start_time: str
    end_time: str
    start_date: date
    end_date: date

    @field_validator("days")
    @classmethod
    def dedupe_days(cls, value: list[Weekday]) -> list[Weekday]:
        return list(dict.fromkeys(value))

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        return validate_time_value(value)

    @model_validator(mode="after")
    def validate_ranges(self) -> "AssignmentRequest":
        ensure_time_order(self.start_time, self.end_time)
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class ScheduleEventOut(BaseModel):
    id: str
    assignment_id: str | None
    course_id: str
    teacher_id: str
    classroom_id: str
    day: Weekday
    start_time: str
    end_time: str
    start_week: int
    end_week: int

    model_config = {"from_attributes": True}


class AssignmentOut(BaseModel):
    assignment_id: str | None
    course_id: str
    teacher_id: str
    classroom_id: str
    days: list[Weekday]
    start_time: str
    end_time: str
    start_week: int
    end_week: int
    start_date: date | None = None
    end_date: date | None = None
    event_ids: list[str]


class AssignmentWriteOut(BaseModel):
    assignment: AssignmentOut
    warning: OverloadWarning | None = None


class AssignmentCheckOut(AssignmentCheck):
    start_week: int | None = None
    end_week: int | None = None
