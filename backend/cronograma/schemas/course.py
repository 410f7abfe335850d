from datetime import date

from pydantic import BaseModel, Field, model_validator


class CourseBase(BaseModel):
    module_id: str = Field(min_length=1, max_length=36)
    group_id: str = Field(min_length=1, max_length=36)
    start_date: date
    end_date: date
    total_hours: int = Field(ge=1, le=2000)

    @model_validator(mode="after")
    def validate_date_order(self) -> "CourseBase":
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class CourseCreate(CourseBase):
    pass


class CourseUpdate(BaseModel):
    module_id: str | None = Field(default=None, min_length=1, max_length=36)
    group_id: str | None = Field(default=None, min_length=1, max_length=36)
    start_date: date | None = None
    end_date: date | None = None
    total_hours: int | None = Field(default=None, ge=1, le=2000)


class CourseOut(CourseBase):
    id: str
    duration_weeks: int

    model_config = {"from_attributes": True}
