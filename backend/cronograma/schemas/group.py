from pydantic import BaseModel, Field


class GroupBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    semester: int = Field(ge=1, le=20)
    career_id: str = Field(min_length=1, max_length=36)
    student_count: int = Field(ge=0, le=1000)


class GroupCreate(GroupBase):
    pass


class GroupUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    semester: int | None = Field(default=None, ge=1, le=20)
    career_id: str | None = Field(default=None, min_length=1, max_length=36)
    student_count: int | None = Field(default=None, ge=0, le=1000)


class GroupOut(GroupBase):
    id: str

    model_config = {"from_attributes": True}
