from pydantic import BaseModel, Field

from cronograma.models.classroom import ClassroomType


class ClassroomBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    capacity: int = Field(ge=1, le=1000)
    type: ClassroomType
    description: str | None = Field(default=None, max_length=2000)


class ClassroomCreate(ClassroomBase):
    pass


class ClassroomUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    capacity: int | None = Field(default=None, ge=1, le=1000)
    type: ClassroomType | None = None
    description: str | None = Field(default=None, max_length=2000)


class ClassroomOut(ClassroomBase):
    id: str

    model_config = {"from_attributes": True}
