from pydantic import BaseModel, Field


class CareerBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)


class CareerCreate(CareerBase):
    pass


class CareerUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)


class CareerOut(CareerBase):
    id: str

    model_config = {"from_attributes": True}
