from pydantic import BaseModel, Field


class ModuleBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    total_hours: int = Field(ge=1, le=2000)
    description: str | None = Field(default=None, max_length=2000)


class ModuleCreate(ModuleBase):
    pass


class ModuleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    total_hours: int | None = Field(default=None, ge=1, le=2000)
    description: str | None = Field(default=None, max_length=2000)


class ModuleOut(ModuleBase):
    id: str

    model_config = {"from_attributes": True}
