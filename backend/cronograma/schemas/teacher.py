from pydantic import BaseModel, EmailStr, Field, field_validator

from cronograma.models.teacher import ContractType, TeacherStatus


def _normalize_specialties(value: list[str]) -> list[str]:
    return list(dict.fromkeys(item.strip() for item in value if item.strip()))


class TeacherBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    contract_type: ContractType
    max_weekly_hours: float | None = Field(default=None, gt=0, le=80)
    specialties: list[str] = Field(default_factory=list, max_length=200)
    status: TeacherStatus = TeacherStatus.active

    @field_validator("specialties")
    @classmethod
    def normalize_specialties(cls, value: list[str]) -> list[str]:
        return _normalize_specialties(value)


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    contract_type: ContractType | None = None
    max_weekly_hours: float | None = Field(default=None, gt=0, le=80)
    specialties: list[str] | None = Field(default=None, max_length=200)
    status: TeacherStatus | None = None

    @field_validator("specialties")
    @classmethod
    def normalize_specialties(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return _normalize_specialties(value)


class TeacherOut(TeacherBase):
    id: str
    max_weekly_hours: float

    model_config = {"from_attributes": True}


class TeacherWorkloadOut(BaseModel):
    teacher_id: str
    teacher_name: str
    assigned_hours: float
    max_weekly_hours: float
    remaining_hours: float
    overloaded: bool
