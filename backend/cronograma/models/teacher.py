import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, Float, JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from cronograma.db.base import Base


class ContractType(str, Enum):
    full_time = "full_time"
    half_time = "half_time"
    hourly = "hourly"


class TeacherStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class Teacher(Base):
    __tablename__ = "teachers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    contract_type: Mapped[ContractType] = mapped_column(SAEnum(ContractType, name="contract_type"), nullable=False)
    max_weekly_hours: Mapped[float] = mapped_column(Float, nullable=False, default=40)
    specialties: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[TeacherStatus] = mapped_column(
        SAEnum(TeacherStatus, name="teacher_status"), nullable=False, default=TeacherStatus.active
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
