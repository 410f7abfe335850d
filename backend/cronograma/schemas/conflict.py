from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class ConflictKind(str, Enum):
    capacity = "capacity"
    teacher = "teacher"
    room = "room"
    group = "group"
    course_overlap = "course_overlap"
    workload = "workload"


class ConflictDetail(BaseModel):
    kind: ConflictKind
    message: str
    severity: Literal["hard", "soft"] = "hard"
    day: str | None = None
    resource_id: str | None = None
    resource_name: str | None = None
    conflicting_event_ids: list[str] = Field(default_factory=list)
    conflicting_course_id: str | None = None


class OverloadWarning(BaseModel):
    teacher_id: str
    teacher_name: str
    total_hours: float
    max_weekly_hours: float
    message: str


class AssignmentCheck(BaseModel):
    """Outcome of validating one candidate assignment.

    Exactly one of ``conflict`` (blocking) or the pass state holds; a passing
    check may still carry an advisory ``warning``.
    """

    ok: bool
    conflict: ConflictDetail | None = None
    warning: OverloadWarning | None = None

    @classmethod
    def passed(cls, warning: OverloadWarning | None = None) -> "AssignmentCheck":
        return cls(ok=True, warning=warning)

    @classmethod
    def blocked(cls, conflict: ConflictDetail) -> "AssignmentCheck":
        return cls(ok=False, conflict=conflict)


class ScheduleAuditReport(BaseModel):
    conflicts: list[ConflictDetail]
    checked_events: int


class ConflictAnalysisRequest(BaseModel):
    schedule_data: str | None = Field(
        default=None,
        description="JSON encoded schedule events; the stored schedule is used when omitted.",
    )
    constraint_priorities: dict[str, Literal["high", "medium", "low"]] | None = None


class ConflictAnalysisResult(BaseModel):
    conflicts: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class ConflictAnalysisOut(BaseModel):
    analysis: ConflictAnalysisResult
    audit: ScheduleAuditReport
