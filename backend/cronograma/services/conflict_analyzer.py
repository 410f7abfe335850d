"""Client for the external natural-language conflict analysis service.

The analysis is advisory: it explains and suggests, it never decides whether
a write is allowed. The service receives a JSON snapshot of schedule events
and a map of constraint name to priority level, and answers with
``{"conflicts": [...], "suggestions": [...]}``.
"""
from __future__ import annotations

import json
import logging

import httpx
from pydantic import ValidationError

from cronograma.core.config import Settings
from cronograma.core.exceptions import AnalyzerUnavailableError, ConfigurationError
from cronograma.schemas.conflict import ConflictAnalysisResult
from cronograma.services.snapshot import ScheduleSnapshot

logger = logging.getLogger(__name__)


def serialize_schedule(snapshot: ScheduleSnapshot) -> str:
    items = []
    for event in snapshot.events:
        course = snapshot.courses.get(event.course_id)
        teacher = snapshot.teachers.get(event.teacher_id)
        classroom = snapshot.classrooms.get(event.classroom_id)
        group = snapshot.groups.get(course.group_id) if course is not None else None
        items.append(
            {
                "id": event.id,
                "courseId": event.course_id,
                "module": snapshot.module_name_for(course) if course is not None else None,
                "group": group.name if group is not None else None,
                "studentCount": group.student_count if group is not None else None,
                "teacherId": event.teacher_id,
                "teacher": teacher.name if teacher is not None else None,
                "classroomId": event.classroom_id,
                "classroom": classroom.name if classroom is not None else None,
                "capacity": classroom.capacity if classroom is not None else None,
                "day": event.day,
                "startTime": event.start_time,
                "endTime": event.end_time,
                "startWeek": event.start_week,
                "endWeek": event.end_week,
            }
        )
    return json.dumps(items, ensure_ascii=False)


class ConflictAnalyzerClient:
    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport

    def analyze(self, schedule_data: str, constraint_priorities: dict[str, str]) -> ConflictAnalysisResult:
        url = self._settings.analyzer_url
        if not url:
            raise ConfigurationError("Conflict analyzer is not configured (set ANALYZER_URL)")

        headers = {"Content-Type": "application/json"}
        if self._settings.analyzer_api_key:
            headers["Authorization"] = f"Bearer {self._settings.analyzer_api_key}"
        body = {
            "scheduleData": schedule_data,
            "constraintPriorities": json.dumps(constraint_priorities),
        }

        try:
            with httpx.Client(timeout=self._settings.analyzer_timeout_seconds, transport=self._transport) as client:
                response = client.post(url, json=body, headers=headers)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Conflict analyzer request to %s failed", url, exc_info=True)
            raise AnalyzerUnavailableError(f"Conflict analyzer request failed: {exc}") from exc
        except ValueError as exc:
            raise AnalyzerUnavailableError("Conflict analyzer returned a non-JSON response") from exc

        try:
            result = ConflictAnalysisResult.model_validate(payload)
        except ValidationError as exc:
            raise AnalyzerUnavailableError("Conflict analyzer response is missing conflicts/suggestions") from exc
        logger.info("Conflict analyzer reported %d conflict(s)", len(result.conflicts))
        return result
