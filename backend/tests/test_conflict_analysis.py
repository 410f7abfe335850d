import json

import httpx
import pytest

from cronograma.api.deps import get_conflict_analyzer
from cronograma.core.config import Settings
from cronograma.core.exceptions import AnalyzerUnavailableError, ConfigurationError
from cronograma.main import app
from cronograma.services.conflict_analyzer import ConflictAnalyzerClient


def _settings(**overrides):
    values = {"analyzer_url": "http://analyzer.test/analyze", "analyzer_api_key": "secret"}
    values.update(overrides)
    return Settings(**values)


def test_analyzer_posts_schedule_and_priorities():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"conflicts": ["Ana Ruiz teaches twice on Monday"], "suggestions": ["Move one class"]})

    client = ConflictAnalyzerClient(_settings(), transport=httpx.MockTransport(handler))
    result = client.analyze("[]", {"teacherClash": "high"})

    assert result.conflicts == ["Ana Ruiz teaches twice on Monday"]
    assert result.suggestions == ["Move one class"]
    assert seen["auth"] == "Bearer secret"
    assert seen["body"]["scheduleData"] == "[]"
    assert json.loads(seen["body"]["constraintPriorities"]) == {"teacherClash": "high"}


def test_missing_url_is_a_configuration_error():
    client = ConflictAnalyzerClient(_settings(analyzer_url=None))
    with pytest.raises(ConfigurationError):
        client.analyze("[]", {})


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json={"conflicts": "oops"}),
    ],
)
def test_bad_analyzer_responses(response):
    client = ConflictAnalyzerClient(_settings(), transport=httpx.MockTransport(lambda request: response))
    with pytest.raises(AnalyzerUnavailableError):
        client.analyze("[]", {})


def test_analyze_endpoint_uses_stored_schedule_and_default_priorities(client, seed):
    created = client.post(
        "/api/schedule/assignments",
        json={
            "course_id": seed["course"]["id"],
            "teacher_id": seed["teacher"]["id"],
            "classroom_id": seed["room"]["id"],
            "days": ["Monday"],
            "start_time": "08:00",
            "end_time": "10:00",
            "start_date": "2024-01-01",
            "end_date": "2024-02-25",
        },
    )
    assert created.status_code == 201

    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"conflicts": [], "suggestions": ["Looks fine"]})

    app.dependency_overrides[get_conflict_analyzer] = lambda: ConflictAnalyzerClient(
        _settings(), transport=httpx.MockTransport(handler)
    )
    response = client.post("/api/conflicts/analyze", json={})
    assert response.status_code == 200
    payload = response.json()
    assert payload["analysis"]["suggestions"] == ["Looks fine"]
    assert payload["audit"]["checked_events"] == 1

    schedule = json.loads(seen["body"]["scheduleData"])
    assert schedule[0]["teacher"] == "Ana Ruiz"
    assert schedule[0]["day"] == "Monday"
    assert json.loads(seen["body"]["constraintPriorities"])["teacherClash"] == "high"


def test_analyze_endpoint_without_configuration(client):
    app.dependency_overrides[get_conflict_analyzer] = lambda: ConflictAnalyzerClient(_settings(analyzer_url=None))
    response = client.post("/api/conflicts/analyze", json={"constraint_priorities": {"teacherGaps": "low"}})
    assert response.status_code == 500
    assert "ANALYZER_URL" in response.json()["message"]


def test_audit_endpoint_reports_no_conflicts_on_empty_schedule(client):
    response = client.get("/api/conflicts/audit")
    assert response.status_code == 200
    assert response.json() == {"conflicts": [], "checked_events": 0}
