from cronograma.core.exceptions import (
    AnalyzerUnavailableError,
    AppError,
    MalformedInputError,
    PersistenceError,
    ResourceNotFoundError,
    SchedulingConflictError,
)
from cronograma.schemas.conflict import ConflictDetail, ConflictKind


def test_app_error_defaults():
    err = AppError("Generic error")
    assert err.status_code == 500
    assert err.details == {}


def test_scheduling_conflict_carries_detail():
    conflict = ConflictDetail(kind=ConflictKind.room, message="Classroom A-101 already has a class", day="Monday")
    err = SchedulingConflictError(conflict)
    assert err.status_code == 409
    assert err.message == conflict.message
    assert err.conflict is conflict
    assert err.details["kind"] == "room"
    assert err.details["day"] == "Monday"
    assert isinstance(err, AppError)


def test_status_codes():
    assert MalformedInputError("bad", details={"foo": "bar"}).status_code == 422
    assert ResourceNotFoundError("Course", "c1").message == "Course with id c1 not found"
    assert AnalyzerUnavailableError("down").status_code == 502

    err = PersistenceError("update")
    assert err.status_code == 503
    assert err.details == {"operation": "update"}
