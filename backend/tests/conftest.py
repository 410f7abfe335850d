import os

# Keep the app's own engine off the developer database while tests run.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cronograma.api.deps import get_db
from cronograma.db.base import Base
from cronograma.main import app


@pytest.fixture()
def session_factory():
    # One shared in-memory connection so every session sees the same tables.
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def seed(client):
    """Create one career, module, group, course, teacher and two classrooms through the API."""
    career = client.post("/api/careers/", json={"name": "Software Development"})
    assert career.status_code == 201
    module = client.post("/api/modules/", json={"name": "Databases", "total_hours": 96})
    assert module.status_code == 201
    group = client.post(
        "/api/groups/",
        json={"name": "DAM-1A", "semester": 1, "career_id": career.json()["id"], "student_count": 25},
    )
    assert group.status_code == 201
    course = client.post(
        "/api/courses/",
        json={
            "module_id": module.json()["id"],
            "group_id": group.json()["id"],
            "start_date": "2024-01-01",
            "end_date": "2024-04-21",
            "total_hours": 96,
        },
    )
    assert course.status_code == 201
    teacher = client.post(
        "/api/teachers/",
        json={"name": "Ana Ruiz", "email": "ana.ruiz@example.com", "contract_type": "half_time"},
    )
    assert teacher.status_code == 201
    room_a = client.post("/api/classrooms/", json={"name": "A-101", "capacity": 30, "type": "classroom"})
    assert room_a.status_code == 201
    room_b = client.post("/api/classrooms/", json={"name": "Lab-2", "capacity": 20, "type": "lab"})
    assert room_b.status_code == 201
    return {
        "career": career.json(),
        "module": module.json(),
        "group": group.json(),
        "course": course.json(),
        "teacher": teacher.json(),
        "room": room_a.json(),
        "small_room": room_b.json(),
    }
