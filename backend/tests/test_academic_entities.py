def test_teacher_defaults_weekly_hours_from_contract(client):
    full = client.post(
        "/api/teachers/",
        json={"name": "Marta Soler", "email": "marta@example.com", "contract_type": "full_time"},
    )
    assert full.status_code == 201
    assert full.json()["max_weekly_hours"] == 40

    hourly = client.post(
        "/api/teachers/",
        json={
            "name": "Pablo Vidal",
            "email": "pablo@example.com",
            "contract_type": "hourly",
            "max_weekly_hours": 8,
        },
    )
    assert hourly.status_code == 201
    assert hourly.json()["max_weekly_hours"] == 8


def test_teacher_specialties_are_module_ids(client):
    networks = client.post("/api/modules/", json={"name": "Networks", "total_hours": 64}).json()
    response = client.post(
        "/api/teachers/",
        json={
            "name": "Pablo Vidal",
            "email": "pablo@example.com",
            "contract_type": "hourly",
            "specialties": [networks["id"], f" {networks['id']} ", networks["id"], ""],
        },
    )
    assert response.status_code == 201
    assert response.json()["specialties"] == [networks["id"]]


def test_unknown_specialty_module_is_rejected(client):
    body = {"name": "Pablo Vidal", "email": "pablo@example.com", "contract_type": "hourly"}
    response = client.post("/api/teachers/", json={**body, "specialties": ["Networks"]})
    assert response.status_code == 400
    assert "Networks" in response.json()["detail"]
    assert client.get("/api/teachers/").json() == []

    created = client.post("/api/teachers/", json=body).json()
    update = client.put(f"/api/teachers/{created['id']}", json={"specialties": ["missing-module"]})
    assert update.status_code == 400
    assert client.get(f"/api/teachers/{created['id']}").json()["specialties"] == []


def test_teacher_email_must_be_unique(client):
    body = {"name": "Marta Soler", "email": "marta@example.com", "contract_type": "full_time"}
    assert client.post("/api/teachers/", json=body).status_code == 201
    duplicate = client.post("/api/teachers/", json={**body, "name": "Other"})
    assert duplicate.status_code == 409


def test_teacher_soft_and_hard_delete(client):
    created = client.post(
        "/api/teachers/",
        json={"name": "Marta Soler", "email": "marta@example.com", "contract_type": "full_time"},
    ).json()

    soft = client.delete(f"/api/teachers/{created['id']}")
    assert soft.status_code == 200
    assert client.get(f"/api/teachers/{created['id']}").json()["status"] == "inactive"
    assert client.get("/api/teachers/", params={"status": "active"}).json() == []

    hard = client.delete(f"/api/teachers/{created['id']}", params={"hard": "true"})
    assert hard.status_code == 200
    assert client.get(f"/api/teachers/{created['id']}").status_code == 404

    logs = client.get("/api/activity/logs", params={"entity_type": "teacher"}).json()
    assert {entry["action"] for entry in logs} == {"teacher.deactivate", "teacher.delete"}


def test_teacher_update_resets_hours_when_cleared(client):
    created = client.post(
        "/api/teachers/",
        json={"name": "Marta Soler", "email": "marta@example.com", "contract_type": "full_time", "max_weekly_hours": 30},
    ).json()
    updated = client.put(
        f"/api/teachers/{created['id']}",
        json={"contract_type": "half_time", "max_weekly_hours": None},
    )
    assert updated.status_code == 200
    assert updated.json()["max_weekly_hours"] == 20
    assert updated.json()["contract_type"] == "half_time"


def test_classroom_crud(client):
    created = client.post("/api/classrooms/", json={"name": "A-101", "capacity": 30, "type": "classroom"})
    assert created.status_code == 201
    room_id = created.json()["id"]

    duplicate = client.post("/api/classrooms/", json={"name": "A-101", "capacity": 10, "type": "lab"})
    assert duplicate.status_code == 409

    updated = client.put(f"/api/classrooms/{room_id}", json={"capacity": 45})
    assert updated.status_code == 200
    assert updated.json()["capacity"] == 45

    assert client.delete(f"/api/classrooms/{room_id}").status_code == 200
    assert client.get("/api/classrooms/").json() == []


def test_invalid_classroom_capacity_is_rejected(client):
    response = client.post("/api/classrooms/", json={"name": "Tiny", "capacity": 0, "type": "seminar"})
    assert response.status_code == 422


def test_group_requires_existing_career(client):
    response = client.post(
        "/api/groups/",
        json={"name": "DAM-1A", "semester": 1, "career_id": "missing", "student_count": 25},
    )
    assert response.status_code == 400


def test_career_with_groups_cannot_be_deleted(client, seed):
    career_id = seed["career"]["id"]
    assert client.delete(f"/api/careers/{career_id}").status_code == 409

    assert client.delete(f"/api/groups/{seed['group']['id']}").status_code == 200
    assert client.delete(f"/api/careers/{career_id}").status_code == 200


def test_module_update_and_not_found(client):
    module = client.post("/api/modules/", json={"name": "Networks", "total_hours": 64}).json()
    updated = client.put(f"/api/modules/{module['id']}", json={"description": "Routing and switching"})
    assert updated.status_code == 200
    assert updated.json()["description"] == "Routing and switching"
    assert client.put("/api/modules/missing", json={"name": "X"}).status_code == 404


def test_null_fields_in_updates_leave_required_columns_untouched(client, seed):
    teacher = seed["teacher"]
    response = client.put(f"/api/teachers/{teacher['id']}", json={"name": None, "email": None, "status": None})
    assert response.status_code == 200
    assert response.json()["name"] == teacher["name"]
    assert response.json()["email"] == teacher["email"]

    room = client.put(
        f"/api/classrooms/{seed['room']['id']}",
        json={"name": None, "capacity": None, "description": "Projector"},
    )
    assert room.status_code == 200
    assert room.json()["capacity"] == 30
    cleared = client.put(f"/api/classrooms/{seed['room']['id']}", json={"description": None})
    assert cleared.json()["description"] is None

    group = client.put(f"/api/groups/{seed['group']['id']}", json={"name": None, "career_id": None})
    assert group.status_code == 200
    assert group.json()["career_id"] == seed["career"]["id"]

    module = client.put(f"/api/modules/{seed['module']['id']}", json={"name": None, "total_hours": None})
    assert module.status_code == 200
    assert module.json()["name"] == "Databases"

    career = client.put(f"/api/careers/{seed['career']['id']}", json={"name": None})
    assert career.status_code == 200
    assert career.json()["name"] == "Software Development"
