def _course_body(seed, start, end, **overrides):
    body = {
        "module_id": seed["module"]["id"],
        "group_id": seed["group"]["id"],
        "start_date": start,
        "end_date": end,
        "total_hours": 64,
    }
    body.update(overrides)
    return body


def test_course_duration_is_derived_from_dates(seed):
    # 2024-01-01 (Monday) to 2024-04-21 (Sunday).
    assert seed["course"]["duration_weeks"] == 16


def test_overlapping_course_for_same_group_is_blocked(client, seed):
    response = client.post("/api/courses/", json=_course_body(seed, "2024-04-01", "2024-06-01"))
    assert response.status_code == 409
    payload = response.json()
    assert payload["details"]["kind"] == "course_overlap"
    assert payload["details"]["resource_name"] == "Databases"
    assert payload["details"]["conflicting_course_id"] == seed["course"]["id"]


def test_consecutive_course_is_accepted(client, seed):
    response = client.post("/api/courses/", json=_course_body(seed, "2024-04-22", "2024-06-30"))
    assert response.status_code == 201
    assert response.json()["duration_weeks"] == 10


def test_inverted_dates_are_rejected(client, seed):
    response = client.post("/api/courses/", json=_course_body(seed, "2024-09-10", "2024-09-01"))
    assert response.status_code == 422


def test_unknown_module_is_rejected(client, seed):
    response = client.post("/api/courses/", json=_course_body(seed, "2024-09-01", "2024-12-01", module_id="missing"))
    assert response.status_code == 400


def test_update_excludes_the_course_itself_and_recomputes_weeks(client, seed):
    course_id = seed["course"]["id"]
    response = client.put(f"/api/courses/{course_id}", json={"end_date": "2024-02-25"})
    assert response.status_code == 200
    assert response.json()["duration_weeks"] == 8


def test_update_into_another_course_is_blocked(client, seed):
    later = client.post("/api/courses/", json=_course_body(seed, "2024-05-06", "2024-06-30")).json()
    response = client.put(f"/api/courses/{later['id']}", json={"start_date": "2024-04-15"})
    assert response.status_code == 409


def test_update_with_inverted_merged_dates_is_malformed(client, seed):
    response = client.put(f"/api/courses/{seed['course']['id']}", json={"end_date": "2023-12-01"})
    assert response.status_code == 422


def test_delete_course_removes_its_schedule(client, seed):
    course_id = seed["course"]["id"]
    created = client.post(
        "/api/schedule/assignments",
        json={
            "course_id": course_id,
            "teacher_id": seed["teacher"]["id"],
            "classroom_id": seed["room"]["id"],
            "days": ["Monday", "Wednesday"],
            "start_time": "08:00",
            "end_time": "10:00",
            "start_date": "2024-01-01",
            "end_date": "2024-04-21",
        },
    )
    assert created.status_code == 201

    response = client.delete(f"/api/courses/{course_id}")
    assert response.status_code == 200
    assert response.json()["removed_events"] == 2
    assert client.get("/api/schedule/events").json() == []
    assert client.get(f"/api/courses/{course_id}").status_code == 404


def test_eligible_teachers_are_specialists_in_the_module(client, seed):
    course_id = seed["course"]["id"]
    assert client.get(f"/api/courses/{course_id}/eligible-teachers").json() == []

    specialist = client.post(
        "/api/teachers/",
        json={
            "name": "Bea Moreno",
            "email": "bea.moreno@example.com",
            "contract_type": "full_time",
            "specialties": [seed["module"]["id"]],
        },
    ).json()
    other_module = client.post("/api/modules/", json={"name": "Networks", "total_hours": 64}).json()
    client.post(
        "/api/teachers/",
        json={
            "name": "Carlos Pena",
            "email": "carlos.pena@example.com",
            "contract_type": "full_time",
            "specialties": [other_module["id"]],
        },
    )

    response = client.get(f"/api/courses/{course_id}/eligible-teachers")
    assert response.status_code == 200
    assert [teacher["id"] for teacher in response.json()] == [specialist["id"]]
    assert client.get("/api/courses/missing/eligible-teachers").status_code == 404
