def _mark(client, student, school_class, day, status="present", **extra):
    payload = {"student_id": student["id"], "class_id": school_class["id"], "date": day, "status": status}
    payload.update(extra)
    return client.post("/api/attendance", json=payload)


def test_list_attendance_empty_returns_404(client):
    assert client.get("/api/attendance").status_code == 404


def test_mark_attendance(client, student, school_class):
    response = _mark(client, student, school_class, "2024-09-02", remarks="On time")
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["status"] == "present"
    assert body["date"] == "2024-09-02"
    assert body["remarks"] == "On time"


def test_attendance_status_is_validated(client, student, school_class):
    assert _mark(client, student, school_class, "2024-09-02", status="sleeping").status_code == 422
    assert client.post("/api/attendance", json={"student_id": student["id"]}).status_code == 422


def test_attendance_filters(client, student, school_class):
    _mark(client, student, school_class, "2024-09-02")
    _mark(client, student, school_class, "2024-09-03", status="absent")

    response = client.get("/api/attendance", params={"date": "2024-09-03"})
    assert response.status_code == 200
    assert [record["status"] for record in response.json()] == ["absent"]

    response = client.get("/api/attendance", params={"class_id": school_class["id"]})
    assert [record["date"] for record in response.json()] == ["2024-09-03", "2024-09-02"]

    response = client.get(f"/api/attendance/student/{student['id']}")
    assert len(response.json()) == 2


def test_update_and_delete_attendance(client, student, school_class):
    record = _mark(client, student, school_class, "2024-09-02").json()

    response = client.put(f"/api/attendance/{record['id']}", json={"status": "late", "remarks": "Bus delay"})
    assert response.status_code == 200
    assert response.json()["status"] == "late"
    assert response.json()["date"] == "2024-09-02"

    assert client.delete(f"/api/attendance/{record['id']}").status_code == 200
    assert client.get(f"/api/attendance/{record['id']}").status_code == 404


def test_attendance_for_unknown_student(client, school_class):
    response = client.post(
        "/api/attendance",
        json={"student_id": 404, "class_id": school_class["id"], "date": "2024-09-02", "status": "present"}
    )
    assert response.status_code == 400
