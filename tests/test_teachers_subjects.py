def test_teacher_crud(client):
    assert client.get("/api/teacher").status_code == 404

    response = client.post("/api/teacher", json={"name": "Mr. Imran"})
    assert response.status_code == 201
    teacher_id = response.json()["teacher_id"]

    response = client.put(f"/api/teacher/{teacher_id}", json={"name": "Mr. Imran Qureshi"})
    assert response.status_code == 200
    assert response.json()["name"] == "Mr. Imran Qureshi"

    assert client.get(f"/api/teacher/{teacher_id}").json()["name"] == "Mr. Imran Qureshi"
    assert client.delete(f"/api/teacher/{teacher_id}").status_code == 200
    assert client.get(f"/api/teacher/{teacher_id}").status_code == 404


def test_teacher_name_required(client):
    assert client.post("/api/teacher", json={}).status_code == 422
    assert client.post("/api/teacher", json={"name": ""}).status_code == 422


def test_subjects_by_teacher(client):
    teacher = client.post("/api/teacher", json={"name": "Ms. Hina"}).json()

    response = client.post(
        "/api/subject",
        json={"subject_name": "Mathematics", "teacher_id": teacher["teacher_id"], "description": "Algebra basics"}
    )
    assert response.status_code == 201
    maths = response.json()
    client.post("/api/subject", json={"subject_name": "Urdu"})

    response = client.get("/api/subject")
    assert [subject["subject_name"] for subject in response.json()] == ["Mathematics", "Urdu"]

    response = client.get(f"/api/subject/teacher/{teacher['teacher_id']}")
    assert [subject["subject_id"] for subject in response.json()] == [maths["subject_id"]]

    response = client.put(f"/api/subject/{maths['subject_id']}", json={"description": "Geometry"})
    assert response.json()["description"] == "Geometry"
    assert response.json()["subject_name"] == "Mathematics"


def test_subject_with_unknown_teacher(client):
    response = client.post("/api/subject", json={"subject_name": "Physics", "teacher_id": 77})
    assert response.status_code == 400


def test_teacher_with_subjects_cannot_be_deleted(client):
    teacher = client.post("/api/teacher", json={"name": "Ms. Hina"}).json()
    client.post("/api/subject", json={"subject_name": "Science", "teacher_id": teacher["teacher_id"]})

    assert client.delete(f"/api/teacher/{teacher['teacher_id']}").status_code == 400


def test_delete_missing_subject(client):
    assert client.delete("/api/subject/5").status_code == 404
