def test_list_classes_empty_returns_404(client):
    response = client.get("/api/class")
    assert response.status_code == 404
    assert response.json()["detail"] == "No classes found"


def test_class_crud(client, school_class):
    class_id = school_class["id"]
    assert school_class["class_name"] == "Grade 5"
    assert school_class["section"] == "A"

    response = client.put(f"/api/class/{class_id}", json={"section": "B"})
    assert response.status_code == 200
    assert response.json() == {"id": class_id, "class_name": "Grade 5", "section": "B"}

    response = client.get("/api/class")
    assert response.status_code == 200
    assert len(response.json()) == 1

    response = client.delete(f"/api/class/{class_id}")
    assert response.status_code == 200
    assert client.get(f"/api/class/{class_id}").status_code == 404


def test_class_name_is_required(client):
    response = client.post("/api/class", json={"section": "A"})
    assert response.status_code == 422


def test_class_with_students_cannot_be_deleted(client, student, school_class):
    response = client.delete(f"/api/class/{school_class['id']}")
    assert response.status_code == 400


def test_class_name_cannot_be_cleared(client, school_class):
    class_id = school_class["id"]

    response = client.put(f"/api/class/{class_id}", json={"class_name": None})
    assert response.status_code == 422

    response = client.get(f"/api/class/{class_id}")
    assert response.json()["class_name"] == "Grade 5"
