def _create_fee(client, student_id, **overrides):
    payload = {"student_id": student_id, "amount": 1500, "due_date": "2024-09-10"}
    payload.update(overrides)
    return client.post("/api/fee", json=payload)


def test_fee_types(client):
    assert client.get("/api/fee-types").status_code == 404

    response = client.post("/api/fee-types", json={"type_name": "Tuition"})
    assert response.status_code == 201
    type_id = response.json()["type_id"]

    duplicate = client.post("/api/fee-types", json={"type_name": "Tuition"})
    assert duplicate.status_code == 400

    response = client.get("/api/fee-types")
    assert [fee_type["type_name"] for fee_type in response.json()] == ["Tuition"]

    assert client.delete(f"/api/fee-types/{type_id}").status_code == 200
    assert client.delete(f"/api/fee-types/{type_id}").status_code == 404


def test_create_fee_defaults_to_unpaid(client, student):
    response = _create_fee(client, student["id"])
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["status"] == "unpaid"
    assert float(body["amount"]) == 1500.0
    assert body["due_date"] == "2024-09-10"
    assert body["type_id"] is None


def test_fee_validation(client, student):
    assert _create_fee(client, student["id"], amount=-1).status_code == 422
    assert _create_fee(client, student["id"], status="waived").status_code == 422
    assert client.post("/api/fee", json={"student_id": student["id"], "amount": 10}).status_code == 422


def test_fee_for_unknown_student_is_rejected(client):
    response = _create_fee(client, 999)
    assert response.status_code == 400
    assert response.json()["detail"] == "Database constraint violation. Check your input data."


def test_fee_filters_and_updates(client, student):
    tuition = client.post("/api/fee-types", json={"type_name": "Tuition"}).json()
    first = _create_fee(client, student["id"], type_id=tuition["type_id"]).json()
    _create_fee(client, student["id"], amount=300, due_date="2024-10-10", status="paid")

    response = client.get("/api/fee", params={"status": "paid"})
    assert response.status_code == 200
    assert [float(fee["amount"]) for fee in response.json()] == [300.0]

    response = client.get(f"/api/fee/student/{student['id']}")
    assert len(response.json()) == 2

    response = client.put(f"/api/fee/{first['fee_id']}", json={"status": "partial"})
    assert response.status_code == 200
    assert response.json()["status"] == "partial"
    assert response.json()["type_id"] == tuition["type_id"]

    assert client.get("/api/fee", params={"status": "overdue"}).status_code == 404


def test_delete_fee(client, student):
    fee = _create_fee(client, student["id"]).json()

    assert client.delete(f"/api/fee/{fee['fee_id']}").status_code == 200
    assert client.get(f"/api/fee/{fee['fee_id']}").status_code == 404
    assert client.put(f"/api/fee/{fee['fee_id']}", json={"status": "paid"}).status_code == 404


def test_student_can_point_at_fee(client, student):
    fee = _create_fee(client, student["id"]).json()

    response = client.put(f"/api/student/{student['id']}", data={"fee_id": str(fee["fee_id"])})
    assert response.status_code == 200
    assert response.json()["fee_id"] == fee["fee_id"]
