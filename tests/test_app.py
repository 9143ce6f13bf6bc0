def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == "Live Here"


def test_health_reports_database(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["media_upload"] in ("configured", "not_configured")


def test_unsupported_method_is_rejected(client):
    response = client.patch("/api/student")
    assert response.status_code == 405
