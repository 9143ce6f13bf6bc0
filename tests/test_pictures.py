from conftest import PNG_BYTES

from school_backend.config import settings
from school_backend.dependencies import get_uploader
from school_backend.main import app
from school_backend.services.media_upload import MediaUploader


def test_upload_picture_for_student(client, student, uploader):
    response = client.post(
        "/api/pictures",
        data={"student_id": str(student["id"])},
        files={"image": ("sports-day.jpg", PNG_BYTES, "image/jpeg")}
    )
    assert response.status_code == 201, response.text
    picture = response.json()
    assert picture["image_url"] == "https://media.example.com/school/sports-day.jpg"
    assert len(uploader.uploads) == 1

    response = client.get(f"/api/pictures/student/{student['id']}")
    assert [p["id"] for p in response.json()] == [picture["id"]]


def test_picture_from_existing_url(client, student, uploader):
    response = client.post(
        "/api/pictures",
        data={"student_id": str(student["id"]), "image_url": "https://cdn.example.com/a.png"}
    )
    assert response.status_code == 201
    assert response.json()["image_url"] == "https://cdn.example.com/a.png"
    assert uploader.uploads == []


def test_picture_needs_image_or_url(client, student):
    response = client.post("/api/pictures", data={"student_id": str(student["id"])})
    assert response.status_code == 400


def test_picture_for_unknown_student(client):
    response = client.post("/api/pictures", data={"student_id": "31", "image_url": "https://cdn.example.com/a.png"})
    assert response.status_code == 400


def test_upload_without_media_credentials(client, student, monkeypatch):
    monkeypatch.setattr(settings, "MEDIA_CLOUD_NAME", "")
    monkeypatch.setattr(settings, "MEDIA_API_KEY", "")
    monkeypatch.setattr(settings, "MEDIA_API_SECRET", "")
    app.dependency_overrides[get_uploader] = lambda: MediaUploader()

    response = client.post(
        "/api/pictures",
        data={"student_id": str(student["id"])},
        files={"image": ("a.png", PNG_BYTES, "image/png")}
    )
    assert response.status_code == 503


def test_delete_picture(client, student):
    picture = client.post(
        "/api/pictures",
        data={"student_id": str(student["id"]), "image_url": "https://cdn.example.com/a.png"}
    ).json()

    assert client.delete(f"/api/pictures/{picture['id']}").status_code == 200
    assert client.get(f"/api/pictures/{picture['id']}").status_code == 404


def test_empty_image_is_rejected(client, student, uploader):
    response = client.post(
        "/api/pictures",
        data={"student_id": str(student["id"])},
        files={"image": ("blank.png", b"", "image/png")}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Image file is empty"
    assert uploader.uploads == []


def test_image_url_length_is_limited(client, student):
    response = client.post(
        "/api/pictures",
        data={"student_id": str(student["id"]), "image_url": "https://cdn.example.com/" + "a" * 477}
    )
    assert response.status_code == 422
    assert client.get(f"/api/pictures/student/{student['id']}").json() == []
