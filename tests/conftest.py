import os

# keep test runs from writing app.log into the working tree
os.environ["LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient

from school_backend.config import settings
from school_backend.dependencies import get_uploader
from school_backend.main import app
from school_backend.services.media_upload import MediaUploadError

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeUploader:
    """Stands in for the media host and remembers what it was given"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads = []

    def is_configured(self) -> bool:
        return True

    async def upload(self, data: bytes, filename: str, content_type: str) -> str:
        if self.fail:
            raise MediaUploadError("Media host rejected the upload (500)")
        self.uploads.append({"filename": filename, "size": len(data), "content_type": content_type})
        return f"https://media.example.com/school/{filename}"


@pytest.fixture()
def uploader():
    return FakeUploader()


@pytest.fixture()
def client(tmp_path, monkeypatch, uploader):
    """
    Runs the app against a throwaway SQLite database with the media host faked out.
    """
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'school.db'}")
    app.dependency_overrides[get_uploader] = lambda: uploader

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def school_class(client):
    response = client.post("/api/class", json={"class_name": "Grade 5", "section": "A"})
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def student(client, school_class):
    response = client.post(
        "/api/student",
        data={"name": "Ayesha Khan", "roll_no": "5A-01", "class_id": str(school_class["id"])}
    )
    assert response.status_code == 201, response.text
    return response.json()
