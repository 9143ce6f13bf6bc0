import asyncio
import hashlib

import httpx
import pytest

from school_backend.services.media_upload import MediaUploader, MediaUploadError


def _uploader(handler):
    return MediaUploader(
        cloud_name="demo",
        api_key="key-123",
        api_secret="s3cret",
        folder="students",
        base_url="https://media.test/v1_1",
        transport=httpx.MockTransport(handler)
    )


def test_signature_is_sha1_of_sorted_params_and_secret():
    uploader = _uploader(lambda request: httpx.Response(200))
    expected = hashlib.sha1(b"folder=students&timestamp=1700000000s3cret").hexdigest()
    assert uploader.sign({"timestamp": 1700000000, "folder": "students"}) == expected


def test_upload_posts_signed_multipart_and_returns_secure_url():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, json={"secure_url": "https://res.media.test/students/pic.png"})

    url = asyncio.run(_uploader(handler).upload(b"image-bytes", "pic.png", "image/png"))

    assert url == "https://res.media.test/students/pic.png"
    assert seen["url"] == "https://media.test/v1_1/demo/image/upload"
    assert b'name="api_key"' in seen["body"]
    assert b"key-123" in seen["body"]
    assert b'name="signature"' in seen["body"]
    assert b'filename="pic.png"' in seen["body"]
    assert b"image-bytes" in seen["body"]
    assert b"s3cret" not in seen["body"]


def test_upload_error_status_raises():
    uploader = _uploader(lambda request: httpx.Response(401, json={"error": {"message": "Invalid Signature"}}))

    with pytest.raises(MediaUploadError) as exc_info:
        asyncio.run(uploader.upload(b"x", "a.png", "image/png"))
    assert exc_info.value.configured is True


def test_upload_response_without_url_raises():
    uploader = _uploader(lambda request: httpx.Response(200, json={"public_id": "abc"}))

    with pytest.raises(MediaUploadError):
        asyncio.run(uploader.upload(b"x", "a.png", "image/png"))


def test_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(MediaUploadError):
        asyncio.run(_uploader(handler).upload(b"x", "a.png", "image/png"))


def test_unconfigured_uploader_refuses(monkeypatch):
    from school_backend.config import settings

    monkeypatch.setattr(settings, "MEDIA_CLOUD_NAME", "")
    monkeypatch.setattr(settings, "MEDIA_API_KEY", "")
    monkeypatch.setattr(settings, "MEDIA_API_SECRET", "")
    uploader = MediaUploader()

    assert uploader.is_configured() is False
    with pytest.raises(MediaUploadError) as exc_info:
        asyncio.run(uploader.upload(b"x", "a.png", "image/png"))
    assert exc_info.value.configured is False


def test_upload_response_that_is_not_an_object_raises():
    uploader = _uploader(lambda request: httpx.Response(200, json=["x"]))

    with pytest.raises(MediaUploadError):
        asyncio.run(uploader.upload(b"x", "a.png", "image/png"))
