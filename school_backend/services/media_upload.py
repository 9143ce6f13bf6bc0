import hashlib
import logging
import time
from typing import Optional

import httpx

from school_backend.config import settings

logger = logging.getLogger(__name__)


class MediaUploadError(Exception):
    """Raised when an image could not be stored on the media host"""

    def __init__(self, message: str, configured: bool = True):
        super().__init__(message)
        self.configured = configured


class MediaUploader:
    """
    Client for a Cloudinary compatible media host.

    Takes an in-memory image buffer, pushes it with a signed upload request
    and hands back the public URL of the stored asset.
    """

    def __init__(
            self,
            cloud_name: Optional[str] = None,
            api_key: Optional[str] = None,
            api_secret: Optional[str] = None,
            folder: Optional[str] = None,
            base_url: Optional[str] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._folder = folder
        self._base_url = base_url
        self._transport = transport

    @property
    def cloud_name(self) -> str:
        return self._cloud_name or settings.MEDIA_CLOUD_NAME

    @property
    def api_key(self) -> str:
        return self._api_key or settings.MEDIA_API_KEY

    @property
    def api_secret(self) -> str:
        return self._api_secret or settings.MEDIA_API_SECRET

    @property
    def folder(self) -> str:
        return self._folder or settings.MEDIA_FOLDER

    @property
    def upload_url(self) -> str:
        base_url = (self._base_url or settings.MEDIA_UPLOAD_BASE_URL).rstrip("/")
        return f"{base_url}/{self.cloud_name}/image/upload"

    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def sign(self, params: dict) -> str:
        """sha1 over the alphabetically sorted params followed by the api secret"""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode("utf-8")).hexdigest()

    async def upload(self, data: bytes, filename: str, content_type: str) -> str:
        """Upload an image buffer and return its public URL"""
        if not self.is_configured():
            logger.error("Media upload requested but the media host is not configured")
            raise MediaUploadError("Media upload service is not configured", configured=False)

        params = {
            "folder": self.folder,
            "timestamp": int(time.time()),
        }
        form = {
            **{key: str(value) for key, value in params.items()},
            "api_key": self.api_key,
            "signature": self.sign(params),
        }

        logger.info(f"Uploading {filename} ({len(data)} bytes) to media folder '{self.folder}'")
        try:
            async with httpx.AsyncClient(
                    transport=self._transport,
                    timeout=settings.MEDIA_UPLOAD_TIMEOUT
            ) as client:
                response = await client.post(
                    self.upload_url,
                    data=form,
                    files={"file": (filename, data, content_type)}
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Media host rejected upload of {filename}: "
                f"{e.response.status_code} {e.response.text}"
            )
            raise MediaUploadError(f"Media host rejected the upload ({e.response.status_code})") from e
        except httpx.HTTPError as e:
            logger.error(f"Error calling media host for {filename}: {e}", exc_info=True)
            raise MediaUploadError(f"Media upload request failed: {e}") from e
        except ValueError as e:
            logger.error(f"Media host returned a non JSON body for {filename}")
            raise MediaUploadError("Media host returned an invalid response") from e

        if not isinstance(payload, dict):
            logger.error(f"Media host response for {filename} is not an object: {payload}")
            raise MediaUploadError("Media host response did not contain a URL")

        url = payload.get("secure_url") or payload.get("url")
        if not url:
            logger.error(f"Media host response for {filename} has no URL: {payload}")
            raise MediaUploadError("Media host response did not contain a URL")

        logger.info(f"Uploaded {filename} to {url}")
        return url


media_uploader = MediaUploader()
