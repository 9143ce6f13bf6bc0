import logging

from fastapi import UploadFile, HTTPException, status

from school_backend.config import settings
from school_backend.services.media_upload import MediaUploader, MediaUploadError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {'image/jpeg', 'image/jpg', 'image/png', 'image/webp', 'image/gif'}


async def read_image(image: UploadFile) -> bytes:
    """Read an uploaded image into memory after checking its type and size"""
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        logger.warning(f"Unsupported file type: {image.content_type}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type '{image.content_type}'. Use JPEG, PNG, WebP or GIF"
        )

    await image.seek(0)
    image_bytes = await image.read()

    if not image_bytes:
        logger.warning(f"Empty image upload: {image.filename}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image file is empty"
        )

    max_size = settings.MAX_IMAGE_SIZE_MB * 1024 * 1024
    if len(image_bytes) > max_size:
        logger.warning(f"Image too large: {image.filename} ({len(image_bytes)} bytes)")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Image size should be less than {settings.MAX_IMAGE_SIZE_MB}MB"
        )

    return image_bytes


async def upload_image(image: UploadFile, uploader: MediaUploader) -> str:
    """Validate an uploaded image, push it to the media host and return its URL"""
    image_bytes = await read_image(image)

    try:
        return await uploader.upload(
            image_bytes,
            image.filename or "upload",
            image.content_type
        )
    except MediaUploadError as e:
        if not e.configured:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Image upload service is not configured"
            )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Image upload failed: {e}"
        )
