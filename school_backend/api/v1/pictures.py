import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from school_backend.crud.picture import get_pictures_by_student, get_picture_by_id, create_picture, delete_picture
from school_backend.dependencies import get_db, get_uploader
from school_backend.schemas.picture_schema import PictureResponse
from school_backend.services.media_upload import MediaUploader
from school_backend.utils.http_errors import database_error
from school_backend.utils.image_helper import upload_image

logger = logging.getLogger(__name__)

picture_router = APIRouter(prefix="/api/pictures", tags=["pictures"])


@picture_router.get("/student/{student_id}", response_model=List[PictureResponse])
async def list_student_pictures(student_id: int, db: AsyncSession = Depends(get_db)):
    try:
        pictures = await get_pictures_by_student(db, student_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching pictures for student {student_id}", e)

    return [PictureResponse.model_validate(picture) for picture in pictures]


@picture_router.get("/{picture_id}", response_model=PictureResponse)
async def get_picture(picture_id: int, db: AsyncSession = Depends(get_db)):
    try:
        picture = await get_picture_by_id(db, picture_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching picture {picture_id}", e)

    if not picture:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Picture not found")
    return PictureResponse.model_validate(picture)


@picture_router.post("", response_model=PictureResponse, status_code=status.HTTP_201_CREATED)
async def add_picture(
        student_id: int = Form(...),
        image_url: Optional[str] = Form(None, max_length=500, description="Already hosted image URL"),
        image: Optional[UploadFile] = File(None, description="Image to upload"),
        db: AsyncSession = Depends(get_db),
        uploader: MediaUploader = Depends(get_uploader)
):
    """
    Attach a picture to a student.

    - **image**: uploaded to the media host, the returned URL is stored
    - **image_url**: stored as given when no file is sent
    """
    logger.info(f"Adding picture for student {student_id}")

    if image is not None and image.filename:
        image_url = await upload_image(image, uploader)
    elif not image_url or not image_url.strip():
        logger.warning(f"Picture request for student {student_id} without image or image_url")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either an image file or image_url is required"
        )

    try:
        picture = await create_picture(db, student_id, image_url.strip())
    except SQLAlchemyError as e:
        raise database_error(f"saving picture for student {student_id}", e)

    return PictureResponse.model_validate(picture)


@picture_router.delete("/{picture_id}")
async def delete_picture_endpoint(picture_id: int, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await delete_picture(db, picture_id)
    except SQLAlchemyError as e:
        raise database_error(f"deleting picture {picture_id}", e)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Picture not found")
    return {"message": "Picture deleted successfully", "id": picture_id}
