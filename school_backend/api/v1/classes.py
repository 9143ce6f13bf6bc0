import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from school_backend.crud.school_class import get_classes, get_class_by_id, create_class, update_class, delete_class
from school_backend.dependencies import get_db
from school_backend.schemas.class_schema import ClassCreate, ClassResponse, ClassUpdate
from school_backend.utils.http_errors import database_error

logger = logging.getLogger(__name__)

class_router = APIRouter(prefix="/api/class", tags=["classes"])


@class_router.get("", response_model=List[ClassResponse])
async def list_classes(db: AsyncSession = Depends(get_db)):
    try:
        classes = await get_classes(db)
    except SQLAlchemyError as e:
        raise database_error("fetching classes", e)

    if not classes:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No classes found")
    return [ClassResponse.model_validate(school_class) for school_class in classes]


@class_router.get("/{class_id}", response_model=ClassResponse)
async def get_class(class_id: int, db: AsyncSession = Depends(get_db)):
    try:
        school_class = await get_class_by_id(db, class_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching class {class_id}", e)

    if not school_class:
        logger.warning(f"Class not found with id: {class_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return ClassResponse.model_validate(school_class)


@class_router.post("", response_model=ClassResponse, status_code=status.HTTP_201_CREATED)
async def create_class_endpoint(school_class: ClassCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a class.

    - **class_name**: e.g. "Grade 5"
    - **section**: optional, e.g. "A"
    """
    try:
        new_class = await create_class(db, school_class)
    except SQLAlchemyError as e:
        raise database_error("creating class", e)

    logger.info(f"Class created: {new_class.class_name} (ID: {new_class.id})")
    return ClassResponse.model_validate(new_class)


@class_router.put("/{class_id}", response_model=ClassResponse)
async def update_class_endpoint(class_id: int, class_update: ClassUpdate, db: AsyncSession = Depends(get_db)):
    try:
        updated_class = await update_class(db, class_id, class_update)
    except SQLAlchemyError as e:
        raise database_error(f"updating class {class_id}", e)

    if not updated_class:
        logger.warning(f"Class not found with id: {class_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return ClassResponse.model_validate(updated_class)


@class_router.delete("/{class_id}")
async def delete_class_endpoint(class_id: int, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await delete_class(db, class_id)
    except IntegrityError as e:
        logger.error(f"Class {class_id} is still referenced: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Class still has students or attendance attached"
        )
    except SQLAlchemyError as e:
        raise database_error(f"deleting class {class_id}", e)

    if not deleted:
        logger.warning(f"Class not found with id: {class_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class not found")
    return {"message": "Class deleted successfully", "id": class_id}
