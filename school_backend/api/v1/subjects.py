import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from school_backend.crud.subject import get_subjects, get_subject_by_id, create_subject, update_subject, delete_subject
from school_backend.dependencies import get_db
from school_backend.schemas.subject_schema import SubjectCreate, SubjectResponse, SubjectUpdate
from school_backend.utils.http_errors import database_error

logger = logging.getLogger(__name__)

subject_router = APIRouter(prefix="/api/subject", tags=["subjects"])


@subject_router.get("", response_model=List[SubjectResponse])
async def list_subjects(db: AsyncSession = Depends(get_db)):
    try:
        subjects = await get_subjects(db)
    except SQLAlchemyError as e:
        raise database_error("fetching subjects", e)

    if not subjects:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No subjects found")
    return [SubjectResponse.model_validate(subject) for subject in subjects]


@subject_router.get("/teacher/{teacher_id}", response_model=List[SubjectResponse])
async def list_teacher_subjects(teacher_id: int, db: AsyncSession = Depends(get_db)):
    """Subjects taught by one teacher"""
    try:
        subjects = await get_subjects(db, teacher_id=teacher_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching subjects for teacher {teacher_id}", e)

    return [SubjectResponse.model_validate(subject) for subject in subjects]


@subject_router.get("/{subject_id}", response_model=SubjectResponse)
async def get_subject(subject_id: int, db: AsyncSession = Depends(get_db)):
    try:
        subject = await get_subject_by_id(db, subject_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching subject {subject_id}", e)

    if not subject:
        logger.warning(f"Subject not found with id: {subject_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    return SubjectResponse.model_validate(subject)


@subject_router.post("", response_model=SubjectResponse, status_code=status.HTTP_201_CREATED)
async def create_subject_endpoint(subject: SubjectCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a subject.

    - **subject_name**: required
    - **teacher_id**: optional, must reference an existing teacher
    - **description**: optional
    """
    try:
        new_subject = await create_subject(db, subject)
    except SQLAlchemyError as e:
        raise database_error("creating subject", e)

    return SubjectResponse.model_validate(new_subject)


@subject_router.put("/{subject_id}", response_model=SubjectResponse)
async def update_subject_endpoint(subject_id: int, subject_update: SubjectUpdate, db: AsyncSession = Depends(get_db)):
    try:
        updated_subject = await update_subject(db, subject_id, subject_update)
    except SQLAlchemyError as e:
        raise database_error(f"updating subject {subject_id}", e)

    if not updated_subject:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    return SubjectResponse.model_validate(updated_subject)


@subject_router.delete("/{subject_id}")
async def delete_subject_endpoint(subject_id: int, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await delete_subject(db, subject_id)
    except SQLAlchemyError as e:
        raise database_error(f"deleting subject {subject_id}", e)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subject not found")
    return {"message": "Subject deleted successfully", "subject_id": subject_id}
