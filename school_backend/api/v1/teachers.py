import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from school_backend.crud.teacher import get_teachers, get_teacher_by_id, create_teacher, update_teacher, delete_teacher
from school_backend.dependencies import get_db
from school_backend.schemas.teacher_schema import TeacherCreate, TeacherResponse, TeacherUpdate
from school_backend.utils.http_errors import database_error

logger = logging.getLogger(__name__)

teacher_router = APIRouter(prefix="/api/teacher", tags=["teachers"])


@teacher_router.get("", response_model=List[TeacherResponse])
async def list_teachers(db: AsyncSession = Depends(get_db)):
    try:
        teachers = await get_teachers(db)
    except SQLAlchemyError as e:
        raise database_error("fetching teachers", e)

    if not teachers:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No teachers found")
    return [TeacherResponse.model_validate(teacher) for teacher in teachers]


@teacher_router.get("/{teacher_id}", response_model=TeacherResponse)
async def get_teacher(teacher_id: int, db: AsyncSession = Depends(get_db)):
    try:
        teacher = await get_teacher_by_id(db, teacher_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching teacher {teacher_id}", e)

    if not teacher:
        logger.warning(f"Teacher not found with id: {teacher_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return TeacherResponse.model_validate(teacher)


@teacher_router.post("", response_model=TeacherResponse, status_code=status.HTTP_201_CREATED)
async def create_teacher_endpoint(teacher: TeacherCreate, db: AsyncSession = Depends(get_db)):
    try:
        new_teacher = await create_teacher(db, teacher)
    except SQLAlchemyError as e:
        raise database_error("creating teacher", e)

    logger.info(f"Teacher created: {new_teacher.name} (ID: {new_teacher.teacher_id})")
    return TeacherResponse.model_validate(new_teacher)


@teacher_router.put("/{teacher_id}", response_model=TeacherResponse)
async def update_teacher_endpoint(teacher_id: int, teacher_update: TeacherUpdate, db: AsyncSession = Depends(get_db)):
    try:
        updated_teacher = await update_teacher(db, teacher_id, teacher_update)
    except SQLAlchemyError as e:
        raise database_error(f"updating teacher {teacher_id}", e)

    if not updated_teacher:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return TeacherResponse.model_validate(updated_teacher)


@teacher_router.delete("/{teacher_id}")
async def delete_teacher_endpoint(teacher_id: int, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await delete_teacher(db, teacher_id)
    except SQLAlchemyError as e:
        raise database_error(f"deleting teacher {teacher_id}", e)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return {"message": "Teacher deleted successfully", "teacher_id": teacher_id}
