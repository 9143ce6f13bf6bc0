import logging
from typing import Optional, List

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from school_backend.models.teacher import Teacher
from school_backend.schemas.teacher_schema import TeacherCreate, TeacherUpdate

logger = logging.getLogger(__name__)


async def get_teachers(db: AsyncSession) -> List[Teacher]:
    result = await db.execute(select(Teacher).order_by(Teacher.name))
    return result.scalars().all()


async def get_teacher_by_id(db: AsyncSession, teacher_id: int) -> Optional[Teacher]:
    result = await db.execute(select(Teacher).where(Teacher.teacher_id == teacher_id))
    return result.scalar_one_or_none()


async def create_teacher(db: AsyncSession, teacher: TeacherCreate) -> Teacher:
    try:
        logger.info(f"Creating teacher: {teacher.name}")
        db_teacher = Teacher(name=teacher.name)
        db.add(db_teacher)
        await db.commit()
        await db.refresh(db_teacher)
        return db_teacher

    except SQLAlchemyError as e:
        logger.error(f"Database error creating teacher {teacher.name}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def update_teacher(db: AsyncSession, teacher_id: int, teacher_update: TeacherUpdate) -> Optional[Teacher]:
    try:
        db_teacher = await get_teacher_by_id(db, teacher_id)
        if not db_teacher:
            return None

        db_teacher.name = teacher_update.name
        await db.commit()
        await db.refresh(db_teacher)
        return db_teacher

    except SQLAlchemyError as e:
        logger.error(f"Database error updating teacher {teacher_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def delete_teacher(db: AsyncSession, teacher_id: int) -> bool:
    try:
        result = await db.execute(delete(Teacher).where(Teacher.teacher_id == teacher_id))
        await db.commit()
        return result.rowcount > 0

    except SQLAlchemyError as e:
        logger.error(f"Database error deleting teacher {teacher_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise
