import logging
from typing import Optional, List

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from school_backend.models.subject import Subject
from school_backend.schemas.subject_schema import SubjectCreate, SubjectUpdate

logger = logging.getLogger(__name__)


async def get_subjects(db: AsyncSession, teacher_id: Optional[int] = None) -> List[Subject]:
    """Get all subjects, or only the ones taught by one teacher"""
    query = select(Subject)
    if teacher_id is not None:
        query = query.where(Subject.teacher_id == teacher_id)

    result = await db.execute(query.order_by(Subject.subject_name))
    return result.scalars().all()


async def get_subject_by_id(db: AsyncSession, subject_id: int) -> Optional[Subject]:
    result = await db.execute(select(Subject).where(Subject.subject_id == subject_id))
    return result.scalar_one_or_none()


async def create_subject(db: AsyncSession, subject: SubjectCreate) -> Subject:
    try:
        logger.info(f"Creating subject {subject.subject_name} (teacher: {subject.teacher_id})")
        db_subject = Subject(**subject.model_dump())
        db.add(db_subject)
        await db.commit()
        await db.refresh(db_subject)
        return db_subject

    except SQLAlchemyError as e:
        logger.error(f"Database error creating subject {subject.subject_name}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def update_subject(db: AsyncSession, subject_id: int, subject_update: SubjectUpdate) -> Optional[Subject]:
    try:
        db_subject = await get_subject_by_id(db, subject_id)
        if not db_subject:
            return None

        for field, value in subject_update.model_dump(exclude_unset=True).items():
            setattr(db_subject, field, value)

        await db.commit()
        await db.refresh(db_subject)
        return db_subject

    except SQLAlchemyError as e:
        logger.error(f"Database error updating subject {subject_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def delete_subject(db: AsyncSession, subject_id: int) -> bool:
    try:
        result = await db.execute(delete(Subject).where(Subject.subject_id == subject_id))
        await db.commit()
        return result.rowcount > 0

    except SQLAlchemyError as e:
        logger.error(f"Database error deleting subject {subject_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise
