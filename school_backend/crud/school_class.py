import logging
from typing import Optional, List

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from school_backend.models.school_class import SchoolClass
from school_backend.schemas.class_schema import ClassCreate, ClassUpdate

logger = logging.getLogger(__name__)


async def get_classes(db: AsyncSession) -> List[SchoolClass]:
    result = await db.execute(
        select(SchoolClass).order_by(SchoolClass.class_name, SchoolClass.section)
    )
    return result.scalars().all()


async def get_class_by_id(db: AsyncSession, class_id: int) -> Optional[SchoolClass]:
    result = await db.execute(select(SchoolClass).where(SchoolClass.id == class_id))
    return result.scalar_one_or_none()


async def create_class(db: AsyncSession, school_class: ClassCreate) -> SchoolClass:
    try:
        logger.info(f"Creating class {school_class.class_name} ({school_class.section})")
        db_class = SchoolClass(**school_class.model_dump())
        db.add(db_class)
        await db.commit()
        await db.refresh(db_class)
        return db_class

    except SQLAlchemyError as e:
        logger.error(f"Database error creating class {school_class.class_name}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def update_class(db: AsyncSession, class_id: int, class_update: ClassUpdate) -> Optional[SchoolClass]:
    try:
        db_class = await get_class_by_id(db, class_id)
        if not db_class:
            return None

        for field, value in class_update.model_dump(exclude_unset=True).items():
            setattr(db_class, field, value)

        await db.commit()
        await db.refresh(db_class)
        return db_class

    except SQLAlchemyError as e:
        logger.error(f"Database error updating class {class_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def delete_class(db: AsyncSession, class_id: int) -> bool:
    try:
        result = await db.execute(delete(SchoolClass).where(SchoolClass.id == class_id))
        await db.commit()
        return result.rowcount > 0

    except SQLAlchemyError as e:
        logger.error(f"Database error deleting class {class_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise
