import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from school_backend.models.picture import Picture

logger = logging.getLogger(__name__)


async def get_pictures_by_student(db: AsyncSession, student_id: int) -> List[Picture]:
    result = await db.execute(
        select(Picture).where(Picture.student_id == student_id).order_by(Picture.id)
    )
    return result.scalars().all()


async def get_picture_by_id(db: AsyncSession, picture_id: int) -> Optional[Picture]:
    result = await db.execute(select(Picture).where(Picture.id == picture_id))
    return result.scalar_one_or_none()


async def create_picture(db: AsyncSession, student_id: int, image_url: str) -> Picture:
    try:
        logger.info(f"Saving picture for student {student_id}: {image_url}")
        picture = Picture(student_id=student_id, image_url=image_url)
        db.add(picture)
        await db.commit()
        await db.refresh(picture)
        return picture

    except SQLAlchemyError as e:
        logger.error(f"Database error saving picture for student {student_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def delete_picture(db: AsyncSession, picture_id: int) -> bool:
    try:
        result = await db.execute(delete(Picture).where(Picture.id == picture_id))
        await db.commit()
        return result.rowcount > 0

    except SQLAlchemyError as e:
        logger.error(f"Database error deleting picture {picture_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise
