import logging
from typing import Optional, List

from sqlalchemy import and_, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from school_backend.models.fee import Fee, FeeType
from school_backend.schemas.fee_schema import FeeCreate, FeeTypeCreate, FeeUpdate

# Setup logger
logger = logging.getLogger(__name__)


async def get_fee_types(db: AsyncSession) -> List[FeeType]:
    result = await db.execute(select(FeeType).order_by(FeeType.type_name))
    return result.scalars().all()


async def get_fee_type_by_name(db: AsyncSession, type_name: str) -> Optional[FeeType]:
    result = await db.execute(select(FeeType).where(FeeType.type_name == type_name))
    return result.scalar_one_or_none()


async def create_fee_type(db: AsyncSession, fee_type: FeeTypeCreate) -> FeeType:
    try:
        logger.info(f"Creating fee type: {fee_type.type_name}")
        db_fee_type = FeeType(type_name=fee_type.type_name)
        db.add(db_fee_type)
        await db.commit()
        await db.refresh(db_fee_type)
        return db_fee_type

    except SQLAlchemyError as e:
        logger.error(f"Database error creating fee type {fee_type.type_name}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def delete_fee_type(db: AsyncSession, type_id: int) -> bool:
    try:
        result = await db.execute(delete(FeeType).where(FeeType.type_id == type_id))
        await db.commit()
        return result.rowcount > 0

    except SQLAlchemyError as e:
        logger.error(f"Database error deleting fee type {type_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def get_fees(
        db: AsyncSession,
        status: Optional[str] = None,
        student_id: Optional[int] = None
) -> List[Fee]:
    """
    Get fees, optionally narrowed down by status and/or student.

    Args:
        db: Database session
        status: Fee status to filter on
        student_id: Student whose fees are wanted

    Returns:
        List of Fee instances ordered by due date
    """
    conditions = []
    if status is not None:
        conditions.append(Fee.status == status)
    if student_id is not None:
        conditions.append(Fee.student_id == student_id)

    query = select(Fee)
    if conditions:
        query = query.where(and_(*conditions))

    logger.debug(f"Querying fees with status={status}, student_id={student_id}")
    result = await db.execute(query.order_by(Fee.due_date, Fee.fee_id))
    return result.scalars().all()


async def get_fee_by_id(db: AsyncSession, fee_id: int) -> Optional[Fee]:
    result = await db.execute(select(Fee).where(Fee.fee_id == fee_id))
    return result.scalar_one_or_none()


async def create_fee(db: AsyncSession, fee: FeeCreate) -> Fee:
    """
    Create a fee record for a student.

    Raises:
        SQLAlchemyError: If database operation fails (unknown student or fee type included)
    """
    try:
        logger.info(f"Creating fee of {fee.amount} for student {fee.student_id}")

        db_fee = Fee(**fee.model_dump())
        db.add(db_fee)
        await db.commit()
        await db.refresh(db_fee)

        logger.info(f"Fee created successfully (ID: {db_fee.fee_id})")
        return db_fee

    except SQLAlchemyError as e:
        logger.error(f"Database error creating fee for student {fee.student_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def update_fee(db: AsyncSession, fee_id: int, fee_update: FeeUpdate) -> Optional[Fee]:
    try:
        db_fee = await get_fee_by_id(db, fee_id)
        if not db_fee:
            logger.warning(f"Cannot update fee: not found with ID: {fee_id}")
            return None

        for field, value in fee_update.model_dump(exclude_unset=True).items():
            setattr(db_fee, field, value)

        await db.commit()
        await db.refresh(db_fee)

        logger.info(f"Fee updated for ID: {fee_id}")
        return db_fee

    except SQLAlchemyError as e:
        logger.error(f"Database error updating fee {fee_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def delete_fee(db: AsyncSession, fee_id: int) -> bool:
    try:
        result = await db.execute(delete(Fee).where(Fee.fee_id == fee_id))
        await db.commit()
        return result.rowcount > 0

    except SQLAlchemyError as e:
        logger.error(f"Database error deleting fee {fee_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise
