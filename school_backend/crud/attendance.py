import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import and_, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from school_backend.models.attendance import AttendanceRecord
from school_backend.schemas.attendance import AttendanceCreate, AttendanceUpdate

logger = logging.getLogger(__name__)


async def get_attendance_records(
        db: AsyncSession,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
        on_date: Optional[date] = None
) -> List[AttendanceRecord]:
    """Get attendance records filtered by class, student and/or day, newest day first"""
    conditions = []
    if class_id is not None:
        conditions.append(AttendanceRecord.class_id == class_id)
    if student_id is not None:
        conditions.append(AttendanceRecord.student_id == student_id)
    if on_date is not None:
        conditions.append(AttendanceRecord.date == on_date)

    query = select(AttendanceRecord)
    if conditions:
        query = query.where(and_(*conditions))

    query = query.order_by(AttendanceRecord.date.desc(), AttendanceRecord.id)
    result = await db.execute(query)
    return result.scalars().all()


async def get_attendance_by_id(db: AsyncSession, attendance_id: int) -> Optional[AttendanceRecord]:
    result = await db.execute(
        select(AttendanceRecord).where(AttendanceRecord.id == attendance_id)
    )
    return result.scalar_one_or_none()


async def create_attendance(db: AsyncSession, attendance: AttendanceCreate) -> AttendanceRecord:
    try:
        logger.info(
            f"Recording attendance for student {attendance.student_id} "
            f"in class {attendance.class_id} on {attendance.date}: {attendance.status}"
        )
        record = AttendanceRecord(**attendance.model_dump())
        db.add(record)
        await db.commit()
        await db.refresh(record)
        return record

    except SQLAlchemyError as e:
        logger.error(f"Database error recording attendance for student {attendance.student_id}: {str(e)}",
                     exc_info=True)
        await db.rollback()
        raise


async def update_attendance(
        db: AsyncSession,
        attendance_id: int,
        attendance_update: AttendanceUpdate
) -> Optional[AttendanceRecord]:
    try:
        record = await get_attendance_by_id(db, attendance_id)
        if not record:
            return None

        for field, value in attendance_update.model_dump(exclude_unset=True).items():
            setattr(record, field, value)

        await db.commit()
        await db.refresh(record)
        return record

    except SQLAlchemyError as e:
        logger.error(f"Database error updating attendance {attendance_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def delete_attendance(db: AsyncSession, attendance_id: int) -> bool:
    try:
        result = await db.execute(delete(AttendanceRecord).where(AttendanceRecord.id == attendance_id))
        await db.commit()
        return result.rowcount > 0

    except SQLAlchemyError as e:
        logger.error(f"Database error deleting attendance {attendance_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise
