import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from school_backend.crud.attendance import (
    get_attendance_records,
    get_attendance_by_id,
    create_attendance,
    update_attendance,
    delete_attendance
)
from school_backend.dependencies import get_db
from school_backend.schemas.attendance import AttendanceCreate, AttendanceResponse, AttendanceUpdate
from school_backend.utils.http_errors import database_error

# Setup logging
logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/attendance", tags=["attendance"])


@router.get("", response_model=List[AttendanceResponse])
async def list_attendance(
        class_id: Optional[int] = Query(None, description="Filter by class"),
        student_id: Optional[int] = Query(None, description="Filter by student"),
        on_date: Optional[date] = Query(None, alias="date", description="Filter by day (YYYY-MM-DD)"),
        db: AsyncSession = Depends(get_db)
):
    """
    Get attendance records, newest day first.

    - **class_id**: only this class
    - **student_id**: only this student
    - **date**: only this day
    """
    logger.info(f"Fetching attendance for class: {class_id}, student: {student_id}, date: {on_date}")
    try:
        records = await get_attendance_records(db, class_id=class_id, student_id=student_id, on_date=on_date)
    except SQLAlchemyError as e:
        raise database_error("fetching attendance", e)

    if not records:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No attendance records found")
    return [AttendanceResponse.model_validate(record) for record in records]


@router.get("/student/{student_id}", response_model=List[AttendanceResponse])
async def list_student_attendance(student_id: int, db: AsyncSession = Depends(get_db)):
    try:
        records = await get_attendance_records(db, student_id=student_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching attendance for student {student_id}", e)

    return [AttendanceResponse.model_validate(record) for record in records]


@router.get("/{attendance_id}", response_model=AttendanceResponse)
async def get_attendance(attendance_id: int, db: AsyncSession = Depends(get_db)):
    try:
        record = await get_attendance_by_id(db, attendance_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching attendance {attendance_id}", e)

    if not record:
        logger.warning(f"Attendance record not found with id: {attendance_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance record not found")
    return AttendanceResponse.model_validate(record)


@router.post("", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
async def mark_attendance(attendance: AttendanceCreate, db: AsyncSession = Depends(get_db)):
    """
    Record attendance for a student.

    - **status**: present, absent, late or leave
    """
    try:
        record = await create_attendance(db, attendance)
    except SQLAlchemyError as e:
        raise database_error(f"recording attendance for student {attendance.student_id}", e)

    return AttendanceResponse.model_validate(record)


@router.put("/{attendance_id}", response_model=AttendanceResponse)
async def update_attendance_endpoint(
        attendance_id: int,
        attendance_update: AttendanceUpdate,
        db: AsyncSession = Depends(get_db)
):
    try:
        record = await update_attendance(db, attendance_id, attendance_update)
    except SQLAlchemyError as e:
        raise database_error(f"updating attendance {attendance_id}", e)

    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance record not found")
    return AttendanceResponse.model_validate(record)


@router.delete("/{attendance_id}")
async def delete_attendance_endpoint(attendance_id: int, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await delete_attendance(db, attendance_id)
    except SQLAlchemyError as e:
        raise database_error(f"deleting attendance {attendance_id}", e)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Attendance record not found")
    return {"message": "Attendance record deleted successfully", "id": attendance_id}
