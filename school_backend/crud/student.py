import logging
from typing import Optional, Tuple, List

from sqlalchemy import or_, func, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from school_backend.models.student import Student
from school_backend.schemas.student_schema import StudentCreate, StudentFilter, StudentUpdate

logger = logging.getLogger(__name__)


async def get_students(
        db: AsyncSession,
        skip: int = 0,
        limit: int = 10,
        filters: Optional[StudentFilter] = None
) -> Tuple[List[Student], int]:
    """
    Get a page of students and the total number matching the filters
    """
    query = select(Student)

    if filters:
        if filters.class_id is not None:
            query = query.where(Student.class_id == filters.class_id)

        if filters.search:
            search_pattern = f"%{filters.search}%"
            query = query.where(
                or_(
                    Student.name.like(search_pattern),
                    Student.roll_no.like(search_pattern),
                    Student.phone.like(search_pattern),
                    Student.email.like(search_pattern)
                )
            )

    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar()

    # Get paginated results
    query = query.order_by(Student.id).offset(skip).limit(limit)
    result = await db.execute(query)
    students = result.scalars().all()

    return students, total


async def get_student_by_id(db: AsyncSession, student_id: int) -> Optional[Student]:
    result = await db.execute(
        select(Student).where(Student.id == student_id)
    )
    return result.scalar_one_or_none()


async def get_students_by_class(db: AsyncSession, class_id: int) -> List[Student]:
    result = await db.execute(
        select(Student).where(Student.class_id == class_id).order_by(Student.roll_no, Student.id)
    )
    return result.scalars().all()


async def create_student(db: AsyncSession, student: StudentCreate) -> Student:
    """
    Create a new student.

    Args:
        db: Database session
        student: Student creation data, profile_pic already resolved to a URL

    Returns:
        Created Student instance
    """
    try:
        logger.info(f"Creating new student: {student.name}")

        db_student = Student(**student.model_dump())
        db.add(db_student)
        await db.commit()
        await db.refresh(db_student)

        logger.info(f"Student created successfully: {db_student.name} (ID: {db_student.id})")
        return db_student

    except SQLAlchemyError as e:
        logger.error(f"Database error creating student {student.name}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def update_student(
        db: AsyncSession,
        student_id: int,
        student_update: StudentUpdate
) -> Optional[Student]:
    """
    Update student information
    """
    try:
        db_student = await get_student_by_id(db, student_id)
        if not db_student:
            return None

        # Update only provided fields
        update_data = student_update.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_student, field, value)

        await db.commit()
        await db.refresh(db_student)
        return db_student

    except SQLAlchemyError as e:
        logger.error(f"Database error updating student {student_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise


async def delete_student(db: AsyncSession, student_id: int) -> bool:
    try:
        result = await db.execute(delete(Student).where(Student.id == student_id))
        await db.commit()
        return result.rowcount > 0

    except SQLAlchemyError as e:
        logger.error(f"Database error deleting student {student_id}: {str(e)}", exc_info=True)
        await db.rollback()
        raise
