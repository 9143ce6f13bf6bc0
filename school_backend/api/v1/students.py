import logging
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, status, Query, UploadFile, File, Form
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError

from school_backend.dependencies import get_db, get_uploader
from school_backend.crud.student import (
    get_students,
    get_student_by_id,
    get_students_by_class,
    create_student,
    update_student,
    delete_student
)
from school_backend.schemas.student_schema import (
    PaginatedStudentResponse,
    StudentCreate,
    StudentFilter,
    StudentResponse,
    StudentUpdate
)
from school_backend.services.media_upload import MediaUploader
from school_backend.utils.http_errors import database_error
from school_backend.utils.image_helper import upload_image

# Setup logger
logger = logging.getLogger(__name__)

student_router = APIRouter(prefix="/api/student", tags=["students"])


def _has_file(upload: Optional[UploadFile]) -> bool:
    # browsers send an empty file part when nothing was picked
    return upload is not None and bool(upload.filename)


@student_router.get("", response_model=PaginatedStudentResponse)
async def list_students(
        page: int = Query(1, ge=1, description="Page number"),
        limit: int = Query(10, ge=1, le=100, description="Items per page"),
        class_id: Optional[int] = Query(None, description="Filter by class"),
        search: Optional[str] = Query(None, description="Search by name, roll number, phone or email"),
        db: AsyncSession = Depends(get_db)
):
    """
    Get students, paginated.

    - **page**: Page number (default: 1)
    - **limit**: Items per page (default: 10, max: 100)
    - **class_id**: Filter by class
    - **search**: Search in name, roll number, phone or email
    """
    logger.info(f"Fetching students page: {page}, limit: {limit}, class_id: {class_id}, search: {search}")

    skip = (page - 1) * limit
    filters = StudentFilter(class_id=class_id, search=search)

    try:
        students_result, total = await get_students(db, skip=skip, limit=limit, filters=filters)
    except SQLAlchemyError as e:
        raise database_error("fetching students", e)

    if total == 0:
        logger.warning("No students found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No students found"
        )

    # Calculate total pages
    total_pages = (total + limit - 1) // limit

    logger.info(f"Returned {len(students_result)} students, total: {total}, pages: {total_pages}")

    return PaginatedStudentResponse(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        students=[StudentResponse.model_validate(student) for student in students_result]
    )


@student_router.get("/class/{class_id}", response_model=List[StudentResponse])
async def list_students_of_class(class_id: int, db: AsyncSession = Depends(get_db)):
    """Get every student enrolled in a class"""
    logger.info(f"Fetching students for class: {class_id}")
    try:
        students = await get_students_by_class(db, class_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching students for class {class_id}", e)

    return [StudentResponse.model_validate(student) for student in students]


@student_router.get("/{student_id}", response_model=StudentResponse)
async def get_student(student_id: int, db: AsyncSession = Depends(get_db)):
    try:
        student = await get_student_by_id(db, student_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching student {student_id}", e)

    if not student:
        logger.warning(f"Student not found with id: {student_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found"
        )
    return StudentResponse.model_validate(student)


@student_router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student_endpoint(
        name: str = Form(...),
        father_name: Optional[str] = Form(None),
        father_cnic: Optional[str] = Form(None),
        mother_name: Optional[str] = Form(None),
        mother_cnic: Optional[str] = Form(None),
        phone: Optional[str] = Form(None),
        email: Optional[str] = Form(None),
        address: Optional[str] = Form(None),
        roll_no: Optional[str] = Form(None),
        class_id: Optional[str] = Form(None),
        fee_id: Optional[str] = Form(None),
        admission_date: Optional[str] = Form(None),
        profile_pic_url: Optional[str] = Form(None, description="Already hosted picture URL"),
        profile_pic: Optional[UploadFile] = File(None, description="Profile picture to upload"),
        db: AsyncSession = Depends(get_db),
        uploader: MediaUploader = Depends(get_uploader)
):
    """
    Register a new student.

    The optional **profile_pic** file is uploaded to the media host first and
    the returned URL is stored on the student. Without a file,
    **profile_pic_url** is stored as given.
    """
    try:
        student = StudentCreate(
            name=name,
            father_name=father_name,
            father_cnic=father_cnic,
            mother_name=mother_name,
            mother_cnic=mother_cnic,
            phone=phone,
            email=email,
            address=address,
            roll_no=roll_no,
            class_id=class_id,
            fee_id=fee_id,
            admission_date=admission_date,
            profile_pic=profile_pic_url
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    logger.info(f"Starting student registration: {student.name}")

    if _has_file(profile_pic):
        student.profile_pic = await upload_image(profile_pic, uploader)

    try:
        new_student = await create_student(db, student)
    except SQLAlchemyError as e:
        raise database_error(f"registering student {student.name}", e)

    logger.info(f"Student registered successfully: {new_student.name} (ID: {new_student.id})")
    return StudentResponse.model_validate(new_student)


@student_router.put("/{student_id}", response_model=StudentResponse)
async def update_student_endpoint(
        student_id: int,
        name: Optional[str] = Form(None),
        father_name: Optional[str] = Form(None),
        father_cnic: Optional[str] = Form(None),
        mother_name: Optional[str] = Form(None),
        mother_cnic: Optional[str] = Form(None),
        phone: Optional[str] = Form(None),
        email: Optional[str] = Form(None),
        address: Optional[str] = Form(None),
        roll_no: Optional[str] = Form(None),
        class_id: Optional[str] = Form(None),
        fee_id: Optional[str] = Form(None),
        admission_date: Optional[str] = Form(None),
        profile_pic_url: Optional[str] = Form(None),
        profile_pic: Optional[UploadFile] = File(None),
        db: AsyncSession = Depends(get_db),
        uploader: MediaUploader = Depends(get_uploader)
):
    """
    Update student information.

    - **student_id**: ID of student to update
    - only the form fields that were sent are changed
    - a new **profile_pic** file replaces the stored picture URL
    """
    submitted = {
        "name": name,
        "father_name": father_name,
        "father_cnic": father_cnic,
        "mother_name": mother_name,
        "mother_cnic": mother_cnic,
        "phone": phone,
        "email": email,
        "address": address,
        "roll_no": roll_no,
        "class_id": class_id,
        "fee_id": fee_id,
        "admission_date": admission_date,
        "profile_pic": profile_pic_url,
    }
    try:
        student_update = StudentUpdate(**{key: value for key, value in submitted.items() if value is not None})
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    logger.info(f"Updating student: {student_id}")

    try:
        student = await get_student_by_id(db, student_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching student {student_id}", e)

    if not student:
        logger.warning(f"Student not found with id: {student_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found"
        )

    if _has_file(profile_pic):
        student_update.profile_pic = await upload_image(profile_pic, uploader)

    try:
        updated_student = await update_student(db, student_id, student_update)
    except SQLAlchemyError as e:
        raise database_error(f"updating student {student_id}", e)

    if not updated_student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found"
        )

    logger.info(f"Successfully updated student: {student_id}")
    return StudentResponse.model_validate(updated_student)


@student_router.delete("/{student_id}")
async def delete_student_endpoint(student_id: int, db: AsyncSession = Depends(get_db)):
    logger.info(f"Deleting student: {student_id}")
    try:
        deleted = await delete_student(db, student_id)
    except IntegrityError as e:
        logger.error(f"Student {student_id} is still referenced: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student still has fees, attendance or pictures attached"
        )
    except SQLAlchemyError as e:
        raise database_error(f"deleting student {student_id}", e)

    if not deleted:
        logger.warning(f"Student not found with id: {student_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found"
        )
    return {"message": "Student deleted successfully", "id": student_id}
