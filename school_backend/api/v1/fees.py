import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from school_backend.crud.fee import (
    get_fee_types,
    get_fee_type_by_name,
    create_fee_type,
    delete_fee_type,
    get_fees,
    get_fee_by_id,
    create_fee,
    update_fee,
    delete_fee
)
from school_backend.dependencies import get_db
from school_backend.schemas.fee_schema import (
    FeeCreate,
    FeeResponse,
    FeeStatus,
    FeeTypeCreate,
    FeeTypeResponse,
    FeeUpdate
)
from school_backend.utils.http_errors import database_error

# Setup logger
logger = logging.getLogger(__name__)

fee_router = APIRouter(prefix="/api/fee", tags=["fees"])
fee_type_router = APIRouter(prefix="/api/fee-types", tags=["fees"])


@fee_type_router.get("", response_model=List[FeeTypeResponse])
async def list_fee_types(db: AsyncSession = Depends(get_db)):
    try:
        fee_types = await get_fee_types(db)
    except SQLAlchemyError as e:
        raise database_error("fetching fee types", e)

    if not fee_types:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No fee types found")
    return [FeeTypeResponse.model_validate(fee_type) for fee_type in fee_types]


@fee_type_router.post("", response_model=FeeTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_fee_type_endpoint(fee_type: FeeTypeCreate, db: AsyncSession = Depends(get_db)):
    try:
        if await get_fee_type_by_name(db, fee_type.type_name):
            logger.warning(f"Fee type already exists: {fee_type.type_name}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Fee type with this name already exists"
            )
        new_fee_type = await create_fee_type(db, fee_type)
    except SQLAlchemyError as e:
        raise database_error("creating fee type", e)

    return FeeTypeResponse.model_validate(new_fee_type)


@fee_type_router.delete("/{type_id}")
async def delete_fee_type_endpoint(type_id: int, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await delete_fee_type(db, type_id)
    except SQLAlchemyError as e:
        raise database_error(f"deleting fee type {type_id}", e)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fee type not found")
    return {"message": "Fee type deleted successfully", "type_id": type_id}


@fee_router.get("", response_model=List[FeeResponse])
async def list_fees(
        status_filter: Optional[FeeStatus] = Query(None, alias="status", description="Filter by fee status"),
        student_id: Optional[int] = Query(None, description="Filter by student"),
        db: AsyncSession = Depends(get_db)
):
    """
    Get fees.

    - **status**: paid, unpaid, partial or overdue
    - **student_id**: only this student's fees
    """
    logger.info(f"Fetching fees with status: {status_filter}, student_id: {student_id}")
    try:
        fees = await get_fees(
            db,
            status=status_filter.value if status_filter else None,
            student_id=student_id
        )
    except SQLAlchemyError as e:
        raise database_error("fetching fees", e)

    if not fees:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No fees found")
    return [FeeResponse.model_validate(fee) for fee in fees]


@fee_router.get("/student/{student_id}", response_model=List[FeeResponse])
async def list_student_fees(student_id: int, db: AsyncSession = Depends(get_db)):
    try:
        fees = await get_fees(db, student_id=student_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching fees for student {student_id}", e)

    return [FeeResponse.model_validate(fee) for fee in fees]


@fee_router.get("/{fee_id}", response_model=FeeResponse)
async def get_fee(fee_id: int, db: AsyncSession = Depends(get_db)):
    try:
        fee = await get_fee_by_id(db, fee_id)
    except SQLAlchemyError as e:
        raise database_error(f"fetching fee {fee_id}", e)

    if not fee:
        logger.warning(f"Fee not found with id: {fee_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fee not found")
    return FeeResponse.model_validate(fee)


@fee_router.post("", response_model=FeeResponse, status_code=status.HTTP_201_CREATED)
async def create_fee_endpoint(fee: FeeCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a fee for a student.

    - **student_id**, **amount**, **due_date** are required
    - **status** defaults to "unpaid"
    - **type_id** optionally links a fee type
    """
    try:
        new_fee = await create_fee(db, fee)
    except SQLAlchemyError as e:
        raise database_error(f"creating fee for student {fee.student_id}", e)

    return FeeResponse.model_validate(new_fee)


@fee_router.put("/{fee_id}", response_model=FeeResponse)
async def update_fee_endpoint(fee_id: int, fee_update: FeeUpdate, db: AsyncSession = Depends(get_db)):
    try:
        updated_fee = await update_fee(db, fee_id, fee_update)
    except SQLAlchemyError as e:
        raise database_error(f"updating fee {fee_id}", e)

    if not updated_fee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fee not found")
    return FeeResponse.model_validate(updated_fee)


@fee_router.delete("/{fee_id}")
async def delete_fee_endpoint(fee_id: int, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await delete_fee(db, fee_id)
    except SQLAlchemyError as e:
        raise database_error(f"deleting fee {fee_id}", e)

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fee not found")
    return {"message": "Fee deleted successfully", "fee_id": fee_id}
