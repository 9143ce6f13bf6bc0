from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class FeeStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"
    PARTIAL = "partial"
    OVERDUE = "overdue"


class FeeTypeCreate(BaseModel):
    type_name: str = Field(..., min_length=1, max_length=100)


class FeeTypeResponse(BaseModel):
    type_id: int
    type_name: str

    class Config:
        from_attributes = True


class FeeCreate(BaseModel):
    student_id: int
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    due_date: date
    status: FeeStatus = FeeStatus.UNPAID
    type_id: Optional[int] = None

    class Config:
        use_enum_values = True


class FeeUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    due_date: Optional[date] = None
    status: Optional[FeeStatus] = None
    type_id: Optional[int] = None

    class Config:
        use_enum_values = True


class FeeResponse(BaseModel):
    fee_id: int
    student_id: int
    amount: Decimal
    due_date: date
    status: str
    type_id: Optional[int] = None

    class Config:
        from_attributes = True
