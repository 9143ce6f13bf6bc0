from datetime import date
from typing import Optional, List

from pydantic import BaseModel, EmailStr, Field, field_validator


class StudentBase(BaseModel):
    father_name: Optional[str] = Field(None, max_length=255)
    father_cnic: Optional[str] = Field(None, max_length=20)
    mother_name: Optional[str] = Field(None, max_length=255)
    mother_cnic: Optional[str] = Field(None, max_length=20)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=255)
    roll_no: Optional[str] = Field(None, max_length=50)
    class_id: Optional[int] = None
    fee_id: Optional[int] = None
    profile_pic: Optional[str] = Field(None, max_length=500)
    admission_date: Optional[date] = None

    # HTML forms send "" for untouched inputs
    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class StudentCreate(StudentBase):
    name: str = Field(..., min_length=1, max_length=255)


class StudentUpdate(StudentBase):
    """Schema for updating a student; only fields that were sent are applied"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)


class StudentResponse(BaseModel):
    id: int
    name: str
    father_name: Optional[str] = None
    father_cnic: Optional[str] = None
    mother_name: Optional[str] = None
    mother_cnic: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    roll_no: Optional[str] = None
    class_id: Optional[int] = None
    fee_id: Optional[int] = None
    profile_pic: Optional[str] = None
    admission_date: Optional[date] = None

    class Config:
        from_attributes = True


class PaginatedStudentResponse(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int
    students: List[StudentResponse]


class StudentFilter(BaseModel):
    class_id: Optional[int] = None
    search: Optional[str] = None
