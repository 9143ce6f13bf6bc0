import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    LEAVE = "leave"


class AttendanceCreate(BaseModel):
    student_id: int
    class_id: int
    date: datetime.date
    status: AttendanceStatus
    remarks: Optional[str] = Field(None, max_length=255)

    class Config:
        use_enum_values = True


class AttendanceUpdate(BaseModel):
    class_id: Optional[int] = None
    date: Optional[datetime.date] = None
    status: Optional[AttendanceStatus] = None
    remarks: Optional[str] = Field(None, max_length=255)

    class Config:
        use_enum_values = True


class AttendanceResponse(BaseModel):
    id: int
    student_id: int
    class_id: int
    date: datetime.date
    status: str
    remarks: Optional[str] = None

    class Config:
        from_attributes = True
