from typing import Optional

from pydantic import BaseModel, Field


class SubjectCreate(BaseModel):
    subject_name: str = Field(..., min_length=1, max_length=255)
    teacher_id: Optional[int] = None
    description: Optional[str] = None


class SubjectUpdate(BaseModel):
    subject_name: Optional[str] = Field(None, min_length=1, max_length=255)
    teacher_id: Optional[int] = None
    description: Optional[str] = None


class SubjectResponse(BaseModel):
    subject_id: int
    subject_name: str
    teacher_id: Optional[int] = None
    description: Optional[str] = None

    class Config:
        from_attributes = True
