from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ClassCreate(BaseModel):
    class_name: str = Field(..., min_length=1, max_length=100)
    section: Optional[str] = Field(None, max_length=20)


class ClassUpdate(BaseModel):
    class_name: Optional[str] = Field(None, min_length=1, max_length=100)
    section: Optional[str] = Field(None, max_length=20)

    # omitted means "keep", an explicit null would break the NOT NULL column
    @field_validator("class_name")
    @classmethod
    def class_name_not_null(cls, value):
        if value is None:
            raise ValueError("class_name cannot be null")
        return value


class ClassResponse(BaseModel):
    id: int
    class_name: str
    section: Optional[str] = None

    class Config:
        from_attributes = True
