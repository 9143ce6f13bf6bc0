from pydantic import BaseModel, Field


class TeacherCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class TeacherUpdate(TeacherCreate):
    pass


class TeacherResponse(BaseModel):
    teacher_id: int
    name: str

    class Config:
        from_attributes = True
