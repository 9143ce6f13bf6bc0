from pydantic import BaseModel


class PictureResponse(BaseModel):
    id: int
    student_id: int
    image_url: str

    class Config:
        from_attributes = True
