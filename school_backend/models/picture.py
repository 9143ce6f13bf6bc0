from sqlalchemy import Column, Integer, String, ForeignKey

from school_backend.database import Base


class Picture(Base):
    __tablename__ = "pictures"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("student.id"), nullable=False, index=True)
    image_url = Column(String(500), nullable=False)
