from sqlalchemy import Column, Integer, String, Text, ForeignKey

from school_backend.database import Base


class Subject(Base):
    __tablename__ = "subject"

    subject_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    subject_name = Column(String(255), nullable=False)
    teacher_id = Column(Integer, ForeignKey("teacher.teacher_id"), nullable=True, index=True)
    description = Column(Text, nullable=True)
