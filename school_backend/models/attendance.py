from sqlalchemy import Column, Integer, String, Date, ForeignKey

from school_backend.database import Base


class AttendanceRecord(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("student.id"), nullable=False, index=True)
    class_id = Column(Integer, ForeignKey("class.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False)
    remarks = Column(String(255), nullable=True)
