from sqlalchemy import Column, Integer, String, Date, ForeignKey

from school_backend.database import Base


class Student(Base):
    __tablename__ = "student"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    father_name = Column(String(255), nullable=True)
    father_cnic = Column(String(20), nullable=True)
    mother_name = Column(String(255), nullable=True)
    mother_cnic = Column(String(20), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(String(255), nullable=True)
    roll_no = Column(String(50), nullable=True)
    class_id = Column(Integer, ForeignKey("class.id"), nullable=True, index=True)
    # fee.student_id points back here, so this side is added after both tables exist
    fee_id = Column(
        Integer,
        ForeignKey("fee.fee_id", use_alter=True, name="fk_student_fee_id"),
        nullable=True
    )
    profile_pic = Column(String(500), nullable=True)
    admission_date = Column(Date, nullable=True)
