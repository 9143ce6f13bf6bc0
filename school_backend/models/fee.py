from sqlalchemy import Column, Integer, String, Date, Numeric, ForeignKey

from school_backend.database import Base


class FeeType(Base):
    __tablename__ = "fee_types"

    type_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    type_name = Column(String(100), nullable=False, unique=True)


class Fee(Base):
    __tablename__ = "fee"

    fee_id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("student.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(String(20), nullable=False, default="unpaid")
    type_id = Column(Integer, ForeignKey("fee_types.type_id"), nullable=True)
