from sqlalchemy import Column, Integer, String

from school_backend.database import Base


class SchoolClass(Base):
    __tablename__ = "class"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    class_name = Column(String(100), nullable=False)
    section = Column(String(20), nullable=True)
