from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from .base import Base


class CourseModel(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    code = Column(String, unique=True, index=True, nullable=False)
    faculty_id = Column(Integer, nullable=False)
    total_registered_students = Column(Integer, nullable=False, default=0)
    created_by = Column(Integer, nullable=True)
    created_at = Column(String, nullable=False)

    modules = relationship("ModuleModel", back_populates="course")
