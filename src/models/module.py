from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class ModuleModel(Base):
    __tablename__ = "modules"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    code = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    course_id = Column(Integer, ForeignKey("courses.id"), index=True, nullable=False)
    lecturer_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=True)
    created_at = Column(String, nullable=False)

    course = relationship("CourseModel", back_populates="modules")
    enrollments = relationship(
        "EnrollmentModel",
        back_populates="module",
        cascade="all, delete-orphan",
    )
