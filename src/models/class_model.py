from sqlalchemy import Column, ForeignKey, Integer, String
from .base import Base


class ClassModel(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    module_id = Column(Integer, ForeignKey("modules.id"), index=True, nullable=True)
    course_id = Column(Integer, ForeignKey("courses.id"), index=True, nullable=True)
    venue = Column(String, nullable=True)
    scheduled_time = Column(String, nullable=True)
    lecturer_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=True)
    created_at = Column(String, nullable=False)
