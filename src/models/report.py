"""Lecture report database model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from .base import Base


class ReportModel(Base):
    """A lecturer's report on one delivered lecture."""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    faculty_name = Column(String, nullable=True)
    class_name = Column(String, nullable=True)
    week = Column(Integer, nullable=True)
    lecture_date = Column(String, nullable=True)
    course_name = Column(String, nullable=True)
    course_code = Column(String, index=True, nullable=True)
    lecturer_name = Column(String, nullable=True)
    lecturer_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    students_present = Column(Integer, nullable=False, default=0)
    # Resolved once at creation, never recomputed
    total_students = Column(Integer, nullable=False, default=0)
    venue = Column(String, nullable=True)
    scheduled_time = Column(String, nullable=True)
    topic_taught = Column(Text, nullable=True)
    learning_outcomes = Column(Text, nullable=True)
    recommendations = Column(Text, nullable=True)
    prl_feedback = Column(Text, nullable=True)
    module_id = Column(Integer, ForeignKey("modules.id"), index=True, nullable=True)
    class_id = Column(Integer, ForeignKey("classes.id"), index=True, nullable=True)
    created_at = Column(String, nullable=False)
