"""Monitoring, activity log, and student self-view schema definitions."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProgramMonitoring(BaseModel):
    success: bool = True
    avg_attendance: float = 0.0
    curriculum_coverage: float = 0.0
    student_satisfaction: float = 0.0
    report_completion_rate: float = 0.0
    lecturer_performance: Dict[int, float] = Field(default_factory=dict)


class AttendanceMonitoring(BaseModel):
    success: bool = True
    avg_attendance: float = 0.0
    report_count: int = 0


class LecturerMonitoring(BaseModel):
    success: bool = True
    avg_attendance: float = 0.0
    student_engagement: float = 0.0
    report_count: int = 0


class CreateLogRequest(BaseModel):
    action: str

    @field_validator("action")
    @classmethod
    def strip_action(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Action cannot be empty")
        return value


class MonitoringLogInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    action: str
    created_at: str


class StudentAttendanceRow(BaseModel):
    report_id: int
    week: Optional[int] = None
    lecture_date: Optional[str] = None
    course_code: Optional[str] = None
    course_name: Optional[str] = None
    topic_taught: Optional[str] = None
    students_present: int
    total_students: int
    attendance_rate: float


class ModuleProgress(BaseModel):
    module_id: int
    module_name: str
    module_code: str
    reports_delivered: int
    topics_covered: int
    avg_attendance: float
