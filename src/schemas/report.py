"""Lecture report schema definitions.

Field aliases accept the legacy form names used by the first dashboard
(``week_of_reporting``, ``actual_students_present`` and so on).
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class CreateReportRequest(BaseModel):
    """Body of a new lecture report.

    ``lecturer_id`` and ``total_students`` are deliberately absent: the former
    comes from the caller's token, the latter is resolved from enrollment and
    course data. Unknown body keys are ignored.
    """

    faculty_name: Optional[str] = None
    class_name: Optional[str] = None
    week: Optional[int] = Field(
        default=None,
        ge=1,
        validation_alias=AliasChoices("week", "week_of_reporting"),
    )
    lecture_date: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("lecture_date", "date_of_lecture"),
    )
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    lecturer_name: Optional[str] = None
    students_present: int = Field(
        ge=0,
        validation_alias=AliasChoices("students_present", "actual_students_present"),
    )
    venue: Optional[str] = None
    scheduled_time: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("scheduled_time", "scheduled_lecture_time"),
    )
    topic_taught: Optional[str] = None
    learning_outcomes: Optional[str] = None
    recommendations: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("recommendations", "lecturer_recommendations"),
    )
    module_id: Optional[int] = None
    class_id: Optional[int] = None


class FeedbackRequest(BaseModel):
    prl_feedback: str

    @field_validator("prl_feedback")
    @classmethod
    def strip_feedback(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Feedback cannot be empty")
        return value


class ReportInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    faculty_name: Optional[str] = None
    class_name: Optional[str] = None
    week: Optional[int] = None
    lecture_date: Optional[str] = None
    course_name: Optional[str] = None
    course_code: Optional[str] = None
    lecturer_name: Optional[str] = None
    lecturer_id: int
    students_present: int
    total_students: int
    venue: Optional[str] = None
    scheduled_time: Optional[str] = None
    topic_taught: Optional[str] = None
    learning_outcomes: Optional[str] = None
    recommendations: Optional[str] = None
    prl_feedback: Optional[str] = None
    module_id: Optional[int] = None
    class_id: Optional[int] = None
    created_at: str
