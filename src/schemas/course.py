"""Course and module schema definitions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Value cannot be empty")
    return value


class CreateCourseRequest(BaseModel):
    name: str
    code: str
    faculty_id: int
    total_registered_students: int = Field(default=0, ge=0)

    strip_text = field_validator("name", "code")(_strip_required)


class CourseInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    faculty_id: int
    total_registered_students: int = 0
    created_by: Optional[int] = None
    created_at: str


class CreateModuleRequest(BaseModel):
    name: str
    code: str
    description: Optional[str] = None
    course_id: int
    lecturer_id: Optional[int] = None

    strip_text = field_validator("name", "code")(_strip_required)


class AssignLecturerRequest(BaseModel):
    lecturer_id: int


class EnrollRequest(BaseModel):
    """Students enroll themselves; a PL names the student explicitly."""

    student_id: Optional[int] = None


class ModuleInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    description: Optional[str] = None
    course_id: int
    lecturer_id: Optional[int] = None
    created_at: str


class EnrollmentInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    module_id: int
    student_id: int
    enrolled_at: str
