from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class CreateClassRequest(BaseModel):
    name: str
    module_id: Optional[int] = None
    course_id: Optional[int] = None
    venue: Optional[str] = None
    scheduled_time: Optional[str] = None
    lecturer_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Class name cannot be empty")
        return value

    @model_validator(mode="after")
    def check_parent(self) -> "CreateClassRequest":
        if self.module_id is None and self.course_id is None:
            raise ValueError("module_id or course_id is required")
        return self


class ClassInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    module_id: Optional[int] = None
    course_id: Optional[int] = None
    venue: Optional[str] = None
    scheduled_time: Optional[str] = None
    lecturer_id: Optional[int] = None
    created_at: str
