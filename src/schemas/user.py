"""User, role, and authentication schema definitions."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

import pytz
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Role(str, Enum):
    """The four faculty roles. Parsing is case-insensitive."""

    STUDENT = "student"
    LECTURER = "lecturer"
    PRL = "prl"
    PL = "pl"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["Role"]:
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


def _normalize_role(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class User(BaseModel):
    """Internal user representation, including the password hash."""

    id: Optional[int] = None
    email: Optional[str] = None
    student_number: Optional[str] = None
    password_hash: str
    role: Role
    name: str
    created_at: str = Field(
        default_factory=lambda: datetime.now(pytz.utc).isoformat()
    )


class UserInfo(BaseModel):
    """Public view of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: Optional[str] = None
    student_number: Optional[str] = None
    role: Role
    name: str


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: str = Field(min_length=1)
    role: Role
    name: str = Field(min_length=1)
    student_number: Optional[str] = None

    normalize_role = field_validator("role", mode="before")(_normalize_role)
    blank_to_none = field_validator("email", "student_number", mode="before")(
        _blank_to_none
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name cannot be empty")
        return value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value else value

    @model_validator(mode="after")
    def check_identifier(self) -> "RegisterRequest":
        """Students register with a student number, staff with an email."""
        if self.role == Role.STUDENT and not self.student_number:
            raise ValueError("Student number is required for students")
        if self.role != Role.STUDENT and not self.email:
            raise ValueError("Email is required")
        return self


class LoginRequest(BaseModel):
    role: Role
    email: Optional[str] = None
    student_number: Optional[str] = None
    password: str = Field(min_length=1)

    normalize_role = field_validator("role", mode="before")(_normalize_role)
    blank_to_none = field_validator("email", "student_number", mode="before")(
        _blank_to_none
    )

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: Optional[str]) -> Optional[str]:
        return value.lower() if value else value

    @model_validator(mode="after")
    def check_identifier(self) -> "LoginRequest":
        if not self.email and not self.student_number:
            raise ValueError("Email or student number is required")
        return self


class TokenClaims(BaseModel):
    """Decoded payload of an identity token."""

    id: int
    role: Role
    name: str
    email: Optional[str] = None
    student_number: Optional[str] = None
    exp: Optional[int] = None

    normalize_role = field_validator("role", mode="before")(_normalize_role)


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: UserInfo


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "Registration successful"
    id: int
