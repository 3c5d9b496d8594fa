from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..common.validators import require_non_empty
from ..core.constants import MAX_GRADE, MIN_GRADE, MIN_PASSWORD_LENGTH
from ..core.subjects import invalid_subjects
from .model import Teacher


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str
    name: str
    grade: int
    subjects: List[str]

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        v = require_non_empty(v, "email").lower()
        local, _, domain = v.partition("@")
        if not local or "." not in domain:
            raise ValueError("Email address is not valid")
        return v

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return v

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return require_non_empty(v, "name")

    @field_validator("grade")
    @classmethod
    def _grade(cls, v: int) -> int:
        if v < MIN_GRADE or v > MAX_GRADE:
            raise ValueError(f"Grade must be between {MIN_GRADE} and {MAX_GRADE}")
        return v

    @model_validator(mode="after")
    def _subjects_match_grade(self) -> "RegisterRequest":
        if invalid_subjects(self.grade, self.subjects):
            raise ValueError(f"Invalid subjects for grade {self.grade}")
        return self


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Email and password are required")
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if not v:
            raise ValueError("Email and password are required")
        return v


def teacher_out(teacher: Teacher) -> dict:
    """Public view of a teacher; the password hash never leaves the service."""
    return {
        "id": teacher.teacher_id,
        "email": teacher.email,
        "name": teacher.name,
        "grade": teacher.grade,
        "subjects": list(teacher.subjects),
        "createdAt": teacher.created_at.isoformat() if teacher.created_at else None,
        "updatedAt": teacher.updated_at.isoformat() if teacher.updated_at else None,
    }
