from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from ..common.validators import require_nis, require_non_empty
from .model import Student


class StudentRequest(BaseModel):
    """Body of both create and update: the roster fields a teacher edits."""

    model_config = ConfigDict(extra="forbid")

    name: str
    nis: str

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return require_non_empty(v, "Student name")

    @field_validator("nis")
    @classmethod
    def _nis(cls, v: str) -> str:
        return require_nis(v)


def student_out(student: Student) -> dict:
    return {
        "id": student.student_id,
        "name": student.name,
        "nis": student.nis,
        "grade": student.grade,
        "teacherId": student.teacher_id,
        "createdAt": student.created_at.isoformat() if student.created_at else None,
        "updatedAt": student.updated_at.isoformat() if student.updated_at else None,
    }
