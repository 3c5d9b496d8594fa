from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..common.datetime_utils import parse_iso_day
from ..core.enums import AttendanceStatus
from .model import AttendanceRow

_REQUIRED_ENTRY_FIELDS = ("studentId", "subject", "status")


class AttendanceEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    student_id: int = Field(alias="studentId")
    subject: str
    status: AttendanceStatus
    att_date: Optional[date] = Field(default=None, alias="date")

    @model_validator(mode="before")
    @classmethod
    def _complete(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("Attendance entry must be an object")
        if any(data.get(k) in (None, "") for k in _REQUIRED_ENTRY_FIELDS):
            raise ValueError("Attendance entry is incomplete")
        return data

    @field_validator("subject")
    @classmethod
    def _subject(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Attendance entry is incomplete")
        return v

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> Any:
        if not isinstance(v, str) or v.upper() not in AttendanceStatus.__members__:
            raise ValueError("Invalid attendance status")
        return v.upper()

    @field_validator("att_date", mode="before")
    @classmethod
    def _date(cls, v: Any) -> Any:
        # Clients may send a full ISO timestamp; only the calendar day is stored.
        if isinstance(v, str) and v:
            try:
                return parse_iso_day(v)
            except ValueError:
                raise ValueError("date must be in YYYY-MM-DD format")
        return v


class BulkAttendanceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entries: List[AttendanceEntry] = Field(alias="attendanceData")

    @field_validator("entries")
    @classmethod
    def _not_empty(cls, v: List[AttendanceEntry]) -> List[AttendanceEntry]:
        if not v:
            raise ValueError("Attendance data must contain at least one entry")
        return v


def attendance_out(row: AttendanceRow) -> dict:
    return {
        "id": row.attendance_id,
        "studentId": row.student_id,
        "teacherId": row.teacher_id,
        "subject": row.subject,
        "status": row.status.value,
        "date": row.att_date.isoformat(),
        "createdAt": row.created_at.isoformat() if row.created_at else None,
        "updatedAt": row.updated_at.isoformat() if row.updated_at else None,
        "student": {
            "id": row.student_id,
            "name": row.student_name,
            "nis": row.student_nis,
            "grade": row.student_grade,
        },
    }
