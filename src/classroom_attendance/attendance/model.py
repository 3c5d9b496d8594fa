from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class NewAttendance:
    """One entry of a bulk submission, already validated."""

    student_id: int
    subject: str
    status: AttendanceStatus
    att_date: date


@dataclass(frozen=True)
class AttendanceRow:
    """Read model: an attendance record joined with its student."""

    attendance_id: int
    student_id: int
    teacher_id: int
    subject: str
    status: AttendanceStatus
    att_date: date
    student_name: str
    student_nis: str
    student_grade: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceFilter:
    """Optional filters; date bounds are inclusive."""

    subject: Optional[str] = None
    student_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
