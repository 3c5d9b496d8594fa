from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status stored per student, subject and date."""

    PRESENT = "PRESENT"
    EXCUSED = "EXCUSED"
    ABSENT = "ABSENT"


class ResourceType(str, Enum):
    """Resources that are owned by a teacher."""

    STUDENT = "student"
    ATTENDANCE = "attendance"
