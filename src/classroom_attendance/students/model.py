from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a roster entry belonging to exactly one teacher."""

    student_id: int
    name: str
    nis: str
    grade: int
    teacher_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
