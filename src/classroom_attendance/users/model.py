from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Teacher:
    """Domain entity: the registered account owner, one per homeroom/grade.

    Plain data object, no DB access code.
    """

    teacher_id: int
    email: str
    name: str
    password_hash: str
    grade: int
    subjects: tuple[str, ...]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
