from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_for_teacher(self, teacher_id: int) -> Sequence[Student]:
        """Students of one teacher, ordered by name."""

        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_nis(self, nis: str, *, exclude_id: Optional[int] = None) -> Optional[Student]:
        """Global lookup, across all teachers."""

        raise NotImplementedError

    def get_owner_id(self, student_id: int) -> Optional[int]:
        raise NotImplementedError

    def count_for_teacher(self, teacher_id: int) -> int:
        raise NotImplementedError

    def create_student(self, *, name: str, nis: str, grade: int, teacher_id: int) -> int:
        raise NotImplementedError

    def update_student(self, student_id: int, *, name: str, nis: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        raise NotImplementedError
