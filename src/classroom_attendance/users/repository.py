from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Teacher


class TeacherRepository(Protocol):
    """Repository interface for teachers.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Teacher]:
        raise NotImplementedError

    def create_teacher(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        grade: int,
        subjects: Sequence[str],
    ) -> int:
        raise NotImplementedError

    def update_password(self, teacher_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, teacher_id: int) -> bool:
        """Delete a teacher together with their students and attendance."""

        raise NotImplementedError
