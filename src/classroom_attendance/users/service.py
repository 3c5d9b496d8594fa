from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.cache import TTLCache
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationInvalid, NotFoundError, ValidationError
from ..core.subjects import subjects_for_grade
from ..dashboard.service import dashboard_cache_key
from .model import Teacher
from .repository import TeacherRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use cases around the teacher account: register, login, profile, deletion."""

    def __init__(self, teachers: TeacherRepository, *, cache: Optional[TTLCache] = None):
        self._teachers = teachers
        self._cache = cache

    def register(self, *, email: str, password: str, name: str, grade: int, subjects: Sequence[str]) -> Teacher:
        if self._teachers.get_by_email(email):
            raise ValidationError("Email is already registered")

        # A homeroom teacher with no explicit choice teaches the whole catalog.
        chosen = list(dict.fromkeys(subjects)) or subjects_for_grade(grade)

        teacher_id = self._teachers.create_teacher(
            email=email,
            password_hash=generate_password_hash(password),
            name=name,
            grade=int(grade),
            subjects=chosen,
        )
        logger.info("Registered teacher %s (grade %s)", teacher_id, grade)
        return self.get_profile(teacher_id)

    def authenticate(self, email: str, password: str) -> Teacher:
        teacher = self._teachers.get_by_email(email)
        if not teacher:
            raise AuthenticationInvalid("Invalid email or password")

        try:
            ok = check_password_hash(teacher.password_hash, password)
        except Exception:
            # e.g. placeholder or corrupted hash values
            ok = False

        if not ok:
            raise AuthenticationInvalid("Invalid email or password")
        return teacher

    def get_profile(self, teacher_id: int) -> Teacher:
        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError("User not found")
        return teacher

    def delete_account(self, teacher_id: int) -> None:
        if not self._teachers.delete_by_id(teacher_id):
            raise NotFoundError("User not found")
        if self._cache is not None:
            self._cache.invalidate(dashboard_cache_key(teacher_id))
        logger.info("Deleted teacher %s with all students and attendance", teacher_id)

    def reset_password(self, *, email: str, new_password: str) -> None:
        if len(new_password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        teacher = self._teachers.get_by_email(email.strip().lower())
        if not teacher:
            raise NotFoundError("User not found")
        self._teachers.update_password(teacher.teacher_id, password_hash=generate_password_hash(new_password))
        logger.info("Password reset for teacher %s", teacher.teacher_id)
