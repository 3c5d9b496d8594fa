from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..auth.policy import OwnershipPolicy
from ..common.cache import TTLCache
from ..core.enums import ResourceType
from ..core.exceptions import NotFoundError, ValidationError
from ..dashboard.service import dashboard_cache_key
from ..users.repository import TeacherRepository
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: a teacher manages their own roster."""

    def __init__(
        self,
        students: StudentRepository,
        teachers: TeacherRepository,
        policy: OwnershipPolicy,
        *,
        cache: Optional[TTLCache] = None,
    ):
        self._students = students
        self._teachers = teachers
        self._policy = policy
        self._cache = cache

    def list_students(self, teacher_id: int) -> Sequence[Student]:
        return self._students.list_for_teacher(teacher_id)

    def add_student(self, teacher_id: int, *, name: str, nis: str) -> Student:
        if self._students.get_by_nis(nis):
            raise ValidationError("NIS is already used by another student")

        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")

        student_id = self._students.create_student(name=name, nis=nis, grade=teacher.grade, teacher_id=teacher_id)
        self._touch(teacher_id)
        logger.info("Teacher %s added student %s", teacher_id, student_id)
        return self._get(student_id)

    def update_student(self, teacher_id: int, student_id: int, *, name: str, nis: str) -> Student:
        self._policy.require_owner(ResourceType.STUDENT, student_id, teacher_id)

        if self._students.get_by_nis(nis, exclude_id=student_id):
            raise ValidationError("NIS is already used by another student")

        self._students.update_student(student_id, name=name, nis=nis)
        self._touch(teacher_id)
        return self._get(student_id)

    def delete_student(self, teacher_id: int, student_id: int) -> None:
        self._policy.require_owner(ResourceType.STUDENT, student_id, teacher_id)

        if not self._students.delete_by_id(student_id):
            raise NotFoundError("Student not found")
        self._touch(teacher_id)
        logger.info("Teacher %s deleted student %s", teacher_id, student_id)

    def _get(self, student_id: int) -> Student:
        student = self._students.get_by_id(student_id)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def _touch(self, teacher_id: int) -> None:
        if self._cache is not None:
            self._cache.invalidate(dashboard_cache_key(teacher_id))
