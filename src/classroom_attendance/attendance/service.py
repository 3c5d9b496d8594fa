from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..auth.policy import OwnershipPolicy
from ..common.cache import TTLCache
from ..common.datetime_utils import check_date_range, today_local
from ..core.enums import ResourceType
from ..core.exceptions import NotFoundError, ValidationError
from ..dashboard.service import dashboard_cache_key
from ..reports.aggregation import StudentSummary, tally_by_student
from ..users.repository import TeacherRepository
from .model import AttendanceFilter, AttendanceRow, NewAttendance
from .repository import AttendanceRepository
from .schemas import AttendanceEntry

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: record a class roster for a subject/date and read history back."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        teachers: TeacherRepository,
        policy: OwnershipPolicy,
        *,
        cache: Optional[TTLCache] = None,
        today: Callable[[], date] = today_local,
    ):
        self._attendance = attendance
        self._teachers = teachers
        self._policy = policy
        self._cache = cache
        self._today = today

    def record_bulk(self, teacher_id: int, entries: Sequence[AttendanceEntry]) -> Sequence[AttendanceRow]:
        """Validate every entry, then store all of them in one transaction."""
        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError("Teacher not found")

        today = self._today()
        to_insert: list[NewAttendance] = []
        for entry in entries:
            if entry.subject not in teacher.subjects:
                raise ValidationError(f"Subject '{entry.subject}' is not taught by this teacher")
            self._policy.require_owner(ResourceType.STUDENT, entry.student_id, teacher_id)
            to_insert.append(
                NewAttendance(
                    student_id=entry.student_id,
                    subject=entry.subject,
                    status=entry.status,
                    att_date=entry.att_date or today,
                )
            )

        ids = self._attendance.create_many(teacher_id=teacher_id, entries=to_insert)
        if self._cache is not None:
            self._cache.invalidate(dashboard_cache_key(teacher_id))
        logger.info("Teacher %s recorded %d attendance entries", teacher_id, len(ids))
        return self._attendance.get_rows_by_ids(ids)

    def list_attendance(self, teacher_id: int, filters: AttendanceFilter) -> Sequence[AttendanceRow]:
        check_date_range(filters.start_date, filters.end_date)
        return self._attendance.list_rows(teacher_id=teacher_id, filters=filters)

    def student_statistics(self, teacher_id: int, filters: AttendanceFilter) -> list[StudentSummary]:
        rows = self.list_attendance(teacher_id, filters)
        # History comes back newest first; tally in chronological order so
        # students appear in the order they were first recorded.
        return tally_by_student(list(reversed(rows)))
