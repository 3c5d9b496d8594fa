from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Sequence

from ..attendance.model import AttendanceFilter, AttendanceRow
from ..attendance.repository import AttendanceRepository
from ..common.cache import TTLCache
from ..common.datetime_utils import today_local
from ..core.constants import RECENT_ATTENDANCE_LIMIT
from ..students.repository import StudentRepository


def dashboard_cache_key(teacher_id: int) -> str:
    return f"dashboard:{int(teacher_id)}"


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    attendance_today: int
    attendance_this_month: int
    recent: Sequence[AttendanceRow]


class DashboardService:
    """Headline numbers for a teacher's landing page.

    Results are cached per teacher; services that write students or
    attendance invalidate the teacher's entry.
    """

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        cache: TTLCache,
        *,
        today: Callable[[], date] = today_local,
    ):
        self._students = students
        self._attendance = attendance
        self._cache = cache
        self._today = today

    def get_stats(self, teacher_id: int) -> DashboardStats:
        return self._cache.get_or_load(dashboard_cache_key(teacher_id), lambda: self._compute(teacher_id))

    def _compute(self, teacher_id: int) -> DashboardStats:
        today = self._today()
        recent = self._attendance.list_rows(
            teacher_id=teacher_id, filters=AttendanceFilter(), limit=RECENT_ATTENDANCE_LIMIT
        )
        return DashboardStats(
            total_students=self._students.count_for_teacher(teacher_id),
            attendance_today=self._attendance.count_for_teacher(
                teacher_id=teacher_id, start_date=today, end_date=today
            ),
            attendance_this_month=self._attendance.count_for_teacher(
                teacher_id=teacher_id, start_date=today.replace(day=1), end_date=today
            ),
            recent=tuple(recent),
        )
