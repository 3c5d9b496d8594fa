from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceFilter, AttendanceRow, NewAttendance


class AttendanceRepository(Protocol):
    def create_many(self, *, teacher_id: int, entries: Sequence[NewAttendance]) -> list[int]:
        """Insert all entries in one transaction; either every row is stored or none."""

        raise NotImplementedError

    def get_rows_by_ids(self, attendance_ids: Sequence[int]) -> Sequence[AttendanceRow]:
        raise NotImplementedError

    def list_rows(
        self,
        *,
        teacher_id: int,
        filters: AttendanceFilter,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRow]:
        """Newest first, at most ``limit`` rows when given."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        teacher_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRow]:
        """Ordered by subject, date, then student name."""

        raise NotImplementedError

    def get_owner_id(self, attendance_id: int) -> Optional[int]:
        raise NotImplementedError

    def count_for_teacher(
        self,
        *,
        teacher_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        raise NotImplementedError
