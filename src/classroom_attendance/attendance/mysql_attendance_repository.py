from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, retrying
from .model import AttendanceFilter, AttendanceRow, NewAttendance
from .repository import AttendanceRepository

_SELECT = """
    SELECT
        ar.attendance_id, ar.student_id, ar.teacher_id, ar.subject, ar.status, ar.att_date,
        ar.created_at, ar.updated_at,
        s.name AS student_name, s.nis AS student_nis, s.grade AS student_grade
    FROM attendance_records ar
    JOIN students s ON s.student_id = ar.student_id
"""


def _to_row(r: dict) -> AttendanceRow:
    return AttendanceRow(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        teacher_id=int(r["teacher_id"]),
        subject=r["subject"],
        status=AttendanceStatus(r["status"]),
        att_date=r["att_date"],
        student_name=r["student_name"],
        student_nis=r["student_nis"],
        student_grade=int(r["student_grade"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _date_clauses(start_date: Optional[date], end_date: Optional[date], clauses: list, params: list) -> None:
    if start_date is not None:
        clauses.append("ar.att_date >= %s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("ar.att_date <= %s")
        params.append(end_date)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @retrying
    def create_many(self, *, teacher_id: int, entries: Sequence[NewAttendance]) -> list[int]:
        ids: list[int] = []
        # Single db_cursor block: one commit at the end, rollback on any failure.
        with db_cursor(self._conn_factory) as (_, cur):
            for e in entries:
                cur.execute(
                    """
                    INSERT INTO attendance_records(student_id, teacher_id, subject, status, att_date)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(e.student_id), int(teacher_id), e.subject, e.status.value, e.att_date),
                )
                ids.append(int(cur.lastrowid))
        return ids

    @retrying
    def get_rows_by_ids(self, attendance_ids: Sequence[int]) -> Sequence[AttendanceRow]:
        if not attendance_ids:
            return []
        placeholders = ",".join(["%s"] * len(attendance_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE ar.attendance_id IN ({placeholders}) ORDER BY ar.attendance_id ASC",
                tuple(int(i) for i in attendance_ids),
            )
            return [_to_row(r) for r in fetchall(cur)]

    @retrying
    def list_rows(
        self,
        *,
        teacher_id: int,
        filters: AttendanceFilter,
        limit: Optional[int] = None,
    ) -> Sequence[AttendanceRow]:
        clauses = ["ar.teacher_id=%s"]
        params: list[object] = [int(teacher_id)]

        if filters.subject:
            clauses.append("ar.subject=%s")
            params.append(filters.subject)
        if filters.student_id is not None:
            clauses.append("ar.student_id=%s")
            params.append(int(filters.student_id))
        _date_clauses(filters.start_date, filters.end_date, clauses, params)

        where = " AND ".join(clauses)
        sql = f"{_SELECT} WHERE {where} ORDER BY ar.att_date DESC, ar.attendance_id DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_row(r) for r in fetchall(cur)]

    @retrying
    def get_report_rows(
        self,
        *,
        teacher_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRow]:
        clauses = ["ar.teacher_id=%s"]
        params: list[object] = [int(teacher_id)]
        _date_clauses(start_date, end_date, clauses, params)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {where} ORDER BY ar.subject ASC, ar.att_date ASC, s.name ASC, ar.attendance_id ASC",
                tuple(params),
            )
            return [_to_row(r) for r in fetchall(cur)]

    @retrying
    def get_owner_id(self, attendance_id: int) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_id FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            row = fetchone(cur)
            return int(row["teacher_id"]) if row else None

    @retrying
    def count_for_teacher(
        self,
        *,
        teacher_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        clauses = ["ar.teacher_id=%s"]
        params: list[object] = [int(teacher_id)]
        _date_clauses(start_date, end_date, clauses, params)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS n FROM attendance_records ar WHERE {' AND '.join(clauses)}",
                tuple(params),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0
