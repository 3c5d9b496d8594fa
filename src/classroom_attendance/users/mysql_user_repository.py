from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, retrying
from .model import Teacher
from .repository import TeacherRepository

_COLUMNS = "teacher_id, email, password_hash, name, grade, subjects, created_at, updated_at"


def _to_teacher(row: dict) -> Teacher:
    subjects = row.get("subjects") or "[]"
    if isinstance(subjects, (bytes, bytearray)):
        subjects = subjects.decode("utf-8")
    if isinstance(subjects, str):
        subjects = json.loads(subjects)
    return Teacher(
        teacher_id=int(row["teacher_id"]),
        email=row["email"],
        name=row["name"],
        password_hash=row["password_hash"],
        grade=int(row["grade"]),
        subjects=tuple(subjects),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @retrying
    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            row = fetchone(cur)
            return _to_teacher(row) if row else None

    @retrying
    def get_by_email(self, email: str) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teachers WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_teacher(row) if row else None

    @retrying
    def create_teacher(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        grade: int,
        subjects: Sequence[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teachers(email, password_hash, name, grade, subjects)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (email, password_hash, name, int(grade), json.dumps(list(subjects))),
            )
            return int(cur.lastrowid)

    @retrying
    def update_password(self, teacher_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE teachers SET password_hash=%s WHERE teacher_id=%s",
                (password_hash, int(teacher_id)),
            )
            return cur.rowcount > 0

    @retrying
    def delete_by_id(self, teacher_id: int) -> bool:
        # students and attendance_records go with it (ON DELETE CASCADE).
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            return cur.rowcount > 0
