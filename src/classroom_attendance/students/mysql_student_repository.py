from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, retrying
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, name, nis, grade, teacher_id, created_at, updated_at"


def _to_student(row: dict) -> Student:
    return Student(
        student_id=int(row["student_id"]),
        name=row["name"],
        nis=row["nis"],
        grade=int(row["grade"]),
        teacher_id=int(row["teacher_id"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @retrying
    def list_for_teacher(self, teacher_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE teacher_id=%s ORDER BY name ASC, student_id ASC",
                (int(teacher_id),),
            )
            return [_to_student(r) for r in fetchall(cur)]

    @retrying
    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    @retrying
    def get_by_nis(self, nis: str, *, exclude_id: Optional[int] = None) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            if exclude_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM students WHERE nis=%s", (nis,))
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM students WHERE nis=%s AND student_id<>%s",
                    (nis, int(exclude_id)),
                )
            row = fetchone(cur)
            return _to_student(row) if row else None

    @retrying
    def get_owner_id(self, student_id: int) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_id FROM students WHERE student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return int(row["teacher_id"]) if row else None

    @retrying
    def count_for_teacher(self, teacher_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM students WHERE teacher_id=%s", (int(teacher_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    @retrying
    def create_student(self, *, name: str, nis: str, grade: int, teacher_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, nis, grade, teacher_id)
                VALUES(%s,%s,%s,%s)
                """,
                (name, nis, int(grade), int(teacher_id)),
            )
            return int(cur.lastrowid)

    @retrying
    def update_student(self, student_id: int, *, name: str, nis: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET name=%s, nis=%s WHERE student_id=%s",
                (name, nis, int(student_id)),
            )
            return cur.rowcount > 0

    @retrying
    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
