from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

import pytest

from classroom_attendance.attendance.model import AttendanceFilter, AttendanceRow, NewAttendance
from classroom_attendance.auth.policy import OwnershipPolicy
from classroom_attendance.auth.tokens import CredentialService
from classroom_attendance.common.cache import TTLCache
from classroom_attendance.container import assemble
from classroom_attendance.students.model import Student
from classroom_attendance.users.model import Teacher

TODAY = date(2024, 3, 15)
CREATED_AT = datetime(2024, 3, 15, 7, 30)
SECRET = "test-secret"


class InMemoryDB:
    """Shared tables so deletes cascade the way the foreign keys do."""

    def __init__(self):
        self.teachers: dict[int, Teacher] = {}
        self.students: dict[int, Student] = {}
        self.attendance: dict[int, tuple[int, NewAttendance]] = {}
        self._ids = {"teacher": 0, "student": 0, "attendance": 0}

    def next_id(self, kind: str) -> int:
        self._ids[kind] += 1
        return self._ids[kind]


class InMemoryTeachers:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        return self._db.teachers.get(teacher_id)

    def get_by_email(self, email: str) -> Optional[Teacher]:
        return next((t for t in self._db.teachers.values() if t.email == email), None)

    def create_teacher(self, *, email, password_hash, name, grade, subjects) -> int:
        teacher_id = self._db.next_id("teacher")
        self._db.teachers[teacher_id] = Teacher(
            teacher_id=teacher_id,
            email=email,
            name=name,
            password_hash=password_hash,
            grade=grade,
            subjects=tuple(subjects),
            created_at=CREATED_AT,
            updated_at=CREATED_AT,
        )
        return teacher_id

    def update_password(self, teacher_id: int, *, password_hash: str) -> bool:
        teacher = self._db.teachers.get(teacher_id)
        if not teacher:
            return False
        self._db.teachers[teacher_id] = replace(teacher, password_hash=password_hash)
        return True

    def delete_by_id(self, teacher_id: int) -> bool:
        if self._db.teachers.pop(teacher_id, None) is None:
            return False
        owned = {sid for sid, s in self._db.students.items() if s.teacher_id == teacher_id}
        for sid in owned:
            del self._db.students[sid]
        for aid, (tid, entry) in list(self._db.attendance.items()):
            if tid == teacher_id or entry.student_id in owned:
                del self._db.attendance[aid]
        return True


class InMemoryStudents:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def list_for_teacher(self, teacher_id: int) -> Sequence[Student]:
        items = [s for s in self._db.students.values() if s.teacher_id == teacher_id]
        return sorted(items, key=lambda s: (s.name, s.student_id))

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self._db.students.get(student_id)

    def get_by_nis(self, nis: str, *, exclude_id: Optional[int] = None) -> Optional[Student]:
        return next(
            (s for s in self._db.students.values() if s.nis == nis and s.student_id != exclude_id),
            None,
        )

    def get_owner_id(self, student_id: int) -> Optional[int]:
        s = self._db.students.get(student_id)
        return s.teacher_id if s else None

    def count_for_teacher(self, teacher_id: int) -> int:
        return len(self.list_for_teacher(teacher_id))

    def create_student(self, *, name: str, nis: str, grade: int, teacher_id: int) -> int:
        student_id = self._db.next_id("student")
        self._db.students[student_id] = Student(
            student_id=student_id,
            name=name,
            nis=nis,
            grade=grade,
            teacher_id=teacher_id,
            created_at=CREATED_AT,
            updated_at=CREATED_AT,
        )
        return student_id

    def update_student(self, student_id: int, *, name: str, nis: str) -> bool:
        s = self._db.students.get(student_id)
        if not s:
            return False
        self._db.students[student_id] = replace(s, name=name, nis=nis)
        return True

    def delete_by_id(self, student_id: int) -> bool:
        if self._db.students.pop(student_id, None) is None:
            return False
        for aid, (_, entry) in list(self._db.attendance.items()):
            if entry.student_id == student_id:
                del self._db.attendance[aid]
        return True


class InMemoryAttendance:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def create_many(self, *, teacher_id: int, entries: Sequence[NewAttendance]) -> list[int]:
        # Same effect as the foreign key failing inside the transaction.
        if any(e.student_id not in self._db.students for e in entries):
            raise RuntimeError("foreign key constraint fails")
        ids = []
        for e in entries:
            aid = self._db.next_id("attendance")
            self._db.attendance[aid] = (teacher_id, e)
            ids.append(aid)
        return ids

    def _row(self, aid: int) -> AttendanceRow:
        teacher_id, e = self._db.attendance[aid]
        s = self._db.students[e.student_id]
        return AttendanceRow(
            attendance_id=aid,
            student_id=e.student_id,
            teacher_id=teacher_id,
            subject=e.subject,
            status=e.status,
            att_date=e.att_date,
            student_name=s.name,
            student_nis=s.nis,
            student_grade=s.grade,
            created_at=CREATED_AT,
            updated_at=CREATED_AT,
        )

    def _rows_for(self, teacher_id, start_date=None, end_date=None) -> list[AttendanceRow]:
        rows = [self._row(aid) for aid, (tid, _) in self._db.attendance.items() if tid == teacher_id]
        if start_date is not None:
            rows = [r for r in rows if r.att_date >= start_date]
        if end_date is not None:
            rows = [r for r in rows if r.att_date <= end_date]
        return rows

    def get_rows_by_ids(self, attendance_ids):
        return [self._row(aid) for aid in sorted(attendance_ids) if aid in self._db.attendance]

    def list_rows(self, *, teacher_id: int, filters: AttendanceFilter, limit=None):
        rows = self._rows_for(teacher_id, filters.start_date, filters.end_date)
        if filters.subject:
            rows = [r for r in rows if r.subject == filters.subject]
        if filters.student_id is not None:
            rows = [r for r in rows if r.student_id == filters.student_id]
        rows = sorted(rows, key=lambda r: (r.att_date, r.attendance_id), reverse=True)
        return rows if limit is None else rows[:limit]

    def get_report_rows(self, *, teacher_id: int, start_date=None, end_date=None):
        rows = self._rows_for(teacher_id, start_date, end_date)
        return sorted(rows, key=lambda r: (r.subject, r.att_date, r.student_name, r.attendance_id))

    def get_owner_id(self, attendance_id: int) -> Optional[int]:
        item = self._db.attendance.get(attendance_id)
        return item[0] if item else None

    def count_for_teacher(self, *, teacher_id: int, start_date=None, end_date=None) -> int:
        return len(self._rows_for(teacher_id, start_date, end_date))


@pytest.fixture()
def db():
    return InMemoryDB()


@pytest.fixture()
def teachers(db):
    return InMemoryTeachers(db)


@pytest.fixture()
def students(db):
    return InMemoryStudents(db)


@pytest.fixture()
def attendance(db):
    return InMemoryAttendance(db)


@pytest.fixture()
def policy(students, attendance):
    return OwnershipPolicy(students=students, attendance=attendance)


@pytest.fixture()
def credentials():
    return CredentialService(SECRET)


@pytest.fixture()
def container(teachers, students, attendance, credentials):
    return assemble(
        teachers_repo=teachers,
        students_repo=students,
        attendance_repo=attendance,
        credentials=credentials,
        cache=TTLCache(300),
        today=lambda: TODAY,
    )


@pytest.fixture()
def app(monkeypatch, container):
    from classroom_attendance.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def signup(app):
    """Register a teacher and return a test client logged in as them."""

    def _signup(email="guru@school.id", *, grade=3, subjects=None, name="Bu Guru", password="secret1"):
        c = app.test_client()
        body = {
            "email": email,
            "password": password,
            "name": name,
            "grade": grade,
            "subjects": subjects if subjects is not None else ["Matematika", "Bahasa Indonesia"],
        }
        resp = c.post("/auth/register", json=body)
        assert resp.status_code == 201, resp.get_json()
        resp = c.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return c

    return _signup
