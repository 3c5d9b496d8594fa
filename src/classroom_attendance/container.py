from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.policy import OwnershipPolicy
from .auth.tokens import CredentialService
from .common.cache import TTLCache
from .common.datetime_utils import today_local
from .core.constants import DEFAULT_CACHE_TTL_SECONDS, DEFAULT_SESSION_DAYS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .reports.service import ExportService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLTeacherRepository
from .users.repository import TeacherRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    teachers_repo: TeacherRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    credentials: CredentialService
    cache: TTLCache
    policy: OwnershipPolicy
    cookie_secure: bool

    auth_service: AuthService
    student_service: StudentService
    attendance_service: AttendanceService
    export_service: ExportService
    dashboard_service: DashboardService


def assemble(
    *,
    teachers_repo: TeacherRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    credentials: CredentialService,
    cache: TTLCache,
    cookie_secure: bool = False,
    conn: Optional[DatabaseConnection] = None,
    today: Callable[[], date] = today_local,
) -> Container:
    """Wire services on top of the given repositories (MySQL or in-memory)."""
    policy = OwnershipPolicy(students=students_repo, attendance=attendance_repo)

    return Container(
        conn=conn,
        teachers_repo=teachers_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        credentials=credentials,
        cache=cache,
        policy=policy,
        cookie_secure=cookie_secure,
        auth_service=AuthService(teachers_repo, cache=cache),
        student_service=StudentService(students_repo, teachers_repo, policy, cache=cache),
        attendance_service=AttendanceService(attendance_repo, teachers_repo, policy, cache=cache, today=today),
        export_service=ExportService(attendance_repo, teachers_repo, today=today),
        dashboard_service=DashboardService(students_repo, attendance_repo, cache, today=today),
    )


def build_container(*, settings) -> Container:
    conn = DatabaseConnection(DBConfig.from_url(str(settings.DATABASE_URL)))

    return assemble(
        teachers_repo=MySQLTeacherRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        credentials=CredentialService(
            str(settings.SECRET_KEY),
            expire_days=int(getattr(settings, "TOKEN_EXPIRE_DAYS", DEFAULT_SESSION_DAYS)),
        ),
        cache=TTLCache(int(getattr(settings, "CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS))),
        cookie_secure=bool(getattr(settings, "COOKIE_SECURE", False)),
        conn=conn,
    )
