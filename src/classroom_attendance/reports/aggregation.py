"""Attendance aggregation.

Rows are grouped by subject, then by student, in first-seen order, and
status counts are tallied per student and per subject.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..attendance.model import AttendanceRow
from ..core.enums import AttendanceStatus


@dataclass
class StatusTally:
    present: int = 0
    excused: int = 0
    absent: int = 0
    total: int = 0

    def add(self, status: AttendanceStatus) -> None:
        if status == AttendanceStatus.PRESENT:
            self.present += 1
        elif status == AttendanceStatus.EXCUSED:
            self.excused += 1
        elif status == AttendanceStatus.ABSENT:
            self.absent += 1
        self.total += 1

    def __add__(self, other: "StatusTally") -> "StatusTally":
        return StatusTally(
            present=self.present + other.present,
            excused=self.excused + other.excused,
            absent=self.absent + other.absent,
            total=self.total + other.total,
        )

    @property
    def present_percentage(self) -> int:
        return percentage(self.present, self.total)

    def as_dict(self) -> dict:
        return {"present": self.present, "excused": self.excused, "absent": self.absent, "total": self.total}


@dataclass
class StudentSummary:
    student_id: int
    name: str
    tally: StatusTally = field(default_factory=StatusTally)


@dataclass
class SubjectReport:
    subject: str
    students: list[StudentSummary]
    totals: StatusTally
    details: list[AttendanceRow]


def percentage(part: int, whole: int) -> int:
    """Whole percent, halves rounded up; 0 when there is nothing to divide."""
    if whole <= 0:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


def group_by_subject(rows: Iterable[AttendanceRow]) -> dict[str, list[AttendanceRow]]:
    groups: dict[str, list[AttendanceRow]] = {}
    for r in rows:
        groups.setdefault(r.subject, []).append(r)
    return groups


def tally_by_student(rows: Iterable[AttendanceRow]) -> list[StudentSummary]:
    by_student: dict[int, StudentSummary] = {}
    for r in rows:
        s = by_student.get(r.student_id)
        if s is None:
            s = StudentSummary(student_id=r.student_id, name=r.student_name)
            by_student[r.student_id] = s
        s.tally.add(r.status)
    return list(by_student.values())


def grand_total(students: Sequence[StudentSummary]) -> StatusTally:
    total = StatusTally()
    for s in students:
        total = total + s.tally
    return total


def build_subject_reports(rows: Iterable[AttendanceRow]) -> list[SubjectReport]:
    reports: list[SubjectReport] = []
    for subject, subject_rows in group_by_subject(rows).items():
        students = tally_by_student(subject_rows)
        reports.append(
            SubjectReport(
                subject=subject,
                students=students,
                totals=grand_total(students),
                # sorted() is stable: same-day rows keep their incoming order.
                details=sorted(subject_rows, key=lambda r: r.att_date),
            )
        )
    return reports
