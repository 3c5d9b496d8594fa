from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional

import pandas as pd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import check_date_range, format_display_date, today_local
from ..core.constants import SHEET_TITLE_MAX_LENGTH
from ..core.exceptions import NotFoundError
from ..users.repository import TeacherRepository
from .aggregation import SubjectReport, build_subject_reports

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["No", "Student Name", "Present", "Excused", "Absent", "Total"]
DETAIL_COLUMNS = ["Date", "Student Name", "Status"]
COLUMN_WIDTHS = [5, 25, 14, 14, 14, 20]

# Header block occupies rows 1-4; the summary table header sits on row 6.
SUMMARY_START_ROW = 5
EMPTY_SHEET_TITLE = "No Data"

_INVALID_TITLE_CHARS = re.compile(r"[\[\]:*?/\\]")


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes


def export_filename(grade: int, day: date) -> str:
    return f"Attendance_Report_Grade_{grade}_{day.isoformat()}.xlsx"


def sheet_title(subject: str, taken: set[str]) -> str:
    base = _INVALID_TITLE_CHARS.sub(" ", subject).strip()[:SHEET_TITLE_MAX_LENGTH] or "Sheet"
    title = base
    n = 2
    while title.lower() in taken:
        suffix = f" ({n})"
        title = base[: SHEET_TITLE_MAX_LENGTH - len(suffix)] + suffix
        n += 1
    taken.add(title.lower())
    return title


def summary_frame(report: SubjectReport) -> pd.DataFrame:
    rows = [
        [i, s.name, s.tally.present, s.tally.excused, s.tally.absent, s.tally.total]
        for i, s in enumerate(report.students, start=1)
    ]
    t = report.totals
    rows.append(["", "TOTAL", t.present, t.excused, t.absent, t.total])
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def detail_frame(report: SubjectReport) -> pd.DataFrame:
    rows = [[format_display_date(r.att_date), r.student_name, r.status.value] for r in report.details]
    return pd.DataFrame(rows, columns=DETAIL_COLUMNS)


class ExportService:
    """Builds the per-subject attendance workbook for one teacher."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        teachers: TeacherRepository,
        *,
        today: Callable[[], date] = today_local,
    ):
        self._attendance = attendance
        self._teachers = teachers
        self._today = today

    def build_export(
        self,
        teacher_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> ExportFile:
        check_date_range(start_date, end_date)

        teacher = self._teachers.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError("User not found")

        rows = self._attendance.get_report_rows(teacher_id=teacher_id, start_date=start_date, end_date=end_date)
        reports = build_subject_reports(rows)
        content = render_workbook(reports, grade=teacher.grade, start_date=start_date, end_date=end_date)

        logger.info("Teacher %s exported %d rows across %d subjects", teacher_id, len(rows), len(reports))
        return ExportFile(filename=export_filename(teacher.grade, self._today()), content=content)


def render_workbook(
    reports: Iterable[SubjectReport],
    *,
    grade: int,
    start_date: Optional[date],
    end_date: Optional[date],
) -> bytes:
    period = f"{format_display_date(start_date)} - {format_display_date(end_date)}"
    output = io.BytesIO()
    taken: set[str] = set()

    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        wrote_any = False
        for report in reports:
            wrote_any = True
            title = sheet_title(report.subject, taken)
            summary = summary_frame(report)
            summary.to_excel(writer, sheet_name=title, index=False, startrow=SUMMARY_START_ROW)

            detail_title_row = SUMMARY_START_ROW + len(summary) + 2
            detail_frame(report).to_excel(writer, sheet_name=title, index=False, startrow=detail_title_row + 1)

            ws = writer.sheets[title]
            _write_header(ws, grade=grade, subject=report.subject, period=period)
            cell = ws.cell(row=detail_title_row + 1, column=1, value="DETAIL PER DATE")
            cell.font = Font(bold=True)
            # TOTAL row of the summary table
            for col in range(1, len(SUMMARY_COLUMNS) + 1):
                ws.cell(row=SUMMARY_START_ROW + len(summary) + 1, column=col).font = Font(bold=True)
            _set_widths(ws)

        if not wrote_any:
            pd.DataFrame({"Message": ["No attendance data for the selected period"]}).to_excel(
                writer, sheet_name=EMPTY_SHEET_TITLE, index=False, startrow=SUMMARY_START_ROW
            )
            ws = writer.sheets[EMPTY_SHEET_TITLE]
            _write_header(ws, grade=grade, subject="All", period=period)
            _set_widths(ws)

    return output.getvalue()


def _write_header(ws, *, grade: int, subject: str, period: str) -> None:
    ws.cell(row=1, column=1, value="ATTENDANCE SUMMARY").font = Font(bold=True, size=14)
    ws.cell(row=2, column=1, value=f"Class: {grade}")
    ws.cell(row=3, column=1, value=f"Subject: {subject}")
    ws.cell(row=4, column=1, value=f"Period: {period}")


def _set_widths(ws) -> None:
    for i, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(i)].width = width
