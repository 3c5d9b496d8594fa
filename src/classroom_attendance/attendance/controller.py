from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.guard import teacher_required
from ..common.datetime_utils import parse_optional_date
from ..common.responses import api_errors, json_error
from ..common.validators import Invalid, parse_body
from ..container import Container
from ..core.exceptions import ValidationError
from .model import AttendanceFilter
from .schemas import BulkAttendanceRequest, attendance_out


def _filters_from_query() -> AttendanceFilter:
    student_id = request.args.get("studentId") or None
    if student_id is not None:
        try:
            student_id = int(student_id)
        except ValueError:
            raise ValidationError("studentId must be an integer")

    return AttendanceFilter(
        subject=(request.args.get("subject") or "").strip() or None,
        student_id=student_id,
        start_date=parse_optional_date(request.args.get("startDate"), "startDate"),
        end_date=parse_optional_date(request.args.get("endDate"), "endDate"),
    )


def register(app: Flask, container: Container) -> None:
    auth_required = teacher_required(container.credentials)

    @app.route("/attendance", methods=["POST"], endpoint="attendance_create")
    @api_errors
    @auth_required
    def attendance_create():
        parsed = parse_body(BulkAttendanceRequest, request.get_json(silent=True))
        if isinstance(parsed, Invalid):
            return json_error(parsed.message, 400)

        rows = container.attendance_service.record_bulk(g.teacher_id, parsed.value.entries)
        return (
            jsonify(
                {
                    "message": f"Attendance saved for {len(rows)} students",
                    "attendances": [attendance_out(r) for r in rows],
                }
            ),
            201,
        )

    @app.route("/attendance", methods=["GET"], endpoint="attendance_list")
    @api_errors
    @auth_required
    def attendance_list():
        rows = container.attendance_service.list_attendance(g.teacher_id, _filters_from_query())
        return jsonify({"attendances": [attendance_out(r) for r in rows]})

    @app.route("/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @api_errors
    @auth_required
    def attendance_stats():
        summaries = container.attendance_service.student_statistics(g.teacher_id, _filters_from_query())
        return jsonify(
            {
                "statistics": [
                    {
                        "studentId": s.student_id,
                        "name": s.name,
                        **s.tally.as_dict(),
                        "presentPercentage": s.tally.present_percentage,
                    }
                    for s in summaries
                ]
            }
        )
