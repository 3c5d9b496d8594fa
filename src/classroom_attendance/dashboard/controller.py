from __future__ import annotations

from flask import Flask, g, jsonify

from ..attendance.schemas import attendance_out
from ..auth.guard import teacher_required
from ..common.responses import api_errors
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required = teacher_required(container.credentials)

    @app.route("/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @api_errors
    @auth_required
    def dashboard_stats():
        stats = container.dashboard_service.get_stats(g.teacher_id)
        return jsonify(
            {
                "totalStudents": stats.total_students,
                "totalAttendanceToday": stats.attendance_today,
                "totalAttendanceThisMonth": stats.attendance_this_month,
                "recentAttendances": [attendance_out(r) for r in stats.recent],
            }
        )
