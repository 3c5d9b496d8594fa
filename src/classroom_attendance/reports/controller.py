from __future__ import annotations

import io

from flask import Flask, g, request, send_file

from ..auth.guard import teacher_required
from ..common.datetime_utils import parse_optional_date
from ..common.responses import api_errors
from ..container import Container
from ..core.constants import XLSX_MIMETYPE


def register(app: Flask, container: Container) -> None:
    auth_required = teacher_required(container.credentials)

    @app.route("/attendance/export", methods=["GET"], endpoint="attendance_export")
    @api_errors
    @auth_required
    def attendance_export():
        export = container.export_service.build_export(
            g.teacher_id,
            start_date=parse_optional_date(request.args.get("startDate"), "startDate"),
            end_date=parse_optional_date(request.args.get("endDate"), "endDate"),
        )
        response = send_file(
            io.BytesIO(export.content),
            download_name=export.filename,
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )
        response.headers["Content-Disposition"] = f'attachment; filename="{export.filename}"'
        return response
