from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import today_iso
from ..common.web import admin_required, require_workspace, session_role
from ..container import Container
from .service import ReportData, render_csv


def register(app: Flask, container: Container) -> None:
    def _csv_response(data: ReportData, filename: str):
        return app.response_class(
            render_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/admin/students.csv", methods=["GET"], endpoint="api_students_csv")
    @admin_required
    def students_csv():
        ws = require_workspace()
        data = ws.report_service.student_directory(
            current_role=session_role(),
            search=request.args.get("search", ""),
            sort_key=request.args.get("sort", "passport_count"),
            descending=request.args.get("order", "desc").lower() != "asc",
        )
        return _csv_response(data, f"students_{today_iso()}.csv")

    @app.route("/api/admin/courses/<course_id>/roster.csv", methods=["GET"], endpoint="api_course_roster_csv")
    @admin_required
    def course_roster_csv(course_id: str):
        ws = require_workspace()
        data = ws.report_service.course_roster(
            course_id,
            current_role=session_role(),
            session_date=request.args.get("date") or None,
        )
        return _csv_response(data, f"attendance_{course_id}.csv")
