from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local, to_wire_datetime
from ..common.web import admin_required, login_required, require_workspace, session_role
from ..container import Container
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, CheckInError, ValidationError
from ..courses.cached_course_repository import course_to_wire
from ..geo.location import LocationRequestOptions, parse_reading
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


def _record_json(r: AttendanceRecord) -> dict:
    return {
        "id": r.record_id,
        "courseId": r.course_id,
        "studentId": r.student_id,
        "sessionDate": r.session_date,
        "checkInTime": to_wire_datetime(r.check_in_time),
        "status": r.status.value,
        "statusLabel": r.status.wire_label,
        "isManual": r.is_manual,
    }


def _parse_status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus.from_wire(str(value or ""))
    except ValueError:
        raise ValidationError("Unknown attendance status")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/checkin/location-options", methods=["GET"], endpoint="api_location_options")
    @login_required
    def location_options():
        return jsonify({"success": True, "options": LocationRequestOptions().to_dict()})

    @app.route("/api/checkin/today", methods=["GET"], endpoint="api_checkin_today")
    @login_required
    def todays_courses():
        ws = require_workspace()
        today = now_local().date().strftime("%Y-%m-%d")
        statuses = ws.attendance_service.status_map(session["user_id"], today)

        items = []
        for c in ws.course_service.courses_on(today):
            item = course_to_wire(c)
            item["hasCheckInPoint"] = c.has_check_in_point
            status = statuses.get(c.course_id)
            item["attendanceStatus"] = status.value if status else None
            items.append(item)
        return jsonify({"success": True, "date": today, "courses": items})

    @app.route("/api/checkin/<course_id>", methods=["POST"], endpoint="api_checkin")
    @login_required
    def check_in(course_id: str):
        if session_role() != Role.STUDENT:
            raise AuthorizationError("Only students check in")

        ws = require_workspace()
        student_id = session["user_id"]
        try:
            reading = parse_reading(request.get_json(silent=True))
            result = ws.attendance_service.check_in(student_id, course_id, reading)
        except CheckInError as e:
            logger.info("Check-in for %s on course %s refused: %s", student_id, course_id, e.reason)
            raise

        return jsonify(
            {
                "success": True,
                "record": _record_json(result.record),
                "distanceM": round(result.distance_m),
                "radiusM": round(result.radius_m),
                "preserved": result.preserved,
                "note": result.note,
            }
        )

    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_attendance_history")
    @login_required
    def history():
        ws = require_workspace()
        records = ws.attendance_service.history(session["user_id"])
        return jsonify({"success": True, "records": [_record_json(r) for r in records]})

    @app.route("/api/admin/courses/<course_id>/attendance", methods=["GET"], endpoint="api_course_attendance")
    @admin_required
    def course_attendance(course_id: str):
        ws = require_workspace()
        ws.course_service.get(course_id)
        records = ws.attendance_service.course_records(course_id, session_date=request.args.get("date") or None)
        return jsonify({"success": True, "records": [_record_json(r) for r in records]})

    @app.route("/api/admin/courses/<course_id>/attendance", methods=["PUT"], endpoint="api_manual_attendance")
    @admin_required
    def manual_attendance(course_id: str):
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        student_id = str(data.get("studentId") or "").strip()
        if not student_id:
            raise ValidationError("Student is required")

        record = ws.attendance_service.set_manual_status(
            course_id=course_id,
            student_id=student_id,
            session_date=data.get("sessionDate", ""),
            status=_parse_status(data.get("status")),
            current_role=session_role(),
        )
        return jsonify({"success": True, "record": _record_json(record)})

    @app.route("/api/admin/attendance/summary", methods=["GET"], endpoint="api_attendance_summary")
    @admin_required
    def attendance_summary():
        ws = require_workspace()
        items = []
        for c in ws.course_service.list_courses():
            s = ws.attendance_service.course_summary(c.course_id)
            items.append(
                {
                    "courseId": c.course_id,
                    "title": c.title,
                    "onTime": s.on_time,
                    "late": s.late,
                    "leave": s.leave,
                    "absent": s.absent,
                    "attended": s.attended,
                }
            )
        return jsonify({"success": True, "summary": items})
