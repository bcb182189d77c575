from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import optional_float
from ..common.web import admin_required, login_required, require_workspace, session_role
from ..container import Container
from ..core.exceptions import ValidationError
from .cached_course_repository import course_to_wire
from .service import CourseDraft


def _draft_from_json(data: dict, course_id: str | None = None) -> CourseDraft:
    capacity = data.get("capacity")
    try:
        capacity = int(capacity) if capacity not in (None, "") else None
    except (TypeError, ValueError):
        raise ValidationError("Capacity must be a whole number")

    return CourseDraft(
        course_id=course_id or data.get("id"),
        title=data.get("title", ""),
        description=data.get("description", ""),
        start_date=data.get("startDate", ""),
        end_date=data.get("endDate") or None,
        session_dates=tuple(data.get("sessionDates") or ()),
        start_time=data.get("startTime"),
        location=data.get("location", ""),
        location_lat=optional_float(data.get("locationLat"), "Latitude"),
        location_lng=optional_float(data.get("locationLng"), "Longitude"),
        check_in_radius=optional_float(data.get("checkInRadius"), "Check-in radius"),
        category=data.get("category"),
        instructor=data.get("instructor"),
        image_url=data.get("imageUrl"),
        capacity=capacity,
        enrolled_count=int(data.get("enrolledCount") or 0),
        tags=tuple(data.get("tags") or ()),
        google_form_url=data.get("googleFormUrl", ""),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/courses", methods=["GET"], endpoint="api_courses")
    @login_required
    def list_courses():
        ws = require_workspace()
        if request.args.get("upcoming"):
            courses = ws.course_service.upcoming()
        elif request.args.get("date"):
            courses = ws.course_service.courses_on(request.args["date"])
        else:
            courses = ws.course_service.list_courses()
        category = request.args.get("category")
        if category:
            courses = [c for c in courses if c.category == category]
        return jsonify({"success": True, "courses": [course_to_wire(c) for c in courses]})

    @app.route("/api/courses/<course_id>", methods=["GET"], endpoint="api_course_detail")
    @login_required
    def course_detail(course_id: str):
        ws = require_workspace()
        return jsonify({"success": True, "course": course_to_wire(ws.course_service.get(course_id))})

    @app.route("/api/admin/courses", methods=["POST"], endpoint="api_course_create")
    @admin_required
    def create_course():
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        course = ws.course_service.save(
            _draft_from_json(data),
            current_role=session_role(),
            categories=ws.settings_service.list_categories(),
        )
        return jsonify({"success": True, "course": course_to_wire(course)}), 201

    @app.route("/api/admin/courses/<course_id>", methods=["PUT"], endpoint="api_course_update")
    @admin_required
    def update_course(course_id: str):
        ws = require_workspace()
        ws.course_service.get(course_id)
        data = request.get_json(silent=True) or {}
        course = ws.course_service.save(
            _draft_from_json(data, course_id=course_id),
            current_role=session_role(),
            categories=ws.settings_service.list_categories(),
        )
        return jsonify({"success": True, "course": course_to_wire(course)})

    @app.route("/api/admin/courses/<course_id>", methods=["DELETE"], endpoint="api_course_delete")
    @admin_required
    def delete_course(course_id: str):
        ws = require_workspace()
        ws.course_service.delete(course_id, current_role=session_role())
        return jsonify({"success": True})

    @app.route("/api/admin/courses/<course_id>/sessions", methods=["POST"], endpoint="api_course_add_session")
    @admin_required
    def add_session(course_id: str):
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        course = ws.course_service.add_session_date(course_id, data.get("date", ""), current_role=session_role())
        return jsonify({"success": True, "course": course_to_wire(course)})

    @app.route(
        "/api/admin/courses/<course_id>/sessions/<session_date>",
        methods=["DELETE"],
        endpoint="api_course_remove_session",
    )
    @admin_required
    def remove_session(course_id: str, session_date: str):
        ws = require_workspace()
        course = ws.course_service.remove_session_date(course_id, session_date, current_role=session_role())
        return jsonify({"success": True, "course": course_to_wire(course)})
