from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import current_user, login_required, require_workspace
from ..container import Container
from ..core.exceptions import AuthorizationError
from .cached_entry_repository import entry_to_wire


def register(app: Flask, container: Container) -> None:
    @app.route("/api/entries", methods=["GET"], endpoint="api_entries")
    @login_required
    def list_entries():
        ws = require_workspace()
        user = current_user()
        student_id = request.args.get("studentId") or session["user_id"]
        if student_id != user.user_id and not user.is_admin:
            raise AuthorizationError("You can only read your own passport")

        entries = ws.entry_service.list_for_student(student_id)
        return jsonify({"success": True, "entries": [entry_to_wire(e) for e in entries]})

    @app.route("/api/entries", methods=["POST"], endpoint="api_entry_create")
    @login_required
    def create_entry():
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        entry = ws.entry_service.create(
            student=current_user(),
            title=data.get("title", ""),
            content=data.get("content", ""),
            course_id=data.get("courseId"),
            image=data.get("image"),
        )
        return jsonify({"success": True, "entry": entry_to_wire(entry)}), 201

    @app.route("/api/entries/<entry_id>", methods=["DELETE"], endpoint="api_entry_delete")
    @login_required
    def delete_entry(entry_id: str):
        ws = require_workspace()
        ws.entry_service.delete(current_user=current_user(), entry_id=entry_id)
        return jsonify({"success": True})
