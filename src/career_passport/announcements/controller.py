from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_user, login_required, require_workspace
from ..container import Container
from .cached_announcement_repository import announcement_to_wire


def register(app: Flask, container: Container) -> None:
    @app.route("/api/announcements", methods=["GET"], endpoint="api_announcements")
    @login_required
    def list_announcements():
        ws = require_workspace()
        limit = request.args.get("limit", type=int)
        items = ws.announcement_service.list_recent(limit=limit)
        return jsonify({"success": True, "announcements": [announcement_to_wire(a) for a in items]})

    @app.route("/api/admin/announcements", methods=["POST"], endpoint="api_announcement_create")
    @admin_required
    def create_announcement():
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        item = ws.announcement_service.save(
            author=current_user(),
            title=data.get("title", ""),
            content=data.get("content", ""),
            link=data.get("link", ""),
        )
        return jsonify({"success": True, "announcement": announcement_to_wire(item)}), 201

    @app.route("/api/admin/announcements/<announcement_id>", methods=["PUT"], endpoint="api_announcement_update")
    @admin_required
    def update_announcement(announcement_id: str):
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        item = ws.announcement_service.save(
            author=current_user(),
            announcement_id=announcement_id,
            title=data.get("title", ""),
            content=data.get("content", ""),
            link=data.get("link", ""),
        )
        return jsonify({"success": True, "announcement": announcement_to_wire(item)})

    @app.route("/api/admin/announcements/<announcement_id>", methods=["DELETE"], endpoint="api_announcement_delete")
    @admin_required
    def delete_announcement(announcement_id: str):
        ws = require_workspace()
        ws.announcement_service.delete(announcement_id, author=current_user())
        return jsonify({"success": True})
