from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import (
    SESSION_TOKEN,
    admin_required,
    current_user,
    login_required,
    require_workspace,
    session_role,
)
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .cached_user_repository import user_to_wire
from .service import SessionUser

logger = logging.getLogger(__name__)


def _parse_role(value) -> Role:
    try:
        return Role(str(value or Role.STUDENT.value).upper())
    except ValueError:
        raise ValidationError("Unknown role")


def register(app: Flask, container: Container) -> None:
    def _remember(token: str, s_user: SessionUser) -> None:
        session.clear()
        session[SESSION_TOKEN] = token
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value

    def _drop_current_workspace() -> None:
        container.workspaces.close(session.get(SESSION_TOKEN))
        session.clear()

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = request.get_json(silent=True) or {}
        required_role = _parse_role(data["role"]) if data.get("role") else None

        _drop_current_workspace()
        token, ws = container.workspaces.open()
        try:
            s_user = ws.auth_service.login(
                data.get("email", ""),
                data.get("password", ""),
                required_role=required_role,
            )
        except Exception:
            container.workspaces.close(token)
            raise

        _remember(token, s_user)
        user = ws.auth_service.current_user(s_user.user_id)
        logger.info("User %s logged in (local mode: %s)", s_user.user_id, ws.storage.local_mode)
        return jsonify({"success": True, "user": user_to_wire(user), "localMode": ws.storage.local_mode})

    @app.route("/api/register", methods=["POST"], endpoint="api_register")
    def register_account():
        data = request.get_json(silent=True) or {}

        _drop_current_workspace()
        token, ws = container.workspaces.open()
        try:
            s_user = ws.auth_service.register(
                name=data.get("name", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                role=_parse_role(data.get("role")),
            )
        except Exception:
            container.workspaces.close(token)
            raise

        _remember(token, s_user)
        user = ws.auth_service.current_user(s_user.user_id)
        return jsonify({"success": True, "user": user_to_wire(user)}), 201

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        ws = container.workspaces.close(session.get(SESSION_TOKEN))
        if ws:
            ws.auth_service.logout()
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    def me():
        return jsonify({"success": True, "user": user_to_wire(current_user())})

    @app.route("/api/me/profile", methods=["PUT"], endpoint="api_complete_profile")
    @login_required
    def complete_profile():
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        user = ws.auth_service.complete_profile(
            user_id=session["user_id"],
            name=data.get("name"),
            school_details=data.get("schoolDetails"),
            phone_number=data.get("phoneNumber"),
        )
        session["name"] = user.name
        return jsonify({"success": True, "user": user_to_wire(user)})

    @app.route("/api/admin/students", methods=["GET"], endpoint="api_admin_students")
    @admin_required
    def students():
        ws = require_workspace()
        rows = ws.user_service.list_students(
            current_role=session_role(),
            search=request.args.get("search", ""),
            sort_key=request.args.get("sort", "passport_count"),
            descending=request.args.get("order", "desc").lower() != "asc",
        )
        items = []
        for row in rows:
            item = user_to_wire(row.user)
            item["passportCount"] = row.passport_count
            items.append(item)
        return jsonify({"success": True, "students": items})
