"""Shared guards and JSON error mapping for the controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Optional

from flask import Flask, current_app, jsonify, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CheckInError,
    DomainError,
    SaveFailedError,
    ValidationError,
)

if TYPE_CHECKING:
    from ..container import Container, Workspace
    from ..users.model import User

logger = logging.getLogger(__name__)

EXTENSION_KEY = "career_passport"
SESSION_TOKEN = "ws"


def json_error(message: str, status: int, **extra):
    body = {"success": False, "message": message}
    body.update(extra)
    return jsonify(body), status


def get_container() -> "Container":
    return current_app.extensions[EXTENSION_KEY]


def current_workspace() -> Optional["Workspace"]:
    return get_container().workspaces.get(session.get(SESSION_TOKEN))


def require_workspace() -> "Workspace":
    ws = current_workspace()
    if ws is None or not ws.storage.is_authenticated:
        raise AuthenticationError("Please log in to continue")
    return ws


def current_user() -> "User":
    ws = require_workspace()
    user = ws.auth_service.current_user(session.get("user_id", ""))
    if not user:
        raise AuthenticationError("Please log in to continue")
    return user


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or current_workspace() is None:
            # Workspace is gone (server restart, logout elsewhere).
            session.clear()
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or current_workspace() is None:
            session.clear()
            return json_error("Please log in to continue", 401)

        if session.get("role") != Role.SOCIAL_WORKER.value:
            return json_error("You do not have permission", 403)

        return view(*args, **kwargs)

    return wrapper


def session_role() -> Role:
    return Role(session.get("role", Role.STUDENT.value))


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AuthenticationError)
    def _unauthenticated(e: AuthenticationError):
        return json_error(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return json_error(str(e), 403)

    @app.errorhandler(CheckInError)
    def _check_in_refused(e: CheckInError):
        body = e.to_dict()
        message = body.pop("message")
        return json_error(message, 422, **body)

    @app.errorhandler(SaveFailedError)
    def _save_failed(e: SaveFailedError):
        return json_error(str(e), 502, dataType=e.data_type, sync="UNCONFIRMED")

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        return json_error(str(e), 400)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return json_error(str(e), 400)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        # HTTP errors raised by Flask itself keep their own status.
        code = getattr(e, "code", None)
        if isinstance(code, int) and 400 <= code < 600:
            return json_error(getattr(e, "description", str(e)), code)

        logger.exception("Unhandled error")
        if bool(app.config.get("DEBUG", False)):
            return json_error(f"Internal error: {e}", 500)
        return json_error("Internal error", 500)
