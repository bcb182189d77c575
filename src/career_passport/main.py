from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .announcements.controller import register as register_announcements
from .attendance.controller import register as register_attendance
from .common.web import EXTENSION_KEY, register_error_handlers
from .config import get_settings_module
from .container import build_container
from .core.constants import APP_NAME
from .courses.controller import register as register_courses
from .entries.controller import register as register_entries
from .reports.controller import register as register_reports
from .system.controller import register as register_system
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(overrides: Optional[dict[str, Any]] = None) -> Flask:
    """Application factory.

    `overrides` replaces settings-module values (tests pass a fake
    `CONNECTION` and their own admin account here).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    values = {
        key: getattr(settings, key)
        for key in dir(settings)
        if key.isupper()
    }
    values.update(overrides or {})

    logging.basicConfig(
        level=str(values.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = values["SECRET_KEY"]
    app.config["DEBUG"] = bool(values.get("DEBUG", False))
    app.config["TESTING"] = bool(values.get("TESTING", False))

    remote_config = dict(values.get("REMOTE_CONFIG") or {})
    if app.config["DEBUG"]:
        logger.info("[%s] settings=%s remote=%s", APP_NAME, settings_module, remote_config.get("url") or "<unset>")

    container = build_container(
        remote_config=remote_config,
        admin_email=str(values.get("ADMIN_EMAIL") or ""),
        admin_password_hash=str(values.get("ADMIN_PASSWORD_HASH") or ""),
        authorized_worker_emails=list(values.get("AUTHORIZED_WORKER_EMAILS") or []),
        connection=values.get("CONNECTION"),
        workspace_idle_ttl=values.get("WORKSPACE_IDLE_TTL"),
    )
    app.extensions[EXTENSION_KEY] = container

    register_error_handlers(app)
    register_users(app, container)
    register_courses(app, container)
    register_attendance(app, container)
    register_entries(app, container)
    register_announcements(app, container)
    register_system(app, container)
    register_reports(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "app": APP_NAME, "remoteConfigured": bool(container.conn.url)})

    return app
