from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, login_required, require_workspace
from ..container import Container
from .cached_settings_repository import settings_to_wire
from .model import CloudConfig


def _cloud_json(c: CloudConfig) -> dict:
    return {"enabled": c.enabled, "googleScriptUrl": c.google_script_url, "lastSyncTime": c.last_sync_time}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="api_settings")
    @login_required
    def get_settings():
        ws = require_workspace()
        return jsonify({"success": True, "settings": settings_to_wire(ws.settings_service.get_settings())})

    @app.route("/api/admin/settings", methods=["PUT"], endpoint="api_settings_update")
    @admin_required
    def update_settings():
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        settings = ws.settings_service.update_appearance(
            landing_title=data.get("landingTitle", ""),
            landing_subtitle=data.get("landingSubtitle", ""),
            landing_image_url=data.get("landingImageUrl", ""),
            sync_webhook_url=data.get("syncWebhookUrl"),
        )
        return jsonify({"success": True, "settings": settings_to_wire(settings)})

    @app.route("/api/admin/authorized-emails", methods=["GET"], endpoint="api_authorized_emails")
    @admin_required
    def authorized_emails():
        ws = require_workspace()
        return jsonify({"success": True, "emails": ws.settings_service.authorized_worker_emails()})

    @app.route("/api/admin/authorized-emails", methods=["POST"], endpoint="api_authorized_email_add")
    @admin_required
    def add_authorized_email():
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        ws.settings_service.add_authorized_email(data.get("email", ""))
        return jsonify({"success": True, "emails": ws.settings_service.authorized_worker_emails()})

    @app.route("/api/admin/authorized-emails/<path:email>", methods=["DELETE"], endpoint="api_authorized_email_remove")
    @admin_required
    def remove_authorized_email(email: str):
        ws = require_workspace()
        ws.settings_service.remove_authorized_email(email)
        return jsonify({"success": True, "emails": ws.settings_service.authorized_worker_emails()})

    @app.route("/api/categories", methods=["GET"], endpoint="api_categories")
    @login_required
    def categories():
        ws = require_workspace()
        return jsonify({"success": True, "categories": ws.settings_service.list_categories()})

    @app.route("/api/admin/categories", methods=["POST"], endpoint="api_category_add")
    @admin_required
    def add_category():
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        return jsonify({"success": True, "categories": ws.settings_service.add_category(data.get("name", ""))})

    @app.route("/api/admin/categories/<path:name>", methods=["DELETE"], endpoint="api_category_delete")
    @admin_required
    def delete_category(name: str):
        ws = require_workspace()
        return jsonify({"success": True, "categories": ws.settings_service.delete_category(name)})

    @app.route("/api/admin/cloud-config", methods=["GET"], endpoint="api_cloud_config")
    @admin_required
    def cloud_config():
        ws = require_workspace()
        return jsonify({"success": True, "cloudConfig": _cloud_json(ws.settings_service.get_cloud_config())})

    @app.route("/api/admin/cloud-config", methods=["PUT"], endpoint="api_cloud_config_update")
    @admin_required
    def update_cloud_config():
        ws = require_workspace()
        data = request.get_json(silent=True) or {}
        config = ws.settings_service.update_cloud_config(
            script_url=data.get("googleScriptUrl", ""),
            deployed_url=data.get("deployedUrl"),
        )
        return jsonify({"success": True, "cloudConfig": _cloud_json(config)})

    @app.route("/api/admin/share-link", methods=["GET"], endpoint="api_share_link")
    @admin_required
    def share_link():
        ws = require_workspace()
        return jsonify({"success": True, "url": ws.settings_service.share_link()})

    @app.route("/api/admin/share-link.png", methods=["GET"], endpoint="api_share_link_qr")
    @admin_required
    def share_link_qr():
        ws = require_workspace()
        png = ws.settings_service.share_link_qr_png()
        return app.response_class(png, mimetype="image/png")

    @app.route("/api/sync", methods=["GET"], endpoint="api_sync_ledger")
    @login_required
    def sync_ledger():
        ws = require_workspace()
        return jsonify(
            {
                "success": True,
                "localMode": ws.storage.local_mode,
                "unsettled": [e.to_dict() for e in ws.storage.cache.unsettled()],
            }
        )
