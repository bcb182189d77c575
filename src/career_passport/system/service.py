from __future__ import annotations

import io
from dataclasses import replace
from typing import Optional, Sequence
from urllib.parse import quote

import qrcode

from ..common.validators import require_email, require_non_empty
from ..core.constants import SCRIPT_URL_PREFIX, SCRIPT_URL_SUFFIX
from ..core.exceptions import ValidationError
from .model import CloudConfig, SystemSettings
from .repository import SettingsRepository


class SettingsService:
    """Use cases: landing appearance, worker allow list, categories, cloud link."""

    def __init__(self, settings: SettingsRepository, *, default_worker_emails: Sequence[str] = ()):
        self._settings = settings
        self._default_emails = [e.strip().lower() for e in default_worker_emails if e and e.strip()]

    def get_settings(self) -> SystemSettings:
        return self._settings.get_settings()

    def update_appearance(
        self,
        *,
        landing_title: str,
        landing_subtitle: str,
        landing_image_url: str,
        sync_webhook_url: Optional[str] = None,
    ) -> SystemSettings:
        current = self._settings.get_settings()
        updated = replace(
            current,
            landing_title=require_non_empty(landing_title, "Landing title"),
            landing_subtitle=(landing_subtitle or "").strip(),
            landing_image_url=(landing_image_url or "").strip() or current.landing_image_url,
            sync_webhook_url=(sync_webhook_url if sync_webhook_url is not None else current.sync_webhook_url).strip(),
        )
        self._settings.save_settings(updated)
        return updated

    # --- social worker allow list ---

    def authorized_worker_emails(self) -> list[str]:
        """Configured emails plus built-in defaults, lowercased and unique.

        The defaults keep the administrator able to register even before any
        settings were synced from the sheet.
        """
        seen: list[str] = []
        for e in list(self._settings.get_settings().authorized_worker_emails) + self._default_emails:
            e = e.strip().lower()
            if e and e not in seen:
                seen.append(e)
        return seen

    def is_authorized_worker(self, email: str) -> bool:
        return (email or "").strip().lower() in self.authorized_worker_emails()

    def add_authorized_email(self, email: str) -> SystemSettings:
        email = require_email(email)
        current = self._settings.get_settings()
        if email in current.authorized_worker_emails:
            return current
        updated = replace(current, authorized_worker_emails=current.authorized_worker_emails + (email,))
        self._settings.save_settings(updated)
        return updated

    def remove_authorized_email(self, email: str) -> SystemSettings:
        email = (email or "").strip().lower()
        current = self._settings.get_settings()
        if email not in current.authorized_worker_emails:
            raise ValidationError("Email is not on the authorized list")
        updated = replace(
            current,
            authorized_worker_emails=tuple(e for e in current.authorized_worker_emails if e != email),
        )
        self._settings.save_settings(updated)
        return updated

    # --- categories ---

    def list_categories(self) -> list[str]:
        return list(self._settings.get_categories())

    def add_category(self, name: str) -> list[str]:
        name = require_non_empty(name, "Category")
        categories = self.list_categories()
        if name in categories:
            return categories
        categories.append(name)
        self._settings.save_categories(categories)
        return categories

    def delete_category(self, name: str) -> list[str]:
        categories = self.list_categories()
        if name not in categories:
            raise ValidationError("Category does not exist")
        categories = [c for c in categories if c != name]
        self._settings.save_categories(categories)
        return categories

    # --- cloud link ---

    def get_cloud_config(self) -> CloudConfig:
        return self._settings.get_cloud_config()

    def update_cloud_config(self, *, script_url: str, deployed_url: Optional[str] = None) -> CloudConfig:
        clean = (script_url or "").strip()
        if not clean:
            raise ValidationError("Script URL is required")
        if not clean.startswith(SCRIPT_URL_PREFIX) or not clean.endswith(SCRIPT_URL_SUFFIX):
            raise ValidationError(
                f"This does not look like a valid Apps Script URL. It must start with {SCRIPT_URL_PREFIX} "
                f"and end with {SCRIPT_URL_SUFFIX}"
            )

        config = replace(self._settings.get_cloud_config(), google_script_url=clean, enabled=True)
        self._settings.save_cloud_config(config)

        if deployed_url and deployed_url.strip():
            current = self._settings.get_settings()
            self._settings.save_settings(replace(current, deployed_url=deployed_url.strip()))
        return config

    def share_link(self) -> str:
        """Class invitation link for the hash-routed front-end."""

        script_url = self._settings.get_cloud_config().google_script_url
        base_url = self._settings.get_settings().deployed_url
        if not script_url or not base_url:
            raise ValidationError("Set both the deployed site URL and the Apps Script URL first")
        return f"{base_url.rstrip('/')}/#/?classId={quote(script_url, safe='')}"

    def share_link_qr_png(self) -> bytes:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(self.share_link())
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
