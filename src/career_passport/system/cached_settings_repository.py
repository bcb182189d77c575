from __future__ import annotations

from typing import Sequence

from ..store.cache import default_settings
from ..store.storage import StorageSession
from .model import CloudConfig, SystemSettings
from .repository import SettingsRepository


def settings_from_wire(r: dict) -> SystemSettings:
    defaults = default_settings()
    return SystemSettings(
        landing_title=r.get("landingTitle") or defaults["landingTitle"],
        landing_subtitle=r.get("landingSubtitle") or defaults["landingSubtitle"],
        landing_image_url=r.get("landingImageUrl") or defaults["landingImageUrl"],
        sync_webhook_url=r.get("syncWebhookUrl") or "",
        authorized_worker_emails=tuple(r.get("authorizedWorkerEmails") or ()),
        deployed_url=r.get("deployedUrl") or "",
    )


def settings_to_wire(s: SystemSettings) -> dict:
    return {
        "landingTitle": s.landing_title,
        "landingSubtitle": s.landing_subtitle,
        "landingImageUrl": s.landing_image_url,
        "syncWebhookUrl": s.sync_webhook_url,
        "authorizedWorkerEmails": list(s.authorized_worker_emails),
        "deployedUrl": s.deployed_url,
    }


class CachedSettingsRepository(SettingsRepository):
    def __init__(self, storage: StorageSession):
        self._storage = storage

    def get_settings(self) -> SystemSettings:
        return settings_from_wire(self._storage.cache.settings)

    def save_settings(self, settings: SystemSettings) -> None:
        wire = settings_to_wire(settings)
        self._storage.cache.settings = wire
        self._storage.save("settings", wire, item_id="settings")

    def get_categories(self) -> Sequence[str]:
        return list(self._storage.cache.categories)

    def save_categories(self, categories: Sequence[str]) -> None:
        items = list(categories)
        self._storage.cache.categories = items
        self._storage.save("categories", {"items": items}, item_id="categories")

    def get_cloud_config(self) -> CloudConfig:
        r = self._storage.cache.cloud_config
        return CloudConfig(
            enabled=bool(r.get("enabled", False)),
            google_script_url=r.get("googleScriptUrl") or "",
            last_sync_time=r.get("lastSyncTime"),
        )

    def save_cloud_config(self, config: CloudConfig) -> None:
        wire = {"enabled": config.enabled, "googleScriptUrl": config.google_script_url}
        if config.last_sync_time:
            wire["lastSyncTime"] = config.last_sync_time
        self._storage.cache.cloud_config = wire
        self._storage.save("cloudConfig", wire, item_id="cloudConfig")
