from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_local
from ..core.constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_LANDING_IMAGE_URL,
    DEFAULT_LANDING_SUBTITLE,
    DEFAULT_LANDING_TITLE,
)
from ..core.enums import SyncState

COLLECTIONS = ("users", "courses", "entries", "announcements", "attendance")


def default_settings(authorized_worker_emails: Optional[list[str]] = None) -> dict:
    return {
        "landingTitle": DEFAULT_LANDING_TITLE,
        "landingSubtitle": DEFAULT_LANDING_SUBTITLE,
        "landingImageUrl": DEFAULT_LANDING_IMAGE_URL,
        "syncWebhookUrl": "",
        "authorizedWorkerEmails": list(authorized_worker_emails or []),
        "deployedUrl": "",
    }


def default_cloud_config() -> dict:
    return {"enabled": False, "googleScriptUrl": ""}


@dataclass
class SyncEntry:
    data_type: str
    item_id: str
    state: SyncState
    updated_at: datetime
    message: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "dataType": self.data_type,
            "id": self.item_id,
            "state": self.state.value,
            "updatedAt": self.updated_at.isoformat(timespec="seconds"),
            "message": self.message,
        }


@dataclass
class LocalCache:
    """In-memory mirror of the remote data listing.

    Items are kept in their wire (camelCase dict) form; repositories map
    them to domain objects. Writes land here before the remote confirms
    them, so `sync` records which writes are still pending or failed.
    """

    users: list[dict] = field(default_factory=list)
    courses: list[dict] = field(default_factory=list)
    entries: list[dict] = field(default_factory=list)
    announcements: list[dict] = field(default_factory=list)
    attendance: list[dict] = field(default_factory=list)
    categories: list[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    settings: dict = field(default_factory=default_settings)
    cloud_config: dict = field(default_factory=default_cloud_config)
    sync: dict[tuple[str, str], SyncEntry] = field(default_factory=dict)

    def hydrate(self, data: Mapping[str, Any], *, default_emails: Optional[list[str]] = None) -> None:
        self.users = list(data.get("users") or [])
        self.courses = list(data.get("courses") or [])
        self.entries = list(data.get("entries") or [])
        self.announcements = list(data.get("announcements") or [])
        self.attendance = list(data.get("attendance") or [])
        self.categories = list(data.get("categories") or DEFAULT_CATEGORIES)
        self.settings = dict(data.get("settings") or default_settings(default_emails))
        self.cloud_config = dict(data.get("cloudConfig") or default_cloud_config())
        self.sync.clear()

    def clear(self) -> None:
        for name in COLLECTIONS:
            setattr(self, name, [])
        self.categories = list(DEFAULT_CATEGORIES)
        self.settings = default_settings()
        self.cloud_config = default_cloud_config()
        self.sync.clear()

    def items(self, collection: str) -> list[dict]:
        return getattr(self, collection)

    def find(self, collection: str, item_id: str) -> Optional[dict]:
        for item in self.items(collection):
            if str(item.get("id")) == str(item_id):
                return copy.deepcopy(item)
        return None

    def upsert(self, collection: str, item: dict, *, prepend: bool = False) -> None:
        items = self.items(collection)
        stored = copy.deepcopy(item)
        for idx, existing in enumerate(items):
            if str(existing.get("id")) == str(item.get("id")):
                items[idx] = stored
                return
        if prepend:
            items.insert(0, stored)
        else:
            items.append(stored)

    def remove(self, collection: str, item_id: str) -> bool:
        items = self.items(collection)
        kept = [i for i in items if str(i.get("id")) != str(item_id)]
        setattr(self, collection, kept)
        return len(kept) != len(items)

    # --- sync ledger ---

    def mark(self, data_type: str, item_id: str, state: SyncState, message: Optional[str] = None) -> None:
        self.sync[(data_type, str(item_id))] = SyncEntry(
            data_type=data_type,
            item_id=str(item_id),
            state=state,
            updated_at=now_local(),
            message=message,
        )

    def sync_state(self, data_type: str, item_id: str) -> Optional[SyncState]:
        entry = self.sync.get((data_type, str(item_id)))
        return entry.state if entry else None

    def unsettled(self) -> list[SyncEntry]:
        return [e for e in self.sync.values() if e.state != SyncState.CONFIRMED]
