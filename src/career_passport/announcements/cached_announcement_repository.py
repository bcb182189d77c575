from __future__ import annotations

from typing import Optional, Sequence

from ..store.storage import StorageSession
from .model import Announcement
from .repository import AnnouncementRepository


def announcement_from_wire(r: dict) -> Announcement:
    return Announcement(
        announcement_id=str(r["id"]),
        title=r.get("title") or "",
        content=r.get("content") or "",
        date=r.get("date") or "",
        author_name=r.get("authorName") or "",
        link=r.get("link") or "",
    )


def announcement_to_wire(a: Announcement) -> dict:
    return {
        "id": a.announcement_id,
        "title": a.title,
        "content": a.content,
        "date": a.date,
        "authorName": a.author_name,
        "link": a.link,
    }


class CachedAnnouncementRepository(AnnouncementRepository):
    def __init__(self, storage: StorageSession):
        self._storage = storage

    def list_all(self) -> Sequence[Announcement]:
        return [announcement_from_wire(r) for r in self._storage.cache.announcements]

    def get_by_id(self, announcement_id: str) -> Optional[Announcement]:
        r = self._storage.cache.find("announcements", announcement_id)
        return announcement_from_wire(r) if r else None

    def save(self, announcement: Announcement) -> None:
        wire = announcement_to_wire(announcement)
        self._storage.cache.upsert("announcements", wire, prepend=True)
        self._storage.save("announcement", wire)

    def delete(self, announcement_id: str) -> bool:
        removed = self._storage.cache.remove("announcements", announcement_id)
        self._storage.save("delete_announcement", {"id": announcement_id})
        return removed
