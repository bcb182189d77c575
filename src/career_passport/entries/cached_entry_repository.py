from __future__ import annotations

from typing import Optional, Sequence

from ..store.storage import StorageSession
from .model import PassportEntry
from .repository import EntryRepository


def entry_from_wire(r: dict) -> PassportEntry:
    return PassportEntry(
        entry_id=str(r["id"]),
        student_id=str(r.get("studentId") or ""),
        course_id=r.get("courseId") or None,
        title=r.get("title") or "",
        content=r.get("content") or "",
        date=r.get("date") or "",
        tags=tuple(r.get("tags") or ()),
        image_urls=tuple(r.get("imageUrls") or ()),
        is_public=bool(r.get("isPublic", True)),
    )


def entry_to_wire(e: PassportEntry) -> dict:
    data = {
        "id": e.entry_id,
        "studentId": e.student_id,
        "title": e.title,
        "content": e.content,
        "date": e.date,
        "tags": list(e.tags),
        "imageUrls": list(e.image_urls),
        "isPublic": e.is_public,
    }
    if e.course_id:
        data["courseId"] = e.course_id
    return data


class CachedEntryRepository(EntryRepository):
    def __init__(self, storage: StorageSession):
        self._storage = storage

    def list_all(self) -> Sequence[PassportEntry]:
        return [entry_from_wire(r) for r in self._storage.cache.entries]

    def list_for_student(self, student_id: str) -> Sequence[PassportEntry]:
        return [entry_from_wire(r) for r in self._storage.cache.entries if str(r.get("studentId")) == str(student_id)]

    def get_by_id(self, entry_id: str) -> Optional[PassportEntry]:
        r = self._storage.cache.find("entries", entry_id)
        return entry_from_wire(r) if r else None

    def save(self, entry: PassportEntry) -> None:
        wire = entry_to_wire(entry)
        self._storage.cache.upsert("entries", wire, prepend=True)
        self._storage.save("entry", wire)

    def delete(self, entry_id: str) -> bool:
        removed = self._storage.cache.remove("entries", entry_id)
        self._storage.save("delete_entry", {"id": entry_id})
        return removed
