from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    def list_all(self) -> Sequence[Announcement]:
        raise NotImplementedError

    def get_by_id(self, announcement_id: str) -> Optional[Announcement]:
        raise NotImplementedError

    def save(self, announcement: Announcement) -> None:
        raise NotImplementedError

    def delete(self, announcement_id: str) -> bool:
        raise NotImplementedError
