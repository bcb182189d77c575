from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import epoch_millis, now_local
from ..common.validators import require_non_empty
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from .model import Announcement
from .repository import AnnouncementRepository


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    def list_recent(self, *, limit: Optional[int] = None) -> list[Announcement]:
        items = list(self._announcements.list_all())
        items.sort(key=lambda a: (a.date, a.announcement_id), reverse=True)
        return items[:limit] if limit else items

    def save(
        self,
        *,
        author: User,
        title: str,
        content: str,
        link: str = "",
        announcement_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Announcement:
        if not author.is_admin:
            raise AuthorizationError("You do not have permission")

        now = now or now_local()
        announcement = Announcement(
            announcement_id=(announcement_id or "").strip() or str(epoch_millis(now)),
            title=require_non_empty(title, "Title"),
            content=require_non_empty(content, "Content"),
            date=now.date().strftime("%Y-%m-%d"),
            author_name=author.name,
            link=(link or "").strip(),
        )
        self._announcements.save(announcement)
        return announcement

    def delete(self, announcement_id: str, *, author: User) -> None:
        if not author.is_admin:
            raise AuthorizationError("You do not have permission")
        if not self._announcements.get_by_id(announcement_id):
            raise ValidationError("Announcement does not exist")
        self._announcements.delete(announcement_id)
