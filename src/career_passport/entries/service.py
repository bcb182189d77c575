from __future__ import annotations

import base64
import binascii
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import epoch_millis, now_local
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_ENTRY_TAG, MAX_ENTRY_IMAGE_BYTES
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import User
from .model import PassportEntry
from .repository import EntryRepository


def _image_size(data_url: str) -> int:
    """Decoded size of a `data:<mime>;base64,<payload>` image."""

    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:image/") or ";base64" not in header:
        raise ValidationError("Image must be an uploaded picture")
    try:
        return len(base64.b64decode(payload, validate=True))
    except (binascii.Error, ValueError):
        raise ValidationError("Image data is corrupted")


class EntryService:
    """Use cases: students write journal entries about what they explored."""

    def __init__(self, entries: EntryRepository):
        self._entries = entries

    def list_for_student(self, student_id: str) -> list[PassportEntry]:
        items = list(self._entries.list_for_student(student_id))
        items.sort(key=lambda e: (e.date, e.entry_id), reverse=True)
        return items

    def count_by_student(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for e in self._entries.list_all():
            counts[e.student_id] = counts.get(e.student_id, 0) + 1
        return counts

    def create(
        self,
        *,
        student: User,
        title: str,
        content: str,
        course_id: Optional[str] = None,
        image: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PassportEntry:
        if student.is_admin:
            raise AuthorizationError("Only students keep a passport")

        now = now or now_local()
        title = require_non_empty(title, "Title")
        content = require_non_empty(content, "Content")

        image_urls: tuple[str, ...] = ()
        if image:
            if _image_size(image) > MAX_ENTRY_IMAGE_BYTES:
                raise ValidationError("Image is too large, choose a picture under 2 MB")
            image_urls = (image,)

        entry = PassportEntry(
            entry_id=str(epoch_millis(now)),
            student_id=student.user_id,
            course_id=(course_id or "").strip() or None,
            title=title,
            content=content,
            date=now.date().strftime("%Y-%m-%d"),
            tags=(DEFAULT_ENTRY_TAG,),
            image_urls=image_urls,
            is_public=True,
        )
        self._entries.save(entry)
        return entry

    def delete(self, *, current_user: User, entry_id: str) -> None:
        entry = self._entries.get_by_id(entry_id)
        if not entry:
            raise ValidationError("Entry does not exist")
        if not current_user.is_admin and entry.student_id != current_user.user_id:
            raise AuthorizationError("You can only delete your own entries")
        self._entries.delete(entry_id)
