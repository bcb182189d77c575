from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class PassportEntry:
    """Domain entity: a student's journal entry (learning record)."""

    entry_id: str
    student_id: str
    title: str
    content: str
    date: str
    course_id: Optional[str] = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    image_urls: tuple[str, ...] = field(default_factory=tuple)
    is_public: bool = True
