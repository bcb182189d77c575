from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Announcement:
    """Domain entity: a notice shown to every student on the dashboard."""

    announcement_id: str
    title: str
    content: str
    date: str
    author_name: str
    link: str = ""
