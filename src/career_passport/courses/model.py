from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Course:
    """Domain entity: a career-exploration course and its session dates.

    `location_lat`/`location_lng` form the GPS check-in point; both are None
    when the course only supports on-site manual sign-in.
    """

    course_id: str
    title: str
    description: str
    start_date: str
    end_date: str
    session_dates: tuple[str, ...]
    start_time: str
    location: str
    category: str
    instructor: str
    capacity: int
    enrolled_count: int = 0
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    check_in_radius: Optional[float] = None
    image_url: Optional[str] = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    google_form_url: str = ""

    @property
    def has_check_in_point(self) -> bool:
        return self.location_lat is not None and self.location_lng is not None

    def has_session_on(self, session_date: str) -> bool:
        return session_date in self.session_dates
