from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import epoch_millis, now_local, parse_hhmm, parse_iso_date
from ..common.validators import require_iso_date, require_non_empty
from ..core.constants import (
    COURSE_IMAGE_URL_TEMPLATE,
    DEFAULT_CAPACITY,
    DEFAULT_CHECKIN_RADIUS_M,
    DEFAULT_INSTRUCTOR,
    DEFAULT_START_TIME,
)
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import Course
from .repository import CourseRepository


@dataclass(frozen=True)
class CourseDraft:
    """Form input for creating or editing a course (unset fields get defaults)."""

    title: str
    start_date: str
    course_id: Optional[str] = None
    description: str = ""
    end_date: Optional[str] = None
    session_dates: Sequence[str] = field(default_factory=tuple)
    start_time: Optional[str] = None
    location: str = ""
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    check_in_radius: Optional[float] = None
    category: Optional[str] = None
    instructor: Optional[str] = None
    image_url: Optional[str] = None
    capacity: Optional[int] = None
    enrolled_count: int = 0
    tags: Sequence[str] = field(default_factory=tuple)
    google_form_url: str = ""


def _sorted_unique(dates: Sequence[str]) -> tuple[str, ...]:
    return tuple(sorted({d for d in dates if d}))


def _require_admin(role: Role) -> None:
    if role != Role.SOCIAL_WORKER:
        raise AuthorizationError("You do not have permission")


class CourseService:
    """Use cases: social workers maintain courses and their session calendar."""

    def __init__(self, courses: CourseRepository):
        self._courses = courses

    def list_courses(self) -> list[Course]:
        return sorted(self._courses.list_all(), key=lambda c: (c.start_date, c.title))

    def get(self, course_id: str) -> Course:
        course = self._courses.get_by_id(course_id)
        if not course:
            raise ValidationError("Course does not exist")
        return course

    def courses_on(self, session_date: str) -> list[Course]:
        """Courses holding a session on the given YYYY-MM-DD date."""

        return [c for c in self.list_courses() if c.has_session_on(session_date)]

    def upcoming(self, *, today: Optional[str] = None, limit: Optional[int] = None) -> list[Course]:
        today = today or now_local().date().strftime("%Y-%m-%d")
        items = [c for c in self.list_courses() if (c.end_date or c.start_date) >= today]
        return items[:limit] if limit else items

    def save(
        self,
        draft: CourseDraft,
        *,
        current_role: Role,
        categories: Sequence[str] = (),
        now: Optional[datetime] = None,
    ) -> Course:
        _require_admin(current_role)

        title = require_non_empty(draft.title, "Course title")
        start_date = require_iso_date(draft.start_date, "Start date")
        end_date = require_iso_date(draft.end_date, "End date") if draft.end_date else start_date
        if parse_iso_date(end_date) < parse_iso_date(start_date):
            raise ValidationError("End date cannot be before start date")

        for d in draft.session_dates:
            require_iso_date(d, "Session date")
        session_dates = _sorted_unique(draft.session_dates) or (start_date,)

        start_time = (draft.start_time or "").strip() or DEFAULT_START_TIME
        try:
            start_time = parse_hhmm(start_time).strftime("%H:%M")
        except ValueError:
            raise ValidationError("Start time must be HH:MM")

        if (draft.location_lat is None) != (draft.location_lng is None):
            raise ValidationError("Latitude and longitude must be set together")

        radius = draft.check_in_radius or DEFAULT_CHECKIN_RADIUS_M
        if radius < 0:
            raise ValidationError("Check-in radius cannot be negative")

        capacity = draft.capacity if draft.capacity else DEFAULT_CAPACITY
        if capacity < 0:
            raise ValidationError("Capacity cannot be negative")

        course_id = (draft.course_id or "").strip() or str(epoch_millis(now or now_local()))
        category = (draft.category or "").strip() or (categories[0] if categories else "")

        course = Course(
            course_id=course_id,
            title=title,
            description=(draft.description or "").strip(),
            start_date=start_date,
            end_date=end_date,
            session_dates=session_dates,
            start_time=start_time,
            location=(draft.location or "").strip(),
            location_lat=draft.location_lat,
            location_lng=draft.location_lng,
            check_in_radius=float(radius),
            category=category,
            instructor=(draft.instructor or "").strip() or DEFAULT_INSTRUCTOR,
            image_url=(draft.image_url or "").strip() or COURSE_IMAGE_URL_TEMPLATE.format(seed=course_id),
            capacity=int(capacity),
            enrolled_count=int(draft.enrolled_count or 0),
            tags=tuple(t.strip() for t in draft.tags if t and t.strip()),
            google_form_url=(draft.google_form_url or "").strip(),
        )
        self._courses.save(course)
        return course

    def delete(self, course_id: str, *, current_role: Role) -> None:
        _require_admin(current_role)
        if not self._courses.get_by_id(course_id):
            raise ValidationError("Course does not exist")
        self._courses.delete(course_id)

    def add_session_date(self, course_id: str, session_date: str, *, current_role: Role) -> Course:
        _require_admin(current_role)
        session_date = require_iso_date(session_date, "Session date")
        course = self.get(course_id)
        if course.has_session_on(session_date):
            return course

        updated = replace(course, session_dates=_sorted_unique(course.session_dates + (session_date,)))
        self._courses.save(updated)
        return updated

    def remove_session_date(self, course_id: str, session_date: str, *, current_role: Role) -> Course:
        _require_admin(current_role)
        course = self.get(course_id)
        if not course.has_session_on(session_date):
            raise ValidationError("Course has no session on that date")

        updated = replace(course, session_dates=tuple(d for d in course.session_dates if d != session_date))
        self._courses.save(updated)
        return updated
