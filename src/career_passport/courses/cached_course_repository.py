from __future__ import annotations

from typing import Any, Optional, Sequence

from ..store.storage import StorageSession
from .model import Course
from .repository import CourseRepository


def _opt_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def course_from_wire(r: dict) -> Course:
    start_date = r.get("startDate") or ""
    return Course(
        course_id=str(r["id"]),
        title=r.get("title") or "",
        description=r.get("description") or "",
        start_date=start_date,
        end_date=r.get("endDate") or start_date,
        session_dates=tuple(r.get("sessionDates") or ()),
        start_time=r.get("startTime") or "",
        location=r.get("location") or "",
        location_lat=_opt_float(r.get("locationLat")),
        location_lng=_opt_float(r.get("locationLng")),
        check_in_radius=_opt_float(r.get("checkInRadius")),
        category=r.get("category") or "",
        instructor=r.get("instructor") or "",
        image_url=r.get("imageUrl"),
        capacity=int(r.get("capacity") or 0),
        enrolled_count=int(r.get("enrolledCount") or 0),
        tags=tuple(r.get("tags") or ()),
        google_form_url=r.get("googleFormUrl") or "",
    )


def course_to_wire(c: Course) -> dict:
    data = {
        "id": c.course_id,
        "title": c.title,
        "description": c.description,
        "startDate": c.start_date,
        "endDate": c.end_date,
        "sessionDates": list(c.session_dates),
        "startTime": c.start_time,
        "location": c.location,
        "locationLat": c.location_lat,
        "locationLng": c.location_lng,
        "checkInRadius": c.check_in_radius,
        "category": c.category,
        "instructor": c.instructor,
        "imageUrl": c.image_url,
        "capacity": c.capacity,
        "enrolledCount": c.enrolled_count,
        "tags": list(c.tags),
        "googleFormUrl": c.google_form_url,
    }
    return {k: v for k, v in data.items() if v is not None}


class CachedCourseRepository(CourseRepository):
    def __init__(self, storage: StorageSession):
        self._storage = storage

    def list_all(self) -> Sequence[Course]:
        return [course_from_wire(r) for r in self._storage.cache.courses]

    def get_by_id(self, course_id: str) -> Optional[Course]:
        r = self._storage.cache.find("courses", course_id)
        return course_from_wire(r) if r else None

    def save(self, course: Course) -> None:
        wire = course_to_wire(course)
        self._storage.cache.upsert("courses", wire)
        self._storage.save("course", wire)

    def delete(self, course_id: str) -> bool:
        removed = self._storage.cache.remove("courses", course_id)
        self._storage.save("delete_course", {"id": course_id})
        return removed
