"""GPS check-in eligibility.

A check-in is accepted when the device reading lies within the course
radius of the course point. Acceptance then gets an on-time or late status
from the session start plus a grace period. Both boundaries are inclusive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..core.constants import DEFAULT_CHECKIN_RADIUS_M, DEFAULT_START_TIME, LATE_GRACE_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import MissingCoordinatesError, OutOfRangeError
from ..courses.model import Course
from ..geo.distance import haversine_m
from ..geo.location import LocationReading
from .factory import AttendanceStrategyFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInPoint:
    latitude: float
    longitude: float
    radius_m: float

    @classmethod
    def from_course(cls, course: Course) -> "CheckInPoint":
        if course.location_lat is None or course.location_lng is None:
            raise MissingCoordinatesError(course.course_id)
        return cls(
            latitude=float(course.location_lat),
            longitude=float(course.location_lng),
            radius_m=float(course.check_in_radius or DEFAULT_CHECKIN_RADIUS_M),
        )


@dataclass(frozen=True)
class CheckInDecision:
    status: AttendanceStatus
    distance_m: float
    radius_m: float
    note: Optional[str] = None


def session_start_at(course: Course, session_date: str) -> datetime:
    """Start of the course's session on `session_date`, local time."""

    return datetime.combine(parse_iso_date(session_date), parse_hhmm(course.start_time or DEFAULT_START_TIME))


def evaluate_check_in(
    reading: LocationReading,
    point: CheckInPoint,
    session_start: datetime,
    now: datetime,
    grace_minutes: int = LATE_GRACE_MINUTES,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> CheckInDecision:
    distance = haversine_m(reading.latitude, reading.longitude, point.latitude, point.longitude)
    if distance > point.radius_m:
        logger.info("Check-in refused: %.1f m away, radius %.0f m", distance, point.radius_m)
        raise OutOfRangeError(distance, point.radius_m)

    strategy = (factory or AttendanceStrategyFactory()).for_checkin(
        now=now, session_start=session_start, grace_minutes=grace_minutes
    )
    decision = strategy.decide(now=now, session_start=session_start, grace_minutes=grace_minutes)
    return CheckInDecision(status=decision.status, distance_m=distance, radius_m=point.radius_m, note=decision.note)
