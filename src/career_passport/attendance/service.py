from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import epoch_millis, now_local
from ..common.validators import require_iso_date
from ..core.constants import LATE_GRACE_MINUTES
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..courses.repository import CourseRepository
from ..geo.location import LocationReading
from .checkin import CheckInPoint, evaluate_check_in, session_start_at
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, CourseAttendanceSummary
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _new_record_id(now: datetime, student_id: str) -> str:
    # Roll call writes many students within the same millisecond.
    return f"{epoch_millis(now)}_{student_id}"


@dataclass(frozen=True)
class CheckInResult:
    """Outcome of a GPS check-in.

    `preserved` is True when a social worker had already recorded this
    session by hand; that record is returned untouched.
    """

    record: AttendanceRecord
    distance_m: float
    radius_m: float
    preserved: bool = False
    note: Optional[str] = None


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        courses: CourseRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        grace_minutes: int = LATE_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._courses = courses
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._grace_minutes = int(grace_minutes)

    def check_in(
        self,
        student_id: str,
        course_id: str,
        reading: LocationReading,
        *,
        now: datetime | None = None,
    ) -> CheckInResult:
        now = now or now_local()
        today = now.date().strftime("%Y-%m-%d")

        course = self._courses.get_by_id(course_id)
        if not course:
            raise ValidationError("Course does not exist")
        if not course.has_session_on(today):
            raise ValidationError("This course has no session today")

        point = CheckInPoint.from_course(course)
        decision = evaluate_check_in(
            reading,
            point,
            session_start_at(course, today),
            now,
            self._grace_minutes,
            factory=self._factory,
        )

        existing = self._attendance.get_for_key(course_id=course_id, student_id=student_id, session_date=today)
        if existing and existing.is_manual:
            logger.info("Keeping manual attendance %s for %s on %s", existing.status.value, student_id, today)
            return CheckInResult(
                record=existing,
                distance_m=decision.distance_m,
                radius_m=decision.radius_m,
                preserved=True,
            )

        record = self._attendance.upsert(
            AttendanceRecord(
                record_id=existing.record_id if existing else _new_record_id(now, student_id),
                course_id=course_id,
                student_id=student_id,
                check_in_time=now,
                session_date=today,
                status=decision.status,
                is_manual=False,
            )
        )
        return CheckInResult(
            record=record,
            distance_m=decision.distance_m,
            radius_m=decision.radius_m,
            note=decision.note,
        )

    def set_manual_status(
        self,
        *,
        course_id: str,
        student_id: str,
        session_date: str,
        status: AttendanceStatus,
        current_role: Role,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Social worker roll call; no distance or time rules apply."""

        if current_role != Role.SOCIAL_WORKER:
            raise AuthorizationError("You do not have permission")

        session_date = require_iso_date(session_date, "Session date")
        if not self._courses.get_by_id(course_id):
            raise ValidationError("Course does not exist")

        now = now or now_local()
        decision = self._factory.for_manual(status).decide(
            now=now, session_start=None, grace_minutes=self._grace_minutes
        )
        existing = self._attendance.get_for_key(course_id=course_id, student_id=student_id, session_date=session_date)

        return self._attendance.upsert(
            AttendanceRecord(
                record_id=existing.record_id if existing else _new_record_id(now, student_id),
                course_id=course_id,
                student_id=student_id,
                check_in_time=existing.check_in_time if existing else now,
                session_date=session_date,
                status=decision.status,
                is_manual=True,
            )
        )

    # --- queries ---

    def record_for(self, *, course_id: str, student_id: str, session_date: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_key(course_id=course_id, student_id=student_id, session_date=session_date)

    def status_map(self, student_id: str, session_date: str) -> dict[str, AttendanceStatus]:
        """course_id -> status for one student on one date."""

        return {
            r.course_id: r.status
            for r in self._attendance.list_all()
            if r.student_id == student_id and r.session_date == session_date
        }

    def course_records(self, course_id: str, *, session_date: Optional[str] = None) -> list[AttendanceRecord]:
        items = [
            r
            for r in self._attendance.list_all()
            if r.course_id == course_id and (session_date is None or r.session_date == session_date)
        ]
        items.sort(key=lambda r: (r.session_date, r.check_in_time))
        return items

    def course_summary(self, course_id: str) -> CourseAttendanceSummary:
        counts = {s: 0 for s in AttendanceStatus}
        for r in self._attendance.list_all():
            if r.course_id == course_id:
                counts[r.status] += 1
        return CourseAttendanceSummary(
            course_id=course_id,
            on_time=counts[AttendanceStatus.ON_TIME],
            late=counts[AttendanceStatus.LATE],
            leave=counts[AttendanceStatus.LEAVE],
            absent=counts[AttendanceStatus.ABSENT],
        )

    def history(self, student_id: str) -> list[AttendanceRecord]:
        items = [r for r in self._attendance.list_all() if r.student_id == student_id]
        items.sort(key=lambda r: (r.session_date, r.check_in_time), reverse=True)
        return items
