from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

import pytest

from career_passport.attendance.model import AttendanceRecord
from career_passport.attendance.service import AttendanceService
from career_passport.core.enums import AttendanceStatus, Role
from career_passport.core.exceptions import (
    AuthorizationError,
    MissingCoordinatesError,
    OutOfRangeError,
    ValidationError,
)
from career_passport.courses.model import Course
from career_passport.geo.location import LocationReading

LAT, LNG = 25.0330, 121.5654
ON_SITE = LocationReading(latitude=LAT, longitude=LNG)
FAR_AWAY = LocationReading(latitude=LAT + math.degrees(500 / 6371000.0), longitude=LNG)


@dataclass
class InMemoryCourses:
    courses: dict[str, Course]

    def get_by_id(self, course_id: str) -> Optional[Course]:
        return self.courses.get(course_id)


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[str, str, str], AttendanceRecord] = {}
        self.writes = 0

    def list_all(self):
        return list(self._by_key.values())

    def get_for_key(self, *, course_id: str, student_id: str, session_date: str) -> Optional[AttendanceRecord]:
        return self._by_key.get((course_id, student_id, session_date))

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        existing = self._by_key.get(record.key)
        if existing:
            record = replace(record, record_id=existing.record_id)
        self._by_key[record.key] = record
        self.writes += 1
        return record


def _course(course_id: str = "c1", **overrides) -> Course:
    fields = dict(
        course_id=course_id,
        title="Bakery visit",
        description="",
        start_date="2025-03-10",
        end_date="2025-03-10",
        session_dates=("2025-03-10",),
        start_time="09:00",
        location="",
        category="",
        instructor="TBD",
        capacity=20,
        location_lat=LAT,
        location_lng=LNG,
        check_in_radius=100,
    )
    fields.update(overrides)
    return Course(**fields)


def _service(*courses: Course):
    attendance = InMemoryAttendance()
    courses = courses or (_course(),)
    svc = AttendanceService(attendance, InMemoryCourses({c.course_id: c for c in courses}))
    return svc, attendance


def test_check_in_on_site_on_time():
    svc, repo = _service()

    result = svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 5))

    assert result.record.status == AttendanceStatus.ON_TIME
    assert result.record.is_manual is False
    assert result.preserved is False
    assert repo.get_for_key(course_id="c1", student_id="s1", session_date="2025-03-10") == result.record


def test_check_in_late():
    svc, _ = _service()

    result = svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 16))

    assert result.record.status == AttendanceStatus.LATE


def test_check_in_out_of_range_writes_nothing():
    svc, repo = _service()

    with pytest.raises(OutOfRangeError):
        svc.check_in("s1", "c1", FAR_AWAY, now=datetime(2025, 3, 10, 9, 0))

    assert repo.writes == 0


def test_check_in_requires_course_coordinates():
    svc, repo = _service(_course(location_lat=None, location_lng=None))

    with pytest.raises(MissingCoordinatesError):
        svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 0))
    assert repo.writes == 0


def test_check_in_requires_session_today():
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 11, 9, 0))


def test_second_check_in_replaces_first_keeping_one_record():
    svc, repo = _service()

    first = svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 5))
    second = svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 30))

    assert len(repo.list_all()) == 1
    assert second.record.record_id == first.record.record_id
    assert second.record.status == AttendanceStatus.LATE
    assert second.record.check_in_time == datetime(2025, 3, 10, 9, 30)


@pytest.mark.parametrize("status", list(AttendanceStatus))
def test_manual_status_is_read_back(status):
    svc, _ = _service()

    svc.set_manual_status(
        course_id="c1",
        student_id="s1",
        session_date="2025-03-10",
        status=status,
        current_role=Role.SOCIAL_WORKER,
        now=datetime(2025, 3, 10, 18, 0),
    )

    record = svc.record_for(course_id="c1", student_id="s1", session_date="2025-03-10")
    assert record.status == status
    assert record.is_manual is True


def test_manual_override_keeps_id_and_check_in_time():
    svc, repo = _service()
    gps = svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 20))

    manual = svc.set_manual_status(
        course_id="c1",
        student_id="s1",
        session_date="2025-03-10",
        status=AttendanceStatus.ON_TIME,
        current_role=Role.SOCIAL_WORKER,
        now=datetime(2025, 3, 10, 18, 0),
    )

    assert manual.record_id == gps.record.record_id
    assert manual.check_in_time == datetime(2025, 3, 10, 9, 20)
    assert len(repo.list_all()) == 1


def test_manual_status_for_other_session_date():
    svc, _ = _service()

    record = svc.set_manual_status(
        course_id="c1",
        student_id="s1",
        session_date="2025-02-01",
        status=AttendanceStatus.ABSENT,
        current_role=Role.SOCIAL_WORKER,
        now=datetime(2025, 3, 10, 18, 0),
    )

    assert record.session_date == "2025-02-01"
    assert svc.status_map("s1", "2025-02-01") == {"c1": AttendanceStatus.ABSENT}


def test_gps_check_in_does_not_overwrite_manual_record():
    svc, repo = _service()
    svc.set_manual_status(
        course_id="c1",
        student_id="s1",
        session_date="2025-03-10",
        status=AttendanceStatus.LEAVE,
        current_role=Role.SOCIAL_WORKER,
        now=datetime(2025, 3, 10, 8, 0),
    )
    writes = repo.writes

    result = svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 0))

    assert result.preserved is True
    assert result.record.status == AttendanceStatus.LEAVE
    assert repo.writes == writes


def test_students_cannot_set_manual_status():
    svc, _ = _service()

    with pytest.raises(AuthorizationError):
        svc.set_manual_status(
            course_id="c1",
            student_id="s1",
            session_date="2025-03-10",
            status=AttendanceStatus.ON_TIME,
            current_role=Role.STUDENT,
        )


def test_queries_summary_and_history():
    second = _course("c2", session_dates=("2025-03-10", "2025-03-17"))
    svc, _ = _service(_course(), second)
    svc.check_in("s1", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 0))
    svc.check_in("s2", "c1", ON_SITE, now=datetime(2025, 3, 10, 9, 30))
    svc.check_in("s1", "c2", ON_SITE, now=datetime(2025, 3, 10, 9, 5))
    svc.check_in("s1", "c2", ON_SITE, now=datetime(2025, 3, 17, 9, 5))

    summary = svc.course_summary("c1")
    assert (summary.on_time, summary.late, summary.attended) == (1, 1, 2)

    assert [r.student_id for r in svc.course_records("c1")] == ["s1", "s2"]
    assert len(svc.course_records("c2", session_date="2025-03-17")) == 1
    assert [r.session_date for r in svc.history("s1")] == ["2025-03-17", "2025-03-10", "2025-03-10"]
    assert svc.status_map("s1", "2025-03-10") == {"c1": AttendanceStatus.ON_TIME, "c2": AttendanceStatus.ON_TIME}
