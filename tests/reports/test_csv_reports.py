import csv
import io
from datetime import datetime

import pytest

from career_passport.attendance.cached_attendance_repository import CachedAttendanceRepository
from career_passport.attendance.service import AttendanceService
from career_passport.core.enums import AttendanceStatus, Role
from career_passport.core.exceptions import AuthorizationError
from career_passport.courses.cached_course_repository import CachedCourseRepository
from career_passport.courses.service import CourseService
from career_passport.entries.cached_entry_repository import CachedEntryRepository
from career_passport.entries.service import EntryService
from career_passport.reports.service import ReportData, ReportService, render_csv
from career_passport.users.cached_user_repository import CachedUserRepository
from career_passport.users.service import UserService


@pytest.fixture
def services(worker_storage):
    users = CachedUserRepository(worker_storage)
    courses = CachedCourseRepository(worker_storage)
    attendance = AttendanceService(CachedAttendanceRepository(worker_storage), courses)
    reports = ReportService(
        users,
        UserService(users, EntryService(CachedEntryRepository(worker_storage))),
        CourseService(courses),
        attendance,
    )
    return reports, attendance


def _rows(payload: bytes) -> list[list[str]]:
    assert payload.startswith(b"\xef\xbb\xbf")
    return list(csv.reader(io.StringIO(payload.decode("utf-8-sig"))))


def test_render_csv_quotes_and_escapes():
    data = ReportData(fieldnames=["name"], rows=[{"name": 'Amy "A" Lin'}])

    assert _rows(render_csv(data)) == [["name"], ['Amy "A" Lin']]
    assert b'"Amy ""A"" Lin"' in render_csv(data)


def test_student_directory_csv(services):
    reports, _ = services

    rows = _rows(render_csv(reports.student_directory(current_role=Role.SOCIAL_WORKER)))

    assert rows[0] == ["name", "email", "school", "phone", "passport_count"]
    assert rows[1] == ["Amy", "amy@example.org", "Grade 10", "", "0"]


def test_course_roster_csv(services):
    reports, attendance = services
    attendance.set_manual_status(
        course_id="c1",
        student_id="u_student",
        session_date="2025-03-10",
        status=AttendanceStatus.LATE,
        current_role=Role.SOCIAL_WORKER,
        now=datetime(2025, 3, 10, 9, 40),
    )

    rows = _rows(render_csv(reports.course_roster("c1", current_role=Role.SOCIAL_WORKER)))

    assert rows[1] == ["2025-03-10", "Amy", "amy@example.org", "遲到", "yes", "09:40"]


def test_roster_is_for_social_workers_only(services):
    reports, _ = services

    with pytest.raises(AuthorizationError):
        reports.course_roster("c1", current_role=Role.STUDENT)
