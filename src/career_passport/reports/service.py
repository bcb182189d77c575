from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Optional

from ..attendance.service import AttendanceService
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..courses.service import CourseService
from ..users.repository import UserRepository
from ..users.service import UserService


@dataclass(frozen=True)
class ReportData:
    fieldnames: list[str]
    rows: list[dict]


def render_csv(data: ReportData) -> bytes:
    """CSV with a UTF-8 BOM so spreadsheet apps pick the right encoding."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=data.fieldnames, quoting=csv.QUOTE_ALL)
    writer.writeheader()
    for row in data.rows:
        writer.writerow(row)
    return out.getvalue().encode("utf-8-sig")


class ReportService:
    def __init__(
        self,
        users: UserRepository,
        user_service: UserService,
        courses: CourseService,
        attendance: AttendanceService,
    ):
        self._users = users
        self._user_service = user_service
        self._courses = courses
        self._attendance = attendance

    def student_directory(
        self,
        *,
        current_role: Role,
        search: str = "",
        sort_key: str = "passport_count",
        descending: bool = True,
    ) -> ReportData:
        students = self._user_service.list_students(
            current_role=current_role, search=search, sort_key=sort_key, descending=descending
        )
        rows = [
            {
                "name": s.user.name,
                "email": s.user.email,
                "school": s.user.school_details or "",
                "phone": s.user.phone_number or "",
                "passport_count": s.passport_count,
            }
            for s in students
        ]
        return ReportData(fieldnames=["name", "email", "school", "phone", "passport_count"], rows=rows)

    def course_roster(
        self,
        course_id: str,
        *,
        current_role: Role,
        session_date: Optional[str] = None,
    ) -> ReportData:
        if current_role != Role.SOCIAL_WORKER:
            raise AuthorizationError("You do not have permission")

        course = self._courses.get(course_id)
        rows = []
        for r in self._attendance.course_records(course.course_id, session_date=session_date):
            student = self._users.get_by_id(r.student_id)
            rows.append(
                {
                    "session_date": r.session_date,
                    "student_name": student.name if student else r.student_id,
                    "email": student.email if student else "",
                    "status": r.status.wire_label,
                    "manual": "yes" if r.is_manual else "",
                    "check_in": r.check_in_time.strftime("%H:%M"),
                }
            )
        return ReportData(
            fieldnames=["session_date", "student_name", "email", "status", "manual", "check_in"],
            rows=rows,
        )
