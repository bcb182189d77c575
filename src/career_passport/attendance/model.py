from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for one course session."""

    record_id: str
    course_id: str
    student_id: str
    check_in_time: datetime
    session_date: str
    status: AttendanceStatus
    is_manual: bool = False

    @property
    def key(self) -> tuple[str, str, str]:
        return self.course_id, self.student_id, self.session_date


@dataclass(frozen=True)
class CourseAttendanceSummary:
    """Read-model for the admin dashboard counts."""

    course_id: str
    on_time: int
    late: int
    leave: int
    absent: int

    @property
    def attended(self) -> int:
        return self.on_time + self.late
