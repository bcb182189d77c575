from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_key(self, *, course_id: str, student_id: str, session_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Store `record`, replacing any record with the same (course, student, session date).

        The stored record keeps the id of the one it replaced.
        """

        raise NotImplementedError
