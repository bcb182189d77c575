from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import from_wire_datetime, parse_iso_date, to_wire_datetime
from ..core.enums import AttendanceStatus
from ..store.storage import StorageSession
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _check_in_time(raw, session_date: str) -> datetime:
    """Rows edited by hand in the sheet may lack a usable time; use the session's midnight."""

    if raw:
        try:
            return from_wire_datetime(str(raw))
        except ValueError:
            logger.warning("Unreadable checkInTime %r for session %s", raw, session_date)
    return datetime.combine(parse_iso_date(session_date), time())


def record_from_wire(r: dict) -> AttendanceRecord:
    session_date = r.get("sessionDate") or ""
    return AttendanceRecord(
        record_id=str(r["id"]),
        course_id=str(r.get("courseId") or ""),
        student_id=str(r.get("studentId") or ""),
        check_in_time=_check_in_time(r.get("checkInTime"), session_date),
        session_date=session_date,
        status=AttendanceStatus.from_wire(r.get("status") or AttendanceStatus.ON_TIME.wire_label),
        is_manual=bool(r.get("isManual", False)),
    )


def record_to_wire(a: AttendanceRecord) -> dict:
    return {
        "id": a.record_id,
        "courseId": a.course_id,
        "studentId": a.student_id,
        "checkInTime": to_wire_datetime(a.check_in_time),
        "sessionDate": a.session_date,
        "status": a.status.wire_label,
        "isManual": a.is_manual,
    }


class CachedAttendanceRepository(AttendanceRepository):
    def __init__(self, storage: StorageSession):
        self._storage = storage

    def list_all(self) -> Sequence[AttendanceRecord]:
        items = []
        for r in self._storage.cache.attendance:
            try:
                items.append(record_from_wire(r))
            except (KeyError, ValueError) as e:
                logger.warning("Skipping unreadable attendance row %s: %s", r.get("id"), e)
        return items

    def get_for_key(self, *, course_id: str, student_id: str, session_date: str) -> Optional[AttendanceRecord]:
        for r in self._storage.cache.attendance:
            if (
                str(r.get("courseId")) == course_id
                and str(r.get("studentId")) == student_id
                and r.get("sessionDate") == session_date
            ):
                return record_from_wire(r)
        return None

    def upsert(self, record: AttendanceRecord) -> AttendanceRecord:
        existing = self.get_for_key(
            course_id=record.course_id, student_id=record.student_id, session_date=record.session_date
        )
        if existing and existing.record_id != record.record_id:
            record = replace(record, record_id=existing.record_id)

        wire = record_to_wire(record)
        self._storage.cache.upsert("attendance", wire)
        self._storage.save("attendance", wire)
        return record
