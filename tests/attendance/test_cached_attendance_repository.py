from datetime import datetime

from career_passport.attendance.cached_attendance_repository import CachedAttendanceRepository, record_from_wire
from career_passport.attendance.model import AttendanceRecord
from career_passport.core.enums import AttendanceStatus, SyncState


def _record(record_id: str, status: AttendanceStatus, *, manual: bool = False) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=record_id,
        course_id="c1",
        student_id="u_student",
        check_in_time=datetime(2025, 3, 10, 9, 3),
        session_date="2025-03-10",
        status=status,
        is_manual=manual,
    )


def test_upsert_writes_wire_label_and_confirms(student_storage, fake_conn):
    repo = CachedAttendanceRepository(student_storage)

    repo.upsert(_record("a1", AttendanceStatus.LATE))

    saved = fake_conn.saves("attendance")[-1]
    assert saved["status"] == "遲到"
    assert saved["checkInTime"] == "2025-03-10T09:03:00"
    assert student_storage.cache.sync_state("attendance", "a1") == SyncState.CONFIRMED


def test_upsert_on_same_key_replaces_and_keeps_id(student_storage):
    repo = CachedAttendanceRepository(student_storage)
    repo.upsert(_record("a1", AttendanceStatus.ON_TIME))

    stored = repo.upsert(_record("a2", AttendanceStatus.LEAVE, manual=True))

    assert stored.record_id == "a1"
    assert len(repo.list_all()) == 1
    found = repo.get_for_key(course_id="c1", student_id="u_student", session_date="2025-03-10")
    assert found.status == AttendanceStatus.LEAVE
    assert found.is_manual is True


def test_reads_browser_timestamps_and_status_codes():
    rec = record_from_wire(
        {
            "id": "x",
            "courseId": "c1",
            "studentId": "s1",
            "checkInTime": "2025-03-10T01:03:00.000Z",
            "sessionDate": "2025-03-10",
            "status": "ABSENT",
        }
    )
    assert rec.status == AttendanceStatus.ABSENT
    assert rec.is_manual is False
    assert rec.check_in_time.tzinfo is None


def test_row_without_check_in_time_falls_back_to_session_midnight():
    rec = record_from_wire(
        {"id": "1", "courseId": "c", "studentId": "s", "sessionDate": "2025-03-10", "status": "ABSENT", "isManual": True}
    )
    assert rec.check_in_time == datetime(2025, 3, 10, 0, 0)
    assert rec.status == AttendanceStatus.ABSENT


def test_list_all_skips_unreadable_rows(student_storage):
    student_storage.cache.attendance = [
        {"id": "ok", "courseId": "c1", "studentId": "u_student", "sessionDate": "2025-03-10", "status": "準時"},
        {"id": "bad_status", "courseId": "c1", "studentId": "u_student", "sessionDate": "2025-03-11", "status": "?"},
        {"id": "bad_date", "courseId": "c1", "studentId": "u_student", "sessionDate": "", "status": "LATE"},
        {"courseId": "c1", "studentId": "u_student", "sessionDate": "2025-03-12", "checkInTime": "2025-03-12T09:00:00"},
    ]
    repo = CachedAttendanceRepository(student_storage)

    assert [r.record_id for r in repo.list_all()] == ["ok"]
