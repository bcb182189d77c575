from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    STUDENT = "STUDENT"
    SOCIAL_WORKER = "SOCIAL_WORKER"


class AttendanceStatus(str, Enum):
    """Attendance status codes.

    The remote sheet stores the human labels from `wire_label`; reads accept
    either form through `from_wire`.
    """

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    LEAVE = "LEAVE"
    ABSENT = "ABSENT"

    @property
    def wire_label(self) -> str:
        return _WIRE_LABELS[self]

    @classmethod
    def from_wire(cls, value: str) -> "AttendanceStatus":
        for status, label in _WIRE_LABELS.items():
            if value == label:
                return status
        return cls(value)


_WIRE_LABELS = {
    AttendanceStatus.ON_TIME: "準時",
    AttendanceStatus.LATE: "遲到",
    AttendanceStatus.LEAVE: "請假",
    AttendanceStatus.ABSENT: "無故缺席",
}


class SyncState(str, Enum):
    """State of an optimistic cache write against the remote store."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    UNCONFIRMED = "UNCONFIRMED"
