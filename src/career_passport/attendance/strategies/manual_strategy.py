from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class ManualStrategy(AttendanceStrategy):
    """Status chosen by a social worker; time and place play no part."""

    def __init__(self, status: AttendanceStatus):
        self._status = status

    def decide(self, *, now: datetime, session_start: Optional[datetime], grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=self._status, note="manual")
