from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in."""

    def decide(self, *, now: datetime, session_start: Optional[datetime], grace_minutes: int) -> StatusDecision:
        note = None
        if session_start is not None:
            minutes = int((now - session_start).total_seconds() // 60)
            note = f"{minutes} min after start"
        return StatusDecision(status=AttendanceStatus.LATE, note=note)
