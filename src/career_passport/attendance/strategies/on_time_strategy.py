from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Checked in before the grace period ran out."""

    def decide(self, *, now: datetime, session_start: Optional[datetime], grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)
