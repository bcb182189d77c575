from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.manual_strategy import ManualStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, session_start: datetime, grace_minutes: int) -> AttendanceStrategy:
        # Inclusive: arriving exactly at start + grace still counts as on time.
        if now <= session_start + timedelta(minutes=grace_minutes):
            return OnTimeStrategy()
        return LateStrategy()

    def for_manual(self, status: AttendanceStatus) -> AttendanceStrategy:
        return ManualStrategy(status)
