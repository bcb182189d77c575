from datetime import datetime

from career_passport.attendance.factory import AttendanceStrategyFactory
from career_passport.attendance.strategies.late_strategy import LateStrategy
from career_passport.attendance.strategies.manual_strategy import ManualStrategy
from career_passport.attendance.strategies.on_time_strategy import OnTimeStrategy
from career_passport.core.enums import AttendanceStatus

START = datetime(2025, 3, 10, 9, 0)


def test_factory_checkin_on_time_within_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=datetime(2025, 3, 10, 9, 14, 59), session_start=START, grace_minutes=15)

    assert isinstance(strategy, OnTimeStrategy)


def test_factory_checkin_exactly_at_threshold_is_on_time():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=datetime(2025, 3, 10, 9, 15, 0), session_start=START, grace_minutes=15)

    assert isinstance(strategy, OnTimeStrategy)


def test_factory_checkin_late_after_grace():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=datetime(2025, 3, 10, 9, 15, 1), session_start=START, grace_minutes=15)

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide(now=datetime(2025, 3, 10, 9, 40), session_start=START, grace_minutes=15)
    assert decision.status == AttendanceStatus.LATE
    assert decision.note == "40 min after start"


def test_factory_manual_returns_given_status():
    strategy = AttendanceStrategyFactory().for_manual(AttendanceStatus.LEAVE)

    assert isinstance(strategy, ManualStrategy)
    assert strategy.decide(now=START, session_start=None, grace_minutes=15).status == AttendanceStatus.LEAVE
