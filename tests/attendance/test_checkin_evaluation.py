import math
from datetime import datetime

import pytest

from career_passport.attendance.checkin import CheckInPoint, evaluate_check_in, session_start_at
from career_passport.core.enums import AttendanceStatus
from career_passport.core.exceptions import MissingCoordinatesError, OutOfRangeError
from career_passport.courses.model import Course
from career_passport.geo.distance import haversine_m
from career_passport.geo.location import LocationReading

LAT, LNG = 25.0330, 121.5654
START = datetime(2025, 3, 10, 9, 0)


def _north_of_point(meters: float) -> LocationReading:
    return LocationReading(latitude=LAT + math.degrees(meters / 6371000.0), longitude=LNG)


def _course(**overrides) -> Course:
    fields = dict(
        course_id="c1",
        title="Bakery visit",
        description="",
        start_date="2025-03-10",
        end_date="2025-03-10",
        session_dates=("2025-03-10",),
        start_time="09:00",
        location="",
        category="",
        instructor="TBD",
        capacity=20,
        location_lat=LAT,
        location_lng=LNG,
        check_in_radius=100,
    )
    fields.update(overrides)
    return Course(**fields)


def test_within_radius_before_threshold_is_on_time():
    point = CheckInPoint(LAT, LNG, 100)
    decision = evaluate_check_in(_north_of_point(50), point, START, datetime(2025, 3, 10, 9, 14))

    assert decision.status == AttendanceStatus.ON_TIME
    assert decision.distance_m == pytest.approx(50, abs=0.01)
    assert decision.radius_m == 100


def test_distance_equal_to_radius_is_accepted():
    reading = _north_of_point(100)
    exact = haversine_m(reading.latitude, reading.longitude, LAT, LNG)
    point = CheckInPoint(LAT, LNG, exact)

    decision = evaluate_check_in(reading, point, START, datetime(2025, 3, 10, 9, 0))

    assert decision.status == AttendanceStatus.ON_TIME


def test_just_outside_radius_is_rejected_with_distance():
    point = CheckInPoint(LAT, LNG, 100)

    with pytest.raises(OutOfRangeError) as exc:
        evaluate_check_in(_north_of_point(101), point, START, datetime(2025, 3, 10, 9, 0))

    assert exc.value.to_dict() == {
        "reason": "out_of_range",
        "message": str(exc.value),
        "distance_m": 101,
        "radius_m": 100,
    }


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2025, 3, 10, 9, 14), AttendanceStatus.ON_TIME),
        (datetime(2025, 3, 10, 9, 15), AttendanceStatus.ON_TIME),
        (datetime(2025, 3, 10, 9, 16), AttendanceStatus.LATE),
    ],
)
def test_late_threshold_is_fifteen_minutes_inclusive(now, expected):
    point = CheckInPoint(LAT, LNG, 100)
    assert evaluate_check_in(_north_of_point(10), point, START, now).status == expected


def test_point_defaults_radius_when_unset_or_zero():
    assert CheckInPoint.from_course(_course(check_in_radius=None)).radius_m == 100
    assert CheckInPoint.from_course(_course(check_in_radius=0)).radius_m == 100
    assert CheckInPoint.from_course(_course(check_in_radius=250)).radius_m == 250


def test_point_requires_both_coordinates():
    with pytest.raises(MissingCoordinatesError):
        CheckInPoint.from_course(_course(location_lng=None))


def test_zero_coordinates_are_a_valid_point():
    point = CheckInPoint.from_course(_course(location_lat=0.0, location_lng=0.0))
    assert (point.latitude, point.longitude) == (0.0, 0.0)


def test_session_start_uses_course_start_time():
    assert session_start_at(_course(start_time="13:30"), "2025-03-11") == datetime(2025, 3, 11, 13, 30)
    assert session_start_at(_course(start_time=""), "2025-03-11") == datetime(2025, 3, 11, 9, 0)


def test_session_start_accepts_seconds_from_the_sheet():
    assert session_start_at(_course(start_time="09:00:00"), "2025-03-11") == datetime(2025, 3, 11, 9, 0)
