import pytest

from career_passport.core.exceptions import LocationUnavailableError
from career_passport.geo.location import LocationRequestOptions, parse_reading


def test_reading_with_accuracy():
    r = parse_reading({"latitude": "25.03", "longitude": 121.56, "accuracy": 12})
    assert r.latitude == 25.03
    assert r.longitude == 121.56
    assert r.accuracy == 12.0


def test_sensor_error_is_location_unavailable():
    with pytest.raises(LocationUnavailableError) as exc:
        parse_reading({"error": "permission_denied"})
    assert exc.value.cause == "PERMISSION_DENIED"
    assert exc.value.to_dict()["reason"] == "location_unavailable"


def test_missing_coordinates_in_payload():
    with pytest.raises(LocationUnavailableError):
        parse_reading({"latitude": 25.0})

    with pytest.raises(LocationUnavailableError):
        parse_reading(None)


def test_request_options_match_browser_api():
    assert LocationRequestOptions().to_dict() == {"enableHighAccuracy": True, "timeout": 5000}
