from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.constants import LOCATION_HIGH_ACCURACY, LOCATION_TIMEOUT_MS
from ..core.exceptions import LocationUnavailableError

SENSOR_ERRORS = {
    "PERMISSION_DENIED": "Location permission was denied. Allow location access in the browser and try again.",
    "POSITION_UNAVAILABLE": "Your position is unavailable. Check that the device GPS is switched on.",
    "TIMEOUT": "Locating took too long. Move to an open area and try again.",
    "UNSUPPORTED": "This device does not support geolocation.",
}


@dataclass(frozen=True)
class LocationReading:
    """A position reported by the student's device."""

    latitude: float
    longitude: float
    accuracy: Optional[float] = None


@dataclass(frozen=True)
class LocationRequestOptions:
    """How the front-end must query the device sensor."""

    enable_high_accuracy: bool = LOCATION_HIGH_ACCURACY
    timeout_ms: int = LOCATION_TIMEOUT_MS

    def to_dict(self) -> dict:
        return {"enableHighAccuracy": self.enable_high_accuracy, "timeout": self.timeout_ms}


def parse_reading(payload: Optional[Mapping[str, Any]]) -> LocationReading:
    """Build a reading from the browser's check-in payload.

    The browser either sends `latitude`/`longitude` (and optionally
    `accuracy`) or an `error` code from the geolocation API.
    """
    payload = payload or {}

    error = payload.get("error")
    if error:
        cause = str(error).strip().upper()
        raise LocationUnavailableError(cause, SENSOR_ERRORS.get(cause))

    try:
        latitude = float(payload["latitude"])
        longitude = float(payload["longitude"])
    except (KeyError, TypeError, ValueError):
        raise LocationUnavailableError("POSITION_UNAVAILABLE", SENSOR_ERRORS["POSITION_UNAVAILABLE"])

    accuracy = payload.get("accuracy")
    try:
        accuracy = float(accuracy) if accuracy is not None else None
    except (TypeError, ValueError):
        accuracy = None

    return LocationReading(latitude=latitude, longitude=longitude, accuracy=accuracy)
