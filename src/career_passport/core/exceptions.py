from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class CheckInError(DomainError):
    """Base for reasons a GPS check-in attempt was refused."""

    reason = "check_in_failed"

    def to_dict(self) -> dict:
        return {"reason": self.reason, "message": str(self)}


class OutOfRangeError(CheckInError):
    reason = "out_of_range"

    def __init__(self, distance_m: float, radius_m: float):
        self.distance_m = float(distance_m)
        self.radius_m = float(radius_m)
        super().__init__(
            f"You are about {round(self.distance_m)} m from the course location. "
            f"Move within {round(self.radius_m)} m and try again."
        )

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["distance_m"] = round(self.distance_m)
        data["radius_m"] = round(self.radius_m)
        return data


class MissingCoordinatesError(CheckInError):
    reason = "missing_coordinates"

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__("This course has no GPS check-in point. Please sign in with the social worker on site.")


class LocationUnavailableError(CheckInError):
    reason = "location_unavailable"

    def __init__(self, cause: str, message: Optional[str] = None):
        self.cause = cause
        super().__init__(message or "Could not read your location. Check the device GPS switch and browser permission.")

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["cause"] = self.cause
        return data


class SaveFailedError(DomainError):
    """Raised when the remote store did not confirm a write."""

    def __init__(self, data_type: str, message: Optional[str] = None):
        self.data_type = data_type
        super().__init__(message or "Save failed, please try again later")
