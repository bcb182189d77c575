"""Great-circle distance on a spherical Earth."""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt

from ..core.constants import EARTH_RADIUS_M


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two lat/lon points given in degrees.

    Inputs are not range-checked. Accuracy is that of the spherical model
    (about 0.5%), which is fine for check-in radii of a few hundred meters.
    """
    phi1 = radians(float(lat1))
    phi2 = radians(float(lat2))
    d_phi = radians(float(lat2) - float(lat1))
    d_lambda = radians(float(lon2) - float(lon1))

    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    # Rounding can push `a` just past 1 for near-antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c
