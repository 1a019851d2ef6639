"""Location Math - Pure functions for distance from home.

All functions are pure: same input always produces same output, no side effects.
"""

import math
from typing import Optional

from .models import Coordinate


EARTH_RADIUS_METERS = 6_371_008.8
AT_HOME_RADIUS_METERS = 100.0


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two points.

    Uses the haversine formula on a spherical Earth (mean radius).

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in meters
    """
    lat1, lat2 = math.radians(a.latitude), math.radians(b.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(b.longitude - a.longitude)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))


def describe_distance_from_home(
    current: Optional[Coordinate], home: Optional[Coordinate]
) -> str:
    """Human readable status of where the user is relative to home.

    Args:
        current: Current position, if known
        home: Saved home position, if set

    Returns:
        Status text for display
    """
    if home is None:
        return "Home location not set. Go to Location page to set it."
    if current is None:
        return "Current location unavailable"

    distance = distance_meters(current, home)
    if distance < AT_HOME_RADIUS_METERS:
        return "You are at home"

    kilometers = distance / 1000
    if kilometers < 1:
        return f"You are {distance:.0f} meters from home"
    return f"You are {kilometers:.1f} km from home"
