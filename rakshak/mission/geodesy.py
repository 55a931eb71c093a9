"""Great-circle distance helpers."""

import math

_EARTH_RADIUS_METERS: float = 6_371_000.0
_DEGREES_TO_RADIANS: float = math.pi / 180.0
_METERS_PER_KILOMETER: float = 1000.0


def haversine_distance(
    *,
    latitude_1: float,
    longitude_1: float,
    latitude_2: float,
    longitude_2: float,
) -> float:
    """Compute the Haversine distance between two GPS coordinates.

    Args:
        latitude_1: First point latitude in degrees.
        longitude_1: First point longitude in degrees.
        latitude_2: Second point latitude in degrees.
        longitude_2: Second point longitude in degrees.

    Returns:
        Distance between the two points in meters.
    """
    delta_latitude = (latitude_2 - latitude_1) * _DEGREES_TO_RADIANS
    delta_longitude = (longitude_2 - longitude_1) * _DEGREES_TO_RADIANS

    latitude_1_radians = latitude_1 * _DEGREES_TO_RADIANS
    latitude_2_radians = latitude_2 * _DEGREES_TO_RADIANS

    haversine = (
        math.sin(delta_latitude / 2.0) ** 2
        + math.cos(latitude_1_radians)
        * math.cos(latitude_2_radians)
        * math.sin(delta_longitude / 2.0) ** 2
    )
    # Rounding can push near-antipodal points just past 1.0.
    haversine = min(1.0, haversine)
    angular_distance = 2.0 * math.atan2(math.sqrt(haversine), math.sqrt(1.0 - haversine))

    return _EARTH_RADIUS_METERS * angular_distance


def format_distance(meters: float) -> str:
    """Render a distance for the operator.

    Kilometers with two decimals at or above 1000 m, otherwise whole meters
    rounded half up.
    """
    if meters >= _METERS_PER_KILOMETER:
        return f"{meters / _METERS_PER_KILOMETER:.2f} km"
    return f"{math.floor(meters + 0.5)} m"
