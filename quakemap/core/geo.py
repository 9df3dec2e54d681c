"""Geographic calculations - Pure functions.

This module provides distances, threat circles and country containment
for map locations. All functions are pure with no side effects.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quakemap.core.interfaces import PolygonHitTest
    from quakemap.core.markers import CountryMarker


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0

# Threat circle: 20 * 2^(2m - 5.76) km
THREAT_BASE_KM = 20.0
THREAT_EXPONENT_OFFSET = 5.76


@dataclass(frozen=True)
class Location:
    """A point on the globe in decimal degrees.

    Attributes:
        latitude: Latitude (-90 to 90)
        longitude: Longitude (-180 to 180)
    """
    latitude: float
    longitude: float


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push a marginally above 1 for antipodal points
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_km(a: Location, b: Location) -> float:
    """Great-circle distance between two locations in kilometers.

    Pure function.
    """
    return calculate_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def threat_circle_radius_km(magnitude: float) -> float:
    """Radius of the threat circle around an epicenter.

    Pure function. Grows by a factor of four per magnitude unit and has no
    upper clamp; absurd magnitudes saturate to infinity instead of raising.

    Args:
        magnitude: Earthquake magnitude

    Returns:
        Radius in kilometers
    """
    try:
        return THREAT_BASE_KM * math.pow(2.0, 2.0 * magnitude - THREAT_EXPONENT_OFFSET)
    except OverflowError:
        return math.inf


def is_within_threat_circle(
    location: Location,
    epicenter: Location,
    magnitude: float,
) -> bool:
    """Check if a location lies inside (or on) a quake's threat circle.

    Pure function.
    """
    return distance_km(location, epicenter) <= threat_circle_radius_km(magnitude)


def point_in_country(
    location: Location,
    country: "CountryMarker",
    hit_test: "PolygonHitTest",
) -> bool:
    """Check if a location lies inside a country.

    Multi-polygon countries match when any of their polygons contains
    the location. The polygon test itself is delegated to ``hit_test``.

    Args:
        location: Location to check
        country: Country with one or more polygon regions
        hit_test: Polygon containment collaborator

    Returns:
        True if any region of the country contains the location
    """
    return any(
        hit_test.is_inside_by_location(region, location)
        for region in country.regions
    )
