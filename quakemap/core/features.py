"""Map features - Pure data structures and parsing.

Features are what the loaders produce: a location (or polygon regions)
plus a string-keyed property map. Markers are built from them.
"""

from dataclasses import dataclass, field
from typing import Any

from quakemap.core.geo import Location


@dataclass
class PointFeature:
    """A located feature (city or earthquake).

    Attributes:
        location: Where the feature is
        properties: Feature properties (e.g. name, magnitude)
    """
    location: Location
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class RegionFeature:
    """A named region made of one or more polygons.

    Attributes:
        name: Region name (e.g. country name)
        regions: Polygon objects understood by the PolygonHitTest
        properties: Remaining feature properties
    """
    name: str
    regions: tuple[Any, ...]
    properties: dict[str, Any] = field(default_factory=dict)


def parse_point_feature(feature: dict[str, Any]) -> PointFeature | None:
    """Parse a single GeoJSON Point feature.

    Pure function: returns None if the feature is not a valid point.

    Args:
        feature: GeoJSON feature dict

    Returns:
        PointFeature or None if parsing fails
    """
    try:
        geometry = feature.get("geometry") or {}
        if geometry.get("type") != "Point":
            return None

        coords = geometry.get("coordinates", [])
        if len(coords) < 2:
            return None

        # GeoJSON uses (longitude, latitude) order
        location = Location(latitude=float(coords[1]), longitude=float(coords[0]))
        properties = dict(feature.get("properties") or {})
        return PointFeature(location=location, properties=properties)
    except (AttributeError, TypeError, ValueError):
        return None


def parse_point_features(geojson: dict[str, Any]) -> list[PointFeature]:
    """Parse all Point features of a GeoJSON FeatureCollection.

    Pure function: invalid features are skipped, order is preserved.
    """
    features = []
    for raw in geojson.get("features", []):
        feature = parse_point_feature(raw)
        if feature is not None:
            features.append(feature)
    return features
