"""Functional Core - Pure data and logic with no I/O.

This module contains the map's behaviour:
- Feed and feature parsing
- Geo/distance and threat-circle calculations
- Markers and the marker model
- Interaction state machine and visibility rules
- Nearest-quake ranking and startup reports
- Overlay drawing against an abstract canvas

Nothing here touches files, the network or a real window.
"""

from quakemap.core.geo import Location, distance_km, threat_circle_radius_km, point_in_country
from quakemap.core.features import PointFeature, RegionFeature
from quakemap.core.markers import (
    CityMarker,
    CountryMarker,
    CustomLocationMarker,
    EarthquakeMarker,
    LandQuakeMarker,
    Marker,
    OceanQuakeMarker,
)
from quakemap.core.model import MarkerModel, build_marker_model
from quakemap.core.state import InteractionState, Mode
from quakemap.core.interaction import InteractionStateMachine
from quakemap.core.nearest import NearestQuakeEngine
from quakemap.core.overlay import OverlayRenderer

__all__ = [
    # Geo
    "Location",
    "distance_km",
    "threat_circle_radius_km",
    "point_in_country",
    # Features
    "PointFeature",
    "RegionFeature",
    # Markers
    "Marker",
    "CityMarker",
    "EarthquakeMarker",
    "LandQuakeMarker",
    "OceanQuakeMarker",
    "CountryMarker",
    "CustomLocationMarker",
    "MarkerModel",
    "build_marker_model",
    # Interaction
    "Mode",
    "InteractionState",
    "InteractionStateMachine",
    "NearestQuakeEngine",
    "OverlayRenderer",
]
