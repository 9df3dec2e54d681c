"""Visibility rules - Which markers are shown around a clicked marker.

Clicking a city shows the quakes whose threat circle reaches it;
clicking a quake shows the cities inside its own threat circle.
"""

import logging

from quakemap.core.geo import is_within_threat_circle
from quakemap.core.markers import (
    CityMarker,
    CustomLocationMarker,
    EarthquakeMarker,
    Marker,
    OceanQuakeMarker,
)
from quakemap.core.model import MarkerModel


logger = logging.getLogger(__name__)


def unhide_all(model: MarkerModel, custom_marker: CustomLocationMarker | None = None) -> None:
    """Show every city and quake; hide the custom location marker."""
    for quake in model.quakes:
        quake.hidden = False
    for city in model.cities:
        city.hidden = False
    if custom_marker is not None:
        custom_marker.hidden = True


def hide_all(model: MarkerModel) -> None:
    """Hide every city and quake."""
    for quake in model.quakes:
        quake.hidden = True
    for city in model.cities:
        city.hidden = True


def show_threatening_quakes(model: MarkerModel, city: CityMarker) -> int:
    """Show only the city and the quakes whose threat circle contains it.

    Returns:
        Number of quakes left visible
    """
    visible = 0
    for quake in model.quakes:
        threatening = is_within_threat_circle(city.location, quake.location, quake.magnitude)
        quake.hidden = not threatening
        visible += threatening
    for other in model.cities:
        other.hidden = other is not city
    return visible


def show_threatened_cities(model: MarkerModel, quake: EarthquakeMarker) -> int:
    """Show only the quake and the cities inside its threat circle.

    An ocean quake also records those cities for its link lines.

    Returns:
        Number of cities left visible
    """
    visible = 0
    for other in model.quakes:
        other.hidden = other is not quake
    for city in model.cities:
        threatened = is_within_threat_circle(city.location, quake.location, quake.magnitude)
        city.hidden = not threatened
        if threatened:
            visible += 1
            if isinstance(quake, OceanQuakeMarker):
                quake.add_threatened_city(city)
    return visible


def resolve_visibility(model: MarkerModel, clicked: Marker) -> None:
    """Update every hidden flag for a newly clicked marker.

    Args:
        model: All markers
        clicked: The clicked city or earthquake
    """
    if isinstance(clicked, CityMarker):
        count = show_threatening_quakes(model, clicked)
        logger.debug("City %s threatened by %d quakes", clicked.city, count)
    elif isinstance(clicked, EarthquakeMarker):
        count = show_threatened_cities(model, clicked)
        logger.debug("Quake %s threatens %d cities", clicked.title, count)
