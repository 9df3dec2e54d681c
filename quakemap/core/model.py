"""Marker model - Builds the marker collections from loaded features.

Collections are built once at startup and never resized; afterwards
only the markers' display flags change.
"""

import logging
from dataclasses import dataclass, field

from quakemap.core.features import PointFeature, RegionFeature
from quakemap.core.geo import point_in_country
from quakemap.core.interfaces import PolygonHitTest
from quakemap.core.markers import (
    CityMarker,
    CountryMarker,
    EarthquakeMarker,
    LandQuakeMarker,
    OceanQuakeMarker,
)


logger = logging.getLogger(__name__)


@dataclass
class MarkerModel:
    """All markers of one run.

    Country markers are kept for hit-testing only and are never drawn.
    """
    cities: list[CityMarker] = field(default_factory=list)
    quakes: list[EarthquakeMarker] = field(default_factory=list)
    countries: list[CountryMarker] = field(default_factory=list)


def find_country(
    feature: PointFeature,
    countries: list[CountryMarker],
    hit_test: PolygonHitTest,
) -> CountryMarker | None:
    """Return the first country containing the feature, if any."""
    for country in countries:
        if point_in_country(feature.location, country, hit_test):
            return country
    return None


def create_quake_marker(
    feature: PointFeature,
    countries: list[CountryMarker],
    hit_test: PolygonHitTest,
) -> EarthquakeMarker:
    """Create a land or ocean marker for an earthquake feature.

    A quake inside a country becomes a LandQuakeMarker carrying the
    country's name in its "country" property.
    """
    properties = dict(feature.properties)
    country = find_country(feature, countries, hit_test)

    if country is not None:
        properties["country"] = country.name
        return LandQuakeMarker(location=feature.location, properties=properties)

    return OceanQuakeMarker(location=feature.location, properties=properties)


def build_marker_model(
    city_features: list[PointFeature],
    country_features: list[RegionFeature],
    quake_features: list[PointFeature],
    hit_test: PolygonHitTest,
) -> MarkerModel:
    """Build every marker collection from the loaded features.

    Args:
        city_features: One feature per city
        country_features: Country regions
        quake_features: One feature per earthquake
        hit_test: Polygon containment collaborator

    Returns:
        MarkerModel with cities, quakes and countries in input order
    """
    countries = [
        CountryMarker(name=c.name, regions=c.regions, properties=dict(c.properties))
        for c in country_features
    ]
    cities = [
        CityMarker(location=f.location, properties=dict(f.properties))
        for f in city_features
    ]
    quakes = [create_quake_marker(f, countries, hit_test) for f in quake_features]

    logger.info(
        "Built %d city, %d quake (%d on land) and %d country markers",
        len(cities),
        len(quakes),
        sum(1 for q in quakes if q.is_on_land),
        len(countries),
    )

    return MarkerModel(cities=cities, quakes=quakes, countries=countries)
