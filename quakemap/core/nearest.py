"""Nearest quake ranking - Earthquakes sorted by distance to a location."""

import logging
from dataclasses import dataclass, field
from typing import Callable

from quakemap.core.geo import Location, distance_km
from quakemap.core.markers import EarthquakeMarker


logger = logging.getLogger(__name__)

REPORT_HEADER = "The earthquakes nearest to your custom location:"


@dataclass(frozen=True)
class QuakeDistance:
    """One row of the distance ranking.

    Attributes:
        title: Earthquake title
        distance_km: Great-circle distance to the reference location
        quake: The ranked marker
    """
    title: str
    distance_km: float
    quake: EarthquakeMarker = field(compare=False, repr=False)


def rank_by_distance(
    quakes: list[EarthquakeMarker],
    location: Location,
) -> list[QuakeDistance]:
    """Sort earthquakes by distance to a location, nearest first.

    Pure function. Ties keep the input order.
    """
    rows = [
        QuakeDistance(
            title=quake.title,
            distance_km=distance_km(quake.location, location),
            quake=quake,
        )
        for quake in quakes
    ]
    return sorted(rows, key=lambda row: row.distance_km)


def format_distance_report(ranking: list[QuakeDistance]) -> list[str]:
    """Format a ranking as report lines, header first.

    Pure function.
    """
    lines = [REPORT_HEADER]
    lines.extend(f"{row.distance_km:5.0f} km   {row.title}" for row in ranking)
    return lines


class NearestQuakeEngine:
    """Ranks earthquakes around a location and reveals the nearest one."""

    def __init__(self, emit: Callable[[str], None] = print) -> None:
        """Initialize the engine.

        Args:
            emit: Receives each line of the textual report
        """
        self.emit = emit

    def find_nearest(
        self,
        quakes: list[EarthquakeMarker],
        location: Location,
    ) -> EarthquakeMarker | None:
        """Emit the distance report and unhide the nearest earthquake.

        Args:
            quakes: All earthquake markers
            location: Reference location

        Returns:
            The nearest earthquake, or None if there are none
        """
        ranking = rank_by_distance(quakes, location)
        for line in format_distance_report(ranking):
            self.emit(line)

        if not ranking:
            logger.info("No earthquakes to rank")
            return None

        nearest = ranking[0]
        nearest.quake.hidden = False
        logger.info(
            "Nearest earthquake to (%.4f, %.4f): %s (%.0f km)",
            location.latitude,
            location.longitude,
            nearest.title,
            nearest.distance_km,
        )
        return nearest.quake
