"""Feature Loader - Imperative Shell.

This module reads city, country and earthquake sources from local files
or HTTP URLs. All I/O is contained here; parsing lives in the core.
"""

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import requests
import shapely
from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, Polygon, shape

from quakemap.core.earthquake import parse_atom_feed, parse_earthquakes
from quakemap.core.features import PointFeature, RegionFeature, parse_point_features


logger = logging.getLogger(__name__)


# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT = 30


class LoadError(Exception):
    """A feature source is missing, unreachable or malformed."""


class FeatureLoader:
    """Loads map features from named resources.

    This is part of the imperative shell - it handles file and HTTP I/O.
    """

    def __init__(
        self,
        base_dir: str | Path = ".",
        timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the loader.

        Args:
            base_dir: Directory relative file paths are resolved against
            timeout: HTTP request timeout in seconds
        """
        self.base_dir = Path(base_dir)
        self.timeout = timeout

    def read_source(self, source: str) -> str:
        """Read a file path or http(s) URL as text.

        Raises:
            LoadError: If the source cannot be read
        """
        if source.startswith(("http://", "https://")):
            logger.info("Fetching %s", source)
            try:
                response = requests.get(source, timeout=self.timeout)
                response.raise_for_status()
            except requests.RequestException as e:
                raise LoadError(f"Failed to fetch {source}: {e}") from e
            return response.text

        path = Path(source)
        if not path.is_absolute():
            path = self.base_dir / path

        logger.info("Reading %s", path)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise LoadError(f"Failed to read {path}: {e}") from e

    def _read_json(self, source: str) -> dict[str, Any]:
        text = self.read_source(source)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LoadError(f"Malformed JSON in {source}: {e}") from e
        if not isinstance(data, dict):
            raise LoadError(f"Expected a GeoJSON object in {source}")
        return data

    def load_cities(self, source: str) -> list[PointFeature]:
        """Load city point features from a GeoJSON source."""
        cities = parse_point_features(self._read_json(source))
        logger.info("Loaded %d cities", len(cities))
        return cities

    def load_countries(self, source: str) -> list[RegionFeature]:
        """Load country polygons from a GeoJSON source.

        Multi-polygon countries are split into one region per polygon.
        Non-polygon features are skipped.

        Raises:
            LoadError: If the source is unreadable or a geometry is malformed
        """
        data = self._read_json(source)
        countries = []

        for feature in data.get("features", []):
            try:
                geometry = shape(feature["geometry"])
            except (KeyError, TypeError, ValueError, ShapelyError) as e:
                raise LoadError(f"Malformed country geometry in {source}: {e}") from e

            if isinstance(geometry, Polygon):
                regions = (geometry,)
            elif isinstance(geometry, MultiPolygon):
                regions = tuple(geometry.geoms)
            else:
                logger.debug("Skipping %s geometry in %s", geometry.geom_type, source)
                continue

            for region in regions:
                shapely.prepare(region)

            properties = dict(feature.get("properties") or {})
            name = str(properties.get("name", ""))
            countries.append(RegionFeature(name=name, regions=regions, properties=properties))

        logger.info("Loaded %d countries", len(countries))
        return countries

    def load_earthquakes(self, source: str) -> list[PointFeature]:
        """Load earthquake features from an Atom or GeoJSON feed.

        The format is detected from the content: XML means Atom.

        Raises:
            LoadError: If the source is unreadable or malformed
        """
        text = self.read_source(source)

        if text.lstrip().startswith("<"):
            try:
                quakes = parse_atom_feed(text)
            except ET.ParseError as e:
                raise LoadError(f"Malformed Atom feed in {source}: {e}") from e
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise LoadError(f"Malformed GeoJSON feed in {source}: {e}") from e
            if not isinstance(data, dict):
                raise LoadError(f"Expected a GeoJSON object in {source}")
            quakes = parse_earthquakes(data)

        logger.info("Loaded %d earthquakes", len(quakes))
        return quakes
