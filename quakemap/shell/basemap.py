"""Basemap - Imperative Shell.

This module provides the map viewport: Web Mercator projection between
screen pixels and locations, the tile image painted under the markers,
and the marker registry. Tiles come from a tile server through
staticmap when online, or from a local MBTiles store when offline.
"""

import io
import logging
import math
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any, Protocol

from PIL import Image
from staticmap import StaticMap

from quakemap.core.config import Config, OSM_TILE_URL, Viewport
from quakemap.core.geo import Location
from quakemap.core.interfaces import Canvas
from quakemap.core.markers import Marker


logger = logging.getLogger(__name__)


TILE_SIZE = 256
MAX_LATITUDE = 85.0511287798

# Painted where no tile is available
BACKGROUND_COLOR = "#d4dadc"


def lonlat_to_world(longitude: float, latitude: float, zoom: int) -> tuple[float, float]:
    """Project a location to Web Mercator world pixels at a zoom level.

    Pure function. Latitudes are clamped to the Mercator limit.
    """
    size = TILE_SIZE * 2 ** zoom
    latitude = max(-MAX_LATITUDE, min(MAX_LATITUDE, latitude))
    sin_lat = math.sin(math.radians(latitude))

    x = (longitude + 180.0) / 360.0 * size
    y = (0.5 - math.log((1 + sin_lat) / (1 - sin_lat)) / (4 * math.pi)) * size
    return x, y


def world_to_lonlat(x: float, y: float, zoom: int) -> tuple[float, float]:
    """Inverse of lonlat_to_world. Longitudes wrap into [-180, 180).

    Pure function.
    """
    size = TILE_SIZE * 2 ** zoom
    longitude = x / size * 360.0 - 180.0
    longitude = (longitude + 180.0) % 360.0 - 180.0
    n = math.pi - 2 * math.pi * y / size
    latitude = math.degrees(math.atan(math.sinh(n)))
    return longitude, latitude


class TileSource(Protocol):
    """Renders the tile image behind a viewport."""

    def render(self, width: int, height: int, zoom: int, center: Location) -> Any | None: ...


class StaticMapTileSource:
    """Online tiles stitched by staticmap.

    This performs network I/O (fetches map tiles from a tile server).
    """

    def __init__(self, tile_url: str | None = None) -> None:
        """Initialize the tile source.

        Args:
            tile_url: Custom tile URL template. Defaults to OpenStreetMap.
        """
        self.tile_url = tile_url or OSM_TILE_URL

    def render(self, width: int, height: int, zoom: int, center: Location) -> Any | None:
        """Render the tiles around ``center``, or None on failure."""
        logger.info(
            "Rendering basemap for (%.4f, %.4f) at zoom %d",
            center.latitude,
            center.longitude,
            zoom,
        )

        try:
            static_map = StaticMap(width, height, url_template=self.tile_url)
            # staticmap takes (lon, lat) order
            return static_map.render(zoom=zoom, center=[center.longitude, center.latitude])
        except Exception as e:
            logger.error("Failed to render basemap: %s", str(e))
            return None


class MBTilesTileSource:
    """Offline tiles read from an MBTiles (SQLite) store."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _fetch_tile(self, conn: sqlite3.Connection, zoom: int, x: int, y: int) -> bytes | None:
        # MBTiles rows count from the bottom (TMS)
        tms_y = 2 ** zoom - 1 - y
        row = conn.execute(
            "SELECT tile_data FROM tiles WHERE zoom_level = ? AND tile_column = ? AND tile_row = ?",
            (zoom, x, tms_y),
        ).fetchone()
        return row[0] if row else None

    def render(self, width: int, height: int, zoom: int, center: Location) -> Any | None:
        """Stitch the stored tiles around ``center``, or None on failure."""
        if not self.path.exists():
            logger.warning("MBTiles store not found: %s", self.path)
            return None

        image = Image.new("RGB", (width, height), BACKGROUND_COLOR)
        center_x, center_y = lonlat_to_world(center.longitude, center.latitude, zoom)
        left = center_x - width / 2
        top = center_y - height / 2
        tiles_per_side = 2 ** zoom

        first_x = math.floor(left / TILE_SIZE)
        last_x = math.floor((left + width - 1) / TILE_SIZE)
        first_y = max(0, math.floor(top / TILE_SIZE))
        last_y = min(tiles_per_side - 1, math.floor((top + height - 1) / TILE_SIZE))

        try:
            with closing(sqlite3.connect(str(self.path))) as conn:
                for tile_y in range(first_y, last_y + 1):
                    for tile_x in range(first_x, last_x + 1):
                        data = self._fetch_tile(conn, zoom, tile_x % tiles_per_side, tile_y)
                        if data is None:
                            continue
                        tile = Image.open(io.BytesIO(data)).convert("RGB")
                        image.paste(tile, (
                            round(tile_x * TILE_SIZE - left),
                            round(tile_y * TILE_SIZE - top),
                        ))
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to read tiles from %s: %s", self.path, e)
            return None

        return image


class MercatorBasemap:
    """Map viewport in Web Mercator.

    Screen positions are window pixels; the viewport's center shows
    ``center`` at ``zoom``.
    """

    def __init__(
        self,
        viewport: Viewport,
        zoom: int,
        center: Location,
        tile_source: TileSource | None = None,
    ) -> None:
        self.viewport = viewport
        self.zoom = zoom
        self.center = center
        self.tile_source = tile_source
        self.markers: list[Marker] = []
        self._image: Any | None = None
        self._image_rendered = False

    def _center_world(self) -> tuple[float, float]:
        return lonlat_to_world(self.center.longitude, self.center.latitude, self.zoom)

    def screen_from_location(self, location: Location) -> tuple[float, float]:
        world_x, world_y = lonlat_to_world(location.longitude, location.latitude, self.zoom)
        center_x, center_y = self._center_world()
        vp = self.viewport
        return (
            vp.x + vp.width / 2 + (world_x - center_x),
            vp.y + vp.height / 2 + (world_y - center_y),
        )

    def location_from_screen(self, x: float, y: float) -> Location:
        center_x, center_y = self._center_world()
        vp = self.viewport
        world_x = center_x + (x - vp.x - vp.width / 2)
        world_y = center_y + (y - vp.y - vp.height / 2)
        longitude, latitude = world_to_lonlat(world_x, world_y, self.zoom)
        return Location(latitude=latitude, longitude=longitude)

    def contains(self, x: float, y: float) -> bool:
        """Check if a screen point lies inside the viewport."""
        vp = self.viewport
        return vp.x <= x <= vp.x + vp.width and vp.y <= y <= vp.y + vp.height

    def add_marker(self, marker: Marker) -> None:
        self.markers.append(marker)

    def remove_marker(self, marker: Marker) -> None:
        self.markers = [m for m in self.markers if m is not marker]

    def draw(self, canvas: Canvas) -> None:
        """Paint the tiles, rendering them on first use."""
        if not self._image_rendered:
            self._image_rendered = True
            if self.tile_source is not None:
                self._image = self.tile_source.render(
                    self.viewport.width, self.viewport.height, self.zoom, self.center,
                )

        vp = self.viewport
        canvas.push_style()
        canvas.stroke(None)
        canvas.fill(BACKGROUND_COLOR)
        canvas.rect(vp.x, vp.y, vp.width, vp.height)
        if self._image is not None:
            canvas.image(self._image, vp.x, vp.y, vp.width, vp.height)
        canvas.pop_style()


def create_basemap(config: Config) -> MercatorBasemap:
    """Build the basemap for the configured online/offline mode."""
    basemap = config.basemap
    if config.offline:
        path = Path(basemap.mbtiles_path)
        if not path.is_absolute():
            path = Path(config.base_dir) / path
        tile_source: TileSource = MBTilesTileSource(path)
    else:
        tile_source = StaticMapTileSource(basemap.tile_url)

    return MercatorBasemap(
        viewport=config.viewport,
        zoom=basemap.zoom,
        center=Location(basemap.center_latitude, basemap.center_longitude),
        tile_source=tile_source,
    )
