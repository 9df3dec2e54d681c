"""Collaborator contracts the core depends on.

The core never paints pixels, projects coordinates or tests polygons
itself. These protocols describe what the shell must provide.
"""

from typing import TYPE_CHECKING, Any, Protocol

from quakemap.core.geo import Location

if TYPE_CHECKING:
    from quakemap.core.markers import Marker


class Canvas(Protocol):
    """2D drawing surface in screen pixels (x right, y down).

    Drawing state (fill, stroke, stroke weight, text size) is sticky
    until changed, and can be saved and restored with push/pop.
    """

    def push_style(self) -> None: ...

    def pop_style(self) -> None: ...

    def fill(self, color: str) -> None: ...

    def stroke(self, color: str | None) -> None: ...

    def stroke_weight(self, weight: float) -> None: ...

    def text_size(self, size: float) -> None: ...

    def ellipse(self, x: float, y: float, width: float, height: float) -> None:
        """Filled ellipse centered on (x, y)."""

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        """Filled rectangle with its top-left corner at (x, y)."""

    def triangle(
        self,
        x1: float, y1: float,
        x2: float, y2: float,
        x3: float, y3: float,
    ) -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None: ...

    def text(self, value: str, x: float, y: float) -> None:
        """Left-aligned, vertically centered text in the fill color."""

    def image(self, image: Any, x: float, y: float, width: float, height: float) -> None: ...


class BasemapView(Protocol):
    """Opaque map viewport: projection, tiles and marker registration."""

    markers: list["Marker"]

    def location_from_screen(self, x: float, y: float) -> Location: ...

    def screen_from_location(self, location: Location) -> tuple[float, float]: ...

    def contains(self, x: float, y: float) -> bool:
        """Check if a screen point lies on the map."""

    def draw(self, canvas: Canvas) -> None:
        """Paint the basemap tiles."""

    def add_marker(self, marker: "Marker") -> None: ...

    def remove_marker(self, marker: "Marker") -> None: ...


class PolygonHitTest(Protocol):
    """Point-in-polygon test for a single (non-multi) polygon region."""

    def is_inside_by_location(self, region: Any, location: Location) -> bool: ...
