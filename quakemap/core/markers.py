"""Map markers - Display records for cities, earthquakes and countries.

Each marker pairs an immutable feature (location + properties) with
mutable display flags. Drawing goes through the Canvas protocol; the
markers never know which graphics backend is behind it.
"""

import itertools
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from quakemap.core.earthquake import PAST_HOUR
from quakemap.core.geo import Location
from quakemap.core.interfaces import BasemapView, Canvas
from quakemap.core.style import (
    CITY_RED,
    DEFAULT_MARKER_RADIUS,
    ORANGE,
    RED,
    TITLE_BOX_YELLOW,
    TRI_SIZE,
    get_depth_color,
    get_marker_radius,
)


UNKNOWN = "unknown"

# Insertion sequence used to break magnitude ties
_quake_sequence = itertools.count()


@dataclass(eq=False)
class Marker(ABC):
    """Base for every drawable marker.

    Markers compare by identity: two cities with identical data are
    still two markers.

    Attributes:
        location: Where the marker sits on the map
        properties: Feature properties (name, magnitude, ...)
        hidden: Not drawn when True
        selected: Under the pointer (shows its title)
        clicked: The current filter anchor
    """
    location: Location
    properties: dict[str, Any] = field(default_factory=dict)
    hidden: bool = False
    selected: bool = False
    clicked: bool = False

    @property
    def radius(self) -> float:
        """Hit radius in pixels."""
        return DEFAULT_MARKER_RADIUS

    def get_property(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def get_string_property(self, key: str) -> str:
        """Property as text, or "unknown" when missing."""
        value = self.properties.get(key)
        if value is None or value == "":
            return UNKNOWN
        return str(value)

    def set_clicked(self, state: bool) -> None:
        self.clicked = state

    def contains_screen_point(self, view: BasemapView, x: float, y: float) -> bool:
        """Check if a screen point falls on this marker."""
        mx, my = view.screen_from_location(self.location)
        return math.hypot(x - mx, y - my) <= self.radius

    def draw(self, canvas: Canvas, view: BasemapView) -> None:
        """Draw the marker at its screen position, with title if selected."""
        if self.hidden:
            return
        x, y = view.screen_from_location(self.location)
        self.draw_body(canvas, x, y)
        if self.selected:
            self.draw_title(canvas, x, y)

    @abstractmethod
    def draw_body(self, canvas: Canvas, x: float, y: float) -> None: ...

    @abstractmethod
    def draw_title(self, canvas: Canvas, x: float, y: float) -> None: ...


def _draw_title_box(canvas: Canvas, text: str, x: float, y: float, offset: float) -> None:
    """Pale yellow box with red text below a marker."""
    canvas.push_style()
    canvas.fill(TITLE_BOX_YELLOW)
    canvas.rect(x, y + offset, len(text) * 7 - 10, 15)
    canvas.fill(RED)
    canvas.text_size(12)
    canvas.text(text, x + 2, y + offset + 6)
    canvas.pop_style()


@dataclass(eq=False)
class CityMarker(Marker):
    """A major city, drawn as a fixed-size triangle.

    Properties: name, country, population (millions, as a numeric string).
    """

    @property
    def city(self) -> str:
        return self.get_string_property("name")

    @property
    def country(self) -> str:
        return self.get_string_property("country")

    @property
    def title(self) -> str:
        return f"{self.city}, {self.country}, {self.get_string_property('population')}"

    def draw_body(self, canvas: Canvas, x: float, y: float) -> None:
        canvas.push_style()
        canvas.fill(CITY_RED)
        canvas.triangle(x, y - TRI_SIZE, x - TRI_SIZE, y + TRI_SIZE, x + TRI_SIZE, y + TRI_SIZE)
        canvas.pop_style()

    def draw_title(self, canvas: Canvas, x: float, y: float) -> None:
        _draw_title_box(canvas, self.title, x, y, offset=20)


@dataclass(eq=False)
class EarthquakeMarker(Marker):
    """An earthquake event.

    Properties: title, magnitude, depth (km), age and, for land quakes,
    country. Earthquakes are ordered by ascending magnitude; ties keep
    construction order.
    """
    sequence: int = field(default_factory=lambda: next(_quake_sequence), init=False, repr=False)

    is_on_land = False

    def __lt__(self, other: "EarthquakeMarker") -> bool:
        if not isinstance(other, EarthquakeMarker):
            return NotImplemented
        return (self.magnitude, self.sequence) < (other.magnitude, other.sequence)

    @property
    def magnitude(self) -> float:
        return float(self.properties.get("magnitude", 0.0))

    @property
    def depth(self) -> float:
        return float(self.properties.get("depth", 0.0))

    @property
    def age(self) -> str:
        return self.get_string_property("age")

    @property
    def title(self) -> str:
        return self.get_string_property("title")

    @property
    def radius(self) -> float:
        return get_marker_radius(self.magnitude)

    def draw_body(self, canvas: Canvas, x: float, y: float) -> None:
        canvas.push_style()
        canvas.fill(get_depth_color(self.depth))
        self.draw_earthquake(canvas, x, y)

        if self.get_property("age") == PAST_HOUR:
            r = self.radius
            canvas.stroke_weight(2)
            canvas.line(x - r, y - r, x + r, y + r)
            canvas.line(x - r, y + r, x + r, y - r)
        canvas.pop_style()

    def draw_title(self, canvas: Canvas, x: float, y: float) -> None:
        _draw_title_box(canvas, self.title, x, y, offset=self.radius + 5)

    @abstractmethod
    def draw_earthquake(self, canvas: Canvas, x: float, y: float) -> None:
        """Draw the quake's shape in the current fill color."""


@dataclass(eq=False)
class LandQuakeMarker(EarthquakeMarker):
    """Earthquake inside a country, drawn as a circle."""

    is_on_land = True

    def draw_earthquake(self, canvas: Canvas, x: float, y: float) -> None:
        r = self.radius
        canvas.ellipse(x, y, 2 * r, 2 * r)


@dataclass(eq=False)
class OceanQuakeMarker(EarthquakeMarker):
    """Earthquake outside every country, drawn as a square.

    While clicked it remembers the cities inside its threat circle and
    draws a line to each of them.
    """
    threatened_cities: list[CityMarker] = field(default_factory=list, repr=False)

    def add_threatened_city(self, city: CityMarker) -> None:
        if not any(c is city for c in self.threatened_cities):
            self.threatened_cities.append(city)

    def set_clicked(self, state: bool) -> None:
        super().set_clicked(state)
        if not state:
            self.threatened_cities.clear()

    def draw(self, canvas: Canvas, view: BasemapView) -> None:
        super().draw(canvas, view)
        if not self.hidden and self.clicked:
            self.draw_lines_to_cities(canvas, view)

    def draw_lines_to_cities(self, canvas: Canvas, view: BasemapView) -> None:
        x, y = view.screen_from_location(self.location)
        canvas.push_style()
        canvas.stroke_weight(2)
        for city in self.threatened_cities:
            cx, cy = view.screen_from_location(city.location)
            canvas.line(x, y, cx, cy)
        canvas.pop_style()

    def draw_earthquake(self, canvas: Canvas, x: float, y: float) -> None:
        r = self.radius
        canvas.rect(x - r, y - r, 2 * r, 2 * r)


@dataclass(eq=False)
class CustomLocationMarker(Marker):
    """User-placed reference point for the nearest-quake ranking."""
    hidden: bool = True

    def draw_body(self, canvas: Canvas, x: float, y: float) -> None:
        r = self.radius
        canvas.push_style()
        canvas.fill(ORANGE)
        canvas.rect(x - r, y - r, 2 * r, 2 * r)
        canvas.pop_style()

    def draw_title(self, canvas: Canvas, x: float, y: float) -> None:
        pass


@dataclass(eq=False)
class CountryMarker:
    """A country's polygons, used only for point-in-region tests.

    Attributes:
        name: Country name
        regions: One polygon per part of a (multi-)polygon country
        properties: Remaining feature properties
    """
    name: str
    regions: tuple[Any, ...]
    properties: dict[str, Any] = field(default_factory=dict)
