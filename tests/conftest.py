"""Shared fakes for core and shell tests.

FakeView projects linearly (10 px per degree) so expected screen
positions are easy to compute by hand; none of them ever lands on the
custom-location button at (80..115, 370..405).
"""

from typing import Any

import pytest

from quakemap.core.geo import Location
from quakemap.core.markers import (
    CityMarker,
    CountryMarker,
    LandQuakeMarker,
    OceanQuakeMarker,
)
from quakemap.core.model import MarkerModel


class FakeView:
    """BasemapView with x = 2000 + 10*lon, y = 1000 - 10*lat.

    The map covers every screen point unless ``bounds`` (x0, y0, x1, y1)
    is given.
    """

    def __init__(self, bounds=None):
        self.markers = []
        self.draw_calls = 0
        self.bounds = bounds

    def contains(self, x, y):
        if self.bounds is None:
            return True
        x0, y0, x1, y1 = self.bounds
        return x0 <= x <= x1 and y0 <= y <= y1

    def screen_from_location(self, location):
        return 2000 + 10 * location.longitude, 1000 - 10 * location.latitude

    def location_from_screen(self, x, y):
        return Location(latitude=(1000 - y) / 10, longitude=(x - 2000) / 10)

    def draw(self, canvas):
        self.draw_calls += 1

    def add_marker(self, marker):
        self.markers.append(marker)

    def remove_marker(self, marker):
        self.markers = [m for m in self.markers if m is not marker]


class RecordingCanvas:
    """Canvas that records every primitive with the fill in effect."""

    def __init__(self):
        self.calls: list[tuple[Any, ...]] = []
        self.fill_color = "#ffffff"
        self.weight = 1.0
        self._stack = []

    def push_style(self):
        self._stack.append((self.fill_color, self.weight))

    def pop_style(self):
        self.fill_color, self.weight = self._stack.pop()

    def fill(self, color):
        self.fill_color = color

    def stroke(self, color):
        pass

    def stroke_weight(self, weight):
        self.weight = weight

    def text_size(self, size):
        pass

    def ellipse(self, x, y, width, height):
        self.calls.append(("ellipse", x, y, width, height, self.fill_color))

    def rect(self, x, y, width, height):
        self.calls.append(("rect", x, y, width, height, self.fill_color))

    def triangle(self, x1, y1, x2, y2, x3, y3):
        self.calls.append(("triangle", x1, y1, x2, y2, x3, y3, self.fill_color))

    def line(self, x1, y1, x2, y2):
        self.calls.append(("line", x1, y1, x2, y2, self.weight))

    def text(self, value, x, y):
        self.calls.append(("text", value, x, y, self.fill_color))

    def image(self, image, x, y, width, height):
        self.calls.append(("image", image, x, y, width, height))

    def named(self, name):
        return [c for c in self.calls if c[0] == name]

    def texts(self):
        return [c[1] for c in self.calls if c[0] == "text"]


class BoxHitTest:
    """PolygonHitTest over (min_lat, min_lon, max_lat, max_lon) boxes."""

    def is_inside_by_location(self, region, location):
        min_lat, min_lon, max_lat, max_lon = region
        return (
            min_lat < location.latitude < max_lat
            and min_lon < location.longitude < max_lon
        )


def make_city(lat, lon, name="City", country="Country", population="1.0"):
    properties = {"name": name, "country": country}
    if population is not None:
        properties["population"] = population
    return CityMarker(location=Location(lat, lon), properties=properties)


def make_quake(lat, lon, magnitude, title=None, depth=10.0, age="Past Week", on_land=False):
    properties = {
        "title": title or f"M {magnitude:.1f} - test",
        "magnitude": magnitude,
        "depth": depth,
        "age": age,
    }
    cls = LandQuakeMarker if on_land else OceanQuakeMarker
    return cls(location=Location(lat, lon), properties=properties)


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def hit_test():
    return BoxHitTest()


@pytest.fixture
def la_model():
    """Los Angeles with one nearby M5.0 land quake and a distant M2.5 ocean quake."""
    la = make_city(34.05, -118.25, name="Los Angeles", country="United States", population="3.88")
    tokyo = make_city(35.69, 139.69, name="Tokyo", country="Japan", population="13.19")
    near = make_quake(35.5, -116.5, 5.0, title="M 5.0 - near Barstow", on_land=True)
    far = make_quake(-20.0, 100.0, 2.5, title="M 2.5 - Indian Ocean")
    usa = CountryMarker(name="United States", regions=((25.0, -125.0, 49.0, -66.0),))
    return MarkerModel(cities=[la, tokyo], quakes=[near, far], countries=[usa])
