"""Tests for the shapely point-in-polygon test."""

from shapely.geometry import Polygon

from quakemap.core.geo import Location, point_in_country
from quakemap.core.markers import CountryMarker
from quakemap.shell.polygon_hit_test import ShapelyHitTest


SQUARE = Polygon([(0, 0), (10, 0), (10, 10), (0, 10)])


class TestShapelyHitTest:
    """Tests for ShapelyHitTest.is_inside_by_location()."""

    def test_inside(self):
        assert ShapelyHitTest().is_inside_by_location(SQUARE, Location(latitude=5, longitude=5))

    def test_outside(self):
        assert not ShapelyHitTest().is_inside_by_location(SQUARE, Location(latitude=15, longitude=5))

    def test_longitude_is_x(self):
        """Points are built as (longitude, latitude)."""
        tall = Polygon([(0, 0), (1, 0), (1, 50), (0, 50)])
        assert ShapelyHitTest().is_inside_by_location(tall, Location(latitude=40, longitude=0.5))
        assert not ShapelyHitTest().is_inside_by_location(tall, Location(latitude=0.5, longitude=40))

    def test_boundary_is_outside(self):
        assert not ShapelyHitTest().is_inside_by_location(SQUARE, Location(latitude=0, longitude=5))

    def test_multi_polygon_country(self):
        country = CountryMarker(
            name="Twin Isles",
            regions=(
                Polygon([(20, 20), (21, 20), (21, 21), (20, 21)]),
                Polygon([(30, 30), (31, 30), (31, 31), (30, 31)]),
            ),
        )
        assert point_in_country(Location(30.5, 30.5), country, ShapelyHitTest())
        assert not point_in_country(Location(25, 25), country, ShapelyHitTest())
