"""Unit tests for the visibility rules around a clicked marker."""

from quakemap.core.geo import Location
from quakemap.core.markers import CustomLocationMarker
from quakemap.core.model import MarkerModel
from quakemap.core.visibility import (
    hide_all,
    resolve_visibility,
    show_threatened_cities,
    show_threatening_quakes,
    unhide_all,
)

from conftest import make_city, make_quake


class TestUnhideAndHideAll:
    """Tests for unhide_all() and hide_all()."""

    def test_hide_then_unhide(self, la_model):
        hide_all(la_model)
        assert all(m.hidden for m in la_model.cities + la_model.quakes)

        unhide_all(la_model)
        assert not any(m.hidden for m in la_model.cities + la_model.quakes)

    def test_unhide_all_hides_custom_marker(self, la_model):
        custom = CustomLocationMarker(location=Location(0, 0), hidden=False)
        unhide_all(la_model, custom)
        assert custom.hidden


class TestShowThreateningQuakes:
    """Tests for clicking a city."""

    def test_keeps_near_quake_hides_far_quake(self, la_model):
        la, tokyo = la_model.cities
        near, far = la_model.quakes

        count = show_threatening_quakes(la_model, la)

        assert count == 1
        assert not near.hidden
        assert far.hidden
        assert not la.hidden
        assert tokyo.hidden

    def test_uses_each_quakes_own_radius(self):
        """A big distant quake reaches the city, a small close one does not."""
        city = make_city(0.0, 0.0)
        big = make_quake(0.0, 3.0, 6.0)      # ~334 km, radius ~1500 km
        small = make_quake(0.0, 0.5, 3.0)    # ~56 km, radius ~23 km
        model = MarkerModel(cities=[city], quakes=[big, small])

        show_threatening_quakes(model, city)

        assert not big.hidden
        assert small.hidden


class TestShowThreatenedCities:
    """Tests for clicking a quake."""

    def test_shows_cities_in_radius(self, la_model):
        la, tokyo = la_model.cities
        near, far = la_model.quakes

        count = show_threatened_cities(la_model, near)

        assert count == 1
        assert not near.hidden
        assert far.hidden
        assert not la.hidden
        assert tokyo.hidden

    def test_city_on_the_boundary_stays_visible(self, monkeypatch):
        city = make_city(0.0, 1.0)
        quake = make_quake(0.0, 0.0, 5.0)
        model = MarkerModel(cities=[city], quakes=[quake])

        from quakemap.core.geo import distance_km
        boundary = distance_km(city.location, quake.location)
        monkeypatch.setattr(type(quake), "threat_circle", lambda self: boundary)

        show_threatened_cities(model, quake)

        assert not city.hidden

    def test_magnitude_zero_only_coincident_city(self):
        quake = make_quake(10.0, 10.0, 0.0)
        here = make_city(10.0, 10.0)
        nearby = make_city(10.0, 10.01)   # ~1.1 km away
        model = MarkerModel(cities=[here, nearby], quakes=[quake])

        show_threatened_cities(model, quake)

        assert not here.hidden
        assert nearby.hidden

    def test_ocean_quake_records_threatened_cities(self):
        quake = make_quake(0.0, 0.0, 6.0)
        inside = make_city(0.0, 1.0)
        outside = make_city(50.0, 50.0)
        model = MarkerModel(cities=[inside, outside], quakes=[quake])

        show_threatened_cities(model, quake)

        assert quake.threatened_cities == [inside]

    def test_land_quake_keeps_no_city_list(self):
        quake = make_quake(0.0, 0.0, 6.0, on_land=True)
        model = MarkerModel(cities=[make_city(0.0, 1.0)], quakes=[quake])
        show_threatened_cities(model, quake)
        assert not hasattr(quake, "threatened_cities")


class TestResolveVisibility:
    """Tests for resolve_visibility() dispatch."""

    def test_city_dispatch(self, la_model):
        la = la_model.cities[0]
        resolve_visibility(la_model, la)
        assert la_model.quakes[1].hidden
        assert la_model.cities[1].hidden

    def test_quake_dispatch(self, la_model):
        far = la_model.quakes[1]
        resolve_visibility(la_model, far)
        assert not far.hidden
        assert all(c.hidden for c in la_model.cities)
        assert la_model.quakes[0].hidden
