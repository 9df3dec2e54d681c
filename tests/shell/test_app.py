"""Tests for the application wiring, the window and the entry point.

Uses a mocked feature loader and the fake view so no files, network or
GUI are touched, except where the Agg backend stands in for a window.
"""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

import pytest
import yaml

from quakemap.app import EarthquakeCityMap
from quakemap.core.config import Config, WindowConfig
from quakemap.core.features import PointFeature, RegionFeature
from quakemap.core.geo import Location
from quakemap.core.state import Mode
from quakemap.main import main
from quakemap.shell.feature_loader import LoadError
from quakemap.shell.window import MapWindow

from conftest import BoxHitTest, FakeView, RecordingCanvas


def quake(lat, lon, magnitude, title):
    return PointFeature(
        location=Location(lat, lon),
        properties={"title": title, "magnitude": magnitude, "depth": 10.0, "age": "Past Week"},
    )


@pytest.fixture
def loader():
    mock_loader = MagicMock()
    mock_loader.load_cities.return_value = [
        PointFeature(location=Location(34.05, -118.25), properties={"name": "Los Angeles"}),
    ]
    mock_loader.load_countries.return_value = [
        RegionFeature(name="United States", regions=((25.0, -125.0, 49.0, -66.0),)),
    ]
    mock_loader.load_earthquakes.return_value = [
        quake(35.5, -116.5, 5.0, "M 5.0 - near Barstow"),
        quake(-20.0, 100.0, 6.1, "M 6.1 - Indian Ocean"),
    ]
    return mock_loader


@pytest.fixture
def app(loader):
    lines = []
    application = EarthquakeCityMap(
        Config(largest_quakes_to_print=1),
        loader=loader,
        view=FakeView(),
        hit_test=BoxHitTest(),
        emit=lines.append,
    )
    application.lines = lines
    return application


class TestEarthquakeCityMap:
    """Tests for EarthquakeCityMap setup and event delegation."""

    def test_setup_loads_configured_sources(self, app, loader):
        app.setup()

        loader.load_cities.assert_called_once_with("data/city-data.json")
        loader.load_countries.assert_called_once_with(app.config.sources.countries)
        loader.load_earthquakes.assert_called_once_with(app.config.sources.earthquakes)

    def test_offline_uses_snapshot(self, loader):
        application = EarthquakeCityMap(
            Config(offline=True), loader=loader, view=FakeView(), hit_test=BoxHitTest(), emit=lambda line: None,
        )
        application.setup()
        loader.load_earthquakes.assert_called_once_with("data/2.5_week.atom")

    def test_setup_registers_quakes_before_cities(self, app):
        app.setup()

        assert app.view.markers == app.model.quakes + app.model.cities
        assert len(app.view.markers) == 3

    def test_land_and_ocean_classification(self, app):
        app.setup()
        land, ocean = app.model.quakes
        assert land.is_on_land and land.get_property("country") == "United States"
        assert not ocean.is_on_land

    def test_reports(self, app):
        app.setup()
        assert app.lines == [
            "United States: 1",
            "OCEAN QUAKES: 1",
            "The largest earthquakes:",
            "M 6.1 - Indian Ocean",
        ]

    def test_load_error_propagates(self, app, loader):
        loader.load_countries.side_effect = LoadError("gone")
        with pytest.raises(LoadError):
            app.setup()

    def test_state_machine_sees_loaded_model(self, app):
        app.setup()
        # Los Angeles on the fake view
        app.on_pointer_click(817.5, 659.5)
        assert app.state.last_clicked is app.model.cities[0]

    def test_hover_delegates(self, app):
        app.setup()
        app.on_pointer_move(817.5, 659.5)
        assert app.model.cities[0].selected

    def test_draw_paints_view_then_overlay(self, app):
        app.setup()
        canvas = RecordingCanvas()

        app.draw(canvas)

        assert app.view.draw_calls == 1
        assert len(canvas.named("triangle")) == 2  # city + legend key
        assert "Earthquake Key" in canvas.texts()

    def test_button_uses_configured_menu(self, loader):
        config = Config()
        config.overlay.menu_x = 200
        application = EarthquakeCityMap(
            config, loader=loader, view=FakeView(), hit_test=BoxHitTest(), emit=lambda line: None,
        )
        application.setup()

        application.on_pointer_click(270, 380)

        assert application.state.mode == Mode.CUSTOM_LOCATION


class TestMapWindow:
    """Tests for MapWindow event forwarding on the Agg backend."""

    @pytest.fixture
    def window(self):
        fake_app = MagicMock()
        map_window = MapWindow(fake_app, WindowConfig(width=400, height=300))
        yield map_window
        plt.close(map_window.figure)

    def test_figure_matches_window_pixels(self, window):
        width, height = window.figure.get_size_inches() * window.figure.dpi
        assert (round(width), round(height)) == (400, 300)

    def test_draw_frame_clears_and_draws(self, window):
        window.draw_frame()
        window.app.draw.assert_called_once_with(window.canvas)

    def test_forwards_pointer_events(self, window):
        event = SimpleNamespace(inaxes=window.axes, xdata=10.0, ydata=20.0, button=1)

        window._on_move(event)
        window._on_click(event)

        window.app.on_pointer_move.assert_called_once_with(10.0, 20.0)
        window.app.on_pointer_click.assert_called_once_with(10.0, 20.0)

    def test_ignores_events_outside_axes(self, window):
        event = SimpleNamespace(inaxes=None, xdata=None, ydata=None, button=1)
        window._on_move(event)
        window._on_click(event)
        window.app.on_pointer_move.assert_not_called()
        window.app.on_pointer_click.assert_not_called()

    def test_ignores_other_buttons(self, window):
        event = SimpleNamespace(inaxes=window.axes, xdata=10.0, ydata=20.0, button=3)
        window._on_click(event)
        window.app.on_pointer_click.assert_not_called()


def write_project(tmp_path, **sources):
    """Lay out a config/ directory with the given sources."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    path = config_dir / "config.yaml"
    path.write_text(yaml.safe_dump({"sources": sources}))
    return path


class TestMain:
    """Tests for the command-line entry point."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("QUAKEMAP_OFFLINE", "LOG_LEVEL", "CONFIG_PATH"):
            monkeypatch.delenv(name, raising=False)

    def test_load_error_exits_with_one(self, tmp_path):
        path = write_project(
            tmp_path,
            earthquakes="missing.atom",
            cities="missing.json",
            countries="missing.json",
        )

        with patch("quakemap.shell.window.MapWindow") as mock_window:
            assert main(["--config", str(path)]) == 1

        mock_window.assert_not_called()

    def test_invalid_config_exits_with_one(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        path = config_dir / "config.yaml"
        path.write_text(yaml.safe_dump({"basemap": {"zoom": 40}}))

        assert main(["--config", str(path)]) == 1

    def test_runs_window_after_setup(self, tmp_path, capsys):
        data = tmp_path / "data"
        data.mkdir()
        (data / "cities.json").write_text(json.dumps({"features": []}))
        (data / "countries.json").write_text(json.dumps({"features": []}))
        (data / "quakes.json").write_text(json.dumps({"features": []}))
        path = write_project(
            tmp_path,
            earthquakes="data/quakes.json",
            cities="data/cities.json",
            countries="data/countries.json",
        )

        with patch("quakemap.shell.window.MapWindow") as mock_window:
            assert main(["--config", str(path), "--log-level", "warning"]) == 0

        mock_window.return_value.run.assert_called_once_with()
        assert "OCEAN QUAKES: 0" in capsys.readouterr().out
