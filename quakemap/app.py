"""Application - Wires Functional Core and Imperative Shell.

This module coordinates the flow of data between the pure functional
core and the I/O-performing shell components: it loads the features,
builds the markers, prints the startup reports and hands pointer events
and frames to the core.
"""

import logging
from typing import Callable

from quakemap.core.config import Config
from quakemap.core.interfaces import BasemapView, Canvas, PolygonHitTest
from quakemap.core.interaction import InteractionStateMachine
from quakemap.core.model import MarkerModel, build_marker_model
from quakemap.core.nearest import NearestQuakeEngine
from quakemap.core.overlay import OverlayRenderer
from quakemap.core.report import format_country_report, format_largest_report
from quakemap.core.state import InteractionState
from quakemap.shell.basemap import create_basemap
from quakemap.shell.feature_loader import FeatureLoader
from quakemap.shell.polygon_hit_test import ShapelyHitTest


logger = logging.getLogger(__name__)


class EarthquakeCityMap:
    """The interactive earthquake and city map.

    This class wires together:
    - Feature loader (reads cities, countries and the quake feed)
    - Core functions (marker model, reports, interaction rules)
    - Basemap view (projection, tiles and the marker registry)
    - Overlay renderer (markers, legend and menu)
    """

    def __init__(
        self,
        config: Config,
        loader: FeatureLoader | None = None,
        view: BasemapView | None = None,
        hit_test: PolygonHitTest | None = None,
        emit: Callable[[str], None] = print,
    ) -> None:
        """Initialize the application.

        Args:
            config: Application configuration
            loader: Feature loader (created if not provided)
            view: Map viewport (created if not provided)
            hit_test: Point-in-polygon test (created if not provided)
            emit: Receives each line of the textual reports
        """
        self.config = config
        self.loader = loader or FeatureLoader(base_dir=config.base_dir)
        self.view = view or create_basemap(config)
        self.hit_test = hit_test or ShapelyHitTest()
        self.emit = emit

        self.state = InteractionState()
        self.model = MarkerModel()
        self.renderer = OverlayRenderer(
            legend_origin=(config.overlay.legend_x, config.overlay.legend_y),
            menu_origin=(config.overlay.menu_x, config.overlay.menu_y),
        )
        self.nearest_engine = NearestQuakeEngine(emit=emit)
        self.state_machine = InteractionStateMachine(
            model=self.model,
            view=self.view,
            state=self.state,
            button=self.renderer.button,
            nearest_engine=self.nearest_engine,
        )

    def setup(self) -> None:
        """Load every source, build the markers and print the reports.

        Raises:
            LoadError: If any source is missing or malformed
        """
        sources = self.config.sources
        cities = self.loader.load_cities(sources.cities)
        countries = self.loader.load_countries(sources.countries)
        quakes = self.loader.load_earthquakes(self.config.earthquakes_source)

        model = build_marker_model(cities, countries, quakes, self.hit_test)

        # The state machine holds this object; fill it in place
        self.model.cities = model.cities
        self.model.quakes = model.quakes
        self.model.countries = model.countries

        # Quakes first so cities are drawn on top
        for quake in self.model.quakes:
            self.view.add_marker(quake)
        for city in self.model.cities:
            self.view.add_marker(city)

        self._print_reports()

    def _print_reports(self) -> None:
        for line in format_country_report(self.model.countries, self.model.quakes):
            self.emit(line)
        for line in format_largest_report(self.model.quakes, self.config.largest_quakes_to_print):
            self.emit(line)

    def draw(self, canvas: Canvas) -> None:
        """Draw one frame: tiles, markers, legend and menu."""
        self.view.draw(canvas)
        self.renderer.draw(canvas, self.view, self.state.mode)

    def on_pointer_move(self, x: float, y: float) -> None:
        self.state_machine.on_pointer_move(x, y)

    def on_pointer_click(self, x: float, y: float) -> None:
        self.state_machine.on_pointer_click(x, y)
