"""Interaction state machine - Pointer events to selection and visibility.

Every handler runs to completion before returning, so the renderer
always sees a consistent (mode, last_selected, last_clicked, visibility)
tuple.

Click precedence:
    0. While a custom location awaits placement, a click off both the map
       and the button is ignored.
    1. A click off the button while something is clicked deselects it.
    2. Otherwise, with nothing clicked, a click on a city (then a quake)
       makes it the filter anchor.
    3. The custom-location button logic runs last, on the state left by
       the previous steps.
"""

import logging

from quakemap.core.geo import Location
from quakemap.core.interfaces import BasemapView
from quakemap.core.markers import CustomLocationMarker, Marker
from quakemap.core.model import MarkerModel
from quakemap.core.nearest import NearestQuakeEngine
from quakemap.core.overlay import ButtonRect
from quakemap.core.state import InteractionState, Mode
from quakemap.core.visibility import hide_all, resolve_visibility, unhide_all


logger = logging.getLogger(__name__)


def marker_under_cursor(
    markers: list[Marker],
    view: BasemapView,
    x: float,
    y: float,
) -> Marker | None:
    """Return the first visible marker containing the screen point.

    A point off the map never hits a marker.
    """
    if not view.contains(x, y):
        return None
    for marker in markers:
        if not marker.hidden and marker.contains_screen_point(view, x, y):
            return marker
    return None


class InteractionStateMachine:
    """Translates pointer moves and clicks into state transitions."""

    def __init__(
        self,
        model: MarkerModel,
        view: BasemapView,
        state: InteractionState,
        button: ButtonRect,
        nearest_engine: NearestQuakeEngine,
    ) -> None:
        """Initialize the state machine.

        Args:
            model: All markers
            view: Map viewport used for hit-testing and placement
            state: Mode and selection state, owned by the application
            button: Screen rectangle of the custom-location button
            nearest_engine: Ranks quakes around a placed location
        """
        self.model = model
        self.view = view
        self.state = state
        self.button = button
        self.nearest_engine = nearest_engine

    def on_pointer_move(self, x: float, y: float) -> None:
        """Select the marker under the pointer (quakes before cities)."""
        state = self.state
        if state.last_selected is not None:
            state.last_selected.selected = False
            state.last_selected = None

        marker = marker_under_cursor(self.model.quakes, self.view, x, y)
        if marker is None:
            marker = marker_under_cursor(self.model.cities, self.view, x, y)

        if marker is not None:
            marker.selected = True
            state.last_selected = marker

    def on_pointer_click(self, x: float, y: float) -> None:
        """Apply the click precedence rules for a click at (x, y)."""
        state = self.state
        on_button = self.button.contains(x, y)

        # Placement is decided on the state before any deselection
        custom = state.custom_marker
        placing = custom is not None and custom.hidden

        if placing and not on_button and not self.view.contains(x, y):
            logger.debug("Ignoring placement click off the map at (%.1f, %.1f)", x, y)
            return

        if state.last_clicked is not None:
            if not on_button:
                self._release_clicked()
        elif not on_button:
            self._click_marker_at(x, y)

        self._handle_custom_location(x, y, on_button, placing)

    def _release_clicked(self) -> None:
        """Unhide everything and drop the current filter anchor."""
        state = self.state
        unhide_all(self.model, state.custom_marker)
        if state.last_clicked is not None:
            logger.debug("Deselecting %r", state.last_clicked)
            state.last_clicked.set_clicked(False)
            state.last_clicked = None

    def _click_marker_at(self, x: float, y: float) -> None:
        marker = marker_under_cursor(self.model.cities, self.view, x, y)
        if marker is None:
            marker = marker_under_cursor(self.model.quakes, self.view, x, y)
        if marker is None:
            return

        marker.set_clicked(True)
        self.state.last_clicked = marker
        resolve_visibility(self.model, marker)

    def _handle_custom_location(
        self,
        x: float,
        y: float,
        on_button: bool,
        placing: bool,
    ) -> None:
        state = self.state

        if on_button:
            if state.mode != Mode.CUSTOM_LOCATION:
                self._enter_custom_location()
            else:
                logger.debug("Ignoring button click while already in custom location mode")
            return

        if state.mode != Mode.CUSTOM_LOCATION:
            return

        if placing:
            self._place_custom_marker(x, y)
        else:
            self._exit_custom_location()

    def _enter_custom_location(self) -> None:
        state = self.state
        state.mode = Mode.CUSTOM_LOCATION
        logger.info("Entering custom location mode")

        if state.custom_marker is None:
            # A button click skips deselection; release the anchor here
            self._release_clicked()
            marker = CustomLocationMarker(location=Location(0.0, 0.0))
            marker.set_clicked(True)
            state.custom_marker = marker
            state.last_clicked = marker
            self.view.add_marker(marker)

    def _place_custom_marker(self, x: float, y: float) -> None:
        state = self.state
        marker = state.custom_marker
        location = self.view.location_from_screen(x, y)
        logger.info(
            "Placing custom location at (%.4f, %.4f)",
            location.latitude,
            location.longitude,
        )

        hide_all(self.model)
        marker.location = location
        marker.hidden = False
        marker.set_clicked(True)
        state.last_clicked = marker

        self.nearest_engine.find_nearest(self.model.quakes, location)

    def _exit_custom_location(self) -> None:
        state = self.state
        self._release_clicked()
        if state.custom_marker is not None:
            self.view.remove_marker(state.custom_marker)
            state.custom_marker = None
        state.mode = Mode.DEFAULT
        logger.info("Exiting custom location mode")
