"""Map Window - Imperative Shell.

Hosts the application in a matplotlib figure: a timer drives the draw
callback at frame cadence and pointer events are forwarded to the
application between frames. Everything runs on the GUI event thread.
"""

import logging
from typing import Any, Protocol

import matplotlib.pyplot as plt

from quakemap.core.config import WindowConfig
from quakemap.core.interfaces import Canvas
from quakemap.shell.canvas import MatplotlibCanvas


logger = logging.getLogger(__name__)

DPI = 100

LEFT_BUTTON = 1


class InteractiveApp(Protocol):
    """What the window drives."""

    def draw(self, canvas: Canvas) -> None: ...

    def on_pointer_move(self, x: float, y: float) -> None: ...

    def on_pointer_click(self, x: float, y: float) -> None: ...


class MapWindow:
    """A fixed-size window whose pixels match the app's screen coordinates."""

    def __init__(self, app: InteractiveApp, config: WindowConfig) -> None:
        self.app = app
        self.config = config

        plt.rcParams["toolbar"] = "None"
        self.figure = plt.figure(
            figsize=(config.width / DPI, config.height / DPI),
            dpi=DPI,
            facecolor="black",
        )
        self.axes = self.figure.add_axes((0, 0, 1, 1))
        self.canvas = MatplotlibCanvas(self.axes, config.width, config.height)

        manager = self.figure.canvas.manager
        if manager is not None:
            manager.set_window_title(config.title)

        self.figure.canvas.mpl_connect("motion_notify_event", self._on_move)
        self.figure.canvas.mpl_connect("button_press_event", self._on_click)

        self._timer = self.figure.canvas.new_timer(interval=config.frame_interval_ms)
        self._timer.add_callback(self.draw_frame)

    def draw_frame(self) -> None:
        """Redraw everything from the current model state."""
        self.canvas.clear()
        self.app.draw(self.canvas)
        self.figure.canvas.draw_idle()

    def _on_move(self, event: Any) -> None:
        # Outside the axes there is no marker under the cursor
        if event.inaxes is not self.axes or event.xdata is None:
            return
        self.app.on_pointer_move(event.xdata, event.ydata)

    def _on_click(self, event: Any) -> None:
        if event.inaxes is not self.axes or event.xdata is None:
            return
        if event.button != LEFT_BUTTON:
            return
        logger.debug("Click at (%.0f, %.0f)", event.xdata, event.ydata)
        self.app.on_pointer_click(event.xdata, event.ydata)

    def run(self) -> None:
        """Show the window and block until it is closed."""
        self.draw_frame()
        self._timer.start()
        try:
            plt.show()
        finally:
            self._timer.stop()
            plt.close(self.figure)
            logger.info("Window closed")
