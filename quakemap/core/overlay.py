"""Overlay rendering - Legend, nearest-quake menu and marker pass.

The renderer is stateless: everything it draws is derived from the
current mode and the markers registered with the view.
"""

from dataclasses import dataclass

from quakemap.core.interfaces import BasemapView, Canvas
from quakemap.core.state import Mode
from quakemap.core.style import (
    BLACK,
    BLUE,
    CITY_RED,
    ORANGE,
    PANEL_WHITE,
    RED,
    TRI_SIZE,
    WHITE,
    YELLOW,
)


LEGEND_WIDTH = 150
LEGEND_HEIGHT = 250
MENU_WIDTH = 150
MENU_HEIGHT = 120

# Button position inside the menu panel
BUTTON_OFFSET_X = 55
BUTTON_OFFSET_Y = 70
BUTTON_SIZE = 35

MENU_LINES = ("Click this button to", "set your location and", "see the nearest quake")


@dataclass(frozen=True)
class ButtonRect:
    """Screen rectangle of the custom-location button.

    Attributes:
        x: Left edge
        y: Top edge
        width: Width in pixels
        height: Height in pixels
    """
    x: float
    y: float
    width: float
    height: float

    def contains(self, px: float, py: float) -> bool:
        """Check if a point is strictly inside the button."""
        return (
            self.x < px < self.x + self.width
            and self.y < py < self.y + self.height
        )


def menu_button_rect(menu_x: float, menu_y: float) -> ButtonRect:
    """Button geometry for a menu panel at (menu_x, menu_y).

    Pure function. A menu at (25, 300) puts the button at
    80 < x < 115, 370 < y < 405.
    """
    return ButtonRect(
        x=menu_x + BUTTON_OFFSET_X,
        y=menu_y + BUTTON_OFFSET_Y,
        width=BUTTON_SIZE,
        height=BUTTON_SIZE,
    )


class OverlayRenderer:
    """Draws markers, then the legend box and the mode-dependent menu."""

    def __init__(
        self,
        legend_origin: tuple[float, float] = (25, 50),
        menu_origin: tuple[float, float] = (25, 300),
    ) -> None:
        self.legend_origin = legend_origin
        self.menu_origin = menu_origin
        self.button = menu_button_rect(*menu_origin)

    def draw(self, canvas: Canvas, view: BasemapView, mode: Mode) -> None:
        """Draw one frame of everything above the basemap tiles."""
        self.draw_markers(canvas, view)
        self.draw_legend(canvas)
        self.draw_menu(canvas, mode)

    def draw_markers(self, canvas: Canvas, view: BasemapView) -> None:
        """Draw every marker whose position falls on the map."""
        for marker in view.markers:
            if view.contains(*view.screen_from_location(marker.location)):
                marker.draw(canvas, view)

    def draw_legend(self, canvas: Canvas) -> None:
        xbase, ybase = self.legend_origin

        canvas.push_style()
        canvas.fill(PANEL_WHITE)
        canvas.rect(xbase, ybase, LEGEND_WIDTH, LEGEND_HEIGHT)

        canvas.fill(BLACK)
        canvas.text_size(12)
        canvas.text("Earthquake Key", xbase + 25, ybase + 25)

        tri_x = xbase + 35
        tri_y = ybase + 50
        canvas.fill(CITY_RED)
        canvas.triangle(
            tri_x, tri_y - TRI_SIZE,
            tri_x - TRI_SIZE, tri_y + TRI_SIZE,
            tri_x + TRI_SIZE, tri_y + TRI_SIZE,
        )

        canvas.fill(BLACK)
        canvas.text("City Marker", tri_x + 15, tri_y)
        canvas.text("Land Quake", xbase + 50, ybase + 70)
        canvas.text("Ocean Quake", xbase + 50, ybase + 90)
        canvas.text("Size ~ Magnitude", xbase + 25, ybase + 110)

        canvas.fill(WHITE)
        canvas.ellipse(xbase + 35, ybase + 70, 10, 10)
        canvas.rect(xbase + 35 - 5, ybase + 90 - 5, 10, 10)

        for offset, color in ((140, YELLOW), (160, BLUE), (180, RED)):
            canvas.fill(color)
            canvas.ellipse(xbase + 35, ybase + offset, 12, 12)

        canvas.fill(BLACK)
        canvas.text("Shallow", xbase + 50, ybase + 140)
        canvas.text("Intermediate", xbase + 50, ybase + 160)
        canvas.text("Deep", xbase + 50, ybase + 180)
        canvas.text("Past hour", xbase + 50, ybase + 200)

        center_x = xbase + 35
        center_y = ybase + 200
        canvas.fill(WHITE)
        canvas.ellipse(center_x, center_y, 12, 12)
        canvas.stroke_weight(2)
        canvas.line(center_x - 8, center_y - 8, center_x + 8, center_y + 8)
        canvas.line(center_x - 8, center_y + 8, center_x + 8, center_y - 8)
        canvas.pop_style()

    def draw_menu(self, canvas: Canvas, mode: Mode) -> None:
        xbase, ybase = self.menu_origin

        canvas.push_style()
        canvas.text_size(12)
        if mode == Mode.CUSTOM_LOCATION:
            canvas.fill(ORANGE)
            canvas.rect(xbase, ybase, MENU_WIDTH, MENU_HEIGHT)
            canvas.fill(BLACK)
            canvas.text("Now click on the map.", xbase + 8, ybase + 18)
            canvas.text("Then click again to", xbase + 8, ybase + 52)
            canvas.text("return to the default", xbase + 8, ybase + 66)
        elif mode == Mode.DEFAULT:
            canvas.fill(PANEL_WHITE)
            canvas.rect(xbase, ybase, MENU_WIDTH, MENU_HEIGHT)
            canvas.fill(BLACK)
            for i, line in enumerate(MENU_LINES):
                canvas.text(line, xbase + 8, ybase + 18 + 14 * i)
            canvas.fill(ORANGE)
            canvas.rect(self.button.x, self.button.y, self.button.width, self.button.height)
        canvas.pop_style()
