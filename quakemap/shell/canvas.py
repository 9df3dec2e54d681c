"""Matplotlib Canvas - Imperative Shell.

Implements the core's Canvas protocol on a matplotlib Axes whose data
coordinates are window pixels (origin top-left, y down).
"""

from dataclasses import dataclass, replace
from typing import Any

from matplotlib import patches
from matplotlib.axes import Axes
from matplotlib.lines import Line2D


# Processing draws 12px text; matplotlib sizes text in points at 72 per inch
POINTS_PER_PIXEL = 0.75


@dataclass
class Style:
    """Sticky drawing state."""
    fill: str = "#ffffff"
    stroke: str | None = "#000000"
    stroke_weight: float = 1.0
    text_size: float = 12.0


class MatplotlibCanvas:
    """Canvas drawing matplotlib artists in screen pixel coordinates."""

    def __init__(self, ax: Axes, width: int, height: int, background: str = "#000000") -> None:
        self.ax = ax
        self.width = width
        self.height = height
        self.background = background
        self._style = Style()
        self._stack: list[Style] = []
        self._z = 0
        self.clear()

    def clear(self) -> None:
        """Remove every artist and reset the pixel coordinate system."""
        self.ax.clear()
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_axis_off()
        self.ax.add_patch(patches.Rectangle(
            (0, 0), self.width, self.height, facecolor=self.background, edgecolor="none", zorder=0,
        ))
        self._style = Style()
        self._stack.clear()
        self._z = 1

    def _next_z(self) -> int:
        self._z += 1
        return self._z

    def _linewidth(self) -> float:
        if self._style.stroke is None:
            return 0.0
        return self._style.stroke_weight * POINTS_PER_PIXEL

    def _edgecolor(self) -> str:
        if self._style.stroke is None or self._style.stroke_weight <= 0:
            return "none"
        return self._style.stroke

    def push_style(self) -> None:
        self._stack.append(replace(self._style))

    def pop_style(self) -> None:
        if self._stack:
            self._style = self._stack.pop()

    def fill(self, color: str) -> None:
        self._style.fill = color

    def stroke(self, color: str | None) -> None:
        self._style.stroke = color

    def stroke_weight(self, weight: float) -> None:
        self._style.stroke_weight = weight

    def text_size(self, size: float) -> None:
        self._style.text_size = size

    def ellipse(self, x: float, y: float, width: float, height: float) -> None:
        self.ax.add_patch(patches.Ellipse(
            (x, y), width, height,
            facecolor=self._style.fill,
            edgecolor=self._edgecolor(),
            linewidth=self._linewidth(),
            zorder=self._next_z(),
        ))

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self.ax.add_patch(patches.Rectangle(
            (x, y), width, height,
            facecolor=self._style.fill,
            edgecolor=self._edgecolor(),
            linewidth=self._linewidth(),
            zorder=self._next_z(),
        ))

    def triangle(
        self,
        x1: float, y1: float,
        x2: float, y2: float,
        x3: float, y3: float,
    ) -> None:
        self.ax.add_patch(patches.Polygon(
            [(x1, y1), (x2, y2), (x3, y3)],
            closed=True,
            facecolor=self._style.fill,
            edgecolor=self._edgecolor(),
            linewidth=self._linewidth(),
            zorder=self._next_z(),
        ))

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        if self._edgecolor() == "none":
            return
        self.ax.add_line(Line2D(
            [x1, x2], [y1, y2],
            color=self._style.stroke,
            linewidth=self._linewidth(),
            zorder=self._next_z(),
        ))

    def text(self, value: str, x: float, y: float) -> None:
        self.ax.text(
            x, y, value,
            color=self._style.fill,
            fontsize=self._style.text_size * POINTS_PER_PIXEL,
            ha="left",
            va="center",
            zorder=self._next_z(),
        )

    def image(self, image: Any, x: float, y: float, width: float, height: float) -> None:
        # With the y axis inverted, "upper" puts the first row at y
        self.ax.imshow(
            image,
            extent=(x, x + width, y + height, y),
            origin="upper",
            interpolation="bilinear",
            zorder=self._next_z(),
        )
        # imshow resets the limits and aspect to fit the image
        self.ax.set_aspect("auto")
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
