"""Tests for the matplotlib canvas on the headless Agg backend."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest
from matplotlib import patches
from matplotlib.lines import Line2D
from PIL import Image

from quakemap.shell.canvas import POINTS_PER_PIXEL, MatplotlibCanvas


@pytest.fixture
def canvas():
    figure = plt.figure(figsize=(9, 7), dpi=100)
    ax = figure.add_axes((0, 0, 1, 1))
    yield MatplotlibCanvas(ax, 900, 700)
    plt.close(figure)


def user_patches(canvas):
    """Patches drawn after the background."""
    return [p for p in canvas.ax.patches if p.get_zorder() > 0]


class TestMatplotlibCanvas:
    """Tests for MatplotlibCanvas primitives."""

    def test_pixel_coordinates_with_y_down(self, canvas):
        assert canvas.ax.get_xlim() == (0, 900)
        assert canvas.ax.get_ylim() == (700, 0)

    def test_ellipse_is_centered(self, canvas):
        canvas.fill("#ff0000")
        canvas.ellipse(100, 200, 20, 10)

        ellipse = user_patches(canvas)[0]
        assert isinstance(ellipse, patches.Ellipse)
        assert tuple(ellipse.center) == (100, 200)
        assert (ellipse.width, ellipse.height) == (20, 10)
        assert ellipse.get_facecolor()[:3] == (1.0, 0.0, 0.0)

    def test_rect_from_top_left(self, canvas):
        canvas.rect(10, 20, 30, 40)
        rect = user_patches(canvas)[0]
        assert rect.get_xy() == (10, 20)
        assert (rect.get_width(), rect.get_height()) == (30, 40)

    def test_later_primitives_draw_on_top(self, canvas):
        canvas.rect(0, 0, 10, 10)
        canvas.ellipse(5, 5, 10, 10)
        first, second = user_patches(canvas)
        assert second.get_zorder() > first.get_zorder()

    def test_push_pop_restores_fill(self, canvas):
        canvas.fill("#00ff00")
        canvas.push_style()
        canvas.fill("#0000ff")
        canvas.pop_style()
        canvas.rect(0, 0, 1, 1)
        assert user_patches(canvas)[0].get_facecolor()[:3] == (0.0, 1.0, 0.0)

    def test_no_stroke_means_no_edge(self, canvas):
        canvas.stroke(None)
        canvas.rect(0, 0, 1, 1)
        assert user_patches(canvas)[0].get_linewidth() == 0.0

    def test_line_uses_stroke_weight(self, canvas):
        canvas.stroke_weight(2)
        canvas.line(0, 0, 10, 10)
        line = canvas.ax.lines[0]
        assert isinstance(line, Line2D)
        assert line.get_linewidth() == pytest.approx(2 * POINTS_PER_PIXEL)

    def test_line_without_stroke_is_skipped(self, canvas):
        canvas.stroke(None)
        canvas.line(0, 0, 10, 10)
        assert len(canvas.ax.lines) == 0

    def test_text_in_fill_color(self, canvas):
        canvas.fill("#ff0000")
        canvas.text_size(12)
        canvas.text("Tokyo", 50, 60)

        text = canvas.ax.texts[0]
        assert text.get_text() == "Tokyo"
        assert text.get_position() == (50, 60)
        assert text.get_fontsize() == pytest.approx(12 * POINTS_PER_PIXEL)

    def test_image_keeps_pixel_limits(self, canvas):
        canvas.image(Image.new("RGB", (65, 60)), 178, 50, 650, 600)

        assert canvas.ax.get_xlim() == (0, 900)
        assert canvas.ax.get_ylim() == (700, 0)
        assert tuple(canvas.ax.images[0].get_extent()) == (178, 828, 650, 50)

    def test_clear_removes_everything(self, canvas):
        canvas.fill("#ff0000")
        canvas.rect(0, 0, 10, 10)
        canvas.text("x", 1, 1)

        canvas.clear()

        assert user_patches(canvas) == []
        assert len(canvas.ax.texts) == 0
        assert canvas._style.fill == "#ffffff"
