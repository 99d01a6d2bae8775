"""
Tests for coordinate mapping and box placement.
"""
import pytest

from gridiron_overlay.core import CanvasDimensions, Side
from gridiron_overlay.geometry import (
    BoxPlacer, calculate_canvas_dimensions, clamp_percent, estimate_box_size,
    percent_to_pixel, pixel_to_percent, preferred_side_for_anchor,
    to_canvas_coords, to_normalized_coords
)


def assert_inside_frame(placement, width, height, dimensions, margin=0.0):
    eps = 1e-6
    assert placement.x >= dimensions.offset_x + margin - eps
    assert placement.y >= dimensions.offset_y + margin - eps
    assert placement.x + width <= dimensions.offset_x + dimensions.width - margin + eps
    assert placement.y + height <= dimensions.offset_y + dimensions.height - margin + eps


class TestCanvasDimensions:
    """Tests for letterbox/pillarbox fitting."""

    def test_pillarbox(self):
        dims = calculate_canvas_dimensions(2000, 1000, 1920, 1080)
        assert dims.height == pytest.approx(1000)
        assert dims.width == pytest.approx(1000 * 1920 / 1080)
        assert dims.offset_x == pytest.approx((2000 - dims.width) / 2)
        assert dims.offset_y == 0.0

    def test_letterbox(self):
        dims = calculate_canvas_dimensions(1000, 1000, 1920, 1080)
        assert dims.width == pytest.approx(1000)
        assert dims.height == pytest.approx(562.5)
        assert dims.offset_y == pytest.approx(218.75)
        assert dims.scale == pytest.approx(1000 / 1920)

    @pytest.mark.parametrize("args", [(0, 720, 1920, 1080), (1280, 720, 0, 1080), (-5, 720, 1920, 1080)])
    def test_degenerate_is_empty(self, args):
        assert calculate_canvas_dimensions(*args).is_empty


class TestCoordinates:
    """Tests for percentage <-> pixel mapping."""

    def test_to_canvas_with_offsets(self):
        dims = CanvasDimensions(width=1000, height=500, offset_x=100, offset_y=50)
        assert to_canvas_coords((50, 50), dims) == pytest.approx((600, 300))
        assert to_canvas_coords((0, 100), dims) == pytest.approx((100, 550))

    def test_round_trip_inverse(self):
        dims = CanvasDimensions(width=1000, height=500, offset_x=100, offset_y=50)
        assert to_normalized_coords(to_canvas_coords((12.5, 80), dims), dims) == pytest.approx((12.5, 80))

    def test_normalized_on_empty_canvas(self):
        assert to_normalized_coords((10, 10), CanvasDimensions(width=0, height=0)) == (0.0, 0.0)

    @pytest.mark.parametrize("value,expected", [(-3, 0.0), (140, 100.0), (42.5, 42.5), ("bad", 0.0),
                                                (float("nan"), 0.0)])
    def test_clamp_percent(self, value, expected):
        assert clamp_percent(value) == expected

    def test_axis_conversions(self):
        assert pixel_to_percent(320, 1280) == pytest.approx(25.0)
        assert pixel_to_percent(2000, 1280) == 100.0
        assert pixel_to_percent(10, 0) == 0.0
        assert percent_to_pixel(25, 1280) == pytest.approx(320.0)


class TestPlacement:
    """Tests for the flip/shift box placer."""

    def test_bottom_right_anchor(self, dimensions):
        placer = BoxPlacer()
        anchor = to_canvas_coords((95, 95), dimensions)
        placement = placer.place_terminology(anchor, 100, 40, dimensions)

        assert placement.placement in (Side.LEFT, Side.TOP)
        assert_inside_frame(placement, 100, 40, dimensions, margin=placer.safe_margin)

    def test_flips_away_from_top_edge(self, dimensions):
        placement = BoxPlacer().place((640, 5), 100, 40, dimensions, preferred=Side.TOP)
        assert placement.placement != Side.TOP

    def test_ties_favor_preferred_side(self, dimensions):
        placer = BoxPlacer()
        for side in Side:
            assert placer.place((640, 360), 80, 30, dimensions, preferred=side).placement == side

    def test_preferred_side_for_anchor(self, dimensions):
        assert preferred_side_for_anchor((100, 360), dimensions) == Side.RIGHT
        assert preferred_side_for_anchor((1200, 360), dimensions) == Side.LEFT

    def test_arrow_label_above_midpoint(self, dimensions):
        placement = BoxPlacer().place_arrow_label((400, 400), (600, 400), 60, 20, dimensions)
        assert placement.placement == Side.TOP
        assert placement.x == pytest.approx(470)
        assert placement.y == pytest.approx(400 - 20 - 8)

    @pytest.mark.parametrize("dims", [
        CanvasDimensions(width=1280, height=720),
        CanvasDimensions(width=1000, height=562.5, offset_y=218.75),
        CanvasDimensions(width=300, height=200, offset_x=40, offset_y=10),
    ])
    def test_always_inside_frame(self, dims):
        placer = BoxPlacer()
        boxes = [(20, 10), (100, 40), (dims.width / 2, dims.height / 2), (dims.width, dims.height)]
        for px in (0, 3, 25, 50, 75, 97, 100):
            for py in (0, 3, 25, 50, 75, 97, 100):
                anchor = to_canvas_coords((px, py), dims)
                for width, height in boxes:
                    placement = placer.place_terminology(anchor, width, height, dims)
                    assert_inside_frame(placement, width, height, dims)


class TestBoxSize:
    """Tests for callout box size estimation."""

    def test_detail_adds_height(self, dimensions):
        _, without = estimate_box_size("Pursuit", None, dimensions)
        _, with_detail = estimate_box_size("Pursuit", "Linebacker closed the lane", dimensions)
        assert with_detail > without

    def test_never_larger_than_frame(self):
        dims = CanvasDimensions(width=120, height=40)
        width, height = estimate_box_size("A very long callout title", "d" * 200, dims)
        assert 0 < width <= 120
        assert 0 < height <= 40
