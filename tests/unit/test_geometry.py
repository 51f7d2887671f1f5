"""Unit tests for panel geometry projection."""

import pytest

from craftcut.domain import Orientation, Panel, ZAlignment
from craftcut.domain.services.geometry import (
    cut_dimensions,
    dimension_key,
    format_dimension_key,
    panel_bounds,
    true_dimensions,
    z_offset,
)

THICKNESS = 18.0
DEPTH = 400.0


class TestTrueDimensions:
    """Tests for true_dimensions()."""

    def test_horizontal_panel_is_thickness_tall(self) -> None:
        panel = Panel(id="p", width=600, height=18)
        dims = true_dimensions(panel, THICKNESS, DEPTH)
        assert (dims.width, dims.height, dims.depth) == (600, THICKNESS, DEPTH)

    def test_vertical_panel_is_thickness_wide(self) -> None:
        panel = Panel(id="p", width=18, height=700, orientation=Orientation.VERTICAL)
        dims = true_dimensions(panel, THICKNESS, DEPTH)
        assert (dims.width, dims.height, dims.depth) == (THICKNESS, 700, DEPTH)

    def test_back_panel_is_thickness_deep(self) -> None:
        panel = Panel(id="p", width=600, height=700, orientation=Orientation.BACK)
        dims = true_dimensions(panel, THICKNESS, DEPTH)
        assert (dims.width, dims.height, dims.depth) == (600, 700, THICKNESS)

    def test_custom_depth_overrides_furniture_depth(self) -> None:
        panel = Panel(id="p", width=600, height=18, depth=250)
        assert true_dimensions(panel, THICKNESS, DEPTH).depth == 250


class TestCutDimensions:
    """Tests for cut_dimensions() and dimension_key()."""

    def test_horizontal_pairs_width_with_depth(self) -> None:
        panel = Panel(id="p", width=600, height=18)
        cut = cut_dimensions(panel, DEPTH)
        assert (cut.length, cut.width) == (600, DEPTH)

    def test_vertical_pairs_height_with_depth(self) -> None:
        panel = Panel(id="p", width=18, height=720, orientation=Orientation.VERTICAL)
        cut = cut_dimensions(panel, DEPTH)
        assert (cut.length, cut.width) == (720, DEPTH)

    def test_back_uses_face(self) -> None:
        panel = Panel(id="p", width=600, height=720, orientation=Orientation.BACK)
        cut = cut_dimensions(panel, DEPTH)
        assert (cut.length, cut.width) == (600, 720)

    def test_key_is_normalized_long_side_first(self) -> None:
        panel = Panel(id="p", width=300, height=18)
        assert dimension_key(panel, DEPTH) == (400, 300)

    def test_same_shape_from_different_orientations_shares_key(self) -> None:
        shelf = Panel(id="a", width=720, height=18)
        side = Panel(id="b", width=18, height=720, orientation=Orientation.VERTICAL)
        assert dimension_key(shelf, DEPTH) == dimension_key(side, DEPTH)

    def test_format_dimension_key_drops_trailing_zero(self) -> None:
        assert format_dimension_key((600.0, 400.0)) == "600x400"
        assert format_dimension_key((600.5, 400.0)) == "600.5x400"


class TestZOffset:
    """Tests for z_offset() and panel_bounds()."""

    @pytest.mark.parametrize(
        "align,expected",
        [
            (None, 0.0),
            (ZAlignment.FRONT, 0.0),
            (ZAlignment.BACK, 150.0),
            (ZAlignment.CENTER, 75.0),
        ],
    )
    def test_alignment_of_shallow_panel(
        self, align: ZAlignment | None, expected: float
    ) -> None:
        panel = Panel(id="p", width=600, height=18, depth=250, z_align=align)
        assert z_offset(panel, THICKNESS, DEPTH) == expected

    def test_back_panel_sits_at_rear(self) -> None:
        panel = Panel(id="p", width=600, height=700, orientation=Orientation.BACK)
        assert z_offset(panel, THICKNESS, DEPTH) == DEPTH - THICKNESS

    def test_bounds_span_true_dimensions(self) -> None:
        panel = Panel(
            id="p", x=100, y=50, width=18, height=700, orientation=Orientation.VERTICAL
        )
        bounds = panel_bounds(panel, THICKNESS, DEPTH)
        assert (bounds.min_x, bounds.max_x) == (100, 118)
        assert (bounds.min_y, bounds.max_y) == (50, 750)
        assert (bounds.min_z, bounds.max_z) == (0, DEPTH)
        assert bounds.orientation == Orientation.VERTICAL
