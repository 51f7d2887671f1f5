"""Unit tests for cut list grouping and letter assignment."""

import logging

import pytest

from craftcut.domain import (
    LetterMap,
    Orientation,
    Panel,
    calculate_cut_list,
    calculate_grouped_cut_list,
    get_panel_letter,
)
from craftcut.domain.services.cut_list import UNKNOWN_LETTER, letter_for_index

THICKNESS = 18.0
DEPTH = 400.0


class TestLetterForIndex:
    """Tests for letter_for_index()."""

    @pytest.mark.parametrize(
        "index,letter",
        [(0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA")],
    )
    def test_letters(self, index: int, letter: str) -> None:
        assert letter_for_index(index) == letter

    def test_negative_index_rejected(self) -> None:
        with pytest.raises(ValueError):
            letter_for_index(-1)


class TestLetterMap:
    """Tests for LetterMap lookups."""

    def test_known_and_unknown_keys(self) -> None:
        letters = LetterMap({(600.0, 400.0): "A"})
        assert letters.letter_for_key((600.0, 400.0)) == "A"
        assert letters.letter_for_key((1.0, 1.0)) == UNKNOWN_LETTER
        assert letters[(600.0, 400.0)] == "A"
        assert len(letters) == 1

    def test_indexing_unknown_key_raises(self) -> None:
        with pytest.raises(KeyError):
            LetterMap()[(1.0, 1.0)]

    def test_as_strings(self) -> None:
        letters = LetterMap({(600.0, 400.0): "A", (300.5, 200.0): "B"})
        assert letters.as_strings() == {"600x400": "A", "300.5x200": "B"}

    def test_source_dict_changes_do_not_leak(self) -> None:
        source = {(600.0, 400.0): "A"}
        letters = LetterMap(source)
        source[(1.0, 1.0)] = "Z"
        assert len(letters) == 1


class TestGroupedCutList:
    """Tests for calculate_grouped_cut_list()."""

    def test_empty(self) -> None:
        result = calculate_grouped_cut_list([], THICKNESS, DEPTH)
        assert result.pieces == ()
        assert result.total_pieces == 0
        assert result.total_area == 0
        assert len(result.letter_map) == 0

    def test_groups_equal_shapes_and_sums_quantities(self) -> None:
        panels = [
            Panel(id="s1", width=600, height=18, quantity=2),
            Panel(id="s2", width=600, height=18),
        ]
        result = calculate_grouped_cut_list(panels, THICKNESS, DEPTH)

        assert len(result.pieces) == 1
        piece = result.pieces[0]
        assert (piece.letter, piece.length, piece.width, piece.qty) == ("A", 600, 400, 3)
        assert piece.thickness == THICKNESS
        assert piece.area == pytest.approx(0.72)
        assert result.total_pieces == 3

    def test_orientations_with_same_cut_share_a_group(self) -> None:
        panels = [
            Panel(id="shelf", width=720, height=18),
            Panel(id="side", width=18, height=720, orientation=Orientation.VERTICAL),
        ]
        result = calculate_grouped_cut_list(panels, THICKNESS, DEPTH)
        assert len(result.pieces) == 1
        assert result.pieces[0].qty == 2

    def test_sorted_by_descending_area(self) -> None:
        panels = [
            Panel(id="small", width=300, height=18),
            Panel(id="large", width=1000, height=18),
            Panel(id="medium", width=600, height=18),
        ]
        result = calculate_grouped_cut_list(panels, THICKNESS, DEPTH)
        assert [p.length for p in result.pieces] == [1000, 600, 400]
        assert [p.letter for p in result.pieces] == ["A", "B", "C"]

    def test_equal_areas_keep_discovery_order(self) -> None:
        panels = [
            Panel(id="a", width=800, height=300, orientation=Orientation.BACK),
            Panel(id="b", width=600, height=400, orientation=Orientation.BACK),
        ]
        result = calculate_grouped_cut_list(panels, THICKNESS, DEPTH)
        assert [p.key for p in result.pieces] == [(800, 300), (600, 400)]

    def test_letter_map_matches_pieces(self) -> None:
        panels = [
            Panel(id="a", width=1000, height=18),
            Panel(id="b", width=500, height=18),
        ]
        result = calculate_grouped_cut_list(panels, THICKNESS, DEPTH)
        for piece in result.pieces:
            assert result.letter_map[piece.key] == piece.letter

    def test_more_than_26_shapes_use_double_letters(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        panels = [Panel(id=f"p{i}", width=1000 - i * 10, height=18) for i in range(28)]
        with caplog.at_level(logging.INFO):
            result = calculate_grouped_cut_list(panels, THICKNESS, DEPTH)

        assert [p.letter for p in result.pieces[-3:]] == ["Z", "AA", "AB"]
        assert "double letters" in caplog.text

    def test_get_panel_letter(self) -> None:
        panels = [Panel(id="a", width=1000, height=18), Panel(id="b", width=500, height=18)]
        letters = calculate_grouped_cut_list(panels, THICKNESS, DEPTH).letter_map
        assert get_panel_letter(panels[1], DEPTH, letters) == "B"
        stranger = Panel(id="c", width=123, height=18)
        assert get_panel_letter(stranger, DEPTH, letters) == UNKNOWN_LETTER


class TestRawCutList:
    """Tests for calculate_cut_list()."""

    def test_lists_panels_as_drawn(self) -> None:
        panels = [
            Panel(id="a", label="Door", width=500, height=700, quantity=2),
            Panel(id="b", label="Shelf", width=600, height=18),
        ]
        summary = calculate_cut_list(panels)

        assert [e.label for e in summary.pieces] == ["Door", "Shelf"]
        assert summary.pieces[0].area == pytest.approx(0.7)
        assert summary.total_pieces == 3
        assert summary.total_area == pytest.approx(0.7 + 0.0108)
