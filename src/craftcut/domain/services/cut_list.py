"""Cut list generation and letter assignment.

Panels with identical cut sizes are bundled into one group, the way you
would take them to the lumber yard. Groups are lettered by size (A is the
largest) and the resulting :class:`LetterMap` is shared with the optimizer
and the assembly sequencer so a shape carries the same letter everywhere.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from ..value_objects import Panel
from .geometry import DimensionKey, dimension_key, format_dimension_key

logger = logging.getLogger(__name__)

__all__ = [
    "UNKNOWN_LETTER",
    "CutListEntry",
    "CutListSummary",
    "GroupedCutList",
    "GroupedPiece",
    "LetterMap",
    "calculate_cut_list",
    "calculate_grouped_cut_list",
    "get_panel_letter",
    "letter_for_index",
]

UNKNOWN_LETTER = "?"
SQ_MM_PER_SQ_M = 1_000_000


def letter_for_index(index: int) -> str:
    """Return the label for the zero-based group index.

    A..Z for the first 26 groups, then AA, AB, ... like spreadsheet columns.
    """
    if index < 0:
        raise ValueError("Letter index must be non-negative")
    letters = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


class LetterMap(Mapping[DimensionKey, str]):
    """Read-only mapping from a normalized cut size to its letter.

    :meth:`letter_for_key` and :meth:`letter_for` return
    :data:`UNKNOWN_LETTER` on a miss; plain indexing raises ``KeyError``
    like any mapping.
    """

    def __init__(self, letters: Mapping[DimensionKey, str] | None = None) -> None:
        self._letters: Mapping[DimensionKey, str] = MappingProxyType(dict(letters or {}))

    def __getitem__(self, key: DimensionKey) -> str:
        return self._letters[key]

    def __iter__(self) -> Iterator[DimensionKey]:
        return iter(self._letters)

    def __len__(self) -> int:
        return len(self._letters)

    def __repr__(self) -> str:
        items = ", ".join(
            f"{format_dimension_key(k)}={v}" for k, v in self._letters.items()
        )
        return f"LetterMap({items})"

    def letter_for_key(self, key: DimensionKey) -> str:
        """Letter for a dimension key, or ``"?"`` if unknown."""
        return self._letters.get(key, UNKNOWN_LETTER)

    def letter_for(self, panel: Panel, furniture_depth: float) -> str:
        """Letter for a panel's cut size, or ``"?"`` if unknown."""
        return self.letter_for_key(dimension_key(panel, furniture_depth))

    def as_strings(self) -> dict[str, str]:
        """Mapping keyed by ``"LxW"`` strings, for serialization."""
        return {format_dimension_key(k): v for k, v in self._letters.items()}


@dataclass(frozen=True)
class GroupedPiece:
    """A bundle of identical cut pieces.

    Attributes:
        letter: Shape label, A being the largest.
        length: Long cut dimension in mm.
        width: Short cut dimension in mm.
        thickness: Board thickness in mm.
        qty: Number of pieces of this size.
        area: Total area of the bundle in square metres.
    """

    letter: str
    length: float
    width: float
    thickness: float
    qty: int
    area: float

    @property
    def key(self) -> DimensionKey:
        """Dimension key of this bundle."""
        return (self.length, self.width)


@dataclass(frozen=True)
class GroupedCutList:
    """Cut list grouped by cut size.

    Attributes:
        pieces: Bundles ordered by descending piece size.
        total_pieces: Sum of quantities.
        total_area: Sum of bundle areas in square metres.
        letter_map: Shared cut size to letter mapping.
    """

    pieces: tuple[GroupedPiece, ...]
    total_pieces: int
    total_area: float
    letter_map: LetterMap = field(default_factory=LetterMap)


@dataclass(frozen=True)
class CutListEntry:
    """One panel as drawn, for the simple (ungrouped) cut list."""

    label: str
    width: float
    height: float
    qty: int
    area: float


@dataclass(frozen=True)
class CutListSummary:
    """Ungrouped cut list with totals."""

    pieces: tuple[CutListEntry, ...]
    total_pieces: int
    total_area: float


def calculate_cut_list(panels: Sequence[Panel]) -> CutListSummary:
    """List every panel with its drawn width and height.

    Areas are in square metres and include the quantity.
    """
    entries = tuple(
        CutListEntry(
            label=p.label,
            width=p.width,
            height=p.height,
            qty=p.quantity,
            area=p.width * p.height * p.quantity / SQ_MM_PER_SQ_M,
        )
        for p in panels
    )
    return CutListSummary(
        pieces=entries,
        total_pieces=sum(e.qty for e in entries),
        total_area=sum(e.area for e in entries),
    )


def calculate_grouped_cut_list(
    panels: Sequence[Panel],
    thickness: float,
    furniture_depth: float,
) -> GroupedCutList:
    """Group panels by cut size and assign letters.

    Args:
        panels: Panels to group.
        thickness: Board thickness recorded on every bundle.
        furniture_depth: Depth used by panels without their own.

    Returns:
        GroupedCutList with bundles sorted by descending length x width
        (ties keep discovery order) and the matching LetterMap.
    """
    quantities: dict[DimensionKey, int] = {}
    for panel in panels:
        key = dimension_key(panel, furniture_depth)
        quantities[key] = quantities.get(key, 0) + panel.quantity

    ordered = sorted(quantities.items(), key=lambda kv: kv[0][0] * kv[0][1], reverse=True)

    letters: dict[DimensionKey, str] = {}
    pieces: list[GroupedPiece] = []
    for index, ((length, width), qty) in enumerate(ordered):
        letter = letter_for_index(index)
        letters[(length, width)] = letter
        pieces.append(
            GroupedPiece(
                letter=letter,
                length=length,
                width=width,
                thickness=thickness,
                qty=qty,
                area=length * width * qty / SQ_MM_PER_SQ_M,
            )
        )

    if len(pieces) > 26:
        logger.info(
            "%d distinct cut sizes, using double letters beyond Z", len(pieces)
        )

    return GroupedCutList(
        pieces=tuple(pieces),
        total_pieces=sum(p.qty for p in pieces),
        total_area=sum(p.area for p in pieces),
        letter_map=LetterMap(letters),
    )


def get_panel_letter(
    panel: Panel, furniture_depth: float, letter_map: LetterMap
) -> str:
    """Letter for one panel's cut size, ``"?"`` when not in the map."""
    return letter_map.letter_for(panel, furniture_depth)
