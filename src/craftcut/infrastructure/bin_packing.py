"""Cutting-stock optimization for sheet material.

This module provides data structures for representing pieces, placements
and sheet layouts, a guillotine best-fit bin packer, and an optimizer that
runs the packer under several sort strategies and keeps the best layout.

2D bin packing is NP-hard, so the optimizer is a heuristic ensemble: five
independent full packing runs, each with pieces pre-sorted by a different
key. The result with the fewest sheets wins, then the one with the lowest
total waste.

All public dataclasses are frozen (immutable) to ensure thread safety and
hashability.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum

from craftcut.domain.services.cut_list import UNKNOWN_LETTER, LetterMap
from craftcut.domain.services.geometry import dimension_key
from craftcut.domain.value_objects import Orientation, Panel

logger = logging.getLogger(__name__)

# Saw blade width lost per cut, in mm
KERF = 3.0
# Free rectangles narrower than this (mm) are discarded
MIN_FREE_RECT_SIZE = 10.0
# Fit score weights: best short side fit, then long side, then nearer the top
SHORT_SIDE_WEIGHT = 1000.0
Y_POSITION_WEIGHT = 0.1

DEFAULT_FURNITURE_DEPTH = 400.0


class SortStrategy(str, Enum):
    """Piece pre-sort keys tried by the optimizer (all descending)."""

    AREA = "area"
    WIDTH = "width"
    HEIGHT = "height"
    PERIMETER = "perimeter"
    MAX_SIDE = "max_side"


@dataclass(frozen=True)
class SheetConfig:
    """Configuration for stock sheet dimensions.

    Common sheet sizes:
    - 2440 x 1220 mm - standard full sheet
    - 2800 x 2070 mm - large format chipboard

    Attributes:
        width: Sheet width in mm.
        height: Sheet height in mm.
    """

    width: float = 2440.0
    height: float = 1220.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")

    @property
    def area(self) -> float:
        """Sheet area in square mm."""
        return self.width * self.height


@dataclass(frozen=True)
class CutOptimizerConfig:
    """Configuration for the cutting-stock optimizer.

    Attributes:
        sheet_size: Stock sheet dimensions.
        kerf: Clearance added to each piece dimension when fitting, in mm.
        min_free_rect: Smallest free rectangle dimension kept, in mm.
        strategies: Sort strategies to run, in comparison order.
        parallel: Run strategies on a thread pool. The result is identical
            either way.
    """

    sheet_size: SheetConfig = field(default_factory=SheetConfig)
    kerf: float = KERF
    min_free_rect: float = MIN_FREE_RECT_SIZE
    strategies: tuple[SortStrategy, ...] = tuple(SortStrategy)
    parallel: bool = False

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise ValueError("Kerf must be non-negative")
        if self.min_free_rect < 0:
            raise ValueError("Minimum free rectangle size must be non-negative")
        if not self.strategies:
            raise ValueError("At least one sort strategy is required")


@dataclass(frozen=True)
class Piece:
    """One physical cut unit expanded from a panel's quantity.

    Attributes:
        id: ``"{panel id}_{index}"``.
        label: Panel label, or ``"Panel {letter}"`` when the panel has none.
        letter: Shape letter shared with the cut list.
        width: Long cut dimension.
        height: Short cut dimension.
        source_id: Id of the panel this piece was expanded from.
        orientation: Orientation of the source panel.
    """

    id: str
    label: str
    letter: str
    width: float
    height: float
    source_id: str
    orientation: Orientation = Orientation.HORIZONTAL

    def __post_init__(self) -> None:
        if self.width < self.height:
            raise ValueError("Piece width must be >= height (normalized)")

    @property
    def area(self) -> float:
        """Area in square mm."""
        return self.width * self.height


@dataclass(frozen=True)
class FreeRect:
    """Unoccupied rectangle on a sheet."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def top_edge(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class Placement:
    """A piece placed at a specific position on a sheet.

    Attributes:
        piece_id: Id of the placed piece.
        label: Piece label.
        letter: Shape letter.
        x: Left edge on the sheet in mm.
        y: Top edge on the sheet in mm.
        width: Width as placed (after rotation).
        height: Height as placed (after rotation).
        rotated: True if the piece is turned 90 degrees.
        source_id: Id of the source panel.
    """

    piece_id: str
    label: str
    letter: str
    x: float
    y: float
    width: float
    height: float
    rotated: bool
    source_id: str

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def right_edge(self) -> float:
        """X coordinate of the piece's right edge."""
        return self.x + self.width

    @property
    def top_edge(self) -> float:
        """Y coordinate of the piece's far edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def overlaps(self, other: Placement | FreeRect) -> bool:
        """True if the interiors of the two rectangles intersect."""
        return not (
            self.x >= other.right_edge
            or self.right_edge <= other.x
            or self.y >= other.top_edge
            or self.top_edge <= other.y
        )


@dataclass(frozen=True)
class SheetLayout:
    """Layout of pieces on a single sheet.

    Attributes:
        sheet_id: ``"sheet_1"``, ``"sheet_2"``, ...
        placements: Placements in the order they were made.
        used_area: Area covered by pieces in square mm.
        waste_percent: Unused share of the sheet, rounded.
    """

    sheet_id: str
    placements: tuple[Placement, ...]
    used_area: float
    waste_percent: int

    @property
    def piece_count(self) -> int:
        """Number of pieces placed on this sheet."""
        return len(self.placements)


@dataclass(frozen=True)
class OptimizationResult:
    """Complete result of a cutting-stock optimization.

    Attributes:
        sheets: Sheet layouts.
        total_sheets: Number of sheets used.
        total_waste: Area-weighted waste across all sheets, rounded percent.
        unplaced_pieces: Source panels too large for any sheet orientation,
            once per panel.
        strategy: Sort strategy that produced this result, if any.
    """

    sheets: tuple[SheetLayout, ...]
    total_sheets: int
    total_waste: int
    unplaced_pieces: tuple[Panel, ...]
    strategy: SortStrategy | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.total_waste <= 100:
            raise ValueError("Waste percentage must be between 0 and 100")

    @classmethod
    def empty(cls) -> OptimizationResult:
        """Result for an empty panel list."""
        return cls(sheets=(), total_sheets=0, total_waste=0, unplaced_pieces=())

    @property
    def total_pieces_placed(self) -> int:
        """Total number of pieces placed across all sheets."""
        return sum(sheet.piece_count for sheet in self.sheets)


@dataclass
class _SheetState:
    """Internal mutable state for a sheet during packing."""

    index: int
    placements: list[Placement] = field(default_factory=list)
    used_area: float = 0.0

    def to_layout(self, sheet_area: float) -> SheetLayout:
        return SheetLayout(
            sheet_id=f"sheet_{self.index + 1}",
            placements=tuple(self.placements),
            used_area=self.used_area,
            waste_percent=_waste_percent(self.used_area, sheet_area),
        )


@dataclass(frozen=True)
class _Candidate:
    x: float
    y: float
    rotated: bool
    score: float


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from minus infinity."""
    return math.floor(value + 0.5)


def _waste_percent(used_area: float, total_area: float) -> int:
    if total_area <= 0:
        return 0
    return round_half_up((1 - used_area / total_area) * 100)


def expand_pieces(
    panels: Sequence[Panel],
    furniture_depth: float,
    letter_map: LetterMap | None = None,
) -> list[Piece]:
    """Expand panels into individual pieces with normalized cut sizes.

    Each panel with quantity N becomes N pieces sharing the panel's letter.

    Args:
        panels: Source panels.
        furniture_depth: Depth used by panels without their own.
        letter_map: Shared shape letters; missing entries become ``"?"``.

    Returns:
        Pieces in panel order.
    """
    pieces: list[Piece] = []
    for panel in panels:
        key = dimension_key(panel, furniture_depth)
        letter = letter_map.letter_for_key(key) if letter_map is not None else UNKNOWN_LETTER
        label = panel.label or f"Panel {letter}"
        for i in range(panel.quantity):
            pieces.append(
                Piece(
                    id=f"{panel.id}_{i}",
                    label=label,
                    letter=letter,
                    width=key[0],
                    height=key[1],
                    source_id=panel.id,
                    orientation=panel.orientation,
                )
            )
    return pieces


_SORT_KEYS = {
    SortStrategy.AREA: lambda p: p.width * p.height,
    SortStrategy.WIDTH: lambda p: (p.width, p.height),
    SortStrategy.HEIGHT: lambda p: (p.height, p.width),
    SortStrategy.PERIMETER: lambda p: p.width + p.height,
    SortStrategy.MAX_SIDE: lambda p: max(p.width, p.height),
}


def sort_pieces(pieces: Sequence[Piece], strategy: SortStrategy) -> list[Piece]:
    """Return pieces sorted descending by the strategy's key (stable)."""
    return sorted(pieces, key=_SORT_KEYS[strategy], reverse=True)


def free_rectangles(
    placements: Sequence[Placement],
    sheet_width: float,
    sheet_height: float,
    min_size: float = MIN_FREE_RECT_SIZE,
) -> list[FreeRect]:
    """Compute free rectangles on a sheet from scratch.

    Starts from the full sheet and, for every placement, splits each free
    rectangle it overlaps into up to four remainders (left, right, top,
    bottom). Remainders may overlap each other but never a placement.

    Returns:
        Rectangles at least ``min_size`` in both dimensions, ordered by
        (y, x).
    """
    working = [FreeRect(0.0, 0.0, sheet_width, sheet_height)]

    for placement in placements:
        split: list[FreeRect] = []
        for rect in working:
            if not placement.overlaps(rect):
                split.append(rect)
                continue
            if placement.x > rect.x:
                split.append(FreeRect(rect.x, rect.y, placement.x - rect.x, rect.height))
            if placement.right_edge < rect.right_edge:
                split.append(
                    FreeRect(
                        placement.right_edge,
                        rect.y,
                        rect.right_edge - placement.right_edge,
                        rect.height,
                    )
                )
            if placement.y > rect.y:
                split.append(FreeRect(rect.x, rect.y, rect.width, placement.y - rect.y))
            if placement.top_edge < rect.top_edge:
                split.append(
                    FreeRect(
                        rect.x,
                        placement.top_edge,
                        rect.width,
                        rect.top_edge - placement.top_edge,
                    )
                )
        working = split

    kept = [r for r in working if r.width >= min_size and r.height >= min_size]
    return sorted(kept, key=lambda r: (r.y, r.x))


class GuillotineBinPacker:
    """Best-fit guillotine bin packer.

    Pieces are placed in the order given. For each piece every open sheet
    is searched for the free rectangle with the best short-side fit; a new
    sheet is opened only when no existing sheet admits the piece.

    Attributes:
        config: Optimizer configuration (sheet size, kerf, minimum free
            rectangle).
    """

    def __init__(self, config: CutOptimizerConfig) -> None:
        """Initialize the packer with configuration.

        Args:
            config: Optimizer configuration.
        """
        self.config = config

    def pack(
        self,
        pieces: Sequence[Piece],
        panels: Mapping[str, Panel],
        strategy: SortStrategy | None = None,
    ) -> OptimizationResult:
        """Pack pieces onto sheets in the given order.

        Args:
            pieces: Pieces to place, already sorted.
            panels: Source panels by id, for reporting unplaced pieces.
            strategy: Strategy recorded on the result.

        Returns:
            OptimizationResult. Pieces too large for the sheet in either
            orientation are reported in ``unplaced_pieces`` instead of
            raising.
        """
        sheet = self.config.sheet_size
        sheets: list[_SheetState] = []
        unplaced: dict[str, Panel] = {}

        for piece in pieces:
            fits_normal, fits_rotated = self._fits_empty_sheet(piece)
            if not fits_normal and not fits_rotated:
                if piece.source_id not in unplaced and piece.source_id in panels:
                    unplaced[piece.source_id] = panels[piece.source_id]
                    logger.info(
                        "Piece '%s' (%sx%s) exceeds sheet %sx%s, not placed",
                        piece.label,
                        piece.width,
                        piece.height,
                        sheet.width,
                        sheet.height,
                    )
                continue

            best: tuple[_SheetState, _Candidate] | None = None
            for state in sheets:
                candidate = self._find_best_position(state, piece)
                if candidate is not None and (best is None or candidate.score < best[1].score):
                    best = (state, candidate)

            if best is not None:
                state, candidate = best
                self._place(state, piece, candidate.x, candidate.y, candidate.rotated)
            else:
                state = _SheetState(index=len(sheets))
                rotated = not fits_normal and fits_rotated
                self._place(state, piece, 0.0, 0.0, rotated)
                sheets.append(state)

        layouts = tuple(state.to_layout(sheet.area) for state in sheets)
        total_used = sum(layout.used_area for layout in layouts)

        for layout in layouts:
            logger.debug(
                "%s: %d pieces, %d%% waste",
                layout.sheet_id,
                layout.piece_count,
                layout.waste_percent,
            )

        return OptimizationResult(
            sheets=layouts,
            total_sheets=len(layouts),
            total_waste=_waste_percent(total_used, len(layouts) * sheet.area),
            unplaced_pieces=tuple(unplaced.values()),
            strategy=strategy,
        )

    def _fits_empty_sheet(self, piece: Piece) -> tuple[bool, bool]:
        """Check whether a piece fits a blank sheet, normal and rotated."""
        kerf = self.config.kerf
        sheet = self.config.sheet_size
        fits_normal = piece.width + kerf <= sheet.width and piece.height + kerf <= sheet.height
        fits_rotated = piece.height + kerf <= sheet.width and piece.width + kerf <= sheet.height
        return fits_normal, fits_rotated

    def _score(self, rect: FreeRect, width: float, height: float) -> float:
        leftover_w = rect.width - width
        leftover_h = rect.height - height
        return (
            min(leftover_w, leftover_h) * SHORT_SIDE_WEIGHT
            + max(leftover_w, leftover_h)
            + rect.y * Y_POSITION_WEIGHT
        )

    def _find_best_position(self, state: _SheetState, piece: Piece) -> _Candidate | None:
        """Find the best free rectangle on one sheet (lower score wins).

        Args:
            state: Sheet to search.
            piece: Piece to place.

        Returns:
            The best candidate, or None if the piece fits nowhere on the sheet.
        """
        kerf = self.config.kerf
        sheet = self.config.sheet_size
        rects = free_rectangles(
            state.placements, sheet.width, sheet.height, self.config.min_free_rect
        )

        best: _Candidate | None = None
        for rect in rects:
            if piece.width + kerf <= rect.width and piece.height + kerf <= rect.height:
                score = self._score(rect, piece.width, piece.height)
                if best is None or score < best.score:
                    best = _Candidate(rect.x, rect.y, rotated=False, score=score)

            if (
                piece.width != piece.height
                and piece.height + kerf <= rect.width
                and piece.width + kerf <= rect.height
            ):
                score = self._score(rect, piece.height, piece.width)
                if best is None or score < best.score:
                    best = _Candidate(rect.x, rect.y, rotated=True, score=score)

        return best

    def _place(
        self,
        state: _SheetState,
        piece: Piece,
        x: float,
        y: float,
        rotated: bool,
    ) -> Placement:
        """Record a placement on a sheet and update its used area."""
        placement = Placement(
            piece_id=piece.id,
            label=piece.label,
            letter=piece.letter,
            x=x,
            y=y,
            width=piece.height if rotated else piece.width,
            height=piece.width if rotated else piece.height,
            rotated=rotated,
            source_id=piece.source_id,
        )
        state.placements.append(placement)
        state.used_area += piece.area

        if rotated:
            logger.debug(
                "Piece '%s' placed rotated at (%s, %s) on sheet_%d",
                piece.label,
                x,
                y,
                state.index + 1,
            )
        return placement


class CuttingStockOptimizer:
    """Runs the packer under every sort strategy and keeps the best layout.

    Attributes:
        config: Optimizer configuration.
        packer: GuillotineBinPacker used for each run.
    """

    def __init__(self, config: CutOptimizerConfig | None = None) -> None:
        """Initialize the optimizer.

        Args:
            config: Optimizer configuration; defaults to a 2440x1220 sheet.
        """
        self.config = config or CutOptimizerConfig()
        self.packer = GuillotineBinPacker(self.config)

    def optimize(
        self,
        panels: Sequence[Panel],
        furniture_depth: float = DEFAULT_FURNITURE_DEPTH,
        letter_map: LetterMap | None = None,
    ) -> OptimizationResult:
        """Lay out all panels on as few sheets as possible.

        Args:
            panels: Panels to cut.
            furniture_depth: Depth used by panels without their own.
            letter_map: Shared shape letters for labelling placements.

        Returns:
            The best OptimizationResult across all strategies.
        """
        if not panels:
            return OptimizationResult.empty()

        pieces = expand_pieces(panels, furniture_depth, letter_map)
        results = self.run_strategies(pieces, panels)

        strategies = self.config.strategies
        best = results[strategies[0]]
        for strategy in strategies[1:]:
            if self._is_better(results[strategy], best):
                best = results[strategy]

        logger.info(
            "Packed %d pieces onto %d sheets (%d%% waste) using '%s' ordering",
            best.total_pieces_placed,
            best.total_sheets,
            best.total_waste,
            best.strategy.value if best.strategy else "default",
        )
        return best

    def run_strategies(
        self,
        pieces: Sequence[Piece],
        panels: Sequence[Panel],
    ) -> dict[SortStrategy, OptimizationResult]:
        """Pack the pieces once per configured strategy.

        Args:
            pieces: Expanded pieces.
            panels: Source panels.

        Returns:
            Result of each strategy run alone.
        """
        by_id = {p.id: p for p in panels}

        def run(strategy: SortStrategy) -> OptimizationResult:
            result = self.packer.pack(sort_pieces(pieces, strategy), by_id, strategy)
            logger.debug(
                "Strategy '%s': %d sheets, %d%% waste",
                strategy.value,
                result.total_sheets,
                result.total_waste,
            )
            return result

        strategies = self.config.strategies
        if self.config.parallel:
            with ThreadPoolExecutor(max_workers=len(strategies)) as pool:
                outcomes = list(pool.map(run, strategies))
        else:
            outcomes = [run(s) for s in strategies]
        return dict(zip(strategies, outcomes))

    @staticmethod
    def _is_better(candidate: OptimizationResult, best: OptimizationResult) -> bool:
        """Fewer sheets wins, then strictly lower waste."""
        if candidate.total_sheets != best.total_sheets:
            return candidate.total_sheets < best.total_sheets
        return candidate.total_waste < best.total_waste


def optimize_cuts(
    panels: Sequence[Panel],
    sheet_width: float,
    sheet_height: float,
    furniture_depth: float = DEFAULT_FURNITURE_DEPTH,
    letter_map: LetterMap | None = None,
) -> OptimizationResult:
    """Optimize the cutting layout for panels on stock sheets.

    Args:
        panels: Panels to cut.
        sheet_width: Stock sheet width in mm.
        sheet_height: Stock sheet height in mm.
        furniture_depth: Depth used by panels without their own.
        letter_map: Shared shape letters; placements get ``"?"`` without it.

    Returns:
        The best OptimizationResult across the sort strategies.
    """
    config = CutOptimizerConfig(sheet_size=SheetConfig(width=sheet_width, height=sheet_height))
    return CuttingStockOptimizer(config).optimize(panels, furniture_depth, letter_map)
