"""Infrastructure layer - sheet optimization and output formatting."""

from .bin_packing import (
    KERF,
    MIN_FREE_RECT_SIZE,
    CutOptimizerConfig,
    CuttingStockOptimizer,
    FreeRect,
    GuillotineBinPacker,
    OptimizationResult,
    Piece,
    Placement,
    SheetConfig,
    SheetLayout,
    SortStrategy,
    expand_pieces,
    free_rectangles,
    optimize_cuts,
    sort_pieces,
)
from .formatters import (
    AssemblyFormatter,
    CostFormatter,
    CsvExporter,
    CutListFormatter,
    JsonExporter,
    SheetLayoutFormatter,
)

__all__ = [
    # Bin packing
    "KERF",
    "MIN_FREE_RECT_SIZE",
    "CutOptimizerConfig",
    "CuttingStockOptimizer",
    "FreeRect",
    "GuillotineBinPacker",
    "OptimizationResult",
    "Piece",
    "Placement",
    "SheetConfig",
    "SheetLayout",
    "SortStrategy",
    "expand_pieces",
    "free_rectangles",
    "optimize_cuts",
    "sort_pieces",
    # Formatters
    "AssemblyFormatter",
    "CostFormatter",
    "CsvExporter",
    "CutListFormatter",
    "JsonExporter",
    "SheetLayoutFormatter",
]
