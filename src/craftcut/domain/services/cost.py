"""Material cost estimation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..value_objects import Panel, Settings
from .geometry import cut_dimensions

__all__ = ["CostEstimate", "edge_banding_length", "estimate_cost"]

MM_PER_METRE = 1000.0


@dataclass(frozen=True)
class CostEstimate:
    """Estimated material cost for a project.

    Attributes:
        total_sheets: Sheets needed according to the cutting plan.
        sheet_cost: Sheets times sheet price.
        edge_banding_meters: Total banded edge length in metres.
        edge_banding_cost: Banding length times price per metre.
        total_cost: Sheet cost plus banding cost.
        currency: Currency symbol.
        waste_percent: Overall waste of the cutting plan.
    """

    total_sheets: int
    sheet_cost: float
    edge_banding_meters: float
    edge_banding_cost: float
    total_cost: float
    currency: str
    waste_percent: int

    @property
    def efficiency_percent(self) -> int:
        """Share of sheet area used by pieces."""
        return 100 - self.waste_percent


def edge_banding_length(panels: Sequence[Panel], furniture_depth: float) -> float:
    """Total banded edge length in mm across all panels and quantities.

    Top and bottom edges run along the cut length, left and right edges
    along the cut width.
    """
    total = 0.0
    for panel in panels:
        banding = panel.edge_banding
        if banding is None:
            continue
        dims = cut_dimensions(panel, furniture_depth)
        per_piece = (
            dims.length * (banding.top + banding.bottom)
            + dims.width * (banding.left + banding.right)
        )
        total += per_piece * panel.quantity
    return total


def estimate_cost(
    panels: Sequence[Panel],
    settings: Settings,
    total_sheets: int,
    waste_percent: int = 0,
) -> CostEstimate:
    """Estimate sheet and edge banding cost.

    Args:
        panels: Panels of the project.
        settings: Prices, currency and furniture depth.
        total_sheets: Sheet count from the cutting plan.
        waste_percent: Overall waste from the cutting plan.

    Returns:
        CostEstimate. Missing prices count as zero.
    """
    sheet_cost = total_sheets * settings.sheet_price
    meters = edge_banding_length(panels, settings.furniture_depth) / MM_PER_METRE
    banding_cost = meters * settings.edge_banding_price
    return CostEstimate(
        total_sheets=total_sheets,
        sheet_cost=sheet_cost,
        edge_banding_meters=meters,
        edge_banding_cost=banding_cost,
        total_cost=sheet_cost + banding_cost,
        currency=settings.currency,
        waste_percent=waste_percent,
    )
