"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from craftcut.domain import AssemblyStep, AssemblySummary, CostEstimate, GroupedCutList

if TYPE_CHECKING:
    from craftcut.infrastructure.bin_packing import OptimizationResult


@dataclass
class ProductionOutput:
    """Everything needed to build a design.

    Attributes:
        cut_list: Pieces grouped by shape, with the shared letter map.
        optimization: Sheet layouts from the cutting stock optimizer.
        steps: Assembly steps in build order.
        summary: Step count and estimated build time.
        cost: Sheet and edge banding cost.
        project_name: Optional project name from the settings.
    """

    cut_list: GroupedCutList
    optimization: OptimizationResult
    steps: list[AssemblyStep]
    summary: AssemblySummary
    cost: CostEstimate
    project_name: str | None = None

    @property
    def has_unplaced_pieces(self) -> bool:
        """Check if any panel could not be placed on a sheet."""
        return len(self.optimization.unplaced_pieces) > 0
