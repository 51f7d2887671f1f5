"""Application commands (use cases) for production planning."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from craftcut.domain import (
    Panel,
    Settings,
    calculate_grouped_cut_list,
    estimate_cost,
    generate_assembly_steps,
    get_assembly_summary,
)
from craftcut.infrastructure.bin_packing import (
    CutOptimizerConfig,
    CuttingStockOptimizer,
    SheetConfig,
)

from .dtos import ProductionOutput

logger = logging.getLogger(__name__)


class PlanProductionCommand:
    """Command to build the cut list, cutting plan and assembly guide.

    The three outputs share one letter map, so a piece labelled ``B`` in
    the cut list is ``B`` on the sheet layout and in the assembly steps.
    """

    def __init__(self, optimizer: CuttingStockOptimizer | None = None) -> None:
        """Initialize the command.

        Args:
            optimizer: Optimizer to use. When None, one is created per run
                from the settings' sheet size.
        """
        self.optimizer = optimizer

    def execute(self, panels: Sequence[Panel], settings: Settings) -> ProductionOutput:
        """Plan production for a set of panels.

        Args:
            panels: Panels of the design.
            settings: Project settings.

        Returns:
            ProductionOutput with every derived artifact.
        """
        cut_list = calculate_grouped_cut_list(
            panels, settings.thickness, settings.furniture_depth
        )
        letter_map = cut_list.letter_map

        optimizer = self.optimizer or CuttingStockOptimizer(
            CutOptimizerConfig(
                sheet_size=SheetConfig(
                    width=settings.sheet_width, height=settings.sheet_height
                )
            )
        )
        optimization = optimizer.optimize(panels, settings.furniture_depth, letter_map)
        if optimization.unplaced_pieces:
            logger.warning(
                "%d panel(s) do not fit a %gx%g sheet",
                len(optimization.unplaced_pieces),
                settings.sheet_width,
                settings.sheet_height,
            )

        steps = generate_assembly_steps(panels, settings, letter_map)
        summary = get_assembly_summary(steps)
        cost = estimate_cost(
            panels, settings, optimization.total_sheets, optimization.total_waste
        )

        return ProductionOutput(
            cut_list=cut_list,
            optimization=optimization,
            steps=steps,
            summary=summary,
            cost=cost,
            project_name=settings.project_name,
        )
