"""Application layer - use cases and orchestration."""

from .commands import PlanProductionCommand
from .dtos import ProductionOutput

__all__ = [
    "PlanProductionCommand",
    "ProductionOutput",
]
