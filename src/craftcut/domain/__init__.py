"""Domain layer - panel model and the cut list and assembly engines."""

from .services import (
    AssemblyStep,
    AssemblySummary,
    ConnectionType,
    ContactFace,
    CostEstimate,
    GroupedCutList,
    GroupedPiece,
    LetterMap,
    PanelConnection,
    calculate_cut_list,
    calculate_grouped_cut_list,
    detect_connections,
    estimate_cost,
    generate_assembly_steps,
    get_assembly_summary,
    get_panel_letter,
)
from .value_objects import (
    MATERIAL_PRESETS,
    CutDimensions,
    EdgeBanding,
    MaterialPreset,
    MaterialType,
    Orientation,
    Panel,
    PanelBounds,
    Settings,
    TrueDimensions,
    ZAlignment,
)

__all__ = [
    # Value objects
    "MATERIAL_PRESETS",
    "CutDimensions",
    "EdgeBanding",
    "MaterialPreset",
    "MaterialType",
    "Orientation",
    "Panel",
    "PanelBounds",
    "Settings",
    "TrueDimensions",
    "ZAlignment",
    # Services
    "AssemblyStep",
    "AssemblySummary",
    "ConnectionType",
    "ContactFace",
    "CostEstimate",
    "GroupedCutList",
    "GroupedPiece",
    "LetterMap",
    "PanelConnection",
    "calculate_cut_list",
    "calculate_grouped_cut_list",
    "detect_connections",
    "estimate_cost",
    "generate_assembly_steps",
    "get_assembly_summary",
    "get_panel_letter",
]
