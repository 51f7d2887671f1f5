"""Domain services for cut lists, panel connections and assembly planning."""

from .assembly import (
    AssemblyStep,
    AssemblySummary,
    CycleDetected,
    DependencyEdge,
    SortedOrder,
    assembly_priorities,
    assembly_priority,
    build_dependency_graph,
    generate_assembly_steps,
    get_assembly_summary,
    topological_order,
)
from .connections import (
    CONNECTION_TOLERANCE,
    ConnectionType,
    ContactFace,
    PanelConnection,
    detect_connections,
    panels_connect,
)
from .cost import CostEstimate, edge_banding_length, estimate_cost
from .cut_list import (
    UNKNOWN_LETTER,
    CutListEntry,
    CutListSummary,
    GroupedCutList,
    GroupedPiece,
    LetterMap,
    calculate_cut_list,
    calculate_grouped_cut_list,
    get_panel_letter,
    letter_for_index,
)
from .geometry import (
    DimensionKey,
    cut_dimensions,
    dimension_key,
    format_dimension_key,
    panel_bounds,
    panel_depth,
    true_dimensions,
    z_offset,
)

__all__ = [
    # Geometry
    "DimensionKey",
    "cut_dimensions",
    "dimension_key",
    "format_dimension_key",
    "panel_bounds",
    "panel_depth",
    "true_dimensions",
    "z_offset",
    # Cut list
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
    # Connections
    "CONNECTION_TOLERANCE",
    "ConnectionType",
    "ContactFace",
    "PanelConnection",
    "detect_connections",
    "panels_connect",
    # Assembly
    "AssemblyStep",
    "AssemblySummary",
    "CycleDetected",
    "DependencyEdge",
    "SortedOrder",
    "assembly_priorities",
    "assembly_priority",
    "build_dependency_graph",
    "generate_assembly_steps",
    "get_assembly_summary",
    "topological_order",
    # Cost
    "CostEstimate",
    "edge_banding_length",
    "estimate_cost",
]
