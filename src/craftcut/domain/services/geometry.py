"""Geometry projection for panels.

Converts a panel's stored front-view rectangle and orientation into the
rectangle cut from a sheet and the volume it occupies in the finished piece.
The cut list, the optimizer and the connection detector all derive sizes from
these functions so they always agree on dimensions.
"""

from __future__ import annotations

from ..value_objects import (
    CutDimensions,
    Orientation,
    Panel,
    PanelBounds,
    TrueDimensions,
    ZAlignment,
)

__all__ = [
    "DimensionKey",
    "cut_dimensions",
    "dimension_key",
    "format_dimension_key",
    "panel_bounds",
    "panel_depth",
    "true_dimensions",
    "z_offset",
]

DimensionKey = tuple[float, float]


def panel_depth(panel: Panel, furniture_depth: float) -> float:
    """Depth of a panel, falling back to the furniture depth."""
    return panel.depth or furniture_depth


def true_dimensions(
    panel: Panel, thickness: float, furniture_depth: float
) -> TrueDimensions:
    """Return the panel's real extent along X, Y and Z.

    Args:
        panel: Panel to project.
        thickness: Board thickness.
        furniture_depth: Default depth for panels without their own.

    Returns:
        TrueDimensions where the thickness lands on the axis dictated by
        the orientation.
    """
    depth = panel_depth(panel, furniture_depth)
    if panel.orientation == Orientation.VERTICAL:
        return TrueDimensions(width=thickness, height=panel.height, depth=depth)
    if panel.orientation == Orientation.BACK:
        return TrueDimensions(width=panel.width, height=panel.height, depth=thickness)
    return TrueDimensions(width=panel.width, height=thickness, depth=depth)


def cut_dimensions(panel: Panel, furniture_depth: float) -> CutDimensions:
    """Return the rectangle cut from the sheet, before normalization.

    Shelves pair their width with the depth, sides pair their height with
    the depth and back panels use their face as drawn.
    """
    depth = panel_depth(panel, furniture_depth)
    if panel.orientation == Orientation.VERTICAL:
        return CutDimensions(length=panel.height, width=depth)
    if panel.orientation == Orientation.BACK:
        return CutDimensions(length=panel.width, width=panel.height)
    return CutDimensions(length=panel.width, width=depth)


def dimension_key(panel: Panel, furniture_depth: float) -> DimensionKey:
    """Normalized (length, width) key identifying a cut size."""
    dims = cut_dimensions(panel, furniture_depth).normalized()
    return (dims.length, dims.width)


def _format_mm(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_dimension_key(key: DimensionKey) -> str:
    """Render a dimension key as ``"600x400"``."""
    return f"{_format_mm(key[0])}x{_format_mm(key[1])}"


def z_offset(panel: Panel, thickness: float, furniture_depth: float) -> float:
    """Distance from the front of the furniture to the panel's front face.

    Back panels always sit at the rear. Other panels follow ``z_align``
    within the furniture depth.
    """
    if panel.orientation == Orientation.BACK:
        return furniture_depth - thickness

    depth = panel_depth(panel, furniture_depth)
    align = panel.z_align or ZAlignment.FRONT
    if align == ZAlignment.BACK:
        return furniture_depth - depth
    if align == ZAlignment.CENTER:
        return (furniture_depth - depth) / 2
    return 0.0


def panel_bounds(panel: Panel, thickness: float, furniture_depth: float) -> PanelBounds:
    """Axis-aligned 3D bounding box of a panel."""
    dims = true_dimensions(panel, thickness, furniture_depth)
    z = z_offset(panel, thickness, furniture_depth)
    return PanelBounds(
        min_x=panel.x,
        max_x=panel.x + dims.width,
        min_y=panel.y,
        max_y=panel.y + dims.height,
        min_z=z,
        max_z=z + dims.depth,
        orientation=panel.orientation,
    )
