"""Detection of physical contact between panels.

Every pair of panels is tested once against orientation-aware adjacency
rules. The first rule that matches determines the connection type and the
face of contact; pairs matching no rule are not connected.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..value_objects import Orientation, Panel, PanelBounds, Settings
from .geometry import panel_bounds

__all__ = [
    "CONNECTION_TOLERANCE",
    "ConnectionType",
    "ContactFace",
    "PanelConnection",
    "detect_connections",
    "panels_connect",
]

# mm
CONNECTION_TOLERANCE = 2.0


class ConnectionType(str, Enum):
    """How two panels meet."""

    PERPENDICULAR = "perpendicular"
    PARALLEL = "parallel"
    ADJACENT = "adjacent"


class ContactFace(str, Enum):
    """Face along which two panels touch."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class PanelConnection:
    """Unordered contact between two panels.

    Attributes:
        panel_a: Id of the first panel (the back panel for PARALLEL contacts).
        panel_b: Id of the second panel.
        type: Connection type.
        face: Face of contact.
    """

    panel_a: str
    panel_b: str
    type: ConnectionType
    face: ContactFace

    def involves(self, panel_id: str) -> bool:
        """True if the given panel is one end of this connection."""
        return panel_id in (self.panel_a, self.panel_b)

    def other(self, panel_id: str) -> str:
        """Id of the panel at the other end."""
        return self.panel_b if panel_id == self.panel_a else self.panel_a


def _near(a: float, b: float) -> bool:
    return abs(a - b) <= CONNECTION_TOLERANCE


def _stacked(vertical: PanelBounds, horizontal: PanelBounds) -> bool:
    """Vertical and horizontal panels meet end to face."""
    y_match = any(
        _near(v, h)
        for v in (vertical.min_y, vertical.max_y)
        for h in (horizontal.min_y, horizontal.max_y)
    )
    return y_match and vertical.overlaps_x(horizontal)


def _side_contact(vertical: PanelBounds, horizontal: PanelBounds) -> ContactFace | None:
    """Face of the horizontal panel butting against the vertical one."""
    if not horizontal.overlaps_y(vertical):
        return None
    edges = (vertical.min_x, vertical.max_x)
    if any(_near(horizontal.min_x, edge) for edge in edges):
        return ContactFace.LEFT
    if any(_near(horizontal.max_x, edge) for edge in edges):
        return ContactFace.RIGHT
    return None


def _back_contact(back: PanelBounds, other: PanelBounds) -> bool:
    z_match = _near(back.min_z, other.max_z) or _near(back.max_z, other.max_z)
    return z_match and back.overlaps_x(other) and back.overlaps_y(other)


def panels_connect(
    panel_a: Panel,
    panel_b: Panel,
    thickness: float,
    furniture_depth: float,
) -> PanelConnection | None:
    """Test one pair of panels for contact.

    Args:
        panel_a: First panel.
        panel_b: Second panel.
        thickness: Board thickness.
        furniture_depth: Default panel depth.

    Returns:
        The connection, or None when the panels do not touch.
    """
    bounds_a = panel_bounds(panel_a, thickness, furniture_depth)
    bounds_b = panel_bounds(panel_b, thickness, furniture_depth)
    kinds = {panel_a.orientation, panel_b.orientation}

    if kinds == {Orientation.VERTICAL, Orientation.HORIZONTAL}:
        if panel_a.orientation == Orientation.VERTICAL:
            vertical, horizontal = bounds_a, bounds_b
        else:
            vertical, horizontal = bounds_b, bounds_a

        if _stacked(vertical, horizontal):
            return PanelConnection(
                panel_a.id, panel_b.id, ConnectionType.PERPENDICULAR, ContactFace.BOTTOM
            )
        face = _side_contact(vertical, horizontal)
        if face is not None:
            return PanelConnection(
                panel_a.id, panel_b.id, ConnectionType.PERPENDICULAR, face
            )

    if kinds == {Orientation.HORIZONTAL}:
        if _near(bounds_a.max_x, bounds_b.min_x) or _near(bounds_a.min_x, bounds_b.max_x):
            return PanelConnection(
                panel_a.id, panel_b.id, ConnectionType.ADJACENT, ContactFace.LEFT
            )

    if kinds == {Orientation.VERTICAL}:
        if _near(bounds_a.min_y, bounds_b.min_y):
            return PanelConnection(
                panel_a.id, panel_b.id, ConnectionType.ADJACENT, ContactFace.BOTTOM
            )

    if Orientation.BACK in kinds:
        if panel_a.orientation == Orientation.BACK:
            back, other, back_bounds, other_bounds = panel_a, panel_b, bounds_a, bounds_b
        else:
            back, other, back_bounds, other_bounds = panel_b, panel_a, bounds_b, bounds_a
        if _back_contact(back_bounds, other_bounds):
            return PanelConnection(
                back.id, other.id, ConnectionType.PARALLEL, ContactFace.BACK
            )

    return None


def detect_connections(
    panels: Sequence[Panel], settings: Settings
) -> list[PanelConnection]:
    """Find every touching pair of panels.

    Quantities are not expanded; each drawn panel is tested once against
    every later panel in the list.
    """
    connections: list[PanelConnection] = []
    for i, panel_a in enumerate(panels):
        for panel_b in panels[i + 1 :]:
            connection = panels_connect(
                panel_a, panel_b, settings.thickness, settings.furniture_depth
            )
            if connection is not None:
                connections.append(connection)
    return connections
