"""Assembly sequence planning.

Analyzes panel positions and produces a buildable step order:

1. Detect which panels touch (see :mod:`.connections`).
2. Score every panel with build-order heuristics (lower builds earlier).
3. Turn each connection into a directed "depends on" edge.
4. Order panels topologically, falling back to pure priority order when the
   graph contains a cycle.
5. Narrate each step with an action verb and an instruction sentence.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..value_objects import Orientation, Panel, Settings
from .connections import PanelConnection, detect_connections
from .cut_list import LetterMap, calculate_grouped_cut_list
from .geometry import true_dimensions

logger = logging.getLogger(__name__)

__all__ = [
    "BACK_PENALTY",
    "FOUNDATION_BONUS",
    "HORIZONTAL_PENALTY",
    "MINUTES_PER_STEP",
    "VERTICAL_BONUS",
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
]

# Priority weights (lower total = assemble earlier)
FOUNDATION_BONUS = 100.0
FOUNDATION_BAND_THICKNESSES = 2.0
VERTICAL_BONUS = 50.0
HORIZONTAL_PENALTY = 10.0
BACK_PENALTY = 200.0
HEIGHT_DIVISOR = 10.0
CENTER_DISTANCE_DIVISOR = 20.0

MINUTES_PER_STEP = 3

ACTION_VERBS: dict[Orientation, str] = {
    Orientation.HORIZONTAL: "Place",
    Orientation.VERTICAL: "Attach",
    Orientation.BACK: "Secure",
}


@dataclass(frozen=True)
class DependencyEdge:
    """``dependent`` may only be assembled after ``dependency``."""

    dependent: str
    dependency: str


@dataclass(frozen=True)
class SortedOrder:
    """Successful topological order."""

    order: tuple[str, ...]


@dataclass(frozen=True)
class CycleDetected:
    """The dependency graph has a cycle.

    Attributes:
        remaining: Nodes that could not be ordered (they lie on or behind
            a cycle).
    """

    remaining: tuple[str, ...]


@dataclass(frozen=True)
class AssemblyStep:
    """One step of the assembly guide.

    Attributes:
        step_number: 1-based position in the sequence.
        panel_id: Panel placed in this step.
        panel_label: Display label of the panel.
        letter: Shape letter shared with the cut list ("?" if unknown).
        action: Verb derived from the orientation.
        instruction: Human-readable instruction.
        connects_to: Already-placed panels this panel touches.
        cumulative_panels: Every panel placed up to and including this step.
    """

    step_number: int
    panel_id: str
    panel_label: str
    letter: str
    action: str
    instruction: str
    connects_to: tuple[str, ...]
    cumulative_panels: tuple[str, ...]


@dataclass(frozen=True)
class AssemblySummary:
    """Step count and rough time estimate."""

    total_steps: int
    estimated_time: str


def assembly_priority(
    panel: Panel,
    panels: Sequence[Panel],
    thickness: float,
    furniture_depth: float,
) -> float:
    """Score a panel relative to the whole set; lower builds earlier.

    - Foundation pieces (within two thicknesses of the lowest panel) first.
    - Vertical panels before horizontal ones; back panels always last.
    - Lower panels before higher ones.
    - Outer panels before inner ones.
    """
    priority = 0.0

    min_y = min(p.y for p in panels)
    if abs(panel.y - min_y) < thickness * FOUNDATION_BAND_THICKNESSES:
        priority -= FOUNDATION_BONUS

    if panel.orientation == Orientation.VERTICAL:
        priority -= VERTICAL_BONUS
    elif panel.orientation == Orientation.HORIZONTAL:
        priority += HORIZONTAL_PENALTY
    elif panel.orientation == Orientation.BACK:
        priority += BACK_PENALTY

    priority += panel.y / HEIGHT_DIVISOR

    min_x = min(p.x for p in panels)
    max_x = max(
        p.x + true_dimensions(p, thickness, furniture_depth).width for p in panels
    )
    center_x = (min_x + max_x) / 2
    priority -= abs(panel.x - center_x) / CENTER_DISTANCE_DIVISOR

    return priority


def assembly_priorities(
    panels: Sequence[Panel], thickness: float, furniture_depth: float
) -> dict[str, float]:
    """Priority of every panel, keyed by id."""
    return {
        p.id: assembly_priority(p, panels, thickness, furniture_depth) for p in panels
    }


def build_dependency_graph(
    panels: Sequence[Panel],
    connections: Sequence[PanelConnection],
    priorities: Mapping[str, float],
) -> list[DependencyEdge]:
    """Direct every connection from the later panel to the earlier one.

    On an exact priority tie, verticals support horizontals and back panels
    depend on whatever they touch. Other ties produce no edge.
    """
    by_id = {p.id: p for p in panels}
    edges: list[DependencyEdge] = []

    for conn in connections:
        panel_a = by_id.get(conn.panel_a)
        panel_b = by_id.get(conn.panel_b)
        if panel_a is None or panel_b is None:
            continue

        prio_a = priorities.get(conn.panel_a, 0.0)
        prio_b = priorities.get(conn.panel_b, 0.0)

        if prio_a < prio_b:
            edges.append(DependencyEdge(dependent=panel_b.id, dependency=panel_a.id))
        elif prio_b < prio_a:
            edges.append(DependencyEdge(dependent=panel_a.id, dependency=panel_b.id))
        else:
            a, b = panel_a.orientation, panel_b.orientation
            if a == Orientation.VERTICAL and b == Orientation.HORIZONTAL:
                edges.append(DependencyEdge(dependent=panel_b.id, dependency=panel_a.id))
            elif b == Orientation.VERTICAL and a == Orientation.HORIZONTAL:
                edges.append(DependencyEdge(dependent=panel_a.id, dependency=panel_b.id))
            elif a == Orientation.BACK:
                edges.append(DependencyEdge(dependent=panel_a.id, dependency=panel_b.id))
            elif b == Orientation.BACK:
                edges.append(DependencyEdge(dependent=panel_b.id, dependency=panel_a.id))

    return edges


def topological_order(
    nodes: Sequence[str],
    edges: Sequence[DependencyEdge],
    rank: Mapping[str, float] | None = None,
) -> SortedOrder | CycleDetected:
    """Order nodes so every dependency precedes its dependents.

    Kahn's algorithm. Among nodes that are ready at the same time the one
    with the lowest rank goes first, then the one listed first in ``nodes``.

    Args:
        nodes: Node ids in input order.
        edges: Dependency edges between the nodes.
        rank: Optional tie-break score per node (lower first).

    Returns:
        SortedOrder on success, CycleDetected if some nodes could not be
        ordered.
    """
    index = {node: i for i, node in enumerate(nodes)}
    rank = rank or {}
    dependents: dict[str, list[str]] = {node: [] for node in nodes}
    waiting_on: dict[str, int] = {node: 0 for node in nodes}

    for edge in edges:
        if edge.dependent not in index or edge.dependency not in index:
            continue
        dependents[edge.dependency].append(edge.dependent)
        waiting_on[edge.dependent] += 1

    ready = [
        (rank.get(node, 0.0), index[node], node)
        for node in nodes
        if waiting_on[node] == 0
    ]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        _, _, node = heapq.heappop(ready)
        order.append(node)
        for dependent in dependents[node]:
            waiting_on[dependent] -= 1
            if waiting_on[dependent] == 0:
                heapq.heappush(ready, (rank.get(dependent, 0.0), index[dependent], dependent))

    if len(order) < len(nodes):
        placed = set(order)
        return CycleDetected(remaining=tuple(n for n in nodes if n not in placed))
    return SortedOrder(order=tuple(order))


def _join_names(names: Sequence[str]) -> str:
    return f"{', '.join(names[:-1])} and {names[-1]}"


def _instruction(panel: Panel, connects_to: Sequence[Panel], is_first: bool) -> str:
    label = panel.display_label

    if is_first:
        if panel.orientation == Orientation.HORIZONTAL:
            return (
                f"Place the {label} on a flat, stable surface. "
                "This will serve as the foundation."
            )
        return f"Start with the {label}. Lay it flat on a stable surface."

    if not connects_to:
        return f"Position the {label} according to the design."

    names = [p.display_label for p in connects_to]

    if panel.orientation == Orientation.VERTICAL:
        if len(names) == 1:
            return f"Attach the {label} perpendicular to the {names[0]}."
        return f"Attach the {label} between the {_join_names(names)}."

    if panel.orientation == Orientation.HORIZONTAL:
        if len(names) == 1:
            return f"Rest the {label} on top of the {names[0]}."
        if len(names) == 2:
            return f"Insert the {label} between the {names[0]} and {names[1]}."
        return f"Position the {label} connecting to {', '.join(names)}."

    if panel.orientation == Orientation.BACK:
        return f"Attach the {label} to the back of the assembled frame to add rigidity."

    return f"Install the {label}."


def generate_assembly_steps(
    panels: Sequence[Panel],
    settings: Settings,
    letter_map: LetterMap | None = None,
) -> list[AssemblyStep]:
    """Generate the ordered assembly guide for a panel set.

    Args:
        panels: Panels to assemble.
        settings: Thickness and furniture depth.
        letter_map: Shared shape letters. Computed from the panels when not
            given so steps still carry the cut list's letters.

    Returns:
        One step per panel, numbered from 1. Never raises for a cyclic
        dependency graph; the order then follows priority alone.
    """
    if not panels:
        return []

    thickness = settings.thickness
    depth = settings.furniture_depth
    if letter_map is None:
        letter_map = calculate_grouped_cut_list(panels, thickness, depth).letter_map

    connections = detect_connections(panels, settings)
    priorities = assembly_priorities(panels, thickness, depth)
    edges = build_dependency_graph(panels, connections, priorities)
    panel_ids = [p.id for p in panels]

    result = topological_order(panel_ids, edges, priorities)
    if isinstance(result, CycleDetected):
        logger.warning(
            "Cycle detected in assembly graph (%d panels involved), using priority order",
            len(result.remaining),
        )
        ordered_ids = sorted(panel_ids, key=lambda pid: priorities[pid])
    else:
        ordered_ids = list(result.order)

    logger.debug(
        "Assembly order for %d panels with %d connections: %s",
        len(panels),
        len(connections),
        ordered_ids,
    )

    by_id = {p.id: p for p in panels}
    assembled: list[str] = []
    steps: list[AssemblyStep] = []

    for number, panel_id in enumerate(ordered_ids, start=1):
        panel = by_id[panel_id]
        placed = set(assembled)
        connects_to = [
            conn.other(panel_id)
            for conn in connections
            if conn.involves(panel_id) and conn.other(panel_id) in placed
        ]
        assembled.append(panel_id)

        steps.append(
            AssemblyStep(
                step_number=number,
                panel_id=panel_id,
                panel_label=panel.display_label,
                letter=letter_map.letter_for(panel, depth),
                action=ACTION_VERBS.get(panel.orientation, "Install"),
                instruction=_instruction(
                    panel, [by_id[c] for c in connects_to], is_first=number == 1
                ),
                connects_to=tuple(connects_to),
                cumulative_panels=tuple(assembled),
            )
        )

    return steps


def get_assembly_summary(steps: Sequence[AssemblyStep]) -> AssemblySummary:
    """Count steps and estimate build time at three minutes per panel."""
    total_steps = len(steps)
    total_minutes = total_steps * MINUTES_PER_STEP

    if total_minutes < 60:
        estimated = f"{total_minutes} minutes"
    else:
        hours, mins = divmod(total_minutes, 60)
        if mins:
            estimated = f"{hours}h {mins}min"
        else:
            estimated = f"{hours} hour{'s' if hours > 1 else ''}"

    return AssemblySummary(total_steps=total_steps, estimated_time=estimated)
