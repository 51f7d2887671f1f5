"""Output formatters and exporters for cut lists, layouts and assembly guides.

Output formats: text, csv (cut lists only), json
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from craftcut.domain import (
    AssemblyStep,
    AssemblySummary,
    CostEstimate,
    GroupedCutList,
    Panel,
)
from craftcut.domain.services.cut_list import CutListSummary

from .bin_packing import OptimizationResult, Placement, SheetLayout

if TYPE_CHECKING:
    from craftcut.application.dtos import ProductionOutput


def _mm(value: float) -> str:
    return f"{value:g}"


class CutListFormatter:
    """Formats cut lists for display."""

    def format(self, cut_list: GroupedCutList) -> str:
        """Format the grouped cut list as a table, one row per letter."""
        if not cut_list.pieces:
            return "No pieces in cut list."

        lines = [
            "CUT LIST",
            "=" * 70,
            f"{'Part':<6} {'Length':<10} {'Width':<10} {'Thick':<8} {'Qty':<6} {'Area (m2)'}",
            "-" * 70,
        ]
        for piece in cut_list.pieces:
            lines.append(
                f"{piece.letter:<6} {_mm(piece.length):<10} {_mm(piece.width):<10} "
                f"{_mm(piece.thickness):<8} {piece.qty:<6} {piece.area:.3f}"
            )
        lines.append("-" * 70)
        lines.append(
            f"{'TOTAL':<6} {'':<10} {'':<10} {'':<8} {cut_list.total_pieces:<6} "
            f"{cut_list.total_area:.3f}"
        )
        return "\n".join(lines)

    def format_raw(self, summary: CutListSummary) -> str:
        """Format the ungrouped list of panels as drawn."""
        if not summary.pieces:
            return "No pieces in cut list."

        lines = [
            "PANEL LIST",
            "=" * 70,
            f"{'Label':<24} {'Width':<10} {'Height':<10} {'Qty':<6} {'Area (m2)'}",
            "-" * 70,
        ]
        for entry in summary.pieces:
            lines.append(
                f"{entry.label:<24} {_mm(entry.width):<10} {_mm(entry.height):<10} "
                f"{entry.qty:<6} {entry.area:.3f}"
            )
        lines.append("-" * 70)
        lines.append(
            f"{'TOTAL':<24} {'':<10} {'':<10} {summary.total_pieces:<6} "
            f"{summary.total_area:.3f}"
        )
        return "\n".join(lines)


class SheetLayoutFormatter:
    """Formats cutting layouts as per-sheet placement tables."""

    def format(self, result: OptimizationResult) -> str:
        if not result.sheets and not result.unplaced_pieces:
            return "No sheets required."

        lines = [
            "CUTTING PLAN",
            "=" * 70,
            f"Sheets: {result.total_sheets}    Waste: {result.total_waste}%",
        ]
        for sheet in result.sheets:
            lines.extend(self._format_sheet(sheet))

        if result.unplaced_pieces:
            lines.append("")
            lines.append("UNPLACED (larger than the sheet):")
            for panel in result.unplaced_pieces:
                lines.append(
                    f"  - {panel.display_label} ({_mm(panel.width)} x {_mm(panel.height)})"
                )
        return "\n".join(lines)

    def _format_sheet(self, sheet: SheetLayout) -> list[str]:
        lines = [
            "",
            f"{sheet.sheet_id}: {sheet.piece_count} pieces, {sheet.waste_percent}% waste",
            "-" * 70,
        ]
        for placement in sheet.placements:
            lines.append(self._format_placement(placement))
        return lines

    def _format_placement(self, placement: Placement) -> str:
        rotated = " (rotated)" if placement.rotated else ""
        return (
            f"  [{placement.letter}] {placement.label:<20} "
            f"{_mm(placement.width)} x {_mm(placement.height)} "
            f"at ({_mm(placement.x)}, {_mm(placement.y)}){rotated}"
        )


class AssemblyFormatter:
    """Formats assembly steps as a numbered guide."""

    def format(self, steps: Sequence[AssemblyStep], summary: AssemblySummary) -> str:
        if not steps:
            return "No assembly steps."

        lines = [
            "ASSEMBLY",
            "=" * 70,
            f"{summary.total_steps} steps, about {summary.estimated_time}",
            "",
        ]
        for step in steps:
            lines.append(
                f"{step.step_number:>3}. {step.action} [{step.letter}] {step.panel_label}"
            )
            lines.append(f"     {step.instruction}")
        return "\n".join(lines)


class CostFormatter:
    """Formats a cost estimate."""

    def format(self, estimate: CostEstimate) -> str:
        c = estimate.currency
        lines = [
            "COST ESTIMATE",
            "=" * 70,
            f"Sheets ({estimate.total_sheets}): {c}{estimate.sheet_cost:.2f}",
        ]
        if estimate.edge_banding_meters > 0:
            lines.append(
                f"Edge banding ({estimate.edge_banding_meters:.1f}m): "
                f"{c}{estimate.edge_banding_cost:.2f}"
            )
        lines.append(f"Total: {c}{estimate.total_cost:.2f}")
        lines.append(f"Efficiency: {estimate.efficiency_percent}%")
        return "\n".join(lines)


class JsonExporter:
    """Exports cut lists, cutting plans and assembly guides to JSON."""

    def export(self, output: ProductionOutput) -> str:
        """Export a full production plan as a JSON string."""
        data: dict[str, Any] = {
            "cut_list": self.cut_list_to_dict(output.cut_list),
            "optimization": self.optimization_to_dict(output.optimization),
            "assembly": self.assembly_to_dict(output.steps, output.summary),
            "cost": self.cost_to_dict(output.cost),
        }
        if output.project_name:
            data["project_name"] = output.project_name
        return json.dumps(data, indent=2)

    def cut_list_to_dict(self, cut_list: GroupedCutList) -> dict[str, Any]:
        return {
            "pieces": [
                {
                    "letter": p.letter,
                    "length": p.length,
                    "width": p.width,
                    "thickness": p.thickness,
                    "qty": p.qty,
                    "area": round(p.area, 4),
                }
                for p in cut_list.pieces
            ],
            "total_pieces": cut_list.total_pieces,
            "total_area": round(cut_list.total_area, 4),
            "dimension_to_letter": cut_list.letter_map.as_strings(),
        }

    def optimization_to_dict(self, result: OptimizationResult) -> dict[str, Any]:
        return {
            "sheets": [
                {
                    "id": sheet.sheet_id,
                    "used_area": sheet.used_area,
                    "waste_percent": sheet.waste_percent,
                    "placements": [self._placement_to_dict(p) for p in sheet.placements],
                }
                for sheet in result.sheets
            ],
            "total_sheets": result.total_sheets,
            "total_waste": result.total_waste,
            "unplaced_pieces": [self._panel_to_dict(p) for p in result.unplaced_pieces],
        }

    def assembly_to_dict(
        self, steps: Sequence[AssemblyStep], summary: AssemblySummary
    ) -> dict[str, Any]:
        return {
            "steps": [
                {
                    "step_number": s.step_number,
                    "panel_id": s.panel_id,
                    "panel_label": s.panel_label,
                    "letter": s.letter,
                    "action": s.action,
                    "instruction": s.instruction,
                    "connects_to": list(s.connects_to),
                    "cumulative_panels": list(s.cumulative_panels),
                }
                for s in steps
            ],
            "total_steps": summary.total_steps,
            "estimated_time": summary.estimated_time,
        }

    def cost_to_dict(self, estimate: CostEstimate) -> dict[str, Any]:
        return {
            "total_sheets": estimate.total_sheets,
            "sheet_cost": round(estimate.sheet_cost, 2),
            "edge_banding_meters": round(estimate.edge_banding_meters, 3),
            "edge_banding_cost": round(estimate.edge_banding_cost, 2),
            "total_cost": round(estimate.total_cost, 2),
            "currency": estimate.currency,
            "efficiency_percent": estimate.efficiency_percent,
        }

    def _placement_to_dict(self, placement: Placement) -> dict[str, Any]:
        return {
            "id": placement.piece_id,
            "label": placement.label,
            "letter": placement.letter,
            "x": placement.x,
            "y": placement.y,
            "width": placement.width,
            "height": placement.height,
            "rotated": placement.rotated,
            "source_id": placement.source_id,
        }

    def _panel_to_dict(self, panel: Panel) -> dict[str, Any]:
        return {
            "id": panel.id,
            "label": panel.label,
            "width": panel.width,
            "height": panel.height,
            "quantity": panel.quantity,
            "orientation": panel.orientation.value,
        }


class CsvExporter:
    """Exports cut lists as CSV for spreadsheets and shop software."""

    def cut_list_to_csv(self, cut_list: GroupedCutList) -> str:
        """Format the grouped cut list, one row per shape letter."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(
            ["Part", "Length (mm)", "Width (mm)", "Thickness (mm)", "Quantity", "Area (m2)"]
        )
        for piece in cut_list.pieces:
            writer.writerow(
                [
                    piece.letter,
                    _mm(piece.length),
                    _mm(piece.width),
                    _mm(piece.thickness),
                    piece.qty,
                    f"{piece.area:.3f}",
                ]
            )
        return output.getvalue()

    def panels_to_csv(self, summary: CutListSummary) -> str:
        """Format the panels as drawn, one row per panel."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["Label", "Width (mm)", "Height (mm)", "Quantity"])
        for entry in summary.pieces:
            writer.writerow([entry.label, _mm(entry.width), _mm(entry.height), entry.qty])
        return output.getvalue()
