"""Typer CLI for cut lists, cutting plans and assembly guides."""

import dataclasses
import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from craftcut.application import PlanProductionCommand
from craftcut.application.config import (
    ConfigError,
    config_to_panels,
    config_to_settings,
    load_config,
    validate_config,
)
from craftcut.cli.commands import (
    display_load_error,
    display_validation_result,
    validate_command,
)
from craftcut.domain import (
    Panel,
    Settings,
    calculate_cut_list,
    calculate_grouped_cut_list,
    generate_assembly_steps,
    get_assembly_summary,
)
from craftcut.infrastructure import (
    AssemblyFormatter,
    CostFormatter,
    CsvExporter,
    CutListFormatter,
    JsonExporter,
    SheetLayoutFormatter,
    optimize_cuts,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    name="craftcut",
    help="Cut lists, sheet cutting plans and assembly guides for panel furniture.",
)

app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Plan the production of panel furniture from a design file."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def _load_design(design_file: Path) -> tuple[list[Panel], Settings]:
    """Load a design file, exiting with code 1 on any blocking error."""
    try:
        config = load_config(design_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    if not result.is_valid:
        display_validation_result(result)
        raise typer.Exit(code=1)

    try:
        return config_to_panels(config), config_to_settings(config)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


DesignFile = Annotated[Path, typer.Argument(help="Path to the JSON design file")]
JsonFlag = Annotated[bool, typer.Option("--json", help="Print JSON instead of text")]


@app.command()
def cutlist(
    design_file: DesignFile,
    raw: Annotated[
        bool,
        typer.Option("--raw", help="List panels as drawn instead of grouped by size"),
    ] = False,
    as_json: JsonFlag = False,
    as_csv: Annotated[
        bool,
        typer.Option("--csv", help="Print CSV instead of text"),
    ] = False,
) -> None:
    """Print the cut list, grouped and lettered by piece size."""
    if as_json and as_csv:
        typer.echo("Error: --json and --csv cannot be combined", err=True)
        raise typer.Exit(code=1)

    panels, settings = _load_design(design_file)
    formatter = CutListFormatter()

    if raw:
        summary = calculate_cut_list(panels)
        if as_csv:
            typer.echo(CsvExporter().panels_to_csv(summary), nl=False)
        elif as_json:
            data = {
                "pieces": [dataclasses.asdict(p) for p in summary.pieces],
                "total_pieces": summary.total_pieces,
                "total_area": round(summary.total_area, 4),
            }
            typer.echo(json.dumps(data, indent=2))
        else:
            typer.echo(formatter.format_raw(summary))
        return

    grouped = calculate_grouped_cut_list(panels, settings.thickness, settings.furniture_depth)
    if as_csv:
        typer.echo(CsvExporter().cut_list_to_csv(grouped), nl=False)
    elif as_json:
        typer.echo(json.dumps(JsonExporter().cut_list_to_dict(grouped), indent=2))
    else:
        typer.echo(formatter.format(grouped))


@app.command()
def optimize(
    design_file: DesignFile,
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", min=1, help="Override the sheet width in mm"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", min=1, help="Override the sheet height in mm"),
    ] = None,
    as_json: JsonFlag = False,
) -> None:
    """Lay out every piece on stock sheets."""
    panels, settings = _load_design(design_file)
    if sheet_width is not None:
        settings = dataclasses.replace(settings, sheet_width=sheet_width)
    if sheet_height is not None:
        settings = dataclasses.replace(settings, sheet_height=sheet_height)

    grouped = calculate_grouped_cut_list(panels, settings.thickness, settings.furniture_depth)
    result = optimize_cuts(
        panels,
        settings.sheet_width,
        settings.sheet_height,
        settings.furniture_depth,
        grouped.letter_map,
    )

    if as_json:
        typer.echo(json.dumps(JsonExporter().optimization_to_dict(result), indent=2))
    else:
        typer.echo(SheetLayoutFormatter().format(result))


@app.command()
def assemble(design_file: DesignFile, as_json: JsonFlag = False) -> None:
    """Print the step-by-step assembly guide."""
    panels, settings = _load_design(design_file)
    steps = generate_assembly_steps(panels, settings)
    summary = get_assembly_summary(steps)

    if as_json:
        typer.echo(json.dumps(JsonExporter().assembly_to_dict(steps, summary), indent=2))
    else:
        typer.echo(AssemblyFormatter().format(steps, summary))


@app.command()
def plan(
    design_file: DesignFile,
    as_json: JsonFlag = False,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the JSON plan to this file"),
    ] = None,
) -> None:
    """Print the full production plan: cut list, sheets, assembly and cost."""
    panels, settings = _load_design(design_file)
    output = PlanProductionCommand().execute(panels, settings)

    if output_file is not None:
        output_file.write_text(JsonExporter().export(output), encoding="utf-8")
        typer.echo(f"Plan exported to: {output_file}")
        return

    if as_json:
        typer.echo(JsonExporter().export(output))
        return

    if output.project_name:
        typer.echo(output.project_name)
        typer.echo()
    typer.echo(CutListFormatter().format(output.cut_list))
    typer.echo()
    typer.echo(SheetLayoutFormatter().format(output.optimization))
    typer.echo()
    typer.echo(AssemblyFormatter().format(output.steps, output.summary))
    typer.echo()
    typer.echo(CostFormatter().format(output.cost))


if __name__ == "__main__":
    app()
