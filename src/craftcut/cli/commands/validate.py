"""Validate command for checking design files.

This module provides the `validate` command that checks a JSON design
file for errors and warnings, including workshop advisories.
"""

from pathlib import Path
from typing import Annotated

import typer

from craftcut.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    design_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON design file to validate"),
    ],
) -> None:
    """Validate a design file.

    Checks the design file for:
    - JSON syntax errors
    - Schema validation errors (missing fields, invalid types, etc.)
    - Duplicate panel ids and panels that cannot fit the sheet
    - Workshop advisories (unusual thickness, unlabeled panels)

    Exit codes:
        0 - Design is valid with no warnings
        1 - Design has errors (cannot be used)
        2 - Design is valid but has warnings

    Example:
        craftcut validate bookcase.json
    """
    typer.echo(f"Validating {design_file}...")
    typer.echo()

    try:
        config = load_config(design_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_config(config)
    display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def display_load_error(error: ConfigError) -> None:
    """Display a design loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def display_validation_result(result: ValidationResult) -> None:
    """Display validation errors, warnings and a one-line summary."""
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Design is valid.")
