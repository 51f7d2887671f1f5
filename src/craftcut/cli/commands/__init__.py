"""CLI command implementations for the craftcut application.

This package contains subcommands for the craftcut CLI, including:
- validate: Validate a design file
"""

from craftcut.cli.commands.validate import (
    display_load_error,
    display_validation_result,
    validate_command,
)

__all__ = ["display_load_error", "display_validation_result", "validate_command"]
