"""Design file loader with comprehensive error handling.

This module loads and parses JSON design files. It handles file system
errors, JSON parsing errors, and Pydantic validation errors with clear,
actionable error messages.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from craftcut.application.config.schema import DesignConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for design file errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the design file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("settings", "thickness"))
        'settings.thickness'
        >>> _format_json_path(("panels", 0, "width"))
        'panels[0].width'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Extract path, message, value and type from each Pydantic error."""
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(details: list[dict[str, Any]]) -> str:
    lines = ["Design validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def load_config(path: Path) -> DesignConfiguration:
    """Load and validate a design from a JSON file.

    Args:
        path: Path to the JSON design file

    Returns:
        A validated DesignConfiguration instance

    Raises:
        ConfigError: If the file cannot be loaded or validated. The
            error_type attribute indicates the specific error category.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Design file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading design file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading design file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in design file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )

    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Design file must contain a JSON object: {path}",
            error_type="validation",
            path=path,
            details=[{"path": "", "message": "Expected a JSON object", "value": None}],
        )

    config = load_config_from_dict(data, path)
    logger.debug("Loaded design %s with %d panels", path, len(config.panels))
    return config


def load_config_from_dict(
    data: dict[str, Any], path: Path | None = None
) -> DesignConfiguration:
    """Validate an already parsed design.

    Args:
        data: Parsed design document.
        path: File the data came from, recorded on errors.

    Raises:
        ConfigError: With error_type "validation" and one detail per problem.
    """
    try:
        return DesignConfiguration.model_validate(data)
    except PydanticValidationError as e:
        problems = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(problems),
            error_type="validation",
            path=path,
            details=problems,
        ) from e
