"""Validation structures and advisory checks for design files.

Schema-level problems are rejected by the Pydantic models in
``schema.py``. The checks here cover problems that only show up across
panels or against the stock sheet, such as duplicate ids or pieces that
can never be cut from the configured sheet.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from craftcut.application.config.adapter import config_to_panel, config_to_settings
from craftcut.application.config.schema import DesignConfiguration
from craftcut.domain.services.geometry import dimension_key
from craftcut.infrastructure.bin_packing import KERF

# Practical board thickness range in mm
MIN_RECOMMENDED_THICKNESS = 3.0
MAX_RECOMMENDED_THICKNESS = 50.0

# Shape letters run A-Z before doubling up
SINGLE_LETTER_LIMIT = 26


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "panels[2].id")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the design has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_panel_ids(config: DesignConfiguration) -> ValidationResult:
    """Report every panel whose id repeats an earlier panel's id."""
    result = ValidationResult()
    seen: set[str] = set()
    for i, panel in enumerate(config.panels):
        if panel.id in seen:
            result.add_error(
                path=f"panels[{i}].id",
                message=f"Duplicate panel id '{panel.id}'",
                value=panel.id,
            )
        seen.add(panel.id)
    return result


def check_sheet_fit(config: DesignConfiguration) -> ValidationResult:
    """Warn about panels whose cut size cannot fit a blank sheet.

    Such panels are left out of the cutting plan by the optimizer.
    """
    result = ValidationResult()
    settings = config_to_settings(config)
    sw, sh = settings.sheet_width, settings.sheet_height

    for i, panel_config in enumerate(config.panels):
        length, width = dimension_key(config_to_panel(panel_config), settings.furniture_depth)
        fits_normal = length + KERF <= sw and width + KERF <= sh
        fits_rotated = width + KERF <= sw and length + KERF <= sh
        if not fits_normal and not fits_rotated:
            result.add_warning(
                path=f"panels[{i}]",
                message=(
                    f"Panel '{panel_config.label or panel_config.id}' cuts to "
                    f"{length:g}x{width:g}mm and does not fit a {sw:g}x{sh:g}mm sheet"
                ),
                suggestion="Use a larger sheet size or split the panel",
            )
    return result


def check_advisories(config: DesignConfiguration) -> ValidationResult:
    """Check a design against common workshop practice.

    Returns:
        ValidationResult with warnings only.
    """
    result = ValidationResult()

    if not config.panels:
        result.add_warning(path="panels", message="Design has no panels")
        return result

    settings = config_to_settings(config)
    if not MIN_RECOMMENDED_THICKNESS <= settings.thickness <= MAX_RECOMMENDED_THICKNESS:
        result.add_warning(
            path="settings.thickness",
            message=f"Board thickness {settings.thickness:g}mm is unusual",
            suggestion=(
                f"Typical sheet goods are {MIN_RECOMMENDED_THICKNESS:g}-"
                f"{MAX_RECOMMENDED_THICKNESS:g}mm thick"
            ),
        )

    shapes = Counter(
        dimension_key(config_to_panel(p), settings.furniture_depth) for p in config.panels
    )
    if len(shapes) > SINGLE_LETTER_LIMIT:
        result.add_warning(
            path="panels",
            message=(
                f"{len(shapes)} distinct piece sizes; letters beyond Z are "
                "doubled (AA, AB, ...)"
            ),
        )

    for i, panel in enumerate(config.panels):
        if not panel.label:
            result.add_warning(
                path=f"panels[{i}].label",
                message=f"Panel '{panel.id}' has no label",
                suggestion="Name panels so the cut list and assembly guide are readable",
            )

    return result


def validate_config(config: DesignConfiguration) -> ValidationResult:
    """Run every design check.

    Args:
        config: Parsed design.

    Returns:
        Combined ValidationResult.
    """
    result = ValidationResult()
    result.merge(check_panel_ids(config))
    result.merge(check_sheet_fit(config))
    result.merge(check_advisories(config))
    return result
