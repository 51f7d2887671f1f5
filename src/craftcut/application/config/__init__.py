"""Design file schema and loading for CraftCut.

This package loads and validates the JSON design files saved by the panel
editor. It includes Pydantic models for schema validation, a loader with
detailed error reporting, and advisory checks.

Public API:
    - DesignConfiguration: Root design file model
    - SettingsConfig: Project settings model
    - PanelConfig: Panel model
    - EdgeBandingConfig: Banded edges model
    - load_config: Load a design from a JSON file
    - load_config_from_dict: Load a design from a dictionary
    - ConfigError: Exception for design file errors
    - ValidationResult: Container for validation results
    - validate_config: Run every design check
    - config_to_settings: Convert settings to the domain Settings value
    - config_to_panels: Convert panels to domain Panels

Example:
    >>> from pathlib import Path
    >>> from craftcut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("bookcase.json"))
    ...     print(f"{len(config.panels)} panels")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from craftcut.application.config.adapter import (
    config_to_panel,
    config_to_panels,
    config_to_settings,
)
from craftcut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from craftcut.application.config.schema import (
    SUPPORTED_VERSIONS,
    DesignConfiguration,
    EdgeBandingConfig,
    PanelConfig,
    SettingsConfig,
)
from craftcut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "SUPPORTED_VERSIONS",
    "DesignConfiguration",
    "EdgeBandingConfig",
    "PanelConfig",
    "SettingsConfig",
    # Loader
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
    # Adapter
    "config_to_panel",
    "config_to_panels",
    "config_to_settings",
]
