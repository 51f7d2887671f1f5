"""Pydantic models for CraftCut design files.

A design file is the JSON document saved by the panel editor::

    {
      "version": 1,
      "settings": {"thickness": 18, "sheetWidth": 2440, ...},
      "panels": [{"id": "p1", "orientation": "vertical", ...}]
    }

Keys are accepted in the editor's camelCase form (``sheetWidth``,
``furnitureDepth``, ``zAlign``, ``edgeBanding``) or in snake_case.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from craftcut.domain.value_objects import MaterialType, Orientation, ZAlignment

# Supported design file versions
# Version 1: Initial format (settings + panels)
SUPPORTED_VERSIONS: frozenset[int] = frozenset({1})

_MODEL_CONFIG = ConfigDict(
    extra="forbid",
    populate_by_name=True,
    alias_generator=to_camel,
)


class EdgeBandingConfig(BaseModel):
    """Edges of a panel that receive edge banding."""

    model_config = _MODEL_CONFIG

    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False


class PanelConfig(BaseModel):
    """One panel as drawn in the front view.

    Attributes:
        id: Unique panel identifier.
        label: Display name.
        x: Left edge in mm.
        y: Vertical position in mm.
        width: Drawn width in mm.
        height: Drawn height in mm.
        quantity: Number of identical pieces.
        orientation: horizontal, vertical or back.
        depth: Custom depth in mm (defaults to the furniture depth).
        z_align: Z placement for shallow panels.
        edge_banding: Banded edges.
    """

    model_config = _MODEL_CONFIG

    id: str = Field(min_length=1, description="Unique panel identifier")
    label: str = Field(default="", description="Display name")
    x: float = Field(default=0.0, description="Left edge in mm")
    y: float = Field(default=0.0, description="Vertical position in mm")
    width: float = Field(gt=0, description="Drawn width in mm")
    height: float = Field(gt=0, description="Drawn height in mm")
    quantity: int = Field(default=1, ge=1, description="Number of identical pieces")
    orientation: Orientation = Field(default=Orientation.HORIZONTAL)
    depth: float | None = Field(default=None, gt=0, description="Custom depth in mm")
    z_align: ZAlignment | None = None
    edge_banding: EdgeBandingConfig | None = None


class SettingsConfig(BaseModel):
    """Project settings.

    When ``thickness`` is omitted the material preset's default thickness
    is used.
    """

    model_config = _MODEL_CONFIG

    thickness: float | None = Field(
        default=None, gt=0, le=100, description="Board thickness in mm"
    )
    sheet_width: float = Field(default=2440.0, gt=0, description="Sheet width in mm")
    sheet_height: float = Field(default=1220.0, gt=0, description="Sheet height in mm")
    furniture_depth: float = Field(
        default=400.0, gt=0, description="Default panel depth in mm"
    )
    units: Literal["mm", "inches"] = Field(
        default="mm", description="Editor display units; plans are always in mm"
    )
    wood_color: str | None = Field(
        default=None, description="Editor display color, not used for planning"
    )
    material_type: MaterialType = MaterialType.PLYWOOD
    sheet_price: float = Field(default=0.0, ge=0, description="Price per sheet")
    currency: str = Field(default="$", max_length=8)
    edge_banding_price: float = Field(
        default=0.0, ge=0, description="Edge banding price per metre"
    )
    project_name: str | None = None


class DesignConfiguration(BaseModel):
    """Root model of a design file."""

    model_config = _MODEL_CONFIG

    version: int = Field(default=1, description="Design file format version")
    settings: SettingsConfig = Field(default_factory=SettingsConfig)
    panels: list[PanelConfig] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: int) -> int:
        """Reject design files written by an unknown format version."""
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(str(s) for s in sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"Unsupported version {v}; supported: {supported}")
        return v
