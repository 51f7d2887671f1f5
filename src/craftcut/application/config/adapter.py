"""Conversion from design file models to domain values."""

from __future__ import annotations

from craftcut.application.config.schema import (
    DesignConfiguration,
    PanelConfig,
    SettingsConfig,
)
from craftcut.domain.value_objects import (
    MATERIAL_PRESETS,
    EdgeBanding,
    Panel,
    Settings,
)


def config_to_settings(config: DesignConfiguration | SettingsConfig) -> Settings:
    """Convert settings to a domain Settings value.

    A missing thickness falls back to the material preset's default.
    """
    s = config.settings if isinstance(config, DesignConfiguration) else config
    thickness = s.thickness
    if thickness is None:
        thickness = MATERIAL_PRESETS[s.material_type].default_thickness

    return Settings(
        thickness=thickness,
        sheet_width=s.sheet_width,
        sheet_height=s.sheet_height,
        furniture_depth=s.furniture_depth,
        units=s.units,
        material_type=s.material_type,
        sheet_price=s.sheet_price,
        currency=s.currency,
        edge_banding_price=s.edge_banding_price,
        project_name=s.project_name,
    )


def config_to_panel(panel: PanelConfig) -> Panel:
    """Convert one panel model to a domain Panel."""
    banding = None
    if panel.edge_banding is not None:
        banding = EdgeBanding(
            top=panel.edge_banding.top,
            bottom=panel.edge_banding.bottom,
            left=panel.edge_banding.left,
            right=panel.edge_banding.right,
        )
    return Panel(
        id=panel.id,
        label=panel.label,
        x=panel.x,
        y=panel.y,
        width=panel.width,
        height=panel.height,
        quantity=panel.quantity,
        orientation=panel.orientation,
        depth=panel.depth,
        z_align=panel.z_align,
        edge_banding=banding,
    )


def config_to_panels(config: DesignConfiguration) -> list[Panel]:
    """Convert every panel of a design to domain Panels, in file order."""
    return [config_to_panel(p) for p in config.panels]
