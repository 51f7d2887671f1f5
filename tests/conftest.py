"""Pytest configuration and shared fixtures for craftcut tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from craftcut.domain import Orientation, Panel, Settings


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that exercise several layers together"
    )


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Default 18mm plywood on 2440x1220 sheets, 400mm deep furniture."""
    return Settings()


@pytest.fixture
def open_shelf_panels() -> list[Panel]:
    """Two sides standing on the floor with a shelf resting on top."""
    return [
        Panel(
            id="left",
            label="Left Side",
            x=0,
            y=0,
            width=18,
            height=400,
            orientation=Orientation.VERTICAL,
        ),
        Panel(
            id="right",
            label="Right Side",
            x=582,
            y=0,
            width=18,
            height=400,
            orientation=Orientation.VERTICAL,
        ),
        Panel(
            id="shelf",
            label="Shelf",
            x=0,
            y=400,
            width=600,
            height=18,
            orientation=Orientation.HORIZONTAL,
        ),
    ]


@pytest.fixture
def bookcase_panels() -> list[Panel]:
    """A small bookcase: bottom, two sides, two shelves, top and back."""
    return [
        Panel(id="bottom", label="Bottom", x=18, y=0, width=564, height=18),
        Panel(
            id="left",
            label="Left Side",
            x=0,
            y=0,
            width=18,
            height=1000,
            orientation=Orientation.VERTICAL,
        ),
        Panel(
            id="right",
            label="Right Side",
            x=582,
            y=0,
            width=18,
            height=1000,
            orientation=Orientation.VERTICAL,
        ),
        Panel(id="shelf", label="Shelf", x=18, y=400, width=564, height=18, quantity=2),
        Panel(id="top", label="Top", x=0, y=1000, width=600, height=18),
        Panel(
            id="back",
            label="Back",
            x=0,
            y=0,
            width=600,
            height=1018,
            orientation=Orientation.BACK,
        ),
    ]


# =============================================================================
# Design file fixtures
# =============================================================================


@pytest.fixture
def design_data() -> dict[str, Any]:
    """Design file content as saved by the panel editor (camelCase keys)."""
    return {
        "version": 1,
        "settings": {
            "thickness": 18,
            "sheetWidth": 2440,
            "sheetHeight": 1220,
            "furnitureDepth": 400,
            "units": "mm",
            "materialType": "plywood",
            "sheetPrice": 50,
            "currency": "$",
            "edgeBandingPrice": 2,
            "projectName": "Hall shelf",
        },
        "panels": [
            {
                "id": "left",
                "label": "Left Side",
                "x": 0,
                "y": 0,
                "width": 18,
                "height": 400,
                "orientation": "vertical",
            },
            {
                "id": "right",
                "label": "Right Side",
                "x": 582,
                "y": 0,
                "width": 18,
                "height": 400,
                "orientation": "vertical",
            },
            {
                "id": "shelf",
                "label": "Shelf",
                "x": 0,
                "y": 400,
                "width": 600,
                "height": 18,
                "orientation": "horizontal",
                "edgeBanding": {"top": True},
            },
        ],
    }


@pytest.fixture
def design_file(tmp_path: Path, design_data: dict[str, Any]) -> Path:
    """Design data written to a temporary JSON file."""
    path = tmp_path / "design.json"
    path.write_text(json.dumps(design_data), encoding="utf-8")
    return path
