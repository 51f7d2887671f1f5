"""Unit tests for design validation and advisories."""

from typing import Any

import pytest

from craftcut.application.config import (
    DesignConfiguration,
    ValidationResult,
    validate_config,
)
from craftcut.application.config.validator import (
    check_advisories,
    check_panel_ids,
    check_sheet_fit,
)


def _design(panels: list[dict[str, Any]], **settings: Any) -> DesignConfiguration:
    return DesignConfiguration.model_validate({"settings": settings, "panels": panels})


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_empty_result_is_valid(self) -> None:
        result = ValidationResult()
        assert result.is_valid
        assert not result.has_warnings
        assert result.exit_code == 0

    def test_warnings_only(self) -> None:
        result = ValidationResult().add_warning("panels", "careful")
        assert result.is_valid
        assert result.exit_code == 2

    def test_errors_win(self) -> None:
        result = ValidationResult().add_warning("a", "w").add_error("b", "e", value=3)
        assert not result.is_valid
        assert result.exit_code == 1
        assert result.errors[0].value == 3

    def test_merge(self) -> None:
        left = ValidationResult().add_error("a", "e")
        right = ValidationResult().add_warning("b", "w", suggestion="fix")
        merged = left.merge(right)
        assert merged is left
        assert len(merged.errors) == 1
        assert merged.warnings[0].suggestion == "fix"


class TestCheckPanelIds:
    """Tests for check_panel_ids()."""

    def test_unique_ids(self) -> None:
        design = _design(
            [{"id": "a", "width": 1, "height": 1}, {"id": "b", "width": 1, "height": 1}]
        )
        assert check_panel_ids(design).is_valid

    def test_duplicate_id_reported_at_second_occurrence(self) -> None:
        design = _design(
            [{"id": "a", "width": 1, "height": 1}, {"id": "a", "width": 2, "height": 2}]
        )
        result = check_panel_ids(design)
        assert len(result.errors) == 1
        assert result.errors[0].path == "panels[1].id"
        assert result.errors[0].value == "a"


class TestCheckSheetFit:
    """Tests for check_sheet_fit()."""

    def test_fits(self) -> None:
        design = _design([{"id": "a", "label": "Shelf", "width": 600, "height": 18}])
        assert check_sheet_fit(design).warnings == []

    def test_fits_rotated(self) -> None:
        design = _design(
            [{"id": "a", "width": 18, "height": 2000, "orientation": "vertical"}],
            sheetWidth=1220,
            sheetHeight=2440,
        )
        assert check_sheet_fit(design).warnings == []

    def test_too_large(self) -> None:
        design = _design(
            [{"id": "a", "label": "Wall", "width": 3000, "height": 1500, "orientation": "back"}]
        )
        result = check_sheet_fit(design)
        assert len(result.warnings) == 1
        assert result.warnings[0].path == "panels[0]"
        assert "Wall" in result.warnings[0].message

    def test_kerf_counts(self) -> None:
        design = _design(
            [{"id": "a", "width": 2440, "height": 1220, "orientation": "back"}]
        )
        assert len(check_sheet_fit(design).warnings) == 1


class TestCheckAdvisories:
    """Tests for check_advisories()."""

    def test_no_panels(self) -> None:
        result = check_advisories(_design([]))
        assert [w.message for w in result.warnings] == ["Design has no panels"]

    def test_unlabeled_panel(self) -> None:
        result = check_advisories(_design([{"id": "a", "width": 600, "height": 18}]))
        assert [w.path for w in result.warnings] == ["panels[0].label"]

    @pytest.mark.parametrize("thickness", [2, 60])
    def test_unusual_thickness(self, thickness: float) -> None:
        design = _design(
            [{"id": "a", "label": "A", "width": 600, "height": 18}], thickness=thickness
        )
        result = check_advisories(design)
        assert [w.path for w in result.warnings] == ["settings.thickness"]

    def test_many_sizes(self) -> None:
        panels = [
            {"id": f"p{i}", "label": f"P{i}", "width": 500 + i, "height": 18}
            for i in range(27)
        ]
        result = check_advisories(_design(panels))
        assert len(result.warnings) == 1
        assert "27 distinct piece sizes" in result.warnings[0].message


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_clean_design(self, design_data: dict[str, Any]) -> None:
        result = validate_config(DesignConfiguration.model_validate(design_data))
        assert result.exit_code == 0

    def test_combines_all_checks(self) -> None:
        design = _design(
            [
                {"id": "a", "width": 600, "height": 18},
                {"id": "a", "label": "Big", "width": 5000, "height": 18},
            ]
        )
        result = validate_config(design)
        assert result.exit_code == 1
        assert len(result.errors) == 1
        paths = {w.path for w in result.warnings}
        assert paths == {"panels[1]", "panels[0].label"}
