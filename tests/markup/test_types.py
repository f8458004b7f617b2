"""Tests for the element type resolution table."""

from __future__ import annotations

from pathlib import Path

import pytest

from uibind.errors import ConfigError
from uibind.markup.types import TypeTable, default_type_table, load_type_table
from uibind.models import TypeBinding


def test_default_table_resolves_known_tags() -> None:
    table = default_type_table()

    assert table.resolve("Button") == TypeBinding(tag="Button", target_type_name="Button")
    assert table.resolve("ScrollView") is not None
    assert table.resolve("RadioButtonGroup") is not None
    assert table.root_type_name == "VisualElement"


def test_lookup_is_exact_and_case_sensitive() -> None:
    table = default_type_table()

    assert table.resolve("button") is None
    assert table.resolve("Button ") is None
    assert table.resolve("widget-xyz") is None


def test_default_table_is_cached() -> None:
    assert default_type_table() is default_type_table()


def test_with_overrides_returns_new_table() -> None:
    base = default_type_table()

    extended = base.with_overrides({"HealthBar": "Game.UI.HealthBar", "Label": "Game.UI.FancyLabel"})

    assert extended is not base
    assert extended.resolve("HealthBar").target_type_name == "Game.UI.HealthBar"
    assert extended.resolve("Label").target_type_name == "Game.UI.FancyLabel"
    assert base.resolve("HealthBar") is None
    assert base.resolve("Label").target_type_name == "Label"


def test_with_empty_overrides_reuses_table() -> None:
    base = default_type_table()
    assert base.with_overrides({}) is base


def test_table_contents_are_read_only() -> None:
    table = TypeTable({"Button": "Button"})

    with pytest.raises(TypeError):
        table._bindings["Label"] = TypeBinding("Label", "Label")  # type: ignore[index]


def test_load_type_table_reads_sections(tmp_path: Path) -> None:
    data = tmp_path / "types.yml"
    data.write_text("root: Element\ncontainers:\n  Panel: Panel\ncontrols:\n  Knob: Knob\n", encoding="utf-8")

    table = load_type_table(data)

    assert sorted(table) == ["Knob", "Panel"]
    assert table.root_type_name == "Element"


def test_load_type_table_rejects_bad_sections(tmp_path: Path) -> None:
    data = tmp_path / "types.yml"
    data.write_text("controls:\n  - Button\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_type_table(data)
