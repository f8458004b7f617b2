"""Tests for uibind.extract."""

from __future__ import annotations

import logging

import pytest

from uibind.errors import DuplicateNameError
from uibind.codegen.syntax import KEYWORDS
from uibind.extract import extract, field_name
from uibind.markup.parser import parse
from uibind.models import PropertyDescriptor
from tests._fixtures.project_builder import uxml


def test_submit_status_example() -> None:
    root = parse(
        uxml(
            """
            <ui:VisualElement>
                <ui:Button name="Submit" />
                <ui:Label name="Status" />
            </ui:VisualElement>
            """
        )
    )

    result = extract(root)

    assert result.descriptors == [
        PropertyDescriptor(tag="Button", declared_name="Submit", field_name="_submit"),
        PropertyDescriptor(tag="Label", declared_name="Status", field_name="_status"),
    ]
    assert result.unresolved == []
    assert result.duplicates == {}


def test_descriptors_follow_pre_order_and_skip_unnamed() -> None:
    root = parse(
        uxml(
            """
            <ui:VisualElement name="Outer">
                <ui:VisualElement>
                    <ui:Toggle name="Music" />
                </ui:VisualElement>
                <ui:Slider name="Volume" />
            </ui:VisualElement>
            <ui:Button name="Close" />
            """
        )
    )

    names = [descriptor.declared_name for descriptor in extract(root).descriptors]

    assert names == ["Outer", "Music", "Volume", "Close"]


def test_root_element_is_never_a_descriptor() -> None:
    root = parse('<VisualElement name="Root"><Label name="Title" /></VisualElement>')

    assert [d.declared_name for d in extract(root).descriptors] == ["Title"]


def test_unknown_tag_is_skipped_with_one_warning_each(caplog: pytest.LogCaptureFixture) -> None:
    root = parse(
        uxml(
            """
            <ui:widget-xyz name="Mystery" />
            <ui:Button name="Play" />
            <ui:widget-xyz name="Other" />
            """
        )
    )

    with caplog.at_level(logging.WARNING, logger="uibind"):
        result = extract(root)

    assert [d.declared_name for d in result.descriptors] == ["Play"]
    assert [(w.tag, w.declared_name) for w in result.unresolved] == [
        ("widget-xyz", "Mystery"),
        ("widget-xyz", "Other"),
    ]
    messages = [record.getMessage() for record in caplog.records if "widget-xyz" in record.getMessage()]
    assert len(messages) == 2
    assert "Mystery" in messages[0]


def test_custom_table_entries_resolve() -> None:
    from uibind.markup.types import default_type_table

    table = default_type_table().with_overrides({"HealthBar": "Game.HealthBar"})
    root = parse('<UXML><HealthBar name="Hp" /></UXML>')

    assert [d.field_name for d in extract(root, table).descriptors] == ["_hp"]


@pytest.mark.parametrize(
    ("declared", "prefix", "expected"),
    [
        ("Submit", "_", "_submit"),
        ("submit", "_", "_submit"),
        ("HUDPanel", "_", "_hUDPanel"),
        ("play-button", "_", "_play_button"),
        ("menu.item 2", "_", "_menu_item_2"),
        ("9Lives", "_", "_9Lives"),
        ("9Lives", "", "_9Lives"),
        ("Submit", "m_", "m_submit"),
    ],
)
def test_field_name_rule(declared: str, prefix: str, expected: str) -> None:
    assert field_name(declared, prefix) == expected


@pytest.mark.parametrize(
    ("declared", "expected"),
    [("Event", "_event"), ("Default", "_default"), ("Base", "_base"), ("Object", "_object"), ("String", "_string")],
)
def test_field_name_avoids_keywords_without_prefix(declared: str, expected: str) -> None:
    assert field_name(declared, "") == expected
    assert field_name(declared, "") not in KEYWORDS
    assert field_name(declared) == expected


def test_field_name_is_pure() -> None:
    assert field_name("Status") == field_name("Status")


def test_field_name_rejects_empty() -> None:
    with pytest.raises(ValueError):
        field_name("")


def test_duplicates_are_reported_and_kept_by_default(caplog: pytest.LogCaptureFixture) -> None:
    root = parse('<UXML><Button name="Ok" /><Label name="ok" /><Label name="Ok" /></UXML>')

    with caplog.at_level(logging.WARNING, logger="uibind"):
        result = extract(root)

    assert len(result.descriptors) == 3
    assert result.duplicates == {"_ok": ["Ok", "ok", "Ok"]}
    assert any("_ok" in record.getMessage() for record in caplog.records)


def test_duplicates_rejected_when_configured() -> None:
    root = parse('<UXML><Button name="Ok" /><Label name="Ok" /></UXML>')

    with pytest.raises(DuplicateNameError) as excinfo:
        extract(root, duplicates="reject")

    assert excinfo.value.collisions == {"_ok": ["Ok", "Ok"]}


def test_unknown_duplicate_policy() -> None:
    with pytest.raises(ValueError):
        extract(parse("<UXML />"), duplicates="merge")
