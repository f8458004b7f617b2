"""Tests for the per-asset settings store."""

from __future__ import annotations

from pathlib import Path

import pytest

from uibind.errors import ConfigError, NotConfiguredError
from uibind.models import FileSetting, GenerationShape
from uibind.settings import SettingsStore, normalize_key


def _setting(path: str, **overrides) -> FileSetting:
    return FileSetting(path=path, **overrides)


def test_settings_round_trip(tmp_path: Path) -> None:
    store_path = tmp_path / ".uibind" / "settings.yml"
    store = SettingsStore(store_path)
    store.add(
        _setting(
            "Assets/UI/MainMenu.uxml",
            shape=GenerationShape.COMPONENT,
            namespace="Game.UI",
            file_suffix="View",
        )
    )
    store.save()

    reloaded = SettingsStore(store_path)
    setting = reloaded.require("Assets/UI/MainMenu.uxml")

    assert setting.shape is GenerationShape.COMPONENT
    assert setting.namespace == "Game.UI"
    assert setting.file_suffix == "View"
    assert len(reloaded) == 1


def test_missing_settings_file_yields_empty_store(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "absent.yml")
    assert len(store) == 0
    assert store.get("Assets/UI/MainMenu.uxml") is None


def test_require_raises_for_unconfigured_asset() -> None:
    store = SettingsStore(None)
    with pytest.raises(NotConfiguredError) as excinfo:
        store.require("Assets/UI/Missing.uxml")
    assert "uibind configure" in str(excinfo.value)


def test_keys_are_normalised_to_posix() -> None:
    store = SettingsStore(None)
    store.add(_setting("./Assets/UI/MainMenu.uxml"))

    assert normalize_key(Path("Assets") / "UI" / "Menu.uxml") == "Assets/UI/Menu.uxml"
    assert store.contains(Path("Assets") / "UI" / "MainMenu.uxml")
    assert [setting.path for setting in store] == ["Assets/UI/MainMenu.uxml"]


def test_add_replaces_existing_entry() -> None:
    store = SettingsStore(None)
    store.add(_setting("Menu.uxml", namespace="First"))
    store.add(_setting("Menu.uxml", namespace="Second"))

    assert len(store) == 1
    assert store.require("Menu.uxml").namespace == "Second"


def test_remove_returns_removed_setting(tmp_path: Path) -> None:
    store_path = tmp_path / "settings.yml"
    store = SettingsStore(store_path)
    store.add(_setting("Menu.uxml"))
    store.save()

    removed = store.remove("Menu.uxml")
    store.save()

    assert removed is not None and removed.path == "Menu.uxml"
    assert store.remove("Menu.uxml") is None
    assert len(SettingsStore(store_path)) == 0


def test_iteration_is_sorted_by_path() -> None:
    store = SettingsStore(None)
    for path in ("b.uxml", "a.uxml", "c/a.uxml"):
        store.add(_setting(path))

    assert [setting.path for setting in store] == ["a.uxml", "b.uxml", "c/a.uxml"]


def test_save_skips_clean_store(tmp_path: Path) -> None:
    store_path = tmp_path / "settings.yml"
    SettingsStore(store_path).save()
    assert not store_path.exists()


def test_mark_dirty_persists_in_place_edits(tmp_path: Path) -> None:
    store_path = tmp_path / "settings.yml"
    store = SettingsStore(store_path)
    store.add(_setting("Menu.uxml"))
    store.save()

    store.require("Menu.uxml").last_bindings_output_path = "UIBind/Menu.g.cs"
    store.mark_dirty("Menu.uxml")
    store.save()

    assert SettingsStore(store_path).require("Menu.uxml").last_bindings_output_path == "UIBind/Menu.g.cs"


@pytest.mark.parametrize(
    "content",
    [
        "files: []\n",
        "version: 2\nfiles: []\n",
        "version: 1\nfiles: nope\n",
        "version: 1\nfiles:\n  - path: Menu.uxml\n    shape: Sprite\n",
        "version: [1\n",
    ],
)
def test_invalid_settings_file_raises(tmp_path: Path, content: str) -> None:
    store_path = tmp_path / "settings.yml"
    store_path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        SettingsStore(store_path)


def test_stores_sharing_a_file_merge_their_changes(tmp_path: Path) -> None:
    store_path = tmp_path / "settings.yml"
    seed = SettingsStore(store_path)
    seed.add(_setting("A.uxml"))
    seed.add(_setting("B.uxml"))
    seed.save()

    first = SettingsStore(store_path)
    second = SettingsStore(store_path)
    first.require("A.uxml").last_bindings_output_path = "UIBind/A.g.cs"
    first.mark_dirty("A.uxml")
    second.require("B.uxml").last_bindings_output_path = "UIBind/B.g.cs"
    second.mark_dirty("B.uxml")
    second.add(_setting("C.uxml"))
    first.save()
    second.save()

    reloaded = SettingsStore(store_path)
    assert reloaded.require("A.uxml").last_bindings_output_path == "UIBind/A.g.cs"
    assert reloaded.require("B.uxml").last_bindings_output_path == "UIBind/B.g.cs"
    assert [setting.path for setting in reloaded] == ["A.uxml", "B.uxml", "C.uxml"]


def test_removal_merges_with_concurrent_additions(tmp_path: Path) -> None:
    store_path = tmp_path / "settings.yml"
    seed = SettingsStore(store_path)
    seed.add(_setting("A.uxml"))
    seed.save()

    remover = SettingsStore(store_path)
    adder = SettingsStore(store_path)
    adder.add(_setting("B.uxml"))
    adder.save()
    remover.remove("A.uxml")
    remover.save()

    assert [setting.path for setting in SettingsStore(store_path)] == ["B.uxml"]
