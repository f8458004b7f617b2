"""Persistent store of per-asset file settings."""

from __future__ import annotations

import threading
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, List, Optional, Set

import yaml

from .errors import ConfigError, NotConfiguredError
from .models import FileSetting

_SETTINGS_VERSION = 1

# Serializes read-merge-write cycles of stores sharing a file in one process.
_SAVE_LOCK = threading.Lock()


def normalize_key(path: str | Path) -> str:
    """Return the POSIX form used as the lookup key for an asset path."""
    return str(PurePosixPath(Path(path).as_posix()))


class SettingsStore:
    """File settings keyed by asset path; ``path=None`` keeps them in memory.

    :meth:`save` merges only the entries this store changed into the file on
    disk, so stores loaded from the same file do not overwrite each other.
    """

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: Dict[str, FileSetting] = {}
        self._changed: Set[str] = set()
        self._removed: Set[str] = set()
        if self._path is not None:
            self._entries = self._read(self._path)

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def get(self, path: str | Path) -> Optional[FileSetting]:
        return self._entries.get(normalize_key(path))

    def require(self, path: str | Path) -> FileSetting:
        setting = self.get(path)
        if setting is None:
            raise NotConfiguredError(normalize_key(path))
        return setting

    def contains(self, path: str | Path) -> bool:
        return normalize_key(path) in self._entries

    def add(self, setting: FileSetting) -> FileSetting:
        """Insert or replace ``setting``, keyed by its normalized path."""
        setting.path = normalize_key(setting.path)
        self._entries[setting.path] = setting
        self._changed.add(setting.path)
        self._removed.discard(setting.path)
        return setting

    def remove(self, path: str | Path) -> Optional[FileSetting]:
        key = normalize_key(path)
        removed = self._entries.pop(key, None)
        if removed is not None:
            self._removed.add(key)
            self._changed.discard(key)
        return removed

    def mark_dirty(self, path: str | Path) -> None:
        """Flag in-place edits of the setting for ``path`` for the next :meth:`save`."""
        key = normalize_key(path)
        if key in self._entries:
            self._changed.add(key)

    def save(self) -> None:
        if self._path is None:
            self._changed.clear()
            self._removed.clear()
            return
        if not self._changed and not self._removed:
            return
        with _SAVE_LOCK:
            merged = self._read(self._path)
            for key in self._removed:
                merged.pop(key, None)
            for key in self._changed:
                merged[key] = self._entries[key]
            self._write(self._path, merged)
        self._changed.clear()
        self._removed.clear()

    def __iter__(self) -> Iterator[FileSetting]:
        return iter([self._entries[key] for key in sorted(self._entries)])

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _write(path: Path, entries: Dict[str, FileSetting]) -> None:
        payload = {
            "version": _SETTINGS_VERSION,
            "files": [entries[key].to_dict() for key in sorted(entries)],
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            yaml.safe_dump(payload, sort_keys=True, default_flow_style=False),
            encoding="utf-8",
        )

    @staticmethod
    def _read(path: Path) -> Dict[str, FileSetting]:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse settings file {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict) or data.get("version") != _SETTINGS_VERSION:
            raise ConfigError(f"Unsupported settings file format: {path}")
        files = data.get("files") or []
        if not isinstance(files, list):
            raise ConfigError(f"'files' in {path} must be a list")

        entries: Dict[str, FileSetting] = {}
        errors: List[str] = []
        for raw in files:
            if not isinstance(raw, dict):
                errors.append(f"invalid entry {raw!r}")
                continue
            try:
                setting = FileSetting.from_dict(raw)
            except ValueError as exc:
                errors.append(str(exc))
                continue
            setting.path = normalize_key(setting.path)
            entries[setting.path] = setting
        if errors:
            raise ConfigError(f"Invalid settings in {path}: {'; '.join(errors)}")
        return entries


__all__ = ["SettingsStore", "normalize_key"]
