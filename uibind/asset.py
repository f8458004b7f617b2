"""UXML documents under generation management."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .markup.parser import is_truthy, parse_file
from .models import EDITOR_EXTENSION_ATTRIBUTE, FileSetting, MarkupNode
from .settings import SettingsStore, normalize_key

BINDINGS_MARKER = ".g"
SOURCE_EXTENSION = ".cs"
EDITOR_FOLDER = "Editor"


@dataclass
class GenerationAsset:
    """One UXML file, its parsed tree and the setting it is generated with."""

    name: str
    source_path: Path
    root_node: MarkupNode
    setting: FileSetting
    project_root: Path

    @classmethod
    def load(cls, source_path: str | Path, store: SettingsStore, project_root: Path) -> "GenerationAsset":
        """Resolve the setting for ``source_path`` and parse the document.

        Raises :class:`NotConfiguredError` before touching the file when the
        asset has no setting, and :class:`ParseError` for malformed markup.
        """
        absolute, key = resolve_asset_path(source_path, project_root)
        setting = store.require(key)
        root_node = parse_file(absolute)
        return cls(
            name=absolute.stem,
            source_path=absolute,
            root_node=root_node,
            setting=setting,
            project_root=project_root,
        )

    @property
    def key(self) -> str:
        return self.setting.path

    @property
    def is_editor_only(self) -> bool:
        return is_truthy(self.root_node.attributes.get(EDITOR_EXTENSION_ATTRIBUTE))

    @property
    def output_directory(self) -> Path:
        directory = self.project_root / self.setting.output_directory
        if self.is_editor_only:
            directory = directory / EDITOR_FOLDER
        return directory

    @property
    def file_stem(self) -> str:
        return f"{self.setting.file_prefix}{self.name}{self.setting.file_suffix}"

    @property
    def bindings_output_path(self) -> Path:
        return self.output_directory / f"{self.file_stem}{BINDINGS_MARKER}{SOURCE_EXTENSION}"

    @property
    def script_output_path(self) -> Path:
        return self.output_directory / f"{self.file_stem}{SOURCE_EXTENSION}"

    @property
    def last_bindings_output_path(self) -> Optional[Path]:
        return self._stored_path(self.setting.last_bindings_output_path)

    @property
    def last_script_output_path(self) -> Optional[Path]:
        return self._stored_path(self.setting.last_script_output_path)

    def relative(self, path: Path) -> str:
        """Project-relative POSIX path as recorded in settings."""
        try:
            return normalize_key(path.relative_to(self.project_root))
        except ValueError:
            return normalize_key(path)

    def _stored_path(self, value: Optional[str]) -> Optional[Path]:
        if not value:
            return None
        path = Path(value)
        return path if path.is_absolute() else self.project_root / path


def resolve_asset_path(source_path: str | Path, project_root: Path) -> tuple[Path, str]:
    """Return the absolute path of an asset and its settings key."""
    path = Path(source_path).expanduser()
    absolute = path if path.is_absolute() else project_root / path
    absolute = absolute.resolve()
    try:
        key = normalize_key(absolute.relative_to(project_root))
    except ValueError:
        key = normalize_key(absolute)
    return absolute, key


__all__ = [
    "BINDINGS_MARKER",
    "EDITOR_FOLDER",
    "GenerationAsset",
    "SOURCE_EXTENSION",
    "resolve_asset_path",
]
