"""Element tag to C# type resolution table."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

import yaml

from ..errors import ConfigError
from ..models import TypeBinding

_DATA_FILE = Path(__file__).with_name("element_types.yml")
_SECTIONS = ("containers", "controls")
_DEFAULT_ROOT_TYPE = "VisualElement"


class TypeTable:
    """Immutable mapping from UXML tag names to target type bindings."""

    def __init__(self, bindings: Mapping[str, str], *, root_type_name: str = _DEFAULT_ROOT_TYPE) -> None:
        self._bindings: Mapping[str, TypeBinding] = MappingProxyType(
            {tag: TypeBinding(tag=tag, target_type_name=type_name) for tag, type_name in bindings.items()}
        )
        self.root_type_name = root_type_name

    def resolve(self, tag: str) -> Optional[TypeBinding]:
        """Return the binding for ``tag``; lookup is exact and case-sensitive."""
        return self._bindings.get(tag)

    def with_overrides(self, overrides: Mapping[str, str]) -> "TypeTable":
        """Return a new table with ``overrides`` layered over this one."""
        if not overrides:
            return self
        merged = {tag: binding.target_type_name for tag, binding in self._bindings.items()}
        merged.update(overrides)
        return TypeTable(merged, root_type_name=self.root_type_name)

    def __contains__(self, tag: object) -> bool:
        return tag in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)


def load_type_table(path: Path) -> TypeTable:
    """Build a table from a YAML data file with container/control sections."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load element types from {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")

    bindings: Dict[str, str] = {}
    for section in _SECTIONS:
        bindings.update(_as_bindings(data.get(section), path, section))
    root_type = data.get("root")
    return TypeTable(bindings, root_type_name=str(root_type) if root_type else _DEFAULT_ROOT_TYPE)


@lru_cache(maxsize=1)
def default_type_table() -> TypeTable:
    """Return the process-wide table shipped with uibind."""
    return load_type_table(_DATA_FILE)


def _as_bindings(value: Any, path: Path, section: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{section}' in {path.name} must be a mapping of tag to type")
    return {str(tag): str(type_name) for tag, type_name in value.items() if type_name}


__all__ = ["TypeTable", "default_type_table", "load_type_table"]
