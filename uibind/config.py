"""Configuration loading for uibind (.uibind.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .extract import DEFAULT_FIELD_PREFIX, DUPLICATE_POLICIES
from .models import GenerationShape

CONFIG_FILENAME = ".uibind.yml"
DEFAULT_SETTINGS_FILE = ".uibind/settings.yml"
DEFAULT_OUTPUT_DIRECTORY = "UIBind"


@dataclass
class DefaultsConfig:
    """Values applied to newly configured assets."""

    shape: GenerationShape = GenerationShape.DOCUMENT
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY
    namespace: str = ""
    file_prefix: str = ""
    file_suffix: str = ""


@dataclass
class GenerationConfig:
    """Knobs for descriptor extraction."""

    duplicate_names: str = "allow"
    field_prefix: str = DEFAULT_FIELD_PREFIX


@dataclass
class UIBindConfig:
    """Represents the project settings defined in .uibind.yml."""

    root: Path
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    settings_file: Path = Path(DEFAULT_SETTINGS_FILE)
    element_types: Dict[str, str] = field(default_factory=dict)
    templates_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.settings_file.is_absolute():
            self.settings_file = self.root / self.settings_file


def load_config(config_path: Path) -> UIBindConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return UIBindConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    defaults = DefaultsConfig()
    defaults_data = _as_dict(data.get("defaults"))
    if defaults_data:
        shape_text = _as_str(defaults_data.get("shape"))
        if shape_text:
            try:
                defaults.shape = GenerationShape.parse(shape_text)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc
        defaults.output_directory = _as_str(defaults_data.get("output_directory")) or DEFAULT_OUTPUT_DIRECTORY
        defaults.namespace = _as_str(defaults_data.get("namespace")) or ""
        defaults.file_prefix = _as_str(defaults_data.get("file_prefix")) or ""
        defaults.file_suffix = _as_str(defaults_data.get("file_suffix")) or ""

    generation = GenerationConfig()
    generation_data = _as_dict(data.get("generation"))
    if generation_data:
        policy = _as_str(generation_data.get("duplicate_names"))
        if policy is not None:
            policy = policy.lower()
            if policy not in DUPLICATE_POLICIES:
                choices = ", ".join(DUPLICATE_POLICIES)
                raise ConfigError(f"generation.duplicate_names must be one of: {choices}")
            generation.duplicate_names = policy
        prefix = _as_str(generation_data.get("field_prefix"))
        if prefix is not None:
            generation.field_prefix = prefix

    element_types_data = data.get("element_types")
    if element_types_data is not None and not isinstance(element_types_data, dict):
        raise ConfigError("element_types must be a mapping of tag to type name")
    element_types = {
        str(tag): str(type_name)
        for tag, type_name in (element_types_data or {}).items()
        if _as_str(type_name)
    }

    settings_file = _as_str(data.get("settings_file")) or DEFAULT_SETTINGS_FILE
    templates_dir_str = _as_str(data.get("templates_dir"))

    return UIBindConfig(
        root=root,
        defaults=defaults,
        generation=generation,
        settings_file=Path(settings_file),
        element_types=element_types,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


__all__ = [
    "CONFIG_FILENAME",
    "DefaultsConfig",
    "GenerationConfig",
    "UIBindConfig",
    "load_config",
]
