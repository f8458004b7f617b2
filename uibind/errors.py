"""Exception types raised by the uibind pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional


class UIBindError(RuntimeError):
    """Base class for every error raised by uibind."""


class ConfigError(UIBindError):
    """Raised when the configuration or settings file cannot be parsed."""


class ParseError(UIBindError):
    """Raised when a UXML document is not well-formed."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.source = source
        self.line = line
        self.column = column
        location = ""
        if line is not None:
            location = f" (line {line}, column {column or 0})"
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}{location}")


class NotConfiguredError(UIBindError):
    """Raised when an asset has no file setting in the settings store."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"'{path}' is not configured for generation. "
            f"Run `uibind configure {path}` to enable it."
        )


class InvalidAssetError(UIBindError):
    """Raised when a generator is called without an asset."""


class DuplicateNameError(UIBindError):
    """Raised when duplicate declared names are rejected by configuration."""

    def __init__(self, collisions: Dict[str, List[str]]) -> None:
        self.collisions = collisions
        details = ", ".join(
            f"{field} <- {', '.join(names)}" for field, names in sorted(collisions.items())
        )
        super().__init__(f"Duplicate element names map to the same field: {details}")


@dataclass(frozen=True)
class UnresolvedTagWarning:
    """Named element whose tag has no entry in the type table."""

    tag: str
    declared_name: str

    @property
    def message(self) -> str:
        return (
            f"Failed to get property type: '{self.tag}' field: '{self.declared_name}'. "
            "Property will be ignored."
        )


__all__ = [
    "ConfigError",
    "DuplicateNameError",
    "InvalidAssetError",
    "NotConfiguredError",
    "ParseError",
    "UIBindError",
    "UnresolvedTagWarning",
]
