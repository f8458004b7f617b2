"""Core data models shared across uibind components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional

NAME_ATTRIBUTE = "name"
EDITOR_EXTENSION_ATTRIBUTE = "editor-extension-mode"


@dataclass
class MarkupNode:
    """One element of a parsed UXML document."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["MarkupNode"] = field(default_factory=list)

    @property
    def declared_name(self) -> Optional[str]:
        return self.attributes.get(NAME_ATTRIBUTE)

    @property
    def has_name(self) -> bool:
        return bool(self.declared_name)

    def iter_descendants(self) -> Iterator["MarkupNode"]:
        """Yield every descendant in depth-first pre-order, excluding self."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass(frozen=True)
class TypeBinding:
    """Target C# type resolved for a UXML tag."""

    tag: str
    target_type_name: str


@dataclass(frozen=True)
class PropertyDescriptor:
    """Named element selected for binding."""

    tag: str
    declared_name: str
    field_name: str


class GenerationShape(str, Enum):
    """Output conventions supported by the code assembly engine."""

    DOCUMENT = "Document"
    COMPONENT = "Component"
    EDITOR_WINDOW = "EditorWindow"

    @classmethod
    def parse(cls, value: str) -> "GenerationShape":
        lowered = value.strip().replace("-", "").replace("_", "").lower()
        for shape in cls:
            if shape.value.lower() == lowered:
                return shape
        choices = ", ".join(shape.value for shape in cls)
        raise ValueError(f"Unknown generation shape '{value}'. Use one of: {choices}")


@dataclass
class FileSetting:
    """Per-asset generation settings persisted in the settings store."""

    path: str
    shape: GenerationShape = GenerationShape.DOCUMENT
    output_directory: str = ""
    namespace: str = ""
    file_prefix: str = ""
    file_suffix: str = ""
    last_bindings_output_path: Optional[str] = None
    last_script_output_path: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "path": self.path,
            "shape": self.shape.value,
            "output_directory": self.output_directory,
            "namespace": self.namespace,
            "file_prefix": self.file_prefix,
            "file_suffix": self.file_suffix,
            "last_bindings_output_path": self.last_bindings_output_path,
            "last_script_output_path": self.last_script_output_path,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "FileSetting":
        path = payload.get("path")
        if not isinstance(path, str) or not path:
            raise ValueError("File setting entries require a non-empty 'path'")
        shape_value = payload.get("shape") or GenerationShape.DOCUMENT.value
        return cls(
            path=path,
            shape=GenerationShape.parse(str(shape_value)),
            output_directory=_as_text(payload.get("output_directory")),
            namespace=_as_text(payload.get("namespace")),
            file_prefix=_as_text(payload.get("file_prefix")),
            file_suffix=_as_text(payload.get("file_suffix")),
            last_bindings_output_path=_as_optional_text(payload.get("last_bindings_output_path")),
            last_script_output_path=_as_optional_text(payload.get("last_script_output_path")),
        )


def _as_text(value: object) -> str:
    return str(value) if isinstance(value, (str, int, float)) else ""


def _as_optional_text(value: object) -> Optional[str]:
    text = _as_text(value)
    return text or None


__all__ = [
    "EDITOR_EXTENSION_ATTRIBUTE",
    "FileSetting",
    "GenerationShape",
    "MarkupNode",
    "NAME_ATTRIBUTE",
    "PropertyDescriptor",
    "TypeBinding",
]
