"""Shape strategy contract consumed by the code assembly engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, FrozenSet, List, Tuple

from ..codegen.syntax import FieldDeclaration, Member
from ..models import GenerationShape, PropertyDescriptor

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..asset import GenerationAsset

UI_RUNTIME_NAMESPACE = "UnityEngine"
UI_WIDGET_NAMESPACE = "UnityEngine.UIElements"
EDITOR_NAMESPACE = "UnityEditor"

INITIALIZE_METHOD_NAME = "InitializeDocument"
ROOT_PROPERTY_NAME = "Root"
QUERY_METHOD_NAME = "Q"


class ShapeStrategy(ABC):
    """Parameters that distinguish one generation shape from another."""

    shape: ClassVar[GenerationShape]
    bindings_base_types: ClassVar[Tuple[str, ...]] = ()
    script_base_types: ClassVar[Tuple[str, ...]] = ()
    usings: ClassVar[Tuple[str, ...]] = (UI_RUNTIME_NAMESPACE, UI_WIDGET_NAMESPACE)
    lifecycle_method: ClassVar[str] = "Awake"

    @abstractmethod
    def namespace_for(self, asset: "GenerationAsset") -> str:
        """Namespace the generated classes are declared in."""

    @abstractmethod
    def bindings_class_name(self, asset: "GenerationAsset") -> str:
        """Class name of the regenerated bindings artifact."""

    @abstractmethod
    def root_expression(self) -> str:
        """Expression returning the document root, null-propagating where needed."""

    def script_class_name(self, asset: "GenerationAsset") -> str:
        setting = asset.setting
        return f"{setting.file_prefix}{asset.name}{setting.file_suffix}"

    def script_bases(self, asset: "GenerationAsset") -> Tuple[str, ...]:
        return self.script_base_types

    def document_members(self) -> List[Member]:
        """Members backing the root accessor (a document reference, if any)."""
        return []

    def member_name(self, descriptor: PropertyDescriptor) -> str:
        return descriptor.field_name

    def binding_member(self, name: str, type_name: str) -> Member:
        return FieldDeclaration(type_name=type_name, name=name)

    def reserved_member_names(self, asset: "GenerationAsset") -> FrozenSet[str]:
        """Names a bound member must not take in the generated class."""
        names = {
            ROOT_PROPERTY_NAME,
            INITIALIZE_METHOD_NAME,
            self.lifecycle_method,
            self.bindings_class_name(asset),
            self.script_class_name(asset),
        }
        names.update(member.name for member in self.document_members())
        return frozenset(names)

    def query_target(self) -> str:
        return f"{ROOT_PROPERTY_NAME}?.{QUERY_METHOD_NAME}"


__all__ = [
    "EDITOR_NAMESPACE",
    "INITIALIZE_METHOD_NAME",
    "QUERY_METHOD_NAME",
    "ROOT_PROPERTY_NAME",
    "ShapeStrategy",
    "UI_RUNTIME_NAMESPACE",
    "UI_WIDGET_NAMESPACE",
]
