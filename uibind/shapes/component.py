"""Component bindings emitted into the tool-owned namespace."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, List

from ..codegen.syntax import FieldDeclaration, Member, PropertyDeclaration
from ..models import GenerationShape, PropertyDescriptor
from .base import ShapeStrategy

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..asset import GenerationAsset

COMPONENT_NAMESPACE = "UIBind.Components"
DOCUMENT_FIELD_NAME = "document"

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^0-9A-Za-z_]")


def property_name(declared_name: str) -> str:
    """PascalCase-leading identifier for a bound property."""
    sanitized = _INVALID_IDENTIFIER_CHARS.sub("_", declared_name[0].upper() + declared_name[1:])
    return f"_{sanitized}" if sanitized[0].isdigit() else sanitized


class ComponentShape(ShapeStrategy):
    """Bindings hold only data; the paired script adds the MonoBehaviour lifecycle."""

    shape = GenerationShape.COMPONENT
    script_base_types = ("MonoBehaviour",)

    def namespace_for(self, asset: "GenerationAsset") -> str:
        return COMPONENT_NAMESPACE

    def bindings_class_name(self, asset: "GenerationAsset") -> str:
        return f"{asset.name}Component"

    def script_class_name(self, asset: "GenerationAsset") -> str:
        return self.bindings_class_name(asset)

    def document_members(self) -> List[Member]:
        return [FieldDeclaration(type_name="UIDocument", name=DOCUMENT_FIELD_NAME, modifiers=("public",))]

    def member_name(self, descriptor: PropertyDescriptor) -> str:
        return property_name(descriptor.declared_name)

    def binding_member(self, name: str, type_name: str) -> Member:
        return PropertyDeclaration(
            type_name=type_name,
            name=name,
            accessors="get; private set;",
        )

    def root_expression(self) -> str:
        return f"{DOCUMENT_FIELD_NAME}?.rootVisualElement"
