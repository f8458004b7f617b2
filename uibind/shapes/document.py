"""In-place UI logic classes backed by a serialized UIDocument."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from ..codegen.syntax import FieldDeclaration, Member
from ..models import GenerationShape
from .base import ShapeStrategy

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..asset import GenerationAsset

DOCUMENT_FIELD_NAME = "_document"


class DocumentShape(ShapeStrategy):
    shape = GenerationShape.DOCUMENT
    bindings_base_types = ("MonoBehaviour",)
    script_base_types = ("MonoBehaviour",)

    def namespace_for(self, asset: "GenerationAsset") -> str:
        return asset.setting.namespace

    def bindings_class_name(self, asset: "GenerationAsset") -> str:
        return asset.name

    def script_bases(self, asset: "GenerationAsset") -> Tuple[str, ...]:
        # A prefixed or suffixed script class extends the bindings class instead
        # of sharing its partial declaration.
        bindings_name = self.bindings_class_name(asset)
        if self.script_class_name(asset) != bindings_name:
            return (bindings_name,)
        return self.script_base_types

    def document_members(self) -> List[Member]:
        return [
            FieldDeclaration(
                type_name="UIDocument",
                name=DOCUMENT_FIELD_NAME,
                attributes=("SerializeField",),
            )
        ]

    def root_expression(self) -> str:
        return f"{DOCUMENT_FIELD_NAME}?.rootVisualElement"
