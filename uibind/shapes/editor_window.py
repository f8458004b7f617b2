"""Tool windows whose root is the host window's own visual tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import GenerationShape
from .base import EDITOR_NAMESPACE, UI_RUNTIME_NAMESPACE, UI_WIDGET_NAMESPACE, ShapeStrategy

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..asset import GenerationAsset


class EditorWindowShape(ShapeStrategy):
    shape = GenerationShape.EDITOR_WINDOW
    bindings_base_types = ("EditorWindow",)
    script_base_types = ("EditorWindow",)
    usings = (EDITOR_NAMESPACE, UI_RUNTIME_NAMESPACE, UI_WIDGET_NAMESPACE)
    lifecycle_method = "CreateGUI"

    def namespace_for(self, asset: "GenerationAsset") -> str:
        return asset.setting.namespace

    def bindings_class_name(self, asset: "GenerationAsset") -> str:
        return self.script_class_name(asset)

    def root_expression(self) -> str:
        return "rootVisualElement"
