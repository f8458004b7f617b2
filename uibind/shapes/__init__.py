"""Generation shape strategies and their dispatch."""

from __future__ import annotations

from typing import assert_never

from ..models import GenerationShape
from .base import ShapeStrategy
from .component import COMPONENT_NAMESPACE, ComponentShape
from .document import DocumentShape
from .editor_window import EditorWindowShape


def strategy_for(shape: GenerationShape) -> ShapeStrategy:
    """Return the strategy implementing ``shape``."""
    match shape:
        case GenerationShape.DOCUMENT:
            return DocumentShape()
        case GenerationShape.COMPONENT:
            return ComponentShape()
        case GenerationShape.EDITOR_WINDOW:
            return EditorWindowShape()
        case _:
            assert_never(shape)


__all__ = [
    "COMPONENT_NAMESPACE",
    "ComponentShape",
    "DocumentShape",
    "EditorWindowShape",
    "ShapeStrategy",
    "strategy_for",
]
