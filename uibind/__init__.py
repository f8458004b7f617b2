"""Typed C# bindings generated from UXML documents."""

__version__ = "1.0.0"

TOOL_NAME = "uibind"

__all__ = ["TOOL_NAME", "__version__"]
