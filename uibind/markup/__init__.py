"""UXML parsing and element type resolution."""

from .parser import is_truthy, parse, parse_file
from .types import TypeTable, default_type_table

__all__ = [
    "TypeTable",
    "default_type_table",
    "is_truthy",
    "parse",
    "parse_file",
]
