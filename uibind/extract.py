"""Selection of named UXML elements into property descriptors."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .codegen.syntax import KEYWORDS
from .errors import DuplicateNameError, UnresolvedTagWarning
from .logging import get_logger
from .markup.types import TypeTable, default_type_table
from .models import MarkupNode, PropertyDescriptor

DEFAULT_FIELD_PREFIX = "_"
DUPLICATE_POLICIES = ("allow", "reject")

_INVALID_IDENTIFIER_CHARS = re.compile(r"[^0-9A-Za-z_]")

logger = get_logger("extract")


@dataclass
class ExtractionResult:
    """Descriptors selected from a document plus the conditions reported on the way."""

    descriptors: List[PropertyDescriptor] = field(default_factory=list)
    unresolved: List[UnresolvedTagWarning] = field(default_factory=list)
    duplicates: Dict[str, List[str]] = field(default_factory=dict)


def field_name(declared_name: str, prefix: str = DEFAULT_FIELD_PREFIX) -> str:
    """Derive the private field name for a declared element name.

    The first character is lower-cased and ``prefix`` prepended; characters
    that cannot appear in a C# identifier become underscores. A result that
    would start with a digit or spell a C# keyword gets a leading underscore.
    """
    if not declared_name:
        raise ValueError("declared_name must be non-empty")
    head = declared_name[0].lower()
    sanitized = _INVALID_IDENTIFIER_CHARS.sub("_", head + declared_name[1:])
    name = f"{prefix}{sanitized}"
    if name[0].isdigit() or name in KEYWORDS:
        name = f"_{name}"
    return name


def extract(
    root: MarkupNode,
    table: Optional[TypeTable] = None,
    *,
    field_prefix: str = DEFAULT_FIELD_PREFIX,
    duplicates: str = "allow",
) -> ExtractionResult:
    """Flatten ``root`` in pre-order and return descriptors for named elements."""
    if duplicates not in DUPLICATE_POLICIES:
        raise ValueError(f"Unknown duplicate policy '{duplicates}'")
    if table is None:
        table = default_type_table()
    result = ExtractionResult()
    seen: Dict[str, List[str]] = {}

    for node in root.iter_descendants():
        if not node.has_name:
            continue
        declared = node.declared_name or ""
        if node.tag not in table:
            warning = UnresolvedTagWarning(tag=node.tag, declared_name=declared)
            logger.warning(warning.message)
            result.unresolved.append(warning)
            continue
        name = field_name(declared, field_prefix)
        seen.setdefault(name, []).append(declared)
        result.descriptors.append(
            PropertyDescriptor(
                tag=node.tag,
                declared_name=declared,
                field_name=name,
            )
        )

    result.duplicates = {name: names for name, names in seen.items() if len(names) > 1}
    for name, names in result.duplicates.items():
        logger.warning(
            "Elements %s all bind to field '%s'; the last lookup wins.",
            ", ".join(repr(item) for item in names),
            name,
        )
    if result.duplicates and duplicates == "reject":
        raise DuplicateNameError(result.duplicates)
    return result


__all__ = ["DEFAULT_FIELD_PREFIX", "DUPLICATE_POLICIES", "ExtractionResult", "extract", "field_name"]
