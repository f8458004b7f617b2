"""UXML document parser producing :class:`MarkupNode` trees."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Optional

from ..errors import ParseError
from ..models import MarkupNode

_QUALIFIED_NAME = re.compile(r"^\{(?P<namespace>[^}]*)\}(?P<local>.+)$")


def parse(text: str, *, source: Optional[str] = None) -> MarkupNode:
    """Parse UXML text and return the document element as a node tree."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        line, column = getattr(exc, "position", (None, None))
        message = str(exc).split(":", 1)[0]
        raise ParseError(message, source=source, line=line, column=column) from exc
    return _convert(root)


def parse_file(path: Path) -> MarkupNode:
    """Read and parse a UXML file."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise ParseError(f"Failed to read UXML file: {exc.strerror or exc}", source=str(path)) from exc
    return parse(text, source=str(path))


def is_truthy(value: Optional[str]) -> bool:
    """Convert a raw attribute string to a boolean; absent values are False."""
    if value is None:
        return False
    return value.strip().lower() == "true"


def local_name(qualified: str) -> str:
    """Strip the ``{namespace}`` part ElementTree adds to prefixed names."""
    match = _QUALIFIED_NAME.match(qualified)
    return match.group("local") if match else qualified


def _convert(element: ET.Element) -> MarkupNode:
    attributes: Dict[str, str] = {}
    for key, value in element.attrib.items():
        attributes[local_name(key)] = value
    node = MarkupNode(tag=local_name(element.tag), attributes=attributes)
    # ElementTree drops comments and processing instructions by default, so
    # every child here is an element.
    node.children = [_convert(child) for child in element]
    return node


__all__ = ["is_truthy", "local_name", "parse", "parse_file"]
