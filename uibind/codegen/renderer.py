"""Jinja2 rendering of :class:`CompilationUnit` models."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader

from .formatting import SourceFormatter
from .syntax import CompilationUnit

_DEFAULT_TEMPLATES = Path(__file__).with_name("templates")
_UNIT_TEMPLATE = "unit.cs.j2"


class SourceRenderer:
    """Renders compilation units through the packaged (or project) templates."""

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        formatter: Optional[SourceFormatter] = None,
    ) -> None:
        self.templates_dir = templates_dir
        self.formatter = formatter or SourceFormatter()
        self._env = self._create_env(templates_dir)

    def render(self, unit: CompilationUnit) -> str:
        template = self._env.get_template(_UNIT_TEMPLATE)
        return self.formatter.format(template.render(unit=unit))

    @staticmethod
    def _create_env(templates_dir: Optional[Path]) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(_DEFAULT_TEMPLATES))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


__all__ = ["SourceRenderer"]
