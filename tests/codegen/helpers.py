"""Shared builders for code generation tests."""

from __future__ import annotations

from pathlib import Path

from uibind.asset import GenerationAsset
from uibind.markup.parser import parse
from uibind.models import FileSetting, GenerationShape


def make_asset(
    markup: str,
    *,
    name: str = "MainMenu",
    shape: GenerationShape = GenerationShape.DOCUMENT,
    namespace: str = "Game.UI",
    prefix: str = "",
    suffix: str = "",
    root: Path = Path("/project"),
) -> GenerationAsset:
    setting = FileSetting(
        path=f"Assets/UI/{name}.uxml",
        shape=shape,
        output_directory="UIBind",
        namespace=namespace,
        file_prefix=prefix,
        file_suffix=suffix,
    )
    return GenerationAsset(
        name=name,
        source_path=root / setting.path,
        root_node=parse(markup),
        setting=setting,
        project_root=root,
    )
