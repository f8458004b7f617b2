"""Per-asset and batch generation flows."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .asset import BINDINGS_MARKER, SOURCE_EXTENSION, GenerationAsset, resolve_asset_path
from .codegen.engine import CodeAssemblyEngine
from .codegen.renderer import SourceRenderer
from .config import UIBindConfig, load_config
from .errors import UIBindError
from .extract import ExtractionResult, extract
from .logging import get_logger
from .markup.parser import parse
from .markup.types import TypeTable, default_type_table
from .models import FileSetting, GenerationShape
from .settings import SettingsStore
from .shapes import strategy_for

BINDINGS_GLOB = f"*{BINDINGS_MARKER}{SOURCE_EXTENSION}"


@dataclass
class GenerationOutcome:
    """Result of generating one artifact."""

    key: str
    path: Path
    written: bool
    diff: str = ""
    dry_run: bool = False


@dataclass
class BatchReport:
    """Outcomes of a multi-asset run; failures never abort the batch."""

    outcomes: List[GenerationOutcome] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class ClearReport:
    """Files removed by a clear operation and the ones that could not be."""

    removed: List[Path] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)


class Orchestrator:
    """Coordinates parsing, extraction, assembly and writing for a project."""

    def __init__(
        self,
        project_root: str | Path = ".",
        *,
        config: UIBindConfig | None = None,
        store: SettingsStore | None = None,
        table: TypeTable | None = None,
        engine: CodeAssemblyEngine | None = None,
    ) -> None:
        self.root = Path(project_root).expanduser().resolve()
        self.config = config or load_config(self.root)
        self.store = store if store is not None else SettingsStore(self.config.settings_file)
        base_table = table if table is not None else default_type_table()
        self.table = base_table.with_overrides(self.config.element_types)
        self.engine = engine or CodeAssemblyEngine(
            self.table,
            SourceRenderer(self.config.templates_dir),
            duplicates=self.config.generation.duplicate_names,
        )
        self.logger = get_logger("orchestrator")

    # ------------------------------------------------------------------
    # Settings management

    def configure(
        self,
        path: str | Path,
        *,
        shape: GenerationShape | None = None,
        output_directory: str | None = None,
        namespace: str | None = None,
        file_prefix: str | None = None,
        file_suffix: str | None = None,
    ) -> FileSetting:
        """Enable generation for ``path`` or update its existing setting."""
        absolute, key = resolve_asset_path(path, self.root)
        if not absolute.is_file():
            raise FileNotFoundError(f"UXML file not found: {absolute}")

        defaults = self.config.defaults
        setting = self.store.get(key) or FileSetting(
            path=key,
            shape=defaults.shape,
            output_directory=defaults.output_directory,
            namespace=defaults.namespace,
            file_prefix=defaults.file_prefix,
            file_suffix=defaults.file_suffix,
        )
        if shape is not None:
            setting.shape = shape
        if output_directory is not None:
            setting.output_directory = output_directory
        if namespace is not None:
            setting.namespace = namespace
        if file_prefix is not None:
            setting.file_prefix = file_prefix
        if file_suffix is not None:
            setting.file_suffix = file_suffix

        self.store.add(setting)
        self.store.save()
        self.logger.info("Configured %s (%s)", key, setting.shape.value)
        return setting

    def remove(self, path: str | Path) -> bool:
        """Disable generation for ``path``; generated files are left in place."""
        _, key = resolve_asset_path(path, self.root)
        removed = self.store.remove(key)
        self.store.save()
        return removed is not None

    # ------------------------------------------------------------------
    # Generation

    def load_asset(self, path: str | Path) -> GenerationAsset:
        return GenerationAsset.load(path, self.store, self.root)

    def extract(self, asset: GenerationAsset) -> ExtractionResult:
        generation = self.config.generation
        return extract(
            asset.root_node,
            self.table,
            field_prefix=generation.field_prefix,
            duplicates=generation.duplicate_names,
        )

    def render_bindings(self, asset: GenerationAsset) -> str:
        strategy = strategy_for(asset.setting.shape)
        return self.engine.assemble(self.extract(asset), strategy, asset)

    def render_script(self, asset: GenerationAsset) -> str:
        return self.engine.assemble_script(strategy_for(asset.setting.shape), asset)

    def generate_bindings(self, path: str | Path, *, dry_run: bool = False) -> GenerationOutcome:
        """Regenerate the bindings artifact; it is always fully overwritten."""
        asset = self.load_asset(path)
        self.logger.info("Generating UI bindings for %s", asset.key)
        content = self.render_bindings(asset)
        target = asset.bindings_output_path
        previous = self._read_existing(target)
        diff = self._diff(previous, content, asset.relative(target))

        if dry_run:
            return GenerationOutcome(asset.key, target, written=False, diff=diff, dry_run=True)

        written = previous != content
        if written:
            self._write(target, content)
            self.logger.info("Done generating: %s (output: %s)", asset.name, asset.relative(target))
        else:
            self.logger.debug("Bindings for %s already up to date", asset.key)

        stale = asset.last_bindings_output_path
        if stale is not None and stale.resolve() != target.resolve():
            self._remove_stale(stale)

        asset.setting.last_bindings_output_path = asset.relative(target)
        self.store.mark_dirty(asset.key)
        self.store.save()
        return GenerationOutcome(asset.key, target, written=written, diff=diff)

    def generate_script(self, path: str | Path, *, dry_run: bool = False) -> GenerationOutcome:
        """Scaffold the script artifact; an existing file is never touched."""
        asset = self.load_asset(path)
        target = asset.script_output_path

        if target.exists():
            self.logger.info("Script for %s already exists at %s; skipping", asset.key, asset.relative(target))
            written = False
            diff = ""
        else:
            self.logger.info("Generating UI script for %s", asset.key)
            content = self.render_script(asset)
            diff = self._diff(None, content, asset.relative(target))
            if dry_run:
                return GenerationOutcome(asset.key, target, written=False, diff=diff, dry_run=True)
            self._write(target, content)
            written = True
            self.logger.info("Done generating: %s (output: %s)", asset.name, asset.relative(target))

        if not dry_run:
            asset.setting.last_script_output_path = asset.relative(target)
            self.store.mark_dirty(asset.key)
            self.store.save()
        return GenerationOutcome(asset.key, target, written=written, diff=diff, dry_run=dry_run)

    def generate_all_bindings(self, *, dry_run: bool = False) -> BatchReport:
        return self._run_batch(lambda key: self.generate_bindings(key, dry_run=dry_run))

    def generate_all_scripts(self, *, dry_run: bool = False) -> BatchReport:
        return self._run_batch(lambda key: self.generate_script(key, dry_run=dry_run))

    def preview(
        self,
        markup: str,
        *,
        name: str,
        shape: GenerationShape = GenerationShape.DOCUMENT,
        namespace: str = "",
        file_prefix: str = "",
        file_suffix: str = "",
        script: bool = False,
    ) -> str:
        """Render an artifact for in-memory markup without touching disk."""
        setting = FileSetting(
            path=f"{name}.uxml",
            shape=shape,
            namespace=namespace,
            file_prefix=file_prefix,
            file_suffix=file_suffix,
        )
        asset = GenerationAsset(
            name=name,
            source_path=self.root / setting.path,
            root_node=parse(markup, source=setting.path),
            setting=setting,
            project_root=self.root,
        )
        return self.render_script(asset) if script else self.render_bindings(asset)

    # ------------------------------------------------------------------
    # Clearing

    def clear_bindings(self, path: str | Path) -> Optional[Path]:
        """Delete the last bindings file generated for ``path``."""
        _, key = resolve_asset_path(path, self.root)
        setting = self.store.require(key)
        if not setting.last_bindings_output_path:
            return None
        target = self.root / setting.last_bindings_output_path
        removed: Optional[Path] = None
        if target.exists():
            target.unlink()
            removed = target
            self.logger.info("Cleared bindings %s", setting.last_bindings_output_path)
        setting.last_bindings_output_path = None
        self.store.mark_dirty(key)
        self.store.save()
        return removed

    def clear_all_bindings(self) -> ClearReport:
        """Delete every generated bindings file under the output directories."""
        report = ClearReport()
        for target in self._iter_generated_files():
            try:
                target.unlink()
            except OSError as exc:
                self.logger.error("Failed to delete %s: %s", target, exc)
                report.errors[str(target)] = str(exc)
                continue
            report.removed.append(target)

        removed = {path.resolve() for path in report.removed}
        for setting in self.store:
            recorded = setting.last_bindings_output_path
            if recorded and (self.root / recorded).resolve() in removed:
                setting.last_bindings_output_path = None
                self.store.mark_dirty(setting.path)
        self.store.save()
        self.logger.info("Bindings cleared (%d removed, %d failed)", len(report.removed), len(report.errors))
        return report

    # ------------------------------------------------------------------
    # Internal helpers

    def _run_batch(self, action: Callable[[str], GenerationOutcome]) -> BatchReport:
        report = BatchReport()
        for setting in list(self.store):
            try:
                report.outcomes.append(action(setting.path))
            except (UIBindError, OSError) as exc:
                self.logger.warning("Skipping %s: %s", setting.path, exc)
                report.failures[setting.path] = str(exc)
        return report

    def _iter_generated_files(self) -> List[Path]:
        directories = {self.config.defaults.output_directory}
        directories.update(setting.output_directory for setting in self.store)
        found: Dict[Path, None] = {}
        for directory in sorted(directories):
            base = (self.root / directory).resolve()
            # An empty output directory would mean scanning the whole project.
            if base == self.root or not base.is_dir():
                continue
            for path in sorted(base.rglob(BINDINGS_GLOB)):
                if path.is_file():
                    found.setdefault(path, None)
        return list(found)

    def _remove_stale(self, path: Path) -> None:
        if not path.exists():
            return
        try:
            path.unlink()
        except OSError as exc:
            self.logger.warning("Failed to remove stale bindings %s: %s", path, exc)
        else:
            self.logger.info("Removed stale bindings %s", path)

    @staticmethod
    def _read_existing(path: Path) -> Optional[str]:
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _write(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8", newline="\n")

    @staticmethod
    def _diff(previous: Optional[str], content: str, label: str) -> str:
        diff_lines = difflib.unified_diff(
            (previous or "").splitlines(),
            content.splitlines(),
            fromfile=f"{label} (current)",
            tofile=f"{label} (generated)",
            lineterm="",
        )
        return "\n".join(diff_lines)


__all__ = ["BatchReport", "ClearReport", "GenerationOutcome", "Orchestrator"]
