"""Assembly of bindings and script compilation units."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, FrozenSet, Iterable, List, Optional, Union

from .. import TOOL_NAME, __version__
from ..errors import DuplicateNameError, InvalidAssetError, UnresolvedTagWarning
from ..extract import DUPLICATE_POLICIES, ExtractionResult
from ..logging import get_logger
from ..markup.types import TypeTable, default_type_table
from ..models import PropertyDescriptor
from ..shapes.base import INITIALIZE_METHOD_NAME, ROOT_PROPERTY_NAME, ShapeStrategy
from .renderer import SourceRenderer
from .syntax import (
    Assignment,
    Cast,
    ClassDeclaration,
    CompilationUnit,
    Invocation,
    InvocationStatement,
    Member,
    MethodDeclaration,
    PropertyDeclaration,
    Statement,
)

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..asset import GenerationAsset

GENERATED_HEADER = f"""//------------------------------------------------------------------------------
// <auto-generated>
//     This code was generated by the {TOOL_NAME} code generator.
//     Version: {__version__}
//
//     Changes to this file may cause incorrect behavior and will be lost if
//     the code is regenerated.
// </auto-generated>
//------------------------------------------------------------------------------"""

Descriptors = Union[ExtractionResult, Iterable[PropertyDescriptor]]


class CodeAssemblyEngine:
    """Builds declaration models for an asset and renders them to C# text."""

    def __init__(
        self,
        table: Optional[TypeTable] = None,
        renderer: Optional[SourceRenderer] = None,
        *,
        duplicates: str = "allow",
    ) -> None:
        if duplicates not in DUPLICATE_POLICIES:
            raise ValueError(f"Unknown duplicate policy '{duplicates}'")
        self.table = table if table is not None else default_type_table()
        self.renderer = renderer or SourceRenderer()
        self.logger = get_logger("codegen")
        self.warnings: List[UnresolvedTagWarning] = []
        self.duplicates = duplicates
        self.collisions: Dict[str, List[str]] = {}

    def assemble(
        self,
        descriptors: Descriptors,
        strategy: ShapeStrategy,
        asset: Optional["GenerationAsset"],
    ) -> str:
        """Render the bindings artifact for ``asset`` using ``strategy``."""
        return self.renderer.render(self.build_bindings_unit(descriptors, strategy, asset))

    def assemble_script(
        self, strategy: ShapeStrategy, asset: Optional["GenerationAsset"]
    ) -> str:
        """Render the once-only script scaffold paired with the bindings."""
        return self.renderer.render(self.build_script_unit(strategy, asset))

    def build_bindings_unit(
        self,
        descriptors: Descriptors,
        strategy: ShapeStrategy,
        asset: Optional["GenerationAsset"],
    ) -> CompilationUnit:
        if asset is None:
            raise InvalidAssetError("Cannot generate bindings with a null document asset.")
        if isinstance(descriptors, ExtractionResult):
            descriptors = descriptors.descriptors

        self.warnings = []
        self.collisions = {}
        reserved = strategy.reserved_member_names(asset)
        binding_members: List[Member] = []
        statements: List[Statement] = []
        for descriptor in descriptors:
            binding = self.table.resolve(descriptor.tag)
            if binding is None:
                warning = UnresolvedTagWarning(tag=descriptor.tag, declared_name=descriptor.declared_name)
                self.logger.warning(warning.message)
                self.warnings.append(warning)
                continue
            type_name = binding.target_type_name
            name = strategy.member_name(descriptor)
            if name in reserved:
                self.collisions.setdefault(name, []).append(descriptor.declared_name)
                name = _unreserved(name, reserved)
            binding_members.append(strategy.binding_member(name, type_name))
            lookup = Invocation(strategy.query_target(), (descriptor.declared_name,))
            statements.append(Assignment(name, Cast(type_name, lookup)))

        for name, declared in self.collisions.items():
            self.logger.warning(
                "Elements %s clash with generated member '%s'; bound as '%s'.",
                ", ".join(repr(item) for item in declared),
                name,
                _unreserved(name, reserved),
            )
        if self.collisions and self.duplicates == "reject":
            raise DuplicateNameError(self.collisions)

        root_accessor = PropertyDeclaration(
            type_name=self.table.root_type_name,
            name=ROOT_PROPERTY_NAME,
            expression=strategy.root_expression(),
            separated=True,
        )
        initializer = MethodDeclaration(name=INITIALIZE_METHOD_NAME, body=statements)
        declaration = ClassDeclaration(
            name=strategy.bindings_class_name(asset),
            base_types=strategy.bindings_base_types,
            members=[*strategy.document_members(), *binding_members, root_accessor, initializer],
        )
        return CompilationUnit(
            declaration=declaration,
            usings=strategy.usings,
            namespace=strategy.namespace_for(asset) or None,
            header=GENERATED_HEADER,
        )

    def build_script_unit(
        self, strategy: ShapeStrategy, asset: Optional["GenerationAsset"]
    ) -> CompilationUnit:
        if asset is None:
            raise InvalidAssetError("Cannot generate a script with a null document asset.")
        lifecycle = MethodDeclaration(
            name=strategy.lifecycle_method,
            modifiers=("private",),
            body=[InvocationStatement(Invocation(INITIALIZE_METHOD_NAME))],
        )
        declaration = ClassDeclaration(
            name=strategy.script_class_name(asset),
            base_types=strategy.script_bases(asset),
            members=[lifecycle],
        )
        return CompilationUnit(
            declaration=declaration,
            usings=strategy.usings,
            namespace=strategy.namespace_for(asset) or None,
        )


def _unreserved(name: str, reserved: FrozenSet[str]) -> str:
    while name in reserved:
        name = f"{name}_"
    return name


__all__ = ["CodeAssemblyEngine", "GENERATED_HEADER"]
