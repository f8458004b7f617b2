"""Structured C# declaration model built before rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Sequence, Tuple, Union


# Reserved C# keywords; contextual keywords are valid identifiers.
KEYWORDS = frozenset(
    """
    abstract as base bool break byte case catch char checked class const continue
    decimal default delegate do double else enum event explicit extern false
    finally fixed float for foreach goto if implicit in int interface internal is
    lock long namespace new null object operator out override params private
    protected public readonly ref return sbyte sealed short sizeof stackalloc
    static string struct switch this throw true try typeof uint ulong unchecked
    unsafe ushort using virtual void volatile while
    """.split()
)


def string_literal(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@dataclass(frozen=True)
class Invocation:
    """``target(arg, ...)`` with string literal arguments."""

    target: str
    arguments: Tuple[str, ...] = ()

    def __str__(self) -> str:
        args = ", ".join(string_literal(argument) for argument in self.arguments)
        return f"{self.target}({args})"


@dataclass(frozen=True)
class Cast:
    type_name: str
    expression: Invocation

    def __str__(self) -> str:
        return f"({self.type_name}){self.expression}"


@dataclass(frozen=True)
class Assignment:
    kind: ClassVar[str] = "assignment"

    target: str
    value: Union[Cast, Invocation, str]

    def __str__(self) -> str:
        return f"{self.target} = {self.value};"


@dataclass(frozen=True)
class InvocationStatement:
    kind: ClassVar[str] = "invocation"

    invocation: Invocation

    def __str__(self) -> str:
        return f"{self.invocation};"


Statement = Union[Assignment, InvocationStatement]


@dataclass
class FieldDeclaration:
    kind: ClassVar[str] = "field"

    type_name: str
    name: str
    modifiers: Tuple[str, ...] = ("private",)
    attributes: Tuple[str, ...] = ()
    separated: bool = False


@dataclass
class PropertyDeclaration:
    """Auto-property (``accessors``) or expression-bodied getter (``expression``).

    ``separated`` members are preceded by a blank line when rendered.
    """

    kind: ClassVar[str] = "property"

    type_name: str
    name: str
    modifiers: Tuple[str, ...] = ("public",)
    accessors: Optional[str] = None
    expression: Optional[str] = None
    separated: bool = False


@dataclass
class MethodDeclaration:
    kind: ClassVar[str] = "method"

    name: str
    return_type: str = "void"
    modifiers: Tuple[str, ...] = ("public",)
    body: List[Statement] = field(default_factory=list)
    separated: bool = True


Member = Union[FieldDeclaration, PropertyDeclaration, MethodDeclaration]


@dataclass
class ClassDeclaration:
    name: str
    modifiers: Tuple[str, ...] = ("public", "partial")
    base_types: Tuple[str, ...] = ()
    members: List[Member] = field(default_factory=list)


@dataclass
class CompilationUnit:
    """A single generated source file."""

    declaration: ClassDeclaration
    usings: Sequence[str] = ()
    namespace: Optional[str] = None
    header: Optional[str] = None

    def sorted_usings(self) -> List[str]:
        return sorted(set(self.usings))


__all__ = [
    "Assignment",
    "Cast",
    "ClassDeclaration",
    "CompilationUnit",
    "FieldDeclaration",
    "KEYWORDS",
    "Invocation",
    "InvocationStatement",
    "Member",
    "MethodDeclaration",
    "PropertyDeclaration",
    "Statement",
    "string_literal",
]
