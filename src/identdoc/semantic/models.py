"""Semantic data model shared by the Go program model and the doc pipeline.

Declaration nodes form a closed variant: ``DeclarationNode`` is the union of
``FunctionDeclaration``, ``GroupDeclaration``, ``FieldDeclaration`` and
``OtherNode``. Consumers dispatch with ``match`` and finish with
``assert_never`` so a new kind fails type checking everywhere it is not
handled.

All values are frozen. The program model builds fresh values for every
query, so callers may derive copies with ``dataclasses.replace`` freely.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, TypeAlias


@dataclass(frozen=True, slots=True)
class Position:
    """A source position. Offset is in bytes, line and column are 1-based."""

    filename: str
    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class IdentifierRef:
    """An identifier occurrence, addressed the way editors report cursors."""

    filename: str
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:#{self.offset}"


class SymbolKind(str, Enum):
    """Kinds of declared entities."""

    PACKAGE = "package"  # Import alias (local package name)
    CONST = "const"
    TYPE = "type"
    VAR = "var"  # Package vars, locals, parameters
    FIELD = "field"  # Struct fields
    FUNC = "func"  # Functions, methods, interface methods
    BUILTIN = "builtin"  # Universe scope


@dataclass(frozen=True, slots=True)
class Symbol:
    """A resolved semantic entity."""

    name: str
    kind: SymbolKind
    package_path: str | None = None  # None for builtins
    position: Position | None = None  # None for builtins
    type_text: str | None = None  # Declared type, or signature for funcs
    imported_path: str | None = None  # PACKAGE only
    receiver: str | None = None  # Methods: receiver type as written
    package_level: bool = False

    @property
    def is_package_alias(self) -> bool:
        return self.kind is SymbolKind.PACKAGE

    def qualified_name(self) -> str:
        if self.package_level and self.package_path:
            return f"{self.package_path}.{self.name}"
        return self.name

    def default_text(self) -> str:
        """Textual form that is always available, even when printing fails.

        Package-level names are qualified with their full import path, unlike
        printed declarations.
        """
        if self.kind is SymbolKind.PACKAGE:
            return f'package {self.name} ("{self.imported_path or ""}")'
        if self.kind is SymbolKind.BUILTIN:
            return f"builtin {self.name}"
        if self.kind is SymbolKind.FUNC:
            signature = self.type_text or "()"
            if self.receiver:
                return f"func ({self.receiver}).{self.name}{signature}"
            return f"func {self.qualified_name()}{signature}"
        text = f"{self.kind.value} {self.qualified_name()}"
        if self.type_text:
            text += f" {self.type_text}"
        return text


_DIRECTIVE = re.compile(r"^//(line |extern |export |[a-z0-9]+:[a-z0-9])")


@dataclass(frozen=True, slots=True)
class CommentGroup:
    """A run of adjacent comments, stored verbatim with their markers."""

    comments: tuple[str, ...]

    def text(self) -> str:
        """Return the comment text without markers.

        Line comment markers lose one following space, directives such as
        ``//go:generate`` are dropped, and blank lines are collapsed. A
        non-empty result always ends in a newline.
        """
        lines: list[str] = []
        for comment in self.comments:
            if comment.startswith("//"):
                if _DIRECTIVE.match(comment):
                    continue
                body = comment[2:]
                if body.startswith(" "):
                    body = body[1:]
                lines.append(body)
            elif comment.startswith("/*"):
                lines.extend(comment[2:-2].split("\n"))
            else:
                lines.append(comment)

        lines = [line.rstrip() for line in lines]

        collapsed: list[str] = []
        for line in lines:
            if line or (collapsed and collapsed[-1]):
                collapsed.append(line)
        while collapsed and not collapsed[-1]:
            collapsed.pop()

        if not collapsed:
            return ""
        return "\n".join(collapsed) + "\n"


def comment_text(group: CommentGroup | None) -> str:
    return group.text() if group is not None else ""


class NodeKind(str, Enum):
    """Declaration node tags."""

    FUNCTION = "function"
    GROUP = "group"
    FIELD = "field"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class FunctionDeclaration:
    """A function or method declaration."""

    kind: ClassVar[NodeKind] = NodeKind.FUNCTION

    name: str
    params: str
    receiver: str | None = None
    type_params: str | None = None
    results: str | None = None
    doc: CommentGroup | None = None
    body: str | None = None


@dataclass(frozen=True, slots=True)
class ValueExpr:
    """One initializer expression of a spec."""

    text: str
    is_basic_literal: bool = False


@dataclass(frozen=True, slots=True)
class Spec:
    """One binding inside a ``type``, ``var`` or ``const`` declaration."""

    names: tuple[str, ...]
    source: str  # Spec source text without comments
    values: tuple[ValueExpr, ...] = ()
    doc: CommentGroup | None = None
    comment: CommentGroup | None = None


@dataclass(frozen=True, slots=True)
class GroupDeclaration:
    """A ``type``/``var``/``const`` declaration holding one or more specs."""

    kind: ClassVar[NodeKind] = NodeKind.GROUP

    token: str
    specs: tuple[Spec, ...]
    doc: CommentGroup | None = None
    parenthesized: bool = False

    def find_spec(self, name: str) -> Spec | None:
        for spec in self.specs:
            if name in spec.names:
                return spec
        return None


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    """A struct field, interface method or parameter."""

    kind: ClassVar[NodeKind] = NodeKind.FIELD

    names: tuple[str, ...] = ()
    type_text: str | None = None
    doc: CommentGroup | None = None
    comment: CommentGroup | None = None


@dataclass(frozen=True, slots=True)
class OtherNode:
    """Any syntactic node without documentation rules."""

    kind: ClassVar[NodeKind] = NodeKind.OTHER

    node_type: str


DeclarationNode: TypeAlias = FunctionDeclaration | GroupDeclaration | FieldDeclaration | OtherNode

# Innermost first, ending at the top-level declaration.
AncestorChain: TypeAlias = tuple[DeclarationNode, ...]
