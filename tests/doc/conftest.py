"""Fixtures for the doc pipeline: an in-memory semantic model and node builders."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from identdoc.core.errors import NotFoundError
from identdoc.doc.models import Doc
from identdoc.doc.printer import DeclarationPrinter
from identdoc.semantic.models import (
    AncestorChain,
    CommentGroup,
    FieldDeclaration,
    FunctionDeclaration,
    GroupDeclaration,
    IdentifierRef,
    Position,
    Spec,
    Symbol,
    SymbolKind,
    ValueExpr,
)


@dataclass
class FakeModel:
    """Semantic model answering from dictionaries."""

    symbols: dict[IdentifierRef, Symbol] = field(default_factory=dict)
    chains: dict[Position, AncestorChain] = field(default_factory=dict)
    packages: dict[str, Doc] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def object_of(self, ref: IdentifierRef) -> Symbol:
        self.calls.append("object_of")
        try:
            return self.symbols[ref]
        except KeyError:
            raise NotFoundError.no_identifier(ref.filename, ref.offset) from None

    def enclosing_ancestors(self, position: Position) -> AncestorChain:
        self.calls.append("enclosing_ancestors")
        return self.chains.get(position, ())

    def package_path_of(self, symbol: Symbol) -> str | None:
        return symbol.package_path

    def package_doc(self, import_path: str) -> Doc:
        self.calls.append("package_doc")
        try:
            return self.packages[import_path]
        except KeyError:
            raise NotFoundError.no_package(import_path) from None


def group(*lines: str) -> CommentGroup:
    return CommentGroup(tuple(f"// {line}" for line in lines))


@pytest.fixture
def fake_model() -> FakeModel:
    return FakeModel()


@pytest.fixture
def printer() -> DeclarationPrinter:
    return DeclarationPrinter()


@pytest.fixture
def doc_group() -> Callable[..., CommentGroup]:
    """Build a line-comment group from its lines."""
    return group


@pytest.fixture
def position() -> Position:
    return Position(filename="/src/m/a.go", offset=40, line=3, column=6)


@pytest.fixture
def func_symbol(position: Position) -> Symbol:
    return Symbol(
        name="Foo",
        kind=SymbolKind.FUNC,
        package_path="example.com/m",
        position=position,
        type_text="(x int) int",
        package_level=True,
    )


@pytest.fixture
def foo_decl() -> FunctionDeclaration:
    return FunctionDeclaration(
        name="Foo",
        params="(x int)",
        results="int",
        doc=group("Foo does X."),
        body="{ return x }",
    )


@pytest.fixture
def const_group() -> GroupDeclaration:
    """``const ( A = 1; B = 2 )`` with a group doc comment."""
    return GroupDeclaration(
        token="const",
        specs=(
            Spec(names=("A",), source="A = 1", values=(ValueExpr("1", is_basic_literal=True),)),
            Spec(
                names=("B",),
                source="B = 2",
                values=(ValueExpr("2", is_basic_literal=True),),
                doc=group("B is two."),
            ),
        ),
        doc=group("Numbers."),
        parenthesized=True,
    )


@pytest.fixture
def timeout_field() -> FieldDeclaration:
    return FieldDeclaration(
        names=("Timeout",),
        type_text="int",
        comment=CommentGroup(("// units: ms",)),
    )
