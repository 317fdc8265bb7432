"""Tests for title rendering."""

from __future__ import annotations

import pytest

from identdoc.doc.printer import DeclarationPrinter, PrintError
from identdoc.doc.render import render_title, title_node
from identdoc.semantic.models import (
    CommentGroup,
    FieldDeclaration,
    FunctionDeclaration,
    GroupDeclaration,
    OtherNode,
    Position,
    Spec,
    Symbol,
    SymbolKind,
)


def _const_symbol(name: str, position: Position) -> Symbol:
    return Symbol(
        name=name,
        kind=SymbolKind.CONST,
        package_path="example.com/m",
        position=position,
        package_level=True,
    )


class TestTitleNode:
    """Title copies of declaration nodes."""

    def test_given_function_when_reduced_then_doc_and_body_dropped(
        self, foo_decl: FunctionDeclaration
    ) -> None:
        # When
        reduced = title_node(foo_decl, "Foo")

        # Then
        assert isinstance(reduced, FunctionDeclaration)
        assert reduced.doc is None
        assert reduced.body is None
        assert reduced.params == foo_decl.params

    def test_given_group_when_reduced_then_only_target_spec_remains(
        self, const_group: GroupDeclaration
    ) -> None:
        # When
        reduced = title_node(const_group, "B")

        # Then
        assert isinstance(reduced, GroupDeclaration)
        assert [s.names for s in reduced.specs] == [("B",)]
        assert reduced.specs[0].doc is None
        assert reduced.doc is None
        assert reduced.parenthesized is False

    def test_given_group_when_reduced_then_original_untouched(
        self, const_group: GroupDeclaration
    ) -> None:
        title_node(const_group, "B")

        assert len(const_group.specs) == 2
        assert const_group.doc is not None
        assert const_group.specs[1].doc is not None

    def test_given_unknown_target_when_reduced_then_print_error(
        self, const_group: GroupDeclaration
    ) -> None:
        with pytest.raises(PrintError, match="Z"):
            title_node(const_group, "Z")


class TestRenderTitle:
    """render_title dispatch."""

    def test_given_function_when_render_then_signature(
        self, foo_decl: FunctionDeclaration, func_symbol: Symbol, printer: DeclarationPrinter
    ) -> None:
        assert render_title(foo_decl, func_symbol, printer) == "func Foo(x int) int"

    def test_given_const_group_when_render_then_single_spec(
        self, const_group: GroupDeclaration, position: Position, printer: DeclarationPrinter
    ) -> None:
        # Given
        symbol = _const_symbol("B", position)

        # When
        title = render_title(const_group, symbol, printer)

        # Then
        assert title == "const B = 2"

    def test_given_field_when_render_then_default_text(
        self, timeout_field: FieldDeclaration, position: Position, printer: DeclarationPrinter
    ) -> None:
        # Given
        symbol = Symbol(
            name="Timeout", kind=SymbolKind.FIELD, package_path="example.com/m",
            position=position, type_text="int",
        )

        # When
        title = render_title(timeout_field, symbol, printer)

        # Then
        assert title == "field Timeout int"

    def test_given_other_node_when_render_then_default_text(
        self, position: Position, printer: DeclarationPrinter
    ) -> None:
        symbol = Symbol(
            name="x", kind=SymbolKind.VAR, package_path="example.com/m",
            position=position, type_text="int", package_level=True,
        )

        assert render_title(OtherNode("block"), symbol, printer) == "var example.com/m.x int"

    def test_given_missing_spec_when_render_then_falls_back(
        self, const_group: GroupDeclaration, position: Position, printer: DeclarationPrinter
    ) -> None:
        """A group that does not declare the symbol renders its default text."""
        # Given
        symbol = _const_symbol("Z", position)

        # When
        title = render_title(const_group, symbol, printer)

        # Then
        assert title == "const example.com/m.Z"

    def test_given_unprintable_spec_when_render_then_falls_back(
        self, position: Position, printer: DeclarationPrinter
    ) -> None:
        # Given
        node = GroupDeclaration(
            token="var",
            specs=(Spec(names=("v",), source=""),),
            doc=CommentGroup(("// v.",)),
        )
        symbol = Symbol(
            name="v", kind=SymbolKind.VAR, package_path="example.com/m",
            position=position, type_text="string", package_level=True,
        )

        # When
        title = render_title(node, symbol, printer)

        # Then
        assert title == "var example.com/m.v string"
