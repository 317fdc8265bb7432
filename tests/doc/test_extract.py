"""Tests for documentation extraction from ancestor chains."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from identdoc.core.errors import NoDocumentationError
from identdoc.doc.extract import constant_literal, extract_doc
from identdoc.doc.printer import DeclarationPrinter
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
    ValueExpr,
)


class TestConstantLiteral:
    """First basic literal of a const group."""

    def test_given_const_group_when_literal_then_first_spec_value(
        self, const_group: GroupDeclaration
    ) -> None:
        assert constant_literal(const_group) == "1"

    def test_given_non_literal_first_when_literal_then_later_literal(self) -> None:
        node = GroupDeclaration(
            token="const",
            specs=(
                Spec(names=("A",), source="A = iota", values=(ValueExpr("iota"),)),
                Spec(names=("B",), source='B = "b"', values=(ValueExpr('"b"', is_basic_literal=True),)),
            ),
            parenthesized=True,
        )

        assert constant_literal(node) == '"b"'

    def test_given_var_group_when_literal_then_empty(self) -> None:
        node = GroupDeclaration(
            token="var",
            specs=(Spec(names=("v",), source="v = 1", values=(ValueExpr("1", is_basic_literal=True),)),),
        )

        assert constant_literal(node) == ""


class TestExtractDoc:
    """extract_doc over hand-built chains."""

    def test_given_function_when_extract_then_title_and_doc(
        self,
        foo_decl: FunctionDeclaration,
        func_symbol: Symbol,
        printer: DeclarationPrinter,
    ) -> None:
        # When
        doc = extract_doc((foo_decl,), func_symbol, import_path="example.com/m", printer=printer)

        # Then
        assert doc.title == "func Foo(x int) int"
        assert doc.doc_text == "Foo does X.\n"
        assert doc.name == "Foo"
        assert doc.import_path == "example.com/m"
        assert doc.position == "/src/m/a.go:3:6"

    def test_given_const_group_when_extract_then_constant_value_appended(
        self, const_group: GroupDeclaration, position: Position, printer: DeclarationPrinter
    ) -> None:
        """The literal comes from the first spec even when documenting another."""
        # Given
        symbol = Symbol(
            name="B", kind=SymbolKind.CONST, package_path="example.com/m",
            position=position, package_level=True,
        )

        # When
        doc = extract_doc((const_group,), symbol, import_path="example.com/m", printer=printer)

        # Then
        assert doc.title == "const B = 2"
        assert doc.doc_text == "Numbers.\n\nConstant Value: 1"

    def test_given_undocumented_group_when_extract_then_walk_continues(
        self,
        foo_decl: FunctionDeclaration,
        position: Position,
        printer: DeclarationPrinter,
    ) -> None:
        """A local var inherits the enclosing function's documentation."""
        # Given
        local = GroupDeclaration(token="var", specs=(Spec(names=("n",), source="n int"),))
        chain = (local, OtherNode("block"), foo_decl)
        symbol = Symbol(name="n", kind=SymbolKind.VAR, package_path="example.com/m", position=position)

        # When
        doc = extract_doc(chain, symbol, import_path="example.com/m", printer=printer)

        # Then
        assert doc.title == "var n int"
        assert doc.doc_text == "Foo does X.\n"

    def test_given_field_with_line_comment_when_extract_then_comment_is_doc(
        self, timeout_field: FieldDeclaration, position: Position, printer: DeclarationPrinter
    ) -> None:
        # Given
        outer = GroupDeclaration(
            token="type",
            specs=(Spec(names=("Config",), source="Config struct {\n\tTimeout int\n}"),),
            doc=CommentGroup(("// Config holds settings.",)),
        )
        symbol = Symbol(
            name="Timeout", kind=SymbolKind.FIELD, package_path="example.com/m",
            position=position, type_text="int",
        )

        # When
        doc = extract_doc(
            (timeout_field, OtherNode("field_declaration_list"), outer),
            symbol,
            import_path="example.com/m",
            printer=printer,
        )

        # Then
        assert doc.title == "field Timeout int"
        assert doc.doc_text == "units: ms\n"

    def test_given_field_with_doc_and_comment_when_extract_then_doc_wins(
        self, position: Position, printer: DeclarationPrinter, doc_group: Callable[..., CommentGroup]
    ) -> None:
        field = FieldDeclaration(
            names=("A",), type_text="int", doc=doc_group("A is first."), comment=doc_group("trailing")
        )
        symbol = Symbol(name="A", kind=SymbolKind.FIELD, package_path="p", position=position, type_text="int")

        doc = extract_doc((field,), symbol, import_path="p", printer=printer)

        assert doc.doc_text == "A is first.\n"

    def test_given_parameter_when_extract_then_function_doc(
        self,
        foo_decl: FunctionDeclaration,
        position: Position,
        printer: DeclarationPrinter,
    ) -> None:
        """An undocumented parameter takes its function's doc but its own title."""
        # Given
        param = FieldDeclaration(names=("x",), type_text="int")
        symbol = Symbol(name="x", kind=SymbolKind.VAR, package_path="example.com/m", position=position, type_text="int")

        # When
        doc = extract_doc(
            (param, OtherNode("parameter_list"), foo_decl),
            symbol,
            import_path="example.com/m",
            printer=printer,
        )

        # Then
        assert doc.title == "var x int"
        assert doc.doc_text == "Foo does X.\n"

    def test_given_undocumented_function_when_extract_then_walk_stops(
        self, position: Position, printer: DeclarationPrinter, doc_group: Callable[..., CommentGroup]
    ) -> None:
        """A function always ends the doc walk, even with no comment."""
        # Given
        inner = FunctionDeclaration(name="inner", params="()")
        outer = GroupDeclaration(
            token="var",
            specs=(Spec(names=("f",), source="f = func() {}"),),
            doc=doc_group("Never reached."),
        )
        symbol = Symbol(name="inner", kind=SymbolKind.FUNC, package_path="p", position=position)

        # When
        doc = extract_doc((inner, outer), symbol, import_path="p", printer=printer)

        # Then
        assert doc.title == "func inner()"
        assert doc.doc_text == ""

    def test_given_only_other_nodes_when_extract_then_no_documentation(
        self, position: Position, printer: DeclarationPrinter
    ) -> None:
        symbol = Symbol(name="x", kind=SymbolKind.VAR, package_path="p", position=position)

        with pytest.raises(NoDocumentationError):
            extract_doc(
                (OtherNode("block"), OtherNode("if_statement")),
                symbol,
                import_path="p",
                printer=printer,
            )

    def test_given_same_chain_when_extract_twice_then_equal(
        self, const_group: GroupDeclaration, position: Position, printer: DeclarationPrinter
    ) -> None:
        symbol = Symbol(name="A", kind=SymbolKind.CONST, package_path="p", position=position, package_level=True)

        first = extract_doc((const_group,), symbol, import_path="p", printer=printer)
        second = extract_doc((const_group,), symbol, import_path="p", printer=printer)

        assert first == second
