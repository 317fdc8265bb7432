"""Conversion of tree-sitter Go nodes into declaration nodes.

Every call builds new frozen values; nothing here keeps references to the
tree beyond the call.
"""

from __future__ import annotations

from typing import Any

from identdoc.semantic._internal.parsing import (
    ParsedFile,
    leading_comments,
    node_source,
    trailing_comments,
)
from identdoc.semantic.models import (
    DeclarationNode,
    FieldDeclaration,
    FunctionDeclaration,
    GroupDeclaration,
    OtherNode,
    Spec,
    ValueExpr,
)

FUNCTION_NODE_TYPES = frozenset({"function_declaration", "method_declaration"})

GROUP_TOKENS: dict[str, str] = {
    "type_declaration": "type",
    "var_declaration": "var",
    "const_declaration": "const",
}

SPEC_NODE_TYPES = frozenset({"type_spec", "type_alias", "var_spec", "const_spec"})

FIELD_NODE_TYPES = frozenset(
    {
        "field_declaration",
        "method_elem",
        "method_spec",
        "parameter_declaration",
        "variadic_parameter_declaration",
    }
)

# Node types Go models as *ast.BasicLit
BASIC_LITERAL_TYPES = frozenset(
    {
        "int_literal",
        "float_literal",
        "imaginary_literal",
        "rune_literal",
        "interpreted_string_literal",
        "raw_string_literal",
    }
)


def build_node(parsed: ParsedFile, node: Any) -> DeclarationNode:
    """Convert one tree-sitter node into its declaration node."""
    if node.type in FUNCTION_NODE_TYPES:
        return build_function(parsed, node)
    if node.type in GROUP_TOKENS:
        return build_group(parsed, node)
    if node.type in FIELD_NODE_TYPES:
        return build_field(parsed, node)
    return OtherNode(node_type=node.type)


def _field_text(parsed: ParsedFile, node: Any, name: str) -> str | None:
    child = node.child_by_field_name(name)
    if child is None:
        return None
    return node_source(parsed, child) or None


def build_function(parsed: ParsedFile, node: Any) -> FunctionDeclaration:
    return FunctionDeclaration(
        name=_field_text(parsed, node, "name") or "",
        params=_field_text(parsed, node, "parameters") or "()",
        receiver=_field_text(parsed, node, "receiver"),
        type_params=_field_text(parsed, node, "type_parameters"),
        results=_field_text(parsed, node, "result"),
        doc=leading_comments(parsed, node),
        body=_field_text(parsed, node, "body"),
    )


def group_spec_nodes(node: Any) -> tuple[list[Any], bool]:
    """Spec nodes of a declaration and whether they sit inside parentheses."""
    specs: list[Any] = []
    parenthesized = False
    for child in node.children:
        if child.type == "(":
            parenthesized = True
        elif child.type in SPEC_NODE_TYPES:
            specs.append(child)
        elif child.type.endswith("_spec_list"):
            parenthesized = True
            specs.extend(c for c in child.named_children if c.type in SPEC_NODE_TYPES)
    return specs, parenthesized


def name_nodes(node: Any) -> list[Any]:
    """Identifier children in the ``name`` field, skipping separating commas."""
    return [n for n in node.children_by_field_name("name") if n.is_named]


def spec_names(parsed: ParsedFile, spec: Any) -> tuple[str, ...]:
    return tuple(parsed.text(n) for n in name_nodes(spec))


def build_group(parsed: ParsedFile, node: Any) -> GroupDeclaration:
    spec_nodes, parenthesized = group_spec_nodes(node)
    specs = []
    for spec in spec_nodes:
        values: tuple[ValueExpr, ...] = ()
        value_list = spec.child_by_field_name("value")
        if value_list is not None and spec.type in ("var_spec", "const_spec"):
            values = tuple(
                ValueExpr(text=parsed.text(v), is_basic_literal=v.type in BASIC_LITERAL_TYPES)
                for v in value_list.named_children
                if v.type != "comment"
            )
        specs.append(
            Spec(
                names=spec_names(parsed, spec),
                source=node_source(parsed, spec),
                values=values,
                # Specs outside parentheses share the declaration's doc comment
                doc=leading_comments(parsed, spec) if parenthesized else None,
                comment=trailing_comments(parsed, spec),
            )
        )
    return GroupDeclaration(
        token=GROUP_TOKENS[node.type],
        specs=tuple(specs),
        doc=leading_comments(parsed, node),
        parenthesized=parenthesized,
    )


def build_field(parsed: ParsedFile, node: Any) -> FieldDeclaration:
    names = tuple(parsed.text(n) for n in name_nodes(node))
    if node.type in ("method_elem", "method_spec"):
        params = _field_text(parsed, node, "parameters") or "()"
        result = _field_text(parsed, node, "result")
        type_text: str | None = f"func{params}" + (f" {result}" if result else "")
    else:
        type_text = _field_text(parsed, node, "type")
    return FieldDeclaration(
        names=names,
        type_text=type_text,
        doc=leading_comments(parsed, node),
        comment=trailing_comments(parsed, node),
    )
