"""Declaration rendering for documentation titles.

``render_title`` never fails: anything the printer cannot handle renders
as the symbol's default text.
"""

from __future__ import annotations

from dataclasses import replace
from typing import assert_never

import structlog

from identdoc.doc.printer import DeclarationPrinter, PrintError
from identdoc.semantic.models import (
    DeclarationNode,
    FieldDeclaration,
    FunctionDeclaration,
    GroupDeclaration,
    OtherNode,
    Symbol,
)

log = structlog.get_logger(__name__)


def title_node(
    node: FunctionDeclaration | GroupDeclaration, target: str
) -> FunctionDeclaration | GroupDeclaration:
    """Copy of ``node`` reduced to what the title shows.

    Functions lose their doc comment and body. Groups lose their doc comment
    and every spec except the one naming ``target``, which loses its own doc
    comment; the parentheses go with the dropped siblings.

    Raises:
        PrintError: ``target`` is not declared by the group.
    """
    if isinstance(node, FunctionDeclaration):
        return replace(node, doc=None, body=None)
    if not node.specs:
        return replace(node, doc=None)
    spec = node.find_spec(target)
    if spec is None:
        raise PrintError(f"{target} is not declared in this {node.token} declaration")
    return replace(node, doc=None, specs=(replace(spec, doc=None),), parenthesized=False)


def render_title(node: DeclarationNode, symbol: Symbol, printer: DeclarationPrinter) -> str:
    """Render the signature of ``symbol`` as declared by ``node``."""
    match node:
        case FunctionDeclaration() | GroupDeclaration():
            try:
                return printer.format(title_node(node, symbol.name))
            except PrintError as err:
                log.debug("doc.render_fallback", name=symbol.name, kind=node.kind.value, reason=str(err))
                return symbol.default_text()
        case FieldDeclaration():
            # The printer has no field-only form; default text qualifies names
            # with full import paths where printed declarations do not.
            return symbol.default_text()
        case OtherNode():
            return symbol.default_text()
        case _:
            assert_never(node)
