"""Documentation extraction from an ancestor chain.

Two passes over the chain, innermost first:

1. Title: the first function, group or field declaration is rendered.
2. Doc text: the first node whose kind rule yields text wins.

   - Function: its doc comment, possibly empty. The walk always stops here.
   - Group: its doc comment when present, plus ``Constant Value: <literal>``
     for ``const`` groups. The literal is the first basic literal of any spec
     in the group, not necessarily the one being documented. Undocumented
     groups let the walk continue outward.
   - Field: its leading doc comment, else its trailing line comment. A field
     with neither lets the walk continue.
"""

from __future__ import annotations

from typing import assert_never

import structlog

from identdoc.core.errors import NoDocumentationError
from identdoc.doc.models import Doc
from identdoc.doc.printer import DeclarationPrinter
from identdoc.doc.render import render_title
from identdoc.semantic.models import (
    AncestorChain,
    FieldDeclaration,
    FunctionDeclaration,
    GroupDeclaration,
    OtherNode,
    Symbol,
    comment_text,
)

log = structlog.get_logger(__name__)


def constant_literal(node: GroupDeclaration) -> str:
    """First non-empty basic literal across all specs of a ``const`` group."""
    if node.token != "const":
        return ""
    for spec in node.specs:
        for value in spec.values:
            if value.is_basic_literal and value.text:
                return value.text
    return ""


def _title(chain: AncestorChain, symbol: Symbol, printer: DeclarationPrinter) -> str | None:
    for node in chain:
        match node:
            case FunctionDeclaration() | GroupDeclaration() | FieldDeclaration():
                return render_title(node, symbol, printer)
            case OtherNode():
                continue
            case _:
                assert_never(node)
    return None


def _doc_text(chain: AncestorChain) -> str:
    for node in chain:
        match node:
            case FunctionDeclaration():
                return comment_text(node.doc)
            case GroupDeclaration():
                if node.doc is None:
                    continue
                text = node.doc.text()
                literal = constant_literal(node)
                if literal:
                    text += f"\nConstant Value: {literal}"
                return text
            case FieldDeclaration():
                if node.doc is not None:
                    return node.doc.text()
                if node.comment is not None:
                    return node.comment.text()
                continue
            case OtherNode():
                continue
            case _:
                assert_never(node)
    return ""


def extract_doc(
    chain: AncestorChain,
    symbol: Symbol,
    *,
    import_path: str,
    printer: DeclarationPrinter,
) -> Doc:
    """Build the documentation record for ``symbol``.

    Raises:
        NoDocumentationError: The chain holds no function, group or field.
    """
    title = _title(chain, symbol, printer)
    if title is None:
        raise NoDocumentationError.for_symbol(symbol.name)

    doc_text = _doc_text(chain)
    log.debug("doc.extracted", name=symbol.name, has_doc=bool(doc_text))
    return Doc(
        import_path=import_path,
        name=symbol.name,
        title=title,
        doc_text=doc_text,
        position=str(symbol.position) if symbol.position else "",
    )
