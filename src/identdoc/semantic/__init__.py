"""Semantic model types. The Go program loader is ``identdoc.semantic.program``."""

from identdoc.semantic.models import (
    AncestorChain,
    CommentGroup,
    DeclarationNode,
    FieldDeclaration,
    FunctionDeclaration,
    GroupDeclaration,
    IdentifierRef,
    NodeKind,
    OtherNode,
    Position,
    Spec,
    Symbol,
    SymbolKind,
    ValueExpr,
)

__all__ = [
    "AncestorChain",
    "CommentGroup",
    "DeclarationNode",
    "FieldDeclaration",
    "FunctionDeclaration",
    "GroupDeclaration",
    "IdentifierRef",
    "NodeKind",
    "OtherNode",
    "Position",
    "Spec",
    "Symbol",
    "SymbolKind",
    "ValueExpr",
]
