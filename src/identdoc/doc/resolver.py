"""Identifier resolution: symbol plus the ancestor chain at its definition."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from identdoc.core.errors import NotFoundError
from identdoc.doc.models import SemanticModel
from identdoc.semantic.models import AncestorChain, IdentifierRef, Symbol

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Resolution:
    symbol: Symbol
    chain: AncestorChain


@dataclass(frozen=True, slots=True)
class PackageRedirect:
    """A package alias: documentation comes from the imported package."""

    import_path: str


def resolve(ref: IdentifierRef, model: SemanticModel) -> Resolution | PackageRedirect:
    """Find the symbol ``ref`` denotes and the declarations enclosing it.

    The chain is taken at the symbol's definition, not at ``ref``.

    Raises:
        NotFoundError: Nothing encloses the definition (builtins included).
    """
    symbol = model.object_of(ref)

    if symbol.is_package_alias:
        log.debug("doc.package_redirect", name=symbol.name, import_path=symbol.imported_path)
        return PackageRedirect(import_path=symbol.imported_path or "")

    if symbol.position is None:
        raise NotFoundError.no_declaration(symbol.name)
    chain = model.enclosing_ancestors(symbol.position)
    if not chain:
        raise NotFoundError.no_declaration(symbol.name)
    return Resolution(symbol=symbol, chain=chain)
