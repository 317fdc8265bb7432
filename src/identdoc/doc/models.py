"""Documentation record and the semantic model contract it is built from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from identdoc.semantic.models import AncestorChain, IdentifierRef, Position, Symbol


@dataclass(frozen=True, slots=True)
class Doc:
    """Documentation for one identifier."""

    import_path: str
    name: str
    title: str = ""  # Rendered declaration, empty for package docs
    doc_text: str = ""
    position: str = ""  # Definition position, "file:line:col"

    def to_dict(self) -> dict[str, Any]:
        return {
            "import": self.import_path,
            "name": self.name,
            "title": self.title,
            "doc": self.doc_text,
            "pos": self.position,
        }

    def __str__(self) -> str:
        parts = []
        if self.import_path:
            parts.append(f'import "{self.import_path}"\n\n')
        parts.append(f"{self.title}\n\n")
        parts.append(self.doc_text or "Undocumented.")
        return "".join(parts)


class SemanticModel(Protocol):
    """Read-only view of a loaded program consumed by the lookup pipeline."""

    def object_of(self, ref: IdentifierRef) -> Symbol:
        """Symbol the identifier at ``ref`` denotes.

        Raises:
            NotFoundError: No identifier at ``ref`` or no visible declaration.
        """
        ...

    def enclosing_ancestors(self, position: Position) -> AncestorChain:
        """Syntactic ancestors at ``position``, innermost first."""
        ...

    def package_path_of(self, symbol: Symbol) -> str | None:
        """Import path of the package owning ``symbol``, None for builtins."""
        ...

    def package_doc(self, import_path: str) -> Doc:
        """Package-level documentation.

        Raises:
            NotFoundError: The package cannot be found.
        """
        ...
