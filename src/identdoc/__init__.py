"""identdoc - documentation lookup for identifiers in Go programs."""

from identdoc.core.errors import (
    DocLookupError,
    IdentDocError,
    NoDocumentationError,
    NotFoundError,
)
from identdoc.doc import Doc, documentation_for, lookup, parse_position
from identdoc.semantic.models import IdentifierRef
from identdoc.semantic.program import Program, load_program

__version__ = "0.1.0"

__all__ = [
    "Doc",
    "DocLookupError",
    "IdentDocError",
    "IdentifierRef",
    "NoDocumentationError",
    "NotFoundError",
    "Program",
    "documentation_for",
    "load_program",
    "lookup",
    "parse_position",
]
