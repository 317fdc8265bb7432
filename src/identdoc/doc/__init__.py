"""Documentation lookup: resolve, render, extract."""

from identdoc.doc.extract import constant_literal, extract_doc
from identdoc.doc.models import Doc, SemanticModel
from identdoc.doc.ops import documentation_for, lookup, parse_position
from identdoc.doc.printer import DeclarationPrinter, PrintError
from identdoc.doc.render import render_title
from identdoc.doc.resolver import PackageRedirect, Resolution, resolve

__all__ = [
    "DeclarationPrinter",
    "Doc",
    "PackageRedirect",
    "PrintError",
    "Resolution",
    "SemanticModel",
    "constant_literal",
    "documentation_for",
    "extract_doc",
    "lookup",
    "parse_position",
    "render_title",
    "resolve",
]
