"""Documentation lookup operations."""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from identdoc.config.models import IdentDocConfig
from identdoc.core.errors import DocLookupError
from identdoc.core.logging import configure_logging, lookup_scope
from identdoc.doc.extract import extract_doc
from identdoc.doc.models import Doc, SemanticModel
from identdoc.doc.printer import DeclarationPrinter
from identdoc.doc.resolver import PackageRedirect, resolve
from identdoc.semantic.models import IdentifierRef

log = structlog.get_logger(__name__)

_POSITION = re.compile(r"^(?P<file>.+):#(?P<offset>\d+)$")


def parse_position(position: str) -> IdentifierRef:
    """Parse ``<file>:#<byte offset>`` into a reference.

    Raises:
        DocLookupError: The string is not in that form.
    """
    match = _POSITION.match(position.strip())
    if match is None:
        raise DocLookupError.invalid_position(position)
    return IdentifierRef(filename=match.group("file"), offset=int(match.group("offset")))


def documentation_for(
    ref: IdentifierRef,
    model: SemanticModel,
    *,
    printer: DeclarationPrinter | None = None,
) -> Doc:
    """Documentation for the identifier at ``ref``.

    Raises:
        NotFoundError: The identifier or its declaration cannot be located.
        NoDocumentationError: Nothing around the declaration is documentable.
    """
    resolution = resolve(ref, model)
    if isinstance(resolution, PackageRedirect):
        return model.package_doc(resolution.import_path)

    symbol = resolution.symbol
    return extract_doc(
        resolution.chain,
        symbol,
        import_path=model.package_path_of(symbol) or "",
        printer=printer or DeclarationPrinter(),
    )


def lookup(position: str, *, root: Path | None = None, config: IdentDocConfig | None = None) -> Doc:
    """Load the Go module at ``root`` and document the identifier at ``position``.

    Args:
        position: ``<file>:#<byte offset>``. Relative files resolve against ``root``.
        root: Module root. Defaults to the current working directory.
        config: Settings. Loaded from ``root`` when omitted.
    """
    from identdoc.config.loader import load_config
    from identdoc.semantic.program import load_program

    root = (root or Path.cwd()).expanduser().resolve()
    config = config or load_config(root)

    ref = parse_position(position)
    filename = Path(ref.filename).expanduser()
    if not filename.is_absolute():
        filename = root / filename
    ref = IdentifierRef(filename=str(filename.resolve()), offset=ref.offset)

    configure_logging(config.logging)
    with lookup_scope():
        log.info("doc.lookup", ref=str(ref), root=str(root))
        program = load_program(root, config=config.loader)
        doc = documentation_for(ref, program, printer=DeclarationPrinter(config.render))
        log.info("doc.found", name=doc.name, import_path=doc.import_path)
        return doc
