"""Loaded Go program: the semantic model behind documentation lookups.

A ``Program`` holds parsed files grouped into packages and answers the four
queries of ``identdoc.doc.models.SemanticModel``. It is immutable after
construction, so lookups from several threads need no locking.

Usage::

    program = load_program(Path("~/src/mymodule").expanduser())
    symbol = program.object_of(IdentifierRef("/abs/path/main.go", 120))
    chain = program.enclosing_ancestors(symbol.position)
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import structlog

from identdoc.config.models import LoaderConfig
from identdoc.core.errors import LoadError, NotFoundError
from identdoc.doc.models import Doc
from identdoc.semantic._internal.nodes import build_node
from identdoc.semantic._internal.parsing import (
    GoParser,
    ImportBinding,
    ParsedFile,
    leading_comments,
)
from identdoc.semantic._internal.scopes import IDENTIFIER_TYPES, Package, ScopeResolver
from identdoc.semantic.models import (
    AncestorChain,
    DeclarationNode,
    IdentifierRef,
    Position,
    Symbol,
)

log = structlog.get_logger(__name__)

_MODULE_LINE = re.compile(r'^\s*module\s+"?([^"\s]+)"?', re.MULTILINE)


class Program:
    """Parsed Go packages with name resolution."""

    def __init__(self, packages: list[Package], *, config: LoaderConfig | None = None) -> None:
        self._config = config or LoaderConfig()
        self._packages: dict[str, Package] = {}
        self._files: dict[str, tuple[Package, ParsedFile]] = {}
        for package in packages:
            self._packages[package.import_path] = package
            for parsed in package.files:
                self._files[parsed.path] = (package, parsed)
        for package in packages:
            package.index()
        self._rebind_imports()
        self._resolver = ScopeResolver(self.iter_packages, self.package)

    @classmethod
    def from_sources(
        cls,
        sources: Mapping[str, str | bytes],
        *,
        import_path: str = "main",
        config: LoaderConfig | None = None,
        parser: GoParser | None = None,
    ) -> Program:
        """Build a single-package program from in-memory sources.

        Args:
            sources: File name to Go source.
            import_path: Import path assigned to the package.
        """
        parser = parser or GoParser()
        files = []
        for name in sorted(sources):
            content = sources[name]
            if isinstance(content, str):
                content = content.encode("utf-8")
            files.append(parser.parse(name, content))
        name = next((f.package_name for f in files if f.package_name), "main")
        return cls([Package(import_path=import_path, name=name, files=files)], config=config)

    def _rebind_imports(self) -> None:
        # Imports without an alias bind the imported package's declared name.
        for package in self._packages.values():
            for parsed in package.files:
                rebound: dict[str, ImportBinding] = {}
                for binding in parsed.imports.values():
                    target = self._packages.get(binding.import_path)
                    if not binding.explicit and target is not None and target.name:
                        binding.local_name = target.name
                    rebound[binding.local_name] = binding
                parsed.imports = rebound

    # -------------------------------------------------------------------------
    # Package and file access
    # -------------------------------------------------------------------------

    def iter_packages(self) -> Iterator[Package]:
        return iter(self._packages.values())

    def package(self, import_path: str) -> Package | None:
        return self._packages.get(import_path)

    def file(self, filename: str) -> tuple[Package, ParsedFile]:
        """Package and parsed file for ``filename``.

        Raises:
            NotFoundError: The file is not part of the program.
        """
        entry = self._files.get(filename)
        if entry is None:
            entry = self._files.get(str(Path(filename).expanduser().resolve()))
        if entry is None:
            raise NotFoundError.no_file(filename)
        return entry

    def ref_at(self, filename: str, line: int, column: int) -> IdentifierRef:
        """Reference for a 1-based line and byte column."""
        _, parsed = self.file(filename)
        offset = 0
        for _ in range(line - 1):
            newline = parsed.source.find(b"\n", offset)
            if newline < 0:
                raise NotFoundError.no_identifier(filename, len(parsed.source))
            offset = newline + 1
        return IdentifierRef(filename=parsed.path, offset=offset + column - 1)

    # -------------------------------------------------------------------------
    # Semantic model
    # -------------------------------------------------------------------------

    def _identifier_at(self, parsed: ParsedFile, offset: int) -> Any:
        root = parsed.root_node
        for start, end in ((offset, offset + 1), (offset - 1, offset)):
            if start < 0 or end > len(parsed.source):
                continue
            node = root.named_descendant_for_byte_range(start, end)
            if node is not None and node.type in IDENTIFIER_TYPES:
                return node
        return None

    def object_of(self, ref: IdentifierRef) -> Symbol:
        package, parsed = self.file(ref.filename)
        ident = self._identifier_at(parsed, ref.offset)
        if ident is None:
            raise NotFoundError.no_identifier(ref.filename, ref.offset)
        symbol = self._resolver.resolve(package, parsed, ident)
        log.debug(
            "program.object_of",
            ref=str(ref),
            name=symbol.name,
            kind=symbol.kind.value,
            pos=str(symbol.position) if symbol.position else None,
        )
        return symbol

    def enclosing_ancestors(self, position: Position) -> AncestorChain:
        try:
            _, parsed = self.file(position.filename)
        except NotFoundError:
            return ()
        node = self._identifier_at(parsed, position.offset)
        if node is None:
            node = parsed.root_node.named_descendant_for_byte_range(position.offset, position.offset)
        chain: list[DeclarationNode] = []
        while node is not None and node.type != "source_file":
            chain.append(build_node(parsed, node))
            node = node.parent
        return tuple(chain)

    def package_path_of(self, symbol: Symbol) -> str | None:
        return symbol.package_path

    def package_doc(self, import_path: str) -> Doc:
        package = self._packages.get(import_path)
        if package is None:
            package = self._load_external(import_path)
        if package is None:
            raise NotFoundError.no_package(import_path)
        return package_doc(package)

    def _load_external(self, import_path: str) -> Package | None:
        if not self._config.goroot:
            return None
        directory = Path(self._config.goroot).expanduser() / "src" / import_path
        if not directory.is_dir():
            return None
        packages = _load_directory(GoParser(), directory, import_path, self._config)
        return packages[0] if packages else None


def package_doc(package: Package) -> Doc:
    """Package comment of ``package``, concatenated across files in name order."""
    text = ""
    for parsed in sorted(package.files, key=lambda f: f.path):
        if parsed.package_clause is None:
            continue
        group = leading_comments(parsed, parsed.package_clause)
        if group is None:
            continue
        comment = group.text()
        text = comment if not text else f"{text}\n{comment}"
    return Doc(import_path=package.import_path, name=package.name, doc_text=text)


# =============================================================================
# Loading
# =============================================================================


def read_module_path(root: Path) -> str | None:
    """Module path declared in ``root/go.mod``, if present.

    Raises:
        LoadError: go.mod exists but cannot be read.
    """
    go_mod = root / "go.mod"
    if not go_mod.exists():
        return None
    try:
        content = go_mod.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise LoadError.module_invalid(str(go_mod), str(err)) from err
    match = _MODULE_LINE.search(content)
    if match is None:
        raise LoadError.module_invalid(str(go_mod), "no module directive")
    return match.group(1)


def _wanted_file(path: Path, config: LoaderConfig) -> bool:
    if path.suffix != ".go" or path.name.startswith((".", "_")):
        return False
    if path.name.endswith("_test.go") and not config.include_tests:
        return False
    try:
        size = path.stat().st_size
    except OSError:
        return False
    if size > config.max_file_size_mb * 1024 * 1024:
        log.debug("program.file_skipped", path=str(path), size=size)
        return False
    return True


def _load_directory(
    parser: GoParser, directory: Path, import_path: str, config: LoaderConfig
) -> list[Package]:
    """Parse the Go files of one directory into packages.

    External test packages (``package foo_test``) load as a separate package
    with a ``_test`` suffixed import path.
    """
    by_name: dict[str, Package] = {}
    for path in sorted(directory.iterdir()):
        if not path.is_file() or not _wanted_file(path, config):
            continue
        parsed = parser.parse(str(path.resolve()))
        if not parsed.package_name:
            log.debug("program.no_package_clause", path=str(path))
            continue
        name = parsed.package_name
        pkg_path = f"{import_path}_test" if name.endswith("_test") else import_path
        package = by_name.get(name)
        if package is None:
            package = by_name[name] = Package(import_path=pkg_path, name=name)
        package.files.append(parsed)
    return sorted(by_name.values(), key=lambda p: p.import_path)


def load_program(
    root: Path,
    *,
    config: LoaderConfig | None = None,
    parser: GoParser | None = None,
) -> Program:
    """Load every Go package under ``root``.

    Import paths come from the ``module`` directive in ``root/go.mod``. Without
    one, the root directory name stands in for the module path.

    Args:
        root: Module root directory.
        config: Loader settings (tests, excluded directories, size limit).
        parser: Parser to reuse.

    Raises:
        LoadError: Unreadable go.mod or missing Go grammar.
    """
    config = config or LoaderConfig()
    parser = parser or GoParser()
    root = root.expanduser().resolve()
    module_path = read_module_path(root) or root.name
    excluded = set(config.exclude_dirs)

    packages: list[Package] = []
    for dirpath, dirnames, _ in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if d not in excluded and not d.startswith((".", "_"))
        )
        directory = Path(dirpath)
        rel = directory.relative_to(root).as_posix()
        import_path = module_path if rel == "." else f"{module_path}/{rel}"
        packages.extend(_load_directory(parser, directory, import_path, config))

    file_count = sum(len(p.files) for p in packages)
    log.info(
        "program.loaded",
        root=str(root),
        module=module_path,
        packages=len(packages),
        files=file_count,
    )
    return Program(packages, config=config)
