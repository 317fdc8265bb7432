"""Tree-sitter parsing of Go sources.

Provides:
- Grammar loading (``tree_sitter_go``) with a typed error when missing
- ``ParsedFile``: tree, package clause, import table
- Comment attachment following the Go parser's doc/line comment rules
- Comment-free source slices for declaration printing
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter

from identdoc.core.errors import LoadError
from identdoc.semantic.models import CommentGroup, Position

GRAMMAR_MODULE = "tree_sitter_go"

# Statement terminators appear as anonymous children between specs/fields.
_TERMINATORS = frozenset({"\n", ";", "\0"})

_language: Any = None


def go_language() -> Any:
    """Load the Go grammar once per process."""
    global _language
    if _language is None:
        try:
            module = importlib.import_module(GRAMMAR_MODULE)
        except ImportError as err:
            raise LoadError.grammar_unavailable(GRAMMAR_MODULE) from err
        _language = tree_sitter.Language(module.language())
    return _language


@dataclass
class ParsedFile:
    """A parsed Go file."""

    path: str
    source: bytes
    tree: Any  # tree_sitter.Tree
    package_name: str
    package_clause: Any = None  # tree_sitter.Node
    imports: dict[str, ImportBinding] = field(default_factory=dict)
    error_count: int = 0

    @property
    def root_node(self) -> Any:
        return self.tree.root_node

    def text(self, node: Any) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def position(self, node: Any) -> Position:
        row, col = node.start_point
        return Position(filename=self.path, offset=node.start_byte, line=row + 1, column=col + 1)


@dataclass
class ImportBinding:
    """A package name bound by an import spec."""

    local_name: str
    import_path: str
    node: Any  # Node that names the binding (alias or path literal)
    explicit: bool = False  # Named with an alias


class GoParser:
    """Thin wrapper around a tree-sitter parser bound to the Go grammar.

    Usage::

        parser = GoParser()
        parsed = parser.parse(Path("pkg/foo.go"))
        parsed.package_name  # "foo"
    """

    def __init__(self) -> None:
        self._parser = tree_sitter.Parser(go_language())

    def parse(self, path: Path | str, content: bytes | None = None) -> ParsedFile:
        """Parse a Go file.

        Args:
            path: File path, recorded in positions.
            content: File content. If None, reads from path.

        Raises:
            LoadError: The file cannot be read.
        """
        if content is None:
            try:
                content = Path(path).read_bytes()
            except OSError as err:
                raise LoadError.file_not_found(str(path)) from err

        tree = self._parser.parse(content)
        parsed = ParsedFile(path=str(path), source=content, tree=tree, package_name="")

        error_count = 0

        def count_errors(node: Any) -> None:
            nonlocal error_count
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            for child in node.children:
                count_errors(child)

        count_errors(tree.root_node)
        parsed.error_count = error_count

        for child in tree.root_node.named_children:
            if child.type == "package_clause":
                parsed.package_clause = child
                for part in child.named_children:
                    if part.type == "package_identifier":
                        parsed.package_name = parsed.text(part)
            elif child.type == "import_declaration":
                for spec in _import_specs(child):
                    binding = _import_binding(parsed, spec)
                    if binding is not None:
                        parsed.imports[binding.local_name] = binding
        return parsed


def _import_specs(node: Any) -> list[Any]:
    specs: list[Any] = []
    for child in node.named_children:
        if child.type == "import_spec":
            specs.append(child)
        elif child.type == "import_spec_list":
            specs.extend(c for c in child.named_children if c.type == "import_spec")
    return specs


def _import_binding(parsed: ParsedFile, spec: Any) -> ImportBinding | None:
    path_node = spec.child_by_field_name("path")
    if path_node is None:
        return None
    import_path = parsed.text(path_node).strip('"`')
    name_node = spec.child_by_field_name("name")
    if name_node is not None:
        if name_node.type in ("dot", "blank_identifier"):
            return None
        return ImportBinding(parsed.text(name_node), import_path, name_node, explicit=True)
    return ImportBinding(default_package_name(import_path), import_path, path_node)


def default_package_name(import_path: str) -> str:
    """Guess the package name of an import path without loading it.

    A trailing major-version element (``/v2``) names the previous element,
    and ``gopkg.in`` style ``.vN`` suffixes are dropped.
    """
    parts = [p for p in import_path.split("/") if p]
    if not parts:
        return import_path
    name = parts[-1]
    if len(parts) > 1 and name.startswith("v") and name[1:].isdigit():
        name = parts[-2]
    if "." in name:
        name = name.split(".")[0]
    return name.replace("-", "_")


# =============================================================================
# Comments
# =============================================================================


def _prev_token(node: Any) -> Any:
    prev = node.prev_sibling
    while prev is not None and prev.type in _TERMINATORS:
        prev = prev.prev_sibling
    return prev


def leading_comments(parsed: ParsedFile, node: Any) -> CommentGroup | None:
    """Doc comment of ``node``: the comment group ending on the line above it.

    Comments that share a line with the preceding token are that token's
    line comment and never part of the group.
    """
    comments: list[Any] = []
    expected_row = node.start_point[0]
    prev = _prev_token(node)
    while prev is not None and prev.type == "comment":
        if prev.end_point[0] + 1 != expected_row:
            break
        comments.append(prev)
        expected_row = prev.start_point[0]
        prev = _prev_token(prev)

    if prev is not None and prev.type != "comment":
        while comments and comments[-1].start_point[0] == prev.end_point[0]:
            comments.pop()
    if not comments:
        return None
    comments.reverse()
    return CommentGroup(tuple(parsed.text(c) for c in comments))


def trailing_comments(parsed: ParsedFile, node: Any) -> CommentGroup | None:
    """Line comment of ``node``: comments after it on its last line."""
    row = node.end_point[0]
    comments: list[Any] = []
    for child in reversed(node.children):
        if child.type != "comment" or child.start_point[0] != row:
            break
        comments.insert(0, child)
    nxt = node.next_sibling
    while nxt is not None:
        if nxt.type == "comment" and nxt.start_point[0] == row:
            comments.append(nxt)
        elif nxt.type not in _TERMINATORS:
            break
        nxt = nxt.next_sibling
    if not comments:
        return None
    return CommentGroup(tuple(parsed.text(c) for c in comments))


def _descendant_comments(node: Any) -> list[Any]:
    found: list[Any] = []

    def walk(n: Any) -> None:
        for child in n.children:
            if child.type == "comment":
                found.append(child)
            else:
                walk(child)

    walk(node)
    return found


def node_source(parsed: ParsedFile, node: Any | None) -> str:
    """Source text of ``node`` with comments removed and continuation lines dedented.

    Whole-line comments disappear together with their line. Continuation
    lines lose the indentation of the line the node starts on, so a spec
    lifted out of a parenthesized group prints flush left.
    """
    if node is None:
        return ""
    source = parsed.source
    start, end = node.start_byte, node.end_byte

    pieces: list[bytes] = []
    cursor = start
    for comment in _descendant_comments(node):
        cstart, cend = comment.start_byte, comment.end_byte
        line_start = source.rfind(b"\n", 0, cstart) + 1
        whole_line = not source[line_start:cstart].strip() and source[cend : cend + 1] == b"\n"
        if whole_line and line_start >= cursor:
            cstart, cend = line_start, cend + 1
        pieces.append(source[cursor:cstart])
        cursor = cend
    pieces.append(source[cursor:end])
    text = b"".join(pieces).decode("utf-8", errors="replace")

    line_start = source.rfind(b"\n", 0, start) + 1
    lead = source[line_start:start]
    indent = lead.decode("utf-8", errors="replace") if not lead.strip() else ""

    lines = [line.rstrip() for line in text.split("\n")]
    if indent:
        lines = [lines[0]] + [line[len(indent) :] if line.startswith(indent) else line for line in lines[1:]]
    return "\n".join(lines).strip()
