"""Source text printing for declaration headers.

Only functions and ``type``/``var``/``const`` declarations are printable.
Bodies and comments are never part of the output.
"""

from __future__ import annotations

from identdoc.config.models import RenderConfig
from identdoc.semantic.models import FunctionDeclaration, GroupDeclaration, Spec

_GROUP_TOKENS = frozenset({"type", "var", "const"})


class PrintError(Exception):
    """A declaration node cannot be printed."""


class DeclarationPrinter:
    """Formats declaration nodes as Go source text."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self._config = config or RenderConfig()

    def format(self, node: FunctionDeclaration | GroupDeclaration) -> str:
        if isinstance(node, FunctionDeclaration):
            text = self._format_function(node)
        else:
            text = self._format_group(node)
        return self._indent(text)

    def _format_function(self, node: FunctionDeclaration) -> str:
        if not node.name:
            raise PrintError("function declaration without a name")
        parts = ["func "]
        if node.receiver:
            parts.append(f"{node.receiver} ")
        parts.append(node.name)
        if node.type_params:
            parts.append(node.type_params)
        parts.append(node.params or "()")
        if node.results:
            parts.append(f" {node.results}")
        return "".join(parts)

    def _format_group(self, node: GroupDeclaration) -> str:
        if node.token not in _GROUP_TOKENS:
            raise PrintError(f"unknown declaration token {node.token!r}")
        for spec in node.specs:
            _check_spec(spec)
        if not node.specs:
            return f"{node.token} ()"
        if len(node.specs) == 1 and not node.parenthesized:
            return f"{node.token} {node.specs[0].source}"
        lines = [f"{node.token} ("]
        for spec in node.specs:
            lines.extend(f"\t{line}" if line else line for line in spec.source.split("\n"))
        lines.append(")")
        return "\n".join(lines)

    def _indent(self, text: str) -> str:
        if self._config.tab_indent:
            return text
        lines = []
        for line in text.split("\n"):
            stripped = line.lstrip("\t")
            depth = len(line) - len(stripped)
            lines.append(" " * (depth * self._config.tab_width) + stripped)
        return "\n".join(lines)


def _check_spec(spec: Spec) -> None:
    if not spec.source.strip():
        raise PrintError(f"empty spec source for {', '.join(spec.names) or '<anonymous>'}")
