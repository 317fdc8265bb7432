"""Syntactic name resolution for Go identifiers.

Resolution is scope based and does not type check:

1. Identifiers at a definition site resolve to themselves.
2. ``pkg.Name`` selectors whose operand is an import resolve in that
   package's scope. Other selectors and composite literal keys resolve
   through a by-name index of struct fields and methods, the current
   package first.
3. Plain identifiers resolve through enclosing blocks and signatures, then
   the package scope, the file's imports and finally the universe.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from identdoc.core.errors import NotFoundError
from identdoc.semantic._internal.nodes import group_spec_nodes, name_nodes
from identdoc.semantic._internal.parsing import ParsedFile, node_source
from identdoc.semantic.models import Symbol, SymbolKind

IDENTIFIER_TYPES = frozenset(
    {"identifier", "type_identifier", "field_identifier", "package_identifier"}
)

UNIVERSE = frozenset(
    {
        # Types
        "any", "bool", "byte", "comparable", "complex64", "complex128", "error",
        "float32", "float64", "int", "int8", "int16", "int32", "int64", "rune",
        "string", "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
        # Constants and zero value
        "true", "false", "iota", "nil",
        # Functions
        "append", "cap", "clear", "close", "complex", "copy", "delete", "imag",
        "len", "make", "max", "min", "new", "panic", "print", "println", "real",
        "recover",
    }
)

_FUNCTION_SCOPES = frozenset({"function_declaration", "method_declaration", "func_literal"})
_STATEMENT_SCOPES = frozenset({"block", "statement_list"})
_DECLARATION_STATEMENTS = frozenset({"var_declaration", "const_declaration", "type_declaration"})
_PARAMETER_TYPES = frozenset(
    {"parameter_declaration", "variadic_parameter_declaration", "type_parameter_declaration"}
)
_CASE_SCOPES = frozenset({"communication_case", "expression_case", "type_case", "default_case"})

Definition = tuple[ParsedFile, Any]  # (file, defining identifier node)


@dataclass
class Package:
    """A loaded Go package and its name indexes."""

    import_path: str
    name: str
    files: list[ParsedFile] = field(default_factory=list)
    scope: dict[str, Definition] = field(default_factory=dict)
    members: dict[str, list[Definition]] = field(default_factory=dict)

    def index(self) -> None:
        """Build the package scope and member index from the file trees."""
        self.scope.clear()
        self.members.clear()
        for parsed in self.files:
            for decl in parsed.root_node.named_children:
                if decl.type == "function_declaration":
                    name = decl.child_by_field_name("name")
                    if name is not None and parsed.text(name) != "init":
                        self.scope.setdefault(parsed.text(name), (parsed, name))
                    self._index_local_types(parsed, decl)
                elif decl.type == "method_declaration":
                    name = decl.child_by_field_name("name")
                    if name is not None:
                        self._add_member(parsed, name)
                    self._index_local_types(parsed, decl)
                elif decl.type in _DECLARATION_STATEMENTS:
                    specs, _ = group_spec_nodes(decl)
                    for spec in specs:
                        for name in name_nodes(spec):
                            if parsed.text(name) != "_":
                                self.scope.setdefault(parsed.text(name), (parsed, name))
                        type_node = spec.child_by_field_name("type")
                        if decl.type == "type_declaration" and type_node is not None:
                            self._index_members(parsed, type_node)
                    if decl.type == "var_declaration":
                        self._index_local_types(parsed, decl)

    def _index_members(self, parsed: ParsedFile, node: Any) -> None:
        for child in node.named_children:
            if child.type in ("field_declaration", "method_elem", "method_spec"):
                for name in name_nodes(child):
                    self._add_member(parsed, name)
            self._index_members(parsed, child)

    def _index_local_types(self, parsed: ParsedFile, node: Any) -> None:
        """Index members of types declared inside function bodies."""
        for child in node.named_children:
            if child.type == "type_declaration":
                specs, _ = group_spec_nodes(child)
                for spec in specs:
                    type_node = spec.child_by_field_name("type")
                    if type_node is not None:
                        self._index_members(parsed, type_node)
            self._index_local_types(parsed, child)

    def _add_member(self, parsed: ParsedFile, name: Any) -> None:
        self.members.setdefault(parsed.text(name), []).append((parsed, name))


def _is_field(parent: Any, name: str, node: Any) -> bool:
    return any(child == node for child in parent.children_by_field_name(name))


def _ancestor(node: Any, types: frozenset[str] | set[str]) -> Any:
    current = node.parent
    while current is not None and current.type not in types:
        current = current.parent
    return current


def _signature(parsed: ParsedFile, node: Any) -> str:
    params = node_source(parsed, node.child_by_field_name("parameters")) or "()"
    result = node_source(parsed, node.child_by_field_name("result"))
    return f"{params} {result}" if result else params


def _receiver_type(parsed: ParsedFile, method: Any) -> str | None:
    receiver = method.child_by_field_name("receiver")
    if receiver is None:
        return None
    for param in receiver.named_children:
        if param.type == "parameter_declaration":
            return node_source(parsed, param.child_by_field_name("type")) or None
    return None


def _short_var_owner(ident: Any) -> Any:
    """Statement or clause declaring ``ident`` on the left of ``:=``, if any."""
    parent = ident.parent
    if parent is None or parent.type != "expression_list":
        return None
    owner = parent.parent
    if owner is None:
        return None
    if owner.type == "short_var_declaration" and _is_field(owner, "left", parent):
        return owner
    if owner.type in ("range_clause", "receive_statement") and _is_field(owner, "left", parent):
        if any(c.type == ":=" for c in owner.children):
            return owner
    if owner.type == "type_switch_statement" and _is_field(owner, "alias", parent):
        return owner
    return None


def definition_symbol(package: Package, parsed: ParsedFile, ident: Any) -> Symbol | None:
    """Symbol defined by ``ident``, or None when it is not a definition site."""
    parent = ident.parent
    if parent is None:
        return None
    name = parsed.text(ident)
    common = {
        "name": name,
        "package_path": package.import_path,
        "position": parsed.position(ident),
    }
    ptype = parent.type

    if _short_var_owner(ident) is not None:
        return Symbol(kind=SymbolKind.VAR, **common)

    if ptype == "import_spec" and _is_field(parent, "name", ident):
        path_node = parent.child_by_field_name("path")
        imported = parsed.text(path_node).strip('"`') if path_node is not None else ""
        return Symbol(kind=SymbolKind.PACKAGE, imported_path=imported, **common)

    if not _is_field(parent, "name", ident):
        return None

    if ptype == "function_declaration":
        return Symbol(
            kind=SymbolKind.FUNC,
            type_text=_signature(parsed, parent),
            package_level=True,
            **common,
        )
    if ptype == "method_declaration":
        return Symbol(
            kind=SymbolKind.FUNC,
            type_text=_signature(parsed, parent),
            receiver=_receiver_type(parsed, parent),
            **common,
        )
    if ptype in ("method_elem", "method_spec"):
        owner = _ancestor(parent, {"type_spec"})
        receiver = None
        if owner is not None and owner.child_by_field_name("name") is not None:
            receiver = parsed.text(owner.child_by_field_name("name"))
        return Symbol(
            kind=SymbolKind.FUNC,
            type_text=_signature(parsed, parent),
            receiver=receiver,
            **common,
        )
    if ptype in ("type_spec", "type_alias", "const_spec", "var_spec"):
        kind = {
            "type_spec": SymbolKind.TYPE,
            "type_alias": SymbolKind.TYPE,
            "const_spec": SymbolKind.CONST,
            "var_spec": SymbolKind.VAR,
        }[ptype]
        decl = _ancestor(parent, {"type_declaration", "var_declaration", "const_declaration"})
        type_text = node_source(parsed, parent.child_by_field_name("type")) or None
        return Symbol(
            kind=kind,
            type_text=type_text,
            package_level=decl is not None and decl.parent is not None and decl.parent.type == "source_file",
            **common,
        )
    if ptype == "field_declaration":
        return Symbol(
            kind=SymbolKind.FIELD,
            type_text=node_source(parsed, parent.child_by_field_name("type")) or None,
            **common,
        )
    if ptype in _PARAMETER_TYPES:
        type_text = node_source(parsed, parent.child_by_field_name("type")) or None
        if ptype == "variadic_parameter_declaration" and type_text:
            type_text = f"...{type_text}"
        kind = SymbolKind.TYPE if ptype == "type_parameter_declaration" else SymbolKind.VAR
        return Symbol(kind=kind, type_text=type_text, **common)
    return None


class ScopeResolver:
    """Resolves identifier nodes to symbols across the loaded packages."""

    def __init__(
        self,
        packages: Callable[[], Iterator[Package]],
        package_for: Callable[[str], Package | None],
    ) -> None:
        self._packages = packages
        self._package_for = package_for

    def resolve(self, package: Package, parsed: ParsedFile, ident: Any) -> Symbol:
        """Resolve an identifier node.

        Raises:
            NotFoundError: The name has no visible declaration.
        """
        symbol = definition_symbol(package, parsed, ident)
        if symbol is not None:
            return symbol

        name = parsed.text(ident)
        parent = ident.parent

        if parent.type == "selector_expression" and _is_field(parent, "field", ident):
            return self._resolve_selector(package, parsed, parent.child_by_field_name("operand"), name)
        if parent.type == "qualified_type" and _is_field(parent, "name", ident):
            return self._resolve_selector(package, parsed, parent.child_by_field_name("package"), name)
        if self._is_literal_key(ident):
            member = self._resolve_member(package, name)
            if member is not None:
                return member

        return self.lookup(package, parsed, ident, name)

    def lookup(self, package: Package, parsed: ParsedFile, ident: Any, name: str) -> Symbol:
        """Resolve ``name`` as seen from ``ident`` through the scope chain."""
        found = self._lookup_local(parsed, ident, name)
        if found is not None:
            symbol = definition_symbol(package, parsed, found)
            if symbol is not None:
                return symbol

        if name in package.scope:
            def_file, def_node = package.scope[name]
            symbol = definition_symbol(package, def_file, def_node)
            if symbol is not None:
                return symbol

        binding = parsed.imports.get(name)
        if binding is not None:
            return Symbol(
                name=name,
                kind=SymbolKind.PACKAGE,
                package_path=package.import_path,
                position=parsed.position(binding.node),
                imported_path=binding.import_path,
            )

        if name in UNIVERSE:
            return Symbol(name=name, kind=SymbolKind.BUILTIN)

        raise NotFoundError.unresolved(name)

    def _resolve_selector(self, package: Package, parsed: ParsedFile, operand: Any, name: str) -> Symbol:
        if operand is not None and operand.type in ("identifier", "package_identifier"):
            try:
                base = self.lookup(package, parsed, operand, parsed.text(operand))
            except NotFoundError:
                base = None
            if base is not None and base.is_package_alias:
                imported = base.imported_path or ""
                target = self._package_for(imported)
                if target is None:
                    raise NotFoundError.no_package(imported)
                if name not in target.scope:
                    raise NotFoundError.unresolved(f"{imported}.{name}")
                def_file, def_node = target.scope[name]
                symbol = definition_symbol(target, def_file, def_node)
                if symbol is None:
                    raise NotFoundError.unresolved(f"{imported}.{name}")
                return symbol

        member = self._resolve_member(package, name)
        if member is None:
            raise NotFoundError.unresolved(name)
        return member

    def _resolve_member(self, package: Package, name: str) -> Symbol | None:
        candidates = [package] + [p for p in self._packages() if p is not package]
        for candidate in candidates:
            for def_file, def_node in candidate.members.get(name, []):
                symbol = definition_symbol(candidate, def_file, def_node)
                if symbol is not None:
                    return symbol
        return None

    @staticmethod
    def _is_literal_key(ident: Any) -> bool:
        parent = ident.parent
        if parent.type == "keyed_element":
            return parent.named_children[0] == ident
        if parent.type == "literal_element" and parent.parent is not None:
            keyed = parent.parent
            return keyed.type == "keyed_element" and keyed.named_children[0] == parent
        return False

    def _lookup_local(self, parsed: ParsedFile, ident: Any, name: str) -> Any:
        """Innermost local declaration of ``name`` visible at ``ident``."""
        ref_byte = ident.start_byte
        child = ident
        scope = ident.parent
        while scope is not None and scope.type != "source_file":
            found = self._search_scope(parsed, scope, child, name, ref_byte)
            if found is not None:
                return found
            child = scope
            scope = scope.parent
        return None

    def _search_scope(self, parsed: ParsedFile, scope: Any, child: Any, name: str, ref_byte: int) -> Any:
        if scope.type in _STATEMENT_SCOPES:
            for stmt in reversed(scope.named_children):
                if stmt.end_byte > ref_byte:
                    continue
                found = self._declared_in_statement(parsed, stmt, name)
                if found is not None:
                    return found
            return None

        if scope.type in _FUNCTION_SCOPES:
            for field_name in ("receiver", "type_parameters", "parameters", "result"):
                params = scope.child_by_field_name(field_name)
                if params is None:
                    continue
                for param in params.named_children:
                    if param.type not in _PARAMETER_TYPES:
                        continue
                    for param_name in name_nodes(param):
                        if parsed.text(param_name) == name:
                            return param_name
            return None

        if scope.type in ("if_statement", "expression_switch_statement", "type_switch_statement"):
            init = scope.child_by_field_name("initializer")
            if init is not None and init != child:
                found = self._declared_in_statement(parsed, init, name)
                if found is not None:
                    return found
            if scope.type == "type_switch_statement":
                alias = scope.child_by_field_name("alias")
                if alias is not None and alias != child:
                    for ident in alias.named_children:
                        if parsed.text(ident) == name:
                            return ident
            return None

        if scope.type == "for_statement":
            for clause in scope.named_children:
                if clause == child:
                    continue
                if clause.type == "for_clause":
                    init = clause.child_by_field_name("initializer")
                    if init is not None:
                        found = self._declared_in_statement(parsed, init, name)
                        if found is not None:
                            return found
                elif clause.type == "range_clause":
                    left = clause.child_by_field_name("left")
                    if left is not None and any(c.type == ":=" for c in clause.children):
                        for ident in left.named_children:
                            if parsed.text(ident) == name:
                                return ident
            return None

        if scope.type in _CASE_SCOPES:
            comm = scope.child_by_field_name("communication")
            if comm is not None and comm != child and comm.type == "receive_statement":
                left = comm.child_by_field_name("left")
                if left is not None and any(c.type == ":=" for c in comm.children):
                    for ident in left.named_children:
                        if parsed.text(ident) == name:
                            return ident
            # Statements may sit directly under the clause
            for stmt in reversed(scope.named_children):
                if stmt == comm or stmt.end_byte > ref_byte:
                    continue
                found = self._declared_in_statement(parsed, stmt, name)
                if found is not None:
                    return found
            return None

        return None

    def _declared_in_statement(self, parsed: ParsedFile, stmt: Any, name: str) -> Any:
        if stmt.type == "short_var_declaration":
            left = stmt.child_by_field_name("left")
            if left is not None:
                for ident in left.named_children:
                    if parsed.text(ident) == name:
                        return ident
        elif stmt.type in _DECLARATION_STATEMENTS:
            specs, _ = group_spec_nodes(stmt)
            for spec in specs:
                for spec_name in name_nodes(spec):
                    if parsed.text(spec_name) == name:
                        return spec_name
        return None
