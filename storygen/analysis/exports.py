"""Classifies the exported bindings of a component source file."""

from __future__ import annotations

from typing import Dict, List, Optional

from tree_sitter import Node

from ..models import (
    KIND_CLASS,
    KIND_DEFAULT,
    KIND_FUNCTION,
    KIND_TYPE,
    KIND_VARIABLE,
    ExportBinding,
)
from .tree_sitter import (
    SourceUnit,
    is_class_declaration,
    is_function_declaration,
    is_variable_declaration,
    iter_declarators,
    node_text,
    unwrap_declaration,
)
from .utils import to_pascal_case

_TYPE_DECLARATIONS = {"interface_declaration", "type_alias_declaration", "enum_declaration"}
_ANONYMOUS_FUNCTIONS = {"function_expression", "function", "generator_function"}
_ANONYMOUS_CLASSES = {"class"}


class ExportClassifier:
    """Enumerates exports and keeps the function, variable and class ones."""

    def classify(self, unit: SourceUnit) -> List[ExportBinding]:
        """Return every export binding of `unit` in source order, types included."""
        bindings: Dict[str, ExportBinding] = {}
        for statement in unit.export_statements:
            for binding in self._bindings_for(unit, statement):
                # The default export is keyed apart so `export function Foo` plus
                # `export default Foo` keeps both bindings.
                key = "default" if binding.kind == KIND_DEFAULT else binding.name
                bindings.setdefault(key, binding)
        return list(bindings.values())

    def candidates(self, unit: SourceUnit) -> tuple[Optional[ExportBinding], List[ExportBinding]]:
        """Split candidate bindings into the default export and the named ones."""
        default: Optional[ExportBinding] = None
        named: List[ExportBinding] = []
        for binding in self.classify(unit):
            if not binding.is_candidate:
                continue
            if binding.kind == KIND_DEFAULT:
                default = binding
            else:
                named.append(binding)
        return default, named

    def _bindings_for(self, unit: SourceUnit, statement: Node) -> List[ExportBinding]:
        if _has_token(statement, "default"):
            binding = self._default_binding(unit, statement)
            return [binding] if binding else []

        declaration = statement.child_by_field_name("declaration")
        if declaration is not None:
            return _declaration_bindings(unit, declaration)

        clause = _first_child(statement, "export_clause")
        if clause is None or statement.child_by_field_name("source") is not None:
            # `export * from` and re-exports point at other modules.
            return []
        type_only = _has_token(statement, "type")
        return self._clause_bindings(unit, clause, type_only=type_only)

    def _default_binding(self, unit: SourceUnit, statement: Node) -> Optional[ExportBinding]:
        fallback = to_pascal_case(unit.base_name)
        declaration = statement.child_by_field_name("declaration")
        if declaration is not None:
            declaration = unwrap_declaration(declaration)
            if is_function_declaration(declaration) or is_class_declaration(declaration):
                name = node_text(declaration.child_by_field_name("name")) or fallback
                return ExportBinding(name=name, kind=KIND_DEFAULT, declaration=declaration)
            return None

        value = statement.child_by_field_name("value")
        if value is None:
            return None
        if value.type in _ANONYMOUS_FUNCTIONS or value.type in _ANONYMOUS_CLASSES:
            name = node_text(value.child_by_field_name("name")) or fallback
            return ExportBinding(name=name, kind=KIND_DEFAULT, declaration=value)
        if value.type == "identifier":
            local = node_text(value)
            target = unit.declaration_for(local)
            if target is not None:
                return ExportBinding(
                    name=local, kind=KIND_DEFAULT, declaration=target, local_name=local
                )
        return None

    def _clause_bindings(
        self, unit: SourceUnit, clause: Node, *, type_only: bool
    ) -> List[ExportBinding]:
        bindings: List[ExportBinding] = []
        for specifier in clause.named_children:
            if specifier.type != "export_specifier":
                continue
            local = node_text(specifier.child_by_field_name("name"))
            alias = node_text(specifier.child_by_field_name("alias")) or local
            if not local:
                continue
            if type_only or _has_token(specifier, "type"):
                bindings.append(ExportBinding(name=alias, kind=KIND_TYPE, local_name=local))
                continue
            target = unit.declaration_for(local)
            if target is None:
                if local in unit.interfaces or local in unit.type_aliases or local in unit.enums:
                    bindings.append(ExportBinding(name=alias, kind=KIND_TYPE, local_name=local))
                continue
            if alias == "default":
                bindings.append(
                    ExportBinding(name=local, kind=KIND_DEFAULT, declaration=target, local_name=local)
                )
                continue
            bindings.append(
                ExportBinding(name=alias, kind=_kind_of(target), declaration=target, local_name=local)
            )
        return bindings


def _declaration_bindings(unit: SourceUnit, declaration: Node) -> List[ExportBinding]:
    declaration = unwrap_declaration(declaration)
    if is_variable_declaration(declaration):
        bindings = []
        for declarator in iter_declarators(declaration):
            name = node_text(declarator.child_by_field_name("name"))
            if name:
                bindings.append(ExportBinding(name=name, kind=KIND_VARIABLE, declaration=declarator))
        return bindings

    name = node_text(declaration.child_by_field_name("name"))
    if not name:
        return []
    if is_function_declaration(declaration):
        # Overloads share a name; the index keeps the first declaration.
        return [ExportBinding(name=name, kind=KIND_FUNCTION, declaration=unit.functions.get(name, declaration))]
    if is_class_declaration(declaration):
        return [ExportBinding(name=name, kind=KIND_CLASS, declaration=declaration)]
    if declaration.type in _TYPE_DECLARATIONS:
        return [ExportBinding(name=name, kind=KIND_TYPE, declaration=declaration)]
    return []


def _kind_of(declaration: Node) -> str:
    if is_function_declaration(declaration):
        return KIND_FUNCTION
    if is_class_declaration(declaration):
        return KIND_CLASS
    return KIND_VARIABLE


def _has_token(node: Node, token: str) -> bool:
    return any(not child.is_named and child.type == token for child in node.children)


def _first_child(node: Node, node_type: str) -> Optional[Node]:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None


__all__ = ["ExportClassifier"]
