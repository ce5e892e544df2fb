"""Type classification for prop declarations.

Prop resolution and value synthesis only ask a handful of questions about a
type: is it a primitive, an enum or union (and what is its first member), or
an intersection whose branches must be flattened. ``TypeClassifier`` names
those questions; ``SyntaxTypeClassifier`` answers them from the tree-sitter
syntax of a single file by following local type aliases, interfaces and
enums. Types declared elsewhere are opaque and classify as ``other``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Set

from tree_sitter import Node

from ..models import (
    LITERAL_NUMBER,
    LITERAL_OTHER,
    LITERAL_STRING,
    TYPE_BOOLEAN,
    TYPE_ENUM_OR_UNION,
    TYPE_NUMBER,
    TYPE_OTHER,
    TYPE_STRING,
    LiteralMember,
)
from .tree_sitter import SourceUnit, node_text, type_arguments
from .utils import normalise_number_literal, quote_string_literal, string_literal_value

_NULLISH = {"null", "undefined"}
_OBJECT_BODIES = {"object_type", "interface_body"}
_PASS_THROUGH_UTILITIES = {"PropsWithChildren", "PropsWithRef", "PropsWithoutRef", "Readonly"}


@dataclass(frozen=True)
class PropertyRecord:
    """A property signature found while walking a type."""

    name: str
    optional: bool
    type_node: Optional[Node]
    source_path: Path


class TypeClassifier(ABC):
    """Questions the prop resolver and value synthesizer ask about a type."""

    @abstractmethod
    def is_primitive_string(self, type_node: Optional[Node]) -> bool:
        """Return True for `string`."""

    @abstractmethod
    def is_primitive_number(self, type_node: Optional[Node]) -> bool:
        """Return True for `number`."""

    @abstractmethod
    def is_primitive_boolean(self, type_node: Optional[Node]) -> bool:
        """Return True for `boolean`."""

    @abstractmethod
    def is_enum_or_union(self, type_node: Optional[Node]) -> bool:
        """Return True for enums and unions of two or more members."""

    @abstractmethod
    def is_intersection(self, type_node: Optional[Node]) -> bool:
        """Return True for `A & B`."""

    @abstractmethod
    def first_union_member(self, type_node: Optional[Node]) -> Optional[LiteralMember]:
        """Return the first member of an enum or union in declaration order."""

    @abstractmethod
    def intersection_members(self, type_node: Optional[Node]) -> List[Node]:
        """Return the flattened branches of an intersection."""

    @abstractmethod
    def properties(self, type_node: Optional[Node]) -> List[PropertyRecord]:
        """Return the property signatures of an object-like type, inherited ones included."""

    @abstractmethod
    def own_properties(self, declaration: Node) -> List[PropertyRecord]:
        """Return the properties an interface or type alias declares itself."""

    def classify(self, type_node: Optional[Node]) -> str:
        if type_node is None:
            return TYPE_OTHER
        if self.is_primitive_string(type_node):
            return TYPE_STRING
        if self.is_primitive_number(type_node):
            return TYPE_NUMBER
        if self.is_primitive_boolean(type_node):
            return TYPE_BOOLEAN
        if self.is_enum_or_union(type_node):
            return TYPE_ENUM_OR_UNION
        return TYPE_OTHER


class SyntaxTypeClassifier(TypeClassifier):
    """Classifies type syntax, resolving references against one source unit.

    Null and undefined members are dropped from unions, matching the
    checker's behaviour without strict null checks.
    """

    def __init__(self, unit: SourceUnit) -> None:
        self.unit = unit

    # predicates

    def is_primitive_string(self, type_node: Optional[Node]) -> bool:
        return _is_predefined(self.resolve(type_node), "string")

    def is_primitive_number(self, type_node: Optional[Node]) -> bool:
        return _is_predefined(self.resolve(type_node), "number")

    def is_primitive_boolean(self, type_node: Optional[Node]) -> bool:
        resolved = self.resolve(type_node)
        if _is_predefined(resolved, "boolean"):
            return True
        if resolved is not None and resolved.type == "union_type":
            texts = {node_text(member).strip() for member in self._union_members(resolved, set())}
            return texts == {"true", "false"}
        return False

    def is_enum_or_union(self, type_node: Optional[Node]) -> bool:
        resolved = self.resolve(type_node)
        if resolved is None:
            return False
        return resolved.type in {"union_type", "enum_declaration"}

    def is_intersection(self, type_node: Optional[Node]) -> bool:
        resolved = self.resolve(type_node)
        return resolved is not None and resolved.type == "intersection_type"

    def first_union_member(self, type_node: Optional[Node]) -> Optional[LiteralMember]:
        resolved = self.resolve(type_node)
        if resolved is None:
            return None
        if resolved.type == "enum_declaration":
            members = _enum_members(resolved)
            return members[0] if members else None
        if resolved.type != "union_type":
            return None
        members = self._union_members(resolved, set())
        if not members:
            return None
        first = members[0]
        if first.type == "enum_declaration":
            enum_members = _enum_members(first)
            return enum_members[0] if enum_members else None
        return _literal_member(first)

    def intersection_members(self, type_node: Optional[Node]) -> List[Node]:
        return self._intersection_members(type_node, set())

    def _intersection_members(self, type_node: Optional[Node], seen: Set[str]) -> List[Node]:
        node = _unwrap(type_node)
        if node is not None and node.type in {"type_identifier", "generic_type"}:
            name = _reference_name(node, qualified=True)
            if name:
                if name in seen:
                    return []
                seen = seen | {name}
        resolved = self._resolve(node, set())
        if resolved is None or resolved.type != "intersection_type":
            return []
        branches: List[Node] = []
        for child in resolved.named_children:
            if self.is_intersection(child):
                branches.extend(self._intersection_members(child, seen))
            else:
                branches.append(child)
        return branches

    # properties

    def properties(self, type_node: Optional[Node]) -> List[PropertyRecord]:
        return self._properties(type_node, set())

    def own_properties(self, declaration: Node) -> List[PropertyRecord]:
        if declaration.type == "interface_declaration":
            return self._members(declaration.child_by_field_name("body"))
        if declaration.type == "type_alias_declaration":
            return self.properties(declaration.child_by_field_name("value"))
        return []

    def _properties(self, type_node: Optional[Node], seen: Set[str]) -> List[PropertyRecord]:
        node = _unwrap(type_node)
        if node is None:
            return []
        if node.type in {"type_identifier", "generic_type"}:
            name = _reference_name(node, qualified=True)
            if name and (name in self.unit.type_aliases or name in self.unit.interfaces):
                # Self-referencing aliases and interfaces contribute nothing on re-entry.
                if name in seen:
                    return []
                seen = seen | {name}

        utility = self._utility_properties(node, seen)
        if utility is not None:
            return utility

        resolved = self._resolve(node, set())
        if resolved is None:
            return []
        if resolved.type == "intersection_type":
            records: List[PropertyRecord] = []
            for branch in resolved.named_children:
                records.extend(self._properties(branch, seen))
            return records
        if resolved.type in _OBJECT_BODIES:
            return self._members(resolved)
        if resolved.type == "interface_declaration":
            records = self._members(resolved.child_by_field_name("body"))
            for base in _heritage_types(resolved):
                records.extend(self._properties(base, seen))
            return records
        return []

    def _utility_properties(self, node: Node, seen: Set[str]) -> Optional[List[PropertyRecord]]:
        """Expand well-known React and TypeScript utility wrappers around local props."""
        if node.type != "generic_type":
            return None
        name = _reference_name(node, qualified=False)
        if not name or name in self.unit.type_aliases or name in self.unit.interfaces:
            return None
        arguments = type_arguments(node)
        if not arguments:
            return None

        if name in _PASS_THROUGH_UTILITIES:
            return self._properties(arguments[0], seen)
        if name in {"Partial", "Required"}:
            optional = name == "Partial"
            return [replace(record, optional=optional) for record in self._properties(arguments[0], seen)]
        if name in {"Omit", "Pick"} and len(arguments) >= 2:
            keys = self._literal_keys(arguments[1])
            records = self._properties(arguments[0], seen)
            if name == "Omit":
                return [record for record in records if record.name not in keys]
            return [record for record in records if record.name in keys]
        return None

    def _literal_keys(self, type_node: Node) -> Set[str]:
        resolved = self.resolve(type_node)
        if resolved is None:
            return set()
        members = self._union_members(resolved, set()) if resolved.type == "union_type" else [resolved]
        keys: Set[str] = set()
        for member in members:
            literal = _literal_member(member)
            if literal.kind == LITERAL_STRING:
                keys.add(literal.value)
        return keys

    def _members(self, body: Optional[Node]) -> List[PropertyRecord]:
        if body is None:
            return []
        records: List[PropertyRecord] = []
        for child in body.named_children:
            if child.type != "property_signature":
                continue
            name_node = child.child_by_field_name("name")
            if name_node is None or name_node.type == "computed_property_name":
                continue
            name = node_text(name_node)
            if name_node.type == "string":
                name = string_literal_value(name)
            optional = any(not part.is_named and part.type == "?" for part in child.children)
            records.append(
                PropertyRecord(
                    name=name,
                    optional=optional,
                    type_node=_unwrap(child.child_by_field_name("type")),
                    source_path=self.unit.path,
                )
            )
        return records

    # resolution

    def resolve(self, type_node: Optional[Node]) -> Optional[Node]:
        """Follow annotations, parentheses and local aliases to the underlying type."""
        return self._resolve(type_node, set())

    def _resolve(self, type_node: Optional[Node], seen: Set[str]) -> Optional[Node]:
        node = _unwrap(type_node)
        while node is not None:
            if node.type in {"type_identifier", "generic_type"}:
                name = _reference_name(node, qualified=True)
                if not name or name in seen:
                    return node
                seen = seen | {name}
                alias = self.unit.type_aliases.get(name)
                if alias is not None:
                    node = _unwrap(alias.child_by_field_name("value"))
                    continue
                declaration = self.unit.interfaces.get(name) or self.unit.enums.get(name)
                return declaration if declaration is not None else node
            if node.type == "union_type":
                members = self._union_members(node, seen)
                if len(members) == 1:
                    return members[0]
            return node
        return None

    def _union_members(self, node: Node, seen: Set[str]) -> List[Node]:
        members: List[Node] = []
        for child in node.named_children:
            if _is_nullish(child):
                continue
            resolved = self._resolve(child, seen)
            if resolved is None or _is_nullish(resolved):
                continue
            if resolved.type == "union_type":
                members.extend(self._union_members(resolved, seen))
            else:
                members.append(resolved)
        return members


def _unwrap(node: Optional[Node]) -> Optional[Node]:
    while node is not None and node.type in {"type_annotation", "parenthesized_type"}:
        node = node.named_children[0] if node.named_children else None
    return node


def _is_predefined(node: Optional[Node], name: str) -> bool:
    return node is not None and node.type == "predefined_type" and node_text(node) == name


def _is_nullish(node: Node) -> bool:
    return node_text(node).strip() in _NULLISH


def _reference_name(node: Node, *, qualified: bool) -> Optional[str]:
    """Name of a type reference; qualified names never resolve locally."""
    target = node.child_by_field_name("name") if node.type == "generic_type" else node
    if target is None:
        return None
    if target.type == "type_identifier":
        return node_text(target)
    if target.type == "nested_type_identifier" and not qualified:
        return node_text(target.child_by_field_name("name")) or None
    return None


def _heritage_types(declaration: Node) -> List[Node]:
    for child in declaration.named_children:
        if child.type == "extends_type_clause":
            return list(child.named_children)
    return []


def _literal_member(node: Node) -> LiteralMember:
    inner = node
    if node.type == "literal_type" and node.named_children:
        inner = node.named_children[0]
    text = node_text(inner)
    if inner.type == "string":
        return LiteralMember(kind=LITERAL_STRING, value=quote_string_literal(text)[1:-1])
    if inner.type == "number" or (
        inner.type == "unary_expression" and _is_numeric(text)
    ):
        return LiteralMember(kind=LITERAL_NUMBER, value=normalise_number_literal(text))
    return LiteralMember(kind=LITERAL_OTHER, value=text)


def _enum_members(declaration: Node) -> List[LiteralMember]:
    """Literal values of an enum, computing implicit numeric values."""
    body = declaration.child_by_field_name("body")
    if body is None:
        return []
    members: List[LiteralMember] = []
    next_value: Optional[int] = 0
    for child in body.named_children:
        if child.type == "enum_assignment":
            value = child.child_by_field_name("value")
            literal = _literal_member(value) if value is not None else LiteralMember(LITERAL_OTHER, "")
            members.append(literal)
            next_value = None
            if literal.kind == LITERAL_NUMBER:
                try:
                    next_value = int(literal.value) + 1
                except ValueError:
                    next_value = None
        elif child.type in {"property_identifier", "string", "identifier"}:
            if next_value is None:
                members.append(LiteralMember(kind=LITERAL_OTHER, value=node_text(child)))
                continue
            members.append(LiteralMember(kind=LITERAL_NUMBER, value=str(next_value)))
            next_value += 1
    return members


def _is_numeric(text: str) -> bool:
    stripped = text.replace(" ", "")
    if stripped[:1] in {"-", "+"}:
        stripped = stripped[1:]
    return bool(stripped) and (stripped[0].isdigit() or stripped[0] == ".")


__all__ = ["PropertyRecord", "SyntaxTypeClassifier", "TypeClassifier"]
