"""Tree-sitter backed loading of TSX component sources."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

_TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

_FUNCTION_NODES = {"function_declaration", "generator_function_declaration"}
_CLASS_NODES = {"class_declaration", "abstract_class_declaration"}
_VARIABLE_NODES = {"lexical_declaration", "variable_declaration"}


def create_parser() -> Parser:
    """Return a parser for the TSX dialect of TypeScript."""
    return Parser(_TSX_LANGUAGE)


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="ignore")


def unwrap_declaration(node: Node) -> Node:
    """Strip `declare` wrappers so callers see the underlying declaration."""
    if node.type == "ambient_declaration":
        for child in node.named_children:
            return child
    return node


class SourceUnit:
    """One parsed component file plus an index of its top-level declarations."""

    def __init__(self, path: Path, text: str, tree: Tree) -> None:
        self.path = path
        self.text = text
        self.tree: Optional[Tree] = tree
        self.interfaces: Dict[str, Node] = {}
        self.type_aliases: Dict[str, Node] = {}
        self.enums: Dict[str, Node] = {}
        self.functions: Dict[str, Node] = {}
        self.variables: Dict[str, Node] = {}
        self.classes: Dict[str, Node] = {}
        self.export_statements: List[Node] = []
        self._index()

    @classmethod
    def parse(cls, path: Path, text: str, parser: Parser | None = None) -> "SourceUnit":
        parser = parser or create_parser()
        tree = parser.parse(text.encode("utf-8"))
        return cls(path, text, tree)

    @property
    def root(self) -> Node:
        if self.tree is None:
            raise RuntimeError(f"Source unit for {self.path} has been released")
        return self.tree.root_node

    @property
    def base_name(self) -> str:
        name = self.path.name
        return name[: -len(".tsx")] if name.endswith(".tsx") else self.path.stem

    def release(self) -> None:
        """Drop the syntax tree and declaration index."""
        self.tree = None
        for index in (
            self.interfaces,
            self.type_aliases,
            self.enums,
            self.functions,
            self.variables,
            self.classes,
        ):
            index.clear()
        self.export_statements = []

    def __enter__(self) -> "SourceUnit":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def declaration_for(self, name: str) -> Optional[Node]:
        """Return the function, variable declarator or class declared under `name`."""
        return self.functions.get(name) or self.variables.get(name) or self.classes.get(name)

    def _index(self) -> None:
        for child in self.root.named_children:
            if child.type == "export_statement":
                self.export_statements.append(child)
                declaration = child.child_by_field_name("declaration")
                if declaration is not None:
                    self._index_declaration(declaration)
            else:
                self._index_declaration(child)

    def _index_declaration(self, node: Node) -> None:
        node = unwrap_declaration(node)
        kind = node.type
        if kind in _VARIABLE_NODES:
            for declarator in iter_declarators(node):
                name = node_text(declarator.child_by_field_name("name"))
                if name:
                    self.variables.setdefault(name, declarator)
            return

        name = node_text(node.child_by_field_name("name"))
        if not name:
            return
        if kind == "interface_declaration":
            self.interfaces.setdefault(name, node)
        elif kind == "type_alias_declaration":
            self.type_aliases.setdefault(name, node)
        elif kind == "enum_declaration":
            self.enums.setdefault(name, node)
        elif kind in _FUNCTION_NODES:
            self.functions.setdefault(name, node)
        elif kind in _CLASS_NODES:
            self.classes.setdefault(name, node)


def iter_declarators(node: Node) -> Iterator[Node]:
    for child in node.named_children:
        if child.type == "variable_declarator":
            yield child


def type_arguments(node: Node) -> List[Node]:
    """Type arguments of a generic type or call expression (`Foo<A, B>`)."""
    arguments = node.child_by_field_name("type_arguments")
    if arguments is None:
        for child in node.named_children:
            if child.type == "type_arguments":
                arguments = child
                break
    return list(arguments.named_children) if arguments is not None else []


def is_function_declaration(node: Node) -> bool:
    return node.type in _FUNCTION_NODES


def is_class_declaration(node: Node) -> bool:
    return node.type in _CLASS_NODES


def is_variable_declaration(node: Node) -> bool:
    return node.type in _VARIABLE_NODES


__all__ = [
    "SourceUnit",
    "create_parser",
    "is_class_declaration",
    "is_function_declaration",
    "is_variable_declaration",
    "iter_declarators",
    "node_text",
    "type_arguments",
    "unwrap_declaration",
]
