"""Resolves the public prop contract of a component."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

from tree_sitter import Node

from ..logging import get_logger
from ..models import TYPE_ENUM_OR_UNION, PropDescriptor
from . import constants
from .tree_sitter import SourceUnit, node_text, type_arguments
from .types import PropertyRecord, SyntaxTypeClassifier, TypeClassifier

if TYPE_CHECKING:  # pragma: no cover
    from ..config import HeuristicsConfig

_FUNCTION_LIKE = {
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "arrow_function",
}

# Annotations such as `const Card: React.FC<CardProps> = ...` carry the props as first type argument.
_COMPONENT_TYPES = {
    "FC",
    "FunctionComponent",
    "VFC",
    "VoidFunctionComponent",
    "ComponentType",
    "ForwardRefRenderFunction",
}


class PropResolver:
    """Collects a component's props from its declarations in one file.

    Resolution order, first match wins: a ``{Name}Props`` declaration, the
    first parameter of the component's call signature, then the second type
    argument of a ``forwardRef<Ref, Props>(...)`` style initializer.
    """

    def __init__(self, reserved_props: Sequence[str] = constants.RESERVED_PROPS) -> None:
        self.reserved_props = frozenset(reserved_props)
        self.logger = get_logger("props")

    @classmethod
    def from_config(cls, heuristics: "HeuristicsConfig") -> "PropResolver":
        return cls(reserved_props=heuristics.reserved_props)

    def resolve(
        self,
        unit: SourceUnit,
        component_name: str,
        declaration: Optional[Node] = None,
        classifier: Optional[TypeClassifier] = None,
    ) -> List[PropDescriptor]:
        classifier = classifier or SyntaxTypeClassifier(unit)
        if declaration is None:
            declaration = unit.declaration_for(component_name)
        records = self._collect(unit, component_name, declaration, classifier)
        return self._descriptors(unit, records, classifier)

    def _collect(
        self,
        unit: SourceUnit,
        component_name: str,
        declaration: Optional[Node],
        classifier: TypeClassifier,
    ) -> List[PropertyRecord]:
        props_name = f"{component_name}Props"
        props_declaration = unit.interfaces.get(props_name) or unit.type_aliases.get(props_name)
        if props_declaration is not None:
            self.logger.debug("Using %s for %s", props_name, component_name)
            return classifier.own_properties(props_declaration)

        records: List[PropertyRecord] = []
        if declaration is None:
            return records

        parameter_type = _signature_props_type(declaration)
        if parameter_type is not None:
            records.extend(_flatten(classifier, parameter_type))

        if not records and declaration.type == "variable_declarator":
            generic_arguments = _call_type_arguments(declaration.child_by_field_name("value"))
            if len(generic_arguments) > 1:
                records.extend(_flatten(classifier, generic_arguments[1]))
        return records

    def _descriptors(
        self,
        unit: SourceUnit,
        records: Iterable[PropertyRecord],
        classifier: TypeClassifier,
    ) -> List[PropDescriptor]:
        seen: set[str] = set()
        descriptors: List[PropDescriptor] = []
        for record in records:
            # SyntaxTypeClassifier never follows imports, so its records always
            # carry unit.path; foreign props are already gone because imported
            # types resolve to nothing. The check guards other classifiers.
            is_local = record.source_path == unit.path
            if record.name in self.reserved_props or record.name in seen or not is_local:
                continue
            seen.add(record.name)
            type_class = classifier.classify(record.type_node)
            first_member = None
            if type_class == TYPE_ENUM_OR_UNION:
                first_member = classifier.first_union_member(record.type_node)
            descriptors.append(
                PropDescriptor(
                    name=record.name,
                    type_class=type_class,
                    optional=record.optional,
                    is_local=is_local,
                    first_member=first_member,
                )
            )
        return descriptors


def _flatten(classifier: TypeClassifier, type_node: Node) -> List[PropertyRecord]:
    if classifier.is_intersection(type_node):
        records: List[PropertyRecord] = []
        for branch in classifier.intersection_members(type_node):
            records.extend(classifier.properties(branch))
        return records
    return classifier.properties(type_node)


def _signature_props_type(declaration: Node) -> Optional[Node]:
    """Type of the first parameter of the component's call signature."""
    if declaration.type in _FUNCTION_LIKE:
        return _first_parameter_type(declaration)
    if declaration.type != "variable_declarator":
        return None

    annotated = _annotated_props_type(declaration.child_by_field_name("type"))
    if annotated is not None:
        return annotated
    return _initializer_props_type(declaration.child_by_field_name("value"))


def _initializer_props_type(value: Optional[Node]) -> Optional[Node]:
    while value is not None and value.type in {"parenthesized_expression", "as_expression", "satisfies_expression"}:
        value = value.named_children[0] if value.named_children else None
    if value is None:
        return None
    if value.type in _FUNCTION_LIKE:
        return _first_parameter_type(value)
    if value.type == "call_expression":
        # memo(...), forwardRef(...) and similar wrappers: use the wrapped render function.
        arguments = value.child_by_field_name("arguments")
        for argument in arguments.named_children if arguments is not None else []:
            found = _initializer_props_type(argument)
            if found is not None:
                return found
    return None


def _first_parameter_type(function: Node) -> Optional[Node]:
    parameters = function.child_by_field_name("parameters")
    if parameters is None:
        return None
    for parameter in parameters.named_children:
        if parameter.type not in {"required_parameter", "optional_parameter"}:
            continue
        return parameter.child_by_field_name("type")
    return None


def _annotated_props_type(annotation: Optional[Node]) -> Optional[Node]:
    if annotation is None or not annotation.named_children:
        return None
    annotated = annotation.named_children[0]
    if annotated.type != "generic_type":
        return None
    name_node = annotated.child_by_field_name("name")
    if name_node is not None and name_node.type == "nested_type_identifier":
        name_node = name_node.child_by_field_name("name")
    if node_text(name_node) not in _COMPONENT_TYPES:
        return None
    arguments = type_arguments(annotated)
    if not arguments:
        return None
    # ForwardRefRenderFunction<Ref, Props> puts the props second.
    if node_text(name_node) == "ForwardRefRenderFunction":
        return arguments[1] if len(arguments) > 1 else None
    return arguments[0]


def _call_type_arguments(value: Optional[Node]) -> List[Node]:
    if value is None or value.type != "call_expression":
        return []
    return type_arguments(value)


__all__ = ["PropResolver"]
