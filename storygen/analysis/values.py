"""Maps resolved props to literal story args."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..models import (
    LITERAL_NUMBER,
    LITERAL_STRING,
    TYPE_BOOLEAN,
    TYPE_ENUM_OR_UNION,
    TYPE_NUMBER,
    TYPE_STRING,
    PropAssignment,
    PropDescriptor,
)
from . import constants


class ValueSynthesizer:
    """Produces one representative value per prop.

    Optional primitives are still populated; optional props of any other
    type are left out, while required ones receive an explicit placeholder.
    """

    def __init__(
        self,
        *,
        sample_string: str = constants.SAMPLE_STRING,
        sample_number: str = constants.SAMPLE_NUMBER,
        sample_boolean: str = constants.SAMPLE_BOOLEAN,
        placeholder: str = constants.PLACEHOLDER_VALUE,
    ) -> None:
        self.sample_string = sample_string
        self.sample_number = sample_number
        self.sample_boolean = sample_boolean
        self.placeholder = placeholder

    def synthesize(self, props: Iterable[PropDescriptor]) -> List[PropAssignment]:
        assignments: List[PropAssignment] = []
        for prop in props:
            if not prop.is_local:
                continue
            assignment = self.value_for(prop)
            if assignment is not None:
                assignments.append(assignment)
        return assignments

    def value_for(self, prop: PropDescriptor) -> Optional[PropAssignment]:
        if prop.type_class == TYPE_STRING:
            return PropAssignment(prop.name, self.sample_string)
        if prop.type_class == TYPE_NUMBER:
            return PropAssignment(prop.name, self.sample_number)
        if prop.type_class == TYPE_BOOLEAN:
            return PropAssignment(prop.name, self.sample_boolean)
        if prop.type_class == TYPE_ENUM_OR_UNION:
            member = prop.first_member
            if member is None:
                return None
            if member.kind == LITERAL_STRING:
                return PropAssignment(prop.name, f'"{member.value}"')
            if member.kind == LITERAL_NUMBER:
                return PropAssignment(prop.name, member.value)
            return None
        if prop.optional:
            return None
        return PropAssignment(prop.name, self.placeholder, placeholder=True)


__all__ = ["ValueSynthesizer"]
