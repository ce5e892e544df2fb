"""Heuristic test separating UI components from helpers, hooks and variant factories."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional, Sequence

from tree_sitter import Node

from . import constants
from .tree_sitter import node_text

if TYPE_CHECKING:  # pragma: no cover
    from ..config import HeuristicsConfig


class ComponentFilter:
    """Decides whether an exported binding really is a renderable component.

    The checks are syntactic: the binding's name and the raw text of its
    declaration. False positives and negatives are accepted.
    """

    def __init__(
        self,
        *,
        excluded_name_fragments: Sequence[str] = constants.EXCLUDED_NAME_FRAGMENTS,
        excluded_name_suffixes: Sequence[str] = constants.EXCLUDED_NAME_SUFFIXES,
        style_markers: Sequence[str] = constants.STYLE_MARKERS,
        name_pattern: str = constants.COMPONENT_NAME_PATTERN,
    ) -> None:
        self.excluded_name_fragments = tuple(excluded_name_fragments)
        self.excluded_name_suffixes = tuple(excluded_name_suffixes)
        self.style_markers = tuple(style_markers)
        self._name_pattern = re.compile(name_pattern)

    @classmethod
    def from_config(cls, heuristics: "HeuristicsConfig") -> "ComponentFilter":
        return cls(
            excluded_name_fragments=heuristics.excluded_name_fragments,
            excluded_name_suffixes=heuristics.excluded_name_suffixes,
            style_markers=heuristics.style_markers,
        )

    def is_component(self, name: str, declaration: Optional[Node]) -> bool:
        if declaration is None:
            return False
        return self.accepts_name(name) and self.accepts_source(node_text(declaration))

    def accepts_name(self, name: str) -> bool:
        if not self._name_pattern.match(name):
            return False
        lowered = name.lower()
        if any(fragment in lowered for fragment in self.excluded_name_fragments):
            return False
        if name.startswith(constants.HOOK_PREFIX):
            return False
        return not name.endswith(self.excluded_name_suffixes)

    def accepts_source(self, text: str) -> bool:
        if any(marker in text for marker in self.style_markers):
            return False
        # Mentions variants but never renders anything: a variant table, not a component.
        if constants.VARIANTS_MARKER in text and not any(
            marker in text for marker in constants.RENDER_MARKERS
        ):
            return False
        return True


__all__ = ["ComponentFilter"]
