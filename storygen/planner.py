"""Builds the story plan for one component file."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .analysis import constants
from .analysis.components import ComponentFilter
from .analysis.decorators import DecoratorInferencer
from .analysis.exports import ExportClassifier
from .analysis.props import PropResolver
from .analysis.tree_sitter import SourceUnit
from .analysis.types import SyntaxTypeClassifier, TypeClassifier
from .analysis.values import ValueSynthesizer
from .config import StoryGenConfig
from .emitter import StoryNamer, import_statement, story_title
from .logging import get_logger
from .models import (
    PRIMARY_STORY_NAME,
    ExportBinding,
    FixturePlan,
    PropAssignment,
    StoryDefinition,
)


class StoryPlanner:
    """Runs classification, prop resolution and synthesis for a source unit."""

    def __init__(
        self,
        *,
        exports: ExportClassifier | None = None,
        component_filter: ComponentFilter | None = None,
        prop_resolver: PropResolver | None = None,
        synthesizer: ValueSynthesizer | None = None,
        inferencer: DecoratorInferencer | None = None,
        title_prefix: str = constants.TITLE_PREFIX,
    ) -> None:
        self.exports = exports or ExportClassifier()
        self.component_filter = component_filter or ComponentFilter()
        self.prop_resolver = prop_resolver or PropResolver()
        self.synthesizer = synthesizer or ValueSynthesizer()
        self.inferencer = inferencer or DecoratorInferencer()
        self.title_prefix = title_prefix
        self.logger = get_logger("planner")

    @classmethod
    def from_config(cls, config: StoryGenConfig) -> "StoryPlanner":
        return cls(
            component_filter=ComponentFilter.from_config(config.heuristics),
            prop_resolver=PropResolver.from_config(config.heuristics),
            inferencer=DecoratorInferencer(config.contexts),
            title_prefix=config.title_prefix,
        )

    def plan(self, unit: SourceUnit, relative_path: str, story_path: Path) -> Optional[FixturePlan]:
        """Return the plan for `unit`, or None when it exports nothing usable."""
        default, named = self.exports.candidates(unit)
        if default is not None:
            named = [binding for binding in named if binding.name != default.name]
        primary = default or self._primary_named(named)
        if primary is None:
            return None

        classifier = SyntaxTypeClassifier(unit)
        named_names = [binding.name for binding in named]
        exported_names = named_names + ([default.name] if default is not None else [])
        requirements = self.inferencer.infer(unit.text, exported_names)

        import_lines = [
            import_statement(default.name if default else None, named_names, unit.base_name)
        ]
        import_lines.extend(requirements.imports)

        stories = [StoryDefinition(PRIMARY_STORY_NAME, self._args(unit, primary, classifier))]
        namer = StoryNamer()
        for binding in named:
            if binding.name == primary.name:
                continue
            if not self.component_filter.is_component(binding.name, binding.declaration):
                self.logger.debug("Skipping non-component export %s in %s", binding.name, unit.path)
                continue
            stories.append(StoryDefinition(namer.claim(binding.name), self._args(unit, binding, classifier)))

        return FixturePlan(
            file_path=unit.path,
            story_path=story_path,
            title=story_title(relative_path, primary.name, self.title_prefix),
            primary_export_name=primary.name,
            import_lines=import_lines,
            decorators=list(requirements.decorators),
            stories=stories,
        )

    def _primary_named(self, named: List[ExportBinding]) -> Optional[ExportBinding]:
        for binding in named:
            if self.component_filter.is_component(binding.name, binding.declaration):
                return binding
        # Components built on class-name helpers (cn, clsx) fail the source check; accept them by name.
        for binding in named:
            if self.component_filter.accepts_name(binding.name):
                return binding
        return None

    def _args(
        self, unit: SourceUnit, binding: ExportBinding, classifier: TypeClassifier
    ) -> List[PropAssignment]:
        props = self.prop_resolver.resolve(unit, binding.lookup_name, binding.declaration, classifier)
        return self.synthesizer.synthesize(props)


__all__ = ["StoryPlanner"]
