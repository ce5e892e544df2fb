"""Infers story decorators from ambient-context hooks used in a file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from ..models import ContextDecorator
from . import constants


@dataclass
class DecoratorRequirements:
    """Decorators and the extra imports they need for one file."""

    decorators: List[ContextDecorator] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)


class DecoratorInferencer:
    """Scans the whole file text for context markers such as ``useChart()``.

    Inference is file scoped: one marker anywhere in the file wraps every
    story emitted for it.
    """

    def __init__(self, contexts: Sequence[ContextDecorator] = constants.CONTEXT_DECORATORS) -> None:
        self.contexts = tuple(contexts)

    def infer(self, text: str, exported_names: Iterable[str] = ()) -> DecoratorRequirements:
        exported = set(exported_names)
        requirements = DecoratorRequirements()
        for context in self.contexts:
            if context.marker not in text:
                continue
            requirements.decorators.append(context)
            if context.provides and all(name in exported for name in context.provides):
                continue
            for line in context.imports:
                if line not in requirements.imports:
                    requirements.imports.append(line)
        return requirements


__all__ = ["DecoratorInferencer", "DecoratorRequirements"]
