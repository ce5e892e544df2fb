"""Core data models shared across storygen components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple

KIND_FUNCTION = "function"
KIND_VARIABLE = "variable"
KIND_CLASS = "class"
KIND_DEFAULT = "default"
KIND_TYPE = "type"

TYPE_STRING = "string"
TYPE_NUMBER = "number"
TYPE_BOOLEAN = "boolean"
TYPE_ENUM_OR_UNION = "enumOrUnion"
TYPE_OTHER = "other"

LITERAL_STRING = "string"
LITERAL_NUMBER = "number"
LITERAL_OTHER = "other"

PRIMARY_STORY_NAME = "Primary"


@dataclass
class ExportBinding:
    """An exported name together with the declaration it points at."""

    name: str
    kind: str
    declaration: Any = None
    local_name: Optional[str] = None

    @property
    def is_candidate(self) -> bool:
        return self.kind in {KIND_FUNCTION, KIND_VARIABLE, KIND_CLASS, KIND_DEFAULT}

    @property
    def lookup_name(self) -> str:
        """Name of the declaration inside the module (differs from `name` for aliases)."""
        return self.local_name or self.name


@dataclass(frozen=True)
class LiteralMember:
    """First member of an enum or union type."""

    kind: str
    value: str


@dataclass
class PropDescriptor:
    """A single resolved prop of a component."""

    name: str
    type_class: str
    optional: bool
    is_local: bool
    first_member: Optional[LiteralMember] = None


@dataclass(frozen=True)
class PropAssignment:
    """Synthesized default value for one prop."""

    name: str
    value: str
    placeholder: bool = False


@dataclass
class StoryDefinition:
    """A named story and the args it renders with."""

    name: str
    assignments: List[PropAssignment] = field(default_factory=list)


@dataclass(frozen=True)
class ContextDecorator:
    """Wrapping required by components that read an ambient context."""

    name: str
    marker: str
    decorator: str
    imports: Tuple[str, ...] = ()
    provides: Tuple[str, ...] = ()


@dataclass
class FixturePlan:
    """Everything the emitter needs to write one story file."""

    file_path: Path
    story_path: Path
    title: str
    primary_export_name: str
    import_lines: List[str] = field(default_factory=list)
    decorators: List[ContextDecorator] = field(default_factory=list)
    stories: List[StoryDefinition] = field(default_factory=list)

    @property
    def secondary_story_names(self) -> List[str]:
        return [story.name for story in self.stories[1:]]


@dataclass
class GenerationReport:
    """Outcome of a `generate` batch."""

    processed: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def failed_paths(self) -> List[str]:
        return [path for path, _ in self.failed]


@dataclass
class CleanReport:
    """Outcome of a `clean` batch."""

    deleted: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
