"""Renders story plans into `*.stories.tsx` text and writes them to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set

from jinja2 import Environment, FileSystemLoader

from .analysis import constants
from .analysis.utils import is_identifier, title_path
from .logging import get_logger
from .models import PRIMARY_STORY_NAME, ContextDecorator, FixturePlan, PropAssignment

_ARGS_INDENT = "    "
_DECORATOR_INDENT = "    "


def story_title(relative_path: str, primary_export_name: str, prefix: str = constants.TITLE_PREFIX) -> str:
    """`Components/<PascalCased path>/<primary>` for a path relative to the components root."""
    stem = relative_path[: -len(".tsx")] if relative_path.endswith(".tsx") else relative_path
    return f"{prefix}/{title_path(stem)}/{primary_export_name}"


def import_statement(default_name: Optional[str], named: Sequence[str], module: str) -> str:
    if default_name and named:
        return f"import {default_name}, {{ {', '.join(named)} }} from './{module}';"
    if default_name:
        return f"import {default_name} from './{module}';"
    return f"import {{ {', '.join(named)} }} from './{module}';"


class StoryNamer:
    """Hands out story export names that are unique within one file."""

    def __init__(self) -> None:
        self._used: Set[str] = {PRIMARY_STORY_NAME}

    def claim(self, export_name: str) -> str:
        name = f"{export_name}Story"
        counter = 1
        while name in self._used:
            name = f"{export_name}Story{counter}"
            counter += 1
        self._used.add(name)
        return name


def render_args(assignments: Iterable[PropAssignment], note: str = constants.PLACEHOLDER_NOTE) -> str:
    items = list(assignments)
    if not items:
        return "{}"
    lines: List[str] = ["{"]
    for assignment in items:
        key = assignment.name if is_identifier(assignment.name) else f'"{assignment.name}"'
        line = f"{_ARGS_INDENT}{key}: {assignment.value},"
        if assignment.placeholder:
            line += f" // {note}"
        lines.append(line)
    lines.append("  }")
    return "\n".join(lines)


def render_decorators(decorators: Iterable[ContextDecorator]) -> str:
    items = list(decorators)
    if not items:
        return "[]"
    lines: List[str] = ["["]
    for decorator in items:
        snippet = decorator.decorator.strip().splitlines()
        for index, line in enumerate(snippet):
            suffix = "," if index == len(snippet) - 1 else ""
            lines.append(f"{_DECORATOR_INDENT}{line}{suffix}" if line else "")
    lines.append("  ]")
    return "\n".join(lines)


def _js_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


class FixtureEmitter:
    """Turns a `FixturePlan` into story source via the Jinja template."""

    TEMPLATE_NAME = "story.tsx.j2"

    def __init__(
        self,
        *,
        storybook_package: str = constants.STORYBOOK_PACKAGE,
        templates_dir: Path | None = None,
        placeholder_note: str = constants.PLACEHOLDER_NOTE,
    ) -> None:
        self.storybook_package = storybook_package
        self.templates_dir = templates_dir
        self.placeholder_note = placeholder_note
        self.logger = get_logger("emitter")
        self._env = self._create_env(templates_dir)

    def render(self, plan: FixturePlan) -> str:
        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(plan=plan, storybook_package=self.storybook_package)

    def write(self, plan: FixturePlan, *, dry_run: bool = False) -> str:
        """Render `plan` and overwrite its story file unless `dry_run` is set."""
        content = self.render(plan)
        if dry_run:
            self.logger.debug("Dry run: skipping write of %s", plan.story_path)
            return content
        plan.story_path.write_text(content, encoding="utf-8")
        return content

    def _create_env(self, templates_dir: Path | None) -> Environment:
        default_dir = Path(__file__).with_name("templates")
        directories = [str(templates_dir)] if templates_dir else []
        if str(default_dir) not in directories:
            directories.append(str(default_dir))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.filters["args"] = lambda assignments: render_args(assignments, self.placeholder_note)
        env.filters["decorators"] = render_decorators
        env.filters["js_string"] = _js_string
        return env


__all__ = [
    "FixtureEmitter",
    "StoryNamer",
    "import_statement",
    "render_args",
    "render_decorators",
    "story_title",
]
