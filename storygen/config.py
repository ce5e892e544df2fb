"""Configuration loading for storygen (.storygen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .analysis import constants
from .models import ContextDecorator

CONFIG_FILENAME = ".storygen.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class HeuristicsConfig:
    """Literal lists driving the component filter and prop resolver."""

    reserved_props: List[str] = field(default_factory=lambda: list(constants.RESERVED_PROPS))
    excluded_name_fragments: List[str] = field(
        default_factory=lambda: list(constants.EXCLUDED_NAME_FRAGMENTS)
    )
    excluded_name_suffixes: List[str] = field(
        default_factory=lambda: list(constants.EXCLUDED_NAME_SUFFIXES)
    )
    style_markers: List[str] = field(default_factory=lambda: list(constants.STYLE_MARKERS))


@dataclass
class StoryGenConfig:
    """Represents the settings defined in .storygen.yml."""

    root: Path
    components_dir: str = constants.COMPONENTS_DIR
    story_extension: str = constants.STORY_EXTENSION
    source_pattern: str = constants.SOURCE_PATTERN
    title_prefix: str = constants.TITLE_PREFIX
    storybook_package: str = constants.STORYBOOK_PACKAGE
    exclude_paths: List[str] = field(default_factory=list)
    heuristics: HeuristicsConfig = field(default_factory=HeuristicsConfig)
    contexts: List[ContextDecorator] = field(
        default_factory=lambda: list(constants.CONTEXT_DECORATORS)
    )


def load_config(config_path: Path) -> StoryGenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return StoryGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = StoryGenConfig(root=root)
    config.components_dir = _as_str(data.get("components_dir")) or config.components_dir
    config.story_extension = _as_str(data.get("story_extension")) or config.story_extension
    config.source_pattern = _as_str(data.get("source_pattern")) or config.source_pattern
    config.title_prefix = _as_str(data.get("title_prefix")) or config.title_prefix
    config.storybook_package = (
        _as_str(data.get("storybook_package")) or config.storybook_package
    )
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    if not config.story_extension.startswith("."):
        raise ConfigError("story_extension must start with '.'")

    heuristics_data = _as_dict(data.get("heuristics"))
    if heuristics_data:
        heuristics = config.heuristics
        for key in (
            "reserved_props",
            "excluded_name_fragments",
            "excluded_name_suffixes",
            "style_markers",
        ):
            if key in heuristics_data:
                setattr(heuristics, key, _as_str_list(heuristics_data.get(key)))

    if "contexts" in data:
        config.contexts = _parse_contexts(data.get("contexts"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_contexts(value: Any) -> List[ContextDecorator]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("contexts must be a list of mappings")

    contexts: List[ContextDecorator] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigError(f"contexts[{index}] must be a mapping")
        marker = _as_str(entry.get("marker"))
        decorator = _as_str(entry.get("decorator"))
        if not marker or not decorator:
            raise ConfigError(f"contexts[{index}] requires 'marker' and 'decorator'")
        contexts.append(
            ContextDecorator(
                name=_as_str(entry.get("name")) or marker,
                marker=marker,
                decorator=decorator.strip(),
                imports=tuple(_as_str_list(entry.get("imports"))),
                provides=tuple(_as_str_list(entry.get("provides"))),
            )
        )
    return contexts


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    raise ConfigError(f"Expected a list of strings, got {type(value).__name__}")


__all__ = ["CONFIG_FILENAME", "ConfigError", "HeuristicsConfig", "StoryGenConfig", "load_config"]
