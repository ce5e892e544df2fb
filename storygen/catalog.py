"""Discovery and loading of component source files."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .analysis import constants
from .analysis.tree_sitter import SourceUnit, create_parser

_EXCLUDED_DIRS = {"node_modules"}


def _path_matches(path: str, pattern: str) -> bool:
    normalized = path.replace("\\", "/")
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return normalized == prefix or normalized.startswith(f"{prefix}/")
    if pattern.endswith("/"):
        return normalized.startswith(pattern) or f"/{pattern}" in f"/{normalized}"
    if pattern.startswith("**/"):
        return fnmatchcase(normalized, pattern) or _path_matches(normalized, pattern[3:])
    return fnmatchcase(normalized, pattern)


class SourceCatalog:
    """Finds component files under a components directory and parses them."""

    def __init__(
        self,
        root: Path,
        components_dir: str = constants.COMPONENTS_DIR,
        *,
        source_pattern: str = constants.SOURCE_PATTERN,
        story_extension: str = constants.STORY_EXTENSION,
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self.root = Path(root)
        self.components_dir = components_dir
        self.source_pattern = source_pattern
        self.story_extension = story_extension
        self.exclude_paths = list(exclude_paths)
        self._parser = create_parser()

    @property
    def base(self) -> Path:
        return self.root / self.components_dir

    def discover(self) -> List[Path]:
        """Component sources, sorted, with generated story files left out."""
        return [
            path
            for path in self._iter_files()
            if not path.name.endswith(self.story_extension)
            and _path_matches(self.relative_to_base(path), self.source_pattern)
        ]

    def discover_stories(self, story_extension: str | None = None) -> List[Path]:
        """Previously generated story files."""
        extension = story_extension or self.story_extension
        return [path for path in self._iter_files() if path.name.endswith(extension)]

    def load(self, path: Path) -> SourceUnit:
        """Read and parse one file; the caller releases the returned unit."""
        text = path.read_text(encoding="utf-8")
        return SourceUnit.parse(path, text, self._parser)

    def relative_to_base(self, path: Path) -> str:
        return path.relative_to(self.base).as_posix()

    def display_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def story_path_for(self, path: Path) -> Path:
        name = path.name
        stem = name[: -len(".tsx")] if name.endswith(".tsx") else path.stem
        return path.with_name(f"{stem}{self.story_extension}")

    def _iter_files(self) -> Iterator[Path]:
        base = self.base
        if not base.is_dir():
            return
        for dirpath, dirnames, filenames in os.walk(base):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(base).as_posix() if current_dir != base else ""
            dirnames[:] = sorted(
                name
                for name in dirnames
                if name not in _EXCLUDED_DIRS
                and not name.startswith(".")
                and not self._is_excluded(f"{rel_dir}/{name}/" if rel_dir else f"{name}/")
            )
            for filename in sorted(filenames):
                if filename.startswith("."):
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if self._is_excluded(rel_path):
                    continue
                yield current_dir / filename

    def _is_excluded(self, rel_path: str) -> bool:
        return any(_path_matches(rel_path, pattern) for pattern in self.exclude_paths)


__all__ = ["SourceCatalog"]
