"""Batch orchestration for the generate and clean commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .catalog import SourceCatalog
from .config import StoryGenConfig, load_config
from .emitter import FixtureEmitter
from .logging import get_logger
from .models import CleanReport, GenerationReport
from .planner import StoryPlanner


class Orchestrator:
    """Drives story generation and cleanup over a components tree.

    Files are processed one at a time. Each file's syntax tree is released
    before the next one is loaded, and a failure in one file is recorded in
    the report without stopping the batch.
    """

    def __init__(
        self,
        root: Path | str | None = None,
        *,
        config: StoryGenConfig | None = None,
        planner: StoryPlanner | None = None,
        emitter: FixtureEmitter | None = None,
    ) -> None:
        self.root = Path(root).expanduser().resolve() if root is not None else Path.cwd()
        self.config = config or load_config(self.root)
        self.planner = planner or StoryPlanner.from_config(self.config)
        self.emitter = emitter or FixtureEmitter(storybook_package=self.config.storybook_package)
        self.logger = get_logger("orchestrator")

    def run_generate(
        self,
        components_dir: Optional[str] = None,
        extension: Optional[str] = None,
        *,
        dry_run: bool = False,
    ) -> GenerationReport:
        """Write a story file next to every component source."""
        catalog = self._catalog(components_dir, extension)
        report = GenerationReport()
        self.logger.info("Generating Storybook stories...")

        for path in catalog.discover():
            display = catalog.display_path(path)
            unit = None
            try:
                unit = catalog.load(path)
                story_path = catalog.story_path_for(path)
                plan = self.planner.plan(unit, catalog.relative_to_base(path), story_path)
                if plan is None:
                    self.logger.info("Skipping %s: No valid exports found", display)
                    report.skipped.append(display)
                    continue
                self.emitter.write(plan, dry_run=dry_run)
                report.processed.append(display)
                verb = "Would generate" if dry_run else "Generated"
                self.logger.info("%s: %s", verb, catalog.display_path(story_path))
            except Exception as exc:
                report.failed.append((display, str(exc)))
                self.logger.warning("Failed to process %s: %s", display, exc)
                self.logger.debug("Failure details for %s", display, exc_info=True)
            finally:
                if unit is not None:
                    unit.release()

        self.logger.info("Story generation complete!")
        return report

    def run_clean(
        self,
        components_dir: Optional[str] = None,
        extension: Optional[str] = None,
    ) -> CleanReport:
        """Delete every generated story file under the components directory."""
        catalog = self._catalog(components_dir, extension)
        report = CleanReport()
        self.logger.info("Cleaning Storybook stories...")

        for path in catalog.discover_stories():
            display = catalog.display_path(path)
            try:
                path.unlink()
            except OSError as exc:
                report.failed.append((display, str(exc)))
                self.logger.warning("Failed to delete %s: %s", display, exc)
                continue
            report.deleted.append(display)
            self.logger.info("Deleted: %s", display)

        self.logger.info("Story cleanup complete!")
        return report

    def _catalog(self, components_dir: Optional[str], extension: Optional[str]) -> SourceCatalog:
        return SourceCatalog(
            self.root,
            components_dir or self.config.components_dir,
            source_pattern=self.config.source_pattern,
            story_extension=extension or self.config.story_extension,
            exclude_paths=self.config.exclude_paths,
        )


def generate(
    components_dir: str = "components",
    extension: str = ".stories.tsx",
    *,
    root: Path | str | None = None,
    dry_run: bool = False,
) -> GenerationReport:
    """Generate stories for `components_dir` relative to `root` (default: cwd)."""
    return Orchestrator(root).run_generate(components_dir, extension, dry_run=dry_run)


def clean(
    components_dir: str = "components",
    extension: str = ".stories.tsx",
    *,
    root: Path | str | None = None,
) -> CleanReport:
    """Delete generated stories under `components_dir` relative to `root` (default: cwd)."""
    return Orchestrator(root).run_clean(components_dir, extension)


__all__ = ["Orchestrator", "clean", "generate"]
