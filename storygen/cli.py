"""CLI entrypoints for storygen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Subcommands repeat the flags; SUPPRESS keeps them from clobbering values given before the command.
    def default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    volume = parser.add_mutually_exclusive_group()
    volume.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default(False),
        help="Increase log verbosity for troubleshooting.",
    )
    volume.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default(False),
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=default(None),
        help="Also write a detailed log to this file.",
    )


def _add_tree_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project root containing the components directory (defaults to current directory).",
    )
    parser.add_argument(
        "--components-dir",
        default=None,
        help="Components directory relative to the project root (default: components).",
    )
    parser.add_argument(
        "--extension",
        default=None,
        help="Story file extension (default: .stories.tsx).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storygen",
        description="Automatically generate and clean Storybook stories for React components.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Recursively generate .stories.tsx files for all components in the components directory.",
    )
    _add_logging_options(generate_parser, suppress_default=True)
    _add_tree_options(generate_parser)
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Analyze components and report what would be written without touching disk.",
    )

    clean_parser = subparsers.add_parser(
        "clean",
        help="Recursively delete all .stories.tsx files from the components directory.",
    )
    _add_logging_options(clean_parser, suppress_default=True)
    _add_tree_options(clean_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for storygen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=args.log_file,
    )

    try:
        orchestrator = Orchestrator(args.path)
    except ConfigError as exc:
        parser.exit(1, f"storygen: invalid configuration: {exc}\n")

    if args.command == "generate":
        report = orchestrator.run_generate(
            args.components_dir,
            args.extension,
            dry_run=bool(getattr(args, "dry_run", False)),
        )
        print(f"✅ Successfully processed: {len(report.processed)} files")
        if report.failed:
            print(f"❌ Failed to process: {len(report.failed)} files")
            print("Failed files:")
            for path, reason in report.failed:
                print(f"  {path}: {reason}")
    elif args.command == "clean":
        report = orchestrator.run_clean(args.components_dir, args.extension)
        print(f"Deleted {len(report.deleted)} story files")
        if report.failed:
            print(f"❌ Failed to delete: {len(report.failed)} files")
            for path, reason in report.failed:
                print(f"  {path}: {reason}")
            parser.exit(1)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
