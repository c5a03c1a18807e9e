"""Command-line entry point for bumping the latest semantic version tag."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from loguru import logger

from tagbump.bumper import VersionBumper, format_report
from tagbump.config_manager import ConfigError, load_config
from tagbump.config_schema import Config
from tagbump.errors import (
    ConflictingVersionSelectorsError,
    MissingVersionSelectorError,
    UnknownFlagError,
    UsageError,
    VersionBumpError,
)
from tagbump.git import GitTagStore, TagStore
from tagbump.logger import setup_logging
from tagbump.semver import VersionKind

EPILOG = """\
Examples:
  tagbump --minor --dry-run    # Preview minor version bump
  tagbump --patch --push       # Bump patch and push to origin
  tagbump --major              # Bump major version locally
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagbump",
        description="Create the next semantic version tag from the latest X.Y.Z tag.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    selectors = parser.add_argument_group("version type (required, choose one)")
    selectors.add_argument(
        "--major", action="store_true", help="Increment major version (X.0.0)"
    )
    selectors.add_argument(
        "--minor", action="store_true", help="Increment minor version (x.X.0)"
    )
    selectors.add_argument(
        "--patch", action="store_true", help="Increment patch version (x.x.X)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without making changes",
    )
    parser.add_argument(
        "--push",
        action="store_true",
        help="Push the new tag to the remote after creating it",
    )
    parser.add_argument(
        "--remote",
        metavar="NAME",
        help="Remote to push to (default: git.remote from configuration, 'origin')",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a TOML configuration file (default: ./tagbump.toml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details, including every git command",
    )
    return parser


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    """Parse ``argv``; unknown options raise :class:`UnknownFlagError`.

    ``-h``/``--help`` prints usage and raises ``SystemExit(0)`` from argparse.
    """

    args, extras = build_parser().parse_known_args(list(argv))
    if extras:
        raise UnknownFlagError(extras)
    return args


def resolve_kind(args: argparse.Namespace) -> VersionKind:
    selected = [kind for kind in VersionKind if getattr(args, kind.value)]
    if len(selected) > 1:
        raise ConflictingVersionSelectorsError([f"--{kind.value}" for kind in selected])
    if not selected:
        raise MissingVersionSelectorError()
    return selected[0]


def build_store(config: Config) -> TagStore:
    return GitTagStore(config.git.working_dir, executable=config.git.executable)


def build_bumper(config: Config, args: argparse.Namespace) -> VersionBumper:
    return VersionBumper(
        build_store(config),
        remote=args.remote or config.git.remote,
        message_template=config.tagging.message_template,
        target_ref=config.tagging.target_ref,
    )


def main(argv: Sequence[str] | None = None) -> int:
    try:
        args = parse_args(sys.argv[1:] if argv is None else argv)
        kind = resolve_kind(args)
    except UsageError as error:
        print(f"error: {error}", file=sys.stderr)
        print("Use --help for usage information", file=sys.stderr)
        return error.exit_code

    try:
        config = load_config(args.config)
    except ConfigError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    setup_logging(config.logging, debug=args.verbose or config.app.debug)

    bumper = build_bumper(config, args)
    try:
        result = bumper.run(kind, push=args.push, dry_run=args.dry_run)
    except VersionBumpError as error:
        logger.debug(f"{type(error).__name__} raised during {kind.value} bump")
        print(f"error: {error}", file=sys.stderr)
        return error.exit_code

    print(format_report(result))
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI entry point
    raise SystemExit(main())
