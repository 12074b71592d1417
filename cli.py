#!/usr/bin/env python3
"""CLI for the GitHub stats card updater.

Usage:
    python -m cli [update] [--readme PATH] [--preview PATH] [--dry-run]

Commands:
    update  Fetch contributions, write the stats card and patch the README
"""

import argparse
import asyncio
import sys
from pathlib import Path

from core import configure_logging, get_logger
from core.config import GITHUB_LOGIN, get_settings
from core.github_client import close_github_client
from schemas import ContributionStats
from services.contributions_service import (
    FetchError,
    MalformedResponseError,
    MissingCredentialError,
    NoDataError,
)
from services.readme_service import MissingMarkersError
from services.update_service import update_stats

logger = get_logger(__name__)

UPDATE_ERRORS = (
    MissingCredentialError,
    NoDataError,
    FetchError,
    MalformedResponseError,
    MissingMarkersError,
    OSError,
)


async def _run_update(args: argparse.Namespace) -> ContributionStats:
    settings = get_settings()
    overrides = {}
    if args.readme:
        overrides["readme_path"] = Path(args.readme)
    if args.preview:
        overrides["preview_path"] = Path(args.preview)
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        return await update_stats(settings, dry_run=args.dry_run)
    finally:
        await close_github_client()


def cmd_update(args: argparse.Namespace) -> int:
    """Run the full update and print the one-line summary."""
    try:
        stats = asyncio.run(_run_update(args))
    except UPDATE_ERRORS as e:
        logger.error("stats.update_failed", error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("stats.update_failed", error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"Updated stats for {GITHUB_LOGIN}: total={stats.total}, "
        f"longest={stats.longest_streak}, current={stats.current_streak}"
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="GitHub contribution stats card updater",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    # Running with no command is the same as "update" with default paths
    parser.set_defaults(command="update", readme=None, preview=None, dry_run=False)

    update_parser = subparsers.add_parser(
        "update",
        help="Fetch contributions, write the stats card and patch the README",
    )
    update_parser.add_argument(
        "--readme", help="README to patch (default: README_PATH)"
    )
    update_parser.add_argument(
        "--preview", help="SVG card to write (default: PREVIEW_PATH)"
    )
    update_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and compute without writing any file",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "update":
        return cmd_update(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
