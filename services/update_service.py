"""Stats update orchestration.

Runs the whole pipeline for one login:
fetch days -> compute stats -> render card -> patch README -> write files.

Nothing is written until every step that can fail has succeeded, so a run
either updates both the card and the README or neither.
"""

import os
from datetime import datetime
from pathlib import Path

from core import get_logger
from core.config import (
    GITHUB_LOGIN,
    STATS_END_MARKER,
    STATS_START_MARKER,
    Settings,
)
from rendering.stats_card import render_stats_card
from schemas import ContributionStats
from services.contributions_service import (
    MissingCredentialError,
    fetch_contribution_days,
)
from services.readme_service import inject_block, render_readme_block
from services.streaks_service import compute_stats

logger = get_logger(__name__)


def _image_src(preview_path: Path, readme_path: Path) -> str:
    """Path of the card as referenced from the README."""
    relative = os.path.relpath(preview_path, start=readme_path.parent)
    return Path(relative).as_posix()


def _write_all(contents: dict[Path, str]) -> None:
    """Write every file or none of them.

    Each file is first written to a hidden sibling; the siblings replace the
    targets only once all of them were written.
    """
    staged: dict[Path, Path] = {}
    try:
        for path, text in contents.items():
            tmp = path.with_name(f".{path.name}.tmp")
            staged[path] = tmp
            tmp.write_text(text, encoding="utf-8")
    except OSError:
        for tmp in staged.values():
            tmp.unlink(missing_ok=True)
        raise

    for path, tmp in staged.items():
        os.replace(tmp, path)


async def update_stats(
    settings: Settings,
    *,
    login: str = GITHUB_LOGIN,
    start_marker: str = STATS_START_MARKER,
    end_marker: str = STATS_END_MARKER,
    now: datetime | None = None,
    dry_run: bool = False,
) -> ContributionStats:
    """Fetch contributions, then write the stats card and patch the README.

    Raises:
        MissingCredentialError: If no GitHub token is configured
        NoDataError, FetchError, MalformedResponseError: From the fetch step
        MissingMarkersError: If the README lacks the marker pair
    """
    if not settings.github_token:
        raise MissingCredentialError(
            "GITHUB_TOKEN is required to call the GitHub GraphQL API."
        )

    days = await fetch_contribution_days(settings.github_token, login, now=now)
    stats = compute_stats(days, settings.streak_break_weekdays)
    logger.info(
        "stats.computed",
        login=login,
        days=len(days),
        total=stats.total,
        longest=stats.longest_streak,
        current=stats.current_streak,
    )

    svg = render_stats_card(stats)
    block = render_readme_block(
        _image_src(settings.preview_path, settings.readme_path),
        start_marker,
        end_marker,
    )
    readme = settings.readme_path.read_text(encoding="utf-8")
    updated_readme = inject_block(readme, block, start_marker, end_marker)

    if dry_run:
        logger.info("stats.dry_run", preview=str(settings.preview_path))
        return stats

    _write_all({settings.preview_path: svg, settings.readme_path: updated_readme})
    logger.info(
        "stats.updated",
        preview=str(settings.preview_path),
        readme=str(settings.readme_path),
    )
    return stats
