"""Shared HTTP client for GitHub GraphQL requests.

One ``httpx.AsyncClient`` is created per run and reused for every year's
calendar request. ``close_github_client`` must be called before exit.
"""

from __future__ import annotations

import httpx

from core.config import get_settings

USER_AGENT = "github-stats-updater"

_github_http_client: httpx.AsyncClient | None = None


def get_github_client() -> httpx.AsyncClient:
    """Get or create the shared HTTP client for GitHub API requests."""
    global _github_http_client

    if _github_http_client is not None and not _github_http_client.is_closed:
        return _github_http_client

    settings = get_settings()
    _github_http_client = httpx.AsyncClient(
        timeout=settings.http_timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )
    return _github_http_client


async def close_github_client() -> None:
    """Close the shared GitHub HTTP client."""
    global _github_http_client
    if _github_http_client is not None and not _github_http_client.is_closed:
        await _github_http_client.aclose()
    _github_http_client = None
