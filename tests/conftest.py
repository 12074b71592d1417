"""Pytest configuration and shared fixtures.

This module provides:
- Settings cache reset between tests
- Shared GitHub HTTP client reset for async tests that hit the client
- A Settings instance pointing at tmp_path files
"""

# Set environment variables BEFORE any imports that read Settings
import os

os.environ.setdefault("GITHUB_TOKEN", "test_github_token")

from pathlib import Path

import pytest

from core.config import (
    STATS_END_MARKER,
    STATS_START_MARKER,
    Settings,
    clear_settings_cache,
)
from tests.factories import GRAPHQL_URL

README_TEMPLATE = f"""# Profile

Intro text.

{STATS_START_MARKER}
old block
{STATS_END_MARKER}

Footer text.
"""


@pytest.fixture(autouse=True)
def _clear_settings():
    """Clear lru_cache between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
async def reset_github_client():
    """Reset the module-level client singleton between tests."""
    import core.github_client as mod

    yield
    if mod._github_http_client is not None and not mod._github_http_client.is_closed:
        await mod._github_http_client.aclose()
    mod._github_http_client = None


@pytest.fixture
def readme_path(tmp_path: Path) -> Path:
    path = tmp_path / "README.md"
    path.write_text(README_TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def test_settings(tmp_path: Path, readme_path: Path) -> Settings:
    return Settings(
        github_token="test_github_token",
        github_graphql_url=GRAPHQL_URL,
        readme_path=readme_path,
        preview_path=tmp_path / "preview.svg",
    )
