"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fixed identity and README markers. Services take these as arguments so they
# can be exercised with other values in tests.
GITHUB_LOGIN = "nujhut-tanzim"
STATS_START_MARKER = "<!-- GITHUB-STATS:START -->"
STATS_END_MARKER = "<!-- GITHUB-STATS:END -->"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Personal access token with read:user scope
    github_token: str = ""
    github_graphql_url: str = "https://api.github.com/graphql"

    http_timeout: float = 10.0

    readme_path: Path = Path("README.md")
    preview_path: Path = Path("preview.svg")

    # date.weekday() numbers (Mon=0 .. Sun=6) that never break a streak
    # Example: STREAK_BREAK_WEEKDAYS='[5, 6]' for a Saturday/Sunday weekend
    streak_break_weekdays: frozenset[int] = frozenset({4, 5})

    @field_validator("github_token")
    @classmethod
    def strip_token(cls, value: str) -> str:
        return value.strip()

    @field_validator("streak_break_weekdays")
    @classmethod
    def validate_weekdays(cls, value: frozenset[int]) -> frozenset[int]:
        invalid = sorted(day for day in value if not 0 <= day <= 6)
        if invalid:
            raise ValueError(
                f"STREAK_BREAK_WEEKDAYS entries must be between 0 and 6, got {invalid}"
            )
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this in tests to reset settings between test cases.
    After clearing, the next get_settings() call will create
    a fresh Settings instance with current environment variables.
    """
    get_settings.cache_clear()
