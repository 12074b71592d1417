"""Pydantic schemas for contribution data and derived statistics."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class ActivityDay(BaseModel):
    """One calendar day (UTC) with its contribution count."""

    model_config = ConfigDict(frozen=True)

    date: date
    count: int = Field(ge=0)

    @property
    def is_active(self) -> bool:
        return self.count > 0


class DateRange(BaseModel):
    """Inclusive date range. Both bounds are None when the range is undefined."""

    model_config = ConfigDict(frozen=True)

    start: date | None = None
    end: date | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None or self.end is None


class ContributionStats(BaseModel):
    """Statistics derived from a contribution day series.

    Recomputed on every run and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    total: int = 0
    longest_streak: int = 0
    current_streak: int = 0
    longest_range: DateRange = Field(default_factory=DateRange)
    current_range: DateRange = Field(default_factory=DateRange)
    overall_range: DateRange = Field(default_factory=DateRange)
