"""Contribution calendar fetching from the GitHub GraphQL API.

Builds the full day series for a login:
- Lists the years with any recorded contributions
- Requests each year's calendar in ascending order, one request at a time
- Clips the current year at "now" and drops any day after it

No retries: the first failed request aborts the run.
"""

import json
from datetime import UTC, date, datetime
from typing import Any

import httpx

from core import get_logger
from core.config import get_settings
from core.github_client import get_github_client
from schemas import ActivityDay

logger = get_logger(__name__)

CONTRIBUTION_YEARS_QUERY = """
query ($login: String!) {
  user(login: $login) {
    contributionsCollection {
      contributionYears
    }
  }
}
"""

CONTRIBUTION_CALENDAR_QUERY = """
query ($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


class MissingCredentialError(Exception):
    """Raised when no GitHub token is configured."""


class NoDataError(Exception):
    """Raised when the login has no contribution years."""


class FetchError(Exception):
    """Raised when a GitHub request fails or returns GraphQL errors."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(Exception):
    """Raised when a successful response lacks the calendar or day fields."""


def _isoformat_utc(moment: datetime) -> str:
    iso = moment.astimezone(UTC).isoformat(timespec="seconds")
    return iso.replace("+00:00", "Z")


def _year_window(year: int, now: datetime) -> tuple[str, str]:
    """Return the (from, to) DateTime strings for one year's calendar."""
    start = datetime(year, 1, 1, tzinfo=UTC)
    if year == now.year:
        end = now
    else:
        end = datetime(year, 12, 31, 23, 59, 59, tzinfo=UTC)
    return _isoformat_utc(start), _isoformat_utc(end)


async def graphql_request(
    token: str, query: str, variables: dict[str, Any]
) -> dict[str, Any]:
    """POST a GraphQL query and return its ``data`` object.

    Raises:
        MissingCredentialError: If token is empty
        FetchError: On transport failure, non-2xx status, or GraphQL errors
    """
    if not token:
        raise MissingCredentialError(
            "GITHUB_TOKEN is required to call the GitHub GraphQL API."
        )

    settings = get_settings()
    client = get_github_client()

    try:
        response = await client.post(
            settings.github_graphql_url,
            json={"query": query, "variables": variables},
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        )
    except httpx.HTTPError as e:
        raise FetchError(f"GitHub API request failed: {e}") from e

    if not response.is_success:
        raise FetchError(
            "GitHub API request failed: "
            f"{response.status_code} {response.reason_phrase} - {response.text}",
            status_code=response.status_code,
        )

    try:
        body = response.json()
    except ValueError as e:
        raise MalformedResponseError(
            f"GitHub API returned a non-JSON body: {response.text[:200]}"
        ) from e

    if not isinstance(body, dict):
        raise MalformedResponseError("GitHub API returned an unexpected payload.")

    if body.get("errors"):
        raise FetchError(
            f"GitHub API returned errors: {json.dumps(body['errors'])}",
            status_code=response.status_code,
        )

    return body.get("data") or {}


def _contributions_collection(data: dict[str, Any]) -> dict[str, Any]:
    """Return ``user.contributionsCollection``, or {} when the user is absent."""
    user = data.get("user") or {}
    if not isinstance(user, dict):
        raise MalformedResponseError("GitHub API returned a non-object user.")
    collection = user.get("contributionsCollection") or {}
    if not isinstance(collection, dict):
        raise MalformedResponseError(
            "GitHub API returned a non-object contributionsCollection."
        )
    return collection


async def fetch_contribution_years(token: str, login: str) -> list[int]:
    """Return the years with recorded contributions (empty if none reported)."""
    data = await graphql_request(token, CONTRIBUTION_YEARS_QUERY, {"login": login})
    years = _contributions_collection(data).get("contributionYears")
    if not isinstance(years, list):
        return []
    try:
        return [int(year) for year in years]
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(
            f"Contribution years are not integers: {years!r}"
        ) from e


async def fetch_contribution_calendar(
    token: str, login: str, from_: str, to: str
) -> dict[str, Any]:
    """Return the ``contributionCalendar`` object for a DateTime window."""
    data = await graphql_request(
        token,
        CONTRIBUTION_CALENDAR_QUERY,
        {"login": login, "from": from_, "to": to},
    )
    calendar = _contributions_collection(data).get("contributionCalendar")
    if not isinstance(calendar, dict) or not calendar:
        raise MalformedResponseError(
            "Contribution calendar not found in the API response."
        )
    return calendar


def _to_count(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def parse_calendar_days(calendar: dict[str, Any]) -> list[ActivityDay]:
    """Flatten ``weeks[].contributionDays[]`` into ActivityDay records."""
    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise MalformedResponseError("Contribution calendar has no weeks.")

    days: list[ActivityDay] = []
    for week in weeks:
        if not isinstance(week, dict):
            raise MalformedResponseError(f"Calendar week is not an object: {week!r}")
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            raise MalformedResponseError("Calendar week has no contributionDays.")
        for day in contribution_days:
            if not isinstance(day, dict) or "date" not in day:
                raise MalformedResponseError("Contribution day is missing its date.")
            try:
                day_date = date.fromisoformat(day["date"])
            except (TypeError, ValueError) as e:
                raise MalformedResponseError(
                    f"Contribution day has an invalid date: {day['date']!r}"
                ) from e
            days.append(
                ActivityDay(
                    date=day_date,
                    count=_to_count(day.get("contributionCount")),
                )
            )
    return days


async def fetch_contribution_days(
    token: str, login: str, now: datetime | None = None
) -> list[ActivityDay]:
    """Fetch every contribution day for login, ascending, none after now.

    Raises:
        MissingCredentialError: If token is empty
        NoDataError: If the login has no contribution years
        FetchError: If any request fails
        MalformedResponseError: If a calendar lacks expected fields
    """
    if not token:
        raise MissingCredentialError(
            "GITHUB_TOKEN is required to call the GitHub GraphQL API."
        )

    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        # Naive datetimes are UTC, not local time
        now = now.replace(tzinfo=UTC)
    now = now.astimezone(UTC)
    today = now.date()

    years = await fetch_contribution_years(token, login)
    if not years:
        raise NoDataError(f"No contribution years found for {login}.")

    logger.info("contributions.years_fetched", login=login, years=sorted(years))

    days: list[ActivityDay] = []
    for year in sorted(set(years)):
        from_, to = _year_window(year, now)
        calendar = await fetch_contribution_calendar(token, login, from_, to)
        year_days = parse_calendar_days(calendar)
        logger.debug(
            "contributions.calendar_fetched", year=year, days=len(year_days)
        )
        days.extend(year_days)

    by_date: dict[date, ActivityDay] = {}
    for day in days:
        if day.date <= today:
            by_date.setdefault(day.date, day)

    return [by_date[key] for key in sorted(by_date)]
