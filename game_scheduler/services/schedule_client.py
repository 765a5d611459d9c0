"""
NHL schedule client

Fetches the game schedule for a date from the NHL web API.
"""
import logging

import httpx
from pydantic import ValidationError

from game_scheduler.config import settings
from game_scheduler.schemas import Game, ScheduleResponse


logger = logging.getLogger(__name__)


class ScheduleFetchError(RuntimeError):
    """Raised when the schedule could not be retrieved or decoded"""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


def fetch_games_for_date(
    date: str,
    *,
    base_url: str | None = None,
    timeout: float | None = None,
    client: httpx.Client | None = None,
) -> list[Game]:
    """
    Retrieve games for a specific date from the NHL API

    Args:
        date: Date to query (YYYY-MM-DD)

    Keyword Args:
        base_url: API base URL (defaults to settings.nhl_api_base_url)
        timeout: HTTP timeout in seconds (defaults to settings.http_timeout_sec)
        client: Existing httpx client to reuse; a short-lived one is created otherwise

    Returns:
        Games across all week buckets, in API order

    Raises:
        ScheduleFetchError: On transport failure, non-200 status or undecodable body
    """
    url = f"{(base_url or settings.nhl_api_base_url).rstrip('/')}/schedule/{date}"
    logger.info("Fetching games from NHL API: %s", url)

    try:
        if client is not None:
            response = client.get(url)
        else:
            with httpx.Client(timeout=timeout or settings.http_timeout_sec) as owned_client:
                response = owned_client.get(url)
    except httpx.HTTPError as exc:
        raise ScheduleFetchError(f"failed to fetch schedule: {exc}") from exc

    if response.status_code != httpx.codes.OK:
        raise ScheduleFetchError(
            f"NHL API returned status: {response.status_code}",
            status_code=response.status_code,
        )

    try:
        schedule = ScheduleResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise ScheduleFetchError(f"failed to decode response: {exc}") from exc

    games = schedule.games()
    logger.info("Found %s games for date %s", len(games), date)
    return games
