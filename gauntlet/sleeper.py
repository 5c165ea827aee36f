"""Score feed backed by the Sleeper public API."""

import logging
from typing import Any, Optional, Protocol

import requests

from .constants import SLEEPER_BASE_URL
from .retry import RetryPolicy

logger = logging.getLogger('gauntlet.sleeper')


class FeedError(Exception):
    """A score-feed request failed after all retry attempts."""


class ScoreFeed(Protocol):
    """Read-only per-league, per-week score source."""

    def get_league_info(self, league_id: str) -> dict[str, Any]: ...
    def get_users(self, league_id: str) -> list[dict[str, Any]]: ...
    def get_rosters(self, league_id: str) -> list[dict[str, Any]]: ...
    def get_week_matchups(self, league_id: str, week: int) -> list[dict[str, Any]]: ...


class SleeperClient:
    """
    Thin Sleeper API client.

    Every request goes through the retry policy; a request that still fails
    is raised as FeedError so the enclosing league task can fail on its own.
    """

    def __init__(
        self,
        base_url: str = SLEEPER_BASE_URL,
        retry: Optional[RetryPolicy] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 20.0,
    ):
        self.base_url = base_url.rstrip('/')
        self.retry = retry or RetryPolicy(retry_on=(requests.RequestException,))
        self.session = session or requests.Session()
        self.timeout = timeout

    def _get(self, path: str) -> Any:
        url = f'{self.base_url}/{path.lstrip("/")}'

        def fetch():
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        try:
            return self.retry.call(fetch, description=f'GET {url}')
        except requests.RequestException as e:
            raise FeedError(f'Sleeper request failed: {url}: {e}') from e

    def get_league_info(self, league_id: str) -> dict[str, Any]:
        return self._get(f'league/{league_id}') or {}

    def get_users(self, league_id: str) -> list[dict[str, Any]]:
        return self._get(f'league/{league_id}/users') or []

    def get_rosters(self, league_id: str) -> list[dict[str, Any]]:
        return self._get(f'league/{league_id}/rosters') or []

    def get_week_matchups(self, league_id: str, week: int) -> list[dict[str, Any]]:
        """Matchup rows for a week; an empty list means no data yet."""
        return self._get(f'league/{league_id}/matchups/{week}') or []

    def get_players(self) -> dict[str, dict[str, Any]]:
        """Full NFL player directory (large; load once per run)."""
        logger.info('Fetching Sleeper players directory...')
        return self._get('players/nfl') or {}
