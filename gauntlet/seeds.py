"""Seed registry access and league/god configuration discovery.

Seed rows come from an external registry (a JSON file or a Supabase
table through its PostgREST endpoint). Rows are grouped per league; a row
without an owner id is a manual placeholder slot for an ownerless roster.
"""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol

import requests
from pydantic import ValidationError

from .models import GodConfig, LeagueSeeds, ManualSlot, SeedCompletenessRecord
from .retry import RetryPolicy
from .schemas import SeedRow, SeedsFile
from .sleeper import FeedError, ScoreFeed
from .utils import load_json, save_json

logger = logging.getLogger('gauntlet.seeds')


class SeedRegistryError(Exception):
    """The seed registry could not be read (fatal for a run)."""


class SeedRegistry(Protocol):
    def get_seeds(self, year: int) -> list[SeedRow]: ...
    def set_league_name(self, year: int, league_id: str, name: str) -> None: ...


class JsonSeedRegistry:
    """Seed registry stored as a JSON file: {"seeds": [row, ...]}."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> SeedsFile:
        try:
            return load_json(self.path, schema=SeedsFile)
        except (FileNotFoundError, ValueError) as e:
            raise SeedRegistryError(f'Cannot read seed registry {self.path}: {e}') from e

    def get_seeds(self, year: int) -> list[SeedRow]:
        rows = self._load().seeds
        return [r for r in rows if r.year is None or str(r.year) == str(year)]

    def set_league_name(self, year: int, league_id: str, name: str) -> None:
        with self._lock:
            seeds_file = self._load()
            for row in seeds_file.seeds:
                if row.league_id == league_id and (row.year is None or str(row.year) == str(year)):
                    row.league_name = name
            save_json(self.path, seeds_file.model_dump(exclude_none=True))


class PostgrestSeedRegistry:
    """Seed registry backed by a Supabase table, read over its REST API."""

    COLUMNS = 'id,year,division,god_name,god,side,league_id,league_name,owner_id,owner_name,seed'

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = 'gauntlet_seeds',
        retry: Optional[RetryPolicy] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 20.0,
    ):
        self.url = f'{base_url.rstrip("/")}/rest/v1/{table}'
        self.retry = retry or RetryPolicy(retry_on=(requests.RequestException,))
        self.session = session or requests.Session()
        self.session.headers.update({
            'apikey': api_key,
            'Authorization': f'Bearer {api_key}',
        })
        self.timeout = timeout

    def get_seeds(self, year: int) -> list[SeedRow]:
        def fetch():
            response = self.session.get(
                self.url,
                params={'select': self.COLUMNS, 'year': f'eq.{year}'},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()

        try:
            data = self.retry.call(fetch, description=f'GET {self.url}')
            return [SeedRow(**row) for row in data]
        except requests.RequestException as e:
            raise SeedRegistryError(f'Cannot read seed registry: {e}') from e
        except ValidationError as e:
            raise SeedRegistryError(f'Invalid seed row from registry: {e}') from e

    def set_league_name(self, year: int, league_id: str, name: str) -> None:
        def update():
            response = self.session.patch(
                self.url,
                params={'year': f'eq.{year}', 'league_id': f'eq.{league_id}'},
                json={'league_name': name},
                timeout=self.timeout,
            )
            response.raise_for_status()

        self.retry.call(update, description=f'PATCH {self.url} league {league_id}')


@dataclass
class SeedData:
    """Everything loaded from the registry for one year."""
    division_gods: dict[str, list[GodConfig]] = field(default_factory=dict)
    leagues: dict[str, LeagueSeeds] = field(default_factory=dict)
    missing_seeds: list[SeedCompletenessRecord] = field(default_factory=list)

    @property
    def fully_seeded_leagues(self) -> list[LeagueSeeds]:
        return [lg for lg in self.leagues.values() if lg.fully_seeded]


def group_seed_rows(rows: list[SeedRow]) -> dict[str, LeagueSeeds]:
    """Group registry rows per league, keeping discovery order."""
    leagues: dict[str, LeagueSeeds] = {}

    for row in rows:
        league = leagues.get(row.league_id)
        if league is None:
            league = LeagueSeeds(
                league_id=row.league_id,
                league_name=row.league_name or None,
                division=row.division,
                god_name=row.unit_name,
                side=row.side,
            )
            leagues[row.league_id] = league

        if row.owner_id:
            league.seeds_by_owner[row.owner_id] = row.seed
            league.owner_names[row.owner_id] = row.owner_name or row.owner_id
        else:
            league.manual_slots.append(
                ManualSlot(row_id=row.id, owner_name=row.owner_name or 'TBD', seed=row.seed)
            )

    return leagues


def build_division_gods(
    leagues: dict[str, LeagueSeeds],
    god_order: Optional[dict[str, list[str]]] = None,
) -> dict[str, list[GodConfig]]:
    """
    Build division -> ordered god configs.

    Canonical god order comes first; gods missing from it follow in
    discovery order.
    """
    gods_by_division: dict[str, dict[str, GodConfig]] = {}

    for league in leagues.values():
        gods = gods_by_division.setdefault(league.division, {})
        god = gods.setdefault(league.god_name, GodConfig(league.division, league.god_name))
        if league.side == 'light':
            god.light_league_id = league.league_id
        elif league.side == 'dark':
            god.dark_league_id = league.league_id

    division_gods = {}
    for division, gods in gods_by_division.items():
        order = (god_order or {}).get(division, [])
        ordered = [gods[name] for name in order if name in gods]
        ordered.extend(god for name, god in gods.items() if name not in order)
        division_gods[division] = ordered

    return division_gods


def ensure_league_names(
    leagues: dict[str, LeagueSeeds],
    feed: ScoreFeed,
    registry: SeedRegistry,
    year: int,
) -> None:
    """
    Fill missing league names from the score feed and write them back.

    Best effort: a failure is logged and the league keeps its id as name.
    """
    for league in leagues.values():
        if league.league_name:
            continue
        try:
            info = feed.get_league_info(league.league_id)
        except FeedError as e:
            logger.warning(f'Could not fetch league name for {league.league_id}: {e}')
            continue

        league.league_name = info.get('name') or league.league_id
        try:
            registry.set_league_name(year, league.league_id, league.league_name)
            logger.info(f'Updated league_name for {league.league_id} -> {league.league_name}')
        except (SeedRegistryError, requests.RequestException, OSError) as e:
            logger.warning(f'Failed to store league_name for {league.league_id}: {e}')


def load_leagues_and_seeds(
    registry: SeedRegistry,
    feed: ScoreFeed,
    year: int,
    god_order: Optional[dict[str, list[str]]] = None,
) -> SeedData:
    """
    Load seeds for a year and derive league and god configuration.

    Raises:
        SeedRegistryError: If the registry can't be read or holds no rows
    """
    logger.info('Loading gauntlet seeds...')
    rows = registry.get_seeds(year)
    if not rows:
        raise SeedRegistryError(
            f'No seed rows found for {year}. Populate seeds before building.'
        )

    leagues = group_seed_rows(rows)
    ensure_league_names(leagues, feed, registry, year)

    missing = [lg.completeness_record() for lg in leagues.values() if not lg.fully_seeded]
    division_gods = build_division_gods(leagues, god_order)

    for division, gods in division_gods.items():
        logger.info(f'{division}:')
        for god in gods:
            logger.info(
                f'  - {god.god_name} (light: {god.light_league_id or "NONE"}, '
                f'dark: {god.dark_league_id or "NONE"})'
            )

    return SeedData(division_gods=division_gods, leagues=leagues, missing_seeds=missing)
