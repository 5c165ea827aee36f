"""Leg 3 build orchestration.

Leagues are processed in parallel on a bounded worker pool. The two join
points are (1) all leagues done before the current round week is detected
and (2) all brackets built before the grand championship is ranked.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .bracket import build_division
from .championship import build_grand_championship
from .league import process_league
from .models import Champion, GodBracket, LeagueFailure, LeagueResult, LeagueSeeds
from .payload import assemble_payload
from .players import PlayerDirectory
from .schedule import detect_current_week, display_bracket_week, latest_score_week
from .schemas import GauntletConfig
from .seeds import SeedRegistry, load_leagues_and_seeds
from .sleeper import ScoreFeed
from .store import ResultStore

logger = logging.getLogger('gauntlet.builder')


@dataclass
class BuildResult:
    payload: dict
    results: dict[str, LeagueResult] = field(default_factory=dict)
    failures: list[LeagueFailure] = field(default_factory=list)

    @property
    def status(self) -> str:
        return self.payload['status']


def process_leagues(
    leagues: list[LeagueSeeds],
    feed: ScoreFeed,
    directory: PlayerDirectory,
    config: GauntletConfig,
) -> tuple[dict[str, LeagueResult], list[LeagueFailure]]:
    """
    Process leagues on a bounded worker pool.

    A failing league is recorded as a LeagueFailure; the others continue.
    """
    results: dict[str, LeagueResult] = {}
    failures: list[LeagueFailure] = []

    logger.info(f'Processing {len(leagues)} gauntlet leagues...')
    with ThreadPoolExecutor(max_workers=config.concurrency, thread_name_prefix='league') as executor:
        futures = {
            executor.submit(process_league, league, feed, directory, config): league
            for league in leagues
        }
        for future in as_completed(futures):
            league = futures[future]
            try:
                result = future.result()
            except Exception as e:
                logger.error(f'League {league.display_name} ({league.league_id}) failed: {e}')
                failures.append(LeagueFailure(
                    league_id=league.league_id,
                    league_name=league.league_name,
                    division=league.division,
                    god_name=league.god_name,
                    side=league.side,
                    error=str(e),
                ))
                continue
            results[result.league_id] = result

    failures.sort(key=lambda f: f.league_id)
    return results, failures


def build_gauntlet(
    config: GauntletConfig,
    registry: SeedRegistry,
    feed: ScoreFeed,
    directory: PlayerDirectory,
    store: Optional[ResultStore] = None,
    now: Optional[datetime] = None,
) -> BuildResult:
    """
    Build the Leg 3 snapshot for the configured year.

    Raises:
        SeedRegistryError: If the seed registry can't be read
        ResultStoreError: If the snapshot can't be written
    """
    logger.info(f'Building Gauntlet Leg 3 payload for {config.year}...')
    seed_data = load_leagues_and_seeds(registry, feed, config.year, config.god_order)

    for record in seed_data.missing_seeds:
        logger.warning(
            f'[{record.division} - {record.god_name} - {record.side}] '
            f'{record.league_name or record.league_id}: '
            f'{record.seeded_count}/{record.owners_count} owners seeded'
        )

    seeded = seed_data.fully_seeded_leagues
    results, failures = process_leagues(seeded, feed, directory, config) if seeded else ({}, [])

    divisions: dict[str, tuple[list[GodBracket], list[Champion]]] = {}
    grand = None
    current_week = latest_week = display_week = None

    if seeded:
        survivors = [team for result in results.values() for team in result.survivors]
        current_week = detect_current_week(survivors, config.round_weeks)
        latest_week = latest_score_week(survivors, config.round_weeks)
        display_week = display_bracket_week(
            latest_week, config.round_weeks, now=now, timezone=config.timezone
        )
        logger.info(
            f'Bracket weeks -> current round: {current_week or "none"}, '
            f'latest scores: {latest_week or "none"}, display: {display_week}'
        )

        all_champions: list[Champion] = []
        for division, gods in seed_data.division_gods.items():
            divisions[division] = build_division(
                division, gods, results, config.round_weeks, current_week,
                max_seeds=config.max_bracket_seeds,
            )
            all_champions.extend(divisions[division][1])

        grand = build_grand_championship(
            all_champions, config.grand_championship_week, config.round_weeks
        )
    else:
        logger.warning('No league is fully seeded yet; nothing to compute')

    payload = assemble_payload(
        year=config.year,
        name=config.name,
        divisions=divisions,
        grand_championship=grand,
        missing_seeds=seed_data.missing_seeds,
        fully_seeded_count=len(seeded),
        current_week=current_week,
        latest_week=latest_week,
        display_week=display_week,
        failures=failures,
        updated_at=now,
    )

    if store is not None:
        store.upsert(config.year, payload)

    return BuildResult(payload=payload, results=results, failures=failures)
