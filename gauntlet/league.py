"""Per-league processing: roster build, guillotine phase and best-ball weeks."""

import logging
from typing import Any

from .best_ball import compute_best_ball_lineup
from .constants import NO_SEED
from .elimination import assign_final_seeds, run_guillotine
from .logging_config import league_context
from .models import LeagueResult, LeagueSeeds, ManualSlot, Roster
from .players import PlayerDirectory
from .schemas import GauntletConfig
from .sleeper import ScoreFeed

logger = logging.getLogger('gauntlet.league')


def week_points_from_matchups(matchups: list[dict[str, Any]]) -> dict[int, float]:
    """Sum matchup points per roster id."""
    points: dict[int, float] = {}
    for m in matchups or []:
        roster_id = m.get('roster_id')
        if roster_id is None:
            continue
        points[roster_id] = points.get(roster_id, 0.0) + float(m.get('points') or 0)
    return points


def build_rosters(
    league: LeagueSeeds,
    league_name: str,
    users: list[dict[str, Any]],
    rosters: list[dict[str, Any]],
) -> list[Roster]:
    """
    Create one Roster per feed roster, attaching registry seeds.

    Ownerless rosters take the league's manual placeholder slots in
    ascending seed order; owned rosters come first, then by roster id.
    """
    display_names = {str(u.get('user_id')): u.get('display_name') for u in users or []}
    slots: list[ManualSlot] = sorted(
        league.manual_slots, key=lambda s: s.seed if s.seed is not None else NO_SEED
    )
    slot_iter = iter(slots)

    ordered = sorted(
        rosters or [],
        key=lambda r: (0 if r.get('owner_id') else 1, r.get('roster_id') or 0),
    )

    result = []
    for raw in ordered:
        roster_id = raw.get('roster_id')
        owner_id = str(raw['owner_id']).strip() if raw.get('owner_id') else None

        if owner_id:
            owner_name = display_names.get(owner_id) or f'Owner {owner_id}'
            seed = league.seeds_by_owner.get(owner_id)
        else:
            slot = next(slot_iter, None)
            if slot is not None and slot.row_id is not None:
                owner_id = f'manual:{slot.row_id}'
            else:
                owner_id = f'manual_roster:{roster_id}'
            owner_name = ((slot.owner_name if slot else '') or 'TBD').strip() or 'TBD'
            seed = slot.seed if slot else None

        result.append(Roster(
            roster_id=roster_id,
            owner_id=owner_id,
            owner_name=owner_name,
            league_id=league.league_id,
            league_name=league_name,
            division=league.division,
            god_name=league.god_name,
            side=league.side,
            initial_seed=seed,
        ))

    return result


def score_best_ball_weeks(
    rosters: list[Roster],
    league_id: str,
    weeks: list[int],
    feed: ScoreFeed,
    directory: PlayerDirectory,
) -> None:
    """Record best-ball lineups and totals for alive rosters, week by week."""
    by_id = {r.roster_id: r for r in rosters}

    for week in weeks:
        matchups = feed.get_week_matchups(league_id, week)
        if not matchups:
            logger.debug(f'Week {week}: no matchups (best ball)')
            continue

        for m in matchups:
            roster = by_id.get(m.get('roster_id'))
            if roster is None or not roster.alive:
                continue
            lineup = compute_best_ball_lineup(m.get('players_points') or {}, directory)
            roster.best_ball_lineups[week] = lineup
            roster.best_ball_scores[week] = lineup.total


def league_label(league: LeagueSeeds) -> str:
    return f'{league.division}/{league.god_name}/{league.side} {league.league_id}'


def process_league(
    league: LeagueSeeds,
    feed: ScoreFeed,
    directory: PlayerDirectory,
    config: GauntletConfig,
) -> LeagueResult:
    """
    Process one fully seeded league end to end.

    Log records emitted while processing are tagged with the league label.

    Raises:
        FeedError: If a score-feed call fails after retries
    """
    with league_context(league_label(league)):
        info = feed.get_league_info(league.league_id)
        league_name = info.get('name') or league.display_name
        logger.info(f'Processing {league_name}')

        users = feed.get_users(league.league_id)
        raw_rosters = feed.get_rosters(league.league_id)
        rosters = build_rosters(league, league_name, users, raw_rosters)

        for r in sorted(rosters, key=lambda r: r.seed):
            logger.debug(f'Seed {r.initial_seed or "??":>2} - {r.owner_name} ({r.owner_id})')

        events = run_guillotine(
            rosters,
            config.guillotine_weeks,
            lambda week: week_points_from_matchups(feed.get_week_matchups(league.league_id, week)),
            survivor_target=config.survivor_target,
        )
        survivors = assign_final_seeds(rosters)

        score_best_ball_weeks(rosters, league.league_id, config.best_ball_weeks, feed, directory)

    return LeagueResult(
        league_id=league.league_id,
        league_name=league_name,
        division=league.division,
        god_name=league.god_name,
        side=league.side,
        survivors=survivors,
        eliminated=[r for r in rosters if not r.alive],
        events=events,
    )
