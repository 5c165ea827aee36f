"""Guillotine elimination phase.

Each week of the window removes exactly one alive roster until the pool is
down to the survivor target. The eliminee is chosen by, in order:

1. a roster with an explicit zero in the following week,
2. a roster scored this week but absent from the following week's feed,
3. the lowest score this week.

Every rule breaks ties on the worst initial seed (a missing seed is the
worst), then on the greatest owner id.
"""

import logging
from typing import Callable, Mapping, Optional

from .constants import NO_SEED
from .models import EliminationEvent, Roster

logger = logging.getLogger('gauntlet.elimination')

WeekScores = Callable[[int], Mapping[int, float]]

NEXT_WEEK_ZERO = 'next_week_zero'
NEXT_WEEK_MISSING = 'next_week_missing'
LOWEST_SCORE = 'lowest_score'


def elimination_order_key(roster: Roster) -> tuple[int, str]:
    """Larger key = eliminated first among tied candidates."""
    seed = roster.initial_seed if roster.initial_seed is not None else NO_SEED
    return seed, roster.owner_id


def worst_seeded(candidates: list[Roster]) -> Roster:
    return max(candidates, key=elimination_order_key)


def final_seed_order_key(roster: Roster) -> tuple[int, str, str]:
    seed = roster.initial_seed if roster.initial_seed is not None else NO_SEED
    return seed, roster.owner_name or '', roster.owner_id


def choose_eliminee(
    alive: list[Roster],
    week_points: Mapping[int, float],
    next_week: Mapping[int, float],
) -> tuple[Optional[Roster], Optional[str]]:
    """
    Pick the roster to eliminate for a week.

    Args:
        alive: Rosters alive at the start of the week
        week_points: roster id -> score this week (alive rosters only)
        next_week: roster id -> score the following week (full feed)

    Returns:
        (eliminee, reason), or (None, None) when nobody can be chosen
    """
    if next_week:
        zero_scorers = [
            r for r in alive if r.roster_id in next_week and next_week[r.roster_id] == 0
        ]
        if zero_scorers:
            return worst_seeded(zero_scorers), NEXT_WEEK_ZERO

        disappeared = [
            r for r in alive if r.roster_id in week_points and r.roster_id not in next_week
        ]
        if disappeared:
            return worst_seeded(disappeared), NEXT_WEEK_MISSING

    if not week_points:
        return None, None

    low = min(week_points.values())
    lowest = [r for r in alive if week_points.get(r.roster_id) == low]
    return worst_seeded(lowest), LOWEST_SCORE


def run_guillotine(
    rosters: list[Roster],
    weeks: list[int],
    week_scores: WeekScores,
    survivor_target: int = 8,
) -> list[EliminationEvent]:
    """
    Run the elimination window over a league's rosters.

    Mutates each eliminated roster's elimination_week and records weekly
    guillotine scores on alive rosters. Weeks are processed in ascending
    order; the phase stops early once the pool is at or below the survivor
    target or when a week has no data.

    Args:
        rosters: All rosters of the league
        weeks: Ordered elimination weeks
        week_scores: Callable returning roster id -> points for a week
            (empty mapping when the feed has nothing for that week)
        survivor_target: Pool size at which eliminations stop

    Returns:
        Elimination events in the order they happened
    """
    cache: dict[int, Mapping[int, float]] = {}

    def scores(week: int) -> Mapping[int, float]:
        if week not in cache:
            cache[week] = week_scores(week) or {}
        return cache[week]

    events: list[EliminationEvent] = []

    for week in sorted(weeks):
        alive = [r for r in rosters if r.alive]
        if len(alive) <= survivor_target:
            logger.info(f'{len(alive)} alive before week {week}, no more eliminations')
            break

        current = scores(week)
        if not current:
            logger.info(f'Week {week}: no matchups, stopping guillotine early')
            break

        week_points = {r.roster_id: current[r.roster_id] for r in alive if r.roster_id in current}
        for r in alive:
            if r.roster_id in week_points:
                r.guillotine_scores[week] = week_points[r.roster_id]

        eliminee, reason = choose_eliminee(alive, week_points, scores(week + 1))
        if eliminee is None:
            logger.info(f'Week {week}: no scores for alive rosters, cannot eliminate')
            break

        eliminee.elimination_week = week
        event = EliminationEvent(
            week=week,
            roster_id=eliminee.roster_id,
            owner_id=eliminee.owner_id,
            owner_name=eliminee.owner_name,
            initial_seed=eliminee.initial_seed,
            reason=reason,
            score=week_points.get(eliminee.roster_id),
            alive_after=len(alive) - 1,
        )
        events.append(event)
        logger.info(
            f'Week {week} eliminated {eliminee.owner_name} '
            f'(seed {eliminee.initial_seed or "??"}, {reason}), {event.alive_after} alive'
        )

    return events


def assign_final_seeds(rosters: list[Roster]) -> list[Roster]:
    """
    Give every surviving roster a dense final seed 1..N.

    Survivors are ordered by initial seed, then owner name (owner id as a
    last resort). Returns the survivors in final-seed order.
    """
    survivors = sorted((r for r in rosters if r.alive), key=final_seed_order_key)
    for idx, roster in enumerate(survivors, start=1):
        roster.final_seed = idx
    return survivors
