"""God brackets: fixed single elimination between a light and a dark league.

Round 1 pairs light seed s with dark seed (N - s + 1) and never re-seeds.
Each later round pairs the previous round's winners two at a time in
bracket order. A round is simulated only up to the global current week,
only shown once at least one of its matches has points, and only advanced
once every match in it has a winner.
"""

import logging
from typing import Optional

from .models import (
    BracketRound,
    Champion,
    GodBracket,
    GodConfig,
    LeagueResult,
    MatchResult,
    Pairing,
    Roster,
)
from .schedule import week_has_scores

logger = logging.getLogger('gauntlet.bracket')


def round_one_pairings(
    light_teams: list[Roster], dark_teams: list[Roster], max_seeds: int
) -> list[Pairing]:
    """Light seed s vs dark seed (max_seeds - s + 1) for s = 1..max_seeds."""
    light_by_seed = {t.seed: t for t in light_teams}
    dark_by_seed = {t.seed: t for t in dark_teams}

    pairings = []
    for s in range(1, max_seeds + 1):
        light = light_by_seed.get(s)
        dark = dark_by_seed.get(max_seeds - s + 1)
        if light is None or dark is None:
            continue
        pairings.append(Pairing(match_index=s, team_a=light, team_b=dark))
    return pairings


def decide_match(pairing: Pairing, round_number: int, week: int, match_index: int) -> MatchResult:
    """
    Score one match for a week.

    Higher best-ball score wins; ties go to the better (lower) seed, then
    the alphabetically earlier owner name. A match where neither side has
    points yet has no winner.
    """
    a, b = pairing.team_a, pairing.team_b
    result = MatchResult(
        round_number=round_number,
        week=week,
        match_index=match_index,
        team_a=a,
        team_b=b,
        score_a=a.week_score(week),
        score_b=b.week_score(week),
        lineup_a=a.lineup(week),
        lineup_b=b.lineup(week),
    )
    if not result.has_score:
        return result

    if result.score_a != result.score_b:
        a_wins = result.score_a > result.score_b
    elif a.seed != b.seed:
        a_wins = a.seed < b.seed
    else:
        a_wins = (a.owner_name or '') <= (b.owner_name or '')

    result.winner, result.loser = (a, b) if a_wins else (b, a)
    return result


def next_round_pairings(winners: list[Roster]) -> list[Pairing]:
    """Pair winners two at a time in bracket order."""
    return [
        Pairing(match_index=i // 2 + 1, team_a=winners[i], team_b=winners[i + 1])
        for i in range(0, len(winners) - 1, 2)
    ]


def rounds_to_simulate(current_week: Optional[int], round_weeks: list[int]) -> int:
    if current_week is None or current_week not in round_weeks:
        return 0
    return round_weeks.index(current_week) + 1


def simulate_rounds(
    pairings: list[Pairing], round_weeks: list[int], current_week: Optional[int]
) -> list[BracketRound]:
    """Simulate rounds from the round-1 pairings up to the current week."""
    rounds: list[BracketRound] = []
    current = list(pairings)

    for idx in range(rounds_to_simulate(current_week, round_weeks)):
        if not current:
            break
        week = round_weeks[idx]
        bracket_round = BracketRound(
            round_number=idx + 1,
            week=week,
            results=[decide_match(p, idx + 1, week, i) for i, p in enumerate(current, start=1)],
        )
        if not any(r.has_score for r in bracket_round.results):
            break

        rounds.append(bracket_round)
        if not bracket_round.resolved:
            break
        current = next_round_pairings(bracket_round.winners)

    return rounds


def find_champion(
    god_name: str,
    division: str,
    rounds: list[BracketRound],
    teams: list[Roster],
    round_weeks: list[int],
) -> Optional[Champion]:
    """
    Champion of a god bracket, or None.

    Requires every scheduled round to be simulated, the last round to have
    exactly one winner, and a nonzero score among the god's teams in every
    round week.
    """
    if len(rounds) != len(round_weeks):
        return None
    final = rounds[-1]
    if not final.resolved or len(final.winners) != 1:
        return None
    if not all(week_has_scores(teams, week) for week in round_weeks):
        return None
    return Champion(
        god_name=god_name,
        division=division,
        team=final.winners[0],
        winning_round=final.round_number,
        winning_week=final.week,
    )


def build_god_bracket(
    index: int,
    god: GodConfig,
    light: Optional[LeagueResult],
    dark: Optional[LeagueResult],
    round_weeks: list[int],
    current_week: Optional[int],
    max_seeds: int = 8,
) -> GodBracket:
    """Build one god's bracket from its processed light and dark leagues."""
    bracket = GodBracket(
        index=index,
        god_name=god.god_name,
        division=god.division,
        light_league_id=god.light_league_id,
        light_league_name=light.league_name if light else None,
        dark_league_id=god.dark_league_id,
        dark_league_name=dark.league_name if dark else None,
    )
    if light is None or dark is None:
        return bracket

    bracket.light_seeds = sorted(light.survivors, key=lambda t: t.seed)
    bracket.dark_seeds = sorted(dark.survivors, key=lambda t: t.seed)

    seeds = min(max_seeds, len(bracket.light_seeds), len(bracket.dark_seeds))
    if seeds == 0:
        return bracket

    bracket.pairings = round_one_pairings(bracket.light_seeds, bracket.dark_seeds, seeds)
    bracket.rounds = simulate_rounds(bracket.pairings, round_weeks, current_week)
    bracket.champion = find_champion(
        god.god_name,
        god.division,
        bracket.rounds,
        bracket.light_seeds + bracket.dark_seeds,
        round_weeks,
    )
    if bracket.champion:
        logger.info(
            f'{god.division} - {god.god_name} champion: {bracket.champion.team.owner_name}'
        )
    return bracket


def build_division(
    division: str,
    gods: list[GodConfig],
    results_by_league: dict[str, LeagueResult],
    round_weeks: list[int],
    current_week: Optional[int],
    max_seeds: int = 8,
) -> tuple[list[GodBracket], list[Champion]]:
    """Build every god bracket of a division, in canonical god order."""
    brackets = []
    for index, god in enumerate(gods, start=1):
        light = results_by_league.get(god.light_league_id) if god.light_league_id else None
        dark = results_by_league.get(god.dark_league_id) if god.dark_league_id else None
        brackets.append(
            build_god_bracket(index, god, light, dark, round_weeks, current_week, max_seeds)
        )
    champions = [b.champion for b in brackets if b.champion is not None]
    return brackets, champions
