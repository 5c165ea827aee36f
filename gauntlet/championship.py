"""Grand championship: every god champion ranked on one extra week."""

from dataclasses import replace

from .constants import NO_SEED
from .models import Champion, GrandChampionship, GrandParticipant


def build_grand_championship(
    champions: list[Champion], week: int, round_weeks: list[int]
) -> GrandChampionship:
    """
    Rank god champions for the grand championship week.

    Order: week score desc, cumulative round-week score desc, final seed
    asc. Remaining ties keep the input order.

    Args:
        champions: Champions from every division, in division/god order
        week: Grand championship week
        round_weeks: Bracket round weeks summed into the cumulative score

    Returns:
        GrandChampionship (empty participants/standings without champions)
    """
    participants = []
    for champ in champions:
        team = champ.team
        participants.append(GrandParticipant(
            division=champ.division,
            god_name=champ.god_name,
            league_id=team.league_id,
            league_name=team.league_name,
            roster_id=team.roster_id,
            owner_id=team.owner_id,
            owner_name=team.owner_name,
            seed=team.final_seed,
            cumulative_score=round(sum(team.week_score(w) for w in round_weeks), 2),
            week_score=team.week_score(week),
            lineup=team.lineup(week),
        ))

    ranked = sorted(
        participants,
        key=lambda p: (-p.week_score, -p.cumulative_score, p.seed if p.seed is not None else NO_SEED),
    )
    standings = [replace(p, rank=idx) for idx, p in enumerate(ranked, start=1)]

    return GrandChampionship(week=week, participants=participants, standings=standings)
