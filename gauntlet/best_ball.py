"""Best-ball lineup selection.

Slots are filled greedily in a fixed priority order:

    1 QB, 2 RB, 3 WR, 1 TE, 2 FLEX (RB/WR/TE), 1 SF (QB/RB/WR/TE)

Within a slot group the highest scorers win (ties keep feed order) and a
player locked into an earlier slot can't be reused. This mirrors the
platform's "auto-assign best lineup" rule rather than a global optimum.
"""

from typing import Mapping, Optional

from .constants import BEST_BALL_SLOTS, SLOT_ORDER
from .models import BestBallLineup, LineupPlayer
from .players import PlayerDirectory


def _to_points(value) -> float:
    try:
        return float(value if value is not None else 0)
    except (TypeError, ValueError):
        return 0.0


def build_entries(
    players_points: Mapping[str, object], directory: PlayerDirectory
) -> list[LineupPlayer]:
    """Turn a raw player id -> points map into lineup entries, preserving feed order."""
    entries = []
    for raw_id, pts in players_points.items():
        player_id = str(raw_id).strip() if raw_id is not None else ''
        if not player_id:
            continue
        info = directory.get(player_id)
        entries.append(LineupPlayer(
            player_id=player_id,
            name=directory.name(player_id),
            position=directory.position(player_id),
            points=_to_points(pts),
            team=info.get('team'),
            status=info.get('status'),
            injury_status=info.get('injury_status'),
        ))
    return entries


def compute_best_ball_lineup(
    players_points: Optional[Mapping[str, object]],
    directory: PlayerDirectory,
) -> BestBallLineup:
    """
    Compute the best-ball lineup for one roster-week.

    Args:
        players_points: Player id -> fantasy points for the week
        directory: Player directory for positions/names

    Returns:
        BestBallLineup with starters ordered by slot, unused players on the
        bench and the starters' total rounded to 2 decimals
    """
    entries = build_entries(players_points or {}, directory)

    picked: set[str] = set()
    starters: list[LineupPlayer] = []

    for slot, count, eligible in BEST_BALL_SLOTS:
        # sorted() is stable, so equal points keep feed order
        pool = sorted(
            (e for e in entries if e.position in eligible and e.player_id not in picked),
            key=lambda e: -e.points,
        )
        for entry in pool[:count]:
            picked.add(entry.player_id)
            starters.append(LineupPlayer(
                player_id=entry.player_id,
                name=entry.name,
                position=entry.position,
                points=entry.points,
                slot=slot,
                team=entry.team,
                status=entry.status,
                injury_status=entry.injury_status,
            ))

    bench = tuple(e for e in entries if e.player_id not in picked)
    starters.sort(key=lambda e: (SLOT_ORDER[e.slot], -e.points))
    total = round(sum(e.points for e in starters), 2)

    return BestBallLineup(starters=tuple(starters), bench=bench, total=total)
