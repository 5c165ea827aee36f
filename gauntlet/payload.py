"""Snapshot assembly: divisions, grand championship and seed status."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from .models import Champion, GodBracket, GrandChampionship, LeagueFailure, SeedCompletenessRecord
from .schemas import SnapshotFile

STATUS_OK = 'ok'
STATUS_PARTIAL = 'partial'
STATUS_MISSING_SEEDS = 'missing_seeds'


def snapshot_status(missing_seeds: list[SeedCompletenessRecord], fully_seeded_count: int) -> str:
    """
    ok: nothing missing; partial: some leagues unseeded but at least one
    fully seeded league processed; missing_seeds: nothing to compute.
    """
    if not missing_seeds:
        return STATUS_OK
    if fully_seeded_count > 0:
        return STATUS_PARTIAL
    return STATUS_MISSING_SEEDS


def assemble_payload(
    year: int,
    name: str,
    divisions: dict[str, tuple[list[GodBracket], list[Champion]]],
    grand_championship: Optional[GrandChampionship],
    missing_seeds: list[SeedCompletenessRecord],
    fully_seeded_count: int,
    current_week: Optional[int] = None,
    latest_week: Optional[int] = None,
    display_week: Optional[int] = None,
    failures: Optional[list[LeagueFailure]] = None,
    updated_at: Optional[datetime] = None,
) -> dict:
    """
    Merge every computed section into one snapshot document.

    Raises:
        ValueError: If the assembled document fails schema validation
    """
    updated_at = updated_at or datetime.now(timezone.utc)

    payload = {
        'year': year,
        'name': f'{name} ({year})',
        'updatedAt': updated_at.isoformat(),
        'status': snapshot_status(missing_seeds, fully_seeded_count),
        'currentRoundWeek': current_week,
        'latestScoreWeek': latest_week,
        'currentBracketWeek': display_week,
        'missingSeeds': [m.to_dict() for m in missing_seeds],
        'failedLeagues': [f.to_dict() for f in failures or []],
        'divisions': {
            division: {
                'gods': [g.to_dict() for g in gods],
                'champions': [c.to_dict() for c in champions],
            }
            for division, (gods, champions) in divisions.items()
        },
        'grandChampionship': grand_championship.to_dict() if grand_championship else None,
    }

    validate_snapshot(payload)
    return payload


def validate_snapshot(payload: dict) -> SnapshotFile:
    try:
        return SnapshotFile(**payload)
    except ValidationError as e:
        raise ValueError(f'Invalid snapshot document:\n{e}') from e
