"""Result store: whole-snapshot upsert keyed by year, plus split exports."""

import logging
from pathlib import Path
from typing import Any, Optional, Protocol

from .utils import load_json_safe, save_json, slugify

logger = logging.getLogger('gauntlet.store')


class ResultStoreError(Exception):
    """The snapshot could not be written (fatal for a run)."""


class ResultStore(Protocol):
    def upsert(self, year: int, payload: dict[str, Any]) -> None: ...


class JsonResultStore:
    """
    Snapshots stored as JSON files under a directory.

    Layout:
        <root>/gauntlet_leg3_<year>.json            full snapshot
        <root>/gauntlet_leg3_<year>.manifest.json   split manifest
        <root>/<year>/<division-slug>.json          one file per division
        <root>/<year>/grand.json                    grand championship
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def snapshot_path(self, year: int) -> Path:
        return self.root / f'gauntlet_leg3_{year}.json'

    def manifest_path(self, year: int) -> Path:
        return self.root / f'gauntlet_leg3_{year}.manifest.json'

    def _write(self, path: Path, data: Any) -> None:
        try:
            save_json(path, data)
        except (OSError, TypeError) as e:
            raise ResultStoreError(f'Failed to write {path}: {e}') from e

    def upsert(self, year: int, payload: dict[str, Any]) -> None:
        """Replace the year's snapshot with a complete new document."""
        path = self.snapshot_path(year)
        self._write(path, payload)
        logger.info(f'Wrote Leg 3 snapshot: {path}')

    def read(self, year: int) -> Optional[dict[str, Any]]:
        return load_json_safe(self.snapshot_path(year))

    def write_split(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Export one file per division, one for the grand championship and a
        manifest pointing at them. Returns the manifest.
        """
        year = payload['year']
        base = {'year': year, 'updatedAt': payload['updatedAt'],
                'currentBracketWeek': payload.get('currentBracketWeek')}
        grand_key = f'{year}/grand.json'

        manifest = {
            'name': payload['name'],
            **base,
            'divisions': {},
            'grand': {'key': grand_key},
            'missingSeedLeaguesSummary': [
                {k: v for k, v in m.items() if k != 'missingOwners'}
                for m in payload.get('missingSeeds', [])
            ],
        }

        for division, data in payload['divisions'].items():
            slug = slugify(division)
            key = f'{year}/{slug}.json'
            gods = data.get('gods', [])
            champions = data.get('champions', [])
            self._write(self.root / key, {**base, 'division': division,
                                          'gods': gods, 'champions': champions})
            manifest['divisions'][division] = {
                'key': key,
                'slug': slug,
                'godsCount': len(gods),
                'championsCount': len(champions),
            }
            logger.info(f'Wrote division file: {division} -> {key}')

        self._write(self.root / grand_key, {**base, **(payload.get('grandChampionship') or {})})
        self._write(self.manifest_path(year), manifest)
        logger.info(f'Wrote split manifest: {self.manifest_path(year)}')
        return manifest
