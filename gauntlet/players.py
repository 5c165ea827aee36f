"""Player directory used to position and label best-ball entries."""

import logging
from pathlib import Path
from typing import Any, Optional

from .utils import load_json, save_json

logger = logging.getLogger('gauntlet.players')


class PlayerDirectory:
    """Lookup of player id -> {position, fantasy_positions, full_name, team, ...}."""

    def __init__(self, players: Optional[dict[str, dict[str, Any]]] = None):
        self._players = {str(k).strip(): v or {} for k, v in (players or {}).items()}

    def __len__(self) -> int:
        return len(self._players)

    def get(self, player_id: str) -> dict[str, Any]:
        return self._players.get(str(player_id).strip(), {})

    def position(self, player_id: str) -> str:
        """Primary position, falling back to the first fantasy position."""
        info = self.get(player_id)
        fantasy_positions = info.get('fantasy_positions') or []
        pos = info.get('position') or (fantasy_positions[0] if fantasy_positions else '')
        return str(pos or '').upper()

    def name(self, player_id: str) -> str:
        info = self.get(player_id)
        full_name = info.get('full_name')
        if not full_name and (info.get('first_name') or info.get('last_name')):
            full_name = f"{info.get('first_name', '')} {info.get('last_name', '')}".strip()
        return full_name or str(player_id)

    @classmethod
    def from_file(cls, path: Path | str) -> 'PlayerDirectory':
        """Load a cached directory written by save()."""
        players = load_json(path)
        logger.info(f'Loaded {len(players)} players from {path}')
        return cls(players)

    def save(self, path: Path | str) -> None:
        save_json(path, self._players, indent=None)
