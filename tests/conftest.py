"""Shared fixtures: in-memory score feed, roster factory and player directory."""

import pytest

from gauntlet.models import Roster
from gauntlet.players import PlayerDirectory
from gauntlet.sleeper import FeedError


class FakeFeed:
    """In-memory ScoreFeed; league ids in ``failing`` raise FeedError."""

    def __init__(self):
        self.leagues = {}
        self.matchups = {}
        self.failing = set()
        self.info_calls = []

    def add_league(self, league_id, name, owners):
        """owners: list of (roster_id, owner_id or None, display_name or None)."""
        self.leagues[league_id] = {
            'name': name,
            'users': [
                {'user_id': owner_id, 'display_name': display}
                for _, owner_id, display in owners
                if owner_id and display
            ],
            'rosters': [
                {'roster_id': roster_id, 'owner_id': owner_id}
                for roster_id, owner_id, _ in owners
            ],
        }

    def set_week(self, league_id, week, points, players_points=None):
        """points: roster_id -> total; players_points: roster_id -> {player_id: pts}."""
        players_points = players_points or {}
        self.matchups[(league_id, week)] = [
            {
                'roster_id': roster_id,
                'points': pts,
                'players_points': players_points.get(roster_id, {}),
            }
            for roster_id, pts in points.items()
        ]

    def _check(self, league_id):
        if league_id in self.failing:
            raise FeedError(f'Sleeper request failed for league {league_id}')

    def get_league_info(self, league_id):
        self.info_calls.append(league_id)
        self._check(league_id)
        league = self.leagues.get(league_id, {})
        return {'name': league.get('name')} if league else {}

    def get_users(self, league_id):
        self._check(league_id)
        return self.leagues[league_id]['users']

    def get_rosters(self, league_id):
        self._check(league_id)
        return self.leagues[league_id]['rosters']

    def get_week_matchups(self, league_id, week):
        self._check(league_id)
        return self.matchups.get((league_id, week), [])


@pytest.fixture
def fake_feed():
    return FakeFeed()


@pytest.fixture
def make_roster():
    """Factory for Roster objects with sensible defaults."""

    def _make(roster_id, seed=None, owner_name=None, owner_id=None, side='light',
              league_id='L1', final_seed=None, best_ball=None):
        roster = Roster(
            roster_id=roster_id,
            owner_id=owner_id or f'{league_id}-o{roster_id}',
            owner_name=owner_name or f'Owner {roster_id:02d}',
            league_id=league_id,
            league_name=f'League {league_id}',
            division='Greeks',
            god_name='Zeus',
            side=side,
            initial_seed=seed,
            final_seed=final_seed,
        )
        for week, pts in (best_ball or {}).items():
            roster.best_ball_scores[week] = pts
        return roster

    return _make


@pytest.fixture
def directory():
    """Small player directory covering every position the lineup uses."""
    return PlayerDirectory({
        'qb1': {'position': 'QB', 'full_name': 'Josh Allen', 'team': 'BUF'},
        'qb2': {'position': 'QB', 'full_name': 'Jalen Hurts', 'team': 'PHI'},
        'rb1': {'position': 'RB', 'full_name': 'Bijan Robinson', 'team': 'ATL'},
        'rb2': {'position': 'RB', 'full_name': 'Saquon Barkley', 'team': 'PHI'},
        'rb3': {'position': 'RB', 'full_name': 'Jahmyr Gibbs', 'team': 'DET'},
        'wr1': {'position': 'WR', 'full_name': "Ja'Marr Chase", 'team': 'CIN'},
        'wr2': {'position': 'WR', 'full_name': 'CeeDee Lamb', 'team': 'DAL'},
        'wr3': {'position': 'WR', 'full_name': 'Puka Nacua', 'team': 'LAR'},
        'wr4': {'position': 'WR', 'full_name': 'Nico Collins', 'team': 'HOU'},
        'wr5': {'position': 'WR', 'full_name': 'Drake London', 'team': 'ATL'},
        'te1': {'position': 'TE', 'full_name': 'Trey McBride', 'team': 'ARI'},
        'te2': {'position': 'TE', 'full_name': 'Brock Bowers', 'team': 'LV'},
        'k1': {'position': 'K', 'full_name': 'Brandon Aubrey', 'team': 'DAL'},
        'flex1': {'fantasy_positions': ['WR', 'RB'], 'full_name': 'Deebo Samuel', 'team': 'WAS',
                  'injury_status': 'Questionable'},
    })
