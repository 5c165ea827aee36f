"""Data models for the Gauntlet Leg 3 engine."""

from dataclasses import dataclass, field
from typing import Optional

from .constants import NO_SEED


@dataclass(frozen=True)
class LineupPlayer:
    """A scored player inside a best-ball lineup (starter or bench)."""
    player_id: str
    name: str
    position: str
    points: float
    slot: Optional[str] = None  # None for bench players
    team: Optional[str] = None
    status: Optional[str] = None
    injury_status: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'id': self.player_id,
            'name': self.name,
            'pos': self.position,
            'points': self.points,
            'team': self.team,
            'status': self.status,
            'injuryStatus': self.injury_status,
        }
        if self.slot is not None:
            data['slot'] = self.slot
        return data


@dataclass(frozen=True)
class BestBallLineup:
    """Auto-selected lineup for one roster-week."""
    starters: tuple[LineupPlayer, ...] = ()
    bench: tuple[LineupPlayer, ...] = ()
    total: float = 0.0

    def to_dict(self) -> dict:
        return {
            'starters': [p.to_dict() for p in self.starters],
            'bench': [p.to_dict() for p in self.bench],
            'total': self.total,
        }


@dataclass
class Roster:
    """An owner's team within one league."""
    roster_id: int
    owner_id: str
    owner_name: str
    league_id: str
    league_name: str
    division: str
    god_name: str
    side: str
    initial_seed: Optional[int] = None
    elimination_week: Optional[int] = None
    final_seed: Optional[int] = None
    guillotine_scores: dict[int, float] = field(default_factory=dict)
    best_ball_scores: dict[int, float] = field(default_factory=dict)
    best_ball_lineups: dict[int, BestBallLineup] = field(default_factory=dict)

    @property
    def alive(self) -> bool:
        return self.elimination_week is None

    @property
    def seed(self) -> int:
        """Bracket seed: final seed, else initial seed, else the worst possible seed."""
        if self.final_seed is not None:
            return self.final_seed
        if self.initial_seed is not None:
            return self.initial_seed
        return NO_SEED

    @property
    def best_ball_total(self) -> float:
        return round(sum(self.best_ball_scores.values()), 2)

    @property
    def last_week_with_data(self) -> Optional[int]:
        return max(self.best_ball_lineups) if self.best_ball_lineups else None

    def week_score(self, week: int) -> float:
        """Best-ball score for a week, 0 when nothing was recorded."""
        return self.best_ball_scores.get(week, 0.0)

    def lineup(self, week: int) -> Optional[BestBallLineup]:
        return self.best_ball_lineups.get(week)

    def to_dict(self) -> dict:
        last_week = self.last_week_with_data
        last_lineup = self.best_ball_lineups.get(last_week) if last_week else None
        return {
            'rosterId': self.roster_id,
            'ownerId': self.owner_id,
            'ownerName': self.owner_name,
            'leagueId': self.league_id,
            'leagueName': self.league_name,
            'division': self.division,
            'godName': self.god_name,
            'side': self.side,
            'initialSeed': self.initial_seed,
            'finalSeed': self.final_seed,
            'seed': self.seed,
            'eliminationWeek': self.elimination_week,
            'guillotineWeekly': {str(w): pts for w, pts in sorted(self.guillotine_scores.items())},
            'bestBallWeekly': {str(w): pts for w, pts in sorted(self.best_ball_scores.items())},
            'bestBallTotal': self.best_ball_total,
            'lastWeekWithData': last_week,
            'lastWeekRoster': (
                {'week': last_week, **last_lineup.to_dict()} if last_lineup else None
            ),
        }


@dataclass
class ManualSlot:
    """Registry row without an owner id, used to seed an ownerless roster."""
    row_id: Optional[int | str]
    owner_name: str
    seed: Optional[int] = None


@dataclass
class MissingOwner:
    owner_id: Optional[str]
    owner_name: str

    def to_dict(self) -> dict:
        return {'ownerId': self.owner_id, 'ownerName': self.owner_name}


@dataclass
class SeedCompletenessRecord:
    """Seeded vs total owners for a league that is not fully seeded."""
    league_id: str
    league_name: Optional[str]
    division: str
    god_name: str
    side: str
    seeded_count: int
    owners_count: int
    missing_owners: list[MissingOwner] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'leagueId': self.league_id,
            'leagueName': self.league_name,
            'division': self.division,
            'godName': self.god_name,
            'side': self.side,
            'seededCount': self.seeded_count,
            'ownersCount': self.owners_count,
            'missingOwners': [o.to_dict() for o in self.missing_owners],
        }


@dataclass
class LeagueSeeds:
    """Seed and owner data for one league, as loaded from the registry."""
    league_id: str
    division: str
    god_name: str
    side: str
    league_name: Optional[str] = None
    seeds_by_owner: dict[str, Optional[int]] = field(default_factory=dict)
    owner_names: dict[str, str] = field(default_factory=dict)
    manual_slots: list[ManualSlot] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.league_name or self.league_id

    @property
    def owners_count(self) -> int:
        return len(self.owner_names) + len(self.manual_slots)

    @property
    def missing_owners(self) -> list[MissingOwner]:
        missing = [
            MissingOwner(owner_id, self.owner_names[owner_id])
            for owner_id, seed in self.seeds_by_owner.items()
            if seed is None
        ]
        missing.extend(
            MissingOwner(None, slot.owner_name or 'TBD')
            for slot in self.manual_slots
            if slot.seed is None
        )
        return missing

    @property
    def seeded_count(self) -> int:
        return self.owners_count - len(self.missing_owners)

    @property
    def fully_seeded(self) -> bool:
        return self.seeded_count == self.owners_count

    def completeness_record(self) -> SeedCompletenessRecord:
        return SeedCompletenessRecord(
            league_id=self.league_id,
            league_name=self.league_name,
            division=self.division,
            god_name=self.god_name,
            side=self.side,
            seeded_count=self.seeded_count,
            owners_count=self.owners_count,
            missing_owners=self.missing_owners,
        )


@dataclass
class GodConfig:
    """Light/dark league pair forming one bracket unit."""
    division: str
    god_name: str
    light_league_id: Optional[str] = None
    dark_league_id: Optional[str] = None


@dataclass
class EliminationEvent:
    """One guillotine elimination and the rule that produced it."""
    week: int
    roster_id: int
    owner_id: str
    owner_name: str
    initial_seed: Optional[int]
    reason: str  # next_week_zero | next_week_missing | lowest_score
    score: Optional[float]
    alive_after: int

    def to_dict(self) -> dict:
        return {
            'week': self.week,
            'rosterId': self.roster_id,
            'ownerId': self.owner_id,
            'ownerName': self.owner_name,
            'initialSeed': self.initial_seed,
            'reason': self.reason,
            'score': self.score,
            'aliveAfter': self.alive_after,
        }


@dataclass
class LeagueResult:
    """Outcome of processing one league: survivors by final seed plus eliminations."""
    league_id: str
    league_name: str
    division: str
    god_name: str
    side: str
    survivors: list[Roster] = field(default_factory=list)
    eliminated: list[Roster] = field(default_factory=list)
    events: list[EliminationEvent] = field(default_factory=list)


@dataclass
class LeagueFailure:
    """A league whose processing task failed after retries."""
    league_id: str
    league_name: Optional[str]
    division: str
    god_name: str
    side: str
    error: str

    def to_dict(self) -> dict:
        return {
            'leagueId': self.league_id,
            'leagueName': self.league_name,
            'division': self.division,
            'godName': self.god_name,
            'side': self.side,
            'error': self.error,
        }


@dataclass
class Pairing:
    match_index: int
    team_a: Roster
    team_b: Roster

    def to_dict(self) -> dict:
        return {
            'matchIndex': self.match_index,
            'teamA': self.team_a.to_dict(),
            'teamB': self.team_b.to_dict(),
        }


@dataclass
class MatchResult:
    round_number: int
    week: int
    match_index: int
    team_a: Roster
    team_b: Roster
    score_a: float = 0.0
    score_b: float = 0.0
    winner: Optional[Roster] = None
    loser: Optional[Roster] = None
    lineup_a: Optional[BestBallLineup] = None
    lineup_b: Optional[BestBallLineup] = None

    @property
    def has_score(self) -> bool:
        return self.score_a != 0 or self.score_b != 0

    def to_dict(self) -> dict:
        return {
            'roundNumber': self.round_number,
            'week': self.week,
            'matchIndex': self.match_index,
            'teamA': self.team_a.to_dict(),
            'teamB': self.team_b.to_dict(),
            'scoreA': self.score_a,
            'scoreB': self.score_b,
            'winner': self.winner.to_dict() if self.winner else None,
            'loser': self.loser.to_dict() if self.loser else None,
            'lineupA': self.lineup_a.to_dict() if self.lineup_a else None,
            'lineupB': self.lineup_b.to_dict() if self.lineup_b else None,
        }


@dataclass
class BracketRound:
    round_number: int
    week: int
    results: list[MatchResult] = field(default_factory=list)

    @property
    def winners(self) -> list[Roster]:
        return [r.winner for r in self.results if r.winner is not None]

    @property
    def resolved(self) -> bool:
        """Every match in the round has a decided winner."""
        return bool(self.results) and all(r.winner is not None for r in self.results)

    def to_dict(self) -> dict:
        return {
            'roundNumber': self.round_number,
            'week': self.week,
            'results': [r.to_dict() for r in self.results],
            'winners': [w.to_dict() for w in self.winners],
        }


@dataclass
class Champion:
    """Winner of one god bracket."""
    god_name: str
    division: str
    team: Roster
    winning_round: int
    winning_week: int

    def to_dict(self) -> dict:
        return {
            'godName': self.god_name,
            'division': self.division,
            'ownerId': self.team.owner_id,
            'ownerName': self.team.owner_name,
            'leagueId': self.team.league_id,
            'leagueName': self.team.league_name,
            'finalSeed': self.team.final_seed,
            'winningRound': self.winning_round,
            'winningWeek': self.winning_week,
            'bestBallWeekly': {str(w): pts for w, pts in sorted(self.team.best_ball_scores.items())},
            'winnerTeam': self.team.to_dict(),
        }


@dataclass
class GodBracket:
    """One bracket unit: fixed round-1 pairing, simulated rounds and champion."""
    index: int
    god_name: str
    division: str
    light_league_id: Optional[str] = None
    light_league_name: Optional[str] = None
    dark_league_id: Optional[str] = None
    dark_league_name: Optional[str] = None
    light_seeds: list[Roster] = field(default_factory=list)
    dark_seeds: list[Roster] = field(default_factory=list)
    pairings: list[Pairing] = field(default_factory=list)
    rounds: list[BracketRound] = field(default_factory=list)
    champion: Optional[Champion] = None

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'godName': self.god_name,
            'division': self.division,
            'lightLeagueId': self.light_league_id,
            'lightLeagueName': self.light_league_name,
            'darkLeagueId': self.dark_league_id,
            'darkLeagueName': self.dark_league_name,
            'lightSeeds': [t.to_dict() for t in self.light_seeds],
            'darkSeeds': [t.to_dict() for t in self.dark_seeds],
            'pairings': [p.to_dict() for p in self.pairings],
            'bracketRounds': [r.to_dict() for r in self.rounds],
            'champion': self.champion.to_dict() if self.champion else None,
        }


@dataclass
class GrandParticipant:
    division: str
    god_name: str
    league_id: str
    league_name: str
    roster_id: int
    owner_id: str
    owner_name: str
    seed: Optional[int]
    cumulative_score: float
    week_score: float
    lineup: Optional[BestBallLineup] = None
    rank: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            'division': self.division,
            'godName': self.god_name,
            'leagueId': self.league_id,
            'leagueName': self.league_name,
            'rosterId': self.roster_id,
            'ownerId': self.owner_id,
            'ownerName': self.owner_name,
            'seed': self.seed,
            'cumulativeScore': self.cumulative_score,
            'weekScore': self.week_score,
            'lineup': self.lineup.to_dict() if self.lineup else None,
        }
        if self.rank is not None:
            data['rank'] = self.rank
        return data


@dataclass
class GrandChampionship:
    week: int
    participants: list[GrandParticipant] = field(default_factory=list)
    standings: list[GrandParticipant] = field(default_factory=list)

    @property
    def champion(self) -> Optional[GrandParticipant]:
        return self.standings[0] if self.standings else None

    def to_dict(self) -> dict:
        return {
            'week': self.week,
            'participants': [p.to_dict() for p in self.participants],
            'standings': [p.to_dict() for p in self.standings],
            'champion': self.champion.to_dict() if self.champion else None,
        }
