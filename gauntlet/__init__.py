from .models import (
    BestBallLineup,
    BracketRound,
    Champion,
    GodBracket,
    GrandChampionship,
    LeagueResult,
    LeagueSeeds,
    Roster,
    SeedCompletenessRecord,
)
from .best_ball import compute_best_ball_lineup
from .elimination import assign_final_seeds, run_guillotine
from .schedule import detect_current_week, display_bracket_week, is_game_window
from .bracket import build_division, build_god_bracket
from .championship import build_grand_championship
from .payload import assemble_payload, snapshot_status
from .seeds import JsonSeedRegistry, PostgrestSeedRegistry, load_leagues_and_seeds
from .sleeper import FeedError, SleeperClient
from .players import PlayerDirectory
from .store import JsonResultStore
from .builder import BuildResult, build_gauntlet

__all__ = [
    # Models
    'BestBallLineup',
    'BracketRound',
    'Champion',
    'GodBracket',
    'GrandChampionship',
    'LeagueResult',
    'LeagueSeeds',
    'Roster',
    'SeedCompletenessRecord',
    # Engine
    'compute_best_ball_lineup',
    'run_guillotine',
    'assign_final_seeds',
    'detect_current_week',
    'display_bracket_week',
    'is_game_window',
    'build_god_bracket',
    'build_division',
    'build_grand_championship',
    'assemble_payload',
    'snapshot_status',
    # Collaborators
    'JsonSeedRegistry',
    'PostgrestSeedRegistry',
    'load_leagues_and_seeds',
    'SleeperClient',
    'FeedError',
    'PlayerDirectory',
    'JsonResultStore',
    # Orchestration
    'BuildResult',
    'build_gauntlet',
]
