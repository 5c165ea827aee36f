"""Constants and mappings for the Gauntlet Leg 3 engine."""

# Best-ball slot plan, filled strictly in this order: (slot, count, eligible positions)
BEST_BALL_SLOTS = [
    ('QB', 1, ('QB',)),
    ('RB', 2, ('RB',)),
    ('WR', 3, ('WR',)),
    ('TE', 1, ('TE',)),
    ('FLEX', 2, ('RB', 'WR', 'TE')),
    ('SF', 1, ('QB', 'RB', 'WR', 'TE')),
]

# Presentation order of starters in a lineup
SLOT_ORDER = {'QB': 0, 'RB': 1, 'WR': 2, 'TE': 3, 'FLEX': 4, 'SF': 5}

# Sort value for a missing seed (always the worst seed)
NO_SEED = 999

# Canonical god order per division (display + bracket ordering)
DEFAULT_GOD_ORDER = {
    'Egyptians': ['Amun-Rah', 'Osiris', 'Horus', 'Anubis'],
    'Greeks': ['Zeus', 'Ares', 'Apollo', 'Poseidon'],
    'Romans': ['Jupiter', 'Mars', 'Minerva', 'Saturn'],
}

# NFL game windows in league-local time: weekday -> (start hour, end hour) inclusive
GAME_WINDOWS = {
    'Sun': (13, 23),
    'Mon': (19, 23),
    'Thu': (20, 23),
}

# Early-morning spillover after late games
SPILLOVER_DAYS = ('Mon', 'Tue', 'Fri')
SPILLOVER_LAST_HOUR = 1

# Days on which the bracket display moves on to the next round week
DISPLAY_ADVANCE_DAYS = ('Tue', 'Wed')

SLEEPER_BASE_URL = 'https://api.sleeper.app/v1'
