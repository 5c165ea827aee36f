"""Unit tests for god bracket pairing, simulation and champions."""

import pytest

from gauntlet.bracket import (
    build_division,
    build_god_bracket,
    decide_match,
    next_round_pairings,
    round_one_pairings,
    simulate_rounds,
)
from gauntlet.models import GodConfig, LeagueResult, Pairing

ROUND_WEEKS = [13, 14, 15, 16]


def standard_score(seed, side):
    """Better seeds score more; light edges dark at equal seed."""
    return 200.0 - 10 * seed - (5 if side == 'dark' else 0)


@pytest.fixture
def make_side(make_roster):
    """Factory for a side's survivors, final seeds 1..n."""

    def _make(side, n=8, weeks=ROUND_WEEKS, league_id=None, score=standard_score):
        league_id = league_id or f'{side}-league'
        return [
            make_roster(
                s,
                seed=s,
                final_seed=s,
                side=side,
                league_id=league_id,
                owner_name=f'{side.title()} {s}',
                best_ball={w: score(s, side) for w in weeks},
            )
            for s in range(1, n + 1)
        ]

    return _make


def league_result(survivors, side):
    return LeagueResult(
        league_id=f'{side}-league',
        league_name=f'{side.title()} League',
        division='Greeks',
        god_name='Zeus',
        side=side,
        survivors=survivors,
    )


ZEUS = GodConfig('Greeks', 'Zeus', light_league_id='light-league', dark_league_id='dark-league')


class TestPairings:
    """Tests for fixed round-1 pairings and later-round pairing."""

    @pytest.mark.parametrize('n', [8, 6, 2])
    def test_light_seed_meets_mirrored_dark_seed(self, make_side, n):
        light, dark = make_side('light', n), make_side('dark', n)
        pairings = round_one_pairings(light, dark, n)

        assert [(p.team_a.seed, p.team_b.seed) for p in pairings] == [
            (s, n - s + 1) for s in range(1, n + 1)
        ]
        assert all(p.team_a.side == 'light' and p.team_b.side == 'dark' for p in pairings)
        assert [p.match_index for p in pairings] == list(range(1, n + 1))

    def test_uneven_sides_use_smaller_count(self, make_side):
        bracket = build_god_bracket(
            1, ZEUS,
            league_result(make_side('light', 8), 'light'),
            league_result(make_side('dark', 6), 'dark'),
            ROUND_WEEKS, None,
        )
        assert len(bracket.pairings) == 6
        assert (bracket.pairings[0].team_a.seed, bracket.pairings[0].team_b.seed) == (1, 6)

    def test_next_round_pairs_in_bracket_order(self, make_side):
        teams = make_side('light', 4)
        pairings = next_round_pairings(teams)
        assert [(p.team_a.roster_id, p.team_b.roster_id) for p in pairings] == [(1, 2), (3, 4)]
        assert [p.match_index for p in pairings] == [1, 2]


class TestDecideMatch:
    """Tests for match winners and tie-breaks."""

    def test_higher_score_wins(self, make_roster):
        a = make_roster(1, final_seed=1, best_ball={13: 90.0})
        b = make_roster(2, final_seed=8, best_ball={13: 95.5})
        result = decide_match(Pairing(1, a, b), 1, 13, 1)
        assert result.winner is b
        assert result.loser is a
        assert (result.score_a, result.score_b) == (90.0, 95.5)

    def test_tie_goes_to_better_seed(self, make_roster):
        a = make_roster(1, final_seed=5, best_ball={13: 100.0})
        b = make_roster(2, final_seed=4, side='dark', best_ball={13: 100.0})
        assert decide_match(Pairing(1, a, b), 1, 13, 1).winner is b

    def test_tie_with_equal_seeds_goes_to_earlier_name(self, make_roster):
        a = make_roster(1, final_seed=2, owner_name='Morgan', best_ball={13: 100.0})
        b = make_roster(2, final_seed=2, owner_name='Alex', side='dark', best_ball={13: 100.0})
        assert decide_match(Pairing(1, a, b), 1, 13, 1).winner is b

    def test_no_points_no_winner(self, make_roster):
        a = make_roster(1, final_seed=1)
        b = make_roster(2, final_seed=8)
        result = decide_match(Pairing(1, a, b), 1, 13, 1)
        assert not result.has_score
        assert result.winner is None

    def test_one_side_scoring_is_enough(self, make_roster):
        a = make_roster(1, final_seed=1)
        b = make_roster(2, final_seed=8, best_ball={13: 3.2})
        assert decide_match(Pairing(1, a, b), 1, 13, 1).winner is b


class TestSimulation:
    """Tests for round gating and champion detection."""

    def test_nothing_simulated_before_first_round(self, make_side):
        bracket = build_god_bracket(
            1, ZEUS,
            league_result(make_side('light', weeks=[]), 'light'),
            league_result(make_side('dark', weeks=[]), 'dark'),
            ROUND_WEEKS, None,
        )
        assert len(bracket.pairings) == 8
        assert bracket.rounds == []
        assert bracket.champion is None

    def test_rounds_limited_by_current_week(self, make_side):
        bracket = build_god_bracket(
            1, ZEUS,
            league_result(make_side('light'), 'light'),
            league_result(make_side('dark'), 'dark'),
            ROUND_WEEKS, 14,
        )
        assert [r.week for r in bracket.rounds] == [13, 14]
        assert len(bracket.rounds[0].results) == 8
        assert len(bracket.rounds[1].results) == 4
        assert bracket.champion is None

    def test_full_bracket_crowns_champion(self, make_side):
        bracket = build_god_bracket(
            1, ZEUS,
            league_result(make_side('light'), 'light'),
            league_result(make_side('dark'), 'dark'),
            ROUND_WEEKS, 16,
        )
        first = bracket.rounds[0]
        assert [(w.side, w.seed) for w in first.winners] == [
            ('light', 1), ('light', 2), ('light', 3), ('light', 4),
            ('dark', 4), ('dark', 3), ('dark', 2), ('dark', 1),
        ]
        assert [len(r.results) for r in bracket.rounds] == [8, 4, 2, 1]

        champ = bracket.champion
        assert champ is not None
        assert (champ.team.side, champ.team.seed) == ('light', 1)
        assert (champ.winning_round, champ.winning_week) == (4, 16)
        assert champ.god_name == 'Zeus'

    def test_unscored_final_week_means_no_champion(self, make_side):
        weeks = [13, 14, 15]
        bracket = build_god_bracket(
            1, ZEUS,
            league_result(make_side('light', weeks=weeks), 'light'),
            league_result(make_side('dark', weeks=weeks), 'dark'),
            ROUND_WEEKS, 16,
        )
        assert len(bracket.rounds) == 3
        assert bracket.champion is None

    def test_unplayed_match_stops_advancement(self, make_roster):
        light = [
            make_roster(1, final_seed=1, best_ball={13: 100.0, 14: 100.0}),
            make_roster(2, final_seed=2),
        ]
        dark = [
            make_roster(11, final_seed=1, side='dark'),
            make_roster(12, final_seed=2, side='dark', best_ball={13: 50.0, 14: 60.0}),
        ]
        rounds = simulate_rounds(round_one_pairings(light, dark, 2), ROUND_WEEKS, 14)

        assert len(rounds) == 1
        assert rounds[0].results[0].winner is light[0]
        assert rounds[0].results[1].winner is None
        assert not rounds[0].resolved

    def test_fewer_seeds_never_crown_champion(self, make_side):
        """Two seeds per side only fill two rounds of the four-week window."""
        bracket = build_god_bracket(
            1, ZEUS,
            league_result(make_side('light', 2), 'light'),
            league_result(make_side('dark', 2), 'dark'),
            ROUND_WEEKS, 16,
        )
        assert len(bracket.rounds) == 2
        assert len(bracket.rounds[-1].winners) == 1
        assert bracket.champion is None


class TestDivision:
    """Tests for shells and division assembly."""

    def test_missing_side_gives_empty_shell(self, make_side):
        god = GodConfig('Greeks', 'Hera', light_league_id='light-league')
        bracket = build_god_bracket(
            2, god, league_result(make_side('light'), 'light'), None, ROUND_WEEKS, 16
        )
        assert bracket.index == 2
        assert bracket.god_name == 'Hera'
        assert bracket.light_league_name is not None
        assert bracket.dark_league_id is None
        assert bracket.pairings == [] and bracket.rounds == []
        assert bracket.champion is None
        assert bracket.to_dict()['bracketRounds'] == []

    def test_division_keeps_god_order_and_collects_champions(self, make_side):
        gods = [ZEUS, GodConfig('Greeks', 'Hera', light_league_id='hera-light')]
        results = {
            'light-league': league_result(make_side('light'), 'light'),
            'dark-league': league_result(make_side('dark'), 'dark'),
        }
        brackets, champions = build_division('Greeks', gods, results, ROUND_WEEKS, 16)

        assert [(b.index, b.god_name) for b in brackets] == [(1, 'Zeus'), (2, 'Hera')]
        assert brackets[1].light_league_name is None
        assert [c.god_name for c in champions] == ['Zeus']
