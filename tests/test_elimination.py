"""Unit tests for the guillotine elimination phase."""

import random

import pytest

from gauntlet.elimination import (
    LOWEST_SCORE,
    NEXT_WEEK_MISSING,
    NEXT_WEEK_ZERO,
    assign_final_seeds,
    run_guillotine,
)

WEEKS = [9, 10, 11, 12]


@pytest.fixture
def league(make_roster):
    """Ten rosters; roster id doubles as initial seed."""
    return [make_roster(r, seed=r) for r in range(1, 11)]


def flat_scores(rosters, weeks, value=100.0):
    return {w: {r.roster_id: value + r.roster_id for r in rosters} for w in weeks}


def run(rosters, scores, target=8, weeks=WEEKS):
    return run_guillotine(rosters, weeks, lambda w: scores.get(w, {}), survivor_target=target)


class TestEliminationRules:
    """Tests for the three elimination rules and their priority."""

    def test_lowest_score_each_week(self, league):
        """Without irregular next-week data the lowest scorer goes."""
        scores = flat_scores(league, range(9, 14))
        events = run(league, scores)

        assert [(e.week, e.roster_id, e.reason) for e in events] == [
            (9, 1, LOWEST_SCORE),
            (10, 2, LOWEST_SCORE),
        ]
        assert league[0].elimination_week == 9
        assert league[1].elimination_week == 10
        assert sum(1 for r in league if r.alive) == 8

    def test_lowest_score_tie_goes_to_worse_seed(self, league):
        scores = flat_scores(league, [9, 10])
        scores[9][3] = 50.0
        scores[9][7] = 50.0
        events = run(league, scores, target=9)

        assert [e.roster_id for e in events] == [7]
        assert events[0].score == 50.0

    def test_next_week_zero_beats_lowest_score(self, league):
        scores = flat_scores(league, [9, 10])
        scores[9][1] = 40.0
        scores[10][5] = 0
        events = run(league, scores, target=9)

        assert events[0].roster_id == 5
        assert events[0].reason == NEXT_WEEK_ZERO
        assert events[0].week == 9

    def test_next_week_zero_picks_worst_seed(self, league):
        scores = flat_scores(league, [9, 10])
        scores[10][4] = 0.0
        scores[10][6] = 0.0
        events = run(league, scores, target=9)

        assert events[0].roster_id == 6

    def test_next_week_disappearance(self, league):
        scores = flat_scores(league, [9, 10])
        del scores[10][4]
        events = run(league, scores, target=9)

        assert events[0].roster_id == 4
        assert events[0].reason == NEXT_WEEK_MISSING

    def test_roster_missing_both_weeks_is_not_a_disappearance(self, league):
        """Only rosters scored this week can disappear next week."""
        scores = flat_scores(league, [9, 10])
        del scores[9][4]
        del scores[10][4]
        events = run(league, scores, target=9)

        assert events[0].roster_id == 1
        assert events[0].reason == LOWEST_SCORE

    def test_zero_rule_ignores_eliminated_rosters(self, league):
        """A roster eliminated earlier scoring zero later doesn't count."""
        scores = flat_scores(league, [9, 10, 11])
        scores[11][1] = 0.0  # roster 1 is eliminated in week 9
        events = run(league, scores)

        assert [e.roster_id for e in events] == [1, 2]
        assert all(e.reason == LOWEST_SCORE for e in events)


class TestEarlyStops:
    """Tests for the conditions that end the phase early."""

    def test_no_data_for_week_stops_phase(self, league):
        events = run(league, {})
        assert events == []
        assert all(r.alive for r in league)

    def test_stops_after_last_week_with_data(self, league):
        scores = flat_scores(league, [9])
        events = run(league, scores)

        assert [(e.week, e.roster_id) for e in events] == [(9, 1)]
        assert sum(1 for r in league if r.alive) == 9

    def test_pool_at_target_fetches_nothing(self, make_roster):
        rosters = [make_roster(r, seed=r) for r in range(1, 9)]
        calls = []

        def week_scores(week):
            calls.append(week)
            return {r.roster_id: 10.0 for r in rosters}

        events = run_guillotine(rosters, WEEKS, week_scores, survivor_target=8)
        assert events == []
        assert calls == []

    def test_one_removal_per_week(self, make_roster):
        rosters = [make_roster(r, seed=r) for r in range(1, 15)]
        scores = flat_scores(rosters, range(9, 14))
        events = run(rosters, scores)

        assert [e.week for e in events] == WEEKS
        assert [e.alive_after for e in events] == [13, 12, 11, 10]

    def test_records_weekly_scores(self, league):
        scores = flat_scores(league, range(9, 14))
        run(league, scores)

        assert league[0].guillotine_scores == {9: 101.0}
        assert league[9].guillotine_scores == {9: 110.0, 10: 110.0}


class TestTieBreaks:
    """Tests for seed ties and missing seeds."""

    def test_missing_seed_is_worst(self, make_roster):
        rosters = [make_roster(1, seed=10), make_roster(2, seed=None), make_roster(3, seed=1)]
        scores = {9: {1: 5.0, 2: 5.0, 3: 50.0}, 10: {1: 1.0, 2: 1.0, 3: 1.0}}
        events = run(rosters, scores, target=2)
        assert events[0].roster_id == 2

    def test_equal_seeds_fall_back_to_owner_id(self, make_roster):
        rosters = [
            make_roster(1, seed=None, owner_id='a'),
            make_roster(2, seed=None, owner_id='b'),
            make_roster(3, seed=None, owner_id='c'),
        ]
        scores = {9: {1: 5.0, 2: 5.0, 3: 50.0}, 10: {1: 1.0, 2: 1.0, 3: 1.0}}
        events = run(rosters, scores, target=2)
        assert events[0].owner_id == 'b'

    def test_deterministic_regardless_of_roster_order(self, make_roster):
        def outcome(order_seed):
            rosters = [make_roster(r, seed=(r % 4) or None) for r in range(1, 13)]
            random.Random(order_seed).shuffle(rosters)
            scores = {w: {r: 50.0 + (r % 3) for r in range(1, 13)} for w in range(9, 14)}
            run(rosters, scores)
            survivors = assign_final_seeds(rosters)
            return (
                sorted((r.roster_id, r.elimination_week) for r in rosters),
                [(r.roster_id, r.final_seed) for r in survivors],
            )

        assert outcome(1) == outcome(2) == outcome(3)


class TestFinalSeeds:
    """Tests for dense final seeding of survivors."""

    def test_dense_seeds_in_initial_seed_order(self, make_roster):
        rosters = [
            make_roster(1, seed=9),
            make_roster(2, seed=2),
            make_roster(3, seed=5),
            make_roster(4, seed=None),
            make_roster(5, seed=1),
        ]
        rosters[0].elimination_week = 9
        survivors = assign_final_seeds(rosters)

        assert [r.roster_id for r in survivors] == [5, 2, 3, 4]
        assert [r.final_seed for r in survivors] == [1, 2, 3, 4]
        assert rosters[0].final_seed is None

    def test_equal_seeds_ordered_by_owner_name(self, make_roster):
        rosters = [
            make_roster(1, seed=3, owner_name='Zed'),
            make_roster(2, seed=3, owner_name='Amy'),
            make_roster(3, seed=1, owner_name='Max'),
        ]
        survivors = assign_final_seeds(rosters)
        assert [r.owner_name for r in survivors] == ['Max', 'Amy', 'Zed']

    def test_seed_set_is_exactly_one_to_n(self, league):
        run(league, flat_scores(league, range(9, 14)))
        survivors = assign_final_seeds(league)
        assert sorted(r.final_seed for r in survivors) == list(range(1, len(survivors) + 1))
