"""Selection algorithm tests."""

from __future__ import annotations

import random

from dateplanner.core.geo import Coordinates
from dateplanner.core.scoring import ScoringContext
from dateplanner.core.selection import rank_candidates, select_best, select_multiple
from dateplanner.schemas.enums import BudgetRange
from tests.mocks.venue_fixtures import FixedRandom, SequenceRandom, make_venue

CONTEXT = ScoringContext(vibes=("cozy",), budget_range=BudgetRange.MID)


class TestSelectBest:
    def test_empty_returns_none(self):
        assert select_best([], CONTEXT) is None

    def test_all_excluded_returns_none(self):
        venues = [make_venue("a"), make_venue("b")]
        assert select_best(venues, CONTEXT, exclude_ids=["a", "b"]) is None

    def test_skips_venues_without_coordinates(self):
        venues = [make_venue("ghost", latitude=None, longitude=None, vibe=["cozy"])]
        assert select_best(venues, CONTEXT) is None

    def test_zero_jitter_picks_top_score(self):
        venues = [make_venue("plain"), make_venue("cozy", vibe=["cozy"])]
        assert select_best(venues, CONTEXT, rng=FixedRandom(0.0)).id == "cozy"

    def test_jitter_can_lift_runner_up(self):
        venues = [make_venue("cozy", vibe=["cozy"]), make_venue("warm", vibe=["warm"])]
        # warm is a synonym hit: 22 vs 30 on vibe, a gap of 8 that jitter can close.
        picked = select_best(venues, CONTEXT, rng=SequenceRandom([0.0, 0.9]))
        assert picked.id == "warm"

    def test_only_top_n_are_eligible(self):
        venues = [make_venue("cozy", vibe=["cozy"]), make_venue("plain")]
        for seed in range(20):
            picked = select_best(venues, CONTEXT, top_n=1, rng=random.Random(seed))
            assert picked.id == "cozy"

    def test_result_is_a_candidate_not_excluded(self):
        venues = [make_venue(f"v{index}") for index in range(8)]
        for seed in range(10):
            picked = select_best(venues, CONTEXT, exclude_ids=["v0", "v1"], rng=random.Random(seed))
            assert picked.id not in ("v0", "v1")


class TestRankCandidates:
    def test_sorted_best_first(self):
        venues = [make_venue("plain"), make_venue("cozy", vibe=["cozy"])]
        ranked = rank_candidates(venues, CONTEXT)
        assert [item.venue.id for item in ranked] == ["cozy", "plain"]
        assert ranked[0].total >= ranked[1].total


class TestSelectMultiple:
    def test_distinct_picks_up_to_count(self):
        venues = [make_venue(f"v{index}") for index in range(5)]
        picked = select_multiple(venues, CONTEXT, count=3, rng=FixedRandom(0.5))
        assert len(picked) == 3
        assert len({venue.id for venue in picked}) == 3

    def test_stops_early_when_pool_runs_out(self):
        venues = [make_venue("a"), make_venue("b")]
        assert len(select_multiple(venues, CONTEXT, count=5, exclude_ids=["a"])) == 1

    def test_follows_previous_pick(self):
        start = make_venue("start", vibe=["cozy"], latitude=35.0, longitude=-78.0)
        near = make_venue("near", latitude=35.001, longitude=-78.0)
        far = make_venue("far", latitude=35.3, longitude=-78.0)
        context = ScoringContext(vibes=("cozy",), budget_range=BudgetRange.MID, previous_stop=Coordinates(35.0, -78.0))
        picked = select_multiple([far, start, near], context, count=3, rng=FixedRandom(0.0))
        assert [venue.id for venue in picked] == ["start", "near", "far"]
