"""Swap/add workflow tests."""

from __future__ import annotations

import random

import pytest

from dateplanner.core.scoring import ScoringContext
from dateplanner.graph.modify.nodes.add import suggest_categories
from dateplanner.graph.modify.nodes.cascade import run_cascade, swap_stages
from dateplanner.graph.modify.nodes.events import event_windows, find_best_event, matches_event_vibe
from dateplanner.graph.modify.workflow import compiled_modify_graph
from dateplanner.schemas.enums import ModifyOperation, ModifyStatus, TimeOfDay, VenueCategory
from dateplanner.schemas.plan import DateStop
from dateplanner.services.in_memory_repository import InMemoryVenueRepository
from dateplanner.services.plan_service import add_stop, generate_plan, swap_stop
from tests.mocks.venue_fixtures import (
    FixedRandom,
    at,
    make_event,
    make_preferences,
    make_venue,
    sample_repository,
)


def _venue_stop(order: int, venue, activity: str = "Stop") -> DateStop:
    return DateStop(
        order=order,
        venue=venue,
        activity=activity,
        duration=60,
        cost=20,
        slot_categories=[venue.category],
    )


def _event_stop(order: int, event) -> DateStop:
    return DateStop(order=order, event=event, activity=event.title, duration=120, cost=30)


class TestSwap:
    @pytest.mark.asyncio
    async def test_never_returns_used_venues(self):
        repository = sample_repository()
        for seed in range(10):
            plan = await generate_plan(make_preferences(), repository, rng=random.Random(seed))
            used = {stop.venue.id for stop in plan.stops if stop.venue is not None}
            for stop in plan.stops:
                new_stop = await swap_stop(stop, plan.stops, make_preferences(), repository, rng=random.Random(seed))
                assert new_stop is not None
                assert new_stop.venue.id not in used
                assert new_stop.order == stop.order

    @pytest.mark.asyncio
    async def test_same_category_first(self):
        bistro = make_venue("bistro", "food")
        repository = InMemoryVenueRepository(venues=[bistro, make_venue("diner", "food"), make_venue("pub", "drink")])
        new_stop = await swap_stop(
            _venue_stop(1, bistro),
            [_venue_stop(1, bistro)],
            make_preferences(),
            repository,
            rng=FixedRandom(0.0),
        )
        assert new_stop.venue.id == "diner"
        assert new_stop.activity == "Dining"

    @pytest.mark.asyncio
    async def test_falls_back_to_related_category(self):
        bistro = make_venue("bistro", "food")
        repository = InMemoryVenueRepository(
            venues=[
                bistro,
                make_venue("comedy", "entertainment"),
                make_venue("pub", "drink"),
                make_venue("park", "nature"),
            ],
        )
        new_stop = await swap_stop(_venue_stop(1, bistro), [], make_preferences(), repository, rng=FixedRandom(0.0))
        assert new_stop.venue.id == "pub"
        assert new_stop.activity == "Drinks"
        assert new_stop.slot_categories == [VenueCategory.DRINK]

    @pytest.mark.asyncio
    async def test_falls_back_to_any_category(self):
        bistro = make_venue("bistro", "food")
        repository = InMemoryVenueRepository(venues=[bistro, make_venue("park", "nature")])
        new_stop = await swap_stop(_venue_stop(1, bistro), [], make_preferences(), repository, rng=FixedRandom(0.0))
        assert new_stop.venue.id == "park"
        assert new_stop.activity == "Outdoor Activity"

    @pytest.mark.asyncio
    async def test_relaxes_downtown_before_giving_up(self):
        bistro = make_venue("bistro", "food")
        repository = InMemoryVenueRepository(venues=[bistro, make_venue("suburb", "food", is_downtown=False)])
        preferences = make_preferences(downtown_only=True)
        new_stop = await swap_stop(_venue_stop(1, bistro), [], preferences, repository, rng=FixedRandom(0.0))
        assert new_stop.venue.id == "suburb"

    @pytest.mark.asyncio
    async def test_age_restriction_is_never_relaxed(self):
        bistro = make_venue("bistro", "food")
        repository = InMemoryVenueRepository(venues=[bistro, make_venue("brewery", "drink", subcategory="brewery")])
        preferences = make_preferences(all_over_21=False)
        new_stop = await swap_stop(_venue_stop(1, bistro), [], preferences, repository, rng=FixedRandom(0.0))
        assert new_stop is None

    @pytest.mark.asyncio
    async def test_last_stage_drops_base_access(self):
        bistro = make_venue("bistro", "food")
        gated = make_venue("gate-grill", "food", requires_base_access=True)
        repository = InMemoryVenueRepository(venues=[bistro, gated])
        new_stop = await swap_stop(_venue_stop(1, bistro), [], make_preferences(), repository, rng=FixedRandom(0.0))
        assert new_stop.venue.id == "gate-grill"

    @pytest.mark.asyncio
    async def test_no_alternative_returns_none(self):
        bistro = make_venue("bistro", "food")
        repository = InMemoryVenueRepository(venues=[bistro])
        assert await swap_stop(_venue_stop(1, bistro), [_venue_stop(1, bistro)], make_preferences(), repository) is None

    @pytest.mark.asyncio
    async def test_event_stop_swaps_to_unused_event(self):
        jazz = make_event("jazz", "2026-11-07T19:00:00", "2026-11-07T21:00:00")
        repository = InMemoryVenueRepository(
            events=[
                jazz,
                make_event("matinee", "2026-11-07T14:00:00"),
                make_event("comedy", "2026-11-07T20:00:00", categories=["Comedy"]),
            ],
        )
        preferences = make_preferences(date="2026-11-07", vibes=["fun"])
        new_stop = await swap_stop(_event_stop(2, jazz), [_event_stop(2, jazz)], preferences, repository)

        assert new_stop.event.id == "comedy"
        assert new_stop.venue is None
        assert new_stop.order == 2

    @pytest.mark.asyncio
    async def test_event_windows_widen(self):
        jazz = make_event("jazz", "2026-11-07T19:00:00")
        repository = InMemoryVenueRepository(events=[jazz, make_event("next-week", "2026-11-12T10:00:00")])
        preferences = make_preferences(date="2026-11-07")
        new_stop = await swap_stop(_event_stop(1, jazz), [], preferences, repository)
        assert new_stop.event.id == "next-week"

    @pytest.mark.asyncio
    async def test_swapped_venue_does_not_block_relaxation(self):
        dog_diner = make_venue("dog-diner", "food", pet_friendly=True)
        repository = InMemoryVenueRepository(
            venues=[dog_diner, make_venue("plain-food", "food"), make_venue("bar", "drink", pet_friendly=True)],
        )
        preferences = make_preferences(with_dog=True)
        new_stop = await swap_stop(
            _venue_stop(1, dog_diner),
            [_venue_stop(1, dog_diner)],
            preferences,
            repository,
            rng=FixedRandom(0.0),
        )
        assert new_stop.venue.id == "plain-food"
        assert new_stop.slot_categories == [VenueCategory.FOOD]

    @pytest.mark.asyncio
    async def test_event_swap_skips_venues_already_in_plan(self):
        jazz = make_event("jazz", "2026-11-07T19:00:00", venue_id="comedy-club")
        taproom = make_venue("taproom", "drink", subcategory="taproom")
        repository = InMemoryVenueRepository(
            venues=[taproom],
            events=[
                jazz,
                make_event("open-mic", "2026-11-07T20:00:00", venue_id="taproom"),
                make_event("late-show", "2026-11-07T22:00:00", venue_id="theatre"),
            ],
        )
        stops = [_event_stop(2, jazz), _venue_stop(3, taproom, "Nightcap")]
        preferences = make_preferences(date="2026-11-07")

        new_stop = await swap_stop(stops[0], stops, preferences, repository)

        assert new_stop.event.id == "late-show"

    @pytest.mark.asyncio
    async def test_event_swap_may_reuse_its_own_venue(self):
        jazz = make_event("jazz", "2026-11-07T19:00:00", venue_id="comedy-club")
        repository = InMemoryVenueRepository(
            events=[jazz, make_event("second-set", "2026-11-07T20:30:00", venue_id="comedy-club")],
        )
        preferences = make_preferences(date="2026-11-07")

        new_stop = await swap_stop(_event_stop(2, jazz), [_event_stop(2, jazz)], preferences, repository)

        assert new_stop.event.id == "second-set"

    @pytest.mark.asyncio
    async def test_event_stop_without_alternatives(self):
        jazz = make_event("jazz", "2026-11-07T19:00:00")
        repository = InMemoryVenueRepository(events=[jazz])
        assert await swap_stop(_event_stop(1, jazz), [], make_preferences(), repository) is None


class TestCascade:
    def test_stage_order_for_food(self):
        names = [stage.name for stage in swap_stages(VenueCategory.FOOD)]
        assert names == [
            "same_category",
            "related:drink",
            "related:entertainment",
            "any_category",
            "downtown_relaxed",
            "age_restriction_only",
        ]

    @pytest.mark.asyncio
    async def test_stops_at_first_hit(self):
        queries = []

        class RecordingRepository(InMemoryVenueRepository):
            async def query_venues(self, query):
                queries.append(query.categories)
                return await super().query_venues(query)

        repository = RecordingRepository(venues=[make_venue("bistro", "food"), make_venue("diner", "food")])
        hit = await run_cascade(
            swap_stages(VenueCategory.FOOD),
            repository,
            make_preferences(),
            ScoringContext(),
            ["bistro"],
            FixedRandom(0.0),
        )
        assert hit.venue.id == "diner"
        assert hit.stage.name == "same_category"
        assert queries == [frozenset({VenueCategory.FOOD})]


class TestAdd:
    def test_suggest_categories(self):
        food = _venue_stop(1, make_venue("f", "food"))
        drink = _venue_stop(2, make_venue("d", "drink"))
        museum = _venue_stop(3, make_venue("m", "culture"))

        assert suggest_categories([], TimeOfDay.EVENING) == [VenueCategory.FOOD]
        assert suggest_categories([food], TimeOfDay.EVENING) == [
            VenueCategory.ACTIVITY,
            VenueCategory.CULTURE,
            VenueCategory.ENTERTAINMENT,
        ]
        assert suggest_categories([food, museum], TimeOfDay.NIGHT) == [VenueCategory.DRINK]
        assert suggest_categories([food, drink, museum], TimeOfDay.EVENING) == [
            VenueCategory.FOOD,
            VenueCategory.DRINK,
            VenueCategory.ACTIVITY,
            VenueCategory.CULTURE,
        ]
        assert suggest_categories([food], TimeOfDay.MORNING) == [
            VenueCategory.NATURE,
            VenueCategory.ACTIVITY,
            VenueCategory.CULTURE,
        ]
        assert suggest_categories([food, museum], TimeOfDay.AFTERNOON) == [
            VenueCategory.FOOD,
            VenueCategory.ACTIVITY,
            VenueCategory.CULTURE,
            VenueCategory.DRINK,
        ]

    @pytest.mark.asyncio
    async def test_add_after_dinner_suggests_activity(self):
        bistro = make_venue("bistro", "food")
        stops = [_venue_stop(1, bistro, "Dinner")]
        new_stop = await add_stop(0, stops, make_preferences(), sample_repository(), rng=FixedRandom(0.0))

        assert new_stop.order == 2
        assert new_stop.venue.category in (
            VenueCategory.ACTIVITY,
            VenueCategory.CULTURE,
            VenueCategory.ENTERTAINMENT,
        )
        assert new_stop.venue.id != "bistro"

    @pytest.mark.asyncio
    async def test_add_falls_back_to_any_venue(self):
        bistro = make_venue("bistro", "food")
        gated = make_venue("gate-museum", "culture", requires_base_access=True, typical_duration=45)
        repository = InMemoryVenueRepository(venues=[bistro, gated])
        new_stop = await add_stop(0, [_venue_stop(1, bistro)], make_preferences(), repository)

        assert new_stop.venue.id == "gate-museum"
        assert new_stop.duration == 45
        assert new_stop.cost == 20

    @pytest.mark.asyncio
    async def test_add_at_front(self):
        stops = [_venue_stop(1, make_venue("bistro", "food"))]
        new_stop = await add_stop(-1, stops, make_preferences(), sample_repository(), rng=FixedRandom(0.0))
        assert new_stop.order == 1

    @pytest.mark.asyncio
    async def test_add_with_category_override(self):
        bistro = make_venue("bistro", "food")
        stops = [_venue_stop(1, bistro, "Dinner")]
        new_stop = await add_stop(
            0,
            stops,
            make_preferences(),
            sample_repository(),
            rng=FixedRandom(0.0),
            category=VenueCategory.DRINK,
        )

        assert new_stop.venue.category == VenueCategory.DRINK
        assert new_stop.slot_categories == [VenueCategory.DRINK]
        assert new_stop.activity == "Drinks"

    @pytest.mark.asyncio
    async def test_category_override_falls_back_to_any_venue(self):
        bistro = make_venue("bistro", "food")
        repository = InMemoryVenueRepository(venues=[bistro, make_venue("park", "nature")])
        new_stop = await add_stop(
            0,
            [_venue_stop(1, bistro)],
            make_preferences(),
            repository,
            category=VenueCategory.SHOPPING,
        )

        assert new_stop.venue.id == "park"
        assert new_stop.slot_categories == [VenueCategory.NATURE]

    @pytest.mark.asyncio
    async def test_add_with_nothing_left(self):
        bistro = make_venue("bistro", "food")
        repository = InMemoryVenueRepository(venues=[bistro])
        assert await add_stop(0, [_venue_stop(1, bistro)], make_preferences(), repository) is None

    @pytest.mark.asyncio
    async def test_add_rejects_out_of_range_index(self):
        stops = [_venue_stop(1, make_venue("bistro", "food"))]
        with pytest.raises(ValueError):
            await add_stop(1, stops, make_preferences(), sample_repository())


class TestEvents:
    def test_vibe_matching(self):
        arts = make_event("gallery", "2026-11-07T19:00:00", categories=["Arts"])
        sports = make_event("game", "2026-11-07T19:00:00", categories='["Sports"]')
        assert matches_event_vibe(arts, ["cultural"])
        assert matches_event_vibe(sports, ["Fun"])
        assert not matches_event_vibe(arts, ["fun"])
        assert matches_event_vibe(arts, [])

    def test_best_event_falls_back_to_first(self):
        first = make_event("first", "2026-11-07T19:00:00")
        second = make_event("second", "2026-11-07T20:00:00", categories=["Comedy"])
        assert find_best_event([first, second], ["fun"]).id == "second"
        assert find_best_event([first, second], ["romantic"]).id == "first"
        assert find_best_event([], ["fun"]) is None

    def test_windows(self):
        windows = event_windows(at("2026-11-07T00:00:00").date(), TimeOfDay.EVENING)
        assert [name for name, _, _ in windows] == ["slot_window", "full_day", "next_7_days"]
        assert windows[0][1] == at("2026-11-07T17:00:00")
        assert windows[1][1] == at("2026-11-07T00:00:00")
        assert windows[2][2] == at("2026-11-14T23:59:59")


@pytest.mark.asyncio
async def test_graph_reports_status():
    bistro = make_venue("bistro", "food")
    config = {"configurable": {"venue_repository": InMemoryVenueRepository(venues=[bistro])}}
    result = await compiled_modify_graph.ainvoke(
        {
            "operation": ModifyOperation.SWAP,
            "preferences": make_preferences(),
            "all_stops": [_venue_stop(1, bistro)],
            "stop_to_swap": _venue_stop(1, bistro),
        },
        config=config,
    )
    assert result.get("error") is None
    assert result["status"] == ModifyStatus.NOT_FOUND
    assert result["new_stop"] is None


@pytest.mark.asyncio
async def test_graph_error_without_repository():
    result = await compiled_modify_graph.ainvoke(
        {"operation": ModifyOperation.ADD, "preferences": make_preferences(), "all_stops": []},
        config={"configurable": {}},
    )
    assert result["error"]
