"""Service, repository and settings tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dateplanner.core.config import Settings
from dateplanner.schemas.enums import VenueCategory
from dateplanner.schemas.plan import DateStop
from dateplanner.services.in_memory_repository import InMemoryVenueRepository
from dateplanner.services.plan_service import reorder_stops, venues_by_category
from dateplanner.services.venue_repository import EventQuery, VenueQuery
from tests.mocks.venue_fixtures import at, make_event, make_venue, sample_repository

SAMPLE_DATA = Path(__file__).resolve().parent.parent / "data" / "venues.sample.json"


def _stop(order: int, venue_id: str, latitude: float | None, longitude: float | None = -78.0) -> DateStop:
    venue = make_venue(venue_id, latitude=latitude, longitude=longitude)
    return DateStop(order=order, venue=venue, activity="Stop", duration=60, cost=10)


class TestReorderStops:
    def test_nearest_neighbour_keeps_first(self):
        stops = [_stop(1, "a", 35.0), _stop(2, "far", 35.3), _stop(3, "mid", 35.1), _stop(4, "near", 35.01)]
        reordered = reorder_stops(stops)

        assert [stop.venue.id for stop in reordered] == ["a", "near", "mid", "far"]
        assert [stop.order for stop in reordered] == [1, 2, 3, 4]
        assert reordered[-1].transition_tip is None
        assert all(stop.transition_tip for stop in reordered[:-1])

    def test_uses_order_not_list_position(self):
        stops = [_stop(2, "b", 35.1), _stop(1, "a", 35.0)]
        assert [stop.venue.id for stop in reorder_stops(stops)] == ["a", "b"]

    def test_unlocated_stops_go_last(self):
        stops = [_stop(1, "a", 35.0), _stop(2, "ghost", None, None), _stop(3, "b", 35.1)]
        reordered = reorder_stops(stops)

        assert [stop.venue.id for stop in reordered] == ["a", "b", "ghost"]
        assert reordered[1].transition_tip is None


class TestInMemoryRepository:
    @pytest.mark.asyncio
    async def test_loads_sample_seed(self):
        repository = InMemoryVenueRepository.from_json_file(SAMPLE_DATA)
        venues = await repository.query_venues(VenueQuery(categories=None))

        assert len(venues) == 12
        grind = next(venue for venue in venues if venue.id == "v-morning-grind")
        assert grind.vibe == ["relaxed", "casual"]
        assert grind.best_time == ["morning", "afternoon"]

    @pytest.mark.asyncio
    async def test_skips_invalid_rows(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(
            json.dumps(
                {
                    "venues": [
                        {"id": "ok", "name": "Ok", "category": "food"},
                        {"id": "bad", "name": "Bad", "category": "spaceship"},
                    ],
                    "events": [{"id": "no-start", "title": "No Start"}],
                },
            ),
            encoding="utf-8",
        )
        repository = InMemoryVenueRepository.from_json_file(path)

        venues = await repository.query_venues(VenueQuery(categories=None, require_coordinates=False))
        assert [venue.id for venue in venues] == ["ok"]
        assert await repository.get_event("no-start") is None

    @pytest.mark.asyncio
    async def test_venue_query_filters(self):
        repository = InMemoryVenueRepository(
            venues=[
                make_venue("cheap", price_level=1),
                make_venue("pricey", price_level=4),
                make_venue("unpriced", price_level=None),
                make_venue("bar", "drink"),
                make_venue("ghost", latitude=None, longitude=None),
            ],
        )
        venues = await repository.query_venues(
            VenueQuery(categories=frozenset({VenueCategory.FOOD}), max_price_tier=2),
        )
        assert [venue.id for venue in venues] == ["cheap", "unpriced"]

    @pytest.mark.asyncio
    async def test_event_query_window_and_limit(self):
        repository = sample_repository()
        events = await repository.query_events(
            EventQuery(start=at("2026-11-07T00:00:00"), end=at("2026-11-07T23:59:59")),
        )
        assert [event.id for event in events] == ["morning-market", "jazz-night"]

        limited = await repository.query_events(
            EventQuery(start=at("2026-11-01T00:00:00"), end=at("2026-11-30T00:00:00"), limit=1),
        )
        assert [event.id for event in limited] == ["morning-market"]

        at_taproom = await repository.query_events(
            EventQuery(start=at("2026-11-01T00:00:00"), end=at("2026-11-30T00:00:00"), venue_id="taproom"),
        )
        assert [event.id for event in at_taproom] == ["open-mic"]

    @pytest.mark.asyncio
    async def test_aware_events_match_naive_windows(self):
        repository = InMemoryVenueRepository(events=[make_event("utc", "2026-11-07T19:00:00+00:00")])
        events = await repository.query_events(
            EventQuery(start=at("2026-11-07T17:00:00"), end=at("2026-11-07T23:59:59")),
        )
        assert [event.id for event in events] == ["utc"]

    @pytest.mark.asyncio
    async def test_get_event(self):
        repository = sample_repository()
        assert (await repository.get_event("jazz-night")).price == 18
        assert await repository.get_event("missing") is None


class TestSettings:
    def test_clamps(self, monkeypatch):
        monkeypatch.setenv("WALKING_SPEED_KMH", "50")
        monkeypatch.setenv("SELECTION_TOP_N", "0")
        monkeypatch.setenv("SELECTION_JITTER", "-3")
        settings = Settings()

        assert settings.WALKING_SPEED_KMH == 10.0
        assert settings.SELECTION_TOP_N == 1
        assert settings.SELECTION_JITTER == 0.0

    def test_unparseable_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("WALKING_SPEED_KMH", "fast")
        monkeypatch.setenv("SELECTION_TOP_N", "many")
        settings = Settings()

        assert settings.WALKING_SPEED_KMH == 5.0
        assert settings.SELECTION_TOP_N == 5


class TestVenuesByCategory:
    @pytest.mark.asyncio
    async def test_located_venues_only(self):
        venues = await venues_by_category(VenueCategory.FOOD, sample_repository())
        assert [venue.id for venue in venues] == ["bistro", "cafe", "diner"]

    @pytest.mark.asyncio
    async def test_skips_event_only_venues(self):
        venues = await venues_by_category(VenueCategory.ENTERTAINMENT, sample_repository())
        assert [venue.id for venue in venues] == ["comedy-club"]

    @pytest.mark.asyncio
    async def test_most_romantic_first_and_limit(self):
        repository = InMemoryVenueRepository(
            venues=[
                make_venue("b-plain", romantic_score=2),
                make_venue("a-plain", romantic_score=2),
                make_venue("candlelit", romantic_score=5),
            ],
        )
        venues = await venues_by_category(VenueCategory.FOOD, repository, limit=2)
        assert [venue.id for venue in venues] == ["candlelit", "a-plain"]
