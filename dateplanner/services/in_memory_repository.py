"""In-memory venue repository.

Serves venues and events from a list held in memory, optionally seeded from a
JSON file of the form ``{"venues": [...], "events": [...]}``. Used for local
runs and tests in place of the real data store.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from dateplanner.core.logger import get_logger
from dateplanner.schemas.venue import AnchorEvent, Venue
from dateplanner.services.venue_repository import EventQuery, VenueQuery, VenueRepositoryProtocol

logger = get_logger(__name__)


class InMemoryVenueRepository(VenueRepositoryProtocol):
    """Repository over in-memory venue and event lists."""

    def __init__(self, venues: Iterable[Venue] = (), events: Iterable[AnchorEvent] = ()) -> None:
        self._venues = list(venues)
        self._events = sorted(events, key=lambda event: event.start_datetime)

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryVenueRepository:
        """Load venues and events from a JSON seed file. Invalid rows are skipped."""
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        venues = _validate_rows(Venue, payload.get("venues", []))
        events = _validate_rows(AnchorEvent, payload.get("events", []))
        logger.info("Venue seed loaded: path=%s venues=%d events=%d", path, len(venues), len(events))
        return cls(venues=venues, events=events)

    async def query_venues(self, query: VenueQuery) -> list[Venue]:
        results = []
        for venue in self._venues:
            if query.categories is not None and venue.category not in query.categories:
                continue
            if query.max_price_tier is not None and venue.price_level is not None:
                if venue.price_level > query.max_price_tier:
                    continue
            if query.require_coordinates and venue.coordinates is None:
                continue
            results.append(venue)
        return results

    async def query_events(self, query: EventQuery) -> list[AnchorEvent]:
        results = [
            event
            for event in self._events
            if query.start <= _align_tz(event.start_datetime, query.start) <= query.end
            and (query.venue_id is None or event.venue_id == query.venue_id)
        ]
        return results[: query.limit]

    async def get_event(self, event_id: str) -> AnchorEvent | None:
        return next((event for event in self._events if event.id == event_id), None)


def _validate_rows(model, rows: list[dict]) -> list:
    items = []
    for row in rows:
        try:
            items.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning("Skipping invalid %s row: id=%s error=%s", model.__name__, row.get("id"), exc)
    return items


def _align_tz(value: datetime, reference: datetime) -> datetime:
    # Naive query windows are compared against wall-clock event times.
    if reference.tzinfo is None and value.tzinfo is not None:
        return value.replace(tzinfo=None)
    if reference.tzinfo is not None and value.tzinfo is None:
        return value.replace(tzinfo=reference.tzinfo)
    return value
