"""Event alternatives for event stops."""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from dateplanner.core.logger import format_fields, get_logger
from dateplanner.core.time_windows import day_window, period_window, week_window
from dateplanner.schemas.enums import TimeOfDay
from dateplanner.schemas.venue import AnchorEvent
from dateplanner.services.venue_repository import EventQuery, VenueRepositoryProtocol

logger = get_logger(__name__)

_EVENT_QUERY_LIMIT = 20

# Vibe fragment -> event category tags that satisfy it.
_EVENT_VIBE_TAGS: dict[str, tuple[str, ...]] = {
    "cultur": ("arts", "theatre"),
    "fun": ("comedy", "sports"),
}


def matches_event_vibe(event: AnchorEvent, vibes: list[str]) -> bool:
    """Whether any requested vibe maps onto one of the event's category tags."""
    if not vibes:
        return True
    categories = {category.lower() for category in event.categories}
    for vibe in vibes:
        for fragment, tags in _EVENT_VIBE_TAGS.items():
            if fragment in vibe.lower() and categories.intersection(tags):
                return True
    return False


def find_best_event(events: list[AnchorEvent], vibes: list[str]) -> AnchorEvent | None:
    """First vibe-matching event, else the first event."""
    if not events:
        return None
    return next((event for event in events if matches_event_vibe(event, vibes)), events[0])


def event_windows(day: date, time_of_day: TimeOfDay | None) -> list[tuple[str, datetime, datetime]]:
    """Widening search windows: the plan's slot window, the whole day, the next week."""
    return [
        ("slot_window", *period_window(day, time_of_day)),
        ("full_day", *day_window(day)),
        ("next_7_days", *week_window(day)),
    ]


async def find_alternative_event(
    repository: VenueRepositoryProtocol,
    day: date,
    time_of_day: TimeOfDay | None,
    vibes: list[str],
    exclude_ids: set[str],
    exclude_venue_ids: Iterable[str] = (),
) -> tuple[str, AnchorEvent] | None:
    """Search each window in turn for an unused event at a venue not already in the plan."""
    taken_venues = set(exclude_venue_ids)
    for name, start, end in event_windows(day, time_of_day):
        events = await repository.query_events(EventQuery(start=start, end=end, limit=_EVENT_QUERY_LIMIT))
        alternatives = [
            event
            for event in events
            if event.id not in exclude_ids and event.venue_id not in taken_venues
        ]
        suggestion = find_best_event(alternatives, vibes)
        if suggestion is not None:
            logger.info("Event alternative found: %s", format_fields(window=name, event_id=suggestion.id))
            return name, suggestion
    return None
