"""Swap node: replace one stop with the best unused alternative."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from dateplanner.core.logger import format_fields, get_logger
from dateplanner.core.scoring import context_from_preferences
from dateplanner.graph.modify.nodes.cascade import run_cascade, swap_stages
from dateplanner.graph.modify.nodes.events import find_alternative_event
from dateplanner.graph.modify.state import ModifyState
from dateplanner.graph.plan.nodes.slots import event_slot
from dateplanner.schemas.enums import VenueCategory
from dateplanner.schemas.plan import DatePreferences, DateStop
from dateplanner.services.venue_repository import VenueRepositoryProtocol

logger = get_logger(__name__)

ACTIVITY_LABELS: dict[VenueCategory, str] = {
    VenueCategory.FOOD: "Dining",
    VenueCategory.DRINK: "Drinks",
    VenueCategory.NATURE: "Outdoor Activity",
    VenueCategory.ACTIVITY: "Activity",
    VenueCategory.CULTURE: "Cultural Experience",
    VenueCategory.ENTERTAINMENT: "Entertainment",
    VenueCategory.SHOPPING: "Shopping",
}
_EVENT_NOTE_LIMIT = 100


def activity_label(category: VenueCategory) -> str:
    return ACTIVITY_LABELS.get(category, "Stop")


def used_venue_ids(stops: list[DateStop], preferences: DatePreferences) -> list[str]:
    """Venue ids already taken by the plan, including event venues, plus caller exclusions."""
    used = list(preferences.exclude_venue_ids)
    for stop in stops:
        if stop.venue is not None:
            used.append(stop.venue.id)
        if stop.event is not None and stop.event.venue_id:
            used.append(stop.event.venue_id)
    return used


def previous_stop_of(stop: DateStop, all_stops: list[DateStop]) -> DateStop | None:
    ordered = sorted(all_stops, key=lambda item: item.order)
    earlier = [item for item in ordered if item.order < stop.order]
    return earlier[-1] if earlier else None


async def _swap_venue_stop(
    stop: DateStop,
    all_stops: list[DateStop],
    preferences: DatePreferences,
    repository: VenueRepositoryProtocol,
    rng,
) -> tuple[DateStop, str] | None:
    excluded = used_venue_ids([stop, *all_stops], preferences)
    previous = previous_stop_of(stop, all_stops)
    context = context_from_preferences(preferences, previous.coordinates if previous else None)

    hit = await run_cascade(swap_stages(stop.venue.category), repository, preferences, context, excluded, rng)
    if hit is None:
        return None

    venue = hit.venue
    categories = sorted(hit.stage.categories, key=lambda item: item.value) if hit.stage.categories else [venue.category]
    new_stop = stop.model_copy(
        update={
            "venue": venue,
            "event": None,
            "activity": activity_label(venue.category),
            "notes": venue.description or stop.notes,
            "cost": venue.average_cost if venue.average_cost is not None else stop.cost,
            "duration": venue.typical_duration or stop.duration,
            "transition_tip": None,
            "venue_events": [],
            "slot_categories": categories,
        },
    )
    return new_stop, hit.stage.name


async def _swap_event_stop(
    stop: DateStop,
    all_stops: list[DateStop],
    preferences: DatePreferences,
    repository: VenueRepositoryProtocol,
) -> tuple[DateStop, str] | None:
    day = preferences.date or stop.event.start_datetime.date()
    used_events = {item.event.id for item in [stop, *all_stops] if item.event is not None}
    other_stops = [item for item in all_stops if item.order != stop.order]

    found = await find_alternative_event(
        repository,
        day,
        preferences.time_of_day,
        preferences.vibes,
        used_events,
        exclude_venue_ids=used_venue_ids(other_stops, preferences),
    )
    if found is None:
        return None

    window, event = found
    slot = event_slot(event)
    notes = (event.description or event.title)[:_EVENT_NOTE_LIMIT]
    new_stop = stop.model_copy(
        update={
            "venue": None,
            "event": event,
            "activity": event.title,
            "notes": notes,
            "cost": slot.default_cost,
            "duration": slot.duration,
            "transition_tip": None,
            "venue_events": [],
            "slot_categories": [],
        },
    )
    return new_stop, window


async def swap_stop(state: ModifyState, config: RunnableConfig) -> ModifyState:
    """Find a replacement for ``stop_to_swap``."""
    if state.get("error"):
        return state

    stop = state.get("stop_to_swap")
    preferences = state.get("preferences")
    if stop is None or preferences is None:
        return {**state, "error": "swap_stop requires stop_to_swap and preferences."}

    configurable = config.get("configurable", {})
    repository: VenueRepositoryProtocol | None = configurable.get("venue_repository")
    if repository is None:
        return {**state, "error": "Venue repository was not injected."}

    all_stops = state.get("all_stops") or []
    if stop.venue is not None:
        result = await _swap_venue_stop(stop, all_stops, preferences, repository, configurable.get("rng"))
    elif stop.event is not None:
        result = await _swap_event_stop(stop, all_stops, preferences, repository)
    else:
        result = None

    if result is None:
        logger.info("No swap alternative: %s", format_fields(order=stop.order))
        return {**state, "new_stop": None, "stage": None}

    new_stop, stage = result
    return {**state, "new_stop": new_stop, "stage": stage}
