"""Add node: suggest a new stop to insert into a plan."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from dateplanner.core.filters import NO_HARD_FILTERS
from dateplanner.core.logger import format_fields, get_logger
from dateplanner.core.scoring import context_from_preferences
from dateplanner.graph.modify.nodes.cascade import CascadeStage, run_cascade
from dateplanner.graph.modify.nodes.swap import activity_label, used_venue_ids
from dateplanner.graph.modify.state import ModifyState
from dateplanner.schemas.enums import TimeOfDay, VenueCategory
from dateplanner.schemas.plan import DateStop

logger = get_logger(__name__)

FOOD = VenueCategory.FOOD
DRINK = VenueCategory.DRINK
ACTIVITY = VenueCategory.ACTIVITY
NATURE = VenueCategory.NATURE
CULTURE = VenueCategory.CULTURE
ENTERTAINMENT = VenueCategory.ENTERTAINMENT

ACTIVITY_CATEGORIES = frozenset({ACTIVITY, CULTURE, NATURE, ENTERTAINMENT})
DEFAULT_ADD_DURATION = 60
DEFAULT_ADD_COST = 20.0


def suggest_categories(stops: list[DateStop], time_of_day: TimeOfDay) -> list[VenueCategory]:
    """Pick what kind of stop the plan is missing, given the time of day."""
    present = {stop.venue.category for stop in stops if stop.venue is not None}
    has_meal = FOOD in present
    has_drink = DRINK in present
    has_activity = bool(present & ACTIVITY_CATEGORIES)

    if not has_meal:
        return [FOOD]

    if time_of_day in (TimeOfDay.EVENING, TimeOfDay.NIGHT):
        if not has_activity:
            return [ACTIVITY, CULTURE, ENTERTAINMENT]
        if not has_drink:
            return [DRINK]
        return [FOOD, DRINK, ACTIVITY, CULTURE]

    if time_of_day == TimeOfDay.MORNING:
        if not has_activity:
            return [NATURE, ACTIVITY, CULTURE]
        return [FOOD, NATURE, ACTIVITY]

    if not has_activity:
        return [ACTIVITY, CULTURE, NATURE]
    return [FOOD, ACTIVITY, CULTURE, DRINK]


def add_stages(categories: list[VenueCategory]) -> list[CascadeStage]:
    return [
        CascadeStage("suggested_categories", frozenset(categories)),
        CascadeStage("any_venue", None, hard_filters=NO_HARD_FILTERS, accommodations=False),
    ]


async def add_stop(state: ModifyState, config: RunnableConfig) -> ModifyState:
    """Suggest a stop to insert after ``insert_after_index``."""
    if state.get("error"):
        return state

    preferences = state.get("preferences")
    if preferences is None:
        return {**state, "error": "add_stop requires preferences."}

    configurable = config.get("configurable", {})
    repository = configurable.get("venue_repository")
    if repository is None:
        return {**state, "error": "Venue repository was not injected."}

    all_stops = state.get("all_stops") or []
    insert_after_index = state.get("insert_after_index", -1)
    previous = all_stops[insert_after_index] if 0 <= insert_after_index < len(all_stops) else None
    context = context_from_preferences(preferences, previous.coordinates if previous else None)

    category = state.get("category")
    categories = [category] if category is not None else suggest_categories(all_stops, preferences.time_of_day)
    hit = await run_cascade(
        add_stages(categories),
        repository,
        preferences,
        context,
        used_venue_ids(all_stops, preferences),
        configurable.get("rng"),
    )
    if hit is None:
        logger.info("No stop to add: %s", format_fields(insert_after_index=insert_after_index))
        return {**state, "new_stop": None, "stage": None}

    venue = hit.venue
    new_stop = DateStop(
        order=insert_after_index + 2,
        venue=venue,
        activity=activity_label(venue.category),
        duration=venue.typical_duration or DEFAULT_ADD_DURATION,
        cost=venue.average_cost if venue.average_cost is not None else DEFAULT_ADD_COST,
        notes=venue.description or f"Enjoy {venue.name}!",
        slot_categories=categories if hit.stage.categories else [venue.category],
    )
    return {**state, "new_stop": new_stop, "stage": hit.stage.name}
