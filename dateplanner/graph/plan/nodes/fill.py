"""Slot fill node.

Walks the slot template in order and turns each slot into at most one stop.
The exclusion set starts from the caller's cross-session exclusions and grows
with every pick, so no venue repeats inside a plan. A slot that finds no
venue is dropped; that is an accepted gap, never an error.
"""

from __future__ import annotations

from dataclasses import replace

from langchain_core.runnables import RunnableConfig

from dateplanner.core.config import get_settings
from dateplanner.core.filters import apply_hard_filters, narrow_for_slot
from dateplanner.core.geo import Coordinates
from dateplanner.core.logger import format_fields, get_logger
from dateplanner.core.scoring import context_from_preferences
from dateplanner.core.selection import RandomSource, select_best
from dateplanner.graph.plan.state import PlanState
from dateplanner.schemas.enums import SlotType
from dateplanner.schemas.plan import DatePreferences, DateStop, PlanDebug, TimeSlot
from dateplanner.schemas.venue import AnchorEvent, Venue

logger = get_logger(__name__)

_EVENT_NOTE_LIMIT = 150


def venue_stop(order: int, venue: Venue, activity: str, duration: int, cost: float, categories) -> DateStop:
    """Stop for a picked venue; the venue's own duration and spend win over the defaults."""
    return DateStop(
        order=order,
        venue=venue,
        activity=activity,
        duration=venue.typical_duration or duration,
        cost=venue.average_cost if venue.average_cost is not None else cost,
        notes=venue.description or f"Enjoy {venue.name}!",
        slot_categories=list(categories),
    )


def event_stop(order: int, event: AnchorEvent, slot: TimeSlot) -> DateStop:
    """Stop for the anchor event, taken straight from its slot."""
    notes = (event.description or event.title)[:_EVENT_NOTE_LIMIT]
    return DateStop(
        order=order,
        event=event,
        activity=event.title,
        duration=slot.duration,
        cost=slot.default_cost,
        notes=notes,
    )


def fill_time_slots(
    slots: list[TimeSlot],
    candidates: list[Venue],
    preferences: DatePreferences,
    anchor_event: AnchorEvent | None = None,
    rng: RandomSource | None = None,
    debug: PlanDebug | None = None,
) -> tuple[list[DateStop], PlanDebug]:
    """Fill slots in order and return the emitted stops with assembly counters."""
    settings = get_settings()
    debug = (debug or PlanDebug()).model_copy()

    excluded: list[str] = list(preferences.exclude_venue_ids)
    if anchor_event is not None and anchor_event.venue_id:
        excluded.append(anchor_event.venue_id)

    pool = apply_hard_filters(candidates, preferences)
    optional_cutoff = preferences.target_minutes + settings.OPTIONAL_SLOT_GRACE_MINUTES
    base_context = context_from_preferences(preferences)

    stops: list[DateStop] = []
    running_duration = 0
    previous: Coordinates | None = None

    for slot in slots:
        if not slot.required and running_duration > optional_cutoff:
            debug.skipped_optional_slots += 1
            continue

        if slot.type == SlotType.EVENT and anchor_event is not None:
            stop = event_stop(len(stops) + 1, anchor_event, slot)
            stops.append(stop)
            running_duration += stop.duration
            previous = anchor_event.coordinates or previous
            debug.filled_slots += 1
            continue

        narrowed = narrow_for_slot(
            pool,
            preferences,
            slot.categories,
            slot.type,
            slot.period,
            exclude_ids=excluded,
        )
        debug.relaxed_filters += len(narrowed.relaxed)

        context = replace(base_context, previous_stop=previous)
        if slot.period is not None:
            context = replace(context, time_of_day=slot.period)

        venue = select_best(narrowed.venues, context, excluded, rng=rng)
        if venue is None:
            logger.info(
                "Slot left empty: %s",
                format_fields(activity=slot.activity, required=slot.required, pool=len(narrowed.venues)),
            )
            debug.unfilled_slots += 1
            continue

        stop = venue_stop(len(stops) + 1, venue, slot.activity, slot.duration, slot.default_cost, slot.categories)
        stops.append(stop)
        excluded.append(venue.id)
        running_duration += stop.duration
        previous = venue.coordinates
        debug.filled_slots += 1

    return stops, debug


def fill_slots(state: PlanState, config: RunnableConfig) -> PlanState:
    """Fill the slot template from the fetched candidate pool."""
    if state.get("error"):
        return state

    preferences = state.get("preferences")
    slots = state.get("slots")
    if preferences is None or slots is None:
        return {**state, "error": "fill_slots requires preferences and slots."}

    rng = config.get("configurable", {}).get("rng")
    stops, debug = fill_time_slots(
        slots,
        state.get("candidates") or [],
        preferences,
        anchor_event=state.get("anchor_event"),
        rng=rng,
        debug=state.get("debug"),
    )
    logger.info(
        "Slots filled: %s",
        format_fields(
            stops=len(stops),
            unfilled=debug.unfilled_slots,
            skipped=debug.skipped_optional_slots,
            relaxed=debug.relaxed_filters,
        ),
    )
    return {**state, "stops": stops, "debug": debug}
