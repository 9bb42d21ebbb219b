"""Venue event enrichment node."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from dateplanner.core.config import get_settings
from dateplanner.core.logger import format_fields, get_logger
from dateplanner.core.time_windows import period_window
from dateplanner.graph.plan.state import PlanState
from dateplanner.services.venue_repository import EventQuery, VenueRepositoryProtocol

logger = get_logger(__name__)

_EVENTS_PER_VENUE = 3


async def enrich_stops(state: PlanState, config: RunnableConfig) -> PlanState:
    """Attach events happening at each stop's venue during the plan window."""
    if state.get("error"):
        return state

    preferences = state.get("preferences")
    stops = state.get("stops") or []
    if preferences is None or preferences.date is None or not stops:
        return state
    if not get_settings().VENUE_EVENTS_ENRICHMENT_ENABLED:
        return state

    repository: VenueRepositoryProtocol | None = config.get("configurable", {}).get("venue_repository")
    if repository is None:
        return {**state, "error": "Venue repository was not injected."}

    start, end = period_window(preferences.date, preferences.time_of_day)
    enriched = []
    enriched_count = 0
    for stop in stops:
        if stop.venue is None:
            enriched.append(stop)
            continue

        events = await repository.query_events(
            EventQuery(start=start, end=end, venue_id=stop.venue.id, limit=_EVENTS_PER_VENUE),
        )
        if not events:
            enriched.append(stop)
            continue

        titles = ", ".join(event.title for event in events)
        notes = f"{stop.notes} Also happening here: {titles}.".strip()
        enriched.append(stop.model_copy(update={"venue_events": events, "notes": notes}))
        enriched_count += 1

    logger.info("Stops enriched: %s", format_fields(stops=len(stops), with_events=enriched_count))

    debug = state.get("debug")
    if debug is not None:
        debug = debug.model_copy(update={"enriched_stops": enriched_count})
    return {**state, "stops": enriched, "debug": debug}
