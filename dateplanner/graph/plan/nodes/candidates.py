"""Candidate fetch node."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from dateplanner.core.logger import format_fields, get_logger
from dateplanner.graph.plan.state import PlanState
from dateplanner.schemas.plan import PlanDebug
from dateplanner.services.venue_repository import VenueQuery, VenueRepositoryProtocol

logger = get_logger(__name__)

_MAX_PRICE_TIER = 4


def budget_venue_query(budget_tier: int) -> VenueQuery:
    """Venue query for a plan: one tier of headroom above the budget, coordinates required."""
    return VenueQuery(max_price_tier=min(_MAX_PRICE_TIER, budget_tier + 1), require_coordinates=True)


async def fetch_candidates(state: PlanState, config: RunnableConfig) -> PlanState:
    """Load the venue pool and resolve the anchor event."""
    if state.get("error"):
        return state

    preferences = state.get("preferences")
    if preferences is None:
        return {**state, "error": "fetch_candidates requires preferences."}

    repository: VenueRepositoryProtocol | None = config.get("configurable", {}).get("venue_repository")
    if repository is None:
        return {**state, "error": "Venue repository was not injected."}

    venues = await repository.query_venues(budget_venue_query(preferences.budget_range.tier))
    venues = [venue for venue in venues if not venue.event_only]

    anchor_event = None
    if preferences.anchor_event_id:
        anchor_event = await repository.get_event(preferences.anchor_event_id)
        if anchor_event is None:
            logger.info("Anchor event not found: %s", format_fields(anchor_event_id=preferences.anchor_event_id))

    logger.info(
        "Candidates fetched: %s",
        format_fields(venues=len(venues), anchor=anchor_event.id if anchor_event else None),
    )
    return {
        **state,
        "candidates": venues,
        "anchor_event": anchor_event,
        "debug": PlanDebug(candidate_count=len(venues)),
    }
