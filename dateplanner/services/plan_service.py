"""Date plan service.

Runs the plan and modify graphs with the injected repository and random
source. A graph error surfaces as ``RuntimeError``; "nothing found" is a
normal ``None`` result.
"""

from __future__ import annotations

from dateplanner.core.geo import nearest_neighbor_order
from dateplanner.core.logger import get_logger
from dateplanner.core.selection import RandomSource
from dateplanner.graph.modify.workflow import compiled_modify_graph
from dateplanner.graph.plan.nodes.finalize import link_stops
from dateplanner.graph.plan.workflow import compiled_plan_graph
from dateplanner.schemas.enums import ModifyOperation, VenueCategory
from dateplanner.schemas.plan import DatePlan, DatePreferences, DateStop
from dateplanner.schemas.venue import Venue
from dateplanner.services.venue_repository import VenueQuery, VenueRepositoryProtocol

logger = get_logger(__name__)


def _graph_config(repository: VenueRepositoryProtocol, rng: RandomSource | None) -> dict:
    return {"configurable": {"venue_repository": repository, "rng": rng}}


async def generate_plan(
    preferences: DatePreferences,
    repository: VenueRepositoryProtocol,
    rng: RandomSource | None = None,
) -> DatePlan:
    """Generate a date plan for the given preferences."""
    result = await compiled_plan_graph.ainvoke(
        {"preferences": preferences},
        config=_graph_config(repository, rng),
    )

    if error := result.get("error"):
        logger.error("Plan pipeline error: %s", error)
        raise RuntimeError(error)

    plan = result.get("plan")
    if plan is None:
        raise RuntimeError("Plan pipeline returned no plan.")
    return plan


async def _run_modify(initial_state: dict, repository: VenueRepositoryProtocol, rng: RandomSource | None):
    result = await compiled_modify_graph.ainvoke(initial_state, config=_graph_config(repository, rng))
    if error := result.get("error"):
        logger.error("Modify pipeline error: %s", error)
        raise RuntimeError(error)
    return result.get("new_stop")


async def swap_stop(
    stop_to_swap: DateStop,
    all_stops: list[DateStop],
    preferences: DatePreferences,
    repository: VenueRepositoryProtocol,
    rng: RandomSource | None = None,
) -> DateStop | None:
    """Suggest a replacement for one stop, or None when the cascade finds nothing."""
    return await _run_modify(
        {
            "operation": ModifyOperation.SWAP,
            "preferences": preferences,
            "all_stops": all_stops,
            "stop_to_swap": stop_to_swap,
        },
        repository,
        rng,
    )


async def add_stop(
    insert_after_index: int,
    all_stops: list[DateStop],
    preferences: DatePreferences,
    repository: VenueRepositoryProtocol,
    rng: RandomSource | None = None,
    category: VenueCategory | None = None,
) -> DateStop | None:
    """Suggest a stop to insert after ``insert_after_index`` (-1 inserts at the front).

    ``category`` pins the new stop to one category instead of the suggested set.
    """
    if insert_after_index < -1 or insert_after_index >= max(1, len(all_stops)):
        raise ValueError("insert_after_index must point at an existing stop.")
    return await _run_modify(
        {
            "operation": ModifyOperation.ADD,
            "preferences": preferences,
            "all_stops": all_stops,
            "insert_after_index": insert_after_index,
            "category": category,
        },
        repository,
        rng,
    )


def reorder_stops(stops: list[DateStop]) -> list[DateStop]:
    """Re-sequence stops by nearest neighbour, keeping the first stop in place."""
    ordered = nearest_neighbor_order(sorted(stops, key=lambda stop: stop.order), key=lambda stop: stop.coordinates)
    return link_stops(ordered)


async def venues_by_category(
    category: VenueCategory,
    repository: VenueRepositoryProtocol,
    limit: int = 10,
) -> list[Venue]:
    """Located venues of one category, most romantic first, for picking a stop by hand."""
    venues = await repository.query_venues(VenueQuery(categories=frozenset({category})))
    listed = [venue for venue in venues if not venue.event_only]
    listed.sort(key=lambda venue: (-venue.romantic_score, venue.name))
    return listed[:limit]
