"""Plan finalize node."""

from __future__ import annotations

import uuid

from dateplanner.core.geo import transition_tip
from dateplanner.core.logger import format_fields, get_logger
from dateplanner.graph.plan.state import PlanState
from dateplanner.schemas.enums import OccasionType, TimeOfDay
from dateplanner.schemas.plan import DatePlan, DatePreferences, DateStop

logger = get_logger(__name__)

BASE_TIPS = (
    "Check venue hours before going.",
    "Parking is usually free downtown after 5pm.",
)


def _label(value: str) -> str:
    return value.replace("_", " ").title()


def plan_title(time_of_day: TimeOfDay, event_type: OccasionType) -> str:
    """Title such as ``"Evening Date Night"``."""
    return f"{_label(time_of_day.value)} {_label(event_type.value)}"


def plan_tips(preferences: DatePreferences) -> list[str]:
    tips = list(BASE_TIPS)
    if preferences.with_dog:
        tips.append("Call ahead to confirm pets are welcome inside.")
    if preferences.wheelchair_accessible or preferences.avoid_stairs:
        tips.append("Ask about step-free entrances when you book.")
    return tips


def link_stops(stops: list[DateStop]) -> list[DateStop]:
    """Renumber stops 1..n and set the transition tip toward each next stop."""
    linked = []
    for index, stop in enumerate(stops):
        tip = None
        if index + 1 < len(stops):
            origin = stop.coordinates
            destination = stops[index + 1].coordinates
            if origin is not None and destination is not None:
                tip = transition_tip(origin, destination)
        linked.append(stop.model_copy(update={"order": index + 1, "transition_tip": tip}))
    return linked


def finalize_plan(state: PlanState) -> PlanState:
    """Assemble the final plan from the filled stops."""
    if state.get("error"):
        return state

    preferences = state.get("preferences")
    if preferences is None:
        return {**state, "error": "finalize_plan requires preferences."}

    stops = link_stops(state.get("stops") or [])
    debug = state.get("debug") if preferences.include_debug else None
    plan = DatePlan(
        id=str(uuid.uuid4()),
        title=plan_title(preferences.time_of_day, preferences.event_type),
        stops=stops,
        tips=plan_tips(preferences),
        debug=debug,
    )
    logger.info(
        "Plan finalized: %s",
        format_fields(
            plan_id=plan.id,
            stops=len(stops),
            total_duration=plan.total_duration,
            estimated_cost=plan.estimated_cost,
        ),
    )
    return {**state, "plan": plan}
