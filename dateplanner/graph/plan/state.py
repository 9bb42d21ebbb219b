"""Plan generation graph state."""

from typing import TypedDict

from dateplanner.schemas.plan import DatePlan, DatePreferences, DateStop, PlanDebug, TimeSlot
from dateplanner.schemas.venue import AnchorEvent, Venue


class PlanState(TypedDict, total=False):
    """Plan generation graph state.

    Keys:
        preferences: request preferences
        anchor_event: resolved anchor event, if one was requested and found
        candidates: venue pool fetched once for the whole plan
        slots: ordered slot template
        stops: filled stops
        debug: assembly counters
        plan: final plan
        error: error message
    """

    # Input
    preferences: DatePreferences

    # Processing
    anchor_event: AnchorEvent | None
    candidates: list[Venue]
    slots: list[TimeSlot]
    stops: list[DateStop]
    debug: PlanDebug

    # Output
    plan: DatePlan | None
    error: str | None
