"""Slot template builder.

Turns preferences (and an optional anchor event) into the ordered list of
slots the fill step works through. Two branches:

* anchor branch: a short pre-activity / event / post-activity sequence,
  picked by the hour the anchor event starts.
* template branch: a fixed table per time of day. ``full_day`` is the superset
  from breakfast to a nightcap; the shorter templates grow extra optional
  slots once the requested duration reaches ``EXTENDED_TEMPLATE_MIN_HOURS``.
"""

from __future__ import annotations

from dateplanner.core.config import get_settings
from dateplanner.core.logger import format_fields, get_logger
from dateplanner.graph.plan.state import PlanState
from dateplanner.schemas.enums import SlotType, TimeOfDay, VenueCategory
from dateplanner.schemas.plan import DatePreferences, PlanDebug, TimeSlot
from dateplanner.schemas.venue import AnchorEvent

logger = get_logger(__name__)

FOOD = VenueCategory.FOOD
DRINK = VenueCategory.DRINK
ACTIVITY = VenueCategory.ACTIVITY
NATURE = VenueCategory.NATURE
CULTURE = VenueCategory.CULTURE
ENTERTAINMENT = VenueCategory.ENTERTAINMENT
SHOPPING = VenueCategory.SHOPPING

EVENT_DEFAULT_MINUTES = 120
EVENT_MIN_MINUTES = 60
EVENT_MAX_MINUTES = 240
EVENT_DEFAULT_COST = 30.0
FULL_DAY_LATE_SLOT_MIN_HOURS = 12


def _slot(
    slot_type: SlotType,
    activity: str,
    categories: list[VenueCategory],
    duration: int,
    default_cost: float,
    period: TimeOfDay,
    required: bool = False,
) -> TimeSlot:
    return TimeSlot(
        type=slot_type,
        activity=activity,
        categories=categories,
        duration=duration,
        default_cost=default_cost,
        required=required,
        period=period,
    )


def period_for_hour(hour: int) -> TimeOfDay:
    """Time-of-day period an hour of the day falls in."""
    if hour < 12:
        return TimeOfDay.MORNING
    if hour < 17:
        return TimeOfDay.AFTERNOON
    if hour < 21:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


def event_slot(anchor_event: AnchorEvent) -> TimeSlot:
    """Slot holding the anchor event itself. It is never searched for."""
    length = anchor_event.duration_minutes
    duration = EVENT_DEFAULT_MINUTES if length is None else min(EVENT_MAX_MINUTES, max(EVENT_MIN_MINUTES, length))
    cost = anchor_event.price if anchor_event.price is not None else EVENT_DEFAULT_COST
    return _slot(
        SlotType.EVENT,
        anchor_event.title,
        [],
        duration,
        cost,
        period_for_hour(anchor_event.start_datetime.hour),
        required=True,
    )


def _anchor_slots(anchor_event: AnchorEvent) -> list[TimeSlot]:
    hour = anchor_event.start_datetime.hour
    event = event_slot(anchor_event)

    if hour < 12:
        return [
            _slot(SlotType.MEAL, "Pre-Event Coffee", [FOOD], 30, 10, TimeOfDay.MORNING),
            event,
            _slot(SlotType.MEAL, "Post-Event Lunch", [FOOD], 75, 25, TimeOfDay.AFTERNOON, required=True),
            _slot(SlotType.ACTIVITY, "Afternoon Activity", [NATURE, CULTURE], 60, 15, TimeOfDay.AFTERNOON),
        ]
    if hour < 17:
        return [
            _slot(SlotType.MEAL, "Lunch", [FOOD], 60, 25, TimeOfDay.AFTERNOON, required=True),
            event,
            _slot(SlotType.DESSERT, "Dessert/Coffee", [FOOD], 30, 10, TimeOfDay.AFTERNOON),
        ]
    return [
        _slot(SlotType.MEAL, "Pre-Event Dinner", [FOOD], 90, 45, TimeOfDay.EVENING, required=True),
        event,
        _slot(SlotType.DRINKS, "Nightcap", [DRINK], 60, 20, TimeOfDay.NIGHT),
    ]


def _morning_slots(extended: bool) -> list[TimeSlot]:
    slots = [
        _slot(SlotType.MEAL, "Breakfast/Coffee", [FOOD], 45, 20, TimeOfDay.MORNING, required=True),
        _slot(
            SlotType.ACTIVITY,
            "Morning Activity",
            [NATURE, ACTIVITY, CULTURE],
            90,
            15,
            TimeOfDay.MORNING,
            required=True,
        ),
    ]
    if extended:
        slots += [
            _slot(SlotType.ACTIVITY, "Browse & Explore", [SHOPPING, CULTURE], 60, 20, TimeOfDay.MORNING),
            _slot(SlotType.MEAL, "Lunch", [FOOD], 60, 25, TimeOfDay.AFTERNOON),
        ]
    return slots


def _afternoon_slots(extended: bool) -> list[TimeSlot]:
    slots = [
        _slot(SlotType.MEAL, "Lunch", [FOOD], 60, 25, TimeOfDay.AFTERNOON, required=True),
        _slot(
            SlotType.ACTIVITY,
            "Afternoon Fun",
            [ACTIVITY, CULTURE, NATURE],
            90,
            20,
            TimeOfDay.AFTERNOON,
            required=True,
        ),
    ]
    if extended:
        slots += [
            _slot(SlotType.DESSERT, "Coffee/Dessert", [FOOD], 30, 10, TimeOfDay.AFTERNOON),
            _slot(SlotType.ACTIVITY, "Shopping Stroll", [SHOPPING], 60, 20, TimeOfDay.AFTERNOON),
        ]
    return slots


def _evening_slots(extended: bool) -> list[TimeSlot]:
    slots = [
        _slot(SlotType.MEAL, "Dinner", [FOOD], 90, 45, TimeOfDay.EVENING, required=True),
        _slot(
            SlotType.ACTIVITY,
            "Evening Activity",
            [ACTIVITY, CULTURE, ENTERTAINMENT],
            75,
            25,
            TimeOfDay.EVENING,
        ),
    ]
    if extended:
        slots.append(_slot(SlotType.DESSERT, "Dessert", [FOOD], 30, 12, TimeOfDay.EVENING))
    slots.append(_slot(SlotType.DRINKS, "Nightcap", [DRINK], 60, 20, TimeOfDay.NIGHT))
    return slots


def _night_slots(extended: bool) -> list[TimeSlot]:
    slots = [
        _slot(SlotType.MEAL, "Late Bite", [FOOD], 60, 25, TimeOfDay.NIGHT, required=True),
        _slot(SlotType.ACTIVITY, "Night Out", [ENTERTAINMENT, ACTIVITY], 90, 25, TimeOfDay.NIGHT, required=True),
        _slot(SlotType.DRINKS, "Nightcap", [DRINK], 60, 20, TimeOfDay.NIGHT),
    ]
    if extended:
        slots.append(_slot(SlotType.DESSERT, "Late-Night Dessert", [FOOD], 30, 10, TimeOfDay.NIGHT))
    return slots


def _full_day_slots(duration_hours: float) -> list[TimeSlot]:
    slots = [
        _slot(SlotType.MEAL, "Breakfast/Coffee", [FOOD], 45, 20, TimeOfDay.MORNING, required=True),
        _slot(
            SlotType.ACTIVITY,
            "Morning Activity",
            [NATURE, ACTIVITY],
            90,
            15,
            TimeOfDay.MORNING,
            required=True,
        ),
        _slot(SlotType.ACTIVITY, "Culture Stop", [CULTURE], 60, 15, TimeOfDay.MORNING),
        _slot(SlotType.MEAL, "Lunch", [FOOD], 60, 25, TimeOfDay.AFTERNOON, required=True),
        _slot(
            SlotType.ACTIVITY,
            "Afternoon Activity",
            [ACTIVITY, NATURE, CULTURE],
            90,
            20,
            TimeOfDay.AFTERNOON,
        ),
        _slot(SlotType.ACTIVITY, "Shopping", [SHOPPING], 60, 20, TimeOfDay.AFTERNOON),
        _slot(SlotType.DESSERT, "Afternoon Coffee/Dessert", [FOOD], 30, 10, TimeOfDay.AFTERNOON),
        _slot(SlotType.MEAL, "Dinner", [FOOD], 90, 45, TimeOfDay.EVENING, required=True),
        _slot(
            SlotType.ACTIVITY,
            "Evening Entertainment",
            [ENTERTAINMENT, CULTURE],
            90,
            25,
            TimeOfDay.EVENING,
        ),
        _slot(SlotType.DRINKS, "Nightcap", [DRINK], 60, 20, TimeOfDay.NIGHT),
    ]
    if duration_hours >= FULL_DAY_LATE_SLOT_MIN_HOURS:
        slots.append(_slot(SlotType.DESSERT, "Late-Night Dessert/Bite", [FOOD], 45, 15, TimeOfDay.NIGHT))
    return slots


_TEMPLATES = {
    TimeOfDay.MORNING: _morning_slots,
    TimeOfDay.AFTERNOON: _afternoon_slots,
    TimeOfDay.EVENING: _evening_slots,
    TimeOfDay.NIGHT: _night_slots,
}


def build_time_slots(preferences: DatePreferences, anchor_event: AnchorEvent | None = None) -> list[TimeSlot]:
    """Build the ordered slot list for a request.

    Args:
        preferences: Request preferences.
        anchor_event: Event to build the plan around. Ignored for ``full_day``.

    Returns:
        Ordered slots; pure function of the inputs.
    """
    if anchor_event is not None and preferences.time_of_day != TimeOfDay.FULL_DAY:
        return _anchor_slots(anchor_event)

    if preferences.time_of_day == TimeOfDay.FULL_DAY:
        return _full_day_slots(preferences.duration_hours)

    extended = preferences.duration_hours >= get_settings().EXTENDED_TEMPLATE_MIN_HOURS
    return _TEMPLATES[preferences.time_of_day](extended)


def build_slots(state: PlanState) -> PlanState:
    """Build the slot template and store it on the state."""
    if state.get("error"):
        return state

    preferences = state.get("preferences")
    if preferences is None:
        return {**state, "error": "build_slots requires preferences."}

    anchor_event = state.get("anchor_event")
    slots = build_time_slots(preferences, anchor_event)
    logger.info(
        "Slots built: %s",
        format_fields(
            time_of_day=preferences.time_of_day.value,
            anchored=anchor_event is not None,
            slots=len(slots),
            required=sum(1 for slot in slots if slot.required),
        ),
    )

    debug = (state.get("debug") or PlanDebug()).model_copy(update={"slot_count": len(slots)})
    return {**state, "slots": slots, "debug": debug}
