"""Date plan request/response schemas."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator

from dateplanner.core.geo import Coordinates
from dateplanner.schemas.enums import (
    BudgetRange,
    ModifyStatus,
    OccasionType,
    SlotType,
    TimeOfDay,
    VenueCategory,
)
from dateplanner.schemas.venue import AnchorEvent, Venue

_LEGACY_OCCASION_LABELS = {
    "date night": OccasionType.DATE_NIGHT.value,
    "first date": OccasionType.FIRST_DATE.value,
    "anniversary": OccasionType.ANNIVERSARY.value,
    "friends night": OccasionType.FRIENDS_NIGHT.value,
    "family": OccasionType.FAMILY_OUTING.value,
}


class DatePreferences(BaseModel):
    """Caller preferences for one generation, swap or add request.

    Fields:
        `event_type`: occasion id (legacy display labels are normalized)
        `budget_range`: symbolic budget, mapped onto tiers 1-4
        `vibes`: desired vibe labels
        `duration_hours`: total desired length of the plan
        `time_of_day`: period the plan covers
        `activity_level`: 1 (very chill) to 5 (very active)
        `exclude_venue_ids`: venues shown in earlier sessions
        `anchor_event_id`: event to build the plan around
        `date`: plan day, used for event windows
    """

    event_type: OccasionType = Field(..., description="Occasion type")
    budget_range: BudgetRange = Field(..., description="Budget range ($ to $$$$)")
    vibes: list[str] = Field(default_factory=list, description="Desired vibe labels")
    duration_hours: float = Field(..., gt=0, le=16, description="Desired total duration in hours")
    time_of_day: TimeOfDay = Field(default=TimeOfDay.EVENING, description="Time of day")
    activity_level: int = Field(default=3, ge=1, le=5, description="Activity level 1-5")
    with_dog: bool = Field(default=False, description="Bringing a dog")
    with_young_children: bool = Field(default=False, description="Bringing young children")
    wheelchair_accessible: bool = Field(default=False, description="Needs wheelchair access")
    avoid_stairs: bool = Field(default=False, description="Avoid venues with stairs and no elevator")
    needs_wifi: bool = Field(default=False, description="Needs wifi")
    downtown_only: bool = Field(default=False, description="Restrict to downtown venues")
    has_military_access: bool = Field(default=False, description="Can enter military-base venues")
    all_over_21: bool = Field(default=True, description="Everyone in the party is 21 or older")
    exclude_venue_ids: list[str] = Field(default_factory=list, description="Venue ids to avoid")
    anchor_event_id: str | None = Field(default=None, description="Anchor event id")
    date: dt.date | None = Field(default=None, description="Plan date (YYYY-MM-DD)")
    include_debug: bool = Field(default=False, description="Attach debug counters to the plan")

    @field_validator("event_type", mode="before")
    @classmethod
    def _normalize_legacy_occasion(cls, value: object) -> object:
        if isinstance(value, str):
            label = value.strip().lower()
            if label in _LEGACY_OCCASION_LABELS:
                return _LEGACY_OCCASION_LABELS[label]
            return label.replace(" ", "_")
        return value

    @field_validator("vibes", mode="before")
    @classmethod
    def _normalize_vibes(cls, value: object) -> object:
        if isinstance(value, list):
            return [str(item).strip().lower() for item in value if str(item).strip()]
        return value

    @property
    def target_minutes(self) -> int:
        return round(self.duration_hours * 60)


class TimeSlot(BaseModel):
    """Unfilled placeholder in a plan template."""

    type: SlotType = Field(..., description="Slot type")
    activity: str = Field(..., description="Human-readable activity label")
    categories: list[VenueCategory] = Field(default_factory=list, description="Accepted venue categories")
    duration: int = Field(..., ge=0, description="Duration in minutes")
    default_cost: float = Field(..., ge=0, description="Default cost per person")
    required: bool = Field(default=False, description="Required slot")
    period: TimeOfDay | None = Field(default=None, description="Period the slot falls in")


class DateStop(BaseModel):
    """One stop of a date plan."""

    order: int = Field(..., ge=1, description="Position in the plan (1-based)")
    venue: Venue | None = Field(default=None, description="Venue snapshot")
    event: AnchorEvent | None = Field(default=None, description="Event snapshot")
    activity: str = Field(..., description="Activity label")
    duration: int = Field(..., ge=0, description="Duration in minutes")
    cost: float = Field(..., ge=0, description="Cost per person")
    notes: str = Field(default="", description="Free-text notes")
    transition_tip: str | None = Field(default=None, description="How to get to the next stop")
    venue_events: list[AnchorEvent] = Field(default_factory=list, description="Events at the venue during the visit")
    slot_categories: list[VenueCategory] = Field(default_factory=list, description="Categories of the source slot")

    @property
    def coordinates(self) -> Coordinates | None:
        if self.venue is not None and self.venue.coordinates is not None:
            return self.venue.coordinates
        if self.event is not None:
            return self.event.coordinates
        return None


class PlanDebug(BaseModel):
    """Counters describing how a plan was assembled."""

    candidate_count: int = 0
    slot_count: int = 0
    filled_slots: int = 0
    unfilled_slots: int = 0
    skipped_optional_slots: int = 0
    relaxed_filters: int = 0
    enriched_stops: int = 0


class DatePlan(BaseModel):
    """Top-level generated plan."""

    id: str = Field(..., description="Plan id")
    title: str = Field(..., description="Plan title")
    stops: list[DateStop] = Field(default_factory=list, description="Ordered stops")
    tips: list[str] = Field(default_factory=list, description="General tips")
    debug: PlanDebug | None = Field(default=None, description="Debug counters")

    @computed_field
    @property
    def total_duration(self) -> int:
        return sum(stop.duration for stop in self.stops)

    @computed_field
    @property
    def estimated_cost(self) -> float:
        return sum(stop.cost for stop in self.stops)


class SwapStopRequest(BaseModel):
    """Replace one stop of an existing plan."""

    stop_to_swap: DateStop = Field(..., description="Stop to replace")
    all_stops: list[DateStop] = Field(..., min_length=1, description="Every stop of the plan")
    preferences: DatePreferences = Field(..., description="Preferences the plan was built with")


class AddStopRequest(BaseModel):
    """Insert a new stop after a given position."""

    insert_after_index: int = Field(..., ge=-1, description="0-based index to insert after (-1 = front)")
    all_stops: list[DateStop] = Field(default_factory=list, description="Every stop of the plan")
    preferences: DatePreferences = Field(..., description="Preferences the plan was built with")
    category: VenueCategory | None = Field(default=None, description="Force the new stop's category")

    @model_validator(mode="after")
    def validate_insert_position(self):
        if self.insert_after_index >= max(1, len(self.all_stops)):
            raise ValueError("insert_after_index must point at an existing stop.")
        return self


class ReorderStopsRequest(BaseModel):
    """Re-sequence stops by proximity."""

    stops: list[DateStop] = Field(..., min_length=1, description="Stops to reorder")


class StopResponse(BaseModel):
    """Result of a swap or add request."""

    status: ModifyStatus = Field(..., description="Result status")
    new_stop: DateStop | None = Field(default=None, description="Suggested stop")
