"""Venue and event snapshots supplied by the data-access layer."""

from __future__ import annotations

import json
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from dateplanner.core.geo import Coordinates
from dateplanner.schemas.enums import VenueCategory

NEUTRAL_PRICE_TIER = 2
DEFAULT_ROMANTIC_SCORE = 3


def parse_tag_list(value: object) -> list[str]:
    """Parse a stored tag list.

    Accepts a list or a JSON-serialized array. Anything unparsable becomes an
    empty list instead of an error.
    """
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        try:
            value = json.loads(text)
        except ValueError:
            return []
    if isinstance(value, (list, tuple, set)):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    return []


class Venue(BaseModel):
    """Read-only venue snapshot."""

    id: str = Field(..., description="Venue identifier")
    name: str = Field(..., description="Display name")
    category: VenueCategory = Field(..., description="Venue category")
    subcategory: str | None = Field(default=None, description="Free-text subcategory (e.g. brewery)")
    latitude: float | None = Field(default=None, description="Latitude")
    longitude: float | None = Field(default=None, description="Longitude")
    address: str | None = Field(default=None, description="Street address")
    description: str | None = Field(default=None, description="Short description")
    price_level: int | None = Field(default=None, ge=0, le=4, description="Price tier 0-4")
    average_cost: float | None = Field(default=None, ge=0, description="Average spend per person")
    typical_duration: int | None = Field(default=None, ge=1, description="Typical visit length in minutes")
    romantic_score: int = Field(default=DEFAULT_ROMANTIC_SCORE, ge=1, le=5, description="Romance rating 1-5")
    vibe: list[str] = Field(default_factory=list, description="Vibe tags")
    good_for: list[str] = Field(default_factory=list, description="Occasion tags")
    best_time: list[str] = Field(default_factory=list, description="Best time-of-day tags")
    pet_friendly: bool = False
    kid_friendly: bool = False
    wheelchair_accessible: bool = False
    has_stairs: bool = False
    has_elevator: bool = False
    has_wifi: bool = False
    is_downtown: bool | None = Field(default=None, description="Downtown flag; unknown falls back to distance")
    event_only: bool = Field(default=False, description="Venue only opens for scheduled events")
    requires_base_access: bool = Field(default=False, description="Venue sits behind a military-base gate")

    @field_validator("vibe", "good_for", "best_time", mode="before")
    @classmethod
    def _parse_tags(cls, value: object) -> list[str]:
        return parse_tag_list(value)

    @field_validator("romantic_score", mode="before")
    @classmethod
    def _default_romantic_score(cls, value: object) -> int:
        try:
            numeric = int(value) if value is not None else DEFAULT_ROMANTIC_SCORE
        except (TypeError, ValueError):
            numeric = DEFAULT_ROMANTIC_SCORE
        return min(5, max(1, numeric))

    @property
    def coordinates(self) -> Coordinates | None:
        return Coordinates.from_optional(self.latitude, self.longitude)

    @property
    def price_tier(self) -> int:
        return self.price_level if self.price_level is not None else NEUTRAL_PRICE_TIER


class AnchorEvent(BaseModel):
    """A scheduled happening a plan can be built around."""

    id: str = Field(..., description="Event identifier")
    title: str = Field(..., description="Event title")
    start_datetime: datetime = Field(..., description="Start timestamp")
    end_datetime: datetime | None = Field(default=None, description="End timestamp")
    venue_id: str | None = Field(default=None, description="Linked venue id")
    venue_name: str | None = Field(default=None, description="Linked venue name")
    venue_latitude: float | None = Field(default=None, description="Linked venue latitude")
    venue_longitude: float | None = Field(default=None, description="Linked venue longitude")
    description: str | None = Field(default=None, description="Event description")
    categories: list[str] = Field(default_factory=list, description="Category tags")
    price: float | None = Field(default=None, ge=0, description="Ticket price per person")

    @field_validator("categories", mode="before")
    @classmethod
    def _parse_categories(cls, value: object) -> list[str]:
        return parse_tag_list(value)

    @property
    def coordinates(self) -> Coordinates | None:
        return Coordinates.from_optional(self.venue_latitude, self.venue_longitude)

    @property
    def duration_minutes(self) -> int | None:
        if self.end_datetime is None:
            return None
        return int((self.end_datetime - self.start_datetime).total_seconds() // 60)


class VenueListResponse(BaseModel):
    """Venues of one category."""

    status: str = Field(default="success", description="Result status")
    venues: list[Venue] = Field(default_factory=list, description="Matching venues")
    count: int = Field(default=0, description="Number of venues returned")
