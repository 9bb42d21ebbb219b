"""Form option lists served by the suggestions endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field

from dateplanner.schemas.enums import BudgetRange, OccasionType, TimeOfDay, VenueCategory


class OptionItem(BaseModel):
    id: str = Field(..., description="Value to send back in requests")
    label: str = Field(..., description="Display label")
    description: str | None = Field(default=None, description="Short description")


class DurationOption(BaseModel):
    hours: float
    label: str


class SuggestionsResponse(BaseModel):
    """Everything a request form needs to offer valid choices."""

    event_types: list[OptionItem]
    vibes: list[OptionItem]
    budget_ranges: list[OptionItem]
    activity_levels: list[OptionItem]
    time_of_day: list[OptionItem]
    duration_options: list[DurationOption]
    access_options: list[OptionItem]


_EVENT_TYPE_DESCRIPTIONS = {
    OccasionType.DATE_NIGHT: "Romantic evening out",
    OccasionType.FIRST_DATE: "Low-pressure, get to know each other",
    OccasionType.ANNIVERSARY: "Celebrate your milestone",
    OccasionType.FRIENDS_NIGHT: "Fun night with the crew",
    OccasionType.FAMILY_OUTING: "Fun for all ages",
    OccasionType.SOLO_ADVENTURE: "Treat yourself",
    OccasionType.CASUAL_HANGOUT: "Relaxed, no pressure",
    OccasionType.SPECIAL_OCCASION: "Birthday, promotion, etc.",
    OccasionType.ACTIVE_DAY: "Get moving and stay active",
    OccasionType.CHILL_DAY: "Low-key and relaxing",
}
_VIBES = (
    "romantic",
    "fun",
    "relaxed",
    "adventurous",
    "cultural",
    "outdoors",
    "foodie",
    "artsy",
    "sporty",
    "cozy",
    "upscale",
    "budget_friendly",
)
_BUDGET_DESCRIPTIONS = {
    BudgetRange.LOW: "Under $30",
    BudgetRange.MID: "$30-$75",
    BudgetRange.HIGH: "$75-$150",
    BudgetRange.LUXURY: "$150+",
}
_ACTIVITY_LEVELS = (
    ("Very Chill", "Minimal walking, seated activities"),
    ("Relaxed", "Some walking, mostly relaxed"),
    ("Moderate", "Mix of active and relaxed"),
    ("Active", "On your feet, exploring"),
    ("Very Active", "Adventure mode, lots of movement"),
)
_TIME_OF_DAY_DESCRIPTIONS = {
    TimeOfDay.MORNING: "8am-12pm",
    TimeOfDay.AFTERNOON: "12pm-5pm",
    TimeOfDay.EVENING: "5pm-9pm",
    TimeOfDay.NIGHT: "9pm-midnight",
    TimeOfDay.FULL_DAY: "Breakfast through a nightcap",
}
_DURATIONS = (
    (1, "Quick (1 hr)"),
    (2, "Short (2 hrs)"),
    (3, "Standard (3 hrs)"),
    (4, "Extended (4 hrs)"),
    (6, "Half Day (6 hrs)"),
    (8, "Full Day (8 hrs)"),
    (12, "All Day (12 hrs)"),
)


def _label(value: str) -> str:
    return value.replace("_", " ").title()


def build_suggestions() -> SuggestionsResponse:
    return SuggestionsResponse(
        event_types=[
            OptionItem(id=occasion.value, label=_label(occasion.value), description=description)
            for occasion, description in _EVENT_TYPE_DESCRIPTIONS.items()
        ],
        vibes=[OptionItem(id=vibe, label=_label(vibe)) for vibe in _VIBES],
        budget_ranges=[
            OptionItem(id=budget.value, label=budget.value, description=description)
            for budget, description in _BUDGET_DESCRIPTIONS.items()
        ],
        activity_levels=[
            OptionItem(id=str(level), label=label, description=description)
            for level, (label, description) in enumerate(_ACTIVITY_LEVELS, start=1)
        ],
        time_of_day=[
            OptionItem(id=period.value, label=_label(period.value), description=description)
            for period, description in _TIME_OF_DAY_DESCRIPTIONS.items()
        ],
        duration_options=[DurationOption(hours=hours, label=label) for hours, label in _DURATIONS],
        access_options=[
            OptionItem(
                id="has_military_access",
                label="I have military base access",
                description="Include on-base venues (requires military ID)",
            ),
            OptionItem(
                id="all_over_21",
                label="Everyone is 21+",
                description="Turn off to skip bars, breweries and other 21+ venues",
            ),
        ],
    )


class VenueCategoriesResponse(BaseModel):
    """Categories offered when adding a stop by hand."""

    categories: list[OptionItem]


_CATEGORY_OPTIONS = {
    VenueCategory.FOOD: ("Restaurant / Food", "Dining options"),
    VenueCategory.DRINK: ("Bar / Drinks", "Bars, breweries, cafes"),
    VenueCategory.ACTIVITY: ("Activity", "Fun activities"),
    VenueCategory.NATURE: ("Outdoors / Nature", "Parks, trails, outdoor spots"),
    VenueCategory.CULTURE: ("Culture / Arts", "Museums, galleries, theaters"),
    VenueCategory.ENTERTAINMENT: ("Entertainment", "Movies, shows, games"),
    VenueCategory.SHOPPING: ("Shopping", "Retail and shopping"),
}


def build_venue_categories() -> VenueCategoriesResponse:
    return VenueCategoriesResponse(
        categories=[
            OptionItem(id=category.value, label=label, description=description)
            for category, (label, description) in _CATEGORY_OPTIONS.items()
        ],
    )
