"""Multi-factor venue scoring.

A venue gets six independently bounded sub-scores that add up to at most 100:

- vibe match (0-30)
- budget fit (0-20)
- romance (0-15)
- proximity to the previous stop (0-15)
- time-of-day fit (0-10)
- occasion fit (0-10)

Scoring is pure: the same venue and context always give the same breakdown.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dateplanner.core.geo import Coordinates, haversine_km
from dateplanner.schemas.enums import BudgetRange, OccasionType, TimeOfDay
from dateplanner.schemas.plan import DatePreferences
from dateplanner.schemas.venue import NEUTRAL_PRICE_TIER, Venue

VIBE_SYNONYMS: dict[str, tuple[str, ...]] = {
    "romantic": ("intimate", "cozy", "upscale", "quiet", "candlelit", "date_night"),
    "adventurous": ("adventurous", "thrilling", "unique", "active", "outdoor", "exciting"),
    "cultural": ("cultural", "artsy", "historic", "educational", "theatre", "museum"),
    "fun": ("fun", "lively", "playful", "energetic", "games", "entertainment"),
    "relaxed": ("relaxed", "casual", "chill", "peaceful", "quiet", "laid_back"),
    "outdoors": ("outdoor", "nature", "hiking", "park", "trail", "fresh_air", "scenic"),
    "foodie": ("foodie", "culinary", "gourmet", "farm_to_table", "local", "chef", "tasting"),
    "artsy": ("artsy", "art", "creative", "gallery", "artistic", "craft", "studio"),
    "sporty": ("sporty", "sports", "athletic", "active", "fitness", "games", "competition"),
    "cozy": ("cozy", "intimate", "warm", "comfortable", "snug", "homey", "fireplace"),
    "upscale": ("upscale", "fine_dining", "elegant", "sophisticated", "luxury", "premium"),
    "budget_friendly": ("casual", "budget", "affordable", "cheap", "free", "low_cost"),
    "budget-friendly": ("casual", "budget", "affordable", "cheap", "free", "low_cost"),
}

OCCASION_TERMS: dict[OccasionType, tuple[str, ...]] = {
    OccasionType.DATE_NIGHT: ("date_night", "dinner", "romantic", "drinks", "intimate"),
    OccasionType.FIRST_DATE: ("first_date", "casual", "conversation", "coffee", "relaxed"),
    OccasionType.ANNIVERSARY: ("anniversary", "special_occasion", "romantic", "fine_dining", "upscale"),
    OccasionType.FRIENDS_NIGHT: ("friends", "fun", "drinks", "games", "group", "social"),
    OccasionType.FAMILY_OUTING: ("family", "kid_friendly", "casual", "all_ages", "outdoor"),
    OccasionType.SOLO_ADVENTURE: ("solo", "exploration", "self_care", "meditation", "nature"),
    OccasionType.CASUAL_HANGOUT: ("casual", "coffee", "relaxed", "chill", "laid_back"),
    OccasionType.SPECIAL_OCCASION: ("special_occasion", "celebration", "birthday", "milestone", "fine_dining"),
    OccasionType.ACTIVE_DAY: ("active", "outdoor", "sports", "hiking", "adventure", "fitness"),
    OccasionType.CHILL_DAY: ("chill", "relaxed", "spa", "quiet", "peaceful", "low_key"),
}

_ADJACENT_PERIODS: dict[str, frozenset[str]] = {
    TimeOfDay.MORNING.value: frozenset({TimeOfDay.AFTERNOON.value}),
    TimeOfDay.AFTERNOON.value: frozenset({TimeOfDay.MORNING.value, TimeOfDay.EVENING.value}),
    TimeOfDay.EVENING.value: frozenset({TimeOfDay.AFTERNOON.value}),
}

# (upper bound in km, points)
_PROXIMITY_BANDS: tuple[tuple[float, int], ...] = (
    (0.3, 15),
    (0.5, 12),
    (1.0, 10),
    (1.5, 7),
    (2.5, 4),
)
_PROXIMITY_FAR = 1
_PROXIMITY_NEUTRAL = 8


@dataclass(frozen=True, slots=True)
class ScoringContext:
    """Everything the scorer knows about the request besides the venue."""

    vibes: tuple[str, ...] = ()
    budget_range: BudgetRange | None = None
    time_of_day: TimeOfDay | None = None
    event_type: OccasionType | None = None
    previous_stop: Coordinates | None = None


def context_from_preferences(preferences: DatePreferences, previous_stop: Coordinates | None = None) -> ScoringContext:
    """Build the scoring context for a request."""
    return ScoringContext(
        vibes=tuple(preferences.vibes),
        budget_range=preferences.budget_range,
        time_of_day=preferences.time_of_day,
        event_type=preferences.event_type,
        previous_stop=previous_stop,
    )


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    vibe_match: int
    budget_fit: int
    romantic_score: int
    proximity_bonus: int
    time_of_day_fit: int
    event_type_fit: int

    @property
    def total(self) -> int:
        return (
            self.vibe_match
            + self.budget_fit
            + self.romantic_score
            + self.proximity_bonus
            + self.time_of_day_fit
            + self.event_type_fit
        )


@dataclass(frozen=True, slots=True)
class VenueScore:
    venue: Venue
    breakdown: ScoreBreakdown = field(repr=False)

    @property
    def total(self) -> int:
        return self.breakdown.total


def score_venue(venue: Venue, context: ScoringContext) -> VenueScore:
    """Score one venue against the request context."""
    breakdown = ScoreBreakdown(
        vibe_match=vibe_match_score(venue, context.vibes),
        budget_fit=budget_fit_score(venue, context.budget_range),
        romantic_score=romantic_score(venue),
        proximity_bonus=proximity_score(venue, context.previous_stop),
        time_of_day_fit=time_of_day_score(venue, context.time_of_day),
        event_type_fit=event_type_score(venue, context.event_type),
    )
    return VenueScore(venue=venue, breakdown=breakdown)


def vibe_match_ratio(venue: Venue, vibes: tuple[str, ...] | list[str]) -> float:
    """Share of desired vibes the venue satisfies; synonym hits count half."""
    if not vibes:
        return 0.0
    venue_tags = [tag.lower() for tag in (*venue.vibe, *venue.good_for)]

    matches = 0.0
    for raw_vibe in vibes:
        vibe = raw_vibe.lower()
        if vibe in venue_tags:
            matches += 1
            continue
        synonyms = VIBE_SYNONYMS.get(vibe, ())
        if any(synonym in tag for synonym in synonyms for tag in venue_tags):
            matches += 0.5
    return matches / len(vibes)


def vibe_points(ratio: float) -> int:
    """Map a vibe match ratio onto the 0-30 band."""
    if ratio >= 0.75:
        return 30
    if ratio >= 0.5:
        return 22
    if ratio >= 0.25:
        return 15
    if ratio > 0:
        return 8
    return 3


def vibe_match_score(venue: Venue, vibes: tuple[str, ...] | list[str]) -> int:
    if not vibes:
        return 15
    return vibe_points(vibe_match_ratio(venue, vibes))


def budget_points(tier_difference: int) -> int:
    """Map the absolute tier difference onto the 0-20 band."""
    if tier_difference == 0:
        return 20
    if tier_difference == 1:
        return 12
    if tier_difference == 2:
        return 5
    return 2


def budget_fit_score(venue: Venue, budget_range: BudgetRange | None) -> int:
    desired_tier = budget_range.tier if budget_range is not None else NEUTRAL_PRICE_TIER
    return budget_points(abs(desired_tier - venue.price_tier))


def romantic_score(venue: Venue) -> int:
    return venue.romantic_score * 3


def proximity_score(venue: Venue, previous_stop: Coordinates | None) -> int:
    coordinates = venue.coordinates
    if previous_stop is None or coordinates is None:
        return _PROXIMITY_NEUTRAL

    distance = haversine_km(previous_stop, coordinates)
    for upper_bound, points in _PROXIMITY_BANDS:
        if distance < upper_bound:
            return points
    return _PROXIMITY_FAR


def time_of_day_score(venue: Venue, time_of_day: TimeOfDay | None) -> int:
    if time_of_day is None or time_of_day == TimeOfDay.FULL_DAY:
        return 5

    best_times = {tag.lower() for tag in venue.best_time}
    if not best_times:
        return 5

    period = time_of_day.value
    if period in best_times:
        return 10
    if best_times & _ADJACENT_PERIODS.get(period, frozenset()):
        return 6
    return 2


def event_type_score(venue: Venue, event_type: OccasionType | None) -> int:
    if event_type is None or not venue.good_for:
        return 5

    terms = OCCASION_TERMS.get(event_type, ())
    good_for = [tag.lower() for tag in venue.good_for]
    if any(term in tag for term in terms for tag in good_for):
        return 10
    return 3
