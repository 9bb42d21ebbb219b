"""Candidate filters.

Two kinds of filters narrow a venue pool:

* hard filters (downtown-only, base access, 21+) always apply when enabled.
* accommodation filters run as a graceful-degradation chain: each step keeps
  its result only if something survives, so a non-empty pool is never
  narrowed down to nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from dateplanner.core.geo import is_near_downtown
from dateplanner.schemas.enums import SlotType, TimeOfDay, VenueCategory
from dateplanner.schemas.plan import DatePreferences
from dateplanner.schemas.venue import Venue

VenuePredicate = Callable[[Venue], bool]

ADULT_SUBCATEGORIES = frozenset(
    {
        "bar",
        "brewery",
        "nightclub",
        "lounge",
        "pub",
        "winery",
        "distillery",
        "taproom",
        "cocktail_bar",
        "wine_bar",
        "hookah",
        "cigar",
    }
)
DAYTIME_TAGS = frozenset({"morning", "afternoon", "brunch", "weekend_brunch", "daytime", "lunch"})
_LATE_PERIODS = frozenset({TimeOfDay.EVENING, TimeOfDay.NIGHT})


@dataclass(frozen=True, slots=True)
class FilterStep:
    """One named step of a graceful-degradation chain."""

    name: str
    predicate: VenuePredicate


@dataclass(slots=True)
class NarrowResult:
    venues: list[Venue]
    applied: list[str]
    relaxed: list[str]


def try_narrow(venues: Sequence[Venue], steps: Iterable[FilterStep]) -> NarrowResult:
    """Apply each step in order, keeping its result only when it is non-empty."""
    current = list(venues)
    applied: list[str] = []
    relaxed: list[str] = []
    for step in steps:
        narrowed = [venue for venue in current if step.predicate(venue)]
        if narrowed:
            current = narrowed
            applied.append(step.name)
        else:
            relaxed.append(step.name)
    return NarrowResult(venues=current, applied=applied, relaxed=relaxed)


def is_adult_venue(venue: Venue) -> bool:
    subcategory = (venue.subcategory or "").strip().lower().replace(" ", "_")
    return subcategory in ADULT_SUBCATEGORIES


def is_downtown(venue: Venue) -> bool:
    if venue.is_downtown is not None:
        return venue.is_downtown
    coordinates = venue.coordinates
    return coordinates is not None and is_near_downtown(coordinates)


def is_daytime_only(venue: Venue) -> bool:
    best_times = {tag.lower() for tag in venue.best_time}
    return bool(best_times) and best_times <= DAYTIME_TAGS


def is_stair_free(venue: Venue) -> bool:
    return not venue.has_stairs or venue.has_elevator


def has_morning_tag(venue: Venue) -> bool:
    return any(tag.lower() in ("morning", "brunch", "breakfast") for tag in venue.best_time)


@dataclass(frozen=True, slots=True)
class HardFilterSpec:
    """Which strict preference restrictions are enforced."""

    downtown: bool = True
    base_access: bool = True
    age: bool = True


ALL_HARD_FILTERS = HardFilterSpec()
NO_HARD_FILTERS = HardFilterSpec(downtown=False, base_access=False, age=False)


def apply_hard_filters(
    venues: Iterable[Venue],
    preferences: DatePreferences,
    spec: HardFilterSpec = ALL_HARD_FILTERS,
) -> list[Venue]:
    """Drop venues the party cannot or does not want to visit."""
    result = []
    for venue in venues:
        if venue.event_only:
            continue
        if spec.downtown and preferences.downtown_only and not is_downtown(venue):
            continue
        if spec.base_access and venue.requires_base_access and not preferences.has_military_access:
            continue
        if spec.age and not preferences.all_over_21 and is_adult_venue(venue):
            continue
        result.append(venue)
    return result


def accommodation_steps(
    preferences: DatePreferences,
    slot_type: SlotType | None = None,
    period: TimeOfDay | None = None,
) -> list[FilterStep]:
    """Build the graceful chain for a request, in fixed order."""
    steps: list[FilterStep] = []
    if preferences.with_dog:
        steps.append(FilterStep("pet_friendly", lambda venue: venue.pet_friendly))
    if preferences.with_young_children:
        steps.append(
            FilterStep("kid_friendly", lambda venue: venue.kid_friendly and not is_adult_venue(venue)),
        )
    if preferences.wheelchair_accessible:
        steps.append(FilterStep("wheelchair_accessible", lambda venue: venue.wheelchair_accessible))
    if preferences.avoid_stairs:
        steps.append(FilterStep("stair_free", is_stair_free))
    if preferences.needs_wifi:
        steps.append(FilterStep("wifi", lambda venue: venue.has_wifi))
    if slot_type == SlotType.DRINKS and period in _LATE_PERIODS:
        steps.append(FilterStep("not_daytime_only", lambda venue: not is_daytime_only(venue)))
    return steps


def morning_first(venues: Sequence[Venue]) -> list[Venue]:
    """Stable reorder putting morning-tagged venues first. Never drops anything.

    Scoring runs afterwards and re-sorts by total, so this only decides the
    order of venues with equal scores.
    """
    return sorted(venues, key=lambda venue: 0 if has_morning_tag(venue) else 1)


def narrow_for_slot(
    venues: Sequence[Venue],
    preferences: DatePreferences,
    categories: Iterable[VenueCategory] | None = None,
    slot_type: SlotType | None = None,
    period: TimeOfDay | None = None,
    exclude_ids: Iterable[str] = (),
) -> NarrowResult:
    """Drop excluded venues and restrict to the slot's categories, then run the graceful chain.

    The chain only ever sees venues that can still be picked.
    """
    excluded = set(exclude_ids)
    pool = [venue for venue in venues if venue.id not in excluded]
    if categories is not None:
        allowed = set(categories)
        pool = [venue for venue in pool if venue.category in allowed]

    result = try_narrow(pool, accommodation_steps(preferences, slot_type, period))
    if period == TimeOfDay.MORNING:
        result.venues = morning_first(result.venues)
    return result
