"""Cascading fallback search.

A cascade is an ordered list of stages. Each stage names a category set and
how strictly the request's restrictions apply; the interpreter evaluates the
stages lazily and stops at the first one that yields a venue.
"""

from __future__ import annotations

from dataclasses import dataclass

from dateplanner.core.filters import (
    ALL_HARD_FILTERS,
    HardFilterSpec,
    apply_hard_filters,
    narrow_for_slot,
)
from dateplanner.core.logger import format_fields, get_logger
from dateplanner.core.scoring import ScoringContext
from dateplanner.core.selection import RandomSource, select_best
from dateplanner.schemas.enums import VenueCategory
from dateplanner.schemas.plan import DatePreferences
from dateplanner.schemas.venue import Venue
from dateplanner.services.venue_repository import VenueQuery, VenueRepositoryProtocol

logger = get_logger(__name__)

RELATED_CATEGORIES: dict[VenueCategory, tuple[VenueCategory, ...]] = {
    VenueCategory.FOOD: (VenueCategory.DRINK, VenueCategory.ENTERTAINMENT),
    VenueCategory.DRINK: (VenueCategory.FOOD, VenueCategory.ENTERTAINMENT),
    VenueCategory.ACTIVITY: (VenueCategory.NATURE, VenueCategory.ENTERTAINMENT, VenueCategory.CULTURE),
    VenueCategory.NATURE: (VenueCategory.ACTIVITY, VenueCategory.CULTURE),
    VenueCategory.CULTURE: (VenueCategory.ENTERTAINMENT, VenueCategory.ACTIVITY, VenueCategory.NATURE),
    VenueCategory.ENTERTAINMENT: (VenueCategory.ACTIVITY, VenueCategory.CULTURE, VenueCategory.DRINK),
    VenueCategory.SHOPPING: (VenueCategory.CULTURE, VenueCategory.FOOD),
}

DOWNTOWN_RELAXED = HardFilterSpec(downtown=False)
AGE_ONLY = HardFilterSpec(downtown=False, base_access=False, age=True)


@dataclass(frozen=True, slots=True)
class CascadeStage:
    """One search stage. ``categories=None`` means any category."""

    name: str
    categories: frozenset[VenueCategory] | None
    hard_filters: HardFilterSpec = ALL_HARD_FILTERS
    accommodations: bool = True


@dataclass(frozen=True, slots=True)
class CascadeHit:
    stage: CascadeStage
    venue: Venue


def swap_stages(category: VenueCategory) -> list[CascadeStage]:
    """Stage list for replacing a venue of ``category``."""
    stages = [CascadeStage("same_category", frozenset({category}))]
    stages += [
        CascadeStage(f"related:{related.value}", frozenset({related}))
        for related in RELATED_CATEGORIES.get(category, ())
    ]
    stages += [
        CascadeStage("any_category", None),
        CascadeStage("downtown_relaxed", None, hard_filters=DOWNTOWN_RELAXED),
        CascadeStage("age_restriction_only", None, hard_filters=AGE_ONLY, accommodations=False),
    ]
    return stages


async def run_cascade(
    stages: list[CascadeStage],
    repository: VenueRepositoryProtocol,
    preferences: DatePreferences,
    context: ScoringContext,
    exclude_ids: list[str],
    rng: RandomSource | None = None,
) -> CascadeHit | None:
    """Evaluate stages in order and return the first hit, or None when all fail."""
    fetched: dict[frozenset[VenueCategory] | None, list[Venue]] = {}

    for stage in stages:
        if stage.categories not in fetched:
            fetched[stage.categories] = await repository.query_venues(
                VenueQuery(categories=stage.categories, require_coordinates=True),
            )

        pool = apply_hard_filters(fetched[stage.categories], preferences, stage.hard_filters)
        if stage.accommodations:
            pool = narrow_for_slot(pool, preferences, period=preferences.time_of_day, exclude_ids=exclude_ids).venues

        venue = select_best(pool, context, exclude_ids, rng=rng)
        if venue is not None:
            logger.info("Cascade hit: %s", format_fields(stage=stage.name, venue_id=venue.id))
            return CascadeHit(stage=stage, venue=venue)
        logger.debug("Cascade stage empty: %s", format_fields(stage=stage.name, pool=len(pool)))

    logger.info("Cascade exhausted: %s", format_fields(stages=len(stages)))
    return None
