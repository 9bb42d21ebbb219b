"""Score-based venue selection with top-N jitter."""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Iterable, Protocol

from dateplanner.core.config import get_settings
from dateplanner.core.scoring import ScoringContext, VenueScore, score_venue
from dateplanner.schemas.venue import Venue

_default_rng = random.Random()


class RandomSource(Protocol):
    """Anything with ``random() -> float in [0, 1)``; ``random.Random`` qualifies."""

    def random(self) -> float: ...


def rank_candidates(
    candidates: Iterable[Venue],
    context: ScoringContext,
    exclude_ids: Iterable[str] = (),
) -> list[VenueScore]:
    """Score usable candidates and sort them by total score, best first.

    The sort is stable: equal totals keep the order they came in.
    """
    excluded = set(exclude_ids)
    scored = [
        score_venue(venue, context)
        for venue in candidates
        if venue.id not in excluded and venue.coordinates is not None
    ]
    scored.sort(key=lambda item: item.total, reverse=True)
    return scored


def select_best(
    candidates: Iterable[Venue],
    context: ScoringContext,
    exclude_ids: Iterable[str] = (),
    top_n: int | None = None,
    rng: RandomSource | None = None,
) -> Venue | None:
    """Pick one venue among the top ``top_n`` after adding random jitter.

    Returns None when nothing survives the exclusion and coordinate checks.
    """
    settings = get_settings()
    ranked = rank_candidates(candidates, context, exclude_ids)
    if not ranked:
        return None

    source = rng or _default_rng
    limit = top_n or settings.SELECTION_TOP_N
    jittered = [
        (item.total + source.random() * settings.SELECTION_JITTER, item)
        for item in ranked[: min(limit, len(ranked))]
    ]
    jittered.sort(key=lambda pair: pair[0], reverse=True)
    return jittered[0][1].venue


def select_multiple(
    candidates: Iterable[Venue],
    context: ScoringContext,
    count: int,
    exclude_ids: Iterable[str] = (),
    rng: RandomSource | None = None,
) -> list[Venue]:
    """Pick up to ``count`` distinct venues, each proximity-aware of the previous pick."""
    pool = list(candidates)
    excluded = list(exclude_ids)
    current = context
    selected: list[Venue] = []

    for _ in range(count):
        venue = select_best(pool, current, excluded, rng=rng)
        if venue is None:
            break
        selected.append(venue)
        excluded.append(venue.id)
        current = replace(current, previous_stop=venue.coordinates)

    return selected
