"""Venue/event data-access protocol."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from dateplanner.schemas.enums import VenueCategory
from dateplanner.schemas.venue import AnchorEvent, Venue


@dataclass(frozen=True, slots=True)
class VenueQuery:
    """Venue filter understood by every repository.

    ``categories=None`` means any category. Venues without a price level always
    pass the ``max_price_tier`` check.
    """

    categories: frozenset[VenueCategory] | None = None
    max_price_tier: int | None = None
    require_coordinates: bool = True


@dataclass(frozen=True, slots=True)
class EventQuery:
    """Events starting inside ``[start, end]``, optionally at one venue."""

    start: datetime
    end: datetime
    venue_id: str | None = None
    limit: int = 20


class VenueRepositoryProtocol(ABC):
    """Interface the planner uses to read venues and events."""

    @abstractmethod
    async def query_venues(self, query: VenueQuery) -> list[Venue]:
        """Return venues matching the query.

        Args:
            query: Category, price and coordinate filter.

        Returns:
            Matching venue snapshots.
        """
        raise NotImplementedError

    @abstractmethod
    async def query_events(self, query: EventQuery) -> list[AnchorEvent]:
        """Return events in the time range, ordered by start time.

        Args:
            query: Time range and optional venue filter.

        Returns:
            Matching events.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_event(self, event_id: str) -> AnchorEvent | None:
        """Look up a single event by id."""
        raise NotImplementedError
