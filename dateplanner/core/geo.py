"""Distance and route-ordering utilities.

All distances in the planner are kilometers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, TypeVar

from dateplanner.core.config import get_settings

_EARTH_RADIUS_KM = 6371.0
_DRIVING_MINUTES_PER_KM = 2.0

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Coordinates:
    """A latitude/longitude pair."""

    latitude: float
    longitude: float

    @classmethod
    def from_optional(cls, latitude: float | None, longitude: float | None) -> Coordinates | None:
        """Build coordinates, or return None when either component is missing."""
        if latitude is None or longitude is None:
            return None
        return cls(latitude=float(latitude), longitude=float(longitude))


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance between two points in kilometers."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude)) * math.cos(math.radians(b.latitude)) * math.sin(d_lon / 2) ** 2
    )
    return _EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def estimate_walk_minutes(distance_km: float, speed_kmh: float | None = None) -> int:
    """Walking time in whole minutes at the configured walking speed."""
    speed = speed_kmh or get_settings().WALKING_SPEED_KMH
    return max(1, round(distance_km / speed * 60))


def transition_tip(origin: Coordinates, destination: Coordinates) -> str:
    """Describe the hop between two stops in plain words."""
    distance = haversine_km(origin, destination)
    walk_minutes = estimate_walk_minutes(distance)

    if distance < 0.4:
        return "Steps away, just a couple of minutes on foot"
    if distance < 0.8:
        return f"About a {walk_minutes} minute stroll"
    if distance < 1.6:
        return f"A {walk_minutes} minute walk, or a quick drive"
    drive_minutes = max(3, round(distance * _DRIVING_MINUTES_PER_KM))
    return f"Consider driving: about {distance:.1f} km, roughly {drive_minutes} minutes by car"


def nearest_neighbor_order(items: Sequence[T], key: Callable[[T], Coordinates | None]) -> list[T]:
    """Greedy route ordering.

    The first item stays first; each following slot takes the unplaced item
    closest to the last placed one. Items without coordinates keep their
    relative order at the end. Not globally optimal.
    """
    if len(items) <= 2:
        return list(items)

    located = [item for item in items[1:] if key(item) is not None]
    unlocated = [item for item in items[1:] if key(item) is None]

    ordered = [items[0]]
    current = key(items[0])
    if current is None:
        if not located:
            return ordered + unlocated
        current = key(located[0])
        ordered.append(located.pop(0))

    while located:
        nearest_index = min(range(len(located)), key=lambda index: haversine_km(current, key(located[index])))
        nearest = located.pop(nearest_index)
        ordered.append(nearest)
        current = key(nearest)

    return ordered + unlocated


def centroid(points: Iterable[Coordinates]) -> Coordinates:
    """Arithmetic mean of the points, or the configured default center when empty."""
    items = list(points)
    if not items:
        settings = get_settings()
        return Coordinates(settings.DEFAULT_CENTER_LATITUDE, settings.DEFAULT_CENTER_LONGITUDE)
    return Coordinates(
        latitude=sum(point.latitude for point in items) / len(items),
        longitude=sum(point.longitude for point in items) / len(items),
    )


def is_near_downtown(point: Coordinates, radius_km: float = 3.2) -> bool:
    """Whether a point lies within ``radius_km`` of the configured downtown center."""
    settings = get_settings()
    center = Coordinates(settings.DEFAULT_CENTER_LATITUDE, settings.DEFAULT_CENTER_LONGITUDE)
    return haversine_km(point, center) <= radius_km
