"""Plan-day time windows used for event lookups."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from dateplanner.schemas.enums import TimeOfDay

# (start hour, end hour); the end hour is inclusive up to its last second.
_PERIOD_HOURS: dict[TimeOfDay, tuple[int, int]] = {
    TimeOfDay.MORNING: (6, 11),
    TimeOfDay.AFTERNOON: (12, 16),
    TimeOfDay.EVENING: (17, 23),
    TimeOfDay.NIGHT: (21, 23),
    TimeOfDay.FULL_DAY: (0, 23),
}


def period_window(day: date, time_of_day: TimeOfDay | None) -> tuple[datetime, datetime]:
    """Start/end of a time-of-day period on ``day``. ``None`` means the whole day."""
    start_hour, end_hour = _PERIOD_HOURS.get(time_of_day, _PERIOD_HOURS[TimeOfDay.FULL_DAY])
    start = datetime.combine(day, time(start_hour))
    end = datetime.combine(day, time(end_hour, 59, 59))
    return start, end


def day_window(day: date) -> tuple[datetime, datetime]:
    return period_window(day, TimeOfDay.FULL_DAY)


def week_window(day: date, days: int = 7) -> tuple[datetime, datetime]:
    """From the start of ``day`` through the end of the ``days``-th following day."""
    start, _ = day_window(day)
    _, end = day_window(day + timedelta(days=days))
    return start, end
