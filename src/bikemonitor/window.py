"""Monitoring window: which weekdays and minutes of the day are checked."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from bikemonitor.exceptions import BikeMonitorConfigError

MONDAY, WEDNESDAY, THURSDAY = 0, 2, 3


@dataclasses.dataclass(frozen=True)
class MonitoringWindow:
    """Weekdays (``datetime.weekday()`` numbers) and an inclusive minute-of-day range."""

    weekdays: frozenset[int]
    start_minute: int
    end_minute: int

    def contains(self, local: datetime) -> bool:
        minute_of_day = local.hour * 60 + local.minute
        return local.weekday() in self.weekdays and self.start_minute <= minute_of_day <= self.end_minute


# Monday, Wednesday and Thursday, 08:30-09:30 inclusive.
DEFAULT_WINDOW = MonitoringWindow(
    weekdays=frozenset({MONDAY, WEDNESDAY, THURSDAY}),
    start_minute=8 * 60 + 30,
    end_minute=9 * 60 + 30,
)


def resolve_zone(name: str) -> ZoneInfo:
    """Return the :class:`ZoneInfo` for *name*.

    Raises :class:`BikeMonitorConfigError` for unknown zone names.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise BikeMonitorConfigError(f"Unknown time zone {name!r}") from exc


def to_local(now: datetime, zone: ZoneInfo | str) -> datetime:
    """Convert *now* into *zone*; naive datetimes are taken as UTC."""
    if isinstance(zone, str):
        zone = resolve_zone(zone)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(zone)


def is_in_window(now: datetime, zone: ZoneInfo | str, window: MonitoringWindow = DEFAULT_WINDOW) -> bool:
    """Whether *now*, seen from *zone*, falls inside *window*."""
    return window.contains(to_local(now, zone))
