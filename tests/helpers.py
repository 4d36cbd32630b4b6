"""Shared fakes and time helpers for the test suite."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from bikemonitor.exceptions import BikeMonitorTransportError

AMSTERDAM = ZoneInfo("Europe/Amsterdam")
WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/SECRET"


def local(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=AMSTERDAM)


def station_entry(code: str = "ASD002", bikes: Any = 42, capacity: Any = 120, **extra: Any) -> dict[str, Any]:
    entry = {
        "stationCode": code,
        "name": "Amsterdam Centraal Oost" if code == "ASD002" else f"Station {code}",
        "availableBikes": bikes,
        "capacity": capacity,
    }
    entry.update(extra)
    return entry


class FixedClock:
    """Callable clock whose time tests can move."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@dataclass
class FakeBackend:
    stations: list[dict[str, Any]] = field(
        default_factory=lambda: [
            station_entry("UT001", bikes=80),
            station_entry("ASD002", bikes=42),
        ]
    )
    feed_error: Exception | None = None
    webhook_status: int = 200
    feed_calls: int = 0
    posts: list[dict[str, Any]] = field(default_factory=list)
    post_urls: list[str] = field(default_factory=list)

    def set_bikes(self, bikes: int, code: str = "ASD002") -> None:
        for entry in self.stations:
            if entry["stationCode"] == code:
                entry["availableBikes"] = bikes

    async def get_json(self, _url: str) -> Any:
        self.feed_calls += 1
        if self.feed_error is not None:
            raise self.feed_error
        return copy.deepcopy(self.stations)

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> str:
        self.post_urls.append(url)
        self.posts.append(payload["attachments"][0])
        if self.webhook_status != 200:
            raise BikeMonitorTransportError(
                f"Slack API returned status {self.webhook_status}: invalid_payload",
                status_code=self.webhook_status,
            )
        return "ok"
