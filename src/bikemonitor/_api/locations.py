"""OV-fiets location feed (``locaties.json``)."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from bikemonitor._transport import Transport
from bikemonitor.exceptions import BikeMonitorNotFoundError, BikeMonitorParseError
from bikemonitor.models.station import Reading, Station

_logger = logging.getLogger(__name__)

_SAMPLE_SIZE = 5


async def fetch_locations(transport: Transport, feed_url: str) -> list[dict[str, Any]]:
    """Fetch the raw feed and check it is a JSON array of objects."""
    payload = await transport.get_json(feed_url)
    if not isinstance(payload, list):
        raise BikeMonitorParseError(
            f"Failed to parse API response: expected a JSON array, got {type(payload).__name__}"
        )
    return [entry for entry in payload if isinstance(entry, dict)]


def find_station(locations: list[dict[str, Any]], station_code: str) -> Station:
    """Return the first location whose ``stationCode`` equals *station_code*."""
    for entry in locations:
        if entry.get("stationCode") == station_code:
            try:
                return Station.model_validate(entry)
            except ValidationError as exc:
                raise BikeMonitorParseError(f"Failed to parse station {station_code}: {exc}") from exc

    sample = tuple(str(entry.get("stationCode")) for entry in locations[:_SAMPLE_SIZE])
    raise BikeMonitorNotFoundError(
        f"Station {station_code} not found in API response",
        station_code=station_code,
        available=sample,
    )


async def fetch_reading(
    transport: Transport,
    feed_url: str,
    station_code: str,
    *,
    now: datetime | None = None,
) -> Reading:
    """Fetch the feed and return the current reading for *station_code*."""
    locations = await fetch_locations(transport, feed_url)
    station = find_station(locations, station_code)
    _logger.info("Found station: %s (%s)", station.name, station.station_code)
    _logger.info("Available bikes: %s/%s", station.available_bikes, station.capacity)
    return Reading.from_station(station, now or datetime.now(UTC))
