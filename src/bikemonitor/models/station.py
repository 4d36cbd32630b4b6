"""Station availability models."""

from __future__ import annotations

from pydantic import Field, field_validator

from bikemonitor.models._base import BikeBaseModel, UtcDatetime


class Station(BikeBaseModel):
    """One entry of the OV-fiets ``locaties.json`` feed.

    Parameters
    ----------
    station_code : str
        Station identifier (``stationCode``), e.g. ``"ASD002"``.
    name : str
        Human readable station name.
    available_bikes : int
        Bikes currently available for rent.
    capacity : int or None
        Total number of bikes/docks at the location.
    last_update : str or None
        Feed-provided update marker, passed through verbatim.
    """

    station_code: str
    name: str
    available_bikes: int = Field(ge=0)
    capacity: int | None = None
    last_update: str | None = None

    @field_validator("last_update", mode="before")
    @classmethod
    def _stringify_last_update(cls, value: object) -> object:
        # The feed has shipped both epoch numbers and strings here.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Reading(BikeBaseModel):
    """A single observation of a station, taken at ``fetched_at``."""

    station_code: str
    station_name: str
    available_bikes: int
    capacity: int | None = None
    fetched_at: UtcDatetime
    last_update: str | None = None

    @classmethod
    def from_station(cls, station: Station, fetched_at: UtcDatetime) -> Reading:
        return cls(
            station_code=station.station_code,
            station_name=station.name,
            available_bikes=station.available_bikes,
            capacity=station.capacity,
            fetched_at=fetched_at,
            last_update=station.last_update,
        )
