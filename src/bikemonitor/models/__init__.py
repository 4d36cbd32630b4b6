"""Data models for the availability feed."""

from bikemonitor.models._base import BikeBaseModel, UtcDatetime, ensure_utc
from bikemonitor.models.station import Reading, Station

__all__ = [
    "BikeBaseModel",
    "Reading",
    "Station",
    "UtcDatetime",
    "ensure_utc",
]
