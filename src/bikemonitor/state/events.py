"""Alerts emitted by the notification state machine."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from bikemonitor.models.station import Reading


class AlertKind(StrEnum):
    LOW = "low"
    RECOVERY = "recovery"


class Alert(BaseModel):
    """A transition the state machine decided to announce."""

    model_config = ConfigDict(frozen=True)

    kind: AlertKind
    reading: Reading
    threshold: int
    sent_at: datetime
