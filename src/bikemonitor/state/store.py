"""JSON file persistence for the notification state.

The file holds a single camelCase object and is overwritten in place on
every save. A missing file means "first run"; an unreadable one is treated
the same way so a corrupted write never wedges the monitor.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import ClassVar

from pydantic import ValidationError

from bikemonitor.exceptions import BikeMonitorStateError
from bikemonitor.models._base import BikeBaseModel, UtcDatetime

_logger = logging.getLogger(__name__)


class PersistedState(BikeBaseModel):
    """Minimal record that survives between runs.

    Parameters
    ----------
    last_notification_sent : datetime or None
        When any alert last fired (aware, UTC).
    below_threshold_notified : bool
        A low alert has fired today.
    recovered_notified : bool
        A recovery alert has fired since the last low alert.
    last_reading : int or None
        Most recent successfully fetched bike count.
    """

    # Key names written by the first version of the monitor.
    _KEY_ALIASES: ClassVar[dict[str, str]] = {
        "bikesWentBelowThreshold": "belowThresholdNotified",
        "bikesRecovered": "recoveredNotified",
        "lastBikeCount": "lastReading",
    }

    last_notification_sent: UtcDatetime | None = None
    below_threshold_notified: bool = False
    recovered_notified: bool = False
    last_reading: int | None = None


class JsonStateStore:
    """Load and save a :class:`PersistedState` as a JSON file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def load(self) -> PersistedState:
        """Read the state file, falling back to defaults when absent or unreadable."""
        if not self.path.exists():
            _logger.info("No previous state at %s, starting fresh", self.path)
            return PersistedState()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            state = PersistedState.model_validate(data)
        except (OSError, ValueError, ValidationError):
            _logger.warning("Could not read state from %s, starting fresh", self.path, exc_info=True)
            return PersistedState()
        _logger.info("Loaded state: %s", state.model_dump(mode="json", by_alias=True))
        return state

    def save(self, state: PersistedState) -> None:
        """Atomically overwrite the state file.

        Raises
        ------
        BikeMonitorStateError
            If the file cannot be written.
        """
        payload = state.model_dump(mode="json", by_alias=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            if self.path.parent != Path():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as exc:
            raise BikeMonitorStateError(f"Failed to save state to {self.path}: {exc}") from exc
        _logger.info("State saved: %s", payload)
