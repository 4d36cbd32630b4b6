"""Deterministic notification policy.

Pure functions only: given the persisted state and a fresh reading they
return the next state and, at most, one alert to announce. Loading, saving
and sending belong to :mod:`bikemonitor.monitor`.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from bikemonitor.models.station import Reading
from bikemonitor.state.events import Alert, AlertKind
from bikemonitor.state.store import PersistedState


def _local_date(moment: datetime, zone: ZoneInfo) -> date:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(zone).date()


def reset_if_new_day(state: PersistedState, now: datetime, zone: ZoneInfo) -> PersistedState:
    """Clear the daily flags when the last alert was sent on an earlier day.

    Both dates are taken in *zone*. ``last_notification_sent`` itself is kept
    until the next alert overwrites it. Returns *state* unchanged when no
    alert was ever sent or the last one was sent today.
    """
    if state.last_notification_sent is None:
        return state
    if _local_date(state.last_notification_sent, zone) == _local_date(now, zone):
        return state
    return state.model_copy(
        update={
            "below_threshold_notified": False,
            "recovered_notified": False,
            "last_reading": None,
        }
    )


def evaluate(state: PersistedState, reading: Reading, threshold: int) -> tuple[PersistedState, Alert | None]:
    """Decide which alert, if any, *reading* triggers.

    Policy:
    - Dropping below *threshold* fires one LOW alert per cycle.
    - Getting back to *threshold* fires one RECOVERY alert, but only after a
      LOW alert and only when the previously stored reading was below the
      threshold, so the first reading of a day never counts as a recovery.
    - ``last_reading`` always becomes the current count.
    """
    count = reading.available_bikes
    now = reading.fetched_at
    update: dict[str, object] = {"last_reading": count}
    alert: Alert | None = None

    if count < threshold and not state.below_threshold_notified:
        alert = Alert(kind=AlertKind.LOW, reading=reading, threshold=threshold, sent_at=now)
        update.update(
            below_threshold_notified=True,
            recovered_notified=False,
            last_notification_sent=now,
        )
    elif (
        count >= threshold
        and state.below_threshold_notified
        and not state.recovered_notified
        and state.last_reading is not None
        and state.last_reading < threshold
    ):
        alert = Alert(kind=AlertKind.RECOVERY, reading=reading, threshold=threshold, sent_at=now)
        update.update(recovered_notified=True, last_notification_sent=now)

    return state.model_copy(update=update), alert
