"""State layer.

Persisted notification state, its JSON store, and the pure policy that
decides when a reading turns into an alert.
"""

from bikemonitor.state.events import Alert, AlertKind
from bikemonitor.state.policy import evaluate, reset_if_new_day
from bikemonitor.state.store import JsonStateStore, PersistedState

__all__ = [
    "Alert",
    "AlertKind",
    "JsonStateStore",
    "PersistedState",
    "evaluate",
    "reset_if_new_day",
]
