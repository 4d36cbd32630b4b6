"""bikemonitor - OV-fiets availability monitor with Slack alerts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bikemonitor")
except PackageNotFoundError:
    __version__ = "0+local"
from bikemonitor.config import MonitorConfig
from bikemonitor.exceptions import (
    BikeMonitorConfigError,
    BikeMonitorError,
    BikeMonitorNotFoundError,
    BikeMonitorParseError,
    BikeMonitorStateError,
    BikeMonitorTransportError,
)
from bikemonitor.models import Reading, Station
from bikemonitor.monitor import BikeMonitor, CheckOutcome, CheckResult, DiagnosticReport
from bikemonitor.notifier import SlackNotifier
from bikemonitor.state import (
    Alert,
    AlertKind,
    JsonStateStore,
    PersistedState,
    evaluate,
    reset_if_new_day,
)
from bikemonitor.window import DEFAULT_WINDOW, MonitoringWindow, is_in_window

__all__ = [
    "__version__",
    "Alert",
    "AlertKind",
    "BikeMonitor",
    "BikeMonitorConfigError",
    "BikeMonitorError",
    "BikeMonitorNotFoundError",
    "BikeMonitorParseError",
    "BikeMonitorStateError",
    "BikeMonitorTransportError",
    "CheckOutcome",
    "CheckResult",
    "DEFAULT_WINDOW",
    "DiagnosticReport",
    "JsonStateStore",
    "MonitorConfig",
    "MonitoringWindow",
    "PersistedState",
    "Reading",
    "SlackNotifier",
    "Station",
    "evaluate",
    "is_in_window",
    "reset_if_new_day",
]
