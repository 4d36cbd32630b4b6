"""High-level async runner for one availability check."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

import aiohttp

from bikemonitor._api.locations import fetch_locations, fetch_reading, find_station
from bikemonitor._constants import COLOR_ERROR, COLOR_LOW, COLOR_RECOVERY, TEST_FOOTER, TEST_TITLE
from bikemonitor._redact import redact_for_log
from bikemonitor._transport import HttpTransport
from bikemonitor.config import MonitorConfig
from bikemonitor.exceptions import BikeMonitorError, BikeMonitorNotFoundError
from bikemonitor.messages import alert_message, diagnostic_message, error_message, format_local_time
from bikemonitor.models.station import Reading
from bikemonitor.notifier import SlackNotifier
from bikemonitor.state.events import Alert, AlertKind
from bikemonitor.state.policy import evaluate, reset_if_new_day
from bikemonitor.state.store import JsonStateStore, PersistedState
from bikemonitor.window import is_in_window, resolve_zone, to_local

_logger = logging.getLogger(__name__)

_ALERT_COLORS: dict[AlertKind, str] = {
    AlertKind.LOW: COLOR_LOW,
    AlertKind.RECOVERY: COLOR_RECOVERY,
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CheckOutcome(StrEnum):
    OUTSIDE_WINDOW = "outside_window"
    NO_ALERT = "no_alert"
    LOW_ALERT = "low_alert"
    RECOVERY_ALERT = "recovery_alert"
    ERROR = "error"


@dataclass(slots=True)
class CheckResult:
    """What a single :meth:`BikeMonitor.check` run did."""

    outcome: CheckOutcome
    state: PersistedState | None = None
    reading: Reading | None = None
    alert: Alert | None = None
    error: Exception | None = None


@dataclass(slots=True)
class DiagnosticReport:
    """Findings of :meth:`BikeMonitor.diagnose`."""

    utc_time: datetime
    local_time: datetime
    in_window: bool
    location_count: int = 0
    reading: Reading | None = None
    notification_sent: bool = False


class BikeMonitor:
    """Async runner for the bike availability monitor.

    Usage::

        async with BikeMonitor(MonitorConfig.from_env()) as monitor:
            result = await monitor.check()
    """

    def __init__(
        self,
        config: MonitorConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        store: JsonStateStore | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._store = store if store is not None else JsonStateStore(config.state_path)
        self._clock = clock
        self._transport: HttpTransport | None = None
        self._notifier: SlackNotifier | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BikeMonitor:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._http_session, timeout=self._config.request_timeout)
        self._notifier = SlackNotifier(self._transport, self._config.webhook_url)
        _logger.debug("Monitor config: %s", redact_for_log(dataclasses.asdict(self._config)))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._notifier = None

    def _require_runtime(self) -> tuple[HttpTransport, SlackNotifier]:
        if self._transport is None or self._notifier is None:
            raise BikeMonitorError("Monitor not initialized. Use 'async with BikeMonitor(...) as monitor:'")
        return self._transport, self._notifier

    # ------------------------------------------------------------------
    # Monitoring run
    # ------------------------------------------------------------------

    async def check(self, *, ignore_window: bool = False) -> CheckResult:
        """Run one check. Failures are logged and reported, never raised.

        Parameters
        ----------
        ignore_window : bool
            Check even outside the monitoring window.
        """
        now = self._clock()
        try:
            return await self._check(now, ignore_window=ignore_window)
        except Exception as exc:  # noqa: BLE001
            _logger.error("Error in bike check: %s", exc, exc_info=not isinstance(exc, BikeMonitorError))
            await self._notify_error(exc, now)
            return CheckResult(outcome=CheckOutcome.ERROR, error=exc)

    async def _check(self, now: datetime, *, ignore_window: bool) -> CheckResult:
        transport, notifier = self._require_runtime()
        config = self._config
        zone = resolve_zone(config.time_zone)

        _logger.info("=== Bike Availability Check ===")
        _logger.info("Time: %s", format_local_time(now, zone))

        state = self._store.load()
        reset = reset_if_new_day(state, now, zone)
        if reset != state:
            _logger.info("New day detected, resetting daily state")
            self._store.save(reset)
            state = reset

        in_window = is_in_window(now, zone)
        _logger.info("Local time %s, in monitoring window: %s", to_local(now, zone).isoformat(), in_window)
        if not in_window and not ignore_window:
            _logger.info("Outside monitoring window, skipping check")
            return CheckResult(outcome=CheckOutcome.OUTSIDE_WINDOW, state=state)

        _logger.info("Checking bike availability for %s...", config.station_code)
        reading = await fetch_reading(transport, config.feed_url, config.station_code, now=now)

        _logger.info("Current bikes available: %d", reading.available_bikes)
        _logger.info("Previous bike count: %s", state.last_reading)
        _logger.info("Below threshold already notified: %s", state.below_threshold_notified)
        _logger.info("Recovery already notified: %s", state.recovered_notified)

        new_state, alert = evaluate(state, reading, config.threshold)
        if alert is not None:
            await notifier.send(alert_message(alert, zone), _ALERT_COLORS[alert.kind])
            _logger.info("%s notification sent!", "LOW AVAILABILITY" if alert.kind is AlertKind.LOW else "RECOVERY")

        # Only reached when the alert (if any) was delivered; a failed send is retried next run.
        self._store.save(new_state)

        if new_state.below_threshold_notified:
            _logger.info("Threshold already hit today, monitoring continues for recovery notifications only")

        if alert is None:
            outcome = CheckOutcome.NO_ALERT
        elif alert.kind is AlertKind.LOW:
            outcome = CheckOutcome.LOW_ALERT
        else:
            outcome = CheckOutcome.RECOVERY_ALERT
        return CheckResult(outcome=outcome, state=new_state, reading=reading, alert=alert)

    async def report_error(self, error: Exception) -> None:
        """Send a best-effort error alert for a failure outside :meth:`check`."""
        await self._notify_error(error, self._clock())

    async def _notify_error(self, error: Exception, now: datetime) -> None:
        """Best-effort error alert; its own failure is only logged."""
        try:
            _, notifier = self._require_runtime()
            await notifier.send(error_message(error, now, self._config.time_zone), COLOR_ERROR)
        except Exception as exc:  # noqa: BLE001
            _logger.error("Failed to send error notification to Slack: %s", exc)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    async def diagnose(self) -> DiagnosticReport:
        """Exercise the feed and webhook regardless of the monitoring window.

        Raises
        ------
        BikeMonitorError
            When the feed cannot be read, the station is missing, or the
            configured webhook rejects the test notification.
        """
        transport, notifier = self._require_runtime()
        config = self._config
        zone = resolve_zone(config.time_zone)
        now = self._clock()

        report = DiagnosticReport(
            utc_time=now,
            local_time=to_local(now, zone),
            in_window=is_in_window(now, zone),
        )
        _logger.info("UTC time: %s", now.isoformat())
        _logger.info("%s time: %s", config.time_zone, format_local_time(now, zone))
        _logger.info("In monitoring window: %s", report.in_window)

        locations = await fetch_locations(transport, config.feed_url)
        report.location_count = len(locations)
        _logger.info("API responded with %d locations", report.location_count)

        try:
            station = find_station(locations, config.station_code)
        except BikeMonitorNotFoundError as exc:
            _logger.error("Station %s not found", config.station_code)
            for code in exc.available:
                _logger.info("  available station: %s", code)
            raise

        report.reading = Reading.from_station(station, now)
        _logger.info("Found target station: %s", station.name)
        _logger.info("Available bikes: %s/%s", station.available_bikes, station.capacity)
        _logger.info("Last updated: %s", station.last_update or "N/A")

        if notifier.configured:
            await notifier.send(
                diagnostic_message(now, zone),
                COLOR_RECOVERY,
                title=TEST_TITLE,
                footer=TEST_FOOTER,
            )
            report.notification_sent = True
        else:
            _logger.warning("SLACK_WEBHOOK_URL not set - skipping Slack test")
        return report
