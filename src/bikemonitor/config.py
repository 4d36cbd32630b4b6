"""Monitor configuration for bikemonitor."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from bikemonitor._constants import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_STATE_FILE,
    DEFAULT_STATION_CODE,
    DEFAULT_THRESHOLD,
    DEFAULT_TIME_ZONE,
    FEED_URL,
)
from bikemonitor._redact import redact_url
from bikemonitor.exceptions import BikeMonitorConfigError


def _env_number(env: Mapping[str, str], key: str, cast: type) -> Any:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise BikeMonitorConfigError(f"{key} must be a {cast.__name__}, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class MonitorConfig:
    """Deployment configuration.

    Parameters
    ----------
    station_code : str
        OV-fiets station code to watch (exact match against the feed).
    threshold : int
        Minimum acceptable number of available bikes.
    webhook_url : str or None
        Slack incoming-webhook URL. Alerts cannot be delivered without it.
    state_path : str
        Path of the JSON file holding the persisted notification state.
    feed_url : str
        URL of the availability feed (a JSON array of stations).
    time_zone : str
        IANA zone used for the monitoring window and for day rollover.
    request_timeout : float
        Total timeout in seconds for each HTTP request.
    """

    station_code: str = DEFAULT_STATION_CODE
    threshold: int = DEFAULT_THRESHOLD
    webhook_url: str | None = None
    state_path: str = DEFAULT_STATE_FILE
    feed_url: str = FEED_URL
    time_zone: str = DEFAULT_TIME_ZONE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __repr__(self) -> str:
        return (
            f"MonitorConfig(station_code={self.station_code!r}, threshold={self.threshold!r}, "
            f"webhook_url={redact_url(self.webhook_url)!r}, state_path={self.state_path!r}, "
            f"feed_url={self.feed_url!r}, time_zone={self.time_zone!r}, "
            f"request_timeout={self.request_timeout!r})"
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> MonitorConfig:
        """Create configuration from environment variables.

        Reads ``SLACK_WEBHOOK_URL`` and the optional ``BIKE_MONITOR_*``
        variables. Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        MonitorConfig
            Populated configuration.

        Raises
        ------
        BikeMonitorConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "BIKE_MONITOR_STATION_CODE": "station_code",
            "SLACK_WEBHOOK_URL": "webhook_url",
            "BIKE_MONITOR_STATE_FILE": "state_path",
            "BIKE_MONITOR_FEED_URL": "feed_url",
            "BIKE_MONITOR_TIME_ZONE": "time_zone",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None and val.strip():
                config_kwargs[field_name] = val.strip()

        # numeric fields are parsed separately
        if "threshold" not in overrides:
            threshold = _env_number(env, "BIKE_MONITOR_THRESHOLD", int)
            if threshold is not None:
                config_kwargs["threshold"] = threshold

        if "request_timeout" not in overrides:
            timeout = _env_number(env, "BIKE_MONITOR_REQUEST_TIMEOUT", float)
            if timeout is not None:
                config_kwargs["request_timeout"] = timeout

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
