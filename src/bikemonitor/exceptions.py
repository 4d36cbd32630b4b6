"""Custom exception hierarchy for bikemonitor."""

from __future__ import annotations


class BikeMonitorError(Exception):
    """Base exception for all bikemonitor errors."""


class BikeMonitorConfigError(BikeMonitorError):
    """Invalid or missing configuration (e.g. no webhook URL, unknown zone)."""


class BikeMonitorTransportError(BikeMonitorError):
    """HTTP-level failure (network error, timeout, non-200 status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class BikeMonitorParseError(BikeMonitorError):
    """The availability feed returned a payload we cannot interpret."""


class BikeMonitorNotFoundError(BikeMonitorError):
    """The configured station code is absent from the availability feed."""

    def __init__(
        self,
        message: str,
        *,
        station_code: str = "",
        available: tuple[str, ...] = (),
    ) -> None:
        self.station_code = station_code
        self.available = available
        super().__init__(message)


class BikeMonitorStateError(BikeMonitorError):
    """The persisted state file could not be written."""
