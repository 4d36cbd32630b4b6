"""HTTP transport for the availability feed and the Slack webhook."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from bikemonitor._constants import USER_AGENT
from bikemonitor._redact import redact_url
from bikemonitor.exceptions import BikeMonitorParseError, BikeMonitorTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the feed and webhook modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, url: str) -> Any:
        ...

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> str:
        ...


class HttpTransport:
    """aiohttp-backed transport. One request per call, no retries."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float = 30.0) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get_json(self, url: str) -> Any:
        """GET *url* and decode the body as JSON.

        Raises
        ------
        BikeMonitorTransportError
            Network failure, timeout or non-200 status.
        BikeMonitorParseError
            The body is not UTF-8 encoded JSON.
        """
        _logger.debug("GET %s", url)
        try:
            async with self._http.get(url, headers={"user-agent": USER_AGENT}, timeout=self._timeout) as resp:
                body = await resp.read()
                if resp.status != 200:
                    snippet = body[:200].decode("utf-8", errors="replace")
                    raise BikeMonitorTransportError(
                        f"HTTP {resp.status} from {url}: {snippet}",
                        status_code=resp.status,
                        url=url,
                    )
        except BikeMonitorTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise BikeMonitorTransportError(f"API request failed: {str(exc) or type(exc).__name__}", url=url) from exc

        try:
            return json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise BikeMonitorParseError(f"Failed to parse API response: {exc}") from exc

    async def post_json(self, url: str, payload: Mapping[str, Any]) -> str:
        """POST *payload* as JSON and return the response body.

        Raises
        ------
        BikeMonitorTransportError
            Network failure, timeout or non-200 status.
        """
        safe_url = redact_url(url) or ""
        _logger.debug("POST %s", safe_url)
        headers = {
            "content-type": "application/json",
            "user-agent": USER_AGENT,
        }
        try:
            async with self._http.post(url, data=json.dumps(payload), headers=headers, timeout=self._timeout) as resp:
                text = (await resp.read()).decode("utf-8", errors="replace")
                if resp.status != 200:
                    raise BikeMonitorTransportError(
                        f"Slack API returned status {resp.status}: {text[:200]}",
                        status_code=resp.status,
                        url=safe_url,
                    )
        except BikeMonitorTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise BikeMonitorTransportError(
                f"Failed to send Slack notification: {str(exc) or type(exc).__name__}",
                url=safe_url,
            ) from exc
        return text
