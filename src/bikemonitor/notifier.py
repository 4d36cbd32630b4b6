"""Slack webhook notifier."""

from __future__ import annotations

import logging

from bikemonitor._api.webhook import build_attachment_payload
from bikemonitor._constants import ALERT_FOOTER, ALERT_TITLE, COLOR_DEFAULT
from bikemonitor._transport import Transport
from bikemonitor.exceptions import BikeMonitorConfigError

_logger = logging.getLogger(__name__)


class SlackNotifier:
    """Post formatted alerts to a Slack incoming webhook.

    The caller decides what to do with failures; nothing is retried here.
    """

    def __init__(self, transport: Transport, webhook_url: str | None) -> None:
        self._transport = transport
        self._webhook_url = webhook_url

    @property
    def configured(self) -> bool:
        return bool(self._webhook_url)

    async def send(
        self,
        message: str,
        color: str = COLOR_DEFAULT,
        *,
        title: str = ALERT_TITLE,
        footer: str = ALERT_FOOTER,
    ) -> None:
        """Send *message* as a single attachment.

        Raises
        ------
        BikeMonitorConfigError
            No webhook URL configured.
        BikeMonitorTransportError
            Network failure or non-200 response.
        """
        if not self._webhook_url:
            raise BikeMonitorConfigError("SLACK_WEBHOOK_URL environment variable not set")
        payload = build_attachment_payload(message, color=color, title=title, footer=footer)
        await self._transport.post_json(self._webhook_url, payload)
        _logger.info("Slack notification sent successfully")
