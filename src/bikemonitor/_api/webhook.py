"""Slack incoming-webhook payloads."""

from __future__ import annotations

import time
from typing import Any

from bikemonitor._constants import ALERT_FOOTER, ALERT_TITLE, COLOR_DEFAULT


def build_attachment_payload(
    message: str,
    *,
    color: str = COLOR_DEFAULT,
    title: str = ALERT_TITLE,
    footer: str = ALERT_FOOTER,
    ts: int | None = None,
) -> dict[str, Any]:
    """Wrap *message* in a single legacy Slack attachment."""
    return {
        "attachments": [
            {
                "color": color,
                "title": title,
                "text": message,
                "footer": footer,
                "ts": int(time.time()) if ts is None else ts,
            }
        ]
    }
