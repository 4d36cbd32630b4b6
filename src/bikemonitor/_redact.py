"""Helpers for safe logging.

Slack incoming-webhook URLs embed their secret in the path, so anyone who
reads a log line containing one can post to the channel. This module masks
those values before they reach a log record or a ``repr``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import urlsplit

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "webhook",
        "webhookurl",
        "webhook_url",
        "slackwebhookurl",
        "slack_webhook_url",
        "token",
        "authorization",
    }
)


def redact_url(url: str | None) -> str | None:
    """Keep scheme and host of *url*, hide its path and query."""
    if not url:
        return url
    parts = urlsplit(url)
    if not parts.netloc:
        return "<redacted>"
    return f"{parts.scheme}://{parts.netloc}/<redacted>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = redact_url(v) if isinstance(v, str) else "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
