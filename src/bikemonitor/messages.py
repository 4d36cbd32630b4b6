"""Slack message bodies (mrkdwn)."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from bikemonitor._constants import DISPLAY_TIME_FORMAT
from bikemonitor.state.events import Alert, AlertKind
from bikemonitor.window import to_local


def format_local_time(moment: datetime, zone: ZoneInfo | str) -> str:
    return to_local(moment, zone).strftime(DISPLAY_TIME_FORMAT)


def low_availability_message(alert: Alert, zone: ZoneInfo | str) -> str:
    reading = alert.reading
    return (
        f"⚠️ *Low bike availability at {reading.station_name}*\n"
        f"Only *{reading.available_bikes}* bikes available (threshold: {alert.threshold})\n"
        f"Total capacity: {reading.capacity}\n"
        f"Time: {format_local_time(alert.sent_at, zone)}"
    )


def recovery_message(alert: Alert, zone: ZoneInfo | str) -> str:
    reading = alert.reading
    return (
        f"✅ *Bikes available again at {reading.station_name}*\n"
        f"Now *{reading.available_bikes}* bikes available\n"
        f"Total capacity: {reading.capacity}\n"
        f"Time: {format_local_time(alert.sent_at, zone)}"
    )


def alert_message(alert: Alert, zone: ZoneInfo | str) -> str:
    if alert.kind is AlertKind.LOW:
        return low_availability_message(alert, zone)
    return recovery_message(alert, zone)


def error_message(error: BaseException, now: datetime, zone: ZoneInfo | str) -> str:
    return (
        "❌ *Bike Monitor Error*\n"
        "Failed to check bike availability\n"
        f"Error: {error}\n"
        f"Time: {format_local_time(now, zone)}"
    )


def diagnostic_message(now: datetime, zone: ZoneInfo | str) -> str:
    return (
        "✅ Your bike monitor is working correctly!\n"
        "This is a test message from your OV-fiets monitoring system.\n"
        f"Time: {format_local_time(now, zone)}"
    )
