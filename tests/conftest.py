from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from bikemonitor.config import MonitorConfig
from tests.helpers import WEBHOOK_URL, FakeBackend


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "notification_state.json"


@pytest.fixture
def config(state_path: Path) -> MonitorConfig:
    return MonitorConfig(
        station_code="ASD002",
        threshold=20,
        webhook_url=WEBHOOK_URL,
        state_path=str(state_path),
    )


@pytest.fixture
def backend(monkeypatch: pytest.MonkeyPatch) -> FakeBackend:
    fake_backend = FakeBackend()

    async def fake_get_json(_self: Any, url: str) -> Any:
        return await fake_backend.get_json(url)

    async def fake_post_json(_self: Any, url: str, payload: Mapping[str, Any]) -> str:
        return await fake_backend.post_json(url, payload)

    monkeypatch.setattr("bikemonitor._transport.HttpTransport.get_json", fake_get_json)
    monkeypatch.setattr("bikemonitor._transport.HttpTransport.post_json", fake_post_json)
    return fake_backend
