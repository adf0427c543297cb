from __future__ import annotations

from collections.abc import Iterator

import pytest

from esteria_sms.config import get_settings

GATEWAY_ENV = (
    "ESTERIA_API_BASE_URL",
    "ESTERIA_API_KEY",
    "ESTERIA_SENDER",
    "ESTERIA_TIMEOUT",
    "ESTERIA_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test from an empty gateway environment."""
    for name in GATEWAY_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gateway_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ESTERIA_API_BASE_URL", "https://gw.example.test/api")
    monkeypatch.setenv("ESTERIA_API_KEY", "env-key")
    monkeypatch.setenv("ESTERIA_SENDER", "ENVSENDER")
    get_settings.cache_clear()
