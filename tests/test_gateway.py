from __future__ import annotations

import httpx
import pytest
import respx
from pydantic import ValidationError

from esteria_sms.config import get_settings
from esteria_sms.errors import SendFailed
from esteria_sms.gateway import get_sms_client, send_sms
from esteria_sms.sms import SmsFlag

SEND_URL = "https://gw.example.test/api/send"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that settings are read from ESTERIA_* variables."""
    monkeypatch.setenv("ESTERIA_API_BASE_URL", "https://gw.example.test")
    monkeypatch.setenv("ESTERIA_TIMEOUT", "5.5")
    monkeypatch.setenv("ESTERIA_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.api_base_url == "https://gw.example.test"
    assert settings.timeout == 5.5
    assert settings.log_level == "debug"
    assert settings.api_key is None


def test_settings_defaults() -> None:
    """Test the settings used when nothing is configured."""
    settings = get_settings()

    assert settings.api_base_url is None
    assert settings.timeout == 30.0
    assert settings.log_level == "INFO"


def test_get_sms_client_requires_base_url() -> None:
    """Test that a missing base URL is a configuration error."""
    with pytest.raises(RuntimeError, match="ESTERIA_API_BASE_URL"):
        get_sms_client()


@pytest.mark.asyncio
async def test_get_sms_client_uses_settings(gateway_env: None) -> None:
    """Test that the client is built from the configured base URL."""
    client = get_sms_client()
    try:
        assert client.send_url == SEND_URL
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_send_sms_uses_configured_credentials(
    gateway_env: None, respx_mock: respx.MockRouter
) -> None:
    """Test that send_sms falls back to the configured key and sender."""
    route = respx_mock.get(SEND_URL).mock(return_value=httpx.Response(200, text="98765"))

    message_id = await send_sms("+420123456789", "Ahoj", flags={SmsFlag.TEST})

    assert message_id == 98765
    sent = route.calls.last.request.url.params
    assert sent["api-key"] == "env-key"
    assert sent["sender"] == "ENVSENDER"
    assert sent["number"] == "420123456789"
    assert sent["flag-test"] == "1"


@pytest.mark.asyncio
async def test_send_sms_overrides_sender(
    gateway_env: None, respx_mock: respx.MockRouter
) -> None:
    """Test that an explicit sender wins over ESTERIA_SENDER."""
    route = respx_mock.get(SEND_URL).mock(return_value=httpx.Response(200, text="500"))

    await send_sms("123", "Hi", sender="OTHER")

    assert route.calls.last.request.url.params["sender"] == "OTHER"


@pytest.mark.asyncio
async def test_send_sms_propagates_gateway_error(
    gateway_env: None, respx_mock: respx.MockRouter
) -> None:
    """Test that gateway failures reach the caller unchanged."""
    respx_mock.get(SEND_URL).mock(return_value=httpx.Response(200, text="3"))

    with pytest.raises(SendFailed, match="unable to authenticate"):
        await send_sms("123", "Hi")


@pytest.mark.asyncio
async def test_send_sms_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a missing API key is a configuration error."""
    monkeypatch.setenv("ESTERIA_API_BASE_URL", "https://gw.example.test/api")
    monkeypatch.setenv("ESTERIA_SENDER", "ACME")

    with pytest.raises(RuntimeError, match="ESTERIA_API_KEY"):
        await send_sms("123", "Hi")


@pytest.mark.asyncio
async def test_send_sms_requires_sender(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a missing sender is a configuration error."""
    monkeypatch.setenv("ESTERIA_API_BASE_URL", "https://gw.example.test/api")
    monkeypatch.setenv("ESTERIA_API_KEY", "env-key")

    with pytest.raises(RuntimeError, match="ESTERIA_SENDER"):
        await send_sms("123", "Hi")


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["api_key", "sender"])
async def test_send_sms_keeps_explicit_empty_credential(gateway_env: None, field: str) -> None:
    """Test that an explicit empty credential is validated, not replaced."""
    with pytest.raises(ValidationError):
        await send_sms("123", "Hi", **{field: ""})
