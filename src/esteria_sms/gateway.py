from __future__ import annotations

from typing import Any

from .client import SmsClient
from .config import get_settings
from .sms import SmsRequest


def get_sms_client() -> SmsClient:
    settings = get_settings()

    if not settings.api_base_url:
        raise RuntimeError("SMS gateway is not configured (ESTERIA_API_BASE_URL)")

    return SmsClient(settings.api_base_url, timeout=settings.timeout)


async def send_sms(number: str, text: str, **options: Any) -> int:
    """
    Send an SMS through the configured gateway and return its message id.

    `api_key` and `sender` fall back to ESTERIA_API_KEY / ESTERIA_SENDER;
    any other keyword is passed on to SmsRequest.
    """
    settings = get_settings()
    # explicit values win, even empty ones; SmsRequest rejects those
    api_key = options.pop("api_key") if "api_key" in options else settings.api_key or None
    sender = options.pop("sender") if "sender" in options else settings.sender or None
    if api_key is None:
        raise RuntimeError("ESTERIA_API_KEY is not configured")
    if sender is None:
        raise RuntimeError("ESTERIA_SENDER is not configured")

    request = SmsRequest(api_key, sender, number, text, **options)
    async with get_sms_client() as client:
        return await client.send(request)
