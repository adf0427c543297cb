from __future__ import annotations

import logging
import re
from types import TracebackType

import httpx

from .codes import MAX_STATUS_CODE, UNKNOWN_ERROR, describe_code
from .errors import RequestFailed, SendFailed
from .sms import SmsRequest

logger = logging.getLogger("esteria_sms")

TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"
DEFAULT_TIMEOUT = 30.0

# Replies are 32-bit signed decimals, ASCII digits only.
INTEGER_RE = re.compile(r"[+-]?[0-9]+")
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def build_params(request: SmsRequest) -> dict[str, str]:
    """Translate a request into the gateway's query parameters."""
    params: dict[str, str] = {
        "api-key": request.api_key,
        "sender": request.sender,
        "number": request.wire_number,
        "text": request.text,
    }

    if request.scheduled_time is not None:
        # scheduled_time is normalised to UTC on the model; no offset on the wire
        params["time"] = request.scheduled_time.strftime(TIME_FORMAT)
    if request.delivery_report_url is not None:
        params["dlr-url"] = request.delivery_report_url
    if request.expiry_minutes is not None:
        params["expired"] = str(request.expiry_minutes)

    for flag in request.flags:
        params[flag.value] = flag.wire_value

    if request.user_key is not None:
        params["user-key"] = request.user_key

    params.update(request.encoding.params())
    return params


def interpret_response(number: str, body: str) -> int:
    """
    Turn the gateway's plaintext reply into a message id.

    Raises SendFailed for status codes and for bodies that are not integers.
    """
    text = body.strip()
    if not INTEGER_RE.fullmatch(text):
        raise SendFailed(number, UNKNOWN_ERROR)
    code = int(text)
    if not INT32_MIN <= code <= INT32_MAX:
        raise SendFailed(number, UNKNOWN_ERROR)

    if code > MAX_STATUS_CODE:
        return code
    raise SendFailed(number, describe_code(code), code=code)


class SmsClient:
    """Async client for the gateway's `/send` endpoint."""

    def __init__(
        self,
        api_base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self.api_base_url = api_base_url.rstrip("/")
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def send_url(self) -> str:
        return f"{self.api_base_url}/send"

    async def send(self, request: SmsRequest) -> int:
        """
        Send one SMS and return the id the gateway assigned to it.

        Raises SendFailed when the gateway rejects the message and
        RequestFailed when the gateway could not be reached.
        """
        params = build_params(request)
        try:
            resp = await self.http_client.get(self.send_url, params=params)
            body = resp.text
        except httpx.HTTPError as exc:
            logger.error("SMS sending failed to: %s, %s", request.number, exc)
            raise RequestFailed(exc) from exc

        logger.debug("Gateway replied %s: %r", resp.status_code, body[:200])
        try:
            message_id = interpret_response(request.number, body)
        except SendFailed as exc:
            logger.error("SMS sending failed to: %s, %s", exc.number, exc.message)
            raise

        logger.debug("SMS to %s accepted with id %s", request.number, message_id)
        return message_id

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> SmsClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
