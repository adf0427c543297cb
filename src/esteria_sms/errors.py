from __future__ import annotations


class SmsError(Exception):
    """Base class for everything `SmsClient.send` raises."""


class SendFailed(SmsError):
    """
    The gateway answered but did not accept the message.

    `code` is the status the gateway returned, or None when the body
    was not a number at all.
    """

    def __init__(self, number: str, message: str, code: int | None = None) -> None:
        super().__init__(f"SMS sending failed to: {number}, {message}")
        self.number = number
        self.message = message
        self.code = code


class RequestFailed(SmsError):
    """The HTTP round trip itself did not complete."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"HTTP request failed: {cause}")
        self.cause = cause
