from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SmsFlag(str, Enum):
    """Optional gateway switches. The value is the query parameter name."""

    DEBUG = "flag-debug"
    NOLOG = "flag-nolog"
    FLASH = "flag-flash"
    TEST = "flag-test"
    NOBL = "flag-nobl"
    CONVERT = "flag-convert"

    @property
    def wire_value(self) -> str:
        # The gateway expects "3" for nolog and "1" for every other flag.
        return "3" if self is SmsFlag.NOLOG else "1"


class Encoding(str, Enum):
    DEFAULT = "default"
    EIGHT_BIT = "8bit"
    UDH = "udh"

    def params(self) -> dict[str, str]:
        """Query parameters implied by this encoding."""
        if self is Encoding.UDH:
            return {"udh": "1", "coding": "1"}
        if self is Encoding.EIGHT_BIT:
            return {"coding": "1"}
        return {}


class SmsRequest(BaseModel):
    """
    One outbound SMS.

    Built fresh for every send and never changed afterwards; use
    `with_options()` to derive a variant.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1)
    sender: str = Field(min_length=1)
    number: str = Field(min_length=1)
    text: str = Field(min_length=1)

    scheduled_time: datetime | None = None
    delivery_report_url: str | None = None
    expiry_minutes: int | None = None
    flags: frozenset[SmsFlag] = frozenset()
    user_key: str | None = None
    encoding: Encoding = Encoding.EIGHT_BIT

    def __init__(
        self,
        api_key: str,
        sender: str,
        number: str,
        text: str,
        **options: Any,
    ) -> None:
        super().__init__(api_key=api_key, sender=sender, number=number, text=text, **options)

    @field_validator("scheduled_time")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    @field_validator("flags", mode="before")
    @classmethod
    def _as_frozenset(cls, value: Iterable[SmsFlag] | None) -> frozenset[SmsFlag]:
        if value is None:
            return frozenset()
        if isinstance(value, (str, SmsFlag)):
            return frozenset([value])  # type: ignore[list-item]
        return frozenset(value)

    @property
    def wire_number(self) -> str:
        """Destination as transmitted: a single leading '+' is dropped."""
        return self.number.removeprefix("+")

    def with_options(self, **changes: Any) -> SmsRequest:
        data = self.model_dump()
        data.update(changes)
        return SmsRequest(**data)
