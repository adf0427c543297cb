from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


class Settings(BaseModel):
    # Gateway root, e.g. https://api.example.com (the client appends /send)
    api_base_url: str | None = Field(default_factory=lambda: os.getenv("ESTERIA_API_BASE_URL"))

    # Credentials used by gateway.send_sms() when the caller does not pass them
    api_key: str | None = Field(default_factory=lambda: os.getenv("ESTERIA_API_KEY"))
    sender: str | None = Field(default_factory=lambda: os.getenv("ESTERIA_SENDER"))

    # Seconds, handed straight to httpx
    timeout: float = Field(default_factory=lambda: _env_float("ESTERIA_TIMEOUT", 30.0))

    log_level: str = Field(default_factory=lambda: os.getenv("ESTERIA_LOG_LEVEL", "INFO"))


@lru_cache
def get_settings() -> Settings:
    return Settings()
