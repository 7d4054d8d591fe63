from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from .session import PLACEHOLDER


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: logging level name for the 'todo_app' logger (default: INFO)
    - LOG_FORMAT: 'console' (default) or 'json'
    - BODY_PLACEHOLDER: placeholder shown in an empty todo body (default: 'Write a note')
    - IMAGE_FETCH_TIMEOUT: seconds before a background image fetch gives up (default: 10)
    """

    cors_allow_origins: List[str]
    log_level: str
    log_format: str
    body_placeholder: str
    image_fetch_timeout: float


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_float(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level = "INFO"

    log_format = _get_env("LOG_FORMAT", "console").strip().lower()
    if log_format not in {"console", "json"}:
        log_format = "console"

    return Settings(
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=log_level,
        log_format=log_format,
        # Not stripped: the sentinel is compared verbatim
        body_placeholder=_get_env("BODY_PLACEHOLDER", PLACEHOLDER),
        image_fetch_timeout=_parse_float(_get_env("IMAGE_FETCH_TIMEOUT", "10"), 10.0),
    )
