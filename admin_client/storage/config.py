"""Environment-provided settings, read once when the client is built."""

from __future__ import annotations

import math
import os
from typing import Any, Mapping

from loguru import logger
from pydantic import BaseModel

DEFAULT_TIMEOUT_MS = 15000.0


def read_timeout_ms(raw: Any, fallback: float = DEFAULT_TIMEOUT_MS) -> float:
    """Coerce *raw* to a positive, finite millisecond timeout.

    Anything else (``None``, non-numeric strings, ``nan``, ``inf``, zero or
    negative numbers) yields *fallback*.
    """
    if raw is None or isinstance(raw, bool):
        return fallback
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(value) or value <= 0:
        return fallback
    return value


class Settings(BaseModel):
    """Connection settings for the dashboard backend.

    ``api_base_url`` is prefixed to every relative request path and
    ``timeout_ms`` is the default per-request timeout.
    """

    api_base_url: str = ""
    timeout_ms: float = DEFAULT_TIMEOUT_MS
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``API_BASE_URL``, ``API_TIMEOUT_MS`` and
        ``ADMIN_CLIENT_LOG_LEVEL``."""
        env = os.environ if environ is None else environ

        base_url = (env.get("API_BASE_URL") or "").strip().rstrip("/")
        raw_timeout = env.get("API_TIMEOUT_MS")
        timeout_ms = read_timeout_ms(raw_timeout, fallback=-1.0)
        if timeout_ms < 0:
            if raw_timeout:
                logger.warning(
                    f"Ignoring invalid API_TIMEOUT_MS={raw_timeout!r}; "
                    f"using {DEFAULT_TIMEOUT_MS:g} ms"
                )
            timeout_ms = DEFAULT_TIMEOUT_MS
        log_level = (env.get("ADMIN_CLIENT_LOG_LEVEL") or "WARNING").strip().upper()

        return cls(api_base_url=base_url, timeout_ms=timeout_ms, log_level=log_level)
