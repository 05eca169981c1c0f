"""Runtime settings for the board crawler.

Configuration via environment variables:

- ORGBOARD_BASE_URL (default: https://www.theofficialboard.jp)
- ORGBOARD_TIMEOUT (seconds, default: 12.0)
- ORGBOARD_USER_AGENT (default: orgboard-crawler/0.1)
- ORGBOARD_ON_MISSING (abort | skip, default: abort)
- ORGBOARD_LOG_LEVEL (default: WARNING)

Usage:
    from orgboard.config import Settings
    settings = Settings.from_env()
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from orgboard.services.crawl.base import MissingFieldPolicy


DEFAULT_BASE_URL = "https://www.theofficialboard.jp"
DEFAULT_TIMEOUT = 12.0
DEFAULT_USER_AGENT = "orgboard-crawler/0.1"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    on_missing_field: MissingFieldPolicy = MissingFieldPolicy.ABORT
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            base_url=_base_url(env.get("ORGBOARD_BASE_URL") or DEFAULT_BASE_URL),
            timeout=_timeout(env.get("ORGBOARD_TIMEOUT") or DEFAULT_TIMEOUT),
            user_agent=env.get("ORGBOARD_USER_AGENT") or DEFAULT_USER_AGENT,
            on_missing_field=MissingFieldPolicy.parse(env.get("ORGBOARD_ON_MISSING") or "abort"),
            log_level=_log_level(env.get("ORGBOARD_LOG_LEVEL") or "WARNING"),
        )

    def override(self, **changes: Any) -> "Settings":
        """Return a copy with the non-None values in `changes` applied (CLI flags win over env)."""
        clean = {k: v for k, v in changes.items() if v is not None}
        if "base_url" in clean:
            clean["base_url"] = _base_url(clean["base_url"])
        if "timeout" in clean:
            clean["timeout"] = _timeout(clean["timeout"])
        if "on_missing_field" in clean:
            clean["on_missing_field"] = MissingFieldPolicy.parse(clean["on_missing_field"])
        if "log_level" in clean:
            clean["log_level"] = _log_level(clean["log_level"])
        return replace(self, **clean)

    @property
    def headers(self) -> dict:
        return {"User-Agent": self.user_agent}


def _base_url(value: str) -> str:
    url = str(value).strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        raise ValueError(f"Base URL must be http(s): {value!r}")
    return url


def _timeout(value: Any) -> float:
    try:
        t = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Timeout must be a number of seconds: {value!r}") from None
    if t <= 0:
        raise ValueError(f"Timeout must be positive: {value!r}")
    return t


def _log_level(value: str) -> str:
    level = str(value).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level
