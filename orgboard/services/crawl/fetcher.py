from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

import httpx

from .base import TransportError


logger = logging.getLogger(__name__)


class HttpFetcher:
    """Blocking page fetcher. One short-lived client per request, no retries."""

    def __init__(self, *, timeout: float = 12.0, headers: Optional[Dict[str, str]] = None) -> None:
        self.timeout = float(timeout)
        self.headers = headers or {"User-Agent": "orgboard-crawler/0.1"}

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, headers=self.headers, follow_redirects=True)

    def fetch(self, url: str, params: Optional[Mapping[str, str]] = None) -> str:
        logger.info("GET %s params=%s", url, dict(params or {}))
        try:
            with self._client() as client:
                r = client.get(url, params=params)
                r.raise_for_status()
                return r.text
        except (httpx.HTTPError, UnicodeDecodeError) as exc:
            raise TransportError(url, exc) from exc
