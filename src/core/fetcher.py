"""Polite, sequential HTML fetcher for third-party event pages.

Requests go out one at a time, with a minimum pause between the end of one
request and the start of the next. Failures (HTTP errors, timeouts,
connection errors) are logged and returned as None: callers treat a missing
page as "skip this row".

Usage:
    async with PageFetcher(delay_seconds=1.0) as fetcher:
        html = await fetcher.fetch("https://usf.no/program/x")
"""

import asyncio
import time

import httpx

from src.config import Settings, get_settings
from src.core.exceptions import FetchError, FetchTimeoutError, HTTPError
from src.core.retry import RetryConfig, call_with_retry
from src.logging import get_logger

logger = get_logger(__name__)


class PageFetcher:
    """Fetch HTML pages sequentially with a minimum delay between requests."""

    def __init__(
        self,
        delay_seconds: float = 1.0,
        timeout: float = 15.0,
        user_agent: str = "Gaari-Bergen-Events/1.0",
        accept_language: str = "nb-NO,nb;q=0.9,no;q=0.8,en;q=0.5",
        max_attempts: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.delay_seconds = delay_seconds
        self.timeout = timeout
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": accept_language,
        }
        self.retry_config = RetryConfig(max_attempts=max_attempts)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._last_finished_at: float | None = None

        # Stats
        self.requests = 0
        self.failures = 0

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PageFetcher":
        settings = settings or get_settings()
        return cls(
            delay_seconds=settings.fetch_delay_seconds,
            timeout=settings.fetch_timeout,
            user_agent=settings.scraper_user_agent,
            accept_language=settings.fetch_accept_language,
            max_attempts=settings.fetch_max_attempts,
        )

    async def __aenter__(self) -> "PageFetcher":
        self._client = httpx.AsyncClient(
            headers=self.headers,
            timeout=self.timeout,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self, url: str | None) -> str | None:
        """Fetch a page's markup.

        Args:
            url: Absolute page URL

        Returns:
            Response body, or None on any fetch failure
        """
        if not url:
            return None
        if self._client is None:
            raise RuntimeError("PageFetcher must be used as an async context manager")

        try:
            return await call_with_retry(self._get, url, config=self.retry_config)
        except httpx.TimeoutException:
            error: FetchError = FetchTimeoutError(url, self.timeout)
        except httpx.HTTPError as e:
            error = FetchError(f"{type(e).__name__}: {e}", details={"url": url})
        except HTTPError as e:
            error = e

        self.failures += 1
        logger.warning("fetch_failed", error=str(error), **{"url": url, **error.details})
        return None

    async def _get(self, url: str) -> str:
        await self._wait_turn()
        self.requests += 1

        try:
            response = await self._client.get(url)
        finally:
            self._last_finished_at = time.monotonic()

        if response.status_code >= 400:
            raise HTTPError(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        return response.text

    async def _wait_turn(self) -> None:
        """Sleep until ``delay_seconds`` passed since the previous request finished."""
        if self._last_finished_at is None:
            return
        remaining = self.delay_seconds - (time.monotonic() - self._last_finished_at)
        if remaining > 0:
            await asyncio.sleep(remaining)
