"""Tests for the page fetcher."""

import asyncio
import time
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from src.config import Settings
from src.core.fetcher import PageFetcher
from src.core.retry import RetryConfig


def _fetcher(handler, **kwargs) -> PageFetcher:
    kwargs.setdefault("delay_seconds", 0)
    return PageFetcher(transport=httpx.MockTransport(handler), **kwargs)


class TestPageFetcher:
    """Tests for PageFetcher."""

    @pytest.mark.asyncio
    async def test_returns_body(self):
        """Successful fetch returns the markup and sends our headers."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["user_agent"] = request.headers["user-agent"]
            seen["accept_language"] = request.headers["accept-language"]
            return httpx.Response(200, text="<p>NOK 250</p>")

        async with _fetcher(handler, user_agent="TestAgent/1.0") as fetcher:
            html = await fetcher.fetch("https://usf.no/program/x")

        assert html == "<p>NOK 250</p>"
        assert seen["user_agent"] == "TestAgent/1.0"
        assert seen["accept_language"].startswith("nb-NO")
        assert fetcher.requests == 1
        assert fetcher.failures == 0

    @pytest.mark.asyncio
    async def test_http_error_returns_none(self):
        async with _fetcher(lambda request: httpx.Response(404)) as fetcher:
            html = await fetcher.fetch("https://usf.no/missing")

        assert html is None
        assert fetcher.failures == 1

    @pytest.mark.asyncio
    async def test_timeout_returns_none(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with _fetcher(handler) as fetcher:
            assert await fetcher.fetch("https://usf.no/slow") is None
        assert fetcher.failures == 1

    @pytest.mark.asyncio
    async def test_no_retry_by_default(self):
        calls = []

        def handler(request):
            calls.append(request.url)
            raise httpx.ConnectError("refused", request=request)

        async with _fetcher(handler) as fetcher:
            assert await fetcher.fetch("https://usf.no/x") is None
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_transport_error_retried_when_enabled(self):
        """Opt-in retries cover connection errors."""
        calls = []

        def handler(request):
            calls.append(request.url)
            if len(calls) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, text="ok")

        async with _fetcher(handler) as fetcher:
            fetcher.retry_config = RetryConfig(max_attempts=2, initial_delay=0, jitter=0)
            assert await fetcher.fetch("https://usf.no/x") == "ok"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_retry_logged_as_fetch_retry(self):
        calls = []

        def handler(request):
            calls.append(request.url)
            if len(calls) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, text="ok")

        with patch("src.core.retry.logger") as logger:
            async with _fetcher(handler) as fetcher:
                fetcher.retry_config = RetryConfig(max_attempts=2, initial_delay=0, jitter=0)
                assert await fetcher.fetch("https://usf.no/x") == "ok"

        logger.warning.assert_called_once()
        assert logger.warning.call_args.args[0] == "fetch_retry"
        assert logger.warning.call_args.kwargs["error_type"] == "ConnectError"
        assert logger.warning.call_args.kwargs["attempt"] == 1

    @pytest.mark.asyncio
    async def test_http_status_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request.url)
            return httpx.Response(503)

        async with _fetcher(handler) as fetcher:
            fetcher.retry_config = RetryConfig(max_attempts=3, initial_delay=0, jitter=0)
            assert await fetcher.fetch("https://usf.no/x") is None
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_delay_between_requests(self):
        """Only the second request waits."""
        sleep = AsyncMock()
        with patch("src.core.fetcher.asyncio.sleep", sleep):
            async with _fetcher(lambda r: httpx.Response(200, text="ok"), delay_seconds=1.0) as fetcher:
                await fetcher.fetch("https://usf.no/a")
                assert sleep.await_count == 0
                await fetcher.fetch("https://usf.no/b")

        assert sleep.await_count == 1
        waited = sleep.await_args.args[0]
        assert 0 < waited <= 1.0

    @pytest.mark.asyncio
    async def test_delay_counts_from_end_of_slow_request(self):
        """A slow response does not eat into the pause before the next request."""
        started = []

        async def handler(request):
            started.append(time.monotonic())
            await asyncio.sleep(0.3)
            return httpx.Response(200, text="ok")

        async with _fetcher(handler, delay_seconds=0.2) as fetcher:
            await fetcher.fetch("https://usf.no/a")
            first_done = time.monotonic()
            await fetcher.fetch("https://usf.no/b")

        assert started[1] - first_done >= 0.18

    @pytest.mark.asyncio
    async def test_delay_after_failed_request(self):
        started = []

        async def handler(request):
            started.append(time.monotonic())
            await asyncio.sleep(0.1)
            if len(started) == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, text="ok")

        async with _fetcher(handler, delay_seconds=0.2) as fetcher:
            assert await fetcher.fetch("https://usf.no/a") is None
            first_done = time.monotonic()
            assert await fetcher.fetch("https://usf.no/b") == "ok"

        assert started[1] - first_done >= 0.18

    @pytest.mark.asyncio
    async def test_empty_url(self):
        async with _fetcher(lambda r: httpx.Response(200)) as fetcher:
            assert await fetcher.fetch(None) is None
            assert await fetcher.fetch("") is None
        assert fetcher.requests == 0

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        fetcher = _fetcher(lambda r: httpx.Response(200))
        with pytest.raises(RuntimeError):
            await fetcher.fetch("https://usf.no")

    def test_from_settings(self):
        settings = Settings(FETCH_DELAY_SECONDS=2.5, FETCH_TIMEOUT=5, FETCH_MAX_ATTEMPTS=3)

        fetcher = PageFetcher.from_settings(settings)

        assert fetcher.delay_seconds == 2.5
        assert fetcher.timeout == 5
        assert fetcher.retry_config.max_attempts == 3
