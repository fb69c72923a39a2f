"""Pytest configuration and shared fixtures."""

import sys
from typing import Any

import pytest

from src.core.event_model import EventRecord
from src.core.exceptions import RowUpdateError, StoreUnavailableError
from src.core.supabase_client import EventQuery
from src.core.url_classifier import AGGREGATOR_DOMAINS, TICKET_PLATFORM_DOMAINS, UrlClassifier
from src.core.venue_registry import VenueRegistry

# Fix encoding for Windows
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")


class FakeEventStore:
    """In-memory event store applying the same filters as the Supabase query."""

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        fail_reads: bool = False,
        failing_ids: set[str] | None = None,
    ) -> None:
        self.rows = {str(row["id"]): dict(row) for row in rows or []}
        self.fail_reads = fail_reads
        self.failing_ids = failing_ids or set()
        self.updates: list[tuple[str, dict]] = []
        self.queries: list[EventQuery] = []

    async def fetch_events(self, query: EventQuery) -> list[EventRecord]:
        self.queries.append(query)
        if self.fail_reads:
            raise StoreUnavailableError("connection refused", table="events")

        rows = list(self.rows.values())
        if query.sources:
            rows = [r for r in rows if r.get("source") in query.sources]
        if query.price is not None:
            rows = [r for r in rows if (r.get("price") or "") == query.price]
        if query.ticket_url_like:
            needle = query.ticket_url_like.strip("%").lower()
            rows = [r for r in rows if needle in (r.get("ticket_url") or "").lower()]
        if query.order_by:
            rows.sort(key=lambda r: r.get(query.order_by) or "")
        if query.limit:
            rows = rows[: query.limit]
        return [EventRecord.model_validate(r) for r in rows]

    async def update_event(self, event_id: str, fields: dict[str, str | None]) -> None:
        if event_id in self.failing_ids:
            raise RowUpdateError(event_id, "permission denied", fields=list(fields))
        self.updates.append((event_id, dict(fields)))
        self.rows[event_id].update(fields)


class FakeFetcher:
    """Page fetcher returning canned markup by URL."""

    def __init__(self, pages: dict[str, str] | None = None) -> None:
        self.pages = pages or {}
        self.fetched: list[str] = []

    async def fetch(self, url: str | None) -> str | None:
        if not url:
            return None
        self.fetched.append(url)
        return self.pages.get(url)


@pytest.fixture
def classifier():
    """Built-in domain sets plus the placeholder aggregator used in examples."""
    return UrlClassifier(
        aggregator_domains=AGGREGATOR_DOMAINS | {"aggregator.example"},
        ticket_platform_domains=TICKET_PLATFORM_DOMAINS,
    )


@pytest.fixture
def registry():
    return VenueRegistry.from_mapping({
        "USF Verftet": "https://usf.no",
        "Grieghallen": "https://grieghallen.no",
        "Røkeriet": "https://usf.no",
    })


@pytest.fixture
def make_store():
    def factory(rows=None, **kwargs) -> FakeEventStore:
        return FakeEventStore(rows, **kwargs)
    return factory


@pytest.fixture
def make_fetcher():
    def factory(pages=None) -> FakeFetcher:
        return FakeFetcher(pages)
    return factory
