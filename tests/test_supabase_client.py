"""Tests for the Supabase event store."""

from unittest.mock import MagicMock

import pytest

from src.core.event_model import Price
from src.core.exceptions import RowUpdateError, StoreUnavailableError
from src.core.supabase_client import EVENT_COLUMNS, EventQuery, SupabaseEventStore


class TestSupabaseEventStore:
    """Tests for SupabaseEventStore with a mocked client."""

    @pytest.fixture
    def mock_client(self):
        """Mock Supabase client."""
        return MagicMock()

    @pytest.fixture
    def store(self, mock_client):
        return SupabaseEventStore(mock_client)

    @pytest.mark.asyncio
    async def test_fetch_events_builds_query(self, store, mock_client):
        """Filters are applied in order: sources, price, ilike, order, limit."""
        select = mock_client.table.return_value.select.return_value
        chain = select.in_.return_value.eq.return_value.ilike.return_value.order.return_value.limit.return_value
        chain.execute.return_value.data = [
            {"id": 7, "title_no": "Konsert", "ticket_url": "https://www.visitbergen.com/e/7", "price": ""},
        ]

        records = await store.fetch_events(EventQuery(
            sources=("visitbergen",),
            price="",
            ticket_url_like="%visitbergen%",
            limit=10,
        ))

        mock_client.table.assert_called_with("events")
        mock_client.table.return_value.select.assert_called_with(EVENT_COLUMNS)
        select.in_.assert_called_with("source", ["visitbergen"])
        select.in_.return_value.eq.assert_called_with("price", "")
        assert len(records) == 1
        assert records[0].id == "7"
        assert records[0].price == Price.unknown()

    @pytest.mark.asyncio
    async def test_fetch_events_without_filters(self, store, mock_client):
        select = mock_client.table.return_value.select.return_value
        select.order.return_value.execute.return_value.data = []

        records = await store.fetch_events(EventQuery())

        assert records == []
        select.in_.assert_not_called()
        select.order.assert_called_with("date_start")

    @pytest.mark.asyncio
    async def test_fetch_failure_raises_store_unavailable(self, store, mock_client):
        select = mock_client.table.return_value.select.return_value
        select.order.return_value.execute.side_effect = RuntimeError("connection refused")

        with pytest.raises(StoreUnavailableError) as exc_info:
            await store.fetch_events(EventQuery())
        assert "connection refused" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_malformed_row_raises_store_unavailable(self, store, mock_client):
        select = mock_client.table.return_value.select.return_value
        select.order.return_value.execute.return_value.data = [{"title_no": "no id"}]

        with pytest.raises(StoreUnavailableError):
            await store.fetch_events(EventQuery())

    @pytest.mark.asyncio
    async def test_update_event(self, store, mock_client):
        update = mock_client.table.return_value.update
        update.return_value.eq.return_value.execute.return_value.data = [{"id": "7"}]

        await store.update_event("7", {"ticket_url": "https://usf.no"})

        update.assert_called_with({"ticket_url": "https://usf.no"})
        update.return_value.eq.assert_called_with("id", "7")

    @pytest.mark.asyncio
    async def test_update_rejected(self, store, mock_client):
        update = mock_client.table.return_value.update
        update.return_value.eq.return_value.execute.side_effect = RuntimeError("permission denied")

        with pytest.raises(RowUpdateError) as exc_info:
            await store.update_event("7", {"price": "250"})
        assert exc_info.value.event_id == "7"
        assert exc_info.value.fields == ["price"]

    @pytest.mark.asyncio
    async def test_update_no_row_matched(self, store, mock_client):
        update = mock_client.table.return_value.update
        update.return_value.eq.return_value.execute.return_value.data = []

        with pytest.raises(RowUpdateError):
            await store.update_event("missing", {"price": "250"})
