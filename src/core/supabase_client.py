"""Supabase client for event read/update operations.

The reconciliation pipeline only needs two calls:
- a filtered read of ``events`` rows
- an update of named fields on one row by id

Both are wrapped so failures surface as ``StoreUnavailableError`` (read) or
``RowUpdateError`` (update) instead of raw PostgREST errors.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from supabase import Client, create_client

from src.config import get_settings
from src.core.event_model import EventRecord
from src.core.exceptions import ConfigurationError, RowUpdateError, StoreUnavailableError
from src.logging import get_logger

logger = get_logger(__name__)

EVENTS_TABLE = "events"
EVENT_COLUMNS = "id, title_no, venue_name, source_url, ticket_url, price, source, description_no, date_start"


@dataclass(frozen=True)
class EventQuery:
    """Row selection for a reconciliation run."""

    sources: tuple[str, ...] = ()  # set membership on ``source``
    price: str | None = None  # equality on ``price``
    ticket_url_like: str | None = None  # ilike pattern on ``ticket_url``
    order_by: str | None = "date_start"
    limit: int | None = None


class EventStore(Protocol):
    """What the pipeline needs from the event store."""

    async def fetch_events(self, query: EventQuery) -> list[EventRecord]: ...

    async def update_event(self, event_id: str, fields: dict[str, str | None]) -> None: ...


class SupabaseEventStore:
    """Event store backed by the Supabase ``events`` table."""

    def __init__(self, client: Client | None = None) -> None:
        """Initialize the store.

        Args:
            client: Existing Supabase client. Created from settings if None.

        Raises:
            ConfigurationError: If no client is given and credentials are missing
        """
        if client is None:
            settings = get_settings()
            if not settings.supabase_url or not settings.supabase_service_role_key:
                raise ConfigurationError(
                    "Missing PUBLIC_SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY"
                )
            client = create_client(settings.supabase_url, settings.supabase_service_role_key)
        self._client = client

    @property
    def client(self) -> Client:
        """Get the Supabase client instance."""
        return self._client

    async def fetch_events(self, query: EventQuery) -> list[EventRecord]:
        """Read the working set of a run.

        Raises:
            StoreUnavailableError: If the read fails or returns malformed rows
        """
        builder = self._client.table(EVENTS_TABLE).select(EVENT_COLUMNS)
        if query.sources:
            builder = builder.in_("source", list(query.sources))
        if query.price is not None:
            builder = builder.eq("price", query.price)
        if query.ticket_url_like:
            builder = builder.ilike("ticket_url", query.ticket_url_like)
        if query.order_by:
            builder = builder.order(query.order_by)
        if query.limit:
            builder = builder.limit(query.limit)

        try:
            response = builder.execute()
        except Exception as e:
            logger.error("events_fetch_failed", error=str(e))
            raise StoreUnavailableError(f"Failed to read events: {e}", table=EVENTS_TABLE) from e

        rows: list[dict[str, Any]] = response.data or []
        try:
            records = [EventRecord.model_validate(row) for row in rows]
        except ValueError as e:
            raise StoreUnavailableError(f"Malformed event row: {e}", table=EVENTS_TABLE) from e

        logger.info(
            "events_fetched",
            count=len(records),
            sources=list(query.sources) or None,
            price=query.price,
            ticket_url_like=query.ticket_url_like,
        )
        return records

    async def update_event(self, event_id: str, fields: dict[str, str | None]) -> None:
        """Update named fields on one event.

        Raises:
            RowUpdateError: If the update is rejected or matches no row
        """
        try:
            response = (
                self._client.table(EVENTS_TABLE)
                .update(fields)
                .eq("id", event_id)
                .execute()
            )
        except Exception as e:
            raise RowUpdateError(event_id, str(e), fields=list(fields)) from e

        if response.data is not None and len(response.data) == 0:
            raise RowUpdateError(event_id, "no row matched", fields=list(fields))


_store: SupabaseEventStore | None = None


def get_event_store() -> SupabaseEventStore:
    """Get or create the Supabase event store singleton."""
    global _store
    if _store is None:
        _store = SupabaseEventStore()
    return _store
