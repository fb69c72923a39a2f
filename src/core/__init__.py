"""Core modules for ticket URL and price reconciliation."""

from src.core.audit import AggregatorVenueSummary, audit_aggregator_venues
from src.core.event_model import EventRecord, Price, PriceKind
from src.core.exceptions import (
    ConfigurationError,
    FetchError,
    GaariError,
    InvalidVenueRegistryError,
    RowUpdateError,
    StorageError,
    StoreUnavailableError,
)
from src.core.fetcher import PageFetcher
from src.core.pipeline import (
    ReconcileConfig,
    ReconcileMode,
    ReconcileReport,
    ReconciliationPipeline,
    RowOutcome,
)
from src.core.price_extractor import PriceExtractor, extract_price_from_markup, extract_price_from_text
from src.core.retry import RetryConfig, call_with_retry
from src.core.supabase_client import EventQuery, EventStore, SupabaseEventStore, get_event_store
from src.core.url_classifier import UrlClassification, UrlClassifier, classify_url
from src.core.url_resolver import TicketUrlResolver, extract_ticket_link
from src.core.venue_registry import VenueEntry, VenueRegistry, load_venue_registry

__all__ = [
    # Event models
    "EventRecord",
    "Price",
    "PriceKind",
    # Venues and URLs
    "VenueEntry",
    "VenueRegistry",
    "load_venue_registry",
    "UrlClassification",
    "UrlClassifier",
    "classify_url",
    "TicketUrlResolver",
    "extract_ticket_link",
    # Prices
    "PriceExtractor",
    "extract_price_from_text",
    "extract_price_from_markup",
    # Pipeline
    "ReconcileConfig",
    "ReconcileMode",
    "ReconcileReport",
    "ReconciliationPipeline",
    "RowOutcome",
    "AggregatorVenueSummary",
    "audit_aggregator_venues",
    # Exceptions
    "GaariError",
    "ConfigurationError",
    "InvalidVenueRegistryError",
    "FetchError",
    "StorageError",
    "StoreUnavailableError",
    "RowUpdateError",
    # Retry
    "call_with_retry",
    "RetryConfig",
    # Clients
    "PageFetcher",
    "EventQuery",
    "EventStore",
    "SupabaseEventStore",
    "get_event_store",
]
