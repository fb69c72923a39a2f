"""Audit of venues whose events still carry aggregator ticket URLs.

Used after a URL run to find which venues need a registry entry: a venue
with many aggregator links and no registry entry is the next one to add.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from src.core.event_model import EventRecord
from src.core.url_classifier import UrlClassifier
from src.core.venue_registry import VenueRegistry, normalize_venue_name
from src.utils.urls import display_domain

UNKNOWN_VENUE = "Unknown"


@dataclass
class AggregatorVenueSummary:
    """Aggregator ticket URLs remaining for one venue."""

    venue_name: str
    count: int = 0
    sources: set[str] = field(default_factory=set)
    domains: set[str] = field(default_factory=set)
    in_registry: bool = False


def audit_aggregator_venues(
    records: Iterable[EventRecord],
    registry: VenueRegistry,
    classifier: UrlClassifier | None = None,
) -> list[AggregatorVenueSummary]:
    """Group events with aggregator ticket URLs by venue.

    Args:
        records: Events to inspect
        registry: Venue registry, to flag venues that already have an entry
        classifier: URL classifier (default domain sets if None)

    Returns:
        One summary per venue, most affected first
    """
    classifier = classifier or UrlClassifier()
    by_venue: dict[str, AggregatorVenueSummary] = {}

    for record in records:
        if not classifier.is_aggregator(record.ticket_url):
            continue

        name = record.venue_name.strip() or UNKNOWN_VENUE
        key = normalize_venue_name(name)
        summary = by_venue.get(key)
        if summary is None:
            summary = AggregatorVenueSummary(venue_name=name, in_registry=name in registry)
            by_venue[key] = summary

        summary.count += 1
        if record.source:
            summary.sources.add(record.source)
        summary.domains.add(display_domain(record.ticket_url))

    return sorted(by_venue.values(), key=lambda s: (-s.count, s.venue_name.lower()))
