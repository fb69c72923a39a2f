"""Ticket URL classification.

Splits third-party links into two disjoint groups:
- aggregators: event listings and social sites that are not the point of
  purchase. These ticket URLs get replaced.
- ticket platforms: real purchase flows. These are never rewritten.

Anything else with a valid http(s) host is a direct (venue) link.
"""

from enum import Enum

from src.core.exceptions import InvalidConfigError
from src.utils.urls import host_matches, normalize_host


class UrlClassification(str, Enum):
    """What a ticket URL points to."""

    AGGREGATOR = "aggregator"
    TICKET_PLATFORM = "ticket_platform"
    DIRECT = "direct"
    UNKNOWN = "unknown"  # absent or malformed


# Competitor listings and non-ticket sites scrapers pick up.
# bergen.kommune.no is not listed: venue pages live there (/kulturhus/fana).
# Only its billett subdomain (the municipal listing system) is an aggregator.
AGGREGATOR_DOMAINS: frozenset[str] = frozenset({
    "visitbergen.com",
    "kulturikveld.no",
    "barnasnorge.no",
    "billett.bergen.kommune.no",
    "studentbergen.no",
    "bergenlive.no",
    "miljofyrtarn.no",
    "facebook.com",
    "instagram.com",
    "twitter.com",
    "linkedin.com",
    "youtube.com",
})

TICKET_PLATFORM_DOMAINS: frozenset[str] = frozenset({
    "ticketmaster.no",
    "ticketmaster.com",
    "ticketco.events",
    "ticketco.no",
    "hoopla.no",
    "billettservice.no",
    "eventbrite.com",
    "eventbrite.no",
    "tikkio.com",
    "checkin.no",
    "eventim.no",
    "billetto.no",
})

# Footer links, badges and share widgets on listing pages
LINK_NOISE_DOMAINS: frozenset[str] = frozenset({
    "miljofyrtarn.no",
    "innovasjonnorge.no",
    "visitnorway.com",
    "google.com",
    "goo.gl",
    "tripadvisor.com",
    "tripadvisor.no",
    "schema.org",
    "w3.org",
    "pinterest.com",
    "maps.apple.com",
    "addtoany.com",
    "sharethis.com",
})


class UrlClassifier:
    """Host-based classifier over fixed aggregator and ticket platform sets."""

    def __init__(
        self,
        aggregator_domains: frozenset[str] = AGGREGATOR_DOMAINS,
        ticket_platform_domains: frozenset[str] = TICKET_PLATFORM_DOMAINS,
    ) -> None:
        self.aggregator_domains = frozenset(d.lower() for d in aggregator_domains)
        self.ticket_platform_domains = frozenset(d.lower() for d in ticket_platform_domains)

        overlap = self.aggregator_domains & self.ticket_platform_domains
        if overlap:
            raise InvalidConfigError(
                f"Domains listed as both aggregator and ticket platform: {sorted(overlap)}",
                field="aggregator_domains",
            )

    def classify(self, url: str | None) -> UrlClassification:
        """Classify a URL by its host.

        Ticket platforms are checked first so a purchase link can never be
        reported as an aggregator.
        """
        host = normalize_host(url)
        if host is None:
            return UrlClassification.UNKNOWN
        if host_matches(host, self.ticket_platform_domains):
            return UrlClassification.TICKET_PLATFORM
        if host_matches(host, self.aggregator_domains):
            return UrlClassification.AGGREGATOR
        return UrlClassification.DIRECT

    def is_aggregator(self, url: str | None) -> bool:
        return self.classify(url) is UrlClassification.AGGREGATOR

    def is_ticket_platform(self, url: str | None) -> bool:
        return self.classify(url) is UrlClassification.TICKET_PLATFORM

    def is_noise(self, url: str | None) -> bool:
        """Check if a URL is a footer/share link not worth following."""
        host = normalize_host(url)
        return host is not None and host_matches(host, LINK_NOISE_DOMAINS)


_default_classifier = UrlClassifier()


def classify_url(url: str | None) -> UrlClassification:
    """Classify a URL with the built-in domain sets."""
    return _default_classifier.classify(url)


def is_aggregator_url(url: str | None) -> bool:
    """Check if a URL points to an aggregator/listing site."""
    return _default_classifier.is_aggregator(url)


def is_ticket_platform_url(url: str | None) -> bool:
    """Check if a URL points to a ticket platform."""
    return _default_classifier.is_ticket_platform(url)
