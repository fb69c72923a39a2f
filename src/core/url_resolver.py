"""Ticket URL resolution.

Replaces aggregator ticket links with something better:
1. the venue's own website from the venue registry
2. the row's source page

Ticket platform and direct links are never touched. A replacement is never
an aggregator itself, so resolving a resolver result again yields nothing.

``extract_ticket_link`` covers the other route: reading an aggregator
detail page and picking the outbound ticket/venue link it advertises.
"""

from bs4 import BeautifulSoup

from src.core.url_classifier import UrlClassifier
from src.core.venue_registry import VenueRegistry
from src.utils.urls import is_valid_url, make_absolute_url, normalize_host

# Anchor texts that advertise the real ticket or venue page
TICKET_LINK_KEYWORDS = (
    "billett",
    "ticket",
    "kjøp",
    "book",
    "bestill",
    "meld deg",
    "les mer",
    "read more",
    "nettside",
    "website",
    "gå til",
    "se program",
)


class TicketUrlResolver:
    """Resolve aggregator ticket URLs using the venue registry."""

    def __init__(self, registry: VenueRegistry, classifier: UrlClassifier | None = None) -> None:
        self.registry = registry
        self.classifier = classifier or UrlClassifier()

    def resolve(
        self,
        venue_name: str | None,
        current_url: str | None,
        source_url: str | None = None,
    ) -> str | None:
        """Find a better ticket URL for an event.

        Args:
            venue_name: Venue display name as stored on the event
            current_url: The event's current ticket URL
            source_url: The page the event was scraped from

        Returns:
            Replacement URL, or None when the current URL is fine or no
            improvement is available
        """
        if not current_url or not self.classifier.is_aggregator(current_url):
            return None

        venue_url = self.registry.lookup(venue_name)
        if self._is_improvement(venue_url, current_url):
            return venue_url

        if self._is_improvement(source_url, current_url):
            return source_url

        return None

    def _is_improvement(self, candidate: str | None, current_url: str) -> bool:
        return (
            bool(candidate)
            and candidate != current_url
            and is_valid_url(candidate)
            and not self.classifier.is_aggregator(candidate)
        )


def extract_ticket_link(
    html: str,
    page_url: str,
    classifier: UrlClassifier | None = None,
) -> str | None:
    """Pick the outbound ticket/venue link from an aggregator detail page.

    Strategy 1: first link whose text names a ticket/booking action.
    Strategy 2: first link to a known ticket platform.

    Links back to the page's own site, to other aggregators and to footer or
    share widgets are skipped.

    Args:
        html: Page markup
        page_url: URL the markup was fetched from (resolves relative links)
        classifier: URL classifier (default domain sets if None)

    Returns:
        Absolute URL or None
    """
    if not html:
        return None

    classifier = classifier or UrlClassifier()
    page_host = normalize_host(page_url)
    soup = BeautifulSoup(html, "html.parser")

    candidates: list[tuple[str, str]] = []
    for anchor in soup.find_all("a", href=True):
        href = make_absolute_url(anchor["href"], page_url)
        if not href or not is_valid_url(href):
            continue
        host = normalize_host(href)
        if host == page_host or classifier.is_aggregator(href) or classifier.is_noise(href):
            continue
        candidates.append((href, anchor.get_text(" ", strip=True).lower()))

    for href, text in candidates:
        if any(keyword in text for keyword in TICKET_LINK_KEYWORDS):
            return href

    for href, _ in candidates:
        if classifier.is_ticket_platform(href):
            return href

    return None
