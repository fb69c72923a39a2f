"""Tests for ticket URL resolution and ticket link discovery."""

from src.core.url_resolver import TicketUrlResolver, extract_ticket_link


class TestTicketUrlResolver:
    """Tests for the resolve rules."""

    def test_registry_hit(self, registry, classifier):
        resolver = TicketUrlResolver(registry, classifier)
        new_url = resolver.resolve(
            "USF Verftet",
            "https://aggregator.example/event/123",
            "https://usf.no/program/x",
        )
        assert new_url == "https://usf.no"

    def test_source_url_fallback(self, registry, classifier):
        resolver = TicketUrlResolver(registry, classifier)
        new_url = resolver.resolve(
            "Unknown pub",
            "https://www.visitbergen.com/event/1",
            "https://unknownpub.no/events/1",
        )
        assert new_url == "https://unknownpub.no/events/1"

    def test_no_improvement(self, registry, classifier):
        resolver = TicketUrlResolver(registry, classifier)
        assert resolver.resolve("Unknown pub", "https://www.visitbergen.com/event/1", None) is None

    def test_source_url_equal_to_current(self, registry, classifier):
        resolver = TicketUrlResolver(registry, classifier)
        url = "https://www.visitbergen.com/event/1"
        assert resolver.resolve("Unknown pub", url, url) is None

    def test_source_url_that_is_aggregator_skipped(self, registry, classifier):
        resolver = TicketUrlResolver(registry, classifier)
        new_url = resolver.resolve(
            "Unknown pub",
            "https://www.visitbergen.com/event/1",
            "https://kulturikveld.no/arrangement/1",
        )
        assert new_url is None

    def test_non_aggregator_untouched(self, registry, classifier):
        resolver = TicketUrlResolver(registry, classifier)
        assert resolver.resolve("USF Verftet", "https://www.ticketmaster.no/event/1", None) is None
        assert resolver.resolve("USF Verftet", "https://usf.no/program/x", None) is None

    def test_absent_current_url(self, registry, classifier):
        resolver = TicketUrlResolver(registry, classifier)
        assert resolver.resolve("USF Verftet", None, "https://usf.no/program/x") is None
        assert resolver.resolve("USF Verftet", "", None) is None

    def test_idempotent(self, registry, classifier):
        resolver = TicketUrlResolver(registry, classifier)
        first = resolver.resolve("USF Verftet", "https://aggregator.example/event/123", None)
        assert resolver.resolve("USF Verftet", first, None) is None


class TestExtractTicketLink:
    """Tests for reading an aggregator detail page."""

    PAGE_URL = "https://www.visitbergen.com/event/konsert-123"

    def test_keyword_link(self):
        html = """
        <html><body>
          <a href="/arrangementer">Alle arrangementer</a>
          <a href="https://usf.no/program/konsert">Kjøp billetter</a>
        </body></html>
        """
        assert extract_ticket_link(html, self.PAGE_URL) == "https://usf.no/program/konsert"

    def test_ticket_platform_fallback(self):
        html = """
        <html><body>
          <a href="https://www.ticketmaster.no/event/abc">Konsert i Grieghallen</a>
        </body></html>
        """
        assert extract_ticket_link(html, self.PAGE_URL) == "https://www.ticketmaster.no/event/abc"

    def test_skips_own_site_aggregators_and_noise(self):
        html = """
        <html><body>
          <a href="/billetter">Billetter</a>
          <a href="https://kulturikveld.no/x">Billetter her</a>
          <a href="https://www.facebook.com/usf">Les mer på Facebook</a>
          <a href="https://www.tripadvisor.no/x">Les mer</a>
          <a href="mailto:post@usf.no">Bestill</a>
        </body></html>
        """
        assert extract_ticket_link(html, self.PAGE_URL) is None

    def test_empty_page(self):
        assert extract_ticket_link("", self.PAGE_URL) is None
