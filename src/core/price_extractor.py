"""Price extraction from free text and HTML pages.

Extraction is an ordered list of independent strategies, tried in priority
order until one finds an amount:

Markup:
1. structured metadata (microdata ``itemprop="price"``, Open Graph
   ``product:price:amount``, JSON-LD ``offers``), accepted only when > 0
2. rendered body text, through the text strategies
3. explicit "free entry" wording (opt-in)

Text:
1. currency code + number: "NOK 280,00"
2. number + kroner suffix: "1 200 kr", "150,-"

A structured price of 0 is not evidence of a free event. Unpopulated
ticket-shop fields render as 0, so it falls through to the body text.
"""

import json
import re
from collections.abc import Callable, Iterator
from typing import Any

from bs4 import BeautifulSoup

from src.core.event_model import Price, parse_amount, parse_amount_value
from src.logging import get_logger

logger = get_logger(__name__)

TextStrategy = Callable[[str], int | None]
MarkupStrategy = Callable[[BeautifulSoup], int | None]

# Directly after "NOK" any 1-3 digit leading group is a thousands group ("NOK 12 500").
_CODED_NUMBER = r"(\d{1,3}(?:[ \u00a0.]\d{3})+|\d+)(?:[,.](\d{1,2}))?"

# Without the code, space-grouped thousands need a single leading digit
# ("1 200 kr"), so "Aldersgrense 18 350 kr" reads as 350. Dot grouping allows
# up to three ("12.500 kr").
_NUMBER = r"(\d(?:[ \u00a0]\d{3})+|\d{1,3}(?:\.\d{3})+|\d+)(?:[,.](\d{1,2}))?"

# Case-sensitive on purpose: "nok" is also the Norwegian word for "enough"
CURRENCY_CODE_PATTERN = re.compile(rf"\bNOK\s*{_CODED_NUMBER}(?!\d)")

INFORMAL_SUFFIX_PATTERN = re.compile(
    rf"(?<![\d,.]){_NUMBER}\s*(?:(?i:kroner|kr)\b\.?|NOK\b|,-)"
)

FREE_ENTRY_PHRASES = (
    "gratis inngang",
    "gratis adgang",
    "gratis entré",
    "fri entré",
    "fri adgang",
    "free entry",
    "free admission",
)

PRICE_HEADINGS = ("pris", "priser", "price", "prices", "billettpris")

# Elements read by the structured strategies. Removed before the body text
# scan so a rejected zero cannot be read back as "0 kr".
STRUCTURED_PRICE_SELECTORS = ('[itemprop="price"]', 'meta[property="product:price:amount"]')


# ==========================================
# Text strategies
# ==========================================


def currency_code_price(text: str) -> int | None:
    """'NOK 280,00' -> 280, 'NOK 550' -> 550."""
    match = CURRENCY_CODE_PATTERN.search(text)
    if not match:
        return None
    return parse_amount(match.group(1), match.group(2))


def informal_suffix_price(text: str) -> int | None:
    """'1 200 kr' -> 1200, '300,00 kr' -> 300, '150,-' -> 150."""
    match = INFORMAL_SUFFIX_PATTERN.search(text)
    if not match:
        return None
    return parse_amount(match.group(1), match.group(2))


# ==========================================
# Markup strategies
# ==========================================


def microdata_price(soup: BeautifulSoup) -> int | None:
    """First ``itemprop="price"`` or ``product:price:amount`` value."""
    tag = None
    for selector in STRUCTURED_PRICE_SELECTORS:
        tag = soup.select_one(selector)
        if tag is not None:
            break
    if tag is None:
        return None

    value = tag.get("content")
    if value is None:
        value = tag.get_text(strip=True)
    return parse_amount_value(value)


def _iter_offers(node: Any) -> Iterator[dict]:
    """Walk a JSON-LD document and yield every offer dict."""
    if isinstance(node, list):
        for item in node:
            yield from _iter_offers(item)
    elif isinstance(node, dict):
        offers = node.get("offers")
        if isinstance(offers, dict):
            yield offers
        elif isinstance(offers, list):
            yield from (offer for offer in offers if isinstance(offer, dict))
        for key in ("@graph", "subEvent"):
            if key in node:
                yield from _iter_offers(node[key])


def json_ld_price(soup: BeautifulSoup) -> int | None:
    """Price from JSON-LD ``offers`` (Offer ``price`` or AggregateOffer ``lowPrice``)."""
    for script in soup.find_all("script", type="application/ld+json"):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("json_ld_invalid", preview=raw[:80])
            continue

        for offer in _iter_offers(data):
            currency = offer.get("priceCurrency")
            if currency and str(currency).upper() != "NOK":
                continue
            for key in ("price", "lowPrice"):
                amount = parse_amount_value(offer.get(key))
                if amount is not None:
                    return amount
    return None


def declares_free_entry(soup: BeautifulSoup) -> bool:
    """Check for explicit free-entry wording.

    Either a price heading ("Pris") whose section says "gratis"/"free", or a
    free-entry phrase anywhere in the body.
    """
    for heading in soup.find_all(["h2", "h3", "h4", "dt", "strong"]):
        if heading.get_text(strip=True).lower().rstrip(":") not in PRICE_HEADINGS:
            continue
        section = heading.parent.get_text(" ", strip=True).lower() if heading.parent else ""
        if "gratis" in section or re.search(r"\bfree\b", section):
            return True

    body = soup.body or soup
    body_text = body.get_text(" ", strip=True).lower()
    return any(phrase in body_text for phrase in FREE_ENTRY_PHRASES)


DEFAULT_TEXT_STRATEGIES: tuple[TextStrategy, ...] = (
    currency_code_price,
    informal_suffix_price,
)

DEFAULT_MARKUP_STRATEGIES: tuple[MarkupStrategy, ...] = (
    microdata_price,
    json_ld_price,
)


class PriceExtractor:
    """Ordered price strategies over text and HTML."""

    def __init__(
        self,
        text_strategies: tuple[TextStrategy, ...] = DEFAULT_TEXT_STRATEGIES,
        markup_strategies: tuple[MarkupStrategy, ...] = DEFAULT_MARKUP_STRATEGIES,
        detect_free: bool = False,
    ) -> None:
        self.text_strategies = text_strategies
        self.markup_strategies = markup_strategies
        self.detect_free = detect_free

    def from_text(self, text: str | None) -> Price | None:
        """Extract a price from plain text.

        Returns:
            Free/Priced, or None when no strategy matches
        """
        if not text:
            return None

        for strategy in self.text_strategies:
            amount = strategy(text)
            if amount is not None:
                return Price.from_amount(amount)
        return None

    def from_markup(self, html: str | None) -> Price | None:
        """Extract a price from an HTML page.

        Returns:
            Free/Priced, or None when nothing on the page is conclusive
        """
        if not html:
            return None

        soup = BeautifulSoup(html, "html.parser")

        for strategy in self.markup_strategies:
            amount = strategy(soup)
            if amount:
                return Price.priced(amount)
            if amount == 0:
                logger.debug("structured_price_zero_ignored", strategy=strategy.__name__)

        for tag in soup(["script", "style", "noscript", "template"]):
            tag.decompose()
        for tag in soup.select(", ".join(STRUCTURED_PRICE_SELECTORS)):
            tag.decompose()

        body = soup.body or soup
        price = self.from_text(body.get_text(" ", strip=True))
        if price is not None:
            return price

        if self.detect_free and declares_free_entry(soup):
            return Price.free()

        return None


_default_extractor = PriceExtractor()


def extract_price_from_text(text: str | None) -> str | None:
    """Extract a normalized price string ("250", "0") from text, or None."""
    price = _default_extractor.from_text(text)
    return price.to_storage() if price else None


def extract_price_from_markup(html: str | None) -> str | None:
    """Extract a normalized price string from HTML, or None."""
    price = _default_extractor.from_markup(html)
    return price.to_storage() if price else None
