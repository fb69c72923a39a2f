"""Venue registry: venue display name -> canonical website URL.

The registry is built once at process start (from a JSON file or the
built-in table) and passed by reference to the resolver and the pipeline.
It is read-only after construction.

Usage:
    from src.core.venue_registry import load_venue_registry

    registry = load_venue_registry()
    registry.lookup("USF Verftet")   # "https://usf.no"
    registry.lookup("Unknown pub")   # None
"""

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from src.core.exceptions import InvalidVenueRegistryError
from src.logging import get_logger
from src.utils.text import fold_key
from src.utils.urls import is_valid_url

logger = get_logger(__name__)


def normalize_venue_name(name: str | None) -> str:
    """Normalize a venue name into its registry key.

    Trims, collapses whitespace, case-folds and strips diacritics, so
    "  Åsane  Bibliotek" and "asane bibliotek" share a key.
    """
    return fold_key(name)


@dataclass(frozen=True)
class VenueEntry:
    """A venue and its own website."""

    name: str
    canonical_url: str


class VenueRegistry:
    """Immutable lookup table of venue websites keyed by normalized name."""

    def __init__(self, entries: Mapping[str, VenueEntry]) -> None:
        self._entries: Mapping[str, VenueEntry] = MappingProxyType(dict(entries))

    @classmethod
    def from_mapping(cls, table: Mapping[str, str], origin: str | None = None) -> "VenueRegistry":
        """Build a registry from a name -> URL mapping.

        Args:
            table: Venue display name -> absolute website URL
            origin: Where the table came from (file path), for error messages

        Raises:
            InvalidVenueRegistryError: On a non-http URL, an empty name, or
                two names that normalize to the same key with different URLs
        """
        entries: dict[str, VenueEntry] = {}

        for name, url in table.items():
            key = normalize_venue_name(name)
            if not key:
                raise InvalidVenueRegistryError("Empty venue name", venue=name, path=origin)
            if not isinstance(url, str) or not is_valid_url(url):
                raise InvalidVenueRegistryError(
                    f"Invalid URL for venue {name!r}: {url!r}", venue=name, path=origin
                )

            url = url.strip()
            existing = entries.get(key)
            if existing and existing.canonical_url != url:
                raise InvalidVenueRegistryError(
                    f"Venue {name!r} collides with {existing.name!r} "
                    f"({existing.canonical_url} vs {url})",
                    venue=name,
                    path=origin,
                )
            if not existing:
                entries[key] = VenueEntry(name=name.strip(), canonical_url=url)

        return cls(entries)

    def get(self, venue_name: str | None) -> VenueEntry | None:
        """Get the entry for a venue name (exact normalized match)."""
        key = normalize_venue_name(venue_name)
        if not key:
            return None
        return self._entries.get(key)

    def lookup(self, venue_name: str | None) -> str | None:
        """Get a venue's canonical URL, or None when the venue is unknown."""
        entry = self.get(venue_name)
        return entry.canonical_url if entry else None

    def __contains__(self, venue_name: object) -> bool:
        return isinstance(venue_name, str) and self.get(venue_name) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[VenueEntry]:
        return iter(self._entries.values())


def load_venue_registry(path: str | Path | None = None) -> VenueRegistry:
    """Load the venue registry from a JSON file or the built-in table.

    Args:
        path: JSON file holding an object of venue name -> URL. When None,
            the built-in Bergen table from ``src.config.venues`` is used.

    Raises:
        InvalidVenueRegistryError: If the file is missing, not JSON, not an
            object, or holds invalid entries
    """
    if path is None:
        from src.config.venues import VENUE_URLS

        registry = VenueRegistry.from_mapping(VENUE_URLS, origin="builtin")
        logger.debug("venue_registry_loaded", origin="builtin", venues=len(registry))
        return registry

    path = Path(path)
    try:
        table = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InvalidVenueRegistryError(f"Cannot read venue registry: {e}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise InvalidVenueRegistryError(f"Venue registry is not valid JSON: {e}", path=str(path)) from e

    if not isinstance(table, dict):
        raise InvalidVenueRegistryError(
            "Venue registry must be a JSON object of name -> URL", path=str(path)
        )

    registry = VenueRegistry.from_mapping(table, origin=str(path))
    logger.info("venue_registry_loaded", origin=str(path), venues=len(registry))
    return registry
