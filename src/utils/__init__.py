"""Utility modules for the Gaari maintenance tools.

Provides shared utilities for:
- Text cleaning and lookup-key folding
- URL validation and host matching
"""

from src.utils.text import fold_key, normalize_whitespace, strip_diacritics, truncate
from src.utils.urls import (
    display_domain,
    host_matches,
    is_valid_url,
    make_absolute_url,
    normalize_host,
)

__all__ = [
    # Text
    "fold_key",
    "normalize_whitespace",
    "strip_diacritics",
    "truncate",
    # URLs
    "display_domain",
    "host_matches",
    "is_valid_url",
    "make_absolute_url",
    "normalize_host",
]
