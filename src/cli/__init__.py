"""Unified CLI for Gaari reconciliation jobs.

Usage:
    python -m src.cli [command] [options]

Commands:
    fix-urls            Replace aggregator ticket URLs
    discover-links      Follow aggregator pages to their ticket link
    fix-prices          Fill unknown prices
    reset-free          Reset unverified free prices
    audit-aggregators   List venues still on aggregator URLs
    classify            Classify a URL
    lookup-venue        Look up a venue website
"""

from src.cli.main import app

__all__ = ["app"]
