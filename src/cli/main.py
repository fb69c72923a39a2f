"""Unified CLI for the Gaari ticket URL and price reconciliation jobs.

Usage:
    gaari fix-urls --dry-run
    gaari fix-urls --source visitbergen --limit 50
    gaari discover-links --source visitbergen
    gaari fix-prices --source bergenlive --no-fetch
    gaari reset-free --source bergenlive --source studentbergen
    gaari audit-aggregators
    gaari classify https://www.visitbergen.com/event/x
    gaari lookup-venue "USF Verftet"
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from src.config import get_settings
from src.core.audit import AggregatorVenueSummary, audit_aggregator_venues
from src.core.exceptions import ConfigurationError, InvalidVenueRegistryError, StoreUnavailableError
from src.core.fetcher import PageFetcher
from src.core.pipeline import (
    ReconcileConfig,
    ReconcileMode,
    ReconcileReport,
    ReconciliationPipeline,
)
from src.core.supabase_client import EventQuery, get_event_store
from src.core.url_classifier import UrlClassification, classify_url
from src.core.venue_registry import VenueRegistry, load_venue_registry
from src.logging import setup_logging
from src.utils.text import truncate

app = typer.Typer(
    name="gaari",
    help="Ticket URL and price reconciliation for Bergen events",
    add_completion=False,
)
console = Console()

SOURCE_OPTION = typer.Option(
    None,
    "--source", "-s",
    help="Limit to this source (repeatable)",
)
LIMIT_OPTION = typer.Option(
    None,
    "--limit", "-l",
    help="Max rows to process",
)
DRY_RUN_OPTION = typer.Option(
    False,
    "--dry-run",
    help="Report changes without writing to the database",
)
VENUES_OPTION = typer.Option(
    None,
    "--venues",
    help="JSON file of venue name -> website (overrides VENUE_REGISTRY_PATH)",
)

# Rows of the change table shown after a run
MAX_CHANGES_SHOWN = 30


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Debug logging",
    ),
):
    """Configure logging before any command runs."""
    settings = get_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
    )


def _load_registry(venues: Optional[Path]) -> VenueRegistry:
    path = venues or get_settings().venue_registry_path
    try:
        return load_venue_registry(path)
    except InvalidVenueRegistryError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


async def _execute(config: ReconcileConfig, registry: VenueRegistry) -> ReconcileReport:
    store = get_event_store()
    if config.needs_fetcher:
        async with PageFetcher.from_settings() as fetcher:
            return await ReconciliationPipeline(config, store, registry, fetcher=fetcher).run()
    return await ReconciliationPipeline(config, store, registry).run()


def run_reconcile(config: ReconcileConfig, venues: Optional[Path]) -> None:
    """Run one reconciliation pass and print its report.

    Exits with code 1 when the run could not start or aborted.
    """
    registry = _load_registry(venues)

    console.print()
    console.print(f"[bold blue]GAARI RECONCILE: {config.mode.value.upper()}[/bold blue]")
    console.print(
        f"Sources: {', '.join(config.sources) or 'all'}, "
        f"Limit: {config.limit or 'none'}, Venues: {len(registry)}"
    )
    if config.dry_run:
        console.print("[yellow]DRY RUN - no rows will be written[/yellow]")
    console.print()

    try:
        report = asyncio.run(_execute(config, registry))
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    print_summary(report)

    if not report.success:
        raise typer.Exit(1)


def print_summary(report: ReconcileReport) -> None:
    """Print the change table and final counts."""
    if report.changes:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Event")
        table.add_column("Field")
        table.add_column("Old")
        table.add_column("New")

        for change in report.changes[:MAX_CHANGES_SHOWN]:
            table.add_row(
                truncate(change.title, 40),
                change.field,
                truncate(change.old_value or "-", 45),
                truncate(change.new_value or "-", 45),
            )

        console.print(table)
        if len(report.changes) > MAX_CHANGES_SHOWN:
            console.print(f"  ... and {len(report.changes) - MAX_CHANGES_SHOWN} more")

    console.print()
    console.print("[bold blue]FINAL SUMMARY[/bold blue]")

    if not report.success:
        console.print(f"[red]ERROR[/red]: {report.error}")
        return

    fixed_label = "Would fix" if report.dry_run else "Fixed"
    console.print(
        f"[bold]TOTALS:[/bold] Rows: {report.total}, Already ok: {report.already_ok}, "
        f"{fixed_label}: {report.fixed}, Unresolved: {report.unresolved}, Failed: {report.failed}"
    )
    console.print(f"Duration: {report.duration_seconds:.1f}s")


@app.command("fix-urls")
def fix_urls(
    source: Optional[list[str]] = SOURCE_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    venues: Optional[Path] = VENUES_OPTION,
    url_pattern: Optional[str] = typer.Option(
        None,
        "--url-pattern",
        help="Only rows whose ticket_url matches this ilike pattern (e.g. %visitbergen%)",
    ),
):
    """Replace aggregator ticket URLs with venue or source links.

    Examples:
        gaari fix-urls --dry-run
        gaari fix-urls --source visitbergen --limit 50
    """
    config = ReconcileConfig(
        mode=ReconcileMode.URLS,
        sources=tuple(source or ()),
        limit=limit,
        dry_run=dry_run or get_settings().dry_run,
        ticket_url_like=url_pattern,
    )
    run_reconcile(config, venues)


@app.command("discover-links")
def discover_links(
    source: Optional[list[str]] = SOURCE_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    venues: Optional[Path] = VENUES_OPTION,
    url_pattern: Optional[str] = typer.Option(
        None,
        "--url-pattern",
        help="Only rows whose ticket_url matches this ilike pattern",
    ),
):
    """Follow aggregator pages to the ticket link they advertise.

    Examples:
        gaari discover-links --source visitbergen --dry-run
    """
    config = ReconcileConfig(
        mode=ReconcileMode.LINKS,
        sources=tuple(source or ()),
        limit=limit,
        dry_run=dry_run or get_settings().dry_run,
        ticket_url_like=url_pattern,
    )
    run_reconcile(config, venues)


@app.command("fix-prices")
def fix_prices(
    source: Optional[list[str]] = SOURCE_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    venues: Optional[Path] = VENUES_OPTION,
    no_fetch: bool = typer.Option(
        False,
        "--no-fetch",
        help="Only read prices from stored descriptions",
    ),
    detect_free: bool = typer.Option(
        False,
        "--detect-free",
        help="Accept explicit free-entry wording as a free price",
    ),
):
    """Fill unknown prices from descriptions and event pages.

    Examples:
        gaari fix-prices --source bergenlive --dry-run
        gaari fix-prices --no-fetch
    """
    config = ReconcileConfig(
        mode=ReconcileMode.PRICES,
        sources=tuple(source or ()),
        limit=limit,
        dry_run=dry_run or get_settings().dry_run,
        fetch_pages=not no_fetch,
        detect_free=detect_free,
    )
    run_reconcile(config, venues)


@app.command("reset-free")
def reset_free(
    source: Optional[list[str]] = SOURCE_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
):
    """Turn unverified "free" prices back into unknown.

    Requires at least one --source.

    Examples:
        gaari reset-free --source bergenlive --dry-run
    """
    if not source:
        console.print("[red]Error:[/red] Must specify at least one --source")
        raise typer.Exit(1)

    config = ReconcileConfig(
        mode=ReconcileMode.RESET_FREE,
        sources=tuple(source),
        limit=limit,
        dry_run=dry_run or get_settings().dry_run,
    )
    run_reconcile(config, None)


@app.command("audit-aggregators")
def audit_aggregators(
    source: Optional[list[str]] = SOURCE_OPTION,
    limit: Optional[int] = LIMIT_OPTION,
    venues: Optional[Path] = VENUES_OPTION,
):
    """List venues whose events still have aggregator ticket URLs.

    Examples:
        gaari audit-aggregators
        gaari audit-aggregators --source visitbergen
    """
    registry = _load_registry(venues)

    async def load():
        store = get_event_store()
        return await store.fetch_events(EventQuery(sources=tuple(source or ()), limit=limit))

    try:
        records = asyncio.run(load())
    except (ConfigurationError, StoreUnavailableError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    summaries = audit_aggregator_venues(records, registry)
    print_audit(summaries)


def print_audit(summaries: list[AggregatorVenueSummary]) -> None:
    """Print the aggregator audit table."""
    if not summaries:
        console.print("[green]No aggregator ticket URLs left[/green]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Venue")
    table.add_column("Events", justify="right")
    table.add_column("Sources")
    table.add_column("Domains")
    table.add_column("Registry")

    for s in summaries:
        table.add_row(
            truncate(s.venue_name, 40),
            str(s.count),
            ", ".join(sorted(s.sources)),
            ", ".join(sorted(s.domains)),
            "[green]yes[/green]" if s.in_registry else "[yellow]no[/yellow]",
        )

    console.print(table)
    missing = sum(1 for s in summaries if not s.in_registry)
    console.print()
    console.print(
        f"[bold]Total:[/bold] {sum(s.count for s in summaries)} events, "
        f"{len(summaries)} venues, {missing} without registry entry"
    )


@app.command()
def classify(url: str = typer.Argument(..., help="URL to classify")):
    """Show how a ticket URL is classified."""
    kind = classify_url(url)
    color = {
        UrlClassification.AGGREGATOR: "red",
        UrlClassification.TICKET_PLATFORM: "green",
        UrlClassification.DIRECT: "cyan",
    }.get(kind, "yellow")
    console.print(f"[{color}]{kind.value}[/{color}]")


@app.command("lookup-venue")
def lookup_venue(
    name: str = typer.Argument(..., help="Venue name"),
    venues: Optional[Path] = VENUES_OPTION,
):
    """Look up a venue's website in the registry."""
    registry = _load_registry(venues)
    entry = registry.get(name)
    if entry is None:
        console.print(f"[yellow]Not in registry:[/yellow] {name}")
        raise typer.Exit(1)
    console.print(f"{entry.name}: {entry.canonical_url}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
