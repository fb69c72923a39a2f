"""Batch reconciliation pipeline for ticket URLs and prices.

Each run handles one concern (``ReconcileMode``):
- URLS: replace aggregator ticket URLs via the venue registry / source page
- LINKS: read aggregator detail pages and take the ticket link they advertise
- PRICES: fill unknown prices from stored text or the event's web page
- RESET_FREE: turn unverified "free" prices back into unknown

Flow:
1. Read the working set from the event store (a failure aborts the run)
2. Compute a candidate value per row, strictly one row at a time
3. Write only genuine changes, one update per row
4. Report counts: already ok / fixed / unresolved / failed

Rows that already hold a good value are left alone, so a second run over
the same data performs no writes.

Usage:
    from src.core.pipeline import ReconcileConfig, ReconcileMode, ReconciliationPipeline

    config = ReconcileConfig(mode=ReconcileMode.URLS, dry_run=True)
    pipeline = ReconciliationPipeline(config, store, registry)
    report = await pipeline.run()
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from src.core.event_model import EventRecord, Price
from src.core.exceptions import ConfigurationError, RowUpdateError, StoreUnavailableError
from src.core.fetcher import PageFetcher
from src.core.price_extractor import PriceExtractor
from src.core.supabase_client import EventQuery, EventStore
from src.core.url_classifier import UrlClassification, UrlClassifier
from src.core.url_resolver import TicketUrlResolver, extract_ticket_link
from src.core.venue_registry import VenueRegistry
from src.logging import get_logger, log_run
from src.utils.text import truncate
from src.utils.urls import display_domain

logger = get_logger(__name__)


class ReconcileMode(str, Enum):
    """Which field a run repairs."""

    URLS = "urls"
    LINKS = "links"
    PRICES = "prices"
    RESET_FREE = "reset_free"


class RowOutcome(str, Enum):
    """Per-row result of a run."""

    ALREADY_OK = "already_ok"
    FIXED = "fixed"
    UNRESOLVED = "unresolved"
    FAILED = "failed"


@dataclass
class ReconcileConfig:
    """Configuration for a reconciliation run."""

    mode: ReconcileMode
    sources: tuple[str, ...] = ()
    limit: int | None = None  # None = all matching rows
    dry_run: bool = False
    fetch_pages: bool = True  # PRICES: fetch ticket/source pages when stored text has no price
    detect_free: bool = False  # PRICES: accept explicit "gratis inngang" wording as free
    ticket_url_like: str | None = None  # extra ilike filter on ticket_url

    @property
    def needs_fetcher(self) -> bool:
        """Whether this run reads web pages."""
        if self.mode is ReconcileMode.LINKS:
            return True
        return self.mode is ReconcileMode.PRICES and self.fetch_pages

    def build_query(self) -> EventQuery:
        """Row selection for this run's mode."""
        price = None
        if self.mode is ReconcileMode.PRICES:
            price = ""
        elif self.mode is ReconcileMode.RESET_FREE:
            price = "0"

        return EventQuery(
            sources=tuple(self.sources),
            price=price,
            ticket_url_like=self.ticket_url_like,
            order_by="date_start",
            limit=self.limit,
        )


@dataclass
class RowChange:
    """A single field change (written, or proposed in dry run)."""

    event_id: str
    title: str
    field: str
    old_value: str | None
    new_value: str | None


@dataclass
class ReconcileReport:
    """Result of a reconciliation run."""

    mode: ReconcileMode

    # Counts
    total: int = 0
    already_ok: int = 0
    fixed: int = 0
    unresolved: int = 0
    failed: int = 0

    changes: list[RowChange] = field(default_factory=list)
    failed_ids: list[str] = field(default_factory=list)

    # Status
    success: bool = True
    error: str | None = None
    dry_run: bool = False

    # Timing
    duration_seconds: float = 0.0

    def record(self, outcome: RowOutcome) -> None:
        if outcome is RowOutcome.ALREADY_OK:
            self.already_ok += 1
        elif outcome is RowOutcome.FIXED:
            self.fixed += 1
        elif outcome is RowOutcome.UNRESOLVED:
            self.unresolved += 1
        else:
            self.failed += 1

    @property
    def writes(self) -> int:
        """Number of rows actually written."""
        return 0 if self.dry_run else self.fixed


class ReconciliationPipeline:
    """Run one reconciliation pass over a working set of events."""

    def __init__(
        self,
        config: ReconcileConfig,
        store: EventStore,
        registry: VenueRegistry,
        fetcher: PageFetcher | None = None,
        classifier: UrlClassifier | None = None,
        extractor: PriceExtractor | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.registry = registry
        self.fetcher = fetcher
        self.classifier = classifier or UrlClassifier()
        self.resolver = TicketUrlResolver(registry, self.classifier)
        self.extractor = extractor or PriceExtractor(detect_free=config.detect_free)

        if config.needs_fetcher and fetcher is None:
            raise ConfigurationError(f"Mode {config.mode.value} needs a page fetcher")
        if config.mode is ReconcileMode.RESET_FREE and not config.sources:
            raise ConfigurationError("reset_free runs must be limited to explicit sources")

    async def run(self) -> ReconcileReport:
        """Execute the run.

        Returns:
            ReconcileReport with counts and changes. ``success`` is False only
            when the initial read failed, in which case nothing was written.
        """
        start_time = datetime.now()
        report = ReconcileReport(mode=self.config.mode, dry_run=self.config.dry_run)

        with log_run(
            mode=self.config.mode.value,
            dry_run=self.config.dry_run,
            sources=",".join(self.config.sources) or "*",
        ):
            try:
                records = await self.store.fetch_events(self.config.build_query())
            except StoreUnavailableError as e:
                logger.error("reconcile_aborted", error=str(e))
                report.success = False
                report.error = str(e)
                report.duration_seconds = (datetime.now() - start_time).total_seconds()
                return report

            report.total = len(records)
            logger.info("reconcile_start", rows=report.total)

            for index, record in enumerate(records, start=1):
                outcome = await self._process(record, report)
                report.record(outcome)

                if index % 50 == 0:
                    logger.info(
                        "reconcile_progress",
                        done=index,
                        total=report.total,
                        fixed=report.fixed,
                    )

            report.duration_seconds = (datetime.now() - start_time).total_seconds()
            logger.info(
                "reconcile_complete",
                total=report.total,
                already_ok=report.already_ok,
                fixed=report.fixed,
                unresolved=report.unresolved,
                failed=report.failed,
                duration=round(report.duration_seconds, 2),
            )

        return report

    # ==========================================
    # Per-row processing
    # ==========================================

    async def _process(self, record: EventRecord, report: ReconcileReport) -> RowOutcome:
        mode = self.config.mode
        if mode is ReconcileMode.URLS:
            return await self._fix_ticket_url(record, report)
        if mode is ReconcileMode.LINKS:
            return await self._discover_ticket_link(record, report)
        if mode is ReconcileMode.PRICES:
            return await self._fix_price(record, report)
        return await self._reset_free(record, report)

    async def _fix_ticket_url(self, record: EventRecord, report: ReconcileReport) -> RowOutcome:
        if not self.classifier.is_aggregator(record.ticket_url):
            return RowOutcome.ALREADY_OK

        new_url = self.resolver.resolve(record.venue_name, record.ticket_url, record.source_url)
        if new_url is None:
            logger.debug(
                "ticket_url_unresolved",
                event_id=record.id,
                venue=record.venue_name,
                domain=display_domain(record.ticket_url),
            )
            return RowOutcome.UNRESOLVED

        return await self._apply(record, "ticket_url", record.ticket_url, new_url, report)

    async def _discover_ticket_link(self, record: EventRecord, report: ReconcileReport) -> RowOutcome:
        if not self.classifier.is_aggregator(record.ticket_url):
            return RowOutcome.ALREADY_OK

        page_url = record.source_url or record.ticket_url
        html = await self.fetcher.fetch(page_url)
        if html is None:
            return RowOutcome.UNRESOLVED

        link = extract_ticket_link(html, page_url, self.classifier)
        if not link or link == record.ticket_url:
            return RowOutcome.UNRESOLVED

        return await self._apply(record, "ticket_url", record.ticket_url, link, report)

    async def _fix_price(self, record: EventRecord, report: ReconcileReport) -> RowOutcome:
        if not record.price.is_unknown:
            return RowOutcome.ALREADY_OK

        price = self.extractor.from_text(record.description)

        if price is None and self.config.fetch_pages:
            page_url = self._price_page_url(record)
            if page_url:
                html = await self.fetcher.fetch(page_url)
                if html is not None:
                    price = self.extractor.from_markup(html)

        if price is None or price == record.price:
            return RowOutcome.UNRESOLVED

        return await self._apply(
            record, "price", record.price.to_storage(), price.to_storage(), report
        )

    async def _reset_free(self, record: EventRecord, report: ReconcileReport) -> RowOutcome:
        if not record.price.is_free:
            return RowOutcome.ALREADY_OK
        return await self._apply(
            record, "price", record.price.to_storage(), Price.unknown().to_storage(), report
        )

    def _price_page_url(self, record: EventRecord) -> str | None:
        """Pick the page most likely to state a price.

        A ticket platform page first, then the source page, then a direct
        (venue) ticket link. Aggregator ticket links are not fetched.
        """
        ticket_kind = self.classifier.classify(record.ticket_url)
        if ticket_kind is UrlClassification.TICKET_PLATFORM:
            return record.ticket_url
        if record.source_url:
            return record.source_url
        if ticket_kind is UrlClassification.DIRECT:
            return record.ticket_url
        return None

    async def _apply(
        self,
        record: EventRecord,
        field_name: str,
        old_value: str | None,
        new_value: str | None,
        report: ReconcileReport,
    ) -> RowOutcome:
        """Persist one field change (unless dry run) and log it."""
        if new_value == old_value:
            return RowOutcome.UNRESOLVED

        change = RowChange(
            event_id=record.id,
            title=record.title,
            field=field_name,
            old_value=old_value,
            new_value=new_value,
        )

        if not self.config.dry_run:
            try:
                await self.store.update_event(record.id, {field_name: new_value})
            except RowUpdateError as e:
                logger.error(
                    "row_update_failed",
                    event_id=record.id,
                    field=field_name,
                    error=str(e),
                )
                report.failed_ids.append(record.id)
                return RowOutcome.FAILED

        report.changes.append(change)
        logger.info(
            "row_fixed" if not self.config.dry_run else "row_would_fix",
            event_id=record.id,
            title=truncate(record.title),
            field=field_name,
            old=old_value,
            new=new_value,
        )
        return RowOutcome.FIXED
