"""Base class for content monitors and the check cycle they share."""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

import structlog

from ..content.base import ContentItem, ContentType
from ..content.snapshot import ContentSnapshot, compare_snapshots
from ..errors import ConfigurationMissingError
from ..sources.base import ConfigResolver, Crawler, CrawlerFactory, SourceConfig

log = structlog.get_logger()

# Attribute keys used by to_attributes() / from_attributes()
CONTENT_TYPE = "content-type"
URL = "url"
TITLE = "title"
SITES = "sites"
KEYWORDS = "keywords"
EXECUTED_DATE = "executed-date"
SUCCESS_DATE = "success-date"
EXECUTION_TIME = "execution-time"
ERROR_MESSAGE = "error-message"


def _to_millis(value: datetime | None) -> int:
    return int(value.timestamp() * 1000) if value is not None else 0


def _from_millis(value: int) -> datetime | None:
    if value > 0:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    return None


class ContentMonitor:
    """Tracks one page or channel of an organisation.

    Subclasses declare the content types they handle and override
    ``_post_process`` and ``_refresh`` for their source-specific rules. The
    source configuration and crawlers are supplied by the injected resolver
    and crawler factory.

    A monitor is not safe for concurrent checks; callers must run at most
    one check per monitor at a time (see MonitorRunner).
    """

    # Content types handled by the class; the first is the default
    content_types: tuple[ContentType, ...] = ()

    # Whether the monitor keeps the keywords of its source
    tracks_keywords: bool = False

    def __init__(
        self,
        code: str,
        name: str,
        resolver: ConfigResolver,
        crawler_factory: CrawlerFactory,
        content_type: ContentType | None = None,
    ) -> None:
        """Initialize a monitor.

        Args:
            code: Organisation code.
            name: Source name, unique within the code and content type.
            resolver: Lookup for the organisation's source configuration.
            crawler_factory: Builds a crawler for a resolved source.
            content_type: Content type; defaults to the class's first type.

        Raises:
            ValueError: If the content type is missing or not handled.
        """
        if content_type is None:
            if not self.content_types:
                raise ValueError("A content type is required")
            content_type = self.content_types[0]
        if self.content_types and content_type not in self.content_types:
            raise ValueError(
                f"{type(self).__name__} does not handle content type {content_type.name}"
            )

        self.code = code
        self.name = name
        self.content_type = content_type
        self._resolver = resolver
        self._crawler_factory = crawler_factory

        # Descriptive state, refreshed by each successful check
        self.title = ""
        self.url = ""
        self.sites: frozenset[str] = frozenset()
        self.keywords: frozenset[str] = frozenset()

        # Execution bookkeeping, maintained by MonitorRunner
        self.executed_at: datetime | None = None
        self.success_at: datetime | None = None
        self.execution_time_ms = -1
        self.error_message = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.guid!r})"

    @property
    def guid(self) -> str:
        """Identifier of the form <type code>-<organisation code>-<name>."""
        return f"{self.content_type.code}-{self.code}-{self.name}"

    def has_site(self, site_id: str) -> bool:
        """Check if the monitor targets a site (all sites when none are set)."""
        return not self.sites or site_id in self.sites

    def check(
        self, max_results: int, use_cache: bool = False, debug: bool = False
    ) -> ContentSnapshot:
        """Run one polling cycle against the monitored source.

        Args:
            max_results: Maximum number of teasers the crawler should return.
            use_cache: Allow the crawler to reuse previous detail lookups.
            debug: Log verbose diagnostics.

        Returns:
            A snapshot of the current content of the source.

        Raises:
            ConfigurationMissingError: If the source is no longer configured.
            Exception: Whatever the crawler raises, propagated unchanged.
        """
        source = self._resolver.resolve(self.code, self.content_type, self.name)
        if source is None:
            log.debug("monitor_source_missing", monitor=self.guid)
            raise ConfigurationMissingError(self.code, self.content_type.tag, self.name)

        crawler = self._crawler_factory(source, max_results)
        try:
            teasers = list(crawler.fetch_teasers(max_results, use_cache))
            if debug:
                log.info("monitor_teasers_found", monitor=self.guid, teasers=len(teasers))

            items = self._post_process(teasers, crawler, use_cache, debug)
            snapshot = ContentSnapshot(self.content_type, items)
            title = crawler.title
        finally:
            crawler.close()

        # Only update the monitor once the crawler has been released
        self._refresh(source, title)

        log.info("monitor_checked", monitor=self.guid, items=snapshot.count)
        return snapshot

    def _post_process(
        self,
        teasers: list[ContentItem],
        crawler: Crawler,
        use_cache: bool,
        debug: bool,
    ) -> list[ContentItem]:
        """Apply source-specific rules to the crawled teasers."""
        return teasers

    def _refresh(self, source: SourceConfig, title: str | None) -> None:
        """Update the descriptive fields after a successful check.

        Args:
            source: The resolved source configuration.
            title: Title reported by the crawler, None when it found none.
        """
        if title is not None:
            self.title = title
        self.url = source.url
        self.sites = frozenset(source.sites)
        if self.tracks_keywords:
            self.keywords = frozenset(source.keywords)

    def compare_snapshot(
        self,
        previous: ContentSnapshot,
        latest: ContentSnapshot,
        threshold: float = 50.0,
    ) -> ContentSnapshot:
        """Find the new or changed items between two snapshots of this monitor.

        The abnormal decrease check is skipped for video monitors.
        """
        return compare_snapshots(
            previous,
            latest,
            check_decrease=self.content_type is not ContentType.VIDEO,
            threshold=threshold,
        )

    def to_attributes(self) -> dict[str, Any]:
        """Export the monitor state for a storage layer."""
        return {
            CONTENT_TYPE: self.content_type.name,
            URL: self.url,
            TITLE: self.title,
            SITES: sorted(self.sites),
            KEYWORDS: sorted(self.keywords),
            EXECUTED_DATE: _to_millis(self.executed_at),
            SUCCESS_DATE: _to_millis(self.success_at),
            EXECUTION_TIME: self.execution_time_ms,
            ERROR_MESSAGE: self.error_message,
        }

    def from_attributes(self, attributes: dict[str, Any]) -> None:
        """Restore monitor state exported by to_attributes().

        The content type is part of the monitor identity and is not changed.
        """
        self.url = attributes.get(URL, "")
        self.title = attributes.get(TITLE, "")
        self.sites = _frozen(attributes.get(SITES, ()))
        self.keywords = _frozen(attributes.get(KEYWORDS, ()))
        self.executed_at = _from_millis(attributes.get(EXECUTED_DATE, 0))
        self.success_at = _from_millis(attributes.get(SUCCESS_DATE, 0))
        self.execution_time_ms = attributes.get(EXECUTION_TIME, -1)
        self.error_message = attributes.get(ERROR_MESSAGE, "")


def _frozen(values: Iterable[str] | str) -> frozenset[str]:
    # Older stored state keeps lists as comma-separated strings
    if isinstance(values, str):
        values = [value.strip() for value in values.split(",")]
    return frozenset(value for value in values if value)
