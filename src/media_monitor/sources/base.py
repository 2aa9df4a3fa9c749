"""Source configuration and the protocols monitors depend on."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ..content.base import ContentItem, ContentType


@dataclass(frozen=True)
class SourceConfig:
    """A page or channel configured for an organisation."""

    name: str
    url: str = ""
    sites: frozenset[str] = field(default_factory=frozenset)
    keywords: frozenset[str] = field(default_factory=frozenset)
    channel_id: str = ""


@runtime_checkable
class Crawler(Protocol):
    """Protocol for crawlers scoped to a single source.

    A crawler is created for one check and must be closed afterwards,
    whatever the outcome of the check.
    """

    title: str | None

    def fetch_teasers(self, max_results: int, use_cache: bool) -> list[ContentItem]:
        """Fetch the teasers currently listed by the source.

        Args:
            max_results: Maximum number of teasers to return.
            use_cache: Whether previously fetched detail lookups may be reused.

        Returns:
            Teasers in crawl order, possibly fewer than max_results.

        Raises:
            FetchError: If the listing cannot be retrieved or parsed.
        """
        ...

    def resolve_details(self, item_id: str) -> ContentItem | None:
        """Resolve the full details of a single item.

        Args:
            item_id: Source-specific identifier of the item.

        Returns:
            The resolved item, or None if the source has no details for it.

        Raises:
            DetailResolutionError: If the lookup fails.
        """
        ...

    def close(self) -> None:
        """Release connections and other resources held by the crawler."""
        ...


# Builds a crawler for a resolved source, bounded by max_results
CrawlerFactory = Callable[[SourceConfig, int], Crawler]


@runtime_checkable
class ConfigResolver(Protocol):
    """Protocol for read-only lookup of configured sources."""

    def resolve(
        self, code: str, content_type: ContentType, name: str
    ) -> SourceConfig | None:
        """Find the source named for an organisation and content type.

        Returns:
            The source configuration, or None if it no longer exists.
        """
        ...
