"""Video channel monitor."""

from collections.abc import Iterable
from dataclasses import replace
from typing import Any

import structlog

from ..content.base import ContentItem, ContentType
from ..errors import MonitorError
from ..sources.base import ConfigResolver, Crawler, CrawlerFactory, SourceConfig
from .base import ContentMonitor

log = structlog.get_logger()

CHANNEL_ID = "channel-id"

# Appended to the title of subscribed videos missing from the channel listing
UNLISTED_SUFFIX = " **UNLISTED**"


class VideoMonitor(ContentMonitor):
    """Monitors a video channel.

    Besides the crawled listing, a video monitor receives videos pushed by a
    subscription feed. These are buffered until the next successful check,
    which merges in the ones the listing does not show (unlisted videos) and
    then empties the buffer.

    When detail lookups are cached, videos whose duration is still zero have
    not really gone live yet and are left out of the snapshot.
    """

    content_types = (ContentType.VIDEO,)
    tracks_keywords = True

    def __init__(
        self,
        code: str,
        name: str,
        resolver: ConfigResolver,
        crawler_factory: CrawlerFactory,
        content_type: ContentType | None = None,
    ) -> None:
        super().__init__(code, name, resolver, crawler_factory, content_type)
        self.channel_id = ""
        self._subscribed: list[ContentItem] = []

    @property
    def subscribed_content(self) -> list[ContentItem]:
        """Subscribed videos waiting for the next check."""
        return list(self._subscribed)

    @property
    def subscribed_count(self) -> int:
        """Number of subscribed videos waiting for the next check."""
        return len(self._subscribed)

    def add_subscribed_content(self, item: ContentItem) -> None:
        """Buffer a video received from the subscription feed."""
        self._subscribed.append(item)

    def clear_subscribed_content(self) -> None:
        """Drop all buffered subscribed videos."""
        self._subscribed.clear()

    def _post_process(
        self,
        teasers: list[ContentItem],
        crawler: Crawler,
        use_cache: bool,
        debug: bool,
    ) -> list[ContentItem]:
        if debug:
            log.info(
                "video_monitor_content",
                monitor=self.guid,
                teasers=len(teasers),
                subscribed=len(self._subscribed),
            )

        items = self._merge_subscribed(teasers, debug)
        if use_cache and items:
            items = self._remove_future(items, crawler, debug)
        return items

    def _merge_subscribed(
        self, teasers: list[ContentItem], debug: bool
    ) -> list[ContentItem]:
        """Put subscribed videos missing from the listing at the front."""
        items = list(teasers)
        if not self._subscribed:
            return items

        crawled = {teaser.item_id for teaser in teasers}
        for video in self._subscribed:
            if video.item_id in crawled:
                continue
            items.insert(0, replace(video, title=video.title + UNLISTED_SUFFIX))
            if debug:
                log.info("video_unlisted_added", monitor=self.guid, video=video.item_id)
        return items

    def _remove_future(
        self, items: Iterable[ContentItem], crawler: Crawler, debug: bool
    ) -> list[ContentItem]:
        """Drop videos whose resolved duration is zero."""
        kept = []
        for item in items:
            try:
                details = crawler.resolve_details(item.item_id)
            except (MonitorError, OSError) as e:
                log.warning(
                    "video_details_failed",
                    monitor=self.guid,
                    video=item.item_id,
                    error=str(e),
                )
                details = None

            if details is not None and details.duration == 0:
                if debug:
                    log.info("video_future_removed", monitor=self.guid, video=item.item_id)
                continue
            kept.append(item)
        return kept

    def _refresh(self, source: SourceConfig, title: str | None) -> None:
        super()._refresh(source, title)
        self.channel_id = source.channel_id
        # The buffer has been merged into this check's snapshot
        self.clear_subscribed_content()

    def to_attributes(self) -> dict[str, Any]:
        attributes = super().to_attributes()
        attributes[CHANNEL_ID] = self.channel_id
        return attributes

    def from_attributes(self, attributes: dict[str, Any]) -> None:
        super().from_attributes(attributes)
        self.channel_id = attributes.get(CHANNEL_ID, "")
