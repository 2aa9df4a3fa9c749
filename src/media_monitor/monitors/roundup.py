"""Roundup page monitor."""

from ..content.base import ContentItem, ContentType
from ..content.snapshot import ContentSnapshot
from ..sources.base import Crawler
from .base import ContentMonitor
from .publication import sort_publications


class RoundupMonitor(ContentMonitor):
    """Monitors a page of roundup posts.

    Posts are ordered like publications. The page keywords are kept on the
    monitor, and detail lookups are never served from the crawler cache.
    """

    content_types = (ContentType.ROUNDUP,)
    tracks_keywords = True

    def check(
        self, max_results: int, use_cache: bool = False, debug: bool = False
    ) -> ContentSnapshot:
        return super().check(max_results, use_cache=False, debug=debug)

    def _post_process(
        self,
        teasers: list[ContentItem],
        crawler: Crawler,
        use_cache: bool,
        debug: bool,
    ) -> list[ContentItem]:
        return sort_publications(teasers)
