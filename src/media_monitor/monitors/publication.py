"""Publication monitor and the ordering rule for dated listings."""

from collections.abc import Iterable
from functools import cmp_to_key

import structlog

from ..content.base import ContentItem, ContentType, has_published_date
from ..sources.base import Crawler
from .base import ContentMonitor

log = structlog.get_logger()


def compare_publications(first: ContentItem, second: ContentItem) -> int:
    """Order two teasers, most recent first.

    Equal dates are ordered by title. An unknown (zero) date always sorts
    after a known one, whichever side it is on.

    Returns:
        A negative number if ``first`` sorts before ``second``, a positive
        number if after, 0 if they are equivalent.
    """
    first_millis = first.published_millis
    second_millis = second.published_millis

    if first_millis == second_millis:
        return (first.title > second.title) - (first.title < second.title)
    if first_millis == 0:
        return 1
    if second_millis == 0:
        return -1
    return -1 if first_millis > second_millis else 1


def sort_publications(teasers: Iterable[ContentItem]) -> list[ContentItem]:
    """Sort teasers with compare_publications.

    A listing where no teaser has a date is returned in crawl order.
    """
    teasers = list(teasers)
    if not has_published_date(teasers):
        return teasers
    return sorted(teasers, key=cmp_to_key(compare_publications))


class PublicationMonitor(ContentMonitor):
    """Monitors a listing page of white papers or ebooks."""

    content_types = (ContentType.WHITE_PAPER, ContentType.EBOOK)

    def _post_process(
        self,
        teasers: list[ContentItem],
        crawler: Crawler,
        use_cache: bool,
        debug: bool,
    ) -> list[ContentItem]:
        return sort_publications(teasers)
