"""Content types and the teaser dataclass shared by crawlers and monitors."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class ContentType(Enum):
    """Types of content a monitor can track.

    Each member carries a short code used in monitor GUIDs and the tag used
    as the item key in serialized snapshots.
    """

    VIDEO = ("VID", "videos")
    ROUNDUP = ("RND", "roundups")
    WHITE_PAPER = ("WPR", "white-papers")
    EBOOK = ("EBK", "ebooks")

    def __init__(self, code: str, tag: str) -> None:
        self.code = code
        self.tag = tag

    @property
    def is_publication(self) -> bool:
        """True for downloadable publication types."""
        return self in (ContentType.WHITE_PAPER, ContentType.EBOOK)

    @classmethod
    def from_tag(cls, tag: str) -> "ContentType":
        """Look up a content type by its snapshot tag.

        Raises:
            ValueError: If no content type uses the tag.
        """
        for member in cls:
            if member.tag == tag:
                return member
        raise ValueError(f"Unknown content type tag: {tag}")


@dataclass
class ContentItem:
    """A content item as returned by a crawl (a teaser).

    ``duration`` is in seconds: -1 when details were never resolved, 0 when
    the provider does not know it yet (the video is not really live).
    """

    title: str
    item_id: str = ""
    published_at: datetime | None = None
    url: str = ""
    duration: int = -1

    @property
    def published_millis(self) -> int:
        """Published date as epoch milliseconds, 0 when unknown."""
        if self.published_at is None:
            return 0
        published_at = self.published_at
        if published_at.tzinfo is None:
            published_at = published_at.replace(tzinfo=timezone.utc)
        return int(published_at.timestamp() * 1000)


def has_published_date(items: Iterable[ContentItem]) -> bool:
    """Check if at least one item carries a known published date."""
    return any(item.published_millis != 0 for item in items)
