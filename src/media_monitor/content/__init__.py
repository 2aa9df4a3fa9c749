"""Content items and snapshots."""

from .base import ContentItem, ContentType, has_published_date
from .snapshot import ContentSnapshot, compare_snapshots

__all__ = [
    "ContentItem",
    "ContentSnapshot",
    "ContentType",
    "compare_snapshots",
    "has_published_date",
]
