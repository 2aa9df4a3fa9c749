"""Content monitors registry."""

from ..content.base import ContentType
from ..sources.base import ConfigResolver, CrawlerFactory
from .base import ContentMonitor
from .publication import PublicationMonitor, compare_publications, sort_publications
from .roundup import RoundupMonitor
from .video import VideoMonitor

__all__ = [
    "ContentMonitor",
    "PublicationMonitor",
    "RoundupMonitor",
    "VideoMonitor",
    "compare_publications",
    "create_monitor",
    "sort_publications",
]

# Registered monitor classes
_MONITORS: list[type[ContentMonitor]] = [
    VideoMonitor,
    RoundupMonitor,
    PublicationMonitor,
]


def create_monitor(
    content_type: ContentType | str,
    code: str,
    name: str,
    resolver: ConfigResolver,
    crawler_factory: CrawlerFactory,
) -> ContentMonitor:
    """Create the monitor that handles a content type.

    Args:
        content_type: Content type, or its snapshot tag (e.g. "videos").
        code: Organisation code.
        name: Source name.
        resolver: Lookup for the organisation's source configuration.
        crawler_factory: Builds a crawler for a resolved source.

    Returns:
        A monitor of the class registered for the content type.

    Raises:
        ValueError: If no monitor handles the content type.
    """
    if isinstance(content_type, str):
        content_type = ContentType.from_tag(content_type)

    for monitor_cls in _MONITORS:
        if content_type in monitor_cls.content_types:
            return monitor_cls(code, name, resolver, crawler_factory, content_type)
    raise ValueError(f"No monitor registered for content type: {content_type.name}")
