"""Snapshots of a monitored listing and comparison between them."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import orjson
import structlog

from ..errors import AbnormalDecreaseError
from .base import ContentItem, ContentType

log = structlog.get_logger()

COUNT = "count"
TITLE = "title"
PUBLISHED_DATE = "published-date"
URL = "url"
VIDEO_ID = "video-id"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _format_date(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(DATE_FORMAT)


def _parse_date(value: str) -> datetime | None:
    if not value:
        return None
    return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class ContentSnapshot:
    """The ordered set of content items produced by one monitor check."""

    content_type: ContentType
    items: tuple[ContentItem, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but always store an immutable sequence
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def count(self) -> int:
        """Number of items in the snapshot."""
        return len(self.items)

    def is_empty(self) -> bool:
        """Check if the snapshot holds no items."""
        return not self.items

    def identify(self, item: ContentItem) -> str:
        """Key used to match an item across snapshots."""
        if self.content_type is ContentType.VIDEO:
            return item.item_id
        return item.url

    def to_dict(self) -> dict[str, Any]:
        """Convert to the serialized snapshot layout.

        Returns:
            Dict keyed by the content type tag, plus the item count.
        """
        return {
            self.content_type.tag: [self._item_to_dict(item) for item in self.items],
            COUNT: self.count,
        }

    def to_json(self) -> str:
        """Serialize to a JSON string."""
        return orjson.dumps(self.to_dict()).decode("utf-8")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentSnapshot":
        """Rebuild a snapshot from its serialized layout.

        Raises:
            ValueError: If the data has no recognised content type key.
        """
        for key, value in data.items():
            if isinstance(value, list):
                content_type = ContentType.from_tag(key)
                items = [cls._item_from_dict(content_type, obj) for obj in value]
                return cls(content_type, items)
        raise ValueError("Snapshot has no content type key")

    @classmethod
    def from_json(cls, text: str | bytes) -> "ContentSnapshot":
        """Deserialize a snapshot from JSON."""
        return cls.from_dict(orjson.loads(text))

    def format(self) -> str:
        """Render items as key=value blocks for a textual diff.

        An item without a date gets an empty date line so that the blocks of
        two snapshots stay aligned.
        """
        blocks = []
        for item in self.items:
            obj = self._item_to_dict(item)
            obj.setdefault(PUBLISHED_DATE, "")
            blocks.append("".join(f"{key}={value}\n" for key, value in obj.items()))
        return "\n".join(blocks)

    def _item_to_dict(self, item: ContentItem) -> dict[str, str]:
        obj = {TITLE: item.title}
        if item.published_at is not None:
            obj[PUBLISHED_DATE] = _format_date(item.published_at)
        if self.content_type is ContentType.VIDEO:
            obj[VIDEO_ID] = item.item_id
        else:
            obj[URL] = item.url
        return obj

    @staticmethod
    def _item_from_dict(content_type: ContentType, obj: dict[str, str]) -> ContentItem:
        return ContentItem(
            title=obj.get(TITLE, ""),
            item_id=obj.get(VIDEO_ID, "") if content_type is ContentType.VIDEO else "",
            published_at=_parse_date(obj.get(PUBLISHED_DATE, "")),
            url=obj.get(URL, ""),
        )


def compare_snapshots(
    current: ContentSnapshot,
    latest: ContentSnapshot,
    check_decrease: bool = True,
    threshold: float = 50.0,
) -> ContentSnapshot:
    """Find the items in the latest snapshot that are new or changed.

    An item of ``latest`` is reported when either its title or its
    identifier (video id for videos, url otherwise) does not appear in
    ``current``.

    Args:
        current: The previously stored snapshot.
        latest: The snapshot produced by the latest check.
        check_decrease: Whether to reject a sharp drop in item count.
        threshold: Maximum tolerated drop, as a percentage.

    Returns:
        A snapshot of the differing items, in ``latest`` order.

    Raises:
        AbnormalDecreaseError: If the item count fell by more than threshold.
    """
    decrease = 0.0
    if latest.count < current.count:
        decrease = (current.count - latest.count) / current.count * 100.0
    if check_decrease and decrease > threshold:
        raise AbnormalDecreaseError(decrease)

    titles = {item.title for item in current.items}
    ids = {current.identify(item) for item in current.items}

    changed: list[ContentItem] = []
    for item in latest.items:
        if item.title in titles and latest.identify(item) in ids:
            continue
        if item not in changed:
            changed.append(item)

    log.debug(
        "snapshot_compared",
        content_type=latest.content_type.tag,
        current=current.count,
        latest=latest.count,
        changed=len(changed),
    )
    return ContentSnapshot(latest.content_type, changed)

