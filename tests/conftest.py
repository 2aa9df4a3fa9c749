"""Shared pytest fixtures."""

from datetime import datetime, timezone

import pytest


def make_item(title="Item", item_id="", millis=0, url="", duration=-1):
    """Create a ContentItem with the published date given in epoch millis."""
    from media_monitor.content.base import ContentItem

    published_at = None
    if millis:
        published_at = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    return ContentItem(
        title=title,
        item_id=item_id,
        published_at=published_at,
        url=url,
        duration=duration,
    )


class FakeCrawler:
    """Crawler returning canned teasers and recording how it is used."""

    def __init__(self, teasers=None, details=None, title="Crawled Title", error=None):
        self.title = title
        self.teasers = list(teasers or [])
        self.details = dict(details or {})
        self.error = error
        self.fetch_calls = []
        self.detail_calls = []
        self.close_count = 0

    def fetch_teasers(self, max_results, use_cache):
        self.fetch_calls.append((max_results, use_cache))
        if self.error is not None:
            raise self.error
        return list(self.teasers[:max_results])

    def resolve_details(self, item_id):
        self.detail_calls.append(item_id)
        detail = self.details.get(item_id)
        if isinstance(detail, Exception):
            raise detail
        return detail

    def close(self):
        self.close_count += 1


class FakeCrawlerFactory:
    """Crawler factory handing out one FakeCrawler and recording the calls."""

    def __init__(self, crawler):
        self.crawler = crawler
        self.calls = []

    def __call__(self, source, max_results):
        self.calls.append((source, max_results))
        return self.crawler


@pytest.fixture
def resolver():
    """Create an organisation registry with one source per content type."""
    from media_monitor.sources.registry import OrganisationConfigs

    return OrganisationConfigs.from_dict(
        {
            "ACME": {
                "white-papers": [
                    {
                        "name": "papers",
                        "url": "https://acme.example.com/papers",
                        "sites": ["site1", "site2"],
                        "keywords": ["ignored"],
                    }
                ],
                "roundups": [
                    {
                        "name": "blog",
                        "url": "https://acme.example.com/blog",
                        "sites": ["site1"],
                        "keywords": ["cloud", "devops"],
                    }
                ],
                "videos": [
                    {
                        "name": "channel",
                        "url": "https://video.example.com/acme",
                        "sites": ["site2"],
                        "keywords": ["demo"],
                        "channel-id": "UC123",
                    }
                ],
            }
        }
    )


@pytest.fixture
def crawler():
    """Create an empty FakeCrawler."""
    return FakeCrawler()


@pytest.fixture
def crawler_factory(crawler):
    """Create a factory handing out the crawler fixture."""
    return FakeCrawlerFactory(crawler)
