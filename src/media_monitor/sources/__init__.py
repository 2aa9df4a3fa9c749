"""Source configuration and crawler interfaces."""

from .base import ConfigResolver, Crawler, CrawlerFactory, SourceConfig
from .registry import OrganisationConfig, OrganisationConfigs

__all__ = [
    "ConfigResolver",
    "Crawler",
    "CrawlerFactory",
    "OrganisationConfig",
    "OrganisationConfigs",
    "SourceConfig",
]
