"""In-memory registry of organisation source configurations."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from ..content.base import ContentType
from .base import SourceConfig

log = structlog.get_logger()


@dataclass
class OrganisationConfig:
    """The sources configured for one organisation, by content type."""

    code: str
    sources: dict[ContentType, dict[str, SourceConfig]] = field(default_factory=dict)

    def add(self, content_type: ContentType, source: SourceConfig) -> None:
        """Add or replace a source for a content type."""
        self.sources.setdefault(content_type, {})[source.name] = source

    def get(self, content_type: ContentType, name: str) -> SourceConfig | None:
        """Get a source by content type and name."""
        return self.sources.get(content_type, {}).get(name)


class OrganisationConfigs:
    """Resolves sources from a set of organisation configurations.

    Implements the ConfigResolver protocol, so it can be passed directly
    to monitors.
    """

    def __init__(self, configs: Iterable[OrganisationConfig] = ()) -> None:
        self._configs: dict[str, OrganisationConfig] = {}
        for config in configs:
            self.register(config)

    def register(self, config: OrganisationConfig) -> None:
        """Register (or replace) the configuration of an organisation."""
        self._configs[config.code] = config

    def get(self, code: str) -> OrganisationConfig | None:
        """Get the configuration of an organisation."""
        return self._configs.get(code)

    def resolve(
        self, code: str, content_type: ContentType, name: str
    ) -> SourceConfig | None:
        """Find a configured source.

        Returns:
            The source, or None if the organisation or source is unknown.
        """
        config = self._configs.get(code)
        if config is None:
            log.debug("organisation_not_configured", code=code)
            return None
        return config.get(content_type, name)

    def __len__(self) -> int:
        return len(self._configs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OrganisationConfigs":
        """Build a registry from plain data.

        Expected layout::

            {"ACME": {"videos": [{"name": "main", "url": "...",
                                  "sites": ["s1"], "keywords": ["k"],
                                  "channel-id": "UC123"}]}}

        Raises:
            ValueError: If a content type tag is unknown or a source has no name.
        """
        registry = cls()
        for code, by_type in data.items():
            config = OrganisationConfig(code)
            for tag, sources in by_type.items():
                content_type = ContentType.from_tag(tag)
                for source in sources:
                    if not source.get("name"):
                        raise ValueError(f"Source without a name for {code} {tag}")
                    config.add(
                        content_type,
                        SourceConfig(
                            name=source["name"],
                            url=source.get("url", ""),
                            sites=frozenset(source.get("sites", ())),
                            keywords=frozenset(source.get("keywords", ())),
                            channel_id=source.get("channel-id", ""),
                        ),
                    )
            registry.register(config)
        return registry
