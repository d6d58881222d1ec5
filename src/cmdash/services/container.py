"""Service container with DI wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cmdash.data.client import GitHubMetricsClient
from cmdash.services.metrics_service import MetricsService

if TYPE_CHECKING:
    from cmdash.config import Config
    from cmdash.data.protocols import MetricsSourceProtocol


@dataclass
class ServiceContainer:
    """Holds all application services. Built once per command, immutable."""

    source: MetricsSourceProtocol
    metrics_service: MetricsService

    @classmethod
    def create(
        cls, config: Config, source: MetricsSourceProtocol | None = None
    ) -> ServiceContainer:
        """Wire the metrics service, defaulting to the GitHub API as its source."""
        if source is None:
            source = GitHubMetricsClient(
                config.github_token,
                base_url=config.api_url,
                api_version=config.api_version,
                per_page=config.per_page,
                timeout=config.timeout,
            )
        return cls(source=source, metrics_service=MetricsService(source, config))

    async def close(self) -> None:
        """Release the metrics source."""
        await self.source.close()
