"""Protocol definitions for data access."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from cmdash.data.client import MetricsScope


class MetricsSourceProtocol(Protocol):
    """Async source of per-day metrics and usage records."""

    async def fetch_metrics(
        self, scope: MetricsScope, since: str, until: str
    ) -> list[dict[str, Any]]: ...

    async def fetch_usage(
        self, scope: MetricsScope, since: str, until: str
    ) -> list[dict[str, Any]]: ...

    async def list_organizations(self) -> list[dict[str, Any]]: ...

    async def close(self) -> None: ...
