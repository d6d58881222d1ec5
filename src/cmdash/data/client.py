"""Async client for the GitHub Copilot metrics and usage endpoints."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
MAX_PER_PAGE = 100
MAX_PAGES = 50


class MetricsSourceError(RuntimeError):
    """The remote metrics source answered with an error."""

    def __init__(self, message: str, *, status: int | None = None, endpoint: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.endpoint = endpoint


@dataclass(frozen=True)
class MetricsScope:
    """Which account the metrics belong to: an organization or an enterprise."""

    kind: str
    slug: str

    @classmethod
    def org(cls, slug: str) -> MetricsScope:
        return cls("org", slug)

    @classmethod
    def enterprise(cls, slug: str) -> MetricsScope:
        return cls("enterprise", slug)

    @property
    def path(self) -> str:
        if self.kind == "enterprise":
            return f"/enterprises/{self.slug}"
        return f"/orgs/{self.slug}"

    def __str__(self) -> str:
        return f"{self.kind}:{self.slug}"


class GitHubMetricsClient:
    """Fetches per-day Copilot records, following ``page``/``per_page`` pagination."""

    def __init__(
        self,
        token: str = "",
        *,
        base_url: str = DEFAULT_API_URL,
        api_version: str = DEFAULT_API_VERSION,
        per_page: int = MAX_PER_PAGE,
        max_pages: int = MAX_PAGES,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": api_version,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._per_page = max(1, min(per_page, MAX_PER_PAGE))
        self._max_pages = max(1, max_pages)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout
        )
        self._headers = headers

    async def __aenter__(self) -> GitHubMetricsClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_metrics(
        self, scope: MetricsScope, since: str, until: str
    ) -> list[dict[str, Any]]:
        """Daily metrics records for ``since..until`` (ISO dates, inclusive)."""
        return await self._get_paginated(
            f"{scope.path}/copilot/metrics", {"since": since, "until": until}
        )

    async def fetch_usage(
        self, scope: MetricsScope, since: str, until: str
    ) -> list[dict[str, Any]]:
        """Daily usage records for ``since..until`` (ISO dates, inclusive)."""
        return await self._get_paginated(
            f"{scope.path}/copilot/usage", {"since": since, "until": until}
        )

    async def list_organizations(self) -> list[dict[str, Any]]:
        """Organizations the authenticated user belongs to."""
        return await self._get_paginated("/user/orgs", {})

    async def _get_paginated(
        self, endpoint: str, params: dict[str, Any]
    ) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        for page in range(1, self._max_pages + 1):
            batch = await self._get(
                endpoint, {**params, "page": page, "per_page": self._per_page}
            )
            items.extend(batch)
            if not batch or len(batch) < self._per_page:
                return items
        logger.warning(
            "Stopped paginating %s after %d pages; results may be incomplete",
            endpoint,
            self._max_pages,
        )
        return items

    async def _get(self, endpoint: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        logger.debug("GET %s %s", endpoint, params)
        try:
            response = await self._client.get(endpoint, params=params, headers=self._headers)
        except httpx.HTTPError as exc:
            logger.warning("Request to %s failed: %s", endpoint, exc)
            raise MetricsSourceError(f"Request failed: {exc}", endpoint=endpoint) from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "Metrics API error %d on %s: %s", response.status_code, endpoint, message
            )
            raise MetricsSourceError(
                f"Status {response.status_code} - {message}",
                status=response.status_code,
                endpoint=endpoint,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise MetricsSourceError(
                f"Invalid JSON from {endpoint}: {exc}",
                status=response.status_code,
                endpoint=endpoint,
            ) from exc
        if not isinstance(data, list):
            raise MetricsSourceError(
                f"Expected a JSON list from {endpoint}, got {type(data).__name__}",
                status=response.status_code,
                endpoint=endpoint,
            )
        return data


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase
