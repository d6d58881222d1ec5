"""Metrics service: resolve the range, fetch records, aggregate them."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from result import Err, Ok, Result

from cmdash.data.client import MetricsScope, MetricsSourceError
from cmdash.models.reports import MetricsReport, Organization, UsageReport
from cmdash.services.aggregator import InputShapeError, aggregate, aggregate_usage
from cmdash.services.date_range import resolve_range

if TYPE_CHECKING:
    from cmdash.config import Config
    from cmdash.data.protocols import MetricsSourceProtocol
    from cmdash.models.timeframe import DashboardQuery, ResolvedRange

logger = logging.getLogger(__name__)


class MetricsService:
    """Service for dashboard metrics queries."""

    def __init__(self, source: MetricsSourceProtocol, config: Config) -> None:
        self._source = source
        self._config = config

    def resolve(self, query: DashboardQuery, now: datetime | None = None) -> ResolvedRange:
        return resolve_range(
            query.time_frame,
            now or datetime.now(UTC),
            query.custom,
            window_days=self._config.window_days,
        )

    def scope_for(self, query: DashboardQuery) -> Result[MetricsScope, str]:
        """Pick the account to query; an enterprise takes precedence over an org."""
        if query.enterprise:
            return Ok(MetricsScope.enterprise(query.enterprise))
        org = query.org or self._config.org
        if not org:
            return Err("No organization or enterprise selected")
        return Ok(MetricsScope.org(org))

    async def get_summary(
        self, query: DashboardQuery, now: datetime | None = None
    ) -> Result[MetricsReport, str]:
        """Aggregate metrics over the query's time frame."""
        scope = self.scope_for(query)
        if isinstance(scope, Err):
            return scope
        resolved = self.resolve(query, now)
        logger.info(
            "Fetching metrics for %s from %s to %s", scope.ok_value, resolved.since, resolved.until
        )
        try:
            records = await self._source.fetch_metrics(
                scope.ok_value, resolved.since, resolved.until
            )
            summary = aggregate(records, top_n=self._config.top_languages)
        except (MetricsSourceError, InputShapeError) as exc:
            return Err(f"Failed to load metrics for {scope.ok_value}: {exc}")
        return Ok(MetricsReport(scope=str(scope.ok_value), range=resolved, summary=summary))

    async def get_usage(
        self, query: DashboardQuery, now: datetime | None = None
    ) -> Result[UsageReport, str]:
        """Sum suggestion/acceptance counts over the query's time frame."""
        scope = self.scope_for(query)
        if isinstance(scope, Err):
            return scope
        resolved = self.resolve(query, now)
        logger.info(
            "Fetching usage for %s from %s to %s", scope.ok_value, resolved.since, resolved.until
        )
        try:
            records = await self._source.fetch_usage(
                scope.ok_value, resolved.since, resolved.until
            )
            totals = aggregate_usage(records)
        except (MetricsSourceError, InputShapeError) as exc:
            return Err(f"Failed to load usage for {scope.ok_value}: {exc}")
        return Ok(UsageReport(scope=str(scope.ok_value), range=resolved, totals=totals))

    async def list_organizations(self) -> Result[list[Organization], str]:
        """List organizations visible to the configured token."""
        try:
            rows = await self._source.list_organizations()
        except MetricsSourceError as exc:
            return Err(f"Failed to fetch organizations: {exc}")
        return Ok([_row_to_organization(row) for row in rows])


def _row_to_organization(row: dict[str, object]) -> Organization:
    login = str(row.get("login", "") or "")
    org_id = row.get("id", 0)
    return Organization(
        login=login,
        name=str(row.get("name", "") or login),
        id=org_id if isinstance(org_id, int) else 0,
    )
