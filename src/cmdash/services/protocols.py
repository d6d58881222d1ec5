"""Protocol definitions for services."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from result import Result

from cmdash.models.reports import MetricsReport, Organization, UsageReport
from cmdash.models.timeframe import DashboardQuery


class MetricsServiceProtocol(Protocol):
    """Interface for dashboard metrics operations."""

    async def get_summary(
        self, query: DashboardQuery, now: datetime | None = None
    ) -> Result[MetricsReport, str]: ...

    async def get_usage(
        self, query: DashboardQuery, now: datetime | None = None
    ) -> Result[UsageReport, str]: ...

    async def list_organizations(self) -> Result[list[Organization], str]: ...
