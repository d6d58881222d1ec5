"""Service-level result models."""

from __future__ import annotations

from pydantic import BaseModel

from cmdash.models.metrics import AggregatedSummary
from cmdash.models.timeframe import ResolvedRange
from cmdash.models.usage import UsageTotals


class Organization(BaseModel):
    """An organization visible to the configured token."""

    login: str
    name: str = ""
    id: int = 0


class MetricsReport(BaseModel):
    """Aggregated metrics for one resolved range."""

    scope: str
    range: ResolvedRange
    summary: AggregatedSummary


class UsageReport(BaseModel):
    """Usage totals for one resolved range."""

    scope: str
    range: ResolvedRange
    totals: UsageTotals
