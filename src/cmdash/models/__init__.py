"""Pydantic models for cmdash."""

from cmdash.models.metrics import (
    AggregatedSummary,
    DailyMetricRecord,
    EditorBreakdown,
    LanguageAcceptanceStat,
    LanguageStat,
    LanguageSummary,
    ModelBreakdown,
    PullRequestModelStat,
    RepositoryBreakdown,
)
from cmdash.models.reports import MetricsReport, Organization, UsageReport
from cmdash.models.timeframe import CustomRange, DashboardQuery, ResolvedRange, TimeFrame
from cmdash.models.usage import DailyUsageRecord, UsageTotals

__all__ = [
    "AggregatedSummary",
    "CustomRange",
    "DailyMetricRecord",
    "DailyUsageRecord",
    "DashboardQuery",
    "EditorBreakdown",
    "LanguageAcceptanceStat",
    "LanguageStat",
    "LanguageSummary",
    "MetricsReport",
    "ModelBreakdown",
    "Organization",
    "PullRequestModelStat",
    "RepositoryBreakdown",
    "ResolvedRange",
    "TimeFrame",
    "UsageReport",
    "UsageTotals",
]
