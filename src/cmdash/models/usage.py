"""Usage-series models (suggestion/acceptance totals)."""

from __future__ import annotations

from pydantic import BaseModel, computed_field, field_validator

from cmdash.models.metrics import coerce_count


class DailyUsageRecord(BaseModel):
    """One day from the remote usage endpoint."""

    day: str = ""
    total_suggestions_count: int = 0
    total_acceptances_count: int = 0
    total_lines_suggested: int = 0
    total_lines_accepted: int = 0
    total_active_users: int = 0

    @field_validator(
        "total_suggestions_count",
        "total_acceptances_count",
        "total_lines_suggested",
        "total_lines_accepted",
        "total_active_users",
        mode="before",
    )
    @classmethod
    def coerce_counters(cls, value: object) -> int:
        return coerce_count(value)

    @field_validator("day", mode="before")
    @classmethod
    def coerce_day(cls, value: object) -> str:
        return str(value or "")


class UsageTotals(BaseModel):
    """Day-wise sums over a usage series."""

    days: int = 0
    total_suggestions: int = 0
    total_acceptances: int = 0
    total_lines_suggested: int = 0
    total_lines_accepted: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def acceptance_rate(self) -> float:
        """Percent of suggested lines that were accepted."""
        if self.total_lines_suggested <= 0:
            return 0.0
        return round(self.total_lines_accepted / self.total_lines_suggested * 100, 1)
