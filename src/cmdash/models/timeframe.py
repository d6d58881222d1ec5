"""Time-frame selection models."""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, computed_field


class TimeFrame(StrEnum):
    """Symbolic reporting interval selectable in the dashboard."""

    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    LAST_7_DAYS = "last_7_days"
    LAST_14_DAYS = "last_14_days"
    LAST_28_DAYS = "last_28_days"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, token: TimeFrame | str | None) -> TimeFrame:
        """Map a user token to a time frame, defaulting to the last 28 days."""
        if isinstance(token, TimeFrame):
            return token
        if not token:
            return cls.LAST_28_DAYS
        normalized = token.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            return cls.LAST_28_DAYS


class CustomRange(BaseModel):
    """Explicit calendar bounds for the ``custom`` time frame."""

    start: date | None = None
    end: date | None = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None


class ResolvedRange(BaseModel):
    """Concrete interval produced from a time frame."""

    start: datetime
    end: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def since(self) -> str:
        return self.start.date().isoformat()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def until(self) -> str:
        return self.end.date().isoformat()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def days(self) -> int:
        """Inclusive number of calendar days covered."""
        return max((self.end.date() - self.start.date()).days + 1, 0)


class DashboardQuery(BaseModel):
    """One dashboard refresh request: what range, for which account."""

    time_frame: TimeFrame = TimeFrame.LAST_28_DAYS
    custom: CustomRange | None = None
    org: str = ""
    enterprise: str = ""
