"""Resolve a symbolic time frame into a concrete, clamped interval."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from cmdash.models.timeframe import CustomRange, ResolvedRange, TimeFrame

# The remote source retains this many days of metrics.
WINDOW_LIMIT_DAYS = 28


def resolve_range(
    time_frame: TimeFrame | str | None,
    now: datetime,
    custom: CustomRange | None = None,
    *,
    window_days: int = WINDOW_LIMIT_DAYS,
) -> ResolvedRange:
    """Turn a time-frame token into a ``[start, end]`` interval.

    Calendar arithmetic is done on dates relative to ``now``; both bounds then
    take ``now``'s time of day so a data point from exactly one day ago is not
    cut off by a midnight boundary. The start is never earlier than
    ``window_days - 1`` days before ``now``.

    Unknown tokens, and ``custom`` without both bounds, behave like
    ``last_28_days``. Never raises.
    """
    frame = TimeFrame.parse(time_frame)
    today = now.date()
    min_date = today - timedelta(days=max(window_days, 1) - 1)

    match frame:
        case TimeFrame.YESTERDAY:
            start, end = today - timedelta(days=1), today
        case TimeFrame.THIS_WEEK:
            start, end = _week_start(today), today
        case TimeFrame.LAST_WEEK:
            monday = _week_start(today)
            start, end = monday - timedelta(days=7), monday - timedelta(days=1)
        case TimeFrame.LAST_7_DAYS:
            start, end = today - timedelta(days=7), today
        case TimeFrame.LAST_14_DAYS:
            start, end = today - timedelta(days=14), today
        case TimeFrame.CUSTOM if custom is not None and custom.is_complete:
            start, end = custom.start, custom.end  # type: ignore[assignment]
        case _:
            start, end = min_date, today

    start = max(start, min_date)
    if end < start:
        end = today

    return ResolvedRange(start=_at_time_of(start, now), end=_at_time_of(end, now))


def _week_start(day: date) -> date:
    """Monday of the ISO week containing ``day`` (Sunday counts as day 7)."""
    return day - timedelta(days=day.isoweekday() - 1)


def _at_time_of(day: date, now: datetime) -> datetime:
    return datetime.combine(day, now.timetz())
