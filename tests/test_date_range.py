"""Tests for time-frame resolution."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from cmdash.models.timeframe import CustomRange, TimeFrame
from cmdash.services.date_range import resolve_range


def _at(now: datetime, year: int, month: int, day: int) -> datetime:
    return now.replace(year=year, month=month, day=day)


class TestFixedFrames:
    def test_yesterday(self, fixed_now: datetime) -> None:
        resolved = resolve_range(TimeFrame.YESTERDAY, fixed_now)
        assert resolved.start == _at(fixed_now, 2024, 1, 16)
        assert resolved.end == fixed_now

    def test_this_week_starts_monday(self, fixed_now: datetime) -> None:
        resolved = resolve_range(TimeFrame.THIS_WEEK, fixed_now)
        assert resolved.start == _at(fixed_now, 2024, 1, 15)
        assert resolved.end == fixed_now

    def test_this_week_on_sunday_goes_back_six_days(self, fixed_now: datetime) -> None:
        sunday = _at(fixed_now, 2024, 1, 21)
        resolved = resolve_range(TimeFrame.THIS_WEEK, sunday)
        assert resolved.start.date() == date(2024, 1, 15)

    def test_this_week_on_monday_is_today(self, fixed_now: datetime) -> None:
        monday = _at(fixed_now, 2024, 1, 15)
        resolved = resolve_range(TimeFrame.THIS_WEEK, monday)
        assert resolved.start == monday

    def test_last_week_is_previous_monday_to_sunday(self, fixed_now: datetime) -> None:
        resolved = resolve_range(TimeFrame.LAST_WEEK, fixed_now)
        assert resolved.start == _at(fixed_now, 2024, 1, 8)
        assert resolved.end == _at(fixed_now, 2024, 1, 14)

    @pytest.mark.parametrize(
        ("frame", "expected_start"),
        [
            (TimeFrame.LAST_7_DAYS, date(2024, 1, 10)),
            (TimeFrame.LAST_14_DAYS, date(2024, 1, 3)),
            (TimeFrame.LAST_28_DAYS, date(2023, 12, 21)),
        ],
    )
    def test_rolling_windows(
        self, fixed_now: datetime, frame: TimeFrame, expected_start: date
    ) -> None:
        resolved = resolve_range(frame, fixed_now)
        assert resolved.start.date() == expected_start
        assert resolved.end == fixed_now

    def test_last_28_days_query_params(self, fixed_now: datetime) -> None:
        resolved = resolve_range(TimeFrame.LAST_28_DAYS, fixed_now)
        assert resolved.since == "2023-12-21"
        assert resolved.until == "2024-01-17"
        assert resolved.days == 28

    def test_unknown_token_falls_back_to_28_days(self, fixed_now: datetime) -> None:
        assert resolve_range("fortnight", fixed_now) == resolve_range(
            TimeFrame.LAST_28_DAYS, fixed_now
        )
        assert resolve_range(None, fixed_now) == resolve_range(TimeFrame.LAST_28_DAYS, fixed_now)

    def test_string_tokens_are_normalized(self, fixed_now: datetime) -> None:
        assert resolve_range("Last-7-Days", fixed_now) == resolve_range(
            TimeFrame.LAST_7_DAYS, fixed_now
        )


class TestClamping:
    def test_narrow_window_clamps_start(self, fixed_now: datetime) -> None:
        resolved = resolve_range(TimeFrame.LAST_WEEK, fixed_now, window_days=5)
        assert resolved.start.date() == date(2024, 1, 13)
        assert resolved.end.date() == date(2024, 1, 14)

    @pytest.mark.parametrize("frame", list(TimeFrame))
    @pytest.mark.parametrize("offset_days", [0, 1, 3, 5, 6, 30, 200])
    def test_start_never_before_window(
        self, fixed_now: datetime, frame: TimeFrame, offset_days: int
    ) -> None:
        now = fixed_now + timedelta(days=offset_days)
        custom = CustomRange(start=date(2020, 1, 1), end=date(2030, 1, 1))
        resolved = resolve_range(frame, now, custom)
        assert resolved.start >= now - timedelta(days=27)
        assert resolved.start <= resolved.end

    @pytest.mark.parametrize("offset_days", range(7))
    def test_last_week_ends_day_before_this_week(
        self, fixed_now: datetime, offset_days: int
    ) -> None:
        now = fixed_now + timedelta(days=offset_days)
        last_week = resolve_range(TimeFrame.LAST_WEEK, now)
        this_week = resolve_range(TimeFrame.THIS_WEEK, now)
        assert this_week.start - last_week.end == timedelta(days=1)

    def test_same_now_gives_same_range(self, fixed_now: datetime) -> None:
        for frame in TimeFrame:
            assert resolve_range(frame, fixed_now) == resolve_range(frame, fixed_now)


class TestCustomRange:
    def test_explicit_bounds_keep_time_of_now(self, fixed_now: datetime) -> None:
        custom = CustomRange(start=date(2024, 1, 2), end=date(2024, 1, 9))
        resolved = resolve_range(TimeFrame.CUSTOM, fixed_now, custom)
        assert resolved.start == _at(fixed_now, 2024, 1, 2)
        assert resolved.end == _at(fixed_now, 2024, 1, 9)

    def test_start_is_clamped(self, fixed_now: datetime) -> None:
        custom = CustomRange(start=date(2023, 11, 1), end=date(2024, 1, 5))
        resolved = resolve_range(TimeFrame.CUSTOM, fixed_now, custom)
        assert resolved.start.date() == date(2023, 12, 21)
        assert resolved.end.date() == date(2024, 1, 5)

    def test_end_before_start_resets_end_to_now(self, fixed_now: datetime) -> None:
        custom = CustomRange(start=date(2024, 1, 10), end=date(2024, 1, 5))
        resolved = resolve_range(TimeFrame.CUSTOM, fixed_now, custom)
        assert resolved.start.date() == date(2024, 1, 10)
        assert resolved.end == fixed_now

    def test_end_before_clamped_start_resets_end(self, fixed_now: datetime) -> None:
        custom = CustomRange(start=date(2023, 11, 1), end=date(2023, 12, 1))
        resolved = resolve_range(TimeFrame.CUSTOM, fixed_now, custom)
        assert resolved.start.date() == date(2023, 12, 21)
        assert resolved.end == fixed_now

    @pytest.mark.parametrize(
        "custom",
        [None, CustomRange(), CustomRange(start=date(2024, 1, 10)), CustomRange(end=date(2024, 1, 12))],
    )
    def test_incomplete_custom_falls_back(
        self, fixed_now: datetime, custom: CustomRange | None
    ) -> None:
        assert resolve_range(TimeFrame.CUSTOM, fixed_now, custom) == resolve_range(
            TimeFrame.LAST_28_DAYS, fixed_now
        )


def test_naive_now_stays_naive() -> None:
    now = datetime(2024, 3, 6, 9, 45)
    resolved = resolve_range(TimeFrame.LAST_7_DAYS, now)
    assert resolved.start.tzinfo is None
    assert resolved.start == datetime(2024, 2, 28, 9, 45)
