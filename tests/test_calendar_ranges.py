"""
Tests for period selection and calendar bucketing
"""

from datetime import date

import pytest

from brewboard.services.calendar_ranges import (
    PeriodSelection,
    Scale,
    default_selection,
    effective_month,
    focus_on,
    iter_days,
    month_end,
    months_for_quarter,
    period_range,
    previous_range,
    quarter_options,
    reporting_range,
    sunday_weekday,
    week_base,
    week_of_month,
    week_start,
    year_options,
)


def test_months_for_quarter():
    assert months_for_quarter(2) == [4, 5, 6]
    assert months_for_quarter(None) == list(range(1, 13))


def test_quarter_options_offer_all_only_when_allowed():
    assert quarter_options() == [1, 2, 3, 4]
    assert quarter_options(allow_all=True) == [None, 1, 2, 3, 4]


def test_effective_month_clamps_into_quarter():
    assert effective_month(1, 3) == 7
    assert effective_month(12, 3) == 9
    assert effective_month(8, 3) == 8
    assert effective_month(5, None) == 5


def test_month_end_handles_leap_years():
    assert month_end(2024, 2) == date(2024, 2, 29)
    assert month_end(2026, 2) == date(2026, 2, 28)


def test_week_base_is_monday_on_or_before_first():
    # 2026-10-01 is a Thursday
    assert week_base(2026, 10) == date(2026, 9, 28)
    # 2026-06-01 is a Monday
    assert week_base(2026, 6) == date(2026, 6, 1)
    assert week_start(2026, 10, 2) == date(2026, 10, 5)


def test_week_of_month_folds_tail_into_week_four():
    assert week_of_month(date(2026, 10, 1)) == 1
    assert week_of_month(date(2026, 10, 5)) == 2
    assert week_of_month(date(2026, 10, 31)) == 4


def test_iter_days_is_inclusive():
    days = iter_days(date(2026, 10, 30), date(2026, 11, 2))
    assert days == [date(2026, 10, 30), date(2026, 10, 31), date(2026, 11, 1), date(2026, 11, 2)]


def test_selection_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        PeriodSelection(month=13)
    with pytest.raises(ValueError):
        PeriodSelection(week=5)
    with pytest.raises(ValueError):
        PeriodSelection(quarter=0)


def test_resolved_year_defaults_to_today(today):
    assert PeriodSelection(year=None).resolved_year(today) == 2026
    assert PeriodSelection(year=2023).resolved_year(today) == 2023


def test_year_options(today):
    assert year_options(today) == [2021, 2022, 2023, 2024, 2025, 2026]
    assert year_options(today, years_back=1) == [2025, 2026]


def test_default_selection_points_at_current_month(today):
    sel = default_selection(Scale.WEEKLY, today)
    assert sel.scale == Scale.WEEKLY
    assert (sel.year, sel.quarter, sel.month, sel.week) == (2026, 4, 10, 1)
    assert default_selection(Scale.MONTHLY, today, all_quarters=True).quarter is None


class TestPeriodRange:

    def test_yearly(self):
        r = period_range(PeriodSelection(Scale.YEARLY, year=2025))
        assert (r.start, r.end, r.label) == (date(2025, 1, 1), date(2025, 12, 31), "2025")
        assert r.days == 365

    def test_quarterly(self):
        r = period_range(PeriodSelection(Scale.QUARTERLY, year=2026, quarter=1))
        assert (r.start, r.end) == (date(2026, 1, 1), date(2026, 3, 31))
        assert r.label == "Q1 2026"

    def test_quarterly_all_quarters_is_whole_year(self):
        r = period_range(PeriodSelection(Scale.QUARTERLY, year=2026, quarter=None))
        assert (r.start, r.end) == (date(2026, 1, 1), date(2026, 12, 31))

    def test_monthly(self):
        r = period_range(PeriodSelection(Scale.MONTHLY, year=2026, quarter=4, month=10))
        assert (r.start, r.end, r.label) == (date(2026, 10, 1), date(2026, 10, 31), "Oct 2026")

    def test_weekly_window(self):
        r = period_range(PeriodSelection(Scale.WEEKLY, year=2026, quarter=4, month=10, week=2))
        assert (r.start, r.end) == (date(2026, 10, 5), date(2026, 10, 11))
        assert r.label == "Oct 5 – Oct 11, 2026"
        assert r.days == 7

    def test_week_zero_is_whole_month(self):
        r = period_range(PeriodSelection(Scale.DAILY, year=2026, month=10, week=0))
        assert (r.start, r.end) == (date(2026, 10, 1), date(2026, 10, 31))

    def test_hourly_is_single_day(self):
        r = period_range(PeriodSelection(Scale.HOURLY, year=2026, month=10, week=3))
        assert r.start == r.end == date(2026, 10, 15)


def test_reporting_range_daily_is_single_day():
    first = reporting_range(PeriodSelection(Scale.DAILY, year=2026, month=10, week=0))
    assert first.start == first.end == date(2026, 10, 1)
    assert first.label == "Oct 2026"

    week3 = reporting_range(PeriodSelection(Scale.DAILY, year=2026, month=10, week=3))
    assert week3.start == week3.end == date(2026, 10, 12)
    assert week3.label == "Mon, Oct 12 2026"


def test_reporting_range_matches_period_range_elsewhere():
    sel = PeriodSelection(Scale.WEEKLY, year=2026, month=10, week=2)
    assert reporting_range(sel) == period_range(sel)


def test_previous_range_has_same_length():
    current = period_range(PeriodSelection(Scale.WEEKLY, year=2026, month=10, week=2))
    prev = previous_range(current)
    assert (prev.start, prev.end) == (date(2026, 9, 28), date(2026, 10, 4))
    assert prev.days == current.days
    assert prev.label == "previous period"

    month = period_range(PeriodSelection(Scale.MONTHLY, year=2026, month=3))
    prev_month = previous_range(month)
    assert prev_month.end == date(2026, 2, 28)
    assert prev_month.days == 31


def test_focus_on_targets_month_and_week():
    sel = focus_on(date(2026, 10, 19))
    assert sel.scale == Scale.MONTHLY
    assert (sel.year, sel.quarter, sel.month, sel.week) == (2026, 4, 10, 4)


def test_sunday_weekday():
    assert sunday_weekday(date(2026, 10, 18)) == 0   # Sunday
    assert sunday_weekday(date(2026, 10, 19)) == 1   # Monday
    assert sunday_weekday(date(2026, 10, 17)) == 6   # Saturday
