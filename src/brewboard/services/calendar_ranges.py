"""
Calendar Ranges Service
=======================
Period selection and calendar bucketing shared by every dashboard view.

A ``PeriodSelection`` is what the filter row produces (scale, year,
quarter, month, week). This module turns it into concrete inclusive date
windows and provides the week-of-month arithmetic used for bucketing.

Week numbering:
- Weeks are anchored at the Monday on or before the 1st of the month
- Week n covers ``base + (n-1)*7 .. base + (n-1)*7 + 6``
- Days past the fourth week are folded into week 4
- Week 0 means "all weeks", i.e. the whole month
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import List, Optional
import calendar

from brewboard.utils.constants import MONTH_LABELS

MAX_WEEKS = 4


class Scale(str, Enum):
    """Time scale of a chart or table"""
    YEARLY = "yearly"
    QUARTERLY = "quarterly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"
    HOURLY = "hourly"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class TimeRange:
    """Inclusive date window with a display label"""
    start: date
    end: date
    label: str = ""

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


@dataclass(frozen=True)
class PeriodSelection:
    """
    State of a period filter row.

    Attributes
    ----------
    scale : Scale
        Bucketing scale
    year : int or None
        Selected year; None means "all years"
    quarter : int or None
        1-4; None means "all quarters"
    month : int
        1-12, clamped into the quarter by ``effective_month``
    week : int
        1-4, or 0 for all weeks of the month
    interval : int
        Index into the hourly interval list (overview only)
    """
    scale: Scale = Scale.MONTHLY
    year: Optional[int] = None
    quarter: Optional[int] = None
    month: int = 1
    week: int = 1
    interval: int = 0

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be 1-12, got {self.month}")
        if self.quarter is not None and not 1 <= self.quarter <= 4:
            raise ValueError(f"quarter must be 1-4 or None, got {self.quarter}")
        if not 0 <= self.week <= MAX_WEEKS:
            raise ValueError(f"week must be 0-{MAX_WEEKS}, got {self.week}")

    @property
    def effective_month(self) -> int:
        return effective_month(self.month, self.quarter)

    def resolved_year(self, today: Optional[date] = None) -> int:
        """The selected year, or the current one when "all years" is chosen"""
        if self.year is not None:
            return self.year
        return (today or date.today()).year


def default_selection(
    scale: Scale = Scale.MONTHLY,
    today: Optional[date] = None,
    all_quarters: bool = False
) -> PeriodSelection:
    """Selection pointing at the current month, first week"""
    today = today or date.today()
    return PeriodSelection(
        scale=Scale(scale),
        year=today.year,
        quarter=None if all_quarters else quarter_of(today),
        month=today.month,
        week=1,
    )


def year_options(today: Optional[date] = None, years_back: int = 5) -> List[int]:
    """The selectable years, oldest first, ending with the current year"""
    current = (today or date.today()).year
    return list(range(current - years_back, current + 1))


def quarter_options(allow_all: bool = False) -> List[Optional[int]]:
    """Quarter selector choices; None ("All") is offered only when ``allow_all``"""
    quarters: List[Optional[int]] = [1, 2, 3, 4]
    return [None] + quarters if allow_all else quarters


def months_for_quarter(quarter: Optional[int]) -> List[int]:
    """Month numbers belonging to a quarter; all twelve for None"""
    if quarter is None:
        return list(range(1, 13))
    start = (quarter - 1) * 3 + 1
    return [start, start + 1, start + 2]


def month_label(month: int) -> str:
    return MONTH_LABELS[month - 1]


def effective_month(month: int, quarter: Optional[int]) -> int:
    """Clamp a month into the selected quarter"""
    if quarter is None:
        return month
    start = (quarter - 1) * 3 + 1
    return min(max(month, start), start + 2)


def quarter_of(d: date) -> int:
    return (d.month - 1) // 3 + 1


def month_start(year: int, month: int) -> date:
    return date(year, month, 1)


def month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def week_base(year: int, month: int) -> date:
    """Monday on or before the first day of the month"""
    first = month_start(year, month)
    return first - timedelta(days=first.weekday())


def week_start(year: int, month: int, week: int) -> date:
    return week_base(year, month) + timedelta(days=(week - 1) * 7)


def week_of_month(d: date) -> int:
    """1-based week index of ``d`` in its month, clamped to 1..4"""
    diff = (d - week_base(d.year, d.month)).days
    return min(max(diff // 7 + 1, 1), MAX_WEEKS)


def iter_days(start: date, end: date) -> List[date]:
    """Every date from start to end inclusive"""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def _span_label(start: date, end: date) -> str:
    return f"{start:%b} {start.day} – {end:%b} {end.day}, {end.year}"


def period_range(selection: PeriodSelection, today: Optional[date] = None) -> TimeRange:
    """
    Inclusive date window for a selection.

    Weekly and daily scales cover the chosen week, or the whole month
    when week is 0.
    """
    year = selection.resolved_year(today)
    month = selection.effective_month
    scale = Scale(selection.scale)

    if scale == Scale.YEARLY:
        return TimeRange(date(year, 1, 1), date(year, 12, 31), str(year))

    if scale == Scale.QUARTERLY:
        if selection.quarter is None:
            return TimeRange(date(year, 1, 1), date(year, 12, 31), str(year))
        m0 = (selection.quarter - 1) * 3 + 1
        return TimeRange(
            month_start(year, m0),
            month_end(year, m0 + 2),
            f"Q{selection.quarter} {year}",
        )

    if scale == Scale.MONTHLY:
        s = month_start(year, month)
        return TimeRange(s, month_end(year, month), f"{s:%b %Y}")

    if scale == Scale.HOURLY:
        wk = selection.week or 1
        d = date(year, month, 1 + (wk - 1) * 7)
        return TimeRange(d, d, f"{d:%a}, {d:%b} {d.day} {d.year}")

    # weekly / daily
    if selection.week == 0:
        s, e = month_start(year, month), month_end(year, month)
        return TimeRange(s, e, _span_label(s, e))
    s = week_start(year, month, selection.week)
    e = s + timedelta(days=6)
    return TimeRange(s, e, _span_label(s, e))


def reporting_range(selection: PeriodSelection, today: Optional[date] = None) -> TimeRange:
    """
    Window used by the customer service view.

    Identical to ``period_range`` except on the daily scale, which reports
    a single day: the first of the month when week is 0, otherwise the
    first day of the chosen week.
    """
    if Scale(selection.scale) != Scale.DAILY:
        return period_range(selection, today)

    year = selection.resolved_year(today)
    month = selection.effective_month
    if selection.week == 0:
        s = month_start(year, month)
        return TimeRange(s, s, f"{s:%b %Y}")
    s = week_start(year, month, selection.week)
    return TimeRange(s, s, f"{s:%a}, {s:%b} {s.day} {s.year}")


def previous_range(current: TimeRange) -> TimeRange:
    """Window of the same length ending the day before ``current`` starts"""
    days = max(1, current.days)
    prev_end = current.start - timedelta(days=1)
    prev_start = prev_end - timedelta(days=days - 1)
    return TimeRange(prev_start, prev_end, "previous period")


def focus_on(d: date) -> PeriodSelection:
    """Monthly selection that puts ``d`` in view"""
    return PeriodSelection(
        scale=Scale.MONTHLY,
        year=d.year,
        quarter=quarter_of(d),
        month=d.month,
        week=week_of_month(d),
    )


def sunday_weekday(d: date) -> int:
    """Weekday index counted from Sunday (0 = Sunday, 6 = Saturday)"""
    return (d.weekday() + 1) % 7
