"""
Overview Metrics Service
========================
Synthetic revenue and profitability series behind the overview page.

Metric Model (per calendar hour):
- Weekday base: 800, +700 on Saturday, +450 on Friday, -150 on Sunday
- Morning rush (07-11h): +320; evening rush (16-19h): +420
- Seasonal lift: (month0 % 4) * 70
- Seeded noise: +/- 90
- Revenue = max(30, base / 24 + rushes + seasonal + noise)
- Profit % = 10 + (weekday % 4) * 2 + 3 (morning) + 2 (evening) + noise

Aggregations by scale:
- yearly: one row per month (noon of the 10th, revenue x30)
- quarterly: "YYYY Qn" rows (noon of the 10th of the quarter's 2nd month, x90)
- monthly: one row per day at noon
- weekly: seven weekday rows, or four "Wk n" buckets when week = 0
- hourly: the hours of the chosen interval on day 1 + (week-1)*7
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from brewboard.config import OverviewConfig
from brewboard.services.calendar_ranges import (
    PeriodSelection,
    Scale,
    iter_days,
    month_end,
    month_label,
    month_start,
    sunday_weekday,
    week_base,
    year_options,
)
from brewboard.services.synthetic import seeded_noise, round_half_up, clamp
from brewboard.utils.constants import HOUR_INTERVALS
from brewboard.utils.logger import get_logger

logger = get_logger(__name__)

SERIES_COLUMNS = ['label', 'revenue', 'profit']


@dataclass
class HourMetrics:
    revenue: int
    profit: float


def metrics_for(moment: datetime) -> HourMetrics:
    """Revenue and profit % for a single calendar hour"""
    dow = sunday_weekday(moment)
    hour = moment.hour
    month0 = moment.month - 1

    base_day = 800 + (700 if dow == 6 else 450 if dow == 5 else -150 if dow == 0 else 0)
    rush_morning = 320 if 7 <= hour < 11 else 0
    rush_evening = 420 if 16 <= hour < 19 else 0
    seasonal = (month0 % 4) * 70
    n = seeded_noise(moment.year, month0, moment.day, hour)

    revenue = base_day / 24 + rush_morning + rush_evening + seasonal + (n - 0.5) * 180
    profit = (
        10
        + (dow % 4) * 2
        + (3 if rush_morning else 0)
        + (2 if rush_evening else 0)
        + n
    )
    return HourMetrics(
        revenue=max(30, round_half_up(revenue)),
        profit=round_half_up(profit, 1),
    )


def _noon(d: date) -> datetime:
    return datetime(d.year, d.month, d.day, 12)


def _quarter_row(year: int, quarter: int) -> Dict:
    m = metrics_for(datetime(year, (quarter - 1) * 3 + 2, 10, 12))
    return {
        'label': f"{year} Q{quarter}",
        'revenue': m.revenue * 90,
        'profit': 14 + quarter * 1.2,
    }


def revenue_series(selection: PeriodSelection, today: Optional[date] = None) -> pd.DataFrame:
    """
    Build the overview chart data for a period selection.

    Parameters
    ----------
    selection : PeriodSelection
        Scale and period filters; ``year=None`` and ``quarter=None`` mean
        "all"
    today : date, optional
        Reference date for "current year" defaults

    Returns
    -------
    pd.DataFrame
        Columns: label, revenue, profit
    """
    today = today or date.today()
    scale = Scale(selection.scale)
    year = selection.resolved_year(today)
    month = selection.effective_month
    rows: List[Dict] = []

    if scale == Scale.YEARLY:
        for m in range(1, 13):
            mm = metrics_for(datetime(year, m, 10, 12))
            rows.append({
                'label': month_label(m),
                'revenue': mm.revenue * 30,
                'profit': 12 + ((m - 1) % 4) * 1.5,
            })

    elif scale == Scale.QUARTERLY:
        quarters = [1, 2, 3, 4] if selection.quarter is None else [selection.quarter]
        years = year_options(today) if selection.year is None else [selection.year]
        for y in years:
            for q in quarters:
                rows.append(_quarter_row(y, q))

    elif scale == Scale.MONTHLY:
        for d in iter_days(month_start(year, month), month_end(year, month)):
            m = metrics_for(_noon(d))
            rows.append({'label': str(d.day), 'revenue': m.revenue, 'profit': m.profit})

    elif scale == Scale.WEEKLY:
        base = week_base(year, month)
        if selection.week == 0:
            totals = [{'label': f"Wk {w}", 'revenue': 0, 'profit': 0.0} for w in range(1, 5)]
            counts = [0, 0, 0, 0]
            for d in iter_days(month_start(year, month), month_end(year, month)):
                wk = (d - base).days // 7 + 1
                idx = min(max(wk, 1), 4) - 1
                m = metrics_for(_noon(d))
                totals[idx]['revenue'] += m.revenue
                totals[idx]['profit'] += m.profit
                counts[idx] += 1
            for bucket, count in zip(totals, counts):
                bucket['profit'] = round_half_up(bucket['profit'] / count, 1) if count else 0
            rows = totals
        else:
            start = base + timedelta(days=(selection.week - 1) * 7)
            for d in iter_days(start, start + timedelta(days=6)):
                m = metrics_for(_noon(d))
                rows.append({'label': f"{d:%a}", 'revenue': m.revenue, 'profit': m.profit})

    elif scale == Scale.HOURLY:
        wk = selection.week or 1
        day = datetime(year, month, 1 + (wk - 1) * 7)
        _, start_hour, end_hour = HOUR_INTERVALS[selection.interval]
        for h in range(24):
            if start_hour <= h < end_hour:
                m = metrics_for(day.replace(hour=h))
                rows.append({'label': f"{h:02d}:00", 'revenue': m.revenue, 'profit': m.profit})

    else:
        raise ValueError(f"Overview does not support the {scale.value} scale")

    return pd.DataFrame(rows, columns=SERIES_COLUMNS)


@dataclass
class OverviewSummary:
    """
    Headline numbers for the overview cards.

    Attributes
    ----------
    total_revenue : int
        Sum of revenue over the series
    avg_profit : float
        Mean profit % (0 for an empty series)
    status : str
        Profitable, Saturated or Loss
    positive_rate : int
        Share of positive feedback (5-98)
    negative_rate : int
        100 - positive_rate
    low_stock_items : int
        Products short for tomorrow
    """
    total_revenue: int
    avg_profit: float
    status: str
    positive_rate: int
    negative_rate: int
    low_stock_items: int

    @property
    def needs_stock_action(self) -> bool:
        return self.low_stock_items > 0


def business_status(avg_profit: float, config: Optional[OverviewConfig] = None) -> str:
    config = config or OverviewConfig()
    if avg_profit >= config.profitable_threshold:
        return "Profitable"
    if avg_profit >= config.saturated_threshold:
        return "Saturated"
    return "Loss"


def positive_feedback_rate(
    series: pd.DataFrame,
    avg_profit: float,
    config: Optional[OverviewConfig] = None
) -> int:
    """
    Positive review share derived from the revenue trend and margin.

    Growth is measured from the first to the last point of the series;
    its influence is bounded by tanh.
    """
    config = config or OverviewConfig()
    if series.empty:
        return 50
    first = float(series['revenue'].iloc[0])
    last = float(series['revenue'].iloc[-1])
    growth = (last - first) / first if first > 0 else 0.0
    base = (
        config.feedback_base_rate
        + float(np.tanh(growth)) * config.feedback_growth_weight
        + (avg_profit - config.saturated_threshold) * config.feedback_margin_weight
    )
    return int(clamp(round_half_up(base), config.feedback_min_rate, config.feedback_max_rate))


def summarize(
    series: pd.DataFrame,
    low_stock_items: int = 0,
    config: Optional[OverviewConfig] = None
) -> OverviewSummary:
    """Collapse a revenue series into the overview KPIs"""
    total = int(series['revenue'].sum()) if not series.empty else 0
    avg_profit = float(series['profit'].mean()) if not series.empty else 0.0
    positive = positive_feedback_rate(series, avg_profit, config)

    summary = OverviewSummary(
        total_revenue=total,
        avg_profit=avg_profit,
        status=business_status(avg_profit, config),
        positive_rate=positive,
        negative_rate=100 - positive,
        low_stock_items=low_stock_items,
    )
    logger.debug(f"Overview summary: {summary}")
    return summary
