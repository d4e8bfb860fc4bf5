"""
Tests for the plotly figure builders
"""

import math

import pandas as pd

from brewboard.dashboard import charts
from brewboard.services.calendar_ranges import PeriodSelection, Scale
from brewboard.services.customer_service import CustomerMetrics
from brewboard.services.overview import revenue_series


def test_revenue_and_profit_charts(today):
    series = revenue_series(PeriodSelection(Scale.YEARLY, year=2026), today)
    fig = charts.revenue_chart(series)
    assert len(fig.data) == 1
    assert list(fig.data[0].x) == series['label'].tolist()
    assert charts.profit_chart(series).data[0].name == 'Profit %'


def test_cost_bar_chart():
    buckets = pd.DataFrame({'label': ['Q1', 'Q2'], 'total': [10.0, 20.0]})
    fig = charts.cost_bar_chart(buckets, "COGS")
    assert list(fig.data[0].y) == [10.0, 20.0]
    assert fig.layout.title.text == "COGS"


def test_readiness_chart_handles_unlimited_coverage():
    table = pd.DataFrame({
        'name': ['Americano', 'Croissant'],
        'required': [100, 50],
        'coverage': [120, math.inf],
        'status': ['Ready', 'Ready'],
    })
    fig = charts.readiness_chart(table)
    coverage = list(fig.data[1].y)
    assert coverage == [120, 50]
    assert list(fig.data[1].hovertext) == ["120", "unlimited"]


def test_gender_bar_chart_hides_filtered_gender():
    df = pd.DataFrame({'group': ['15-20', '20-25'], 'Male': [70, 72], 'Female': [75, 76]})
    assert [t.name for t in charts.gender_bar_chart(df).data] == ['Male', 'Female']
    assert [t.name for t in charts.gender_bar_chart(df, "Female").data] == ['Female']


def test_ranking_chart_puts_top_score_last():
    ranking = CustomerMetrics(PeriodSelection(Scale.MONTHLY, year=2026, month=10)).product_ranking()
    fig = charts.ranking_chart(ranking)
    assert fig.data[0].orientation == 'h'
    assert fig.data[0].x[-1] == ranking['score'].max()


def test_demand_map_and_pie():
    metrics = CustomerMetrics(PeriodSelection(Scale.MONTHLY, year=2026, month=10))
    assert len(charts.demand_map(metrics.demand_by_city()).data) == 1
    pie = charts.gender_pie(metrics.gender_breakdown())
    assert sorted(pie.data[0].labels) == ['Female', 'Male']
