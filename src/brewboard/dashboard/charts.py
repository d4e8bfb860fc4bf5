"""
Plotly figure builders shared by the dashboard views.

All builders take the DataFrames produced by ``brewboard.services`` and
return a figure ready for ``st.plotly_chart``.
"""

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

# Brand palette
COFFEE = '#6f4e37'
CREAM = '#c8a27a'
MALE_COLOR = '#2563eb'
FEMALE_COLOR = '#db2777'
READY_COLOR = '#16a34a'
SHORT_COLOR = '#dc2626'


def _base_layout(fig: go.Figure, title: str = "", height: int = 320, y_title: str = "") -> go.Figure:
    fig.update_layout(
        title=title,
        template='plotly_white',
        height=height,
        margin=dict(l=20, r=20, t=40 if title else 10, b=20),
        yaxis_title=y_title,
        hovermode='x unified',
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="right",
            x=1
        ),
    )
    return fig


def revenue_chart(series: pd.DataFrame, title: str = "Revenue") -> go.Figure:
    """Revenue line over the selected period"""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=series['label'],
        y=series['revenue'],
        mode='lines+markers',
        name='Revenue',
        line=dict(color=COFFEE, width=2),
        marker=dict(size=5)
    ))
    return _base_layout(fig, title, y_title="Revenue ($)")


def profit_chart(series: pd.DataFrame, title: str = "Profitability") -> go.Figure:
    """Average margin % line"""
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=series['label'],
        y=series['profit'],
        mode='lines+markers',
        name='Profit %',
        line=dict(color=CREAM, width=2, dash='dot'),
    ))
    return _base_layout(fig, title, height=260, y_title="Margin (%)")


def cost_bar_chart(buckets: pd.DataFrame, title: str = "") -> go.Figure:
    fig = go.Figure(go.Bar(
        x=buckets['label'],
        y=buckets['total'],
        marker_color=COFFEE,
        name='Cost'
    ))
    return _base_layout(fig, title, y_title="Amount ($)")


def readiness_chart(table: pd.DataFrame) -> go.Figure:
    """
    Required vs coverage per product.

    Unlimited coverage (recipes that use nothing) is drawn at the
    required level and flagged in the hover text.
    """
    coverage = table['coverage'].replace(np.inf, np.nan)
    unlimited = coverage.isna() & table['coverage'].notna()
    plotted = coverage.where(~unlimited, table['required'])
    hover = ["unlimited" if u else f"{c:,.0f}" for u, c in zip(unlimited, plotted)]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=table['name'],
        y=table['required'],
        name='Required tomorrow',
        marker_color=CREAM
    ))
    fig.add_trace(go.Bar(
        x=table['name'],
        y=plotted,
        name='Coverage',
        marker_color=[READY_COLOR if s == 'Ready' else SHORT_COLOR for s in table['status']],
        hovertext=hover,
        hoverinfo='text+name'
    ))
    fig.update_layout(barmode='group')
    return _base_layout(fig, "", y_title="Units")


def gender_bar_chart(
    df: pd.DataFrame,
    gender_filter: str = "All",
    title: str = "",
    y_title: str = "",
    y_range=None
) -> go.Figure:
    """
    Grouped Male / Female bars per age group.

    A gender filter other than "All" hides the other gender's trace.
    """
    fig = go.Figure()
    for gender, color in (("Male", MALE_COLOR), ("Female", FEMALE_COLOR)):
        if gender_filter not in ("All", gender):
            continue
        fig.add_trace(go.Bar(
            x=df['group'],
            y=df[gender],
            name=gender,
            marker_color=color
        ))
    fig.update_layout(barmode='group')
    if y_range:
        fig.update_yaxes(range=list(y_range))
    return _base_layout(fig, title, y_title=y_title)


def age_bar_chart(df: pd.DataFrame, title: str = "") -> go.Figure:
    fig = px.bar(df, x='group', y='customers', color_discrete_sequence=[COFFEE])
    return _base_layout(fig, title, y_title="New customers")


def ranking_chart(df: pd.DataFrame, title: str = "") -> go.Figure:
    """Horizontal bars, highest score on top"""
    ordered = df.sort_values('score', ascending=True)
    fig = go.Figure(go.Bar(
        x=ordered['score'],
        y=ordered['product'],
        orientation='h',
        marker_color=COFFEE
    ))
    fig.update_layout(hovermode='y unified')
    return _base_layout(fig, title)


def gender_pie(breakdown: dict) -> go.Figure:
    df = pd.DataFrame({'gender': list(breakdown.keys()), 'customers': list(breakdown.values())})
    fig = px.pie(
        df,
        values='customers',
        names='gender',
        color='gender',
        color_discrete_map={'Male': MALE_COLOR, 'Female': FEMALE_COLOR},
        hole=0.45
    )
    fig.update_layout(margin=dict(l=10, r=10, t=10, b=10), height=240)
    return fig


def demand_map(df: pd.DataFrame) -> go.Figure:
    """Bubble map of demand index by city"""
    fig = px.scatter_geo(
        df,
        lat='lat',
        lon='lon',
        size='demand',
        color='demand',
        hover_name='city',
        color_continuous_scale='YlOrBr',
        range_color=(10, 99),
        projection='natural earth'
    )
    fig.update_layout(margin=dict(l=0, r=0, t=10, b=0), height=360)
    return fig
