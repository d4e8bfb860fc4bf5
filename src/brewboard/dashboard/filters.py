"""
Period filter row shared by the Overview, Finance and Customer Service views.

Each filter row keeps its widget state under a key prefix in
``st.session_state``. A view can ask a row to jump to another period on
the next rerun with ``request_focus`` (used after adding a cost entry).
"""

from datetime import date
from typing import List, Optional, Sequence

import streamlit as st

from brewboard.services.calendar_ranges import (
    PeriodSelection,
    Scale,
    default_selection,
    month_label,
    months_for_quarter,
    quarter_options,
    year_options,
)
from brewboard.utils.constants import HOUR_INTERVALS

ALL_LABEL = "All"


def _k(prefix: str, name: str) -> str:
    return f"{prefix}_{name}"


def request_focus(prefix: str, selection: PeriodSelection) -> None:
    """Apply ``selection`` to the filter row the next time it renders"""
    st.session_state[_k(prefix, 'pending')] = selection


def _seed_state(prefix: str, selection: PeriodSelection) -> None:
    st.session_state[_k(prefix, 'scale')] = Scale(selection.scale)
    st.session_state[_k(prefix, 'year')] = selection.year
    st.session_state[_k(prefix, 'quarter')] = selection.quarter
    st.session_state[_k(prefix, 'month')] = selection.month
    st.session_state[_k(prefix, 'week')] = selection.week
    st.session_state[_k(prefix, 'interval')] = selection.interval


def _ensure_option(key: str, options: list) -> None:
    if st.session_state.get(key) not in options:
        st.session_state[key] = options[0]


def period_filters(
    prefix: str,
    scales: Sequence[Scale],
    today: Optional[date] = None,
    years_back: int = 5,
    allow_all_years: bool = False,
    default_scale: Scale = Scale.MONTHLY
) -> PeriodSelection:
    """
    Render the scale / year / quarter / month / week selectors.

    Parameters
    ----------
    prefix : str
        Session-state key prefix; one per filter row
    scales : sequence of Scale
        Scales offered by the view
    today : date, optional
        Reference date for the defaults and year list
    years_back : int
        How many past years the year selector offers
    allow_all_years : bool
        Offer "All" in the quarter selector, and in the year selector on
        the quarterly scale; the row also starts on all quarters
    default_scale : Scale
        Scale shown on first render

    Returns
    -------
    PeriodSelection
    """
    today = today or date.today()
    scales = [Scale(s) for s in scales]

    if _k(prefix, 'scale') not in st.session_state:
        _seed_state(prefix, default_selection(default_scale, today, all_quarters=allow_all_years))
    pending = st.session_state.pop(_k(prefix, 'pending'), None)
    if pending is not None:
        _seed_state(prefix, pending)
    _ensure_option(_k(prefix, 'scale'), scales)

    cols = st.columns(6)

    with cols[0]:
        scale = st.selectbox(
            "Scale",
            options=scales,
            format_func=lambda s: s.display_name,
            key=_k(prefix, 'scale')
        )

    years: List[Optional[int]] = list(reversed(year_options(today, years_back)))
    if allow_all_years and scale == Scale.QUARTERLY:
        years = [None] + years
    _ensure_option(_k(prefix, 'year'), years)
    with cols[1]:
        year = st.selectbox(
            "Year",
            options=years,
            format_func=lambda y: ALL_LABEL if y is None else str(y),
            key=_k(prefix, 'year')
        )

    quarter = None
    month = st.session_state.get(_k(prefix, 'month'), today.month)
    week = st.session_state.get(_k(prefix, 'week'), 1)
    interval = st.session_state.get(_k(prefix, 'interval'), 0)

    if scale != Scale.YEARLY:
        quarters = quarter_options(allow_all_years)
        _ensure_option(_k(prefix, 'quarter'), quarters)
        with cols[2]:
            quarter = st.selectbox(
                "Quarter",
                options=quarters,
                format_func=lambda q: ALL_LABEL if q is None else f"Q{q}",
                key=_k(prefix, 'quarter')
            )

    if scale in (Scale.MONTHLY, Scale.WEEKLY, Scale.DAILY, Scale.HOURLY):
        months = months_for_quarter(quarter)
        _ensure_option(_k(prefix, 'month'), months)
        with cols[3]:
            month = st.selectbox(
                "Month",
                options=months,
                format_func=month_label,
                key=_k(prefix, 'month')
            )

    if scale in (Scale.WEEKLY, Scale.DAILY, Scale.HOURLY):
        weeks = [1, 2, 3, 4] if scale == Scale.HOURLY else [0, 1, 2, 3, 4]
        _ensure_option(_k(prefix, 'week'), weeks)
        with cols[4]:
            week = st.selectbox(
                "Week",
                options=weeks,
                format_func=lambda w: "All weeks" if w == 0 else f"Week {w}",
                key=_k(prefix, 'week')
            )

    if scale == Scale.HOURLY:
        with cols[5]:
            interval = st.selectbox(
                "Hours",
                options=list(range(len(HOUR_INTERVALS))),
                format_func=lambda i: HOUR_INTERVALS[i][0],
                key=_k(prefix, 'interval')
            )

    return PeriodSelection(
        scale=scale,
        year=year,
        quarter=quarter,
        month=month,
        week=week,
        interval=interval,
    )
