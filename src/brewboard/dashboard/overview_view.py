"""
Overview view: revenue, business status, profitability and stock alert.
"""

from datetime import date

import streamlit as st

from brewboard.dashboard import charts
from brewboard.dashboard.filters import period_filters
from brewboard.services.calendar_ranges import Scale
from brewboard.services.overview import revenue_series, summarize
from brewboard.services.stock import low_stock_count

OVERVIEW_SCALES = [Scale.YEARLY, Scale.QUARTERLY, Scale.MONTHLY, Scale.WEEKLY, Scale.HOURLY]

STATUS_BADGES = {
    'Profitable': ('📈', 'status-good'),
    'Saturated': ('➖', 'status-warn'),
    'Loss': ('📉', 'status-bad'),
}


@st.cache_data(ttl=600)
def load_series(selection, today):
    return revenue_series(selection, today)


def render_overview(config, store, go_to=None):
    """Render the overview page"""
    st.markdown("## ☕ Overview")
    today = date.today()

    selection = period_filters(
        "overview",
        OVERVIEW_SCALES,
        today=today,
        years_back=config.years_back,
        allow_all_years=True,
        default_scale=Scale.WEEKLY
    )
    series = load_series(selection, today)
    summary = summarize(series, low_stock_count(on=today), config.overview)

    # ============================================================
    # KPI ROW
    # ============================================================
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Revenue", f"${summary.total_revenue:,}")
    with col2:
        st.metric("Average Margin", f"{summary.avg_profit:.1f}%")
    with col3:
        st.metric(
            "Positive Feedback",
            f"{summary.positive_rate}%",
            delta=f"{summary.negative_rate}% negative",
            delta_color="off"
        )
    with col4:
        st.metric(
            "Low Stock Items",
            summary.low_stock_items,
            delta="Action Needed" if summary.needs_stock_action else "All Good",
            delta_color="inverse" if summary.needs_stock_action else "off"
        )

    st.markdown("---")

    # ============================================================
    # REVENUE + STATUS
    # ============================================================
    chart_col, status_col = st.columns([3, 1])
    with chart_col:
        if series.empty:
            st.info("No revenue data for this period.")
        else:
            st.plotly_chart(
                charts.revenue_chart(series, f"Revenue ({Scale(selection.scale).display_name})"),
                use_container_width=True
            )

    with status_col:
        icon, css_class = STATUS_BADGES[summary.status]
        st.markdown("#### Business Status")
        st.caption("Quick health check")
        st.markdown(
            f"<div class='{css_class}'>{icon} {summary.status}</div>",
            unsafe_allow_html=True
        )
        st.progress(summary.positive_rate / 100, text=f"{summary.positive_rate}% positive reviews")

    prof_col, stock_col = st.columns([3, 1])
    with prof_col:
        st.markdown("#### Profitability")
        st.caption(f"Average margin by {Scale(selection.scale).value}")
        if not series.empty:
            st.plotly_chart(charts.profit_chart(series, ""), use_container_width=True)

    with stock_col:
        st.markdown("#### Stock Management")
        st.caption(f"Low items: {summary.low_stock_items}")
        if summary.needs_stock_action:
            st.warning("Action Needed")
        else:
            st.success("All Good")
        if go_to is not None and st.button("Open Stock", use_container_width=True):
            go_to("Stock")
