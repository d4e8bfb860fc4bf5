"""
Customer Service view: acquisition, retention, satisfaction and the
negative-feedback triage queue.
"""

from datetime import date, datetime

import streamlit as st

from brewboard.dashboard import charts
from brewboard.dashboard.filters import period_filters
from brewboard.services.calendar_ranges import Scale
from brewboard.services.customer_service import (
    ALL,
    CustomerMetrics,
    FeedbackBook,
    SegmentFilter,
    priority_counts,
    triage,
)
from brewboard.utils.constants import AGE_GROUPS, FEEDBACK_TYPES, GENDERS, PRIORITIES

CS_SCALES = [Scale.YEARLY, Scale.QUARTERLY, Scale.MONTHLY, Scale.WEEKLY, Scale.DAILY]

PRIORITY_ICONS = {'Critical': '🔴', 'High': '🟠', 'Medium': '🟡', 'Low': '🟢'}


@st.cache_data(ttl=600)
def load_metrics(selection, segment, today):
    metrics = CustomerMetrics(selection, segment, today)
    return {
        'summary': metrics.summary(),
        'range_label': metrics.range.label,
        'gender': metrics.gender_breakdown(),
        'by_age': metrics.new_by_age(),
        'ranking': metrics.product_ranking(),
        'satisfaction': metrics.satisfaction_by_age(),
        'retention_by_age': metrics.retention_by_age(),
        'demand': metrics.demand_by_city(),
        'range': metrics.range,
    }


def render_segment_filters() -> SegmentFilter:
    col1, col2 = st.columns(2)
    with col1:
        gender = st.selectbox("Gender", [ALL] + GENDERS, key="cs_gender")
    with col2:
        age_group = st.selectbox("Age group", [ALL] + AGE_GROUPS, key="cs_age")
    return SegmentFilter(gender=gender, age_group=age_group)


def render_kpis(data):
    summary = data['summary']
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric(
            "New Customers",
            f"{summary['new_customers']:,}",
            delta=f"{summary['change_pct']:+.1f}% vs previous period"
        )
    with col2:
        st.metric("Retention (Male)", f"{summary['retention_male']}%")
    with col3:
        st.metric("Retention (Female)", f"{summary['retention_female']}%")


def render_feedback(store, config, window):
    """Negative feedback triage table with log / resolve actions"""
    st.markdown("### Negative Feedback")
    now = datetime.now()
    book = FeedbackBook(store, now)

    col1, col2, col3 = st.columns([1, 1, 2])
    with col1:
        type_filter = st.selectbox("Type", [ALL] + FEEDBACK_TYPES, key="cs_fb_type")
    with col2:
        priority_filter = st.selectbox("Priority", [ALL] + list(reversed(PRIORITIES)), key="cs_fb_priority")
    with col3:
        query = st.text_input("Search name, phone or description", key="cs_fb_query")

    table = triage(book.open_items(), window, type_filter, priority_filter, query, now, config.feedback)

    counts = priority_counts(table)
    st.markdown(" · ".join(f"{PRIORITY_ICONS[p]} {p}: **{n}**" for p, n in counts.items()))

    if table.empty:
        st.info("No feedback matches the current filters.")
    else:
        for _, row in table.iterrows():
            col_a, col_b, col_c = st.columns([3, 4, 1])
            with col_a:
                st.markdown(f"{PRIORITY_ICONS[row['priority']]} **{row['name']}** · {row['phone']}")
                st.caption(f"{row['type']} · open {row['days_open']} day(s)")
            with col_b:
                st.markdown(row['description'])
            with col_c:
                if st.button("Resolve", key=f"cs_resolve_{row['id']}"):
                    book.resolve(row['id'])
                    st.rerun()

    with st.expander("Log feedback"):
        with st.form("cs_feedback_form", clear_on_submit=True):
            name = st.text_input("Customer name")
            phone = st.text_input("Phone")
            fb_type = st.selectbox("Type", FEEDBACK_TYPES)
            description = st.text_area("Description")
            submitted = st.form_submit_button("Save")
        if submitted:
            result = book.log(name, phone, fb_type, description)
            if result.is_valid:
                st.rerun()
            for error in result.errors:
                st.error(error)


def render_customer_service(config, store):
    """Render the customer service page"""
    st.markdown("## 🙋 Customer Satisfaction Dashboard")
    today = date.today()

    selection = period_filters("cs", CS_SCALES, today=today, years_back=config.years_back)
    segment = render_segment_filters()
    data = load_metrics(selection, segment, today)
    st.caption(data['range_label'])

    render_kpis(data)
    st.markdown("---")

    col1, col2 = st.columns([1, 2])
    with col1:
        st.markdown("#### Gender Breakdown")
        st.plotly_chart(charts.gender_pie(data['gender']), use_container_width=True)
    with col2:
        st.markdown("#### New Customers by Age Group")
        st.plotly_chart(charts.age_bar_chart(data['by_age']), use_container_width=True)

    col3, col4 = st.columns(2)
    with col3:
        st.markdown("#### Product Rank")
        st.plotly_chart(charts.ranking_chart(data['ranking']), use_container_width=True)
    with col4:
        st.markdown("#### Customer Satisfaction")
        st.plotly_chart(
            charts.gender_bar_chart(data['satisfaction'], segment.gender, y_title="Score", y_range=(0, 100)),
            use_container_width=True
        )

    col5, col6 = st.columns(2)
    with col5:
        st.markdown("#### Retention by Age Group")
        st.plotly_chart(
            charts.gender_bar_chart(data['retention_by_age'], segment.gender, y_title="Retention %", y_range=(0, 100)),
            use_container_width=True
        )
    with col6:
        st.markdown("#### Demand by Location")
        st.plotly_chart(charts.demand_map(data['demand']), use_container_width=True)

    st.markdown("---")
    render_feedback(store, config, data['range'])
