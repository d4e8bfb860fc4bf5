"""
Finance view: invoice register and the three cost ledgers.
"""

from datetime import date

import streamlit as st

from brewboard.dashboard import charts
from brewboard.dashboard.filters import period_filters, request_focus
from brewboard.services.calendar_ranges import Scale, period_range, year_options
from brewboard.services.finance import CostLedger, generate_invoices, invoice_frame, invoices_in
from brewboard.utils.constants import COST_LEDGERS

FINANCE_SCALES = [Scale.YEARLY, Scale.QUARTERLY, Scale.MONTHLY, Scale.WEEKLY, Scale.DAILY]

PLANNED_SECTIONS = [
    "Operating Expenses (OPEX)",
    "Fixed Costs",
    "Miscellaneous / Hidden Costs",
]


@st.cache_data(ttl=3600)
def load_invoices(years):
    return generate_invoices(list(years))


def render_invoices(config, today):
    st.markdown("### 🧾 Invoices")
    st.caption("Filter by period to view detailed invoice records.")
    selection = period_filters("invoices", FINANCE_SCALES, today=today, years_back=config.years_back)
    window = period_range(selection, today)

    years = tuple(year_options(today, config.years_back))
    rows = invoice_frame(invoices_in(load_invoices(years), window))

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Invoices", f"{len(rows):,}")
    with col2:
        st.metric("Billed", f"${rows['subtotal'].sum():,.2f}")
    with col3:
        st.metric("Outstanding", f"${rows['balance'].sum():,.2f}")

    st.caption(window.label)
    if rows.empty:
        st.info("No invoices in this period.")
    else:
        st.dataframe(rows, hide_index=True, use_container_width=True, height=320)


def render_ledger(ledger: CostLedger, config, today):
    """One cost card: filter row, bar chart, add form and entry list"""
    prefix = ledger.storage_key
    st.markdown(f"### {ledger.title}")
    st.caption(ledger.description)

    selection = period_filters(prefix, FINANCE_SCALES, today=today, years_back=config.years_back)
    buckets = ledger.buckets(selection)
    window = period_range(selection, today)

    chart_col, form_col = st.columns([3, 1])
    with chart_col:
        st.metric(f"Total ({window.label})", f"${CostLedger.total(buckets):,.2f}")
        st.plotly_chart(charts.cost_bar_chart(buckets), use_container_width=True)

    with form_col:
        with st.form(f"{prefix}_form", clear_on_submit=True):
            entry_date = st.date_input("Date", value=today)
            amount = st.text_input("Amount")
            note = st.text_input("Note")
            submitted = st.form_submit_button("Add entry")
        if submitted:
            result, focus = ledger.add_entry(entry_date, amount, note)
            if result.is_valid:
                request_focus(prefix, focus)
                st.rerun()
            for error in result.errors:
                st.error(error)

    with st.expander(f"Entries in {window.label}"):
        entries = ledger.entries_in(window)
        if not entries:
            st.caption("No entries in this period.")
        for entry in entries[:50]:
            col_a, col_b, col_c = st.columns([2, 3, 1])
            col_a.markdown(f"**{entry.date}** · ${entry.amount:,.2f}")
            col_b.markdown(entry.note or "-")
            if col_c.button("Delete", key=f"{prefix}_del_{entry.id}"):
                ledger.remove_entry(entry.id)
                st.rerun()
        if len(entries) > 50:
            st.caption(f"Showing 50 of {len(entries):,} entries")


def render_finance(config, store):
    """Render the finance page"""
    st.markdown("## 💰 Finance")
    today = date.today()
    years = year_options(today, config.years_back)

    render_invoices(config, today)

    for ledger_info in COST_LEDGERS:
        st.markdown("---")
        ledger = CostLedger(
            title=ledger_info['title'],
            storage_key=ledger_info['storage_key'],
            store=store,
            years=years,
            description=ledger_info['description'],
        )
        render_ledger(ledger, config, today)

    st.markdown("---")
    cols = st.columns(len(PLANNED_SECTIONS))
    for col, title in zip(cols, PLANNED_SECTIONS):
        with col:
            st.markdown(f"#### {title}")
            st.caption("Coming soon.")
