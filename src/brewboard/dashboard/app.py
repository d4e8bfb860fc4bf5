"""
BrewBoard - Coffee Shop Admin Dashboard
=======================================

Single-page admin dashboard for a small coffee shop.

Views:
- Overview: revenue, margin, business status, stock alert
- Stock: tomorrow's readiness, product coverage, recipe materials
- Finance: invoice register and cost ledgers
- Customer Service: acquisition, retention, satisfaction, feedback triage
- Store: product catalog editor

All figures are seeded synthetic data; user input (cost entries,
feedback, catalog, drafts, login flag) is kept in a local JSON store.

Run with: brewboard   (or: streamlit run app.py)
"""

import sys
from pathlib import Path

import streamlit as st

# Allow `streamlit run` straight from a source checkout
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from brewboard.config import Config
from brewboard.dashboard.customer_service_view import render_customer_service
from brewboard.dashboard.finance_view import render_finance
from brewboard.dashboard.overview_view import render_overview
from brewboard.dashboard.stock_view import render_stock
from brewboard.dashboard.store_view import render_store
from brewboard.services.auth import is_authenticated, login, logout, redirect_target
from brewboard.services.storage import LocalStore
from brewboard.utils.logger import configure_logging, get_logger


# ============================================================
# PAGE CONFIGURATION
# ============================================================

_config = Config.from_env()

st.set_page_config(
    page_title=_config.dashboard.page_title,
    page_icon=_config.dashboard.page_icon,
    layout=_config.dashboard.layout,
    initial_sidebar_state="expanded"
)

configure_logging(level=_config.log_level, log_file=_config.log_file)
logger = get_logger(__name__)


# ============================================================
# CUSTOM STYLING
# ============================================================

st.markdown("""
<style>
    .main {
        padding: 0rem 1rem;
    }

    /* Header */
    .main-header {
        background: linear-gradient(135deg, #3b2418 0%, #6f4e37 100%);
        padding: 1.2rem 2rem;
        border-radius: 12px;
        margin-bottom: 1.2rem;
        color: white;
    }

    .main-header h1 {
        margin: 0;
        font-size: 1.6rem;
        color: white;
    }

    .main-header p {
        margin: 0.3rem 0 0 0;
        color: #f3e5d8;
    }

    /* Business status */
    .status-good, .status-warn, .status-bad {
        font-size: 1.3rem;
        font-weight: 600;
        margin-bottom: 0.6rem;
    }
    .status-good { color: #047857; }
    .status-warn { color: #b45309; }
    .status-bad { color: #be123c; }

    /* Metric cards */
    div[data-testid="stMetric"] {
        background: #fffaf5;
        border-radius: 10px;
        padding: 0.8rem 1rem;
        border-left: 4px solid #6f4e37;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# ============================================================
# SESSION STATE
# ============================================================

def init_session_state():
    """Initialize session state variables"""
    if 'config' not in st.session_state:
        st.session_state.config = _config

    if 'store' not in st.session_state:
        st.session_state.store = LocalStore(st.session_state.config.storage_file)
        logger.info(f"Session started; local storage at {st.session_state.config.storage_file}")

    if 'view' not in st.session_state:
        st.session_state.view = st.session_state.config.dashboard.default_view


def go_to(view: str):
    """Switch view on the next rerun"""
    st.session_state.pending_view = view
    st.rerun()


# ============================================================
# LOGIN
# ============================================================

def render_login():
    """Sign-in form; any email with '@' and a non-empty password is accepted"""
    st.markdown("""
    <div class="main-header">
        <h1>☕ BrewBoard</h1>
        <p>Sign in to manage your coffee shop.</p>
    </div>
    """, unsafe_allow_html=True)

    _, col, _ = st.columns([1, 2, 1])
    with col:
        with st.form("login_form"):
            st.markdown("### Sign in")
            email = st.text_input("Email", placeholder="you@example.com")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign in", use_container_width=True)

        if submitted:
            result = login(st.session_state.store, email, password)
            if result.is_valid:
                requested = st.query_params.get("next")
                go_to(redirect_target(requested, st.session_state.config.dashboard.views))
            for error in result.errors:
                st.error(error)


# ============================================================
# SIDEBAR
# ============================================================

def render_sidebar():
    """Navigation between the views; returns the selected view"""
    views = st.session_state.config.dashboard.views
    pending = st.session_state.pop('pending_view', None)
    if pending in views:
        st.session_state.view = pending

    with st.sidebar:
        st.markdown("## ☕ BrewBoard")
        st.markdown("---")
        view = st.radio("Navigate", views, key="view", label_visibility="collapsed")
        st.markdown("---")

        if st.button("🔄 Refresh Data", use_container_width=True):
            st.cache_data.clear()
            st.rerun()

        if st.button("🚪 Log out", use_container_width=True):
            logout(st.session_state.store)
            st.rerun()

        with st.expander("ℹ️ About the Data"):
            st.markdown("""
            **Metrics** are generated from fixed seeds, so the same
            period always shows the same numbers.

            **Your entries** (costs, feedback, catalog, drafts) are saved
            to a local file and survive restarts.
            """)

    return view


# ============================================================
# MAIN APPLICATION
# ============================================================

RENDERERS = {
    'Overview': render_overview,
    'Stock': render_stock,
    'Finance': render_finance,
    'Customer Service': render_customer_service,
    'Store': render_store,
}


def main():
    """Main application entry point"""
    init_session_state()
    store = st.session_state.store
    config = st.session_state.config

    if not is_authenticated(store):
        render_login()
        return

    view = render_sidebar()
    if view == 'Overview':
        render_overview(config, store, go_to=go_to)
    else:
        RENDERERS[view](config, store)


if __name__ == "__main__":
    main()
