"""
Dashboard Package
=================
Streamlit views for BrewBoard.

Modules:
- app: Page setup, login gate and navigation (streamlit entry point)
- filters: Shared period selector row
- charts: Plotly figure builders
- overview_view, stock_view, finance_view, customer_service_view,
  store_view: one render function per page
"""
