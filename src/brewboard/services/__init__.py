"""
Services Package
=================
Business logic behind the BrewBoard dashboard views.

Modules:
- calendar_ranges: Period selection, date windows and week bucketing
- synthetic: Seeded noise and half-up rounding
- overview: Revenue / profit series and headline KPIs
- stock: Raw-material coverage, next-day readiness and product drafts
- finance: Cost ledgers and the invoice register
- customer_service: Customer segment metrics and feedback triage
- catalog: Store product catalog
- storage: JSON file-backed key-value store
- auth: Local login flag
"""

from brewboard.services.calendar_ranges import PeriodSelection, Scale, TimeRange
from brewboard.services.storage import LocalStore
from brewboard.services.overview import revenue_series, summarize
from brewboard.services.stock import readiness, low_stock_count, DraftBook
from brewboard.services.finance import CostLedger, generate_invoices
from brewboard.services.customer_service import CustomerMetrics, FeedbackBook, SegmentFilter, triage
from brewboard.services.catalog import Catalog

__all__ = [
    'PeriodSelection',
    'Scale',
    'TimeRange',
    'LocalStore',
    'revenue_series',
    'summarize',
    'readiness',
    'low_stock_count',
    'DraftBook',
    'CostLedger',
    'generate_invoices',
    'CustomerMetrics',
    'FeedbackBook',
    'SegmentFilter',
    'triage',
    'Catalog',
]
