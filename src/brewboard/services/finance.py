"""
Finance Service
===============
Cost ledgers and the seeded invoice register.

Cost Ledgers:
- Three ledgers (COGS, Technology & Platform, Variable) share one model
- Each is seeded with one entry per day across the selectable years and
  persisted to the local store under its own key
- Entries are bucketed by the selected scale for the bar chart

Invoices:
- 1-3 invoices per day, 1-3 items each, generated from sine seeds
- Paid amounts sometimes leave a small balance
"""

import math
import random
import string
from dataclasses import dataclass, field, asdict
from datetime import date
from typing import Any, Dict, List, Optional

import pandas as pd

from brewboard.services.calendar_ranges import (
    PeriodSelection,
    Scale,
    TimeRange,
    focus_on,
    iter_days,
    month_end,
    month_label,
    month_start,
    period_range,
    week_base,
)
from brewboard.services.storage import LocalStore
from brewboard.services.synthetic import sine_rand, round_half_up
from brewboard.utils.constants import INVOICE_CUSTOMERS, INVOICE_PRODUCTS
from brewboard.utils.logger import get_logger, log_frame, LogContext
from brewboard.utils.validators import coerce_number, parse_iso_date, validate_cost_entry

logger = get_logger(__name__)

BUCKET_COLUMNS = ['label', 'total']


@dataclass
class CostEntry:
    id: str
    date: str  # yyyy-mm-dd
    amount: float
    note: str

    @property
    def day(self) -> date:
        return date.fromisoformat(self.date)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def seed_cost_entries(years: List[int], title: str, storage_key: str) -> List[CostEntry]:
    """
    One demo entry per calendar day of every year in ``years``.

    amount = max(50, round(220 + month0*25 + (day0 % 5)*18 + jitter))
    with jitter = ((month0*37 + day0*13) % 23) - 11.
    """
    entries = []
    for yy in years:
        for mi in range(12):
            days = iter_days(month_start(yy, mi + 1), month_end(yy, mi + 1))
            for di, d in enumerate(days):
                base = 220 + mi * 25 + (di % 5) * 18
                jitter = ((mi * 37 + di * 13) % 23) - 11
                entries.append(CostEntry(
                    id=f"{yy}-{mi + 1}-{di + 1}-{storage_key}",
                    date=d.isoformat(),
                    amount=max(50, round_half_up(base + jitter)),
                    note=f"{title} batch",
                ))
    return entries


def _format_amount(amount: float) -> str:
    """Shortest text for the amount as entered: 125.555 -> '125.555', 100.0 -> '100'"""
    text = repr(float(amount))
    return text[:-2] if text.endswith('.0') else text


def _random_suffix(length: int = 6) -> str:
    alphabet = string.digits + string.ascii_lowercase
    return ''.join(random.choice(alphabet) for _ in range(length))


def _day_buckets(days: List[date], labels: List[str], entries: List[CostEntry]) -> pd.DataFrame:
    index = {d: i for i, d in enumerate(days)}
    totals = [0.0] * len(days)
    for en in entries:
        i = index.get(en.day)
        if i is not None:
            totals[i] += en.amount
    return pd.DataFrame({'label': labels, 'total': totals}, columns=BUCKET_COLUMNS)


class CostLedger:
    """
    A persisted list of cost entries with period bucketing.

    Usage
    -----
    >>> ledger = CostLedger("Variable Costs", "finance_variable_entries", store, years=[2026])
    >>> result, focus = ledger.add_entry("2026-10-19", 125.5, "Napkins")
    >>> ledger.buckets(focus)
    """

    def __init__(
        self,
        title: str,
        storage_key: str,
        store: LocalStore,
        years: List[int],
        description: str = ""
    ):
        self.title = title
        self.storage_key = storage_key
        self.description = description
        self.store = store
        self.years = years
        self.entries: List[CostEntry] = self._load()

    def _load(self) -> List[CostEntry]:
        raw = self.store.load_json(self.storage_key)
        if isinstance(raw, list):
            entries = []
            for item in raw:
                try:
                    day = parse_iso_date(item['date'])
                    amount = coerce_number(item['amount'])
                    if day is None or amount is None:
                        raise ValueError(f"bad date or amount in {item!r}")
                    entries.append(CostEntry(
                        id=str(item['id']),
                        date=day.isoformat(),
                        amount=amount,
                        note=str(item.get('note', '')),
                    ))
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(f"Skipping malformed entry in '{self.storage_key}': {e}")
            return entries

        if raw is not None:
            logger.warning(f"Stored '{self.storage_key}' is not a list; reseeding")
        with LogContext(logger, f"Seeding {self.title}"):
            entries = seed_cost_entries(self.years, self.title, self.storage_key)
        self._persist(entries)
        return entries

    def _persist(self, entries: Optional[List[CostEntry]] = None) -> None:
        entries = self.entries if entries is None else entries
        self.store.save_json(self.storage_key, [e.to_dict() for e in entries])

    def add_entry(self, entry_date: Any, amount: Any, note: str = ""):
        """
        Validate and prepend a new entry.

        Returns
        -------
        tuple
            (ValidationResult, PeriodSelection or None) - the selection
            focuses the chart on the new entry's month and week
        """
        result = validate_cost_entry(entry_date, amount, note)
        if not result.is_valid:
            return result, None

        values = result.values
        amt = round_half_up(values['amount'], 2)
        day = values['date']
        entry = CostEntry(
            id=f"{day.isoformat()}-{_format_amount(values['amount'])}-{_random_suffix()}",
            date=day.isoformat(),
            amount=amt,
            note=values['note'],
        )
        self.entries.insert(0, entry)
        self._persist()
        logger.info(f"{self.title}: added {amt:,.2f} on {entry.date}")
        result.info['entry'] = entry
        return result, focus_on(day)

    def remove_entry(self, entry_id: str) -> bool:
        before = len(self.entries)
        self.entries = [e for e in self.entries if e.id != entry_id]
        removed = len(self.entries) < before
        if removed:
            self._persist()
            logger.info(f"{self.title}: removed entry {entry_id}")
        return removed

    def entries_in(self, window: TimeRange) -> List[CostEntry]:
        return [e for e in self.entries if window.contains(e.day)]

    def buckets(self, selection: PeriodSelection) -> pd.DataFrame:
        """
        Chart buckets for a selection.

        Returns DataFrame with columns: label, total
        """
        scale = Scale(selection.scale)
        year = selection.resolved_year()
        month = selection.effective_month
        window = period_range(selection)

        if scale == Scale.YEARLY:
            totals = [0.0] * 12
            for en in self.entries:
                if en.day.year == year:
                    totals[en.day.month - 1] += en.amount
            return pd.DataFrame({'label': [month_label(m) for m in range(1, 13)], 'total': totals})

        if scale == Scale.QUARTERLY:
            totals = [0.0] * 4
            for en in self.entries:
                if en.day.year == year:
                    totals[(en.day.month - 1) // 3] += en.amount
            return pd.DataFrame({'label': ['Q1', 'Q2', 'Q3', 'Q4'], 'total': totals})

        ranged = self.entries_in(window)

        if scale == Scale.MONTHLY:
            days = iter_days(month_start(window.start.year, window.start.month),
                             month_end(window.start.year, window.start.month))
            return _day_buckets(days, [str(d.day) for d in days], ranged)

        if scale == Scale.WEEKLY:
            if selection.week == 0:
                base = week_base(year, month)
                totals = [0.0] * 4
                for en in ranged:
                    wk = (en.day - base).days // 7 + 1
                    totals[min(max(wk, 1), 4) - 1] += en.amount
                return pd.DataFrame({'label': [f"Wk {w}" for w in range(1, 5)], 'total': totals})
            days = iter_days(window.start, window.end)
            return _day_buckets(days, [f"{d:%a}" for d in days], ranged)

        if scale == Scale.DAILY:
            days = iter_days(window.start, window.end)
            if selection.week == 0:
                return _day_buckets(days, [str(d.day) for d in days], ranged)
            return _day_buckets(days, [str(i + 1) for i in range(len(days))], ranged)

        raise ValueError(f"Cost ledgers do not support the {scale.value} scale")

    @staticmethod
    def total(buckets: pd.DataFrame) -> float:
        return float(buckets['total'].sum()) if not buckets.empty else 0.0


# =============================================================================
# INVOICES
# =============================================================================

@dataclass
class InvoiceItem:
    name: str
    price: float


@dataclass
class Invoice:
    id: str
    date: str  # yyyy-mm-dd
    time: str  # HH:mm
    customer_name: str
    phone: str
    gender: str
    items: List[InvoiceItem] = field(default_factory=list)
    subtotal: float = 0.0
    paid: float = 0.0

    @property
    def day(self) -> date:
        return date.fromisoformat(self.date)

    @property
    def balance(self) -> float:
        return max(0.0, round_half_up(self.subtotal - self.paid, 2))


def generate_invoices(years: List[int]) -> List[Invoice]:
    """
    Seeded invoice register for every day of ``years``.

    The year's position in ``years`` feeds the customer rotation and
    the minute seed, so the register depends on the year window.
    """
    invoices = []
    for yi, yy in enumerate(years):
        for m in range(12):
            days = iter_days(month_start(yy, m + 1), month_end(yy, m + 1))
            for di, d in enumerate(days):
                count = 1 + math.floor(sine_rand(yy * 10000 + (m + 1) * 100 + di) * 3)
                for k in range(count):
                    cust = INVOICE_CUSTOMERS[(yi + m + di + k) % len(INVOICE_CUSTOMERS)]
                    items_count = 1 + math.floor(sine_rand(di * 50 + k * 7) * 3)
                    items = []
                    for j in range(items_count):
                        name = INVOICE_PRODUCTS[(m + di + j) % len(INVOICE_PRODUCTS)]
                        base = 35 + ((m + di + j) % 5) * 7
                        items.append(InvoiceItem(
                            name=name,
                            price=round_half_up(base + sine_rand(yy + di + j) * 10, 2),
                        ))
                    subtotal = round_half_up(sum(i.price for i in items), 2)
                    paid = round_half_up(subtotal - math.floor(sine_rand(di + k) * 3), 2)
                    serial = math.floor(sine_rand(k + di + m) * 9999)
                    hh = math.floor(sine_rand(yy + di + k) * 12) + 8
                    mm = math.floor(sine_rand(yi + m + di + k) * 60)
                    invoices.append(Invoice(
                        id=f"{yy}{m + 1:02d}{di + 1:02d}-{k}{serial:04d}",
                        date=d.isoformat(),
                        time=f"{hh:02d}:{mm:02d}",
                        customer_name=cust['name'],
                        phone=cust['phone'],
                        gender=cust['gender'],
                        items=items,
                        subtotal=subtotal,
                        paid=min(subtotal, paid),
                    ))
    logger.info(f"Generated {len(invoices):,} invoices for {len(years)} year(s)")
    return invoices


def invoices_in(invoices: List[Invoice], window: TimeRange) -> List[Invoice]:
    return [inv for inv in invoices if window.contains(inv.day)]


def invoice_frame(invoices: List[Invoice]) -> pd.DataFrame:
    """Flatten invoices for the register table"""
    rows = [{
        'invoice': inv.id,
        'date': inv.date,
        'time': inv.time,
        'customer': inv.customer_name,
        'phone': inv.phone,
        'gender': inv.gender,
        'items': ", ".join(f"{i.name} (${i.price:.2f})" for i in inv.items),
        'subtotal': inv.subtotal,
        'paid': inv.paid,
        'balance': inv.balance,
    } for inv in invoices]
    df = pd.DataFrame(rows, columns=[
        'invoice', 'date', 'time', 'customer', 'phone', 'gender',
        'items', 'subtotal', 'paid', 'balance',
    ])
    log_frame(logger, "Invoice register", df)
    return df
