"""
Tests for cost ledgers and the invoice register
"""

import pytest

from brewboard.services.calendar_ranges import PeriodSelection, Scale, period_range
from brewboard.services.finance import (
    CostLedger,
    generate_invoices,
    invoice_frame,
    invoices_in,
    seed_cost_entries,
)

KEY = "finance_variable_entries"


@pytest.fixture
def ledger(store):
    return CostLedger("Variable Costs", KEY, store, years=[2026])


def test_seed_entries_one_per_day():
    entries = seed_cost_entries([2026], "Variable Costs", KEY)
    assert len(entries) == 365
    first = entries[0]
    assert first.id == f"2026-1-1-{KEY}"
    assert first.date == "2026-01-01"
    assert first.amount == 209
    assert first.note == "Variable Costs batch"
    # Mar 10: 220 + 2 * 25 + (9 % 5) * 18 + ((74 + 117) % 23 - 11) = 342 - 4
    assert (entries[68].date, entries[68].amount) == ("2026-03-10", 338)
    assert entries[68].id == f"2026-3-10-{KEY}"
    # Dec 31: 220 + 11 * 25 + 0 + ((407 + 390) % 23 - 11) = 495 + 4
    assert (entries[364].date, entries[364].amount) == ("2026-12-31", 499)
    assert all(e.amount >= 50 for e in entries)


def test_ledger_seeds_and_persists(store, ledger):
    assert len(ledger.entries) == 365
    assert isinstance(store.load_json(KEY), list)


def test_corrupt_ledger_is_reseeded(store):
    store.save_json(KEY, {"oops": True})
    ledger = CostLedger("Variable Costs", KEY, store, years=[2026])
    assert len(ledger.entries) == 365


def test_stored_entries_with_bad_dates_are_dropped(store):
    store.save_json(KEY, [
        {"id": "ok", "date": "2026-10-05", "amount": 10},
        {"id": "bad-date", "date": "not-a-date", "amount": 5},
        {"id": "bad-amount", "date": "2026-10-06", "amount": "lots"},
        "not an entry",
    ])
    ledger = CostLedger("Variable Costs", KEY, store, years=[2026])
    assert [e.id for e in ledger.entries] == ["ok"]

    buckets = ledger.buckets(PeriodSelection(Scale.MONTHLY, year=2026, month=10))
    assert CostLedger.total(buckets) == 10
    assert buckets.loc[4, 'total'] == 10


def test_entry_id_keeps_amount_as_entered(ledger):
    ledger.add_entry("2026-10-19", "12.3456", "Cups")
    entry = ledger.entries[0]
    assert entry.amount == 12.35
    assert entry.id.startswith("2026-10-19-12.3456-")

    ledger.add_entry("2026-10-19", "100", "Lids")
    assert ledger.entries[0].id.startswith("2026-10-19-100-")


def test_add_entry_prepends_and_focuses(store, ledger):
    result, focus = ledger.add_entry("2026-10-19", "125.5", "Napkins")
    assert result.is_valid
    entry = ledger.entries[0]
    assert entry.amount == 125.5
    assert entry.note == "Napkins"
    assert entry.id.startswith("2026-10-19-125.5-")
    assert (focus.scale, focus.year, focus.month, focus.week) == (Scale.MONTHLY, 2026, 10, 4)

    reloaded = CostLedger("Variable Costs", KEY, store, years=[2026])
    assert reloaded.entries[0].id == entry.id


def test_add_entry_rejects_bad_input(ledger):
    result, focus = ledger.add_entry("not a date", "abc")
    assert not result.is_valid
    assert focus is None
    assert set(result.field_errors) == {"date", "amount"}
    assert len(ledger.entries) == 365


def test_remove_entry(ledger):
    target = ledger.entries[10].id
    assert ledger.remove_entry(target)
    assert all(e.id != target for e in ledger.entries)
    assert not ledger.remove_entry("missing")


def test_yearly_buckets_match_year_total(ledger):
    buckets = ledger.buckets(PeriodSelection(Scale.YEARLY, year=2026))
    assert len(buckets) == 12
    assert CostLedger.total(buckets) == pytest.approx(sum(e.amount for e in ledger.entries))


def test_quarterly_buckets(ledger):
    buckets = ledger.buckets(PeriodSelection(Scale.QUARTERLY, year=2026, quarter=None))
    assert buckets['label'].tolist() == ['Q1', 'Q2', 'Q3', 'Q4']
    assert CostLedger.total(buckets) == pytest.approx(sum(e.amount for e in ledger.entries))


def test_weekly_buckets_cover_month(ledger):
    monthly = ledger.buckets(PeriodSelection(Scale.MONTHLY, year=2026, month=10))
    weekly = ledger.buckets(PeriodSelection(Scale.WEEKLY, year=2026, month=10, week=0))
    assert len(monthly) == 31
    assert weekly['label'].tolist() == ["Wk 1", "Wk 2", "Wk 3", "Wk 4"]
    assert CostLedger.total(weekly) == pytest.approx(CostLedger.total(monthly))


def test_weekly_and_daily_single_week(ledger):
    weekly = ledger.buckets(PeriodSelection(Scale.WEEKLY, year=2026, month=10, week=2))
    assert weekly['label'].iloc[0] == "Mon"
    daily = ledger.buckets(PeriodSelection(Scale.DAILY, year=2026, month=10, week=2))
    assert daily['label'].tolist() == [str(i) for i in range(1, 8)]
    assert CostLedger.total(daily) == pytest.approx(CostLedger.total(weekly))


def test_hourly_buckets_not_supported(ledger):
    with pytest.raises(ValueError):
        ledger.buckets(PeriodSelection(Scale.HOURLY, year=2026, month=10))


class TestInvoices:

    @pytest.fixture(scope="class")
    def invoices(self):
        return generate_invoices([2026])

    def test_one_to_three_per_day(self, invoices):
        per_day = {}
        for inv in invoices:
            per_day[inv.date] = per_day.get(inv.date, 0) + 1
        assert len(per_day) == 365
        assert all(1 <= n <= 3 for n in per_day.values())

    def test_deterministic(self, invoices):
        again = generate_invoices([2026])
        assert [i.id for i in again] == [i.id for i in invoices]

    def test_amounts(self, invoices):
        for inv in invoices:
            assert 1 <= len(inv.items) <= 3
            assert inv.paid <= inv.subtotal
            assert inv.balance >= 0
            hh = int(inv.time[:2])
            assert 8 <= hh <= 19

    def test_filter_and_frame(self, invoices):
        window = period_range(PeriodSelection(Scale.MONTHLY, year=2026, month=10))
        october = invoices_in(invoices, window)
        assert october
        assert all(inv.date.startswith("2026-10") for inv in october)
        frame = invoice_frame(october)
        assert len(frame) == len(october)
        assert list(frame.columns) == [
            'invoice', 'date', 'time', 'customer', 'phone', 'gender',
            'items', 'subtotal', 'paid', 'balance',
        ]
