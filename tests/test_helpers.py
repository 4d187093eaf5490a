import io
import pytest
from datetime import date

from helpers import (
    normalize_bills_csv, statement_month, next_bill_due_date, bill_for_month,
    dashboard_stats, upcoming_bills, urgency, yearly_summary,
    card_labels, monthly_bill_totals, compare_cards,
)
from models import Bill, Card, SpendTracker

def test_statement_month_is_month_before_due():
    assert statement_month(date(2024, 5, 5)) == "April 2024"
    assert statement_month(date(2024, 1, 10)) == "December 2023"
    # Bills pick it up when no month is given
    assert Bill(amount=1, due_date=date(2024, 1, 10)).month == "December 2023"
    assert Bill(amount=1, due_date=date(2024, 1, 10), month="Custom").month == "Custom"

def test_next_bill_due_date():
    assert next_bill_due_date(date(2024, 1, 15)) == date(2024, 2, 15)
    assert next_bill_due_date(date(2024, 1, 31)) == date(2024, 2, 29)
    assert next_bill_due_date(date(2024, 12, 5)) == date(2025, 1, 5)

def test_bill_for_month():
    card = Card(card_name="Regalia", bills=[Bill(amount=10, due_date=date(2024, 5, 5))])
    assert bill_for_month(card, "April 2024") is card.bills[0]
    assert bill_for_month(card, "May 2024") is None

NOW = date(2024, 6, 10)

def _cards():
    a = Card(card_name="Amex", last4_digits="1001", bills=[
        Bill(amount=100, due_date=date(2024, 6, 12)),
        Bill(amount=200, due_date=date(2024, 6, 30)),
        Bill(amount=50, due_date=date(2024, 6, 1)),
        Bill(amount=300, due_date=date(2024, 6, 5), paid=True, payment_date=date(2024, 6, 2)),
    ])
    b = Card(card_name="SBI", bills=[
        Bill(amount=40, due_date=date(2024, 5, 30), paid=True, payment_date=date(2024, 5, 28)),
        Bill(amount=-20, due_date=date(2024, 6, 20)),
    ])
    return [a, b]

def test_dashboard_stats():
    stats = dashboard_stats(_cards(), NOW)
    assert stats == {
        "total_outstanding": 350,
        "upcoming_bills_count": 2,
        "cards_due_soon": 1,
        "total_paid_this_month": 300,
    }

def test_dashboard_stats_no_cards():
    assert dashboard_stats([], NOW)["total_outstanding"] == 0

def test_upcoming_bills_sorted_with_urgency():
    rows = upcoming_bills(_cards(), NOW)
    assert [r["bill"].due_date for r in rows] == [
        date(2024, 6, 1), date(2024, 6, 12), date(2024, 6, 20), date(2024, 6, 30),
    ]
    assert [r["urgency"] for r in rows] == ["Overdue", "Due Soon", "Upcoming", None]
    assert rows[0]["card_name"] == "Amex"
    assert rows[2]["card_name"] == "SBI"
    assert len(upcoming_bills(_cards(), NOW, limit=2)) == 2

def test_urgency_thresholds():
    assert urgency(date(2024, 6, 10), NOW) == "Due Soon"
    assert urgency(date(2024, 6, 17), NOW) == "Due Soon"
    assert urgency(date(2024, 6, 25), NOW) == "Upcoming"
    assert urgency(date(2024, 6, 26), NOW) is None

def test_yearly_summary():
    a = Card(card_name="Amex", bills=[
        Bill(amount=100, due_date=date(2024, 2, 5), month="January 2024"),
        Bill(amount=50, due_date=date(2024, 4, 5), month="March 2024"),
        Bill(amount=999, due_date=date(2023, 4, 5), month="March 2023"),
    ])
    b = Card(card_name="SBI", bills=[Bill(amount=-20, due_date=date(2024, 2, 5), month="January 2024")])
    g = yearly_summary([a, b], 2024)
    assert len(g) == 13
    assert list(g.columns) == ["Amex", "SBI"]
    assert g.loc["January", "Amex"] == 100
    assert g.loc["March", "Amex"] == 50
    assert g.loc["February", "SBI"] == 0
    assert g.loc["Total", "Amex"] == 150
    assert g.loc["Total", "SBI"] == -20

BILLS_CSV = """Due date,Amount,Paid,Payment date,Notes
2024-05-20,100,yes,2024-05-18,first
not a date,50,,,
2024-07-01,-25.5,,,refund
"""

def test_normalize_bills_csv():
    bills = normalize_bills_csv(io.StringIO(BILLS_CSV))
    assert len(bills) == 2
    first, second = bills
    assert first.due_date == date(2024, 5, 20)
    assert first.amount == 100
    assert first.paid is True
    assert first.payment_date == date(2024, 5, 18)
    assert first.month == "April 2024"
    assert second.amount == pytest.approx(-25.5)
    assert second.paid is False
    assert second.payment_date is None
    assert second.notes == "refund"

def test_normalize_bills_csv_missing_columns():
    assert normalize_bills_csv(io.StringIO("Date,Amount\n2024-01-01,5\n")) is None

def test_card_labels_disambiguate_shared_names():
    a = Card(card_name="Millennia", last4_digits="1111")
    b = Card(card_name="Millennia", last4_digits="2222")
    c = Card(card_name="Regalia")
    assert card_labels([a, b, c]) == ["Millennia ••1111", "Millennia ••2222", "Regalia"]
    d = Card(card_name="Regalia")
    labels = card_labels([c, d])
    assert labels == [f"Regalia ({c.id[:8]})", f"Regalia ({d.id[:8]})"]

def test_yearly_summary_keeps_cards_with_same_name_apart():
    a = Card(card_name="Millennia", last4_digits="1111",
             bills=[Bill(amount=100, due_date=date(2024, 2, 5), month="January 2024")])
    b = Card(card_name="Millennia", last4_digits="2222",
             bills=[Bill(amount=40, due_date=date(2024, 2, 5), month="January 2024")])
    g = yearly_summary([a, b], 2024)
    assert g.loc["January", "Millennia ••1111"] == 100
    assert g.loc["Total", "Millennia ••2222"] == 40

def test_monthly_bill_totals_by_due_month():
    a = Card(card_name="Amex", bills=[
        Bill(amount=100, due_date=date(2024, 3, 5)),
        Bill(amount=20, due_date=date(2024, 3, 25)),
        Bill(amount=-30, due_date=date(2024, 3, 28)),
        Bill(amount=60, due_date=date(2024, 1, 5)),
    ])
    b = Card(card_name="SBI", bills=[Bill(amount=45, due_date=date(2024, 2, 13))])
    g = monthly_bill_totals([a, b])
    assert list(g.index) == ["2024-01", "2024-02", "2024-03"]
    assert g.loc["2024-03", "Amex"] == 120
    assert g.loc["2024-02", "Amex"] == 0
    assert g.loc["2024-02", "SBI"] == 45

def test_monthly_bill_totals_without_positive_bills():
    assert monthly_bill_totals([]) is None
    assert monthly_bill_totals([Card(card_name="Amex", bills=[Bill(amount=-5, due_date=date(2024, 3, 5))])]) is None

def test_compare_cards():
    a = Card(card_name="Regalia", bank_name="HDFC", annual_fee=2500, credit_limit=300000,
             perks=["Lounge", "Golf"], fee_waiver_criteria="Spend 3L a year",
             spend_trackers=[SpendTracker(name="Waiver", type="Annual", target_amount=300000, start_date=date(2024, 4, 1))])
    b = Card(card_name="Freedom")
    t = compare_cards([a, b], "₹")
    assert list(t.columns) == ["Regalia", "Freedom"]
    assert t.loc["Annual Fee", "Regalia"] == "₹2,500"
    assert t.loc["Credit Limit", "Freedom"] == "N/A"
    assert t.loc["Perks", "Regalia"] == "Lounge, Golf"
    assert t.loc["Spend Trackers", "Regalia"] == "Waiver: ₹300,000 (Annual)"
    assert t.loc["Fee Waiver", "Freedom"] == "N/A"
