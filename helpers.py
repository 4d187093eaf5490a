# helpers.py
# Bills CSV normalization, bill date math, dashboard figures, monthly totals, yearly summary, card comparison

from typing import Dict, List, Optional
from collections import Counter
from datetime import date
import calendar
import logging

import pandas as pd
import numpy as np
from dateutil.relativedelta import relativedelta
from pydantic import ValidationError

from config import LOG_LEVEL, DUE_SOON_DAYS
from models import Bill, Card
from periods import to_day

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

REQUIRED_COLS = {"Due date", "Amount"}
OPTIONAL_COLS = ["Month", "Paid", "Payment date", "Notes"]
TRUE_VALUES = {"true", "yes", "y", "1", "paid"}

MONTH_NAMES = list(calendar.month_name)[1:]

def normalize_bills_csv(file) -> Optional[List[Bill]]:
    """
    Read a bills CSV, validate, and normalize it into Bill models.
    Expected columns: Due date, Amount. Optional: Month, Paid, Payment date, Notes.
    """
    try:
        df = pd.read_csv(file)
    except Exception as e:
        logger.error(f"Failed to read CSV: {e}")
        return None

    missing = REQUIRED_COLS.difference(df.columns)
    if missing:
        logger.error(f"Missing required columns: {missing}")
        return None

    for c in OPTIONAL_COLS:
        if c not in df.columns:
            df[c] = ""

    df["Due date"] = pd.to_datetime(df["Due date"], errors="coerce")
    # Drop rows with invalid due dates
    if df["Due date"].isna().any():
        logger.warning(f"Dropping {df['Due date'].isna().sum()} rows with invalid due dates")
        df = df[df["Due date"].notna()].copy()

    df["Amount"] = pd.to_numeric(df["Amount"], errors="coerce").fillna(0.0).round(2)
    df["Paid"] = np.where(df["Paid"].fillna("").astype(str).str.strip().str.lower().isin(TRUE_VALUES), True, False)
    df["Payment date"] = pd.to_datetime(df["Payment date"], errors="coerce")
    df["Month"] = df["Month"].fillna("").astype(str).str.strip()
    df["Notes"] = df["Notes"].fillna("").astype(str)

    bills = []
    for _, r in df.iterrows():
        try:
            bills.append(Bill(
                month=r["Month"],
                amount=float(r["Amount"]),
                due_date=r["Due date"].date(),
                paid=bool(r["Paid"]),
                payment_date=None if pd.isna(r["Payment date"]) else r["Payment date"].date(),
                notes=r["Notes"],
            ))
        except ValidationError as e:
            logger.warning(f"Skipping invalid bill row: {e}")
    return bills

# ---------- Bill dates ----------
def statement_month(due_date: date) -> str:
    """Label of the statement month for a bill, the month before it falls due."""
    return (to_day(due_date) - relativedelta(months=1)).strftime("%B %Y")

def next_bill_due_date(due_date: date) -> date:
    """Due date one month later, keeping the day if the month has it."""
    return to_day(due_date) + relativedelta(months=1)

def bill_for_month(card: Card, month: str) -> Optional[Bill]:
    """The card's bill for a statement month, if one was already recorded."""
    return next((b for b in card.bills if b.month == month), None)

# ---------- Dashboard ----------
def dashboard_stats(cards: List[Card], now) -> Dict[str, float]:
    """
    Headline figures across all cards.
    Only positive, unpaid amounts count as outstanding; credits are ignored here.
    """
    today = to_day(now)
    all_bills = [b for c in cards for b in c.bills]

    upcoming = [b for b in all_bills if not b.paid and b.amount > 0 and b.due_date >= today]
    total_outstanding = sum(b.amount for b in all_bills if not b.paid and b.amount > 0)
    paid_this_month = sum(
        b.amount for b in all_bills
        if b.paid and b.payment_date and b.amount > 0
        and b.payment_date.year == today.year and b.payment_date.month == today.month
    )
    due_soon = [b for b in upcoming if (b.due_date - today).days <= DUE_SOON_DAYS]

    return {
        "total_outstanding": round(float(total_outstanding), 2),
        "upcoming_bills_count": len(upcoming),
        "cards_due_soon": len(due_soon),
        "total_paid_this_month": round(float(paid_this_month), 2),
    }

def urgency(due_date: date, now) -> Optional[str]:
    days = (to_day(due_date) - to_day(now)).days
    if days < 0:
        return "Overdue"
    if days <= DUE_SOON_DAYS:
        return "Due Soon"
    if days <= 15:
        return "Upcoming"
    return None

def upcoming_bills(cards: List[Card], now, limit: int = 5) -> List[Dict]:
    """Next unpaid bills across all cards, soonest first, with an urgency badge."""
    rows = []
    for c in cards:
        for b in c.bills:
            if b.paid:
                continue
            rows.append({
                "card_id": c.id,
                "card_name": c.card_name,
                "last4_digits": c.last4_digits,
                "bill": b,
                "urgency": urgency(b.due_date, now),
            })
    rows.sort(key=lambda r: r["bill"].due_date)
    return rows[:limit]

# ---------- Card labels ----------
def card_labels(cards: List[Card]) -> List[str]:
    """
    Column label per card: its name, suffixed with the last 4 digits (or a short id)
    when several cards share a name.
    """
    counts = Counter(c.card_name for c in cards)
    labels = [
        c.card_name if counts[c.card_name] == 1
        else f"{c.card_name} ••{c.last4_digits}" if c.last4_digits
        else f"{c.card_name} ({c.id[:8]})"
        for c in cards
    ]
    # Same name and same last 4: fall back to the id
    dupes = Counter(labels)
    return [
        lbl if dupes[lbl] == 1 else f"{c.card_name} ({c.id[:8]})"
        for lbl, c in zip(labels, cards)
    ]

# ---------- Monthly totals ----------
def monthly_bill_totals(cards: List[Card]) -> Optional[pd.DataFrame]:
    """
    Total positive bill amount per due-date month and card.
    Returns a DataFrame with YYYY-MM months as index (sorted) and cards as columns.
    """
    labels = dict(zip((c.id for c in cards), card_labels(cards)))
    rows = [
        {"YYYY-MM": b.due_date.strftime("%Y-%m"), "Card": labels[c.id], "Amount": b.amount}
        for c in cards for b in c.bills if b.amount > 0
    ]
    if not rows:
        return None
    tmp = pd.DataFrame(rows)
    g = (
        tmp.groupby(["YYYY-MM", "Card"])["Amount"]
        .sum()
        .unstack(fill_value=0.0)
        .sort_index()
    )
    return g

# ---------- Yearly summary ----------
def yearly_summary(cards: List[Card], year: int) -> pd.DataFrame:
    """
    Bill amount per statement month (rows) and card (columns) for one year, plus a Total row.
    Months without a bill show 0.
    """
    labels = [f"{m} {year}" for m in MONTH_NAMES]
    ids = [c.id for c in cards]
    g = pd.DataFrame(0.0, index=pd.Index(MONTH_NAMES, name="Month"), columns=ids)
    for c in cards:
        for b in c.bills:
            if b.month in labels:
                g.loc[b.month.split(" ")[0], c.id] += b.amount
    if ids:
        g.loc["Total"] = g.sum(axis=0)
    g.columns = card_labels(cards)
    return g

# ---------- Card comparison ----------
COMPARE_FEATURES = ["Bank", "Variant", "Annual Fee", "Credit Limit", "Perks", "Spend Trackers", "Fee Waiver"]

def compare_cards(cards: List[Card], currency: str) -> pd.DataFrame:
    """Side-by-side features (rows) per card (columns)."""
    table = {}
    for label, c in zip(card_labels(cards), cards):
        trackers = [f"{t.name}: {currency}{t.target_amount:,.0f} ({t.type.value})" for t in c.spend_trackers]
        table[label] = [
            c.bank_name or "N/A",
            c.card_variant,
            f"{currency}{c.annual_fee:,.0f}",
            f"{currency}{c.credit_limit:,.0f}" if c.credit_limit else "N/A",
            ", ".join(c.perks) if c.perks else "N/A",
            "; ".join(trackers) if trackers else "N/A",
            c.fee_waiver_criteria if c.fee_waiver_criteria and c.fee_waiver_criteria != "N/A" else "N/A",
        ]
    return pd.DataFrame(table, index=pd.Index(COMPARE_FEATURES, name="Feature"))
