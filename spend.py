# spend.py
# Spend aggregation over a tracker period and progress against the target

from typing import Iterable, Optional
import logging

import pandas as pd

from config import LOG_LEVEL, HISTORY_PERIODS
from models import Bill, Progress, SpendTracker, TrackerPeriod
from periods import period_containing, period_label, period_step, to_day, tracker_bounds

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

def spend_in_period(bills: Iterable[Bill], start, end) -> float:
    """
    Sum the amounts of bills due between `start` and `end`, both inclusive.
    Credits (negative amounts) reduce the total; there is no floor at zero.
    """
    start_dt, end_dt = to_day(start), to_day(end)
    total = sum(b.amount for b in bills if start_dt <= to_day(b.due_date) <= end_dt)
    return round(float(total), 2)

def progress(spend: float, target: float) -> Progress:
    # A zero target means "no goal": 0% rather than a division error
    percent = (spend / target) * 100 if target > 0 else 0.0
    return Progress(
        percent=percent,
        remaining=max(0.0, target - spend),
        completed=percent >= 100,
    )

def tracker_progress(tracker: SpendTracker, bills: Iterable[Bill], period_start) -> TrackerPeriod:
    """Spend and progress of `tracker` for the period starting at `period_start`."""
    start, end = tracker_bounds(tracker, period_start)
    spend = spend_in_period(bills, start, end)
    return TrackerPeriod(
        label=period_label(start, tracker.type),
        start=start,
        end=end,
        spend=spend,
        target=tracker.target_amount,
        progress=progress(spend, tracker.target_amount),
    )

def current_tracker_progress(tracker: SpendTracker, bills: Iterable[Bill], today) -> TrackerPeriod:
    """Snapshot of the period that contains `today`."""
    start = period_containing(today, tracker.start_date, tracker.type)
    return tracker_progress(tracker, bills, start)

def period_history(tracker: SpendTracker, bills: Iterable[Bill], today,
                   periods: Optional[int] = None) -> pd.DataFrame:
    """
    Spend per period for the last `periods` periods, oldest first, ending with the
    period containing `today`.
    Columns: Period, Start, End, Spend, Target, Percent, Completed.
    """
    count = HISTORY_PERIODS if periods is None else periods
    if count < 1:
        raise ValueError(f"periods must be at least 1, got {count!r}")
    bills = list(bills)
    starts = [period_containing(today, tracker.start_date, tracker.type)]
    for _ in range(count - 1):
        starts.append(period_step(starts[-1], tracker.type, -1, tracker.start_date.day))

    rows = []
    for start in reversed(starts):
        snap = tracker_progress(tracker, bills, start)
        rows.append({
            "Period": snap.label,
            "Start": snap.start, "End": snap.end,
            "Spend": snap.spend, "Target": snap.target,
            "Percent": round(snap.progress.percent, 1),
            "Completed": snap.progress.completed,
        })
    logger.debug(f"Built {len(rows)} history rows for tracker {tracker.id}")
    return pd.DataFrame(rows, columns=["Period", "Start", "End", "Spend", "Target", "Percent", "Completed"])
