# navigator.py
# Paging state for one tracker's detail view: previous / current / next period

from typing import Iterable, Optional
from datetime import date

from models import Bill, SpendTracker, TrackerPeriod
from periods import period_containing, period_step, to_day
from spend import tracker_progress


class TrackerNavigator:
    """Holds the period currently viewed for a tracker and recomputes spend on each move."""

    def __init__(self, tracker: SpendTracker, bills: Iterable[Bill], today,
                 period_start: Optional[date] = None):
        self.tracker = tracker
        self.bills = list(bills)
        if period_start is None:
            period_start = period_containing(today, tracker.start_date, tracker.type)
        self.period_start = to_day(period_start)

    @property
    def anchor_day(self) -> int:
        return self.tracker.start_date.day

    def view(self) -> TrackerPeriod:
        return tracker_progress(self.tracker, self.bills, self.period_start)

    def next(self) -> TrackerPeriod:
        self.period_start = period_step(self.period_start, self.tracker.type, 1, self.anchor_day)
        return self.view()

    def previous(self) -> TrackerPeriod:
        self.period_start = period_step(self.period_start, self.tracker.type, -1, self.anchor_day)
        return self.view()

    def reset(self, today) -> TrackerPeriod:
        self.period_start = period_containing(today, self.tracker.start_date, self.tracker.type)
        return self.view()
