from datetime import date

from models import Bill, RecurrenceType, SpendTracker
from navigator import TrackerNavigator
from periods import period_label, period_end

def _monthly_31st():
    return SpendTracker(name="Milestone", type=RecurrenceType.MONTHLY, target_amount=50, start_date=date(2024, 1, 31))

BILLS = [
    Bill(due_date=date(2024, 2, 29), amount=10),
    Bill(due_date=date(2024, 3, 15), amount=20),
    Bill(due_date=date(2024, 3, 31), amount=5),
]

def test_starts_on_period_containing_today():
    nav = TrackerNavigator(_monthly_31st(), BILLS, date(2024, 2, 10))
    snap = nav.view()
    assert (snap.start, snap.end) == (date(2024, 1, 31), date(2024, 2, 28))
    assert snap.spend == 0

def test_paging_keeps_anchor_day():
    nav = TrackerNavigator(_monthly_31st(), BILLS, date(2024, 2, 10))
    snap = nav.next()
    assert (snap.start, snap.end) == (date(2024, 2, 29), date(2024, 3, 30))
    assert snap.spend == 30
    assert snap.progress.percent == 60
    snap = nav.next()
    assert snap.start == date(2024, 3, 31)
    assert snap.spend == 5

    assert nav.previous().start == date(2024, 2, 29)
    assert nav.previous().start == date(2024, 1, 31)
    assert nav.previous().start == date(2023, 12, 31)

def test_reset_returns_to_current_period():
    nav = TrackerNavigator(_monthly_31st(), BILLS, date(2024, 2, 10))
    nav.next()
    nav.next()
    assert nav.reset(date(2024, 3, 20)).start == date(2024, 2, 29)

def test_explicit_period_start_is_kept():
    nav = TrackerNavigator(_monthly_31st(), BILLS, date(2024, 2, 10), period_start=date(2024, 3, 31))
    assert nav.view().start == date(2024, 3, 31)

def test_label_and_bounds_share_period_start():
    tracker = SpendTracker(name="Annual fee", type=RecurrenceType.QUARTERLY, target_amount=100, start_date=date(2024, 2, 15))
    nav = TrackerNavigator(tracker, BILLS, date(2024, 6, 1))
    for _ in range(5):
        snap = nav.previous()
        assert snap.label == period_label(snap.start, tracker.type)
        assert snap.end == period_end(snap.start, tracker.type, anchor_day=15)
