# periods.py
# Recurring period math for spend trackers: stepping, bounds, containment search, labels

from typing import Callable, Dict, NamedTuple, Optional, Tuple
from datetime import date, datetime, timedelta
import logging

from dateutil.relativedelta import relativedelta

from config import LOG_LEVEL, MAX_PERIOD_STEPS
from models import RecurrenceType, SpendTracker

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


class InvalidRecurrenceTypeError(ValueError):
    """Raised for a recurrence type other than Monthly, Quarterly or Annual."""


class PeriodSearchLimitError(RuntimeError):
    """Raised when locating a period would walk past MAX_PERIOD_STEPS periods."""


class PeriodRule(NamedTuple):
    months: int
    label: Callable[[date], str]


def _quarter(d: date) -> int:
    return (d.month - 1) // 3 + 1


# One entry per recurrence type; every operation below dispatches through this table
PERIOD_RULES: Dict[RecurrenceType, PeriodRule] = {
    RecurrenceType.MONTHLY: PeriodRule(1, lambda d: d.strftime("%B %Y")),
    RecurrenceType.QUARTERLY: PeriodRule(3, lambda d: f"Q{_quarter(d)} {d.year}"),
    RecurrenceType.ANNUAL: PeriodRule(12, lambda d: str(d.year)),
}

# ---------- Input coercion ----------
def coerce_recurrence(value) -> RecurrenceType:
    """Return the RecurrenceType for `value`, which must be a member or its exact string value."""
    if isinstance(value, RecurrenceType):
        return value
    try:
        return RecurrenceType(value)
    except ValueError:
        raise InvalidRecurrenceTypeError(
            f"Unknown recurrence type {value!r}; expected one of "
            f"{', '.join(t.value for t in RecurrenceType)}"
        ) from None

def to_day(value) -> date:
    """Truncate a date or datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}: {value!r}")

def _rule(rtype) -> PeriodRule:
    return PERIOD_RULES[coerce_recurrence(rtype)]

# ---------- Stepping & bounds ----------
def period_step(period_start, rtype, direction: int, anchor_day: Optional[int] = None) -> date:
    """
    Start of the period after (+1) or before (-1) the one starting at `period_start`.

    The day of month is `anchor_day` (default: the day of `period_start`), clamped to
    the last day of the destination month. Passing the tracker's anchor day keeps a
    31st anchor on the 31st in months that have one, after passing through shorter months.
    """
    if direction not in (1, -1):
        raise ValueError(f"direction must be +1 or -1, got {direction!r}")
    if anchor_day is not None and not 1 <= anchor_day <= 31:
        raise ValueError(f"anchor_day must be between 1 and 31, got {anchor_day!r}")
    rule = _rule(rtype)
    start = to_day(period_start)
    return start + relativedelta(months=direction * rule.months, day=anchor_day or start.day)

def period_end(period_start, rtype, *, anchor_day: int) -> date:
    """
    Last day (inclusive) of the period starting at `period_start`.

    `anchor_day` is the day of month of the tracker's anchor. It is required: a start
    clamped into a short month (Feb 29 for a 31st anchor) ends the day before the
    next anchor-day start, not a month after its own day.
    """
    return period_step(period_start, rtype, 1, anchor_day) - timedelta(days=1)

def period_bounds(period_start, rtype, *, anchor_day: int) -> Tuple[date, date]:
    """Return the inclusive (start, end) of the period starting at `period_start`."""
    start = to_day(period_start)
    return start, period_end(start, rtype, anchor_day=anchor_day)

def tracker_bounds(tracker: SpendTracker, period_start) -> Tuple[date, date]:
    """Inclusive (start, end) of one of `tracker`'s periods."""
    return period_bounds(period_start, tracker.type, anchor_day=tracker.start_date.day)

def period_label(period_start, rtype) -> str:
    """'May 2024' for monthly, 'Q2 2024' for quarterly, '2024' for annual periods."""
    return _rule(rtype).label(to_day(period_start))

def calendar_period_start(now, rtype) -> date:
    """Start of the calendar month, quarter or year containing `now`; the default anchor for new trackers."""
    rule = _rule(rtype)
    day = to_day(now)
    month = ((day.month - 1) // rule.months) * rule.months + 1
    return date(day.year, month, 1)

# ---------- Containment search ----------
def _nth_period_start(anchor: date, rule: PeriodRule, n: int) -> date:
    # Always derived from the anchor itself so clamped months never shift later periods
    return anchor + relativedelta(months=n * rule.months)

def period_containing(target, anchor, rtype, max_steps: int = MAX_PERIOD_STEPS) -> date:
    """
    Find the start of the anchor-aligned period that contains `target`.

    Walks backwards from the anchor while the candidate start is after the target, or
    forwards while the next period start is still on or before the target. Raises
    PeriodSearchLimitError if that takes more than `max_steps` periods.
    """
    rule = _rule(rtype)
    target_day = to_day(target)
    anchor_day = to_day(anchor)

    n = 0
    if target_day < anchor_day:
        while _nth_period_start(anchor_day, rule, n) > target_day:
            n -= 1
            if -n > max_steps:
                break
    else:
        while _nth_period_start(anchor_day, rule, n + 1) <= target_day:
            n += 1
            if n > max_steps:
                break

    if abs(n) > max_steps:
        raise PeriodSearchLimitError(
            f"{target_day.isoformat()} is more than {max_steps} {coerce_recurrence(rtype).value.lower()} "
            f"periods away from anchor {anchor_day.isoformat()}"
        )

    start = _nth_period_start(anchor_day, rule, n)
    logger.debug(f"Period containing {target_day} (anchor {anchor_day}, {rtype}): {start} after {n} steps")
    return start
