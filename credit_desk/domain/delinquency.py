"""Delinquency classification - days late, severity tiers and the late-list filter"""

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Union

from credit_desk.domain.exceptions import InvalidInputError
from credit_desk.domain.models import DelinquencyTier, LatePayment
from credit_desk.utils.date_utils import as_datetime

# Tier thresholds (days late, inclusive)
WARNING_DAYS = 7
CRITICAL_DAYS = 30

# Filter control on the late payments screen: TODOS, +3 DIAS, +7 DIAS, +30 DIAS.
# Kept separate from the tier thresholds; 3 days never changes the tier.
FILTER_THRESHOLDS = (0, 3, 7, 30)

DateLike = Union[date, datetime]


def days_late(due_date: DateLike, now: DateLike) -> int:
    """
    Whole days elapsed since due_date, as of `now`.

    Partial days are truncated toward zero, and a due date in the future
    yields 0 rather than a negative count.

    Accepts dates or datetimes; a plain date is treated as midnight.
    """
    for name, value in (("due_date", due_date), ("now", now)):
        if not isinstance(value, date):
            raise InvalidInputError(f"{name} must be a date, got {value!r}")

    if not isinstance(due_date, datetime) and not isinstance(now, datetime):
        return max((now - due_date).days, 0)

    try:
        elapsed = as_datetime(now, due_date) - as_datetime(due_date, now)
    except TypeError as e:
        # naive vs aware datetimes
        raise InvalidInputError(str(e)) from e

    return max(int(elapsed / timedelta(days=1)), 0)


def classify(days: int) -> DelinquencyTier:
    """
    Map days late to a severity tier.

    Tiers:
    - 0 - 6:   CURRENT
    - 7 - 29:  WARNING
    - 30+:     CRITICAL
    """
    if days >= CRITICAL_DAYS:
        return DelinquencyTier.CRITICAL
    elif days >= WARNING_DAYS:
        return DelinquencyTier.WARNING
    else:
        return DelinquencyTier.CURRENT


def matches_filter(days: int, threshold: int) -> bool:
    """True when threshold is 0 (no filter) or the installment is at least `threshold` days late"""
    if threshold not in FILTER_THRESHOLDS:
        raise InvalidInputError(
            f"filter threshold must be one of {FILTER_THRESHOLDS}, got {threshold!r}"
        )
    return threshold == 0 or days >= threshold


def annotate_late_payments(items: Iterable[LatePayment], now: DateLike) -> List[LatePayment]:
    """Copies of the late payments with days late and tier filled in, as of `now`"""
    annotated = []
    for item in items:
        late = days_late(item.oldest_due_date, now)
        annotated.append(replace(item, days_late=late, tier=classify(late)))
    return annotated


def filter_late_payments(
    items: Iterable[LatePayment],
    threshold: int,
    now: DateLike,
) -> List[LatePayment]:
    """
    Annotated copies of the late payments passing the filter, most overdue
    first. The items passed in are left untouched.
    """
    # reject unsupported thresholds even when there is nothing to filter
    matches_filter(0, threshold)

    matching = [
        item for item in annotate_late_payments(items, now)
        if matches_filter(item.days_late, threshold)
    ]
    return sorted(matching, key=lambda lp: lp.days_late, reverse=True)


def count_by_tier(items: Iterable[LatePayment]) -> Dict[DelinquencyTier, int]:
    """Number of annotated late payments per tier, every tier present"""
    counts = {tier: 0 for tier in DelinquencyTier}
    for item in items:
        counts[item.tier] += 1
    return counts
