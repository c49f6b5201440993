"""Loan cost projection and installment schedule generation"""

import math
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from numbers import Real
from typing import List, Optional

from credit_desk.domain.exceptions import InvalidInputError
from credit_desk.domain.models import AmortizationResult, Installment, LoanTerms, PaymentFrequency
from credit_desk.utils.date_utils import add_months


def _require_non_negative(name: str, value) -> float:
    # bool is an int subclass; a checkbox value is never a currency amount
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"{name} must not be negative, got {value!r}")
    return float(value)


def _require_installment_count(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"installment_count must be an integer, got {value!r}")
    if value < 1:
        raise InvalidInputError(f"installment_count must be at least 1, got {value}")
    return value


def compute(principal: float, rate_percent: float, installment_count: int) -> AmortizationResult:
    """
    Project the cost of a loan with flat interest.

    Interest is charged once over the whole principal and the total is spread
    evenly across installments:

        total_interest    = principal * rate_percent / 100
        total_amount      = principal + total_interest
        installment_value = total_amount / installment_count

    Example:
        compute(1000, 10, 24) → interest 100.00, total 1100.00, 45.83 per installment

    Raises:
        InvalidInputError: negative or non-finite amounts, fewer than one
            installment, or a total too large to represent
    """
    principal = _require_non_negative("principal", principal)
    rate_percent = _require_non_negative("interest_rate", rate_percent)
    installment_count = _require_installment_count(installment_count)

    total_interest = principal * (rate_percent / 100)
    total_amount = principal + total_interest
    installment_value = total_amount / installment_count

    # finite inputs can still overflow, e.g. 1e308 at 1000%
    if not (math.isfinite(total_amount) and math.isfinite(installment_value)):
        raise InvalidInputError(
            f"loan total overflows: principal {principal!r} at {rate_percent!r}%"
        )

    return AmortizationResult(
        total_interest=total_interest,
        total_amount=total_amount,
        installment_value=installment_value,
    )


def compute_for_terms(terms: LoanTerms) -> AmortizationResult:
    """Convenience wrapper: compute() over a LoanTerms record"""
    return compute(terms.principal, terms.interest_rate, terms.installment_count)


def to_cents(amount: float) -> int:
    """Round a currency amount half-up to whole cents"""
    if not math.isfinite(amount):
        raise InvalidInputError(f"amount must be finite, got {amount!r}")
    try:
        cents = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP) * 100
    except InvalidOperation as e:
        # more digits than the decimal context can hold
        raise InvalidInputError(f"amount too large to split into cents: {amount!r}") from e
    return int(cents)


def next_due_date(first_due_date: date, frequency: PaymentFrequency, index: int) -> date:
    """Due date of the installment `index` steps after the first one (0-based)"""
    if frequency == PaymentFrequency.DAILY:
        return first_due_date + timedelta(days=index)
    if frequency == PaymentFrequency.WEEKLY:
        return first_due_date + timedelta(weeks=index)
    return add_months(first_due_date, index)


def generate_schedule(
    terms: LoanTerms,
    first_due_date: date,
    max_installments: Optional[int] = None,
) -> List[Installment]:
    """
    Generate the installment schedule for a loan.

    Requirements:
    - Equal installments of total_amount / installment_count, in cents
    - Due dates step by frequency from first_due_date (monthly keeps the
      day of month, clamped to the month's last day)
    - Last installment absorbs rounding remainder so the sum is exact

    Example:
        total 1100.00 over 24 → 23 × 45.83 and a last installment of 45.91
        110000 cents / 24 = 4583 base, remainder 8
    """
    result = compute_for_terms(terms)
    count = terms.installment_count

    if max_installments is not None and count > max_installments:
        raise InvalidInputError(
            f"installment_count must not exceed {max_installments}, got {count}"
        )

    total_cents = to_cents(result.total_amount)
    base_amount = total_cents // count
    remainder = total_cents % count

    installments = []
    for i in range(count):
        amount = base_amount + (remainder if i == count - 1 else 0)
        installments.append(
            Installment(
                number=i + 1,
                due_date=next_due_date(first_due_date, terms.frequency, i),
                amount_cents=amount,
            )
        )

    return installments
