"""Collection helpers - outstanding balances and payment amounts"""

import math
from datetime import date
from numbers import Real
from typing import Iterable, List, Optional

from credit_desk.domain.exceptions import InvalidInputError
from credit_desk.domain.models import Installment, InstallmentStatus, PaymentType


def _unpaid(installments: Iterable[Installment]) -> List[Installment]:
    return [inst for inst in installments if inst.status != InstallmentStatus.PAID]


def pending_amount_cents(installments: Iterable[Installment]) -> int:
    """Outstanding balance over every installment not yet PAID (amount minus what was already paid)"""
    return sum(inst.amount_cents - inst.paid_cents for inst in _unpaid(installments))


def oldest_unpaid_due_date(installments: Iterable[Installment]) -> Optional[date]:
    """Earliest due date among unpaid installments, None when everything is paid"""
    due_dates = [inst.due_date for inst in _unpaid(installments)]
    return min(due_dates) if due_dates else None


def resolve_payment_amount(
    payment_type: PaymentType,
    pending_value: float,
    entered_amount: Optional[float] = None,
) -> float:
    """
    Amount to register for a collection.

    FULL settles the pending value; PARTIAL and INTEREST take the amount the
    collector typed. The result must be a positive finite number, and a
    partial payment cannot exceed what is pending.
    """
    try:
        payment_type = PaymentType(payment_type)
    except ValueError as e:
        raise InvalidInputError(f"unknown payment type: {payment_type!r}") from e

    # NaN would make every comparison below false and skip the partial cap
    if isinstance(pending_value, bool) or not isinstance(pending_value, Real):
        raise InvalidInputError(f"pending value must be a number, got {pending_value!r}")
    if not math.isfinite(pending_value) or pending_value < 0:
        raise InvalidInputError(f"pending value must be finite and not negative, got {pending_value!r}")

    if payment_type == PaymentType.FULL:
        amount = pending_value
    else:
        amount = entered_amount

    if amount is None or isinstance(amount, bool) or not isinstance(amount, Real):
        raise InvalidInputError(f"{payment_type.value} payment requires an amount, got {amount!r}")
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidInputError(f"payment amount must be positive, got {amount!r}")

    if payment_type == PaymentType.PARTIAL and amount > pending_value:
        raise InvalidInputError(
            f"partial payment {amount} exceeds pending value {pending_value}"
        )

    return float(amount)
