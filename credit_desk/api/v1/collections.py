"""Collection endpoints - outstanding balance and payment amount validation"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_desk.api.v1.schemas import (
    PaymentAmountRequest,
    PaymentAmountResponse,
    PendingRequest,
    PendingResponse,
)
from credit_desk.api.dependencies import get_request_id, get_today
from credit_desk.domain.delinquency import classify, days_late
from credit_desk.domain.exceptions import InvalidInputError
from credit_desk.domain.models import Installment
from credit_desk.domain.payments import (
    oldest_unpaid_due_date,
    pending_amount_cents,
    resolve_payment_amount,
)
from credit_desk.infrastructure.observability.metrics import invalid_input_counter

router = APIRouter()


@router.post("/collections/pending", response_model=PendingResponse)
def get_pending(request_body: PendingRequest, today: date = Depends(get_today)):
    """
    Outstanding balance of a loan, as shown when renegotiating.

    Days late and tier are measured from the oldest unpaid installment;
    a fully paid loan is 0 days late.
    """
    as_of = request_body.as_of or today
    installments = [
        Installment(
            number=inst.number,
            due_date=inst.due_date,
            amount_cents=inst.amount_cents,
            paid_cents=inst.paid_cents,
            status=inst.status,
        )
        for inst in request_body.installments
    ]

    oldest = oldest_unpaid_due_date(installments)
    late = days_late(oldest, as_of) if oldest is not None else 0

    return PendingResponse(
        pending_cents=pending_amount_cents(installments),
        oldest_due_date=oldest,
        days_late=late,
        tier=classify(late),
    )


@router.post("/collections/payment-amount", response_model=PaymentAmountResponse)
def validate_payment_amount(request_body: PaymentAmountRequest, request: Request):
    """
    Resolve the amount a collector is about to register.

    Posting the payment is done by the data service; this only makes sure
    what gets posted is a positive, finite amount.
    """
    request_id = get_request_id(request)

    try:
        amount = resolve_payment_amount(
            request_body.payment_type,
            request_body.pending_value,
            request_body.amount,
        )
    except InvalidInputError as e:
        invalid_input_counter.labels(operation="payment_amount").inc()
        logging.warning(f"Invalid payment amount: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    return PaymentAmountResponse(payment_type=request_body.payment_type, amount=amount)
