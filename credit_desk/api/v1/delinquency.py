"""POST /v1/delinquency - classify and filter the late payments list"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request

from credit_desk.api.v1.schemas import DelinquencyRequest, DelinquencyResponse, LatePaymentResult
from credit_desk.api.dependencies import get_request_id, get_today
from credit_desk.domain.delinquency import annotate_late_payments, count_by_tier, filter_late_payments
from credit_desk.domain.exceptions import InvalidInputError
from credit_desk.domain.models import DelinquencyTier, LatePayment
from credit_desk.infrastructure.observability.metrics import invalid_input_counter, record_tiers
from credit_desk.infrastructure.observability.logging import log_delinquency_query

router = APIRouter()


@router.post("/delinquency", response_model=DelinquencyResponse)
def classify_late_payments(
    request_body: DelinquencyRequest,
    request: Request,
    today: date = Depends(get_today),
):
    """
    Annotate each late client with days late and tier, then apply the
    TODOS / +3 / +7 / +30 DIAS filter.

    Returns:
        Matching clients, most overdue first, and tier counts over the
        whole (unfiltered) list
    """
    request_id = get_request_id(request)
    as_of = request_body.as_of or today

    late_payments = [
        LatePayment(
            client_id=item.client_id,
            client_name=item.client_name,
            client_phone=item.client_phone,
            oldest_due_date=item.oldest_due_date,
            total_pending=item.total_pending,
        )
        for item in request_body.items
    ]

    try:
        annotated = annotate_late_payments(late_payments, as_of)
        matching = filter_late_payments(annotated, request_body.filter_days, as_of)
    except InvalidInputError as e:
        invalid_input_counter.labels(operation="delinquency").inc()
        logging.warning(f"Invalid delinquency query: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    # counts cover the whole list, matching or not
    tier_counts = count_by_tier(annotated)
    record_tiers(tier_counts)
    log_delinquency_query(
        request_id,
        request_body.filter_days,
        received=len(late_payments),
        matched=len(matching),
        critical=tier_counts[DelinquencyTier.CRITICAL],
        as_of=as_of.isoformat(),
    )

    return DelinquencyResponse(
        as_of=as_of,
        filter_days=request_body.filter_days,
        items=[
            LatePaymentResult(
                client_id=lp.client_id,
                client_name=lp.client_name,
                client_phone=lp.client_phone,
                oldest_due_date=lp.oldest_due_date,
                total_pending=lp.total_pending,
                days_late=lp.days_late,
                tier=lp.tier,
            )
            for lp in matching
        ],
        tier_counts=tier_counts,
    )
