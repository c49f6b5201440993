"""POST /v1/loans/preview - loan cost preview for the origination form"""

import logging
from fastapi import APIRouter, HTTPException, Request

from credit_desk.api.v1.schemas import InstallmentSchema, PreviewRequest, PreviewResponse
from credit_desk.api.dependencies import get_request_id
from credit_desk.config import settings
from credit_desk.domain.amortization import compute_for_terms, generate_schedule
from credit_desk.domain.exceptions import InvalidInputError
from credit_desk.domain.models import LoanTerms
from credit_desk.infrastructure.observability.metrics import invalid_input_counter, record_preview
from credit_desk.infrastructure.observability.logging import log_preview

router = APIRouter()


@router.post("/loans/preview", response_model=PreviewResponse)
def preview_loan(request_body: PreviewRequest, request: Request):
    """
    Project interest, total and installment value for a loan being typed in.

    Omitted rate and count fall back to the form defaults. When a first due
    date is sent, the full installment schedule is returned as well.
    """
    request_id = get_request_id(request)

    terms = LoanTerms(
        principal=request_body.principal,
        interest_rate=(
            request_body.interest_rate
            if request_body.interest_rate is not None
            else settings.default_interest_rate
        ),
        installment_count=(
            request_body.installment_count
            if request_body.installment_count is not None
            else settings.default_installment_count
        ),
        frequency=request_body.frequency,
    )

    try:
        result = compute_for_terms(terms)

        installments = None
        if request_body.first_due_date is not None:
            schedule = generate_schedule(
                terms,
                request_body.first_due_date,
                max_installments=settings.max_schedule_installments,
            )
            installments = [
                InstallmentSchema(
                    number=inst.number,
                    due_date=inst.due_date,
                    amount_cents=inst.amount_cents,
                    status=inst.status,
                )
                for inst in schedule
            ]

    except InvalidInputError as e:
        invalid_input_counter.labels(operation="loan_preview").inc()
        logging.warning(f"Invalid loan terms: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_preview(terms.frequency.value)
    log_preview(
        request_id,
        terms.frequency.value,
        terms.installment_count,
        result.total_amount,
        installments is not None,
    )

    return PreviewResponse(
        principal=terms.principal,
        interest_rate=terms.interest_rate,
        installment_count=terms.installment_count,
        frequency=terms.frequency,
        total_interest=result.total_interest,
        total_amount=result.total_amount,
        installment_value=result.installment_value,
        installments=installments,
    )
