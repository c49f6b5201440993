"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import Dict, List, Optional

from credit_desk.domain.models import (
    DelinquencyTier,
    InstallmentStatus,
    PaymentFrequency,
    PaymentType,
)


class PreviewRequest(BaseModel):
    """Request body for POST /v1/loans/preview

    Ranges are enforced by the domain so form input gets one consistent error.
    """

    principal: float = Field(..., description="Amount lent, excluding interest")
    interest_rate: Optional[float] = Field(None, description="Flat interest over the loan, in percent")
    installment_count: Optional[int] = Field(None, description="Number of installments")
    frequency: PaymentFrequency = PaymentFrequency.DAILY
    first_due_date: Optional[date] = Field(None, description="Due date of installment 1; enables the schedule")


class InstallmentSchema(BaseModel):
    """Single installment in a repayment schedule"""

    number: int
    due_date: date
    amount_cents: int
    paid_cents: int = 0
    status: InstallmentStatus = InstallmentStatus.PENDING


class PreviewResponse(BaseModel):
    """Response for POST /v1/loans/preview"""

    principal: float
    interest_rate: float
    installment_count: int
    frequency: PaymentFrequency
    total_interest: float
    total_amount: float
    installment_value: float
    installments: Optional[List[InstallmentSchema]] = None


class LatePaymentItem(BaseModel):
    """Client with unpaid installments, as fetched from the data service"""

    client_id: str = Field(..., min_length=1)
    client_name: str
    client_phone: Optional[str] = None
    oldest_due_date: date
    total_pending: float


class LatePaymentResult(LatePaymentItem):
    days_late: int
    tier: DelinquencyTier


class DelinquencyRequest(BaseModel):
    """Request body for POST /v1/delinquency"""

    as_of: Optional[date] = Field(None, description="Reference date; defaults to today in the business timezone")
    filter_days: int = Field(0, description="0 (all), 3, 7 or 30")
    items: List[LatePaymentItem]


class DelinquencyResponse(BaseModel):
    """Response for POST /v1/delinquency"""

    as_of: date
    filter_days: int
    items: List[LatePaymentResult]
    tier_counts: Dict[DelinquencyTier, int]


class PendingRequest(BaseModel):
    """Request body for POST /v1/collections/pending"""

    as_of: Optional[date] = None
    installments: List[InstallmentSchema]


class PendingResponse(BaseModel):
    """Response for POST /v1/collections/pending"""

    pending_cents: int
    oldest_due_date: Optional[date] = None
    days_late: int
    tier: DelinquencyTier


class PaymentAmountRequest(BaseModel):
    """Request body for POST /v1/collections/payment-amount"""

    payment_type: PaymentType
    pending_value: float
    amount: Optional[float] = None


class PaymentAmountResponse(BaseModel):
    """Response for POST /v1/collections/payment-amount"""

    payment_type: PaymentType
    amount: float
