"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class PaymentFrequency(str, Enum):
    """How often installments fall due"""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class DelinquencyTier(str, Enum):
    """Severity of an overdue installment, ordered from least to most severe"""

    CURRENT = "CURRENT"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class InstallmentStatus(str, Enum):
    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    LATE = "LATE"
    PAID = "PAID"


class PaymentType(str, Enum):
    """Kind of payment registered at collection time"""

    FULL = "FULL"
    PARTIAL = "PARTIAL"
    INTEREST = "INTEREST"


@dataclass(frozen=True)
class LoanTerms:
    """Conditions captured at loan origination"""

    principal: float
    interest_rate: float  # percentage, e.g. 10.0 for 10%
    installment_count: int
    frequency: PaymentFrequency = PaymentFrequency.DAILY


@dataclass(frozen=True)
class AmortizationResult:
    """Cost projection derived from LoanTerms, never persisted"""

    total_interest: float
    total_amount: float
    installment_value: float


@dataclass
class Installment:
    """Single payment in a repayment schedule"""

    number: int
    due_date: date
    amount_cents: int
    paid_cents: int = 0
    status: InstallmentStatus = InstallmentStatus.PENDING


@dataclass
class LatePayment:
    """Client with unpaid installments, as listed on the late payments screen"""

    client_id: str
    client_name: str
    oldest_due_date: date
    total_pending: float
    days_late: int = 0
    tier: DelinquencyTier = DelinquencyTier.CURRENT
    client_phone: Optional[str] = None
