# This project was developed with assistance from AI tools.
"""Dashboard aggregates over loan and borrower collections.

All functions are pure and order-independent. Empty input degrades to
zeros; every percentage is zero-guarded and rounded half-up to one decimal.
"""

import enum
from collections import Counter
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict

from .enums import AccountStatus, LoanStatus
from .models import Borrower, BorrowerApplicant, Loan

_ONE_DECIMAL = Decimal("0.1")


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percentage(part, whole) -> float:
    """``part / whole * 100`` to one decimal place, ``0`` when ``whole`` is 0."""
    whole = _as_decimal(whole)
    if whole == 0:
        return 0.0
    ratio = _as_decimal(part) / whole * 100
    return float(ratio.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def percent_paid(loan: Loan) -> float:
    """Share of the total payable amount already repaid."""
    return percentage(loan.amount_paid, loan.total_amount_payable)


class StatusBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = 0
    percentage: float = 0.0


class LoanAggregates(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_loans: int
    total_amount: Decimal
    total_disbursed: Decimal
    total_repaid: Decimal
    disbursed_percentage: float
    repaid_percentage: float
    by_status: dict[str, StatusBucket]


class BorrowerAggregates(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_borrowers: int
    total_loans: int = 0
    total_borrowed: Decimal = Decimal("0")
    by_status: dict[str, StatusBucket]


def _buckets(statuses: Iterable, status_type: type[enum.Enum], total: int) -> dict:
    counts = Counter(statuses)
    return {
        status.value: StatusBucket(
            count=counts[status], percentage=percentage(counts[status], total)
        )
        for status in status_type
    }


def compute_loan_aggregates(loans: Iterable[Loan]) -> LoanAggregates:
    """Counts, sums and per-status shares for a loan collection.

    ``total_disbursed`` sums principal over loans that have left the lender
    (disbursed, repaying, completed, defaulted); ``total_repaid`` sums
    ``amount_paid`` over every loan.
    """
    loans = list(loans)
    disbursed = LoanStatus.disbursed_statuses()

    total_amount = sum((loan.amount for loan in loans), Decimal("0"))
    total_disbursed = sum(
        (loan.amount for loan in loans if loan.status in disbursed), Decimal("0")
    )
    total_repaid = sum((loan.amount_paid for loan in loans), Decimal("0"))

    return LoanAggregates(
        total_loans=len(loans),
        total_amount=total_amount,
        total_disbursed=total_disbursed,
        total_repaid=total_repaid,
        disbursed_percentage=percentage(total_disbursed, total_amount),
        repaid_percentage=percentage(total_repaid, total_disbursed),
        by_status=_buckets((loan.status for loan in loans), LoanStatus, len(loans)),
    )


def compute_borrower_aggregates(
    borrowers: Iterable[Borrower | BorrowerApplicant],
    status_type: type[enum.Enum] = AccountStatus,
) -> BorrowerAggregates:
    """Per-status counts and shares for either borrower view.

    ``status_type`` is ``AccountStatus`` for the admin view and
    ``VettingStatus`` for the verifier view. Loan totals are only carried
    by admin-view records and stay zero otherwise.
    """
    borrowers = list(borrowers)
    return BorrowerAggregates(
        total_borrowers=len(borrowers),
        total_loans=sum(getattr(b, "loans", 0) for b in borrowers),
        total_borrowed=sum(
            (getattr(b, "total_borrowed", Decimal("0")) for b in borrowers), Decimal("0")
        ),
        by_status=_buckets((b.status for b in borrowers), status_type, len(borrowers)),
    )
