# This project was developed with assistance from AI tools.
"""Loan request/response schemas."""

from decimal import Decimal

from lending.aggregates import LoanAggregates
from lending.enums import EmploymentStatus, LoanStatus
from lending.models import Loan
from pydantic import BaseModel, Field, model_validator

from . import Pagination


class LoanItem(Loan):
    """Loan row with its repayment progress."""

    percent_paid: float = 0.0


class LoanListResponse(BaseModel):
    """One page of loans plus aggregates over the whole filtered set."""

    data: list[LoanItem]
    pagination: Pagination
    summary: LoanAggregates


class LoanCreate(BaseModel):
    """Create a loan on behalf of a borrower account."""

    user_id: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    interest_rate: Decimal = Field(default=Decimal("15"), ge=0)
    tenure: int = Field(gt=0, description="Loan term in months.")
    reason: str = Field(min_length=1)
    employment_status: EmploymentStatus = EmploymentStatus.EMPLOYED
    employer_name: str | None = None
    employer_address: str | None = None

    @model_validator(mode="after")
    def _employer_details(self) -> "LoanCreate":
        if self.employment_status in EmploymentStatus.with_employer():
            if not (self.employer_name and self.employer_address):
                raise ValueError(
                    f"employer_name and employer_address are required when "
                    f"employment_status is '{self.employment_status.value}'"
                )
        return self

    def to_backend(self) -> dict:
        """Body for the backend's ``POST /api/admin/loans``."""
        body = {
            "user": self.user_id,
            "amount": float(self.amount),
            "interestRate": float(self.interest_rate),
            "tenure": self.tenure,
            "reason": self.reason,
            "employmentStatus": self.employment_status.value,
        }
        if self.employment_status in EmploymentStatus.with_employer():
            body["employerName"] = self.employer_name
            body["employerAddress"] = self.employer_address
        return body


class LoanStatusUpdate(BaseModel):
    """Requested lifecycle move for a loan."""

    status: LoanStatus


class LoanTransitionsResponse(BaseModel):
    """Statuses the caller may move a loan to from its current status."""

    loan_id: str
    status: LoanStatus
    allowed: list[LoanStatus]
