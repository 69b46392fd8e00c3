# This project was developed with assistance from AI tools.
"""Verifier dashboard response schemas."""

from datetime import datetime
from decimal import Decimal

from lending.models import BorrowerRef
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

DEFAULT_ACTIVITY_REASON = "Loan Application"


class DashboardStats(BaseModel):
    """Headline figures computed by the backend."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total_loans: int = Field(default=0, validation_alias=AliasChoices("total_loans", "totalLoans"))
    total_borrowers: int = Field(
        default=0, validation_alias=AliasChoices("total_borrowers", "totalBorrowers")
    )
    verified_loans: int = Field(
        default=0, validation_alias=AliasChoices("verified_loans", "verifiedLoans")
    )
    rejected_loans: int = Field(
        default=0, validation_alias=AliasChoices("rejected_loans", "rejectedLoans")
    )
    cash_disbursed: Decimal = Field(
        default=Decimal("0"), validation_alias=AliasChoices("cash_disbursed", "cashDisbursed")
    )
    cash_received: Decimal = Field(
        default=Decimal("0"), validation_alias=AliasChoices("cash_received", "cashReceived")
    )
    total_savings: Decimal = Field(
        default=Decimal("0"), validation_alias=AliasChoices("total_savings", "totalSavings")
    )


class ChartPoint(BaseModel):
    """One labelled value in a monthly series."""

    name: str
    value: float


class DashboardCharts(BaseModel):
    loans_released_monthly: list[ChartPoint] = []
    outstanding_loans_monthly: list[ChartPoint] = []
    repayments_collected_monthly: list[ChartPoint] = []


class RecentLoan(BaseModel):
    """Loan summary row in the recent-activity table."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    borrower: BorrowerRef = Field(validation_alias=AliasChoices("borrower", "user"))
    amount: Decimal
    application_date: datetime | None = Field(
        default=None, validation_alias=AliasChoices("application_date", "applicationDate")
    )
    status: str
    reason: str = DEFAULT_ACTIVITY_REASON


class VerifierDashboardResponse(BaseModel):
    stats: DashboardStats
    charts: DashboardCharts
    recent_activity: list[RecentLoan]
