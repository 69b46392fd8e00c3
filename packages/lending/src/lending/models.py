# This project was developed with assistance from AI tools.
"""Domain records exchanged with the loan backend.

The backend speaks camelCase JSON with Mongo-style ``_id`` keys. Every
model accepts that spelling (or snake_case) on input and serializes
snake_case. Records are frozen: the lifecycle engine returns copies.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import AccountStatus, LoanStatus, UserRole, VettingStatus


def _blank_if_null(value):
    return "" if value is None else value


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class BorrowerRef(_Record):
    """Borrower identity nested inside a loan.

    The backend sends ``"user": null`` once the account behind a loan has
    been deleted; such loans carry an empty reference.
    """

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: str = ""

    _nullable = field_validator("name", "email", mode="before")(_blank_if_null)


class Loan(_Record):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    borrower: BorrowerRef = Field(
        default_factory=BorrowerRef,
        validation_alias=AliasChoices("borrower", "user"),
    )
    amount: Decimal = Field(ge=0)
    interest_rate: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("interest_rate", "interestRate"),
    )
    tenure: int = Field(gt=0, description="Loan term in months.")
    application_date: datetime = Field(
        validation_alias=AliasChoices("application_date", "applicationDate"),
    )
    disbursement_date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("disbursement_date", "disbursementDate"),
    )
    status: LoanStatus = LoanStatus.PENDING
    amount_paid: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        validation_alias=AliasChoices("amount_paid", "amountPaid"),
    )
    total_amount_payable: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        validation_alias=AliasChoices("total_amount_payable", "totalAmountPayable"),
    )
    reason: str = ""

    _nullable = field_validator("reason", mode="before")(_blank_if_null)

    @field_validator("borrower", mode="before")
    @classmethod
    def _missing_borrower(cls, value):
        return {} if value is None else value

    @model_validator(mode="after")
    def _paid_within_payable(self) -> "Loan":
        if self.amount_paid > self.total_amount_payable:
            raise ValueError(
                f"amount_paid ({self.amount_paid}) exceeds "
                f"total_amount_payable ({self.total_amount_payable})"
            )
        return self


class Borrower(_Record):
    """Borrower account as seen by an admin (post-approval standing)."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    email: str
    phone: str = ""
    status: AccountStatus = AccountStatus.ACTIVE
    loans: int = Field(default=0, ge=0)
    total_borrowed: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        validation_alias=AliasChoices("total_borrowed", "totalBorrowed"),
    )
    last_activity: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("last_activity", "lastActivity"),
    )

    _nullable = field_validator("phone", mode="before")(_blank_if_null)


class BorrowerApplicant(_Record):
    """Borrower as seen by a verifier (pre-approval vetting)."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    email: str
    phone: str = ""
    status: VettingStatus = VettingStatus.PENDING
    date_applied: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("date_applied", "dateApplied"),
    )
    documents: list[str] = []

    _nullable = field_validator("phone", mode="before")(_blank_if_null)


class ConsoleUser(_Record):
    """Platform account listed on the manage-users page."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    email: str
    role: UserRole
    created_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt"),
    )
