# This project was developed with assistance from AI tools.
"""Borrower request/response schemas for the admin and verifier views."""

from lending.aggregates import BorrowerAggregates
from lending.enums import AccountStatus, VettingStatus
from lending.models import Borrower, BorrowerApplicant
from pydantic import BaseModel, Field

from . import Pagination


class BorrowerListResponse(BaseModel):
    """Admin view: borrower accounts and their standing."""

    data: list[Borrower]
    pagination: Pagination
    summary: BorrowerAggregates


class ApplicantListResponse(BaseModel):
    """Verifier view: borrowers awaiting or past vetting."""

    data: list[BorrowerApplicant]
    pagination: Pagination
    summary: BorrowerAggregates


class BorrowerCreate(BaseModel):
    """Register a new borrower account (``user`` role)."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    phone: str | None = None


class AccountStatusUpdate(BaseModel):
    status: AccountStatus


class VettingStatusUpdate(BaseModel):
    status: VettingStatus
