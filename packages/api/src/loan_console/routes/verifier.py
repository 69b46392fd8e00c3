# This project was developed with assistance from AI tools.
"""Verifier console routes: pending loans, borrower vetting and dashboard."""

from fastapi import APIRouter, Depends, Query
from lending.enums import LoanStatus, UserRole, VettingStatus
from lending.models import BorrowerApplicant

from ..core.config import settings
from ..middleware.auth import CurrentUser, require_roles
from ..schemas.borrower import ApplicantListResponse, VettingStatusUpdate
from ..schemas.dashboard import VerifierDashboardResponse
from ..schemas.loan import (
    LoanItem,
    LoanListResponse,
    LoanStatusUpdate,
    LoanTransitionsResponse,
)
from ..services import borrowers as borrower_service
from ..services import loans as loan_service
from ..services.backend import BackendClient, get_backend_client
from ..services.dashboard import get_verifier_dashboard

router = APIRouter()

_VERIFIER_ONLY = [Depends(require_roles(UserRole.VERIFIER))]


@router.get("/loans", response_model=LoanListResponse, dependencies=_VERIFIER_ONLY)
async def list_pending_loans(
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
    search: str | None = None,
    status_filter: LoanStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
) -> LoanListResponse:
    """Loans waiting for verification."""
    return await loan_service.list_loans(
        client,
        user,
        "verifier",
        search=search,
        status=status_filter,
        page=page,
        page_size=settings.PAGE_SIZE,
    )


@router.get(
    "/loans/{loan_id}/transitions",
    response_model=LoanTransitionsResponse,
    dependencies=_VERIFIER_ONLY,
)
async def loan_transitions(
    loan_id: str,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> LoanTransitionsResponse:
    """Statuses a verifier may move this loan to next."""
    return await loan_service.get_transitions(client, user, "verifier", loan_id)


@router.patch("/loans/{loan_id}/verify", response_model=LoanItem, dependencies=_VERIFIER_ONLY)
async def verify_loan(
    loan_id: str,
    body: LoanStatusUpdate,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> LoanItem:
    """Mark a pending loan verified or rejected."""
    return await loan_service.transition_loan(client, user, "verifier", loan_id, body.status)


@router.get("/borrowers", response_model=ApplicantListResponse, dependencies=_VERIFIER_ONLY)
async def list_applicants(
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
    search: str | None = None,
    status_filter: VettingStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
) -> ApplicantListResponse:
    return await borrower_service.list_borrowers(
        client,
        user,
        "verifier",
        search=search,
        status=status_filter,
        page=page,
        page_size=settings.PAGE_SIZE,
    )


@router.patch(
    "/borrowers/{borrower_id}/status",
    response_model=BorrowerApplicant,
    dependencies=_VERIFIER_ONLY,
)
async def vet_borrower(
    borrower_id: str,
    body: VettingStatusUpdate,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> BorrowerApplicant:
    return await borrower_service.transition_borrower(
        client, user, "verifier", borrower_id, body.status
    )


@router.get("/dashboard", response_model=VerifierDashboardResponse, dependencies=_VERIFIER_ONLY)
async def dashboard(
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> VerifierDashboardResponse:
    return await get_verifier_dashboard(client, user)
