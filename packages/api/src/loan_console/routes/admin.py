# This project was developed with assistance from AI tools.
"""Admin console routes: loans, borrowers and user management."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from lending.enums import AccountStatus, LoanStatus, UserRole
from lending.models import Borrower, ConsoleUser

from ..core.config import settings
from ..middleware.auth import CurrentUser, require_roles
from ..schemas.borrower import AccountStatusUpdate, BorrowerCreate, BorrowerListResponse
from ..schemas.loan import (
    LoanCreate,
    LoanItem,
    LoanListResponse,
    LoanStatusUpdate,
    LoanTransitionsResponse,
)
from ..schemas.user import PrivilegedUserCreate, UserListResponse, UserRoleUpdate
from ..services import borrowers as borrower_service
from ..services import loans as loan_service
from ..services import users as user_service
from ..services.backend import BackendClient, get_backend_client
from ..services.loans import LoanCreateError

router = APIRouter()

_ADMIN_ONLY = [Depends(require_roles(UserRole.ADMIN))]


# ---------------------------------------------------------------------------
# Loans
# ---------------------------------------------------------------------------


@router.get("/loans", response_model=LoanListResponse, dependencies=_ADMIN_ONLY)
async def list_loans(
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
    search: str | None = None,
    status_filter: LoanStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
) -> LoanListResponse:
    """List all loans with search, pagination and summary aggregates."""
    return await loan_service.list_loans(
        client,
        user,
        "admin",
        search=search,
        status=status_filter,
        page=page,
        page_size=settings.PAGE_SIZE,
    )


@router.post(
    "/loans",
    response_model=LoanItem,
    status_code=status.HTTP_201_CREATED,
    dependencies=_ADMIN_ONLY,
)
async def create_loan(
    body: LoanCreate,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> LoanItem:
    try:
        return await loan_service.create_loan(client, user, body)
    except LoanCreateError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )


@router.get(
    "/loans/{loan_id}/transitions",
    response_model=LoanTransitionsResponse,
    dependencies=_ADMIN_ONLY,
)
async def loan_transitions(
    loan_id: str,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> LoanTransitionsResponse:
    """Statuses the caller may move this loan to next."""
    return await loan_service.get_transitions(client, user, "admin", loan_id)


@router.patch("/loans/{loan_id}/status", response_model=LoanItem, dependencies=_ADMIN_ONLY)
async def update_loan_status(
    loan_id: str,
    body: LoanStatusUpdate,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> LoanItem:
    return await loan_service.transition_loan(client, user, "admin", loan_id, body.status)


# ---------------------------------------------------------------------------
# Borrowers
# ---------------------------------------------------------------------------


@router.get("/borrowers", response_model=BorrowerListResponse, dependencies=_ADMIN_ONLY)
async def list_borrowers(
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
    search: str | None = None,
    status_filter: AccountStatus | None = Query(default=None, alias="status"),
    page: int = Query(default=1, ge=1),
) -> BorrowerListResponse:
    return await borrower_service.list_borrowers(
        client,
        user,
        "admin",
        search=search,
        status=status_filter,
        page=page,
        page_size=settings.PAGE_SIZE,
    )


@router.post(
    "/borrowers",
    response_model=Borrower,
    status_code=status.HTTP_201_CREATED,
    dependencies=_ADMIN_ONLY,
)
async def register_borrower(
    body: BorrowerCreate,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> Borrower:
    return await borrower_service.register_borrower(client, user, body)


@router.patch("/borrowers/{borrower_id}/status", response_model=Borrower, dependencies=_ADMIN_ONLY)
async def update_borrower_status(
    borrower_id: str,
    body: AccountStatusUpdate,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> Borrower:
    """Set a borrower's account standing (active, inactive, blacklisted)."""
    return await borrower_service.transition_borrower(
        client, user, "admin", borrower_id, body.status
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@router.get("/users", response_model=UserListResponse, dependencies=_ADMIN_ONLY)
async def list_users(
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
    search: str | None = None,
    page: int = Query(default=1, ge=1),
) -> UserListResponse:
    return await user_service.list_users(
        client, user, search=search, page=page, page_size=settings.PAGE_SIZE
    )


@router.post(
    "/users",
    response_model=ConsoleUser,
    status_code=status.HTTP_201_CREATED,
    dependencies=_ADMIN_ONLY,
)
async def create_user(
    body: PrivilegedUserCreate,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> ConsoleUser:
    """Create an admin or verifier account."""
    return await user_service.create_privileged_user(client, user, body)


@router.put(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=_ADMIN_ONLY,
)
async def update_user_role(
    user_id: str,
    body: UserRoleUpdate,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> None:
    await user_service.change_role(client, user, user_id, body.role)


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=_ADMIN_ONLY,
)
async def delete_user(
    user_id: str,
    user: CurrentUser,
    client: BackendClient = Depends(get_backend_client),
) -> None:
    await user_service.delete_user(client, user, user_id)
