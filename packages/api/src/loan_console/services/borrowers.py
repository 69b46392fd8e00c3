# This project was developed with assistance from AI tools.
"""Borrower listing, registration and status service.

Admins see borrower accounts and manage their standing; verifiers see
applicants and vet them. Both views go through the same functions, the
``scope`` argument picks the backend route and the record type.
"""

import logging
from datetime import UTC, datetime

from lending.aggregates import compute_borrower_aggregates
from lending.enums import AccountStatus, UserRole, VettingStatus
from lending.errors import TransitionRejected
from lending.lifecycle import request_borrower_transition
from lending.listing import filter_borrowers, filter_by_status, paginate
from lending.models import Borrower, BorrowerApplicant

from ..schemas import Pagination
from ..schemas.auth import UserContext
from ..schemas.borrower import ApplicantListResponse, BorrowerCreate, BorrowerListResponse
from .backend import BackendClient, Scope

logger = logging.getLogger(__name__)


async def list_borrowers(
    client: BackendClient,
    user: UserContext,
    scope: Scope,
    *,
    search: str | None = None,
    status: AccountStatus | VettingStatus | None = None,
    page: int = 1,
    page_size: int = 5,
) -> BorrowerListResponse | ApplicantListResponse:
    """Return one page of borrowers plus aggregates over the searched set.

    ``status`` narrows the page only; the summary still counts every status.
    """
    borrowers = await client.list_borrowers(scope, token=user.token)
    matched = filter_borrowers(borrowers, search)
    result = paginate(filter_by_status(matched, status), page=page, page_size=page_size)

    if scope == "admin":
        return BorrowerListResponse(
            data=result.items,
            pagination=Pagination.from_page(result),
            summary=compute_borrower_aggregates(matched, AccountStatus),
        )
    return ApplicantListResponse(
        data=result.items,
        pagination=Pagination.from_page(result),
        summary=compute_borrower_aggregates(matched, VettingStatus),
    )


async def transition_borrower(
    client: BackendClient,
    user: UserContext,
    scope: Scope,
    borrower_id: str,
    target: AccountStatus | VettingStatus | str,
) -> Borrower | BorrowerApplicant:
    """Change a borrower's standing (admin) or vetting status (verifier)."""
    borrower = await client.get_borrower(scope, borrower_id, token=user.token)
    try:
        updated = request_borrower_transition(borrower, user.role, target)
    except TransitionRejected as exc:
        logger.info(
            "Borrower transition rejected (%s): borrower=%s user=%s role=%s",
            exc.code,
            borrower.id,
            user.user_id,
            user.role.value,
        )
        raise

    await client.update_borrower_status(
        scope, borrower.id, updated.status.value, token=user.token
    )
    logger.info(
        "Borrower %s moved %s -> %s by user=%s",
        borrower.id,
        borrower.status.value,
        updated.status.value,
        user.user_id,
    )
    return updated


async def register_borrower(
    client: BackendClient, user: UserContext, body: BorrowerCreate
) -> Borrower:
    """Register a ``user``-role account and return it as a fresh borrower."""
    created = await client.register_user(
        name=body.name,
        email=body.email,
        password=body.password,
        role=UserRole.USER,
        phone=body.phone,
        token=user.token,
    )
    borrower = Borrower(
        id=str(created.get("_id") or created.get("id") or ""),
        name=created.get("name", body.name),
        email=created.get("email", body.email),
        phone=created.get("phone") or body.phone or "",
        status=AccountStatus.ACTIVE,
        last_activity=datetime.now(UTC),
    )
    logger.info("Borrower %s registered by %s", borrower.id, user.user_id)
    return borrower
