# This project was developed with assistance from AI tools.
"""Loan list, creation and lifecycle service.

Route handlers call into this module; it loads records through the backend
client, runs the pure ``lending`` engine and writes accepted status changes
back. Transition rejections propagate to the caller unchanged.
"""

import logging

from lending.aggregates import compute_loan_aggregates, percent_paid
from lending.enums import LoanStatus, UserRole
from lending.errors import TransitionRejected
from lending.lifecycle import allowed_transitions, request_transition
from lending.listing import filter_by_status, filter_loans, paginate
from lending.models import ConsoleUser, Loan

from ..schemas import Pagination
from ..schemas.auth import UserContext
from ..schemas.loan import LoanCreate, LoanItem, LoanListResponse, LoanTransitionsResponse
from .backend import BackendClient, Scope

logger = logging.getLogger(__name__)


class LoanCreateError(ValueError):
    """Raised when a loan cannot be created for the requested account."""

    pass


def _to_item(loan: Loan) -> LoanItem:
    return LoanItem(**loan.model_dump(), percent_paid=percent_paid(loan))


async def list_loans(
    client: BackendClient,
    user: UserContext,
    scope: Scope,
    *,
    search: str | None = None,
    status: LoanStatus | None = None,
    page: int = 1,
    page_size: int = 5,
) -> LoanListResponse:
    """Return one page of loans matching ``search`` and ``status``.

    The summary covers every loan matching ``search``, across all statuses,
    so the per-status counts stay visible while one status is selected.
    """
    loans = await client.list_loans(scope, token=user.token)
    matched = filter_loans(loans, search)
    result = paginate(filter_by_status(matched, status), page=page, page_size=page_size)
    return LoanListResponse(
        data=[_to_item(loan) for loan in result.items],
        pagination=Pagination.from_page(result),
        summary=compute_loan_aggregates(matched),
    )


async def get_transitions(
    client: BackendClient,
    user: UserContext,
    scope: Scope,
    loan_id: str,
) -> LoanTransitionsResponse:
    loan = await client.get_loan(scope, loan_id, token=user.token)
    return LoanTransitionsResponse(
        loan_id=loan.id,
        status=loan.status,
        allowed=allowed_transitions(loan, user.role),
    )


async def transition_loan(
    client: BackendClient,
    user: UserContext,
    scope: Scope,
    loan_id: str,
    target: LoanStatus | str,
) -> LoanItem:
    """Move a loan to ``target`` if the caller's role allows it.

    The loan is re-read from the backend first so the check runs against its
    current status. Raises TransitionRejected (or a subclass) on refusal.
    """
    loan = await client.get_loan(scope, loan_id, token=user.token)
    try:
        updated = request_transition(loan, user.role, target)
    except TransitionRejected as exc:
        logger.info(
            "Loan transition rejected (%s): loan=%s user=%s role=%s %s -> %s",
            exc.code,
            loan.id,
            user.user_id,
            user.role.value,
            loan.status.value,
            getattr(target, "value", target),
        )
        raise

    stamped = None
    if updated.disbursement_date != loan.disbursement_date:
        stamped = updated.disbursement_date
    await client.update_loan_status(
        scope,
        loan.id,
        updated.status.value,
        disbursement_date=stamped,
        token=user.token,
    )
    logger.info(
        "Loan %s moved %s -> %s by user=%s role=%s",
        loan.id,
        loan.status.value,
        updated.status.value,
        user.user_id,
        user.role.value,
    )
    return _to_item(updated)


async def list_borrower_accounts(client: BackendClient, user: UserContext) -> list[ConsoleUser]:
    """Accounts a loan can be created for (``user`` role only)."""
    users = await client.list_users(token=user.token)
    return [u for u in users if u.role == UserRole.USER]


async def create_loan(client: BackendClient, user: UserContext, body: LoanCreate) -> LoanItem:
    """Create a pending loan for a borrower account."""
    accounts = await list_borrower_accounts(client, user)
    if not any(account.id == body.user_id for account in accounts):
        raise LoanCreateError(f"User '{body.user_id}' is not a borrower account")

    loan = await client.create_loan(body.to_backend(), token=user.token)
    logger.info("Loan %s created for user=%s by %s", loan.id, body.user_id, user.user_id)
    return _to_item(loan)
