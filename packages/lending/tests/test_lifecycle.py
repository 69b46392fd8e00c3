# This project was developed with assistance from AI tools.
"""Tests for the role-indexed lifecycle engine."""

import itertools
from datetime import UTC, datetime

import pytest

from lending import (
    ACCOUNT_STANDING_LIFECYCLE,
    LOAN_LIFECYCLE,
    VETTING_LIFECYCLE,
    AccountStatus,
    Borrower,
    BorrowerApplicant,
    DegenerateInput,
    Forbidden,
    InvalidTransition,
    Loan,
    LoanStatus,
    TransitionRejected,
    UserRole,
    VettingStatus,
    allowed_transitions,
    request_borrower_transition,
    request_transition,
)

# Rows of the loan transition table, flattened to (role, from, to).
_PERMITTED = {
    (UserRole.VERIFIER, LoanStatus.PENDING, LoanStatus.VERIFIED),
    (UserRole.VERIFIER, LoanStatus.PENDING, LoanStatus.REJECTED),
    (UserRole.ADMIN, LoanStatus.PENDING, LoanStatus.VERIFIED),
    (UserRole.ADMIN, LoanStatus.PENDING, LoanStatus.APPROVED),
    (UserRole.ADMIN, LoanStatus.PENDING, LoanStatus.REJECTED),
    (UserRole.ADMIN, LoanStatus.VERIFIED, LoanStatus.APPROVED),
    (UserRole.ADMIN, LoanStatus.VERIFIED, LoanStatus.REJECTED),
    (UserRole.ADMIN, LoanStatus.APPROVED, LoanStatus.DISBURSED),
    (UserRole.ADMIN, LoanStatus.APPROVED, LoanStatus.REJECTED),
    (UserRole.ADMIN, LoanStatus.DISBURSED, LoanStatus.REPAYING),
    (UserRole.ADMIN, LoanStatus.DISBURSED, LoanStatus.DEFAULTED),
    (UserRole.ADMIN, LoanStatus.REPAYING, LoanStatus.COMPLETED),
    (UserRole.ADMIN, LoanStatus.REPAYING, LoanStatus.DEFAULTED),
}


def _loan(status=LoanStatus.PENDING, **overrides) -> Loan:
    fields = {
        "id": "loan-1",
        "borrower": {"id": "user-1", "name": "Amaka Obi", "email": "amaka@example.com"},
        "amount": "100000",
        "interest_rate": "15",
        "tenure": 12,
        "application_date": datetime(2026, 1, 5, tzinfo=UTC),
        "status": status,
        "amount_paid": "0",
        "total_amount_payable": "115000",
        "reason": "Shop inventory",
    }
    fields.update(overrides)
    return Loan(**fields)


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("role,current,target", sorted(_PERMITTED))
def test_permitted_transitions_succeed(role, current, target):
    """Every row of the table is accepted and only the status changes."""
    loan = _loan(current)
    updated = request_transition(loan, role, target)
    assert updated.status == target
    assert updated.id == loan.id
    assert updated.amount == loan.amount


def test_no_other_transition_succeeds():
    """Every (role, from, to) triple outside the table is rejected without mutation."""
    for role, current, target in itertools.product(UserRole, LoanStatus, LoanStatus):
        if (role, current, target) in _PERMITTED:
            continue
        loan = _loan(current)
        with pytest.raises(TransitionRejected):
            request_transition(loan, role, target)
        assert loan.status == current


@pytest.mark.parametrize("terminal", sorted(LoanStatus.terminal_statuses()))
@pytest.mark.parametrize("role", list(UserRole))
def test_terminal_statuses_never_move(terminal, role):
    """completed, defaulted and rejected have no outgoing transition for any role."""
    for target in LoanStatus:
        if target == terminal:
            continue
        with pytest.raises(InvalidTransition):
            request_transition(_loan(terminal), role, target)


def test_graph_terminals_match_enum():
    """Terminal statuses derived from the table agree with LoanStatus."""
    assert LOAN_LIFECYCLE.terminal_statuses() == LoanStatus.terminal_statuses()


def test_user_role_has_no_edges():
    """A borrower-facing user may not move any loan."""
    with pytest.raises(Forbidden):
        request_transition(_loan(LoanStatus.PENDING), UserRole.USER, LoanStatus.VERIFIED)


# ---------------------------------------------------------------------------
# Validation order
# ---------------------------------------------------------------------------


def test_verifier_cannot_approve():
    """Scenario: verifier pending -> approved is Forbidden (edge exists for admin)."""
    with pytest.raises(Forbidden) as exc_info:
        request_transition(_loan(LoanStatus.PENDING), UserRole.VERIFIER, LoanStatus.APPROVED)
    assert exc_info.value.role == UserRole.VERIFIER
    assert exc_info.value.target == LoanStatus.APPROVED


def test_unknown_edge_reported_before_permission():
    """completed -> pending is InvalidTransition even for a role with no edges."""
    with pytest.raises(InvalidTransition, match="Allowed: none"):
        request_transition(_loan(LoanStatus.COMPLETED), UserRole.USER, LoanStatus.PENDING)


def test_same_status_is_degenerate():
    with pytest.raises(DegenerateInput, match="already 'approved'"):
        request_transition(_loan(LoanStatus.APPROVED), UserRole.ADMIN, LoanStatus.APPROVED)


def test_unknown_target_is_degenerate():
    with pytest.raises(DegenerateInput, match="Unknown loan status"):
        request_transition(_loan(), UserRole.ADMIN, "archived")


def test_unknown_role_is_degenerate():
    with pytest.raises(DegenerateInput, match="Unknown role"):
        request_transition(_loan(), "auditor", LoanStatus.VERIFIED)


def test_string_inputs_are_accepted():
    """Raw wire values are coerced to enums."""
    updated = request_transition(_loan(), "admin", "approved")
    assert updated.status is LoanStatus.APPROVED


def test_rejections_are_value_errors():
    """Callers that only catch ValueError still see rejections."""
    assert issubclass(TransitionRejected, ValueError)
    for cls in (DegenerateInput, InvalidTransition, Forbidden):
        assert issubclass(cls, TransitionRejected)


# ---------------------------------------------------------------------------
# Disbursement stamp
# ---------------------------------------------------------------------------


def test_disbursing_stamps_disbursement_date():
    """Scenario: admin approved -> disbursed populates disbursement_date."""
    loan = _loan(LoanStatus.APPROVED)
    assert loan.disbursement_date is None

    updated = request_transition(loan, UserRole.ADMIN, LoanStatus.DISBURSED)

    assert updated.status == LoanStatus.DISBURSED
    assert updated.disbursement_date is not None
    assert loan.disbursement_date is None


def test_disbursing_uses_supplied_clock():
    now = datetime(2026, 3, 1, 9, 30, tzinfo=UTC)
    updated = request_transition(
        _loan(LoanStatus.APPROVED), UserRole.ADMIN, LoanStatus.DISBURSED, now=now
    )
    assert updated.disbursement_date == now


def test_existing_disbursement_date_is_kept():
    earlier = datetime(2025, 12, 1, tzinfo=UTC)
    loan = _loan(LoanStatus.APPROVED, disbursement_date=earlier)
    updated = request_transition(loan, UserRole.ADMIN, LoanStatus.DISBURSED)
    assert updated.disbursement_date == earlier


def test_other_transitions_leave_disbursement_date_alone():
    updated = request_transition(_loan(LoanStatus.PENDING), UserRole.ADMIN, LoanStatus.APPROVED)
    assert updated.disbursement_date is None


# ---------------------------------------------------------------------------
# Allowed transitions lookup
# ---------------------------------------------------------------------------


def test_allowed_transitions_for_admin_pending():
    assert allowed_transitions(_loan(LoanStatus.PENDING), UserRole.ADMIN) == [
        LoanStatus.VERIFIED,
        LoanStatus.APPROVED,
        LoanStatus.REJECTED,
    ]


def test_allowed_transitions_for_verifier_after_pending():
    assert allowed_transitions(_loan(LoanStatus.VERIFIED), UserRole.VERIFIER) == []


def test_allowed_transitions_for_terminal_loan():
    assert allowed_transitions(_loan(LoanStatus.DEFAULTED), UserRole.ADMIN) == []


# ---------------------------------------------------------------------------
# Borrower lifecycles
# ---------------------------------------------------------------------------


def _borrower(status=AccountStatus.ACTIVE) -> Borrower:
    return Borrower(id="b-1", name="Tunde Bello", email="tunde@example.com", status=status)


def _applicant(status=VettingStatus.PENDING) -> BorrowerApplicant:
    return BorrowerApplicant(id="a-1", name="Zara Musa", email="zara@example.com", status=status)


@pytest.mark.parametrize("current,target", [
    (a, b) for a in AccountStatus for b in AccountStatus if a != b
])
def test_admin_can_override_account_standing(current, target):
    updated = request_borrower_transition(_borrower(current), UserRole.ADMIN, target)
    assert updated.status == target


def test_verifier_cannot_change_account_standing():
    with pytest.raises(Forbidden):
        request_borrower_transition(_borrower(), UserRole.VERIFIER, AccountStatus.BLACKLISTED)


def test_account_standing_has_no_terminal_status():
    assert ACCOUNT_STANDING_LIFECYCLE.terminal_statuses() == frozenset()


def test_verifier_vets_pending_applicant():
    updated = request_borrower_transition(_applicant(), UserRole.VERIFIER, VettingStatus.VERIFIED)
    assert updated.status == VettingStatus.VERIFIED


def test_vetting_outcomes_are_terminal():
    assert VETTING_LIFECYCLE.terminal_statuses() == frozenset(
        {VettingStatus.VERIFIED, VettingStatus.REJECTED}
    )
    with pytest.raises(InvalidTransition):
        request_borrower_transition(
            _applicant(VettingStatus.REJECTED), UserRole.VERIFIER, VettingStatus.VERIFIED
        )


def test_axes_are_not_conflated():
    """An account standing value is not a vetting status."""
    with pytest.raises(DegenerateInput):
        request_borrower_transition(_applicant(), UserRole.VERIFIER, AccountStatus.ACTIVE)


def test_borrower_transition_rejects_other_records():
    with pytest.raises(TypeError):
        request_borrower_transition(_loan(), UserRole.ADMIN, AccountStatus.ACTIVE)
