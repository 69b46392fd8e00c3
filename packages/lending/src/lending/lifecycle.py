# This project was developed with assistance from AI tools.
"""Role-indexed status lifecycles and the transition engine.

A lifecycle is a table ``{role: {from_status: frozenset(to_statuses)}}``.
The union over roles is the lifecycle graph; a status with no outgoing
edge in that graph is terminal. Transition requests are validated in a
fixed order: degenerate input, unknown edge, role permission.

Everything here is pure. The engine validates the *intent* of a status
change and returns a new record; persisting it is the caller's job.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .enums import AccountStatus, LoanStatus, UserRole, VettingStatus
from .errors import DegenerateInput, Forbidden, InvalidTransition
from .models import Borrower, BorrowerApplicant, Loan


def _coerce(enum_type: type[enum.Enum], value: Any, what: str) -> Any:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError as exc:
        raise DegenerateInput(f"Unknown {what}: {value!r}") from exc


def _describe(statuses) -> str:
    if not statuses:
        return "none (terminal status)"
    return str(sorted(s.value for s in statuses))


@dataclass(frozen=True)
class StatusLifecycle:
    """Transition table for one status axis."""

    name: str
    status_type: type[enum.Enum]
    permissions: Mapping[UserRole, Mapping[Any, frozenset]]

    def graph(self) -> dict[Any, frozenset]:
        """Edges allowed for at least one role, keyed by source status."""
        edges: dict[Any, set] = {status: set() for status in self.status_type}
        for table in self.permissions.values():
            for source, targets in table.items():
                edges[source] |= targets
        return {source: frozenset(targets) for source, targets in edges.items()}

    def terminal_statuses(self) -> frozenset:
        return frozenset(source for source, targets in self.graph().items() if not targets)

    def allowed_targets(self, role: UserRole | str, current: Any) -> frozenset:
        """Statuses ``role`` may move a record in ``current`` to."""
        role = _coerce(UserRole, role, "role")
        current = _coerce(self.status_type, current, f"{self.name} status")
        return self.permissions.get(role, {}).get(current, frozenset())

    def check(self, current: Any, role: UserRole | str, target: Any) -> tuple[Any, UserRole, Any]:
        """Validate a transition and return the coerced ``(current, role, target)``.

        Raises:
            DegenerateInput: unknown status or role, or ``target == current``.
            InvalidTransition: no role has the ``current -> target`` edge.
            Forbidden: the edge exists but ``role`` may not take it.
        """
        current = _coerce(self.status_type, current, f"{self.name} status")
        target = _coerce(self.status_type, target, f"{self.name} status")
        role = _coerce(UserRole, role, "role")

        if target == current:
            raise DegenerateInput(
                f"{self.name.capitalize()} is already '{current.value}'.",
                current=current,
                target=target,
                role=role,
            )

        reachable = self.graph()[current]
        if target not in reachable:
            raise InvalidTransition(
                f"Cannot transition {self.name} from '{current.value}' to '{target.value}'. "
                f"Allowed: {_describe(reachable)}.",
                current=current,
                target=target,
                role=role,
            )

        if target not in self.allowed_targets(role, current):
            raise Forbidden(
                f"Role '{role.value}' may not move {self.name} from "
                f"'{current.value}' to '{target.value}'.",
                current=current,
                target=target,
                role=role,
            )
        return current, role, target


LOAN_LIFECYCLE = StatusLifecycle(
    name="loan",
    status_type=LoanStatus,
    permissions={
        UserRole.VERIFIER: {
            LoanStatus.PENDING: frozenset({LoanStatus.VERIFIED, LoanStatus.REJECTED}),
        },
        UserRole.ADMIN: {
            LoanStatus.PENDING: frozenset(
                {LoanStatus.VERIFIED, LoanStatus.APPROVED, LoanStatus.REJECTED}
            ),
            LoanStatus.VERIFIED: frozenset({LoanStatus.APPROVED, LoanStatus.REJECTED}),
            LoanStatus.APPROVED: frozenset({LoanStatus.DISBURSED, LoanStatus.REJECTED}),
            LoanStatus.DISBURSED: frozenset({LoanStatus.REPAYING, LoanStatus.DEFAULTED}),
            LoanStatus.REPAYING: frozenset({LoanStatus.COMPLETED, LoanStatus.DEFAULTED}),
        },
    },
)

# Admins may override account standing freely; there is no terminal standing.
ACCOUNT_STANDING_LIFECYCLE = StatusLifecycle(
    name="borrower",
    status_type=AccountStatus,
    permissions={
        UserRole.ADMIN: {
            source: frozenset(s for s in AccountStatus if s is not source)
            for source in AccountStatus
        },
    },
)

VETTING_LIFECYCLE = StatusLifecycle(
    name="borrower",
    status_type=VettingStatus,
    permissions={
        UserRole.VERIFIER: {
            VettingStatus.PENDING: frozenset({VettingStatus.VERIFIED, VettingStatus.REJECTED}),
        },
    },
)


def request_transition(
    loan: Loan,
    acting_role: UserRole | str,
    target_status: LoanStatus | str,
    *,
    now: datetime | None = None,
) -> Loan:
    """Return ``loan`` moved to ``target_status`` on behalf of ``acting_role``.

    Moving to ``disbursed`` stamps ``disbursement_date`` (with ``now``,
    defaulting to the current UTC time) unless it is already set. The input
    loan is left untouched.
    """
    _, _, target = LOAN_LIFECYCLE.check(loan.status, acting_role, target_status)

    updates: dict[str, Any] = {"status": target}
    if target is LoanStatus.DISBURSED and loan.disbursement_date is None:
        updates["disbursement_date"] = now or datetime.now(UTC)
    return loan.model_copy(update=updates)


def _lifecycle_for(record: Borrower | BorrowerApplicant) -> StatusLifecycle:
    if isinstance(record, Borrower):
        return ACCOUNT_STANDING_LIFECYCLE
    if isinstance(record, BorrowerApplicant):
        return VETTING_LIFECYCLE
    raise TypeError(f"No borrower lifecycle for {type(record).__name__}")


def request_borrower_transition(
    borrower: Borrower | BorrowerApplicant,
    acting_role: UserRole | str,
    target_status: AccountStatus | VettingStatus | str,
) -> Borrower | BorrowerApplicant:
    """Return ``borrower`` moved to ``target_status``.

    Account standing (admin view) and vetting (verifier view) are separate
    lifecycles; the record type selects which one applies.
    """
    lifecycle = _lifecycle_for(borrower)
    _, _, target = lifecycle.check(borrower.status, acting_role, target_status)
    return borrower.model_copy(update={"status": target})


def allowed_transitions(
    record: Loan | Borrower | BorrowerApplicant,
    acting_role: UserRole | str,
) -> list:
    """Statuses ``acting_role`` may move ``record`` to, in declaration order."""
    lifecycle = LOAN_LIFECYCLE if isinstance(record, Loan) else _lifecycle_for(record)
    allowed = lifecycle.allowed_targets(acting_role, record.status)
    return [status for status in lifecycle.status_type if status in allowed]
