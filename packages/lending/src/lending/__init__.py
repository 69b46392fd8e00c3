# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .aggregates import (
    BorrowerAggregates,
    LoanAggregates,
    StatusBucket,
    compute_borrower_aggregates,
    compute_loan_aggregates,
    percent_paid,
    percentage,
)
from .enums import AccountStatus, EmploymentStatus, LoanStatus, UserRole, VettingStatus
from .errors import DegenerateInput, Forbidden, InvalidTransition, TransitionRejected
from .lifecycle import (
    ACCOUNT_STANDING_LIFECYCLE,
    LOAN_LIFECYCLE,
    VETTING_LIFECYCLE,
    StatusLifecycle,
    allowed_transitions,
    request_borrower_transition,
    request_transition,
)
from .listing import (
    DEFAULT_PAGE_SIZE,
    Page,
    filter_borrowers,
    filter_by_status,
    filter_loans,
    filter_records,
    filter_users,
    matches,
    paginate,
)
from .models import Borrower, BorrowerApplicant, BorrowerRef, ConsoleUser, Loan

__all__ = [
    "__version__",
    # Enums
    "LoanStatus",
    "AccountStatus",
    "VettingStatus",
    "UserRole",
    "EmploymentStatus",
    # Records
    "Loan",
    "BorrowerRef",
    "Borrower",
    "BorrowerApplicant",
    "ConsoleUser",
    # Lifecycle engine
    "StatusLifecycle",
    "LOAN_LIFECYCLE",
    "ACCOUNT_STANDING_LIFECYCLE",
    "VETTING_LIFECYCLE",
    "request_transition",
    "request_borrower_transition",
    "allowed_transitions",
    "TransitionRejected",
    "DegenerateInput",
    "InvalidTransition",
    "Forbidden",
    # Aggregates
    "StatusBucket",
    "LoanAggregates",
    "BorrowerAggregates",
    "compute_loan_aggregates",
    "compute_borrower_aggregates",
    "percent_paid",
    "percentage",
    # Listing
    "DEFAULT_PAGE_SIZE",
    "Page",
    "matches",
    "filter_records",
    "filter_loans",
    "filter_borrowers",
    "filter_users",
    "filter_by_status",
    "paginate",
]
