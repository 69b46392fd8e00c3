# This project was developed with assistance from AI tools.
"""
Domain enums for the microloan lifecycle.

Shared domain types used by the lifecycle engine (lending package) and the
request/response schemas (loan_console package).
"""

import enum


class LoanStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    APPROVED = "approved"
    DISBURSED = "disbursed"
    REPAYING = "repaying"
    COMPLETED = "completed"
    DEFAULTED = "defaulted"
    REJECTED = "rejected"

    @classmethod
    def terminal_statuses(cls) -> frozenset["LoanStatus"]:
        """Statuses where a loan can no longer move."""
        return frozenset({cls.COMPLETED, cls.DEFAULTED, cls.REJECTED})

    @classmethod
    def disbursed_statuses(cls) -> frozenset["LoanStatus"]:
        """Statuses reached only after money has left the lender."""
        return frozenset({cls.DISBURSED, cls.REPAYING, cls.COMPLETED, cls.DEFAULTED})


class AccountStatus(str, enum.Enum):
    """Post-approval standing of a borrower account (admin view)."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    BLACKLISTED = "blacklisted"


class VettingStatus(str, enum.Enum):
    """Pre-approval vetting of a borrower (verifier view)."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    VERIFIER = "verifier"
    USER = "user"

    @classmethod
    def privileged_roles(cls) -> frozenset["UserRole"]:
        """Roles that can only be granted by an admin."""
        return frozenset({cls.ADMIN, cls.VERIFIER})


class EmploymentStatus(str, enum.Enum):
    EMPLOYED = "Employed"
    SELF_EMPLOYED = "Self-employed"
    UNEMPLOYED = "Unemployed"
    STUDENT = "Student"
    RETIRED = "Retired"

    @classmethod
    def with_employer(cls) -> frozenset["EmploymentStatus"]:
        """Statuses that require employer name and address."""
        return frozenset({cls.EMPLOYED, cls.SELF_EMPLOYED})
