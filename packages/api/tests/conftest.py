# This project was developed with assistance from AI tools.
"""Fixtures for console API tests.

The real app from ``loan_console.main`` is a module singleton.
``_clean_overrides`` clears dependency_overrides after every test so the
persona and backend double configured by one test never leak into the next.
The lifespan is not entered (no ``with TestClient(...)``), so no real
backend client is ever created.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from lending import Borrower, BorrowerApplicant, ConsoleUser, Loan, UserRole

from loan_console.main import app as real_app
from loan_console.middleware.auth import get_current_user
from loan_console.schemas.auth import UserContext
from loan_console.services.backend import BackendClient, get_backend_client

ADMIN_USER_ID = "admin-ngozi"
VERIFIER_USER_ID = "verifier-tunde"
BORROWER_USER_ID = "user-amaka"


@pytest.fixture(autouse=True)
def _clean_overrides():
    """Clear app dependency overrides after each test."""
    yield
    real_app.dependency_overrides.clear()


@pytest.fixture
def app():
    """Return the real FastAPI app with all routers mounted."""
    return real_app


@pytest.fixture
def admin_user() -> UserContext:
    return UserContext(
        user_id=ADMIN_USER_ID,
        role=UserRole.ADMIN,
        email="ngozi@microloan.example",
        name="Ngozi Eze",
        token="admin-token",
    )


@pytest.fixture
def verifier_user() -> UserContext:
    return UserContext(
        user_id=VERIFIER_USER_ID,
        role=UserRole.VERIFIER,
        email="tunde@microloan.example",
        name="Tunde Bello",
        token="verifier-token",
    )


@pytest.fixture
def borrower_user() -> UserContext:
    return UserContext(
        user_id=BORROWER_USER_ID,
        role=UserRole.USER,
        email="amaka@example.com",
        name="Amaka Obi",
        token="user-token",
    )


@pytest.fixture
def backend() -> AsyncMock:
    """Backend client double; every public coroutine is an AsyncMock."""
    return AsyncMock(spec=BackendClient)


@pytest.fixture
def make_client(app, backend):
    """Factory fixture: act as ``user`` against the mocked backend."""

    def _make(user: UserContext, **client_kwargs) -> TestClient:
        app.dependency_overrides[get_current_user] = lambda: user
        app.dependency_overrides[get_backend_client] = lambda: backend
        return TestClient(app, **client_kwargs)

    return _make


@pytest.fixture
def make_loan():
    """Build a Loan from backend-shaped (camelCase) fields."""

    def _make(loan_id="loan-1", status="pending", **overrides) -> Loan:
        payload = {
            "_id": loan_id,
            "user": {"_id": BORROWER_USER_ID, "name": "Amaka Obi", "email": "amaka@example.com"},
            "amount": 100000,
            "interestRate": 15,
            "tenure": 12,
            "applicationDate": "2026-01-05T09:00:00Z",
            "status": status,
            "amountPaid": 0,
            "totalAmountPayable": 115000,
            "reason": "Shop inventory",
        }
        payload.update(overrides)
        return Loan.model_validate(payload)

    return _make


@pytest.fixture
def make_borrower():
    def _make(borrower_id="user-amaka", name="Amaka Obi", **overrides) -> Borrower:
        fields = {
            "_id": borrower_id,
            "name": name,
            "email": f"{borrower_id}@example.com",
            "phone": "+2348000000000",
            "status": "active",
            "loans": 1,
            "totalBorrowed": 100000,
            "lastActivity": "2026-02-01T10:00:00Z",
        }
        fields.update(overrides)
        return Borrower.model_validate(fields)

    return _make


@pytest.fixture
def make_applicant():
    def _make(borrower_id="user-amaka", name="Amaka Obi", **overrides) -> BorrowerApplicant:
        fields = {
            "_id": borrower_id,
            "name": name,
            "email": f"{borrower_id}@example.com",
            "phone": "+2348000000000",
            "status": "pending",
            "dateApplied": "2026-01-03T08:00:00Z",
            "documents": ["id-card.pdf"],
        }
        fields.update(overrides)
        return BorrowerApplicant.model_validate(fields)

    return _make


@pytest.fixture
def make_console_user():
    def _make(user_id, name, role, email=None) -> ConsoleUser:
        return ConsoleUser(
            id=user_id,
            name=name,
            email=email or f"{user_id}@microloan.example",
            role=role,
            created_at=datetime(2026, 1, 1, tzinfo=UTC),
        )

    return _make
