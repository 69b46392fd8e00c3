# This project was developed with assistance from AI tools.
"""HTTP client for the loan backend.

The backend owns every loan, borrower and user record; the console only
reads them and writes back validated status changes. One ``httpx.AsyncClient``
is shared per process and exposed as a singleton initialised at app startup
via ``init_backend_client()``.

Calls carry the caller's bearer token so the backend applies its own
authorization; the configured service token is used when there is none.
"""

import logging
from datetime import datetime
from typing import Any, Literal, TypeVar

import httpx
from lending.enums import UserRole
from lending.models import Borrower, BorrowerApplicant, ConsoleUser, Loan
from pydantic import BaseModel, ValidationError

from ..core.config import Settings

logger = logging.getLogger(__name__)

Scope = Literal["admin", "verifier"]

M = TypeVar("M", bound=BaseModel)


class BackendError(Exception):
    """The backend answered with an error or could not be reached.

    ``status_code`` is None for transport failures (timeouts, refused
    connections).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or response.reason_phrase)
    return response.reason_phrase


def _parse(model: type[M], payload: Any) -> M:
    """Validate one backend record; a malformed record is a bad gateway."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.error("Backend sent a malformed %s: %s", model.__name__, exc)
        raise BackendError(
            f"Loan backend returned a malformed {model.__name__} record", status_code=502
        ) from exc


class BackendClient:
    """Thin async wrapper around the backend's REST endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        service_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._service_token = service_token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self, token: str | None) -> dict[str, str]:
        bearer = token or self._service_token
        return {"Authorization": f"Bearer {bearer}"} if bearer else {}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: dict | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method, path, json=json, headers=self._headers(token)
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _error_message(exc.response)
            logger.error(
                "Backend %s %s failed: %s %s", method, path, exc.response.status_code, message
            )
            raise BackendError(message, status_code=exc.response.status_code) from exc
        except httpx.TransportError as exc:
            logger.error("Backend %s %s unreachable: %s", method, path, exc)
            raise BackendError("Loan backend unavailable") from exc

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    # -- Loans --

    async def list_loans(self, scope: Scope = "admin", *, token: str | None = None) -> list[Loan]:
        """All loans for admins; only the pending queue for verifiers."""
        path = "/api/admin/loans" if scope == "admin" else "/api/verifier/loans/pending"
        data = await self._request("GET", path, token=token)
        return [_parse(Loan, item) for item in data.get("loans", [])]

    async def get_loan(self, scope: Scope, loan_id: str, *, token: str | None = None) -> Loan:
        data = await self._request("GET", f"/api/{scope}/loans/{loan_id}", token=token)
        return _parse(Loan, data.get("loan", data))

    async def create_loan(self, payload: dict, *, token: str | None = None) -> Loan:
        data = await self._request("POST", "/api/admin/loans", token=token, json=payload)
        return _parse(Loan, data.get("loan", data))

    async def update_loan_status(
        self,
        scope: Scope,
        loan_id: str,
        status: str,
        *,
        disbursement_date: datetime | None = None,
        token: str | None = None,
    ) -> None:
        if scope == "admin":
            path = f"/api/admin/loans/{loan_id}/status"
        else:
            path = f"/api/verifier/loans/{loan_id}/verify"
        body: dict[str, Any] = {"status": status}
        if disbursement_date is not None:
            body["disbursementDate"] = disbursement_date.isoformat()
        await self._request("PATCH", path, token=token, json=body)

    # -- Borrowers --

    async def list_borrowers(
        self, scope: Scope = "admin", *, token: str | None = None
    ) -> list[Borrower] | list[BorrowerApplicant]:
        data = await self._request("GET", f"/api/{scope}/borrowers", token=token)
        model = Borrower if scope == "admin" else BorrowerApplicant
        return [_parse(model, item) for item in data.get("borrowers", [])]

    async def get_borrower(
        self, scope: Scope, borrower_id: str, *, token: str | None = None
    ) -> Borrower | BorrowerApplicant:
        data = await self._request("GET", f"/api/{scope}/borrowers/{borrower_id}", token=token)
        model = Borrower if scope == "admin" else BorrowerApplicant
        return _parse(model, data.get("borrower", data))

    async def update_borrower_status(
        self, scope: Scope, borrower_id: str, status: str, *, token: str | None = None
    ) -> None:
        await self._request(
            "PATCH",
            f"/api/{scope}/borrowers/{borrower_id}/status",
            token=token,
            json={"status": status},
        )

    # -- Users --

    async def list_users(self, *, token: str | None = None) -> list[ConsoleUser]:
        data = await self._request("GET", "/api/admin/users", token=token)
        return [_parse(ConsoleUser, item) for item in data.get("users", [])]

    async def register_user(
        self,
        *,
        name: str,
        email: str,
        password: str,
        role: UserRole,
        phone: str | None = None,
        token: str | None = None,
    ) -> dict:
        """Register an account; admin and verifier accounts use the privileged route."""
        privileged = role in UserRole.privileged_roles()
        path = "/api/auth/register/privileged" if privileged else "/api/auth/register"
        body: dict[str, Any] = {
            "name": name,
            "email": email,
            "password": password,
            "role": role.value,
        }
        if phone:
            body["phone"] = phone
        data = await self._request("POST", path, token=token, json=body)
        return data.get("user", data)

    async def update_user_role(
        self, user_id: str, role: UserRole, *, token: str | None = None
    ) -> None:
        await self._request(
            "PUT", f"/api/admin/users/{user_id}", token=token, json={"role": role.value}
        )

    async def delete_user(self, user_id: str, *, token: str | None = None) -> None:
        await self._request("DELETE", f"/api/admin/users/{user_id}", token=token)

    # -- Dashboard --

    async def get_verifier_dashboard(self, *, token: str | None = None) -> dict:
        return await self._request("GET", "/api/verifier/dashboard/stats", token=token)


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_client: BackendClient | None = None


def init_backend_client(cfg: Settings) -> BackendClient:
    """Initialise the singleton (called once from app lifespan)."""
    global _client  # noqa: PLW0603
    _client = BackendClient(
        base_url=cfg.BACKEND_URL,
        timeout=cfg.BACKEND_TIMEOUT_SECONDS,
        service_token=cfg.BACKEND_SERVICE_TOKEN,
    )
    logger.info("BackendClient initialised (base_url=%s)", cfg.BACKEND_URL)
    return _client


def get_backend_client() -> BackendClient:
    """Return the initialised BackendClient singleton."""
    if _client is None:
        raise RuntimeError("BackendClient not initialised -- call init_backend_client() first")
    return _client


async def close_backend_client() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None
