# This project was developed with assistance from AI tools.
"""Route-level RBAC: each console surface is reachable by exactly one role."""

import pytest

ADMIN_ROUTES = [
    ("get", "/api/admin/loans"),
    ("get", "/api/admin/loans/loan-1/transitions"),
    ("patch", "/api/admin/loans/loan-1/status"),
    ("get", "/api/admin/borrowers"),
    ("patch", "/api/admin/borrowers/user-1/status"),
    ("get", "/api/admin/users"),
    ("delete", "/api/admin/users/user-1"),
]

VERIFIER_ROUTES = [
    ("get", "/api/verifier/loans"),
    ("get", "/api/verifier/loans/loan-1/transitions"),
    ("patch", "/api/verifier/loans/loan-1/verify"),
    ("get", "/api/verifier/borrowers"),
    ("patch", "/api/verifier/borrowers/user-1/status"),
    ("get", "/api/verifier/dashboard"),
]


def _call(client, method, path):
    if method == "patch":
        return client.patch(path, json={"status": "verified"})
    return getattr(client, method)(path)


@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
def test_verifier_cannot_reach_admin_routes(make_client, verifier_user, backend, method, path):
    resp = _call(make_client(verifier_user), method, path)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Insufficient permissions"
    assert backend.mock_calls == []


@pytest.mark.parametrize("method,path", VERIFIER_ROUTES)
def test_admin_cannot_reach_verifier_routes(make_client, admin_user, backend, method, path):
    resp = _call(make_client(admin_user), method, path)
    assert resp.status_code == 403
    assert backend.mock_calls == []


@pytest.mark.parametrize("method,path", ADMIN_ROUTES + VERIFIER_ROUTES)
def test_borrower_role_is_denied_everywhere(make_client, borrower_user, method, path):
    resp = _call(make_client(borrower_user), method, path)
    assert resp.status_code == 403


def test_rbac_denial_is_logged(make_client, borrower_user, caplog):
    with caplog.at_level("WARNING", logger="loan_console.middleware.auth"):
        make_client(borrower_user).get("/api/admin/loans")
    assert "RBAC denied" in caplog.text
    assert borrower_user.user_id in caplog.text
