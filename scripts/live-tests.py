#!/usr/bin/env python3
# This project was developed with assistance from AI tools.
"""Live smoke suite for the loan console API.

Exercises the admin surface, RBAC and error bodies against a running
console wired to a running loan backend. Read-only unless --mutate is
given, in which case the first pending loan is walked through the
lifecycle as far as the backend allows.

Prerequisites:
  - Console running on localhost:8000 with AUTH_DISABLED=true (dev admin)
  - BACKEND_URL pointing at a backend holding at least one loan

Usage:
  ./scripts/live-tests.py               # read-only checks
  ./scripts/live-tests.py --mutate      # also drive one loan's lifecycle
"""

import argparse
import asyncio
import sys

import httpx

BASE = "http://localhost:8000"
HEADERS = {"Origin": "http://localhost:3000"}

# ---------------------------------------------------------------------------
# Test runner
# ---------------------------------------------------------------------------

PASS = 0
FAIL = 0
ERRORS: list[str] = []
SECTION = ""


def section(name: str):
    global SECTION
    SECTION = name
    print(f"\n{'=' * 60}")
    print(f"  {name}")
    print(f"{'=' * 60}\n")


def ok(name: str, passed: bool, detail: str = ""):
    global PASS, FAIL
    if passed:
        PASS += 1
        print(f"  PASS  {name}")
    else:
        FAIL += 1
        msg = f"[{SECTION}] {name}: {detail}" if detail else f"[{SECTION}] {name}"
        ERRORS.append(msg)
        print(f"  FAIL  {name} -- {detail}")


def has_keys(d: dict, *keys: str) -> bool:
    return all(k in d for k in keys)


def is_problem(body: dict) -> bool:
    return has_keys(body, "type", "title", "status", "detail", "code", "request_id")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


async def test_health(c: httpx.AsyncClient):
    section("Health")

    r = await c.get("/health/")
    ok("GET /health/ returns 200", r.status_code == 200)
    ok("status is ok", r.json() == {"status": "ok"})


async def test_loans(c: httpx.AsyncClient) -> list[dict]:
    section("Admin loans")

    r = await c.get("/api/admin/loans")
    ok("GET /api/admin/loans returns 200", r.status_code == 200, f"got {r.status_code}")
    if r.status_code != 200:
        return []
    body = r.json()
    ok("list envelope has data/pagination/summary", has_keys(body, "data", "pagination", "summary"))

    pagination = body["pagination"]
    ok("page holds at most page_size items", len(body["data"]) <= pagination["page_size"])

    summary = body["summary"]
    counts = sum(bucket["count"] for bucket in summary["by_status"].values())
    ok("status counts sum to total", counts == summary["total_loans"])
    ok("percentages within 0-100", 0 <= summary["repaid_percentage"] <= 100)

    r = await c.get("/api/admin/loans", params={"page": 10_000})
    ok("out-of-range page clamps", r.json()["pagination"]["page"] == pagination["total_pages"])

    r = await c.get("/api/admin/loans", params={"search": "zz-no-such-borrower-zz"})
    ok("non-matching search is empty", r.json()["data"] == [])

    r = await c.get("/api/admin/loans", params={"status": "pending"})
    tab = r.json()
    ok("status tab lists only that status", all(i["status"] == "pending" for i in tab["data"]))
    ok("status tab keeps full summary", tab["summary"]["total_loans"] == summary["total_loans"])

    for item in body["data"]:
        r = await c.get(f"/api/admin/loans/{item['id']}/transitions")
        ok(f"transitions for {item['id']}", r.status_code == 200, f"got {r.status_code}")
    return body["data"]


async def test_lifecycle(c: httpx.AsyncClient, loans: list[dict]):
    section("Lifecycle (mutating)")

    pending = [loan for loan in loans if loan["status"] == "pending"]
    if not pending:
        ok("a pending loan exists", False, "nothing to drive")
        return
    loan_id = pending[0]["id"]

    r = await c.patch(f"/api/admin/loans/{loan_id}/status", json={"status": "disbursed"})
    ok("pending -> disbursed is 409", r.status_code == 409, f"got {r.status_code}")
    ok("409 body is problem details", is_problem(r.json()))

    for target in ("verified", "approved", "disbursed"):
        r = await c.patch(f"/api/admin/loans/{loan_id}/status", json={"status": target})
        ok(f"-> {target}", r.status_code == 200, r.text[:120])
        if r.status_code != 200:
            return

    ok("disbursement date stamped", r.json().get("disbursement_date") is not None)

    r = await c.patch(f"/api/admin/loans/{loan_id}/status", json={"status": "disbursed"})
    ok("same status is 400", r.status_code == 400, f"got {r.status_code}")


async def test_borrowers_and_users(c: httpx.AsyncClient):
    section("Borrowers and users")

    r = await c.get("/api/admin/borrowers")
    ok("GET /api/admin/borrowers returns 200", r.status_code == 200, f"got {r.status_code}")
    if r.status_code == 200:
        summary = r.json()["summary"]
        ok("standing buckets present",
           set(summary["by_status"]) == {"active", "inactive", "blacklisted"})

    r = await c.get("/api/admin/users")
    ok("GET /api/admin/users returns 200", r.status_code == 200, f"got {r.status_code}")

    r = await c.post(
        "/api/admin/users",
        json={"name": "x", "email": "x@example.com", "password": "secret1", "role": "user"},
    )
    ok("borrower role on /users is 422", r.status_code == 422, f"got {r.status_code}")


async def test_rbac_and_errors(c: httpx.AsyncClient):
    section("RBAC and error bodies")

    r = await c.get("/api/verifier/loans")
    ok("dev admin is denied verifier routes", r.status_code == 403, f"got {r.status_code}")
    ok("403 body is problem details", is_problem(r.json()))

    r = await c.get("/api/admin/loans", params={"page": 0})
    ok("page=0 is 422", r.status_code == 422)

    r = await c.get(
        "/api/admin/loans/does-not-exist/transitions", headers={"x-request-id": "smoke-1"}
    )
    ok("unknown loan is 404 or 502", r.status_code in (404, 502), f"got {r.status_code}")
    ok("request id echoed", r.json().get("request_id") == "smoke-1")

    r = await c.get("/openapi.json")
    ok("OpenAPI schema served", r.status_code == 200)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


async def main():
    parser = argparse.ArgumentParser(description="Live smoke suite for the loan console API")
    parser.add_argument("--mutate", action="store_true",
                        help="Drive one pending loan through the lifecycle")
    args = parser.parse_args()

    print("=" * 60)
    print("  LIVE SMOKE SUITE -- loan console API")
    print("=" * 60)

    async with httpx.AsyncClient(base_url=BASE, headers=HEADERS, timeout=15) as c:
        try:
            r = await c.get("/health/")
            if r.status_code != 200:
                print(f"\n  Server returned {r.status_code} on /health/ -- is it running?")
                sys.exit(2)
        except httpx.ConnectError:
            print("\n  Cannot connect to server at localhost:8000 -- is it running?")
            sys.exit(2)

        await test_health(c)
        loans = await test_loans(c)
        if args.mutate:
            await test_lifecycle(c, loans)
        await test_borrowers_and_users(c)
        await test_rbac_and_errors(c)

    print(f"\n{'=' * 60}")
    print(f"  RESULTS: {PASS} passed, {FAIL} failed")
    print(f"{'=' * 60}")

    if ERRORS:
        print("\nFailures:")
        for e in ERRORS:
            print(f"  - {e}")

    sys.exit(0 if FAIL == 0 else 1)


if __name__ == "__main__":
    asyncio.run(main())
