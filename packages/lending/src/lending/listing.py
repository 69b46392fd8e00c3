# This project was developed with assistance from AI tools.
"""Search and page-number pagination for console list views."""

import math
from enum import Enum
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from pydantic import BaseModel

from .models import Borrower, BorrowerApplicant, ConsoleUser, Loan

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 5


def matches(term: str, fields: Iterable[str | None]) -> bool:
    """True when any field contains ``term`` case-insensitively."""
    needle = term.lower()
    return any(needle in field.lower() for field in fields if field is not None)


def _loan_fields(loan: Loan) -> tuple[str, ...]:
    return (loan.borrower.name, loan.reason, loan.status.value)


def _borrower_fields(borrower: Borrower | BorrowerApplicant) -> tuple[str, ...]:
    return (borrower.name, borrower.email, borrower.phone)


def _user_fields(user: ConsoleUser) -> tuple[str, ...]:
    return (user.name, user.email, user.role.value)


def filter_records(
    items: Iterable[T],
    term: str | None,
    fields: Callable[[T], Iterable[str | None]],
) -> list[T]:
    """Keep records whose searchable fields match ``term``.

    An empty term keeps everything, in the original order.
    """
    items = list(items)
    if not term:
        return items
    return [item for item in items if matches(term, fields(item))]


def filter_loans(loans: Iterable[Loan], term: str | None) -> list[Loan]:
    return filter_records(loans, term, _loan_fields)


def filter_borrowers(
    borrowers: Iterable[Borrower | BorrowerApplicant], term: str | None
) -> list[Borrower | BorrowerApplicant]:
    return filter_records(borrowers, term, _borrower_fields)


def filter_users(users: Iterable[ConsoleUser], term: str | None) -> list[ConsoleUser]:
    return filter_records(users, term, _user_fields)


def filter_by_status(items: Iterable[T], status: Enum | str | None) -> list[T]:
    """Keep records whose ``status`` equals ``status``; None keeps everything."""
    items = list(items)
    if status is None:
        return items
    wanted = getattr(status, "value", status)
    return [item for item in items if item.status.value == wanted]


class Page(BaseModel):
    """One page of a list plus page-number metadata."""

    items: list
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[T], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice ``items`` to ``page`` (1-based).

    The page number is clamped into ``[1, total_pages]``; an empty
    collection yields page 1 with no items.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")

    total_items = len(items)
    total_pages = math.ceil(total_items / page_size)
    page = max(1, min(page, total_pages))
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
    )
