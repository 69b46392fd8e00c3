# This project was developed with assistance from AI tools.
"""Manage-users request/response schemas."""

from lending.enums import UserRole
from lending.models import ConsoleUser
from pydantic import BaseModel, Field, field_validator

from . import Pagination


class UserListResponse(BaseModel):
    data: list[ConsoleUser]
    pagination: Pagination


class PrivilegedUserCreate(BaseModel):
    """Create an admin or verifier account."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    role: UserRole = UserRole.ADMIN

    @field_validator("role")
    @classmethod
    def _privileged_only(cls, role: UserRole) -> UserRole:
        if role not in UserRole.privileged_roles():
            raise ValueError("Borrower accounts are created from the borrowers page")
        return role


class UserRoleUpdate(BaseModel):
    role: UserRole

