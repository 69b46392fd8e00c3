# This project was developed with assistance from AI tools.
"""Manage-users service (admin only)."""

import logging
from datetime import UTC, datetime

from lending.enums import UserRole
from lending.listing import filter_users, paginate
from lending.models import ConsoleUser

from ..schemas import Pagination
from ..schemas.auth import UserContext
from ..schemas.user import PrivilegedUserCreate, UserListResponse
from .backend import BackendClient

logger = logging.getLogger(__name__)


async def list_users(
    client: BackendClient,
    user: UserContext,
    *,
    search: str | None = None,
    page: int = 1,
    page_size: int = 5,
) -> UserListResponse:
    users = await client.list_users(token=user.token)
    result = paginate(filter_users(users, search), page=page, page_size=page_size)
    return UserListResponse(data=result.items, pagination=Pagination.from_page(result))


async def create_privileged_user(
    client: BackendClient, user: UserContext, body: PrivilegedUserCreate
) -> ConsoleUser:
    created = await client.register_user(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
        token=user.token,
    )
    account = ConsoleUser(
        id=str(created.get("_id") or created.get("id") or ""),
        name=created.get("name", body.name),
        email=created.get("email", body.email),
        role=created.get("role", body.role),
        created_at=created.get("createdAt") or datetime.now(UTC),
    )
    logger.info("%s account %s created by %s", account.role.value, account.id, user.user_id)
    return account


async def change_role(
    client: BackendClient, user: UserContext, user_id: str, role: UserRole
) -> None:
    await client.update_user_role(user_id, role, token=user.token)
    logger.info("User %s role set to %s by %s", user_id, role.value, user.user_id)


async def delete_user(client: BackendClient, user: UserContext, user_id: str) -> None:
    await client.delete_user(user_id, token=user.token)
    logger.info("User %s deleted by %s", user_id, user.user_id)
