# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Kept apart from ``middleware/auth.py`` so role resolution can be tested
and reused without the request lifecycle.
"""

import logging

from lending.enums import UserRole

from ..schemas.auth import TokenPayload

logger = logging.getLogger(__name__)


def resolve_role(token_payload: TokenPayload) -> UserRole:
    """Extract the primary console role from ``realm_access.roles``.

    Identity-provider built-ins (``offline_access`` and friends) are ignored.
    Raises ValueError when no recognized role is present.
    """
    roles = token_payload.realm_access.get("roles", [])
    known = {role.value for role in UserRole}
    user_roles = [r for r in roles if r in known]

    if not user_roles:
        raise ValueError("No recognized role assigned")

    if len(user_roles) > 1:
        logger.warning(
            "User %s has multiple roles %s, using first: %s",
            token_payload.sub,
            user_roles,
            user_roles[0],
        )

    return UserRole(user_roles[0])
