"""
Role-based access control guards.

The fleet services trust their callers; these dependencies are where the
HTTP layer decides who may call them.
"""

import logging
from typing import List
from fastapi import Depends

from fleetops.app.core.dependencies import get_current_session
from fleetops.app.core.exceptions import InsufficientPermissionsError
from fleetops.app.models.enums import UserRole
from fleetops.app.schemas.auth import Session

logger = logging.getLogger("fleetops.auth")


def require_role(allowed_roles: List[UserRole]):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.delete("/vehicles/{vehicle_id}")
        async def delete_vehicle(session: Session = Depends(require_role([UserRole.MANAGER]))):
            ...

    Args:
        allowed_roles: Roles allowed to access the endpoint

    Returns:
        FastAPI dependency returning the session if the role is allowed

    Raises:
        InsufficientPermissionsError 403 if the user has no role or a different one
    """
    async def role_checker(session: Session = Depends(get_current_session)) -> Session:
        role = session.user.role

        if role is None:
            logger.warning("Role check failed: no role assigned", extra={"user_id": session.user.id})
            raise InsufficientPermissionsError("No role assigned to user")

        if role not in allowed_roles:
            logger.warning(
                "Role check failed: insufficient permissions",
                extra={
                    "user_id": session.user.id,
                    "user_role": role.value,
                    "required_roles": [r.value for r in allowed_roles]
                }
            )
            raise InsufficientPermissionsError(
                f"Requires one of: {', '.join(r.value for r in allowed_roles)}"
            )

        return session

    return role_checker
