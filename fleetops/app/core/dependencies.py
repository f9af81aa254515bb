"""
Authentication dependencies for FastAPI.

Resolves the caller's session from the bearer token issued by the identity
provider.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from datetime import datetime, timezone

from fleetops.app.core.exceptions import AuthenticationError
from fleetops.app.core.jwt import decode_access_token
from fleetops.app.core.redis_client import get_redis
from fleetops.app.core.token_revocation import is_token_revoked
from fleetops.app.models.enums import UserRole
from fleetops.app.schemas.auth import Session, SessionUser

# HTTP Bearer security scheme
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    if credentials is None:
        raise AuthenticationError("No active session")
    return credentials.credentials


async def get_current_session(
    token: str = Depends(get_bearer_token),
    redis_client=Depends(get_redis)
) -> Session:
    """
    FastAPI dependency resolving the current session.

    Checks:
    1. Validates JWT token signature and expiry
    2. Checks if the token has been revoked (logout)
    3. Maps the `role` claim onto a known fleet role

    Returns:
        Session with the authenticated user's id and role

    Raises:
        AuthenticationError: 401 if the token is missing, invalid or revoked
    """
    payload = decode_access_token(token)
    if payload is None:
        raise AuthenticationError("Invalid or expired session")

    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Invalid token payload")

    if await is_token_revoked(redis_client, token):
        raise AuthenticationError("Session has been revoked")

    # Unknown roles resolve to no role; the role guard rejects them
    try:
        role = UserRole(payload["role"]) if payload.get("role") else None
    except ValueError:
        role = None

    expires_at = None
    if payload.get("exp"):
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)

    return Session(user=SessionUser(id=str(subject), role=role), expires_at=expires_at)
