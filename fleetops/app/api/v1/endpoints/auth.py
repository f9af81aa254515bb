"""
Session API endpoints.

Users sign in with the identity provider; this API only reports the session a
bearer token resolves to and lets clients revoke it.
"""

import logging
from fastapi import APIRouter, Depends

from fleetops.app.core.dependencies import get_bearer_token, get_current_session
from fleetops.app.core.redis_client import get_redis
from fleetops.app.core.token_revocation import revoke_token
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.schemas.auth import Session, LogoutResponse
from fleetops.app.services.audit import log_event, AuditAction

logger = logging.getLogger("fleetops.auth")

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/session", response_model=Session)
async def get_session(session: Session = Depends(get_current_session)):
    """
    Get the current session.

    Returns 401 if no valid bearer token is supplied.
    """
    return session


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    session: Session = Depends(get_current_session),
    token: str = Depends(get_bearer_token),
    redis_client=Depends(get_redis),
    store: EntityStore = Depends(get_store)
):
    """
    Revoke the current bearer token until it expires.

    `revoked` is false when the revocation list is unreachable.
    """
    expires_at = int(session.expires_at.timestamp()) if session.expires_at else None
    revoked = await revoke_token(redis_client, token, session.user.id, expires_at)

    if revoked:
        await log_event(store, AuditAction.TOKEN_REVOKED, session, entity_type="session")
    else:
        logger.warning("Logout could not revoke token", extra={"user_id": session.user.id})

    return LogoutResponse(revoked=revoked)
