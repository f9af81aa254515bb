"""
Session Pydantic schemas.

Describe the caller resolved from an identity provider token.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from fleetops.app.models.enums import UserRole


class SessionUser(BaseModel):
    """Authenticated user as asserted by the identity provider."""
    id: str = Field(..., description="Identity provider subject")
    role: Optional[UserRole] = Field(default=None, description="Fleet role, absent if none assigned")


class Session(BaseModel):
    """
    Resolved session for the current request.

    Returned by GET /auth/session.
    """
    user: SessionUser
    expires_at: Optional[datetime] = None


class LogoutResponse(BaseModel):
    revoked: bool
