"""
Audit logging service for tracking fleet state changes.

Records who changed which vehicle, driver, trip, maintenance log or expense.
"""

import logging
from typing import Optional, Dict, Any

from sqlalchemy.exc import SQLAlchemyError

from fleetops.app.core.exceptions import ConflictError
from fleetops.app.db.store import EntityStore
from fleetops.app.models.audit_log import AuditLog
from fleetops.app.schemas.auth import Session

logger = logging.getLogger("fleetops.audit")


# Audit event constants
class AuditAction:
    """Standardized audit action constants."""
    VEHICLE_CREATED = "VEHICLE_CREATED"
    VEHICLE_UPDATED = "VEHICLE_UPDATED"
    VEHICLE_DELETED = "VEHICLE_DELETED"

    DRIVER_CREATED = "DRIVER_CREATED"
    DRIVER_UPDATED = "DRIVER_UPDATED"
    DRIVER_STATUS_CHANGED = "DRIVER_STATUS_CHANGED"
    DRIVER_DELETED = "DRIVER_DELETED"

    TRIP_CREATED = "TRIP_CREATED"
    TRIP_STATUS_CHANGED = "TRIP_STATUS_CHANGED"

    MAINTENANCE_OPENED = "MAINTENANCE_OPENED"
    MAINTENANCE_UPDATED = "MAINTENANCE_UPDATED"

    EXPENSE_RECORDED = "EXPENSE_RECORDED"
    EXPENSE_UPDATED = "EXPENSE_UPDATED"
    EXPENSE_DELETED = "EXPENSE_DELETED"

    TOKEN_REVOKED = "TOKEN_REVOKED"


async def log_event(
    store: EntityStore,
    action: str,
    session: Optional[Session] = None,
    entity_type: str = "",
    entity_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> Optional[AuditLog]:
    """
    Log a fleet event to the audit log.

    Written in its own transaction once the audited change has committed,
    so a rolled-back change never leaves an audit row behind. A failed
    audit write is logged and never turns the committed change into an error.

    Args:
        store: Entity store
        action: Action being performed (use AuditAction constants)
        session: Session of the user performing the action
        entity_type: Kind of record acted upon
        entity_id: ID of the record acted upon
        metadata: Additional context as JSON

    Returns:
        Created AuditLog instance, or None if the write failed
    """
    actor_id = session.user.id if session else None
    actor_role = session.user.role.value if session and session.user.role else None

    try:
        async with store.transaction() as tx:
            return await tx.insert(
                AuditLog,
                actor_id=actor_id,
                actor_role=actor_role,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                meta_data=metadata
            )
    except (SQLAlchemyError, ConflictError):
        logger.exception("Failed to record audit event %s for %s %s", action, entity_type, entity_id)
        return None
