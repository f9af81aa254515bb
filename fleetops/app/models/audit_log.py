"""
Audit Log Database Model.

Tracks fleet state changes for accountability.
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from fleetops.app.db.session import Base


class AuditLog(Base):
    """
    Audit log model for tracking who changed fleet state.

    Events logged:
    - VEHICLE_CREATED / VEHICLE_UPDATED / VEHICLE_DELETED
    - DRIVER_CREATED / DRIVER_UPDATED / DRIVER_STATUS_CHANGED / DRIVER_DELETED
    - TRIP_CREATED / TRIP_STATUS_CHANGED
    - MAINTENANCE_OPENED / MAINTENANCE_UPDATED
    - EXPENSE_RECORDED / EXPENSE_UPDATED / EXPENSE_DELETED
    """
    __tablename__ = "audit_logs"
    __label__ = "Audit log"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Who performed the action (identity provider subject and role)
    actor_id = Column(String(100), index=True, nullable=True)
    actor_role = Column(String(50), nullable=True)

    # What action was performed, and on which record
    action = Column(String(100), nullable=False, index=True)
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(String(36), index=True, nullable=True)

    # Additional context (JSON for flexibility)
    meta_data = Column(JSON, nullable=True)

    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog(id={self.id}, action='{self.action}', entity={self.entity_type}:{self.entity_id})>"
