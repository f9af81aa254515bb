"""
Maintenance log database model.
"""

from sqlalchemy import Column, String, Numeric, Date, ForeignKey
from fleetops.app.db.session import Base, TimestampMixin
from fleetops.app.models.fleet_enums import MaintenanceStatus, enum_column_type
from fleetops.app.models.vehicle import new_id


class MaintenanceLog(Base, TimestampMixin):
    """
    Maintenance log model.

    While any log for a vehicle is in progress the vehicle is held in the shop.
    """
    __tablename__ = "maintenance_logs"
    __label__ = "Maintenance log"

    id = Column(String(36), primary_key=True, default=new_id)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True)

    service_type = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    cost = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False)

    status = Column(
        enum_column_type(MaintenanceStatus, "maintenance_status"),
        default=MaintenanceStatus.IN_PROGRESS,
        nullable=False,
        index=True
    )

    def __repr__(self):
        return f"<MaintenanceLog(id={self.id}, vehicle_id={self.vehicle_id}, status='{self.status.value}')>"
