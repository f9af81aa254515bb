"""
Driver database model.
"""

from sqlalchemy import Column, Integer, String, Date
from fleetops.app.db.session import Base, TimestampMixin
from fleetops.app.models.fleet_enums import DriverStatus, enum_column_type
from fleetops.app.models.vehicle import new_id


class Driver(Base, TimestampMixin):
    """
    Driver model.

    A driver may only be assigned to a trip while on duty with a license that
    expires after the current day.
    """
    __tablename__ = "drivers"
    __label__ = "Driver"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)

    # License
    license_number = Column(String(50), unique=True, nullable=False, index=True)
    license_expiry = Column(Date, nullable=False)

    # Performance (percentages 0-100)
    safety_score = Column(Integer, nullable=False, default=100)
    completion_rate = Column(Integer, nullable=False, default=0)
    complaints = Column(Integer, nullable=False, default=0)

    status = Column(
        enum_column_type(DriverStatus, "driver_status"),
        default=DriverStatus.ON_DUTY,
        nullable=False,
        index=True
    )

    def __repr__(self):
        return f"<Driver(id={self.id}, license='{self.license_number}', status='{self.status.value}')>"
