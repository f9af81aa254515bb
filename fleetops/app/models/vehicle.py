"""
Vehicle database model.

Vehicles are registered by fleet managers; their status is driven by the
trip and maintenance lifecycles.
"""

import uuid

from sqlalchemy import Column, Integer, String
from fleetops.app.db.session import Base, TimestampMixin
from fleetops.app.models.fleet_enums import VehicleStatus, VehicleType, enum_column_type


def new_id() -> str:
    return str(uuid.uuid4())


class Vehicle(Base, TimestampMixin):
    """
    Vehicle model.

    Referenced by trips, maintenance logs and expenses with restrict-on-delete,
    so a vehicle with history can only be retired, not removed.
    """
    __tablename__ = "vehicles"
    __label__ = "Vehicle"

    id = Column(String(36), primary_key=True, default=new_id)

    # Identification
    license_plate = Column(String(20), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    type = Column(enum_column_type(VehicleType, "vehicle_type"), nullable=False, index=True)

    # Capacity and usage
    max_capacity_kg = Column(Integer, nullable=False)
    odometer = Column(Integer, nullable=False, default=0)

    status = Column(
        enum_column_type(VehicleStatus, "vehicle_status"),
        default=VehicleStatus.AVAILABLE,
        nullable=False,
        index=True
    )

    def __repr__(self):
        return f"<Vehicle(id={self.id}, plate='{self.license_plate}', status='{self.status.value}')>"
