"""
Trip database model.

A trip assigns one vehicle and one driver to move cargo from an origin to a
destination and advances forward-only through its status lifecycle.
"""

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Index, text
from fleetops.app.db.session import Base, TimestampMixin
from fleetops.app.models.fleet_enums import TripStatus, enum_column_type
from fleetops.app.models.vehicle import new_id


class Trip(Base, TimestampMixin):
    """
    Trip model.

    Holds the vehicle/driver assignment for its lifetime; the vehicle and
    driver rows themselves are only referenced.
    """
    __tablename__ = "trips"
    __label__ = "Trip"

    id = Column(String(36), primary_key=True, default=new_id)

    # Assignment
    vehicle_id = Column(String(36), ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True)
    driver_id = Column(String(36), ForeignKey("drivers.id", ondelete="RESTRICT"), nullable=False, index=True)

    # Cargo and route
    cargo_weight_kg = Column(Integer, nullable=False)
    origin_address = Column(String(500), nullable=False)
    destination = Column(String(500), nullable=False)

    # Costs
    estimated_fuel_cost = Column(Numeric(10, 2), nullable=True)
    actual_fuel_cost = Column(Numeric(10, 2), nullable=True)

    # Odometer readings (end set only on completion)
    start_odometer = Column(Integer, nullable=False)
    end_odometer = Column(Integer, nullable=True)

    status = Column(
        enum_column_type(TripStatus, "trip_status"),
        default=TripStatus.DRAFT,
        nullable=False,
        index=True
    )

    # Unique constraint: only one dispatched trip per vehicle
    __table_args__ = (
        Index(
            "ix_trips_one_dispatched_per_vehicle",
            "vehicle_id",
            unique=True,
            postgresql_where=text("status = 'dispatched'"),
            sqlite_where=text("status = 'dispatched'"),
        ),
    )

    def __repr__(self):
        return f"<Trip(id={self.id}, vehicle_id={self.vehicle_id}, status='{self.status.value}')>"
