"""
Expense database model.

Fuel and miscellaneous spend per vehicle, optionally attributed to a trip.
"""

from sqlalchemy import Column, String, Numeric, Date, ForeignKey
from fleetops.app.db.session import Base, TimestampMixin
from fleetops.app.models.vehicle import new_id


class Expense(Base, TimestampMixin):
    __tablename__ = "expenses"
    __label__ = "Expense"

    id = Column(String(36), primary_key=True, default=new_id)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True)
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="RESTRICT"), nullable=True, index=True)

    fuel_liters = Column(Numeric(10, 2), nullable=True)
    fuel_cost = Column(Numeric(10, 2), nullable=True)
    misc_expense = Column(Numeric(10, 2), nullable=True)
    misc_description = Column(String(500), nullable=True)

    date = Column(Date, nullable=False)

    def __repr__(self):
        return f"<Expense(id={self.id}, vehicle_id={self.vehicle_id}, trip_id={self.trip_id})>"
