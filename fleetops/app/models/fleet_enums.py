"""
Fleet status and type enumerations.
"""

import enum

from sqlalchemy import Enum


def enum_column_type(enum_cls, name: str) -> Enum:
    """Database enum type that stores member values ("on_trip"), not names."""
    return Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
    )


class VehicleType(str, enum.Enum):
    """Vehicle type enumeration."""
    TRUCK = "truck"
    VAN = "van"
    BIKE = "bike"


class VehicleStatus(str, enum.Enum):
    """Vehicle status enumeration."""
    AVAILABLE = "available"  # Free for assignment
    ON_TRIP = "on_trip"  # Held by exactly one dispatched trip
    IN_SHOP = "in_shop"  # At least one maintenance log in progress
    RETIRED = "retired"  # Terminal, never changed automatically


class DriverStatus(str, enum.Enum):
    """Driver duty status enumeration."""
    ON_DUTY = "on_duty"
    OFF_DUTY = "off_duty"
    SUSPENDED = "suspended"


class TripStatus(str, enum.Enum):
    """Trip status enumeration."""
    DRAFT = "draft"  # Created, vehicle and driver not yet committed
    DISPATCHED = "dispatched"  # Vehicle is on the road
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Trips that still hold (or will hold) their vehicle and driver
ACTIVE_TRIP_STATUSES = (TripStatus.DRAFT, TripStatus.DISPATCHED)


class MaintenanceStatus(str, enum.Enum):
    """Maintenance log status enumeration."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
