"""
Active process guards.

Shared counting predicates used wherever a vehicle or driver is about to
lose its status or its row: status changes, retirement and deletion must all
agree on what counts as "still in use".
"""

import enum
from typing import Optional

from fleetops.app.db.store import Transaction
from fleetops.app.models.trip import Trip
from fleetops.app.models.maintenance_log import MaintenanceLog
from fleetops.app.models.fleet_enums import ACTIVE_TRIP_STATUSES, MaintenanceStatus


class EntityKind(str, enum.Enum):
    """Kinds of resources a trip holds."""
    VEHICLE = "vehicle"
    DRIVER = "driver"


_TRIP_REFERENCE = {
    EntityKind.VEHICLE: Trip.vehicle_id,
    EntityKind.DRIVER: Trip.driver_id,
}


async def count_active_trips(
    tx: Transaction,
    entity_kind: EntityKind,
    entity_id: str
) -> int:
    """
    Count draft or dispatched trips referencing a vehicle or driver.

    Args:
        tx: Open transaction
        entity_kind: Which trip reference to match
        entity_id: Vehicle or driver ID

    Returns:
        Number of active trips
    """
    return await tx.count(
        Trip,
        _TRIP_REFERENCE[entity_kind] == entity_id,
        Trip.status.in_(ACTIVE_TRIP_STATUSES)
    )


async def count_open_maintenance(
    tx: Transaction,
    vehicle_id: str,
    exclude_id: Optional[str] = None
) -> int:
    """Count in-progress maintenance logs for a vehicle."""
    criteria = [
        MaintenanceLog.vehicle_id == vehicle_id,
        MaintenanceLog.status == MaintenanceStatus.IN_PROGRESS,
    ]
    if exclude_id is not None:
        criteria.append(MaintenanceLog.id != exclude_id)
    return await tx.count(MaintenanceLog, *criteria)
