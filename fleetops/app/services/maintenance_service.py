"""
Maintenance lifecycle service.

Opening a maintenance log sends the vehicle to the shop; completing the last
open log for a vehicle brings it back into service.
"""

import logging
from typing import List, Optional, Tuple

from fleetops.app.core.exceptions import BadRequestError, ConflictError, ResourceNotFoundError
from fleetops.app.db.store import EntityStore
from fleetops.app.models.fleet_enums import MaintenanceStatus, VehicleStatus
from fleetops.app.models.maintenance_log import MaintenanceLog
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.maintenance import MaintenanceCreate, MaintenanceUpdate
from fleetops.app.services.active_processes import count_open_maintenance

logger = logging.getLogger("fleetops.maintenance")


async def get_maintenance(store: EntityStore, log_id: str) -> MaintenanceLog:
    async with store.transaction() as tx:
        log = await tx.get(MaintenanceLog, log_id)
    if not log:
        raise ResourceNotFoundError("Maintenance log", log_id)
    return log


async def list_maintenance(
    store: EntityStore,
    vehicle_id: Optional[str] = None,
    status: Optional[MaintenanceStatus] = None,
    offset: int = 0,
    limit: int = 50
) -> Tuple[List[MaintenanceLog], int]:
    criteria = []
    if vehicle_id:
        criteria.append(MaintenanceLog.vehicle_id == vehicle_id)
    if status:
        criteria.append(MaintenanceLog.status == status)

    async with store.transaction() as tx:
        total = await tx.count(MaintenanceLog, *criteria)
        logs = await tx.find(
            MaintenanceLog, *criteria,
            order_by=MaintenanceLog.date.desc(), offset=offset, limit=limit
        )
    return logs, total


async def create_maintenance(store: EntityStore, data: MaintenanceCreate) -> MaintenanceLog:
    """
    Open a maintenance log and send the vehicle to the shop.

    A vehicle on a trip cannot be taken into the shop. Retired vehicles
    accept maintenance records but stay retired.

    Raises:
        ResourceNotFoundError: Vehicle missing
        ConflictError: Vehicle is on a trip
    """
    async with store.transaction() as tx:
        vehicle = await tx.get(Vehicle, data.vehicle_id, for_update=True)
        if not vehicle:
            raise ResourceNotFoundError("Vehicle", data.vehicle_id)
        if vehicle.status == VehicleStatus.ON_TRIP:
            raise ConflictError(
                "Vehicle is currently on a trip",
                details={"vehicle_status": vehicle.status.value}
            )

        log = await tx.insert(
            MaintenanceLog, **data.model_dump(), status=MaintenanceStatus.IN_PROGRESS
        )

        if vehicle.status != VehicleStatus.RETIRED:
            await tx.update(vehicle, {"status": VehicleStatus.IN_SHOP})

    logger.info(
        "Maintenance opened",
        extra={"maintenance_id": log.id, "vehicle_id": log.vehicle_id}
    )
    return log


async def update_maintenance(
    store: EntityStore,
    log_id: str,
    data: MaintenanceUpdate
) -> MaintenanceLog:
    """
    Edit a maintenance log.

    Only the in_progress -> completed edge touches the vehicle: it returns to
    available when no other log is still open for it and it is in the shop.
    Completed logs cannot be reopened.

    Raises:
        ResourceNotFoundError: Log missing
        BadRequestError: Attempt to reopen a completed log
    """
    values = {
        field: value for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }

    async with store.transaction() as tx:
        log = await tx.get(MaintenanceLog, log_id, for_update=True)
        if not log:
            raise ResourceNotFoundError("Maintenance log", log_id)

        was_completed = log.status == MaintenanceStatus.COMPLETED
        completing = not was_completed and values.get("status") == MaintenanceStatus.COMPLETED
        if was_completed and values.get("status") == MaintenanceStatus.IN_PROGRESS:
            raise BadRequestError("Completed maintenance logs cannot be reopened")

        log = await tx.update(log, values)

        released = False
        if completing:
            vehicle = await tx.get(Vehicle, log.vehicle_id, for_update=True)
            still_open = await count_open_maintenance(tx, log.vehicle_id, exclude_id=log.id)
            if not still_open and vehicle.status == VehicleStatus.IN_SHOP:
                await tx.update(vehicle, {"status": VehicleStatus.AVAILABLE})
                released = True

    if completing:
        logger.info(
            "Maintenance completed",
            extra={"maintenance_id": log.id, "vehicle_id": log.vehicle_id, "vehicle_released": released}
        )
    return log
