"""
Vehicle registry service.

Registration, edits and deletion of vehicles. Automatic status changes
(on_trip, in_shop) belong to the trip and maintenance services; managers
may only set available or retired by hand.
"""

import logging
from typing import List, Optional, Tuple

from fleetops.app.core.exceptions import BadRequestError, ConflictError, ResourceNotFoundError
from fleetops.app.db.store import EntityStore, Transaction
from fleetops.app.models.fleet_enums import VehicleStatus, VehicleType
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.vehicle import VehicleCreate, VehicleUpdate
from fleetops.app.services.active_processes import (
    EntityKind, count_active_trips, count_open_maintenance
)

logger = logging.getLogger("fleetops.vehicles")

MANUAL_STATUSES = (VehicleStatus.AVAILABLE, VehicleStatus.RETIRED)


async def get_vehicle(store: EntityStore, vehicle_id: str) -> Vehicle:
    async with store.transaction() as tx:
        vehicle = await tx.get(Vehicle, vehicle_id)
    if not vehicle:
        raise ResourceNotFoundError("Vehicle", vehicle_id)
    return vehicle


async def list_vehicles(
    store: EntityStore,
    status: Optional[VehicleStatus] = None,
    type: Optional[VehicleType] = None,
    offset: int = 0,
    limit: int = 50
) -> Tuple[List[Vehicle], int]:
    criteria = []
    if status:
        criteria.append(Vehicle.status == status)
    if type:
        criteria.append(Vehicle.type == type)

    async with store.transaction() as tx:
        total = await tx.count(Vehicle, *criteria)
        vehicles = await tx.find(
            Vehicle, *criteria, order_by=Vehicle.created_at.desc(), offset=offset, limit=limit
        )
    return vehicles, total


async def list_available_vehicles(store: EntityStore) -> List[Vehicle]:
    async with store.transaction() as tx:
        return await tx.find(
            Vehicle, Vehicle.status == VehicleStatus.AVAILABLE, order_by=Vehicle.name
        )


async def create_vehicle(store: EntityStore, data: VehicleCreate) -> Vehicle:
    """
    Register a vehicle. New vehicles start available.

    Raises:
        DuplicateRecordError: License plate already registered
    """
    async with store.transaction() as tx:
        vehicle = await tx.insert(Vehicle, **data.model_dump(), status=VehicleStatus.AVAILABLE)
    logger.info("Vehicle registered", extra={"vehicle_id": vehicle.id})
    return vehicle


async def update_vehicle(store: EntityStore, vehicle_id: str, data: VehicleUpdate) -> Vehicle:
    """
    Edit a vehicle.

    Status rules for manual edits:
    - only available and retired may be set
    - retiring requires no active trips and no open maintenance
    - available cannot be set while the vehicle is on a trip or in the shop
    - a reinstated vehicle with an open maintenance log goes to in_shop

    Raises:
        ResourceNotFoundError: Vehicle missing
        BadRequestError: Status not settable by hand
        ConflictError: Vehicle still busy
    """
    # Every editable column is NOT NULL, so an explicit null means "leave as is"
    values = {
        field: value for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None
    }

    async with store.transaction() as tx:
        vehicle = await tx.get(Vehicle, vehicle_id, for_update=True)
        if not vehicle:
            raise ResourceNotFoundError("Vehicle", vehicle_id)

        new_status = values.get("status")
        if new_status is not None and new_status != vehicle.status:
            values["status"] = await _check_manual_status(tx, vehicle, new_status)

        from_status = vehicle.status
        vehicle = await tx.update(vehicle, values)

    if vehicle.status != from_status:
        logger.info(
            "Vehicle status changed",
            extra={"vehicle_id": vehicle_id, "from_status": from_status.value, "to_status": vehicle.status.value}
        )
    return vehicle


async def _check_manual_status(tx: Transaction, vehicle: Vehicle, new_status: VehicleStatus) -> VehicleStatus:
    """Validate a hand-set status and return the status to store."""
    if new_status not in MANUAL_STATUSES:
        raise BadRequestError(
            f"Vehicle status can only be set to available or retired, not {new_status.value}"
        )

    if new_status == VehicleStatus.RETIRED:
        active = await count_active_trips(tx, EntityKind.VEHICLE, vehicle.id)
        if active:
            raise ConflictError(
                f"Cannot retire vehicle: {active} active trip(s) exist",
                details={"active_trips": active}
            )
        open_logs = await count_open_maintenance(tx, vehicle.id)
        if open_logs:
            raise ConflictError(
                f"Cannot retire vehicle: {open_logs} maintenance log(s) in progress",
                details={"open_maintenance": open_logs}
            )
        return new_status

    if vehicle.status in (VehicleStatus.ON_TRIP, VehicleStatus.IN_SHOP):
        raise ConflictError(
            f"Cannot set vehicle available while it is {vehicle.status.value}",
            details={"vehicle_status": vehicle.status.value}
        )

    # A retired vehicle keeps any log opened on it; it comes back into the shop
    if await count_open_maintenance(tx, vehicle.id):
        return VehicleStatus.IN_SHOP
    return new_status


async def delete_vehicle(store: EntityStore, vehicle_id: str) -> None:
    """
    Delete a vehicle that holds no draft or dispatched trips.

    Raises:
        ResourceNotFoundError: Vehicle missing
        ConflictError: Vehicle still has active trips, or historical
            trips, maintenance logs or expenses reference the row
    """
    async with store.transaction() as tx:
        vehicle = await tx.get(Vehicle, vehicle_id, for_update=True)
        if not vehicle:
            raise ResourceNotFoundError("Vehicle", vehicle_id)

        active = await count_active_trips(tx, EntityKind.VEHICLE, vehicle_id)
        if active:
            raise ConflictError(
                f"Cannot delete vehicle: {active} active trip(s) exist",
                details={"active_trips": active}
            )

        await tx.delete(vehicle)

    logger.info("Vehicle deleted", extra={"vehicle_id": vehicle_id})
