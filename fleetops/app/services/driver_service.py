"""
Driver registry and duty status service.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from fleetops.app.core.exceptions import BadRequestError, ConflictError, ResourceNotFoundError
from fleetops.app.db.store import EntityStore
from fleetops.app.models.driver import Driver
from fleetops.app.models.fleet_enums import DriverStatus
from fleetops.app.schemas.driver import DriverCreate, DriverStatusUpdate, DriverUpdate
from fleetops.app.services.active_processes import EntityKind, count_active_trips

logger = logging.getLogger("fleetops.drivers")


async def get_driver(store: EntityStore, driver_id: str) -> Driver:
    async with store.transaction() as tx:
        driver = await tx.get(Driver, driver_id)
    if not driver:
        raise ResourceNotFoundError("Driver", driver_id)
    return driver


async def list_drivers(
    store: EntityStore,
    status: Optional[DriverStatus] = None,
    offset: int = 0,
    limit: int = 50
) -> Tuple[List[Driver], int]:
    criteria = [Driver.status == status] if status else []
    async with store.transaction() as tx:
        total = await tx.count(Driver, *criteria)
        drivers = await tx.find(
            Driver, *criteria, order_by=Driver.name, offset=offset, limit=limit
        )
    return drivers, total


async def list_available_drivers(store: EntityStore, today: Optional[date] = None) -> List[Driver]:
    """Drivers who could be put on a new trip: on duty with a license valid past today."""
    today = today or date.today()
    async with store.transaction() as tx:
        return await tx.find(
            Driver,
            Driver.status == DriverStatus.ON_DUTY,
            Driver.license_expiry > today,
            order_by=Driver.name
        )


async def create_driver(store: EntityStore, data: DriverCreate) -> Driver:
    """
    Register a driver. New drivers start on duty.

    Raises:
        DuplicateRecordError: License number already registered
    """
    async with store.transaction() as tx:
        driver = await tx.insert(Driver, **data.model_dump(), status=DriverStatus.ON_DUTY)
    logger.info("Driver registered", extra={"driver_id": driver.id})
    return driver


async def update_driver(store: EntityStore, driver_id: str, data: DriverUpdate) -> Driver:
    """
    Edit driver profile fields.

    Duty status is changed only through update_driver_status. The complaints
    counter only ever grows.
    """
    # Every editable column is NOT NULL, so an explicit null means "leave as is"
    values = {
        field: value for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None
    }

    async with store.transaction() as tx:
        driver = await tx.get(Driver, driver_id, for_update=True)
        if not driver:
            raise ResourceNotFoundError("Driver", driver_id)

        complaints = values.get("complaints")
        if complaints is not None and complaints < driver.complaints:
            raise BadRequestError(
                f"complaints cannot decrease (currently {driver.complaints})"
            )

        driver = await tx.update(driver, values)
    return driver


async def update_driver_status(
    store: EntityStore,
    driver_id: str,
    data: DriverStatusUpdate
) -> Driver:
    """
    Change a driver's duty status.

    Any status may move to any other, but a driver with draft or dispatched
    trips may only be (re)set to on_duty.

    Raises:
        ResourceNotFoundError: Driver missing
        ConflictError: Driver still has active trips
    """
    async with store.transaction() as tx:
        driver = await tx.get(Driver, driver_id, for_update=True)
        if not driver:
            raise ResourceNotFoundError("Driver", driver_id)

        from_status = driver.status
        if data.status != DriverStatus.ON_DUTY:
            active = await count_active_trips(tx, EntityKind.DRIVER, driver_id)
            if active:
                raise ConflictError(
                    f"Cannot change status: driver has {active} active trip(s)",
                    details={"active_trips": active}
                )

        driver = await tx.update(driver, {"status": data.status})

    logger.info(
        "Driver status changed",
        extra={"driver_id": driver_id, "from_status": from_status.value, "to_status": data.status.value}
    )
    return driver


async def delete_driver(store: EntityStore, driver_id: str) -> None:
    """
    Delete a driver who holds no draft or dispatched trips.

    Raises:
        ResourceNotFoundError: Driver missing
        ConflictError: Driver still has active trips, or historical trips
            reference the row
    """
    async with store.transaction() as tx:
        driver = await tx.get(Driver, driver_id, for_update=True)
        if not driver:
            raise ResourceNotFoundError("Driver", driver_id)

        active = await count_active_trips(tx, EntityKind.DRIVER, driver_id)
        if active:
            raise ConflictError(
                f"Cannot delete driver: {active} active trip(s) exist",
                details={"active_trips": active}
            )

        await tx.delete(driver)

    logger.info("Driver deleted", extra={"driver_id": driver_id})
