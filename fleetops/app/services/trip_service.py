"""
Trip lifecycle service.

Creates trips and moves them through their status lifecycle, keeping the
assigned vehicle's status consistent inside the same transaction.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from fleetops.app.core.exceptions import BadRequestError, ConflictError, ResourceNotFoundError
from fleetops.app.db.store import EntityStore, Transaction
from fleetops.app.domain.fleet.availability import (
    cargo_fits, driver_is_assignable, vehicle_is_assignable
)
from fleetops.app.domain.fleet.trip_lifecycle import can_transition, releases_vehicle
from fleetops.app.models.driver import Driver
from fleetops.app.models.fleet_enums import DriverStatus, TripStatus, VehicleStatus
from fleetops.app.models.trip import Trip
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.trip import TripCreate, TripStatusUpdate

logger = logging.getLogger("fleetops.trips")

VEHICLE_UNAVAILABLE = "Vehicle is not available for assignment"


async def get_trip(store: EntityStore, trip_id: str) -> Trip:
    async with store.transaction() as tx:
        trip = await tx.get(Trip, trip_id)
    if not trip:
        raise ResourceNotFoundError("Trip", trip_id)
    return trip


async def list_trips(
    store: EntityStore,
    status: Optional[TripStatus] = None,
    vehicle_id: Optional[str] = None,
    driver_id: Optional[str] = None,
    offset: int = 0,
    limit: int = 50
) -> Tuple[List[Trip], int]:
    """List trips matching the optional filters, newest first, with the total count."""
    criteria = []
    if status:
        criteria.append(Trip.status == status)
    if vehicle_id:
        criteria.append(Trip.vehicle_id == vehicle_id)
    if driver_id:
        criteria.append(Trip.driver_id == driver_id)

    async with store.transaction() as tx:
        total = await tx.count(Trip, *criteria)
        trips = await tx.find(
            Trip, *criteria, order_by=Trip.created_at.desc(), offset=offset, limit=limit
        )
    return trips, total


async def create_trip(store: EntityStore, data: TripCreate, today: Optional[date] = None) -> Trip:
    """
    Create a draft trip.

    Validates, in order, inside one transaction:
    - Vehicle exists and is available
    - Driver exists, is on duty and holds an unexpired license
    - Cargo fits within the vehicle's capacity

    Vehicle and driver statuses are not changed until dispatch.

    Raises:
        ResourceNotFoundError: Vehicle or driver missing
        ConflictError: Vehicle or driver not assignable
        BadRequestError: Cargo exceeds capacity
    """
    today = today or date.today()

    async with store.transaction() as tx:
        vehicle = await tx.get(Vehicle, data.vehicle_id, for_update=True)
        if not vehicle:
            raise ResourceNotFoundError("Vehicle", data.vehicle_id)
        if not vehicle_is_assignable(vehicle):
            raise ConflictError(VEHICLE_UNAVAILABLE, details={"vehicle_status": vehicle.status.value})

        driver = await tx.get(Driver, data.driver_id, for_update=True)
        if not driver:
            raise ResourceNotFoundError("Driver", data.driver_id)
        if not driver_is_assignable(driver, today):
            if driver.status != DriverStatus.ON_DUTY:
                raise ConflictError("Driver is not on duty", details={"driver_status": driver.status.value})
            raise ConflictError(
                "Driver license has expired",
                details={"license_expiry": driver.license_expiry.isoformat()}
            )

        if not cargo_fits(data.cargo_weight_kg, vehicle):
            raise BadRequestError(
                f"Cargo weight ({data.cargo_weight_kg} kg) exceeds vehicle max capacity "
                f"({vehicle.max_capacity_kg} kg)"
            )

        trip = await tx.insert(
            Trip,
            vehicle_id=vehicle.id,
            driver_id=driver.id,
            cargo_weight_kg=data.cargo_weight_kg,
            origin_address=data.origin_address,
            destination=data.destination,
            start_odometer=data.start_odometer,
            estimated_fuel_cost=data.estimated_fuel_cost,
            status=TripStatus.DRAFT
        )

    logger.info("Trip created", extra={"trip_id": trip.id, "vehicle_id": trip.vehicle_id})
    return trip


async def update_trip_status(store: EntityStore, trip_id: str, data: TripStatusUpdate) -> Trip:
    """
    Move a trip to a new status.

    Allowed transitions:
        draft -> dispatched | completed | cancelled
        dispatched -> completed | cancelled

    Side effects (same transaction):
        -> dispatched: vehicle becomes on_trip (must still be available)
        dispatched -> completed | cancelled: vehicle returns to available

    Raises:
        ResourceNotFoundError: Trip missing
        BadRequestError: Transition not allowed, or odometer data missing/invalid
        ConflictError: Vehicle no longer available at dispatch
    """
    async with store.transaction() as tx:
        trip = await tx.get(Trip, trip_id, for_update=True)
        if not trip:
            raise ResourceNotFoundError("Trip", trip_id)

        from_status = trip.status
        to_status = data.status

        if not can_transition(from_status, to_status):
            raise BadRequestError(
                f"Cannot transition trip from {from_status.value} to {to_status.value}"
            )

        _validate_end_odometer(trip, to_status, data.end_odometer)

        if to_status == TripStatus.DISPATCHED:
            await _dispatch_vehicle(tx, trip)
        elif releases_vehicle(from_status, to_status):
            await _release_vehicle(tx, trip)

        values = {"status": to_status}
        if data.end_odometer is not None:
            values["end_odometer"] = data.end_odometer
        if "actual_fuel_cost" in data.model_fields_set:
            values["actual_fuel_cost"] = data.actual_fuel_cost

        trip = await tx.update(trip, values, conflict_message=VEHICLE_UNAVAILABLE)

    logger.info(
        "Trip status changed",
        extra={"trip_id": trip.id, "from_status": from_status.value, "to_status": to_status.value}
    )
    return trip


def _validate_end_odometer(trip: Trip, to_status: TripStatus, end_odometer: Optional[int]) -> None:
    if to_status != TripStatus.COMPLETED:
        if end_odometer is not None:
            raise BadRequestError("endOdometer can only be recorded when completing a trip")
        return

    if end_odometer is None:
        raise BadRequestError("endOdometer is required when completing a trip")
    if end_odometer < trip.start_odometer:
        raise BadRequestError(
            f"endOdometer ({end_odometer}) cannot be less than startOdometer ({trip.start_odometer})"
        )


async def _dispatch_vehicle(tx: Transaction, trip: Trip) -> None:
    vehicle = await tx.get(Vehicle, trip.vehicle_id, for_update=True)
    if not vehicle_is_assignable(vehicle):
        raise ConflictError(VEHICLE_UNAVAILABLE, details={"vehicle_status": vehicle.status.value})
    await tx.update(vehicle, {"status": VehicleStatus.ON_TRIP})


async def _release_vehicle(tx: Transaction, trip: Trip) -> None:
    vehicle = await tx.get(Vehicle, trip.vehicle_id, for_update=True)
    # Retired (or otherwise reassigned) vehicles are left alone
    if vehicle.status == VehicleStatus.ON_TRIP:
        await tx.update(vehicle, {"status": VehicleStatus.AVAILABLE})
