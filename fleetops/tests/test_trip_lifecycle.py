"""
Trip lifecycle tests.

Covers creation gates (availability, license, capacity), forward-only
transitions and the vehicle status side effects of dispatch and release.
"""

import pytest
from datetime import date, timedelta

from fleetops.app.core.exceptions import BadRequestError, ConflictError, ResourceNotFoundError
from fleetops.app.models.fleet_enums import DriverStatus, TripStatus, VehicleStatus, VehicleType
from fleetops.app.models.trip import Trip
from fleetops.app.schemas.driver import DriverCreate, DriverStatusUpdate
from fleetops.app.schemas.trip import TripCreate, TripStatusUpdate
from fleetops.app.schemas.vehicle import VehicleCreate, VehicleUpdate
from fleetops.app.services import driver_service, trip_service, vehicle_service


def trip_payload(vehicle, driver, cargo_weight_kg=450, start_odometer=45000):
    return TripCreate(
        vehicle_id=vehicle.id,
        driver_id=driver.id,
        cargo_weight_kg=cargo_weight_kg,
        origin_address="Warehouse A",
        destination="Depot B",
        start_odometer=start_odometer
    )


async def count_trips(store):
    async with store.transaction() as tx:
        return await tx.count(Trip)


# TEST 1: Draft creation
@pytest.mark.asyncio
async def test_create_trip_starts_as_draft(store, vehicle, driver):
    """A valid trip is created as draft and leaves the vehicle available."""
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))

    assert trip.status == TripStatus.DRAFT
    assert trip.end_odometer is None

    refreshed = await vehicle_service.get_vehicle(store, vehicle.id)
    assert refreshed.status == VehicleStatus.AVAILABLE


# TEST 2: Capacity gate
@pytest.mark.asyncio
async def test_create_trip_over_capacity_rejected(store, vehicle, driver):
    with pytest.raises(BadRequestError) as exc_info:
        await trip_service.create_trip(store, trip_payload(vehicle, driver, cargo_weight_kg=600))

    assert "exceeds vehicle max capacity (500 kg)" in exc_info.value.message
    assert await count_trips(store) == 0


@pytest.mark.asyncio
async def test_cargo_equal_to_capacity_allowed(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver, cargo_weight_kg=500))
    assert trip.cargo_weight_kg == 500


# TEST 3: Dispatch takes the vehicle
@pytest.mark.asyncio
async def test_dispatch_puts_vehicle_on_trip(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))

    dispatched = await trip_service.update_trip_status(
        store, trip.id, TripStatusUpdate(status=TripStatus.DISPATCHED)
    )

    assert dispatched.status == TripStatus.DISPATCHED
    assert (await vehicle_service.get_vehicle(store, vehicle.id)).status == VehicleStatus.ON_TRIP

    with pytest.raises(ConflictError) as exc_info:
        await trip_service.create_trip(store, trip_payload(vehicle, driver))
    assert exc_info.value.message == "Vehicle is not available for assignment"


@pytest.mark.asyncio
async def test_second_dispatch_on_same_vehicle_conflicts(store, vehicle, driver):
    """Two drafts on one vehicle: only the first can be dispatched."""
    first = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    second = await trip_service.create_trip(store, trip_payload(vehicle, driver))

    await trip_service.update_trip_status(store, first.id, TripStatusUpdate(status=TripStatus.DISPATCHED))

    with pytest.raises(ConflictError) as exc_info:
        await trip_service.update_trip_status(
            store, second.id, TripStatusUpdate(status=TripStatus.DISPATCHED)
        )
    assert "not available for assignment" in exc_info.value.message

    still_draft = await trip_service.get_trip(store, second.id)
    assert still_draft.status == TripStatus.DRAFT


# TEST 4: Completion releases the vehicle
@pytest.mark.asyncio
async def test_complete_dispatched_trip_releases_vehicle(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.DISPATCHED))

    completed = await trip_service.update_trip_status(
        store, trip.id, TripStatusUpdate(status=TripStatus.COMPLETED, end_odometer=45280)
    )

    assert completed.status == TripStatus.COMPLETED
    assert completed.end_odometer == 45280
    assert (await vehicle_service.get_vehicle(store, vehicle.id)).status == VehicleStatus.AVAILABLE


@pytest.mark.asyncio
async def test_cancel_dispatched_trip_releases_vehicle(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.DISPATCHED))

    await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.CANCELLED))

    assert (await vehicle_service.get_vehicle(store, vehicle.id)).status == VehicleStatus.AVAILABLE


@pytest.mark.asyncio
async def test_cancel_draft_leaves_vehicle_untouched(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))

    cancelled = await trip_service.update_trip_status(
        store, trip.id, TripStatusUpdate(status=TripStatus.CANCELLED)
    )

    assert cancelled.status == TripStatus.CANCELLED
    assert (await vehicle_service.get_vehicle(store, vehicle.id)).status == VehicleStatus.AVAILABLE


@pytest.mark.asyncio
async def test_complete_draft_directly(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))

    completed = await trip_service.update_trip_status(
        store, trip.id, TripStatusUpdate(status=TripStatus.COMPLETED, end_odometer=45100)
    )

    assert completed.status == TripStatus.COMPLETED
    assert (await vehicle_service.get_vehicle(store, vehicle.id)).status == VehicleStatus.AVAILABLE


# TEST 5: Odometer rules
@pytest.mark.asyncio
async def test_complete_without_end_odometer_rejected(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.DISPATCHED))

    with pytest.raises(BadRequestError) as exc_info:
        await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.COMPLETED))

    assert "endOdometer is required" in exc_info.value.message
    assert (await trip_service.get_trip(store, trip.id)).status == TripStatus.DISPATCHED
    assert (await vehicle_service.get_vehicle(store, vehicle.id)).status == VehicleStatus.ON_TRIP


@pytest.mark.asyncio
async def test_end_odometer_below_start_rejected(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.DISPATCHED))

    with pytest.raises(BadRequestError) as exc_info:
        await trip_service.update_trip_status(
            store, trip.id, TripStatusUpdate(status=TripStatus.COMPLETED, end_odometer=44999)
        )
    assert "cannot be less than startOdometer (45000)" in exc_info.value.message


@pytest.mark.asyncio
async def test_end_odometer_only_on_completion(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))

    with pytest.raises(BadRequestError):
        await trip_service.update_trip_status(
            store, trip.id, TripStatusUpdate(status=TripStatus.DISPATCHED, end_odometer=45200)
        )


# TEST 6: Forward-only transitions
@pytest.mark.asyncio
@pytest.mark.parametrize("target", [TripStatus.DRAFT, TripStatus.DISPATCHED, TripStatus.CANCELLED])
async def test_completed_trip_is_terminal(store, vehicle, driver, target):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    await trip_service.update_trip_status(
        store, trip.id, TripStatusUpdate(status=TripStatus.COMPLETED, end_odometer=45010)
    )

    with pytest.raises(BadRequestError) as exc_info:
        await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=target))
    assert "Cannot transition trip from completed" in exc_info.value.message


@pytest.mark.asyncio
async def test_dispatched_cannot_return_to_draft(store, vehicle, driver):
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.DISPATCHED))

    with pytest.raises(BadRequestError):
        await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.DRAFT))


@pytest.mark.asyncio
async def test_release_happens_once(store, vehicle, driver):
    """A cancelled trip cannot be completed to release the vehicle a second time."""
    trip = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.DISPATCHED))
    await trip_service.update_trip_status(store, trip.id, TripStatusUpdate(status=TripStatus.CANCELLED))

    other = await trip_service.create_trip(store, trip_payload(vehicle, driver))
    await trip_service.update_trip_status(store, other.id, TripStatusUpdate(status=TripStatus.DISPATCHED))

    with pytest.raises(BadRequestError):
        await trip_service.update_trip_status(
            store, trip.id, TripStatusUpdate(status=TripStatus.COMPLETED, end_odometer=45100)
        )
    assert (await vehicle_service.get_vehicle(store, vehicle.id)).status == VehicleStatus.ON_TRIP


# TEST 7: Driver gates
@pytest.mark.asyncio
async def test_expired_license_rejected(store, vehicle):
    expired = await driver_service.create_driver(store, DriverCreate(
        name="Sam",
        license_number="DL-2002",
        license_expiry=date.today() - timedelta(days=1)
    ))

    with pytest.raises(ConflictError) as exc_info:
        await trip_service.create_trip(store, trip_payload(vehicle, expired))
    assert exc_info.value.message == "Driver license has expired"


@pytest.mark.asyncio
async def test_license_expiring_today_counts_as_expired(store, vehicle):
    today = date(2026, 3, 1)
    driver = await driver_service.create_driver(store, DriverCreate(
        name="Jordan",
        license_number="DL-3003",
        license_expiry=today
    ))

    with pytest.raises(ConflictError):
        await trip_service.create_trip(store, trip_payload(vehicle, driver), today=today)


@pytest.mark.asyncio
async def test_off_duty_driver_rejected(store, vehicle, driver):
    await driver_service.update_driver_status(store, driver.id, DriverStatusUpdate(status=DriverStatus.OFF_DUTY))

    with pytest.raises(ConflictError) as exc_info:
        await trip_service.create_trip(store, trip_payload(vehicle, driver))
    assert exc_info.value.message == "Driver is not on duty"


@pytest.mark.asyncio
async def test_retired_vehicle_rejected(store, vehicle, driver):
    await vehicle_service.update_vehicle(store, vehicle.id, VehicleUpdate(status=VehicleStatus.RETIRED))

    with pytest.raises(ConflictError):
        await trip_service.create_trip(store, trip_payload(vehicle, driver))


@pytest.mark.asyncio
async def test_missing_vehicle_or_driver(store, vehicle, driver):
    payload = trip_payload(vehicle, driver).model_copy(update={"vehicle_id": "missing"})
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await trip_service.create_trip(store, payload)
    assert exc_info.value.message == "Vehicle not found"

    payload = trip_payload(vehicle, driver).model_copy(update={"driver_id": "missing"})
    with pytest.raises(ResourceNotFoundError):
        await trip_service.create_trip(store, payload)


@pytest.mark.asyncio
async def test_list_trips_filters(store, vehicle, driver):
    bike = await vehicle_service.create_vehicle(store, VehicleCreate(
        license_plate="BIKE-01", name="Bike-01", model="Cargo", type=VehicleType.BIKE, max_capacity_kg=50
    ))
    await trip_service.create_trip(store, trip_payload(vehicle, driver))
    draft = await trip_service.create_trip(store, trip_payload(bike, driver, cargo_weight_kg=20))
    await trip_service.update_trip_status(store, draft.id, TripStatusUpdate(status=TripStatus.CANCELLED))

    trips, total = await trip_service.list_trips(store, vehicle_id=bike.id)
    assert total == 1 and trips[0].id == draft.id

    trips, total = await trip_service.list_trips(store, status=TripStatus.DRAFT)
    assert total == 1 and trips[0].vehicle_id == vehicle.id
