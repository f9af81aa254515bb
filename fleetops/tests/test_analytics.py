"""
Analytics and dashboard KPI tests.
"""

import pytest
from datetime import date
from decimal import Decimal

from fleetops.app.models.fleet_enums import TripStatus, VehicleType
from fleetops.app.schemas.expense import ExpenseCreate
from fleetops.app.schemas.maintenance import MaintenanceCreate
from fleetops.app.schemas.trip import TripCreate, TripStatusUpdate
from fleetops.app.schemas.vehicle import VehicleCreate
from fleetops.app.services import expense_service, maintenance_service, trip_service, vehicle_service
from fleetops.app.services.analytics import AnalyticsService, km_per_liter
from fleetops.app.services.dashboard import get_kpis, utilization_rate


async def create_trip(store, vehicle, driver, cargo_weight_kg=100):
    return await trip_service.create_trip(store, TripCreate(
        vehicle_id=vehicle.id, driver_id=driver.id, cargo_weight_kg=cargo_weight_kg,
        origin_address="Yard", destination="Port", start_odometer=45000
    ))


@pytest.mark.parametrize("on_trip,total,expected", [
    (0, 0, 0),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (4, 4, 100),
])
def test_utilization_rate(on_trip, total, expected):
    assert utilization_rate(on_trip, total) == expected


def test_km_per_liter_rounding():
    assert km_per_liter(280, 55) == 5.09
    assert km_per_liter(100, 8) == 12.5
    assert km_per_liter(100, 0) is None


@pytest.mark.asyncio
async def test_empty_fleet_summary(store):
    summary = await AnalyticsService.get_analytics_summary(store)

    assert summary.cost_summary == []
    assert summary.fuel_efficiency == []
    assert summary.total_operational_cost == 0


@pytest.mark.asyncio
async def test_cost_and_efficiency(store, vehicle, driver):
    trip = await create_trip(store, vehicle, driver)
    await trip_service.update_trip_status(
        store, trip.id, TripStatusUpdate(status=TripStatus.COMPLETED, end_odometer=45280)
    )

    # Two fuel stops on the same trip; the trip distance counts once
    await expense_service.create_expense(store, ExpenseCreate(
        vehicle_id=vehicle.id, trip_id=trip.id, fuel_liters=Decimal("40"),
        fuel_cost=Decimal("100.00"), misc_expense=Decimal("20.00"), date=date(2026, 2, 1)
    ))
    await expense_service.create_expense(store, ExpenseCreate(
        vehicle_id=vehicle.id, trip_id=trip.id, fuel_liters=Decimal("15"), date=date(2026, 2, 2)
    ))
    await maintenance_service.create_maintenance(store, MaintenanceCreate(
        vehicle_id=vehicle.id, service_type="Oil change", cost=Decimal("85.50"), date=date(2026, 2, 3)
    ))

    summary = await AnalyticsService.get_analytics_summary(store)

    [cost] = summary.cost_summary
    assert cost.vehicle_id == vehicle.id
    assert cost.total_fuel_cost == pytest.approx(120.0)
    assert cost.total_maintenance_cost == pytest.approx(85.5)
    assert cost.total_operational_cost == pytest.approx(205.5)
    assert summary.total_operational_cost == pytest.approx(205.5)

    [efficiency] = summary.fuel_efficiency
    assert efficiency.license_plate == vehicle.license_plate
    assert efficiency.total_km == 280
    assert efficiency.total_liters == pytest.approx(55.0)
    assert efficiency.km_per_liter == 5.09


@pytest.mark.asyncio
async def test_trips_without_fuel_or_not_completed_are_ignored(store, vehicle, driver):
    open_trip = await create_trip(store, vehicle, driver)
    await expense_service.create_expense(store, ExpenseCreate(
        vehicle_id=vehicle.id, trip_id=open_trip.id, fuel_liters=Decimal("10"), date=date(2026, 2, 1)
    ))
    done = await create_trip(store, vehicle, driver)
    await trip_service.update_trip_status(
        store, done.id, TripStatusUpdate(status=TripStatus.COMPLETED, end_odometer=45100)
    )

    summary = await AnalyticsService.get_analytics_summary(store)
    assert summary.fuel_efficiency == []


@pytest.mark.asyncio
async def test_dashboard_kpis(store, vehicle, driver):
    truck = await vehicle_service.create_vehicle(store, VehicleCreate(
        license_plate="TRK-09", name="Truck-09", model="Actros", type=VehicleType.TRUCK, max_capacity_kg=5000
    ))
    shop_van = await vehicle_service.create_vehicle(store, VehicleCreate(
        license_plate="VAN-07", name="Van-07", model="Sprinter", type=VehicleType.VAN, max_capacity_kg=800
    ))
    await maintenance_service.create_maintenance(store, MaintenanceCreate(
        vehicle_id=shop_van.id, service_type="Brakes", cost=Decimal("150"), date=date(2026, 2, 3)
    ))

    dispatched = await create_trip(store, vehicle, driver)
    await trip_service.update_trip_status(store, dispatched.id, TripStatusUpdate(status=TripStatus.DISPATCHED))
    await create_trip(store, truck, driver)

    kpis = await get_kpis(store)

    assert kpis.active_fleet == 1
    assert kpis.maintenance_alerts == 1
    assert kpis.utilization_rate == 33
    assert kpis.pending_cargo == 1
