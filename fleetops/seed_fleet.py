"""
Database seeding script for demo fleet data.

Creates vehicles, drivers, trips, maintenance logs and expenses for local
development, then prints a bearer token per role. Users themselves live in
the identity provider and are not seeded.
Run this script after database is set up but before first use.
"""

import asyncio
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fleetops.app.core.jwt import create_access_token
from fleetops.app.db.session import engine, Base
from fleetops.app.db.store import store
from fleetops.app.models.enums import UserRole
from fleetops.app.models.fleet_enums import DriverStatus, MaintenanceStatus, TripStatus, VehicleType
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.driver import DriverCreate, DriverStatusUpdate
from fleetops.app.schemas.expense import ExpenseCreate
from fleetops.app.schemas.maintenance import MaintenanceCreate, MaintenanceUpdate
from fleetops.app.schemas.trip import TripCreate, TripStatusUpdate
from fleetops.app.schemas.vehicle import VehicleCreate
from fleetops.app.services import (
    driver_service, expense_service, maintenance_service, trip_service, vehicle_service
)


def days_from_today(offset: int) -> date:
    return date.today() + timedelta(days=offset)


async def seed_fleet():
    """
    Seed demo fleet data.

    Creates:
    - 4 vehicles (2 vans, 1 truck, 1 bike)
    - 3 drivers (Alex and Jordan on duty, Sam off duty)
    - 1 draft trip and 1 completed trip
    - 2 maintenance logs (one completed, one keeping the bike in the shop)
    - 2 expenses (trip fuel and a toll)
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    print("🌱 Starting fleet seeding...")

    async with store.transaction() as tx:
        if await tx.count(Vehicle):
            print("ℹ️  Vehicles already exist, skipping seeding")
            return

    # 1. Vehicles
    van1 = await vehicle_service.create_vehicle(store, VehicleCreate(
        license_plate="MH-01-AB-1234", name="Van-01", model="Ford Transit",
        type=VehicleType.VAN, max_capacity_kg=500, odometer=45200
    ))
    van2 = await vehicle_service.create_vehicle(store, VehicleCreate(
        license_plate="MH-02-CD-5678", name="Van-02", model="Mercedes Sprinter",
        type=VehicleType.VAN, max_capacity_kg=750, odometer=32100
    ))
    truck1 = await vehicle_service.create_vehicle(store, VehicleCreate(
        license_plate="MH-03-EF-9012", name="Truck-01", model="Tata Ace",
        type=VehicleType.TRUCK, max_capacity_kg=1500, odometer=67800
    ))
    bike1 = await vehicle_service.create_vehicle(store, VehicleCreate(
        license_plate="MH-12-GH-3456", name="Bike-01", model="Bajaj Boxer",
        type=VehicleType.BIKE, max_capacity_kg=50, odometer=12000
    ))
    print("✅ Created 4 vehicles")

    # 2. Drivers
    alex = await driver_service.create_driver(store, DriverCreate(
        name="Alex", license_number="DL-1234567", license_expiry=days_from_today(90),
        safety_score=95, completion_rate=98
    ))
    sam = await driver_service.create_driver(store, DriverCreate(
        name="Sam", license_number="DL-7654321", license_expiry=days_from_today(45),
        safety_score=88, completion_rate=92
    ))
    jordan = await driver_service.create_driver(store, DriverCreate(
        name="Jordan", license_number="DL-1122334", license_expiry=days_from_today(200),
        safety_score=100, completion_rate=100
    ))
    print("✅ Created 3 drivers")

    # 3. Trips: one draft, one run to completion for analytics
    await trip_service.create_trip(store, TripCreate(
        vehicle_id=van1.id, driver_id=alex.id, cargo_weight_kg=450,
        origin_address="Warehouse A, Mumbai", destination="Client Site, Pune",
        start_odometer=45200, estimated_fuel_cost=Decimal("2500")
    ))
    completed = await trip_service.create_trip(store, TripCreate(
        vehicle_id=van2.id, driver_id=jordan.id, cargo_weight_kg=600,
        origin_address="Hub Delhi", destination="Customer Gurgaon",
        start_odometer=32100, estimated_fuel_cost=Decimal("1800")
    ))
    await trip_service.update_trip_status(store, completed.id, TripStatusUpdate(status=TripStatus.DISPATCHED))
    await trip_service.update_trip_status(store, completed.id, TripStatusUpdate(
        status=TripStatus.COMPLETED, end_odometer=32180, actual_fuel_cost=Decimal("1750")
    ))
    print("✅ Created 2 trips (draft + completed)")

    # Sam goes off duty once rostered out
    await driver_service.update_driver_status(store, sam.id, DriverStatusUpdate(status=DriverStatus.OFF_DUTY))

    # 4. Maintenance logs
    oil_change = await maintenance_service.create_maintenance(store, MaintenanceCreate(
        vehicle_id=truck1.id, service_type="preventative",
        description="Oil change and filter replacement",
        cost=Decimal("3500"), date=days_from_today(-7)
    ))
    await maintenance_service.update_maintenance(
        store, oil_change.id, MaintenanceUpdate(status=MaintenanceStatus.COMPLETED)
    )
    await maintenance_service.create_maintenance(store, MaintenanceCreate(
        vehicle_id=bike1.id, service_type="inspection", description="Brake pad check",
        cost=Decimal("800"), date=days_from_today(-2)
    ))
    print("✅ Created 2 maintenance logs (Bike-01 is in the shop)")

    # 5. Expenses
    await expense_service.create_expense(store, ExpenseCreate(
        vehicle_id=van2.id, trip_id=completed.id, fuel_liters=Decimal("45.5"),
        fuel_cost=Decimal("4200"), date=days_from_today(-1)
    ))
    await expense_service.create_expense(store, ExpenseCreate(
        vehicle_id=van1.id, misc_expense=Decimal("500"), misc_description="Toll charges",
        date=days_from_today(-3)
    ))
    print("✅ Created 2 expenses")

    print("\n🔑 Development tokens:")
    for role in UserRole:
        token = create_access_token({"sub": f"demo-{role.value}", "role": role.value})
        print(f"   {role.value}: {token}")

    print("\n🎉 Seeding completed successfully!")


if __name__ == "__main__":
    asyncio.run(seed_fleet())
