"""
Assignment availability rules.

Pure predicates over vehicle and driver snapshots. Callers must evaluate them
against rows read inside the transaction that performs the assignment.
"""

from datetime import date

from fleetops.app.models.fleet_enums import DriverStatus, VehicleStatus


def vehicle_is_assignable(vehicle) -> bool:
    """A vehicle can take a trip only while it is available."""
    return vehicle.status == VehicleStatus.AVAILABLE


def license_is_valid(driver, today: date) -> bool:
    """A license expiring today is already expired."""
    return driver.license_expiry > today


def cargo_fits(weight_kg: int, vehicle) -> bool:
    return weight_kg <= vehicle.max_capacity_kg


def driver_is_assignable(driver, today: date) -> bool:
    return driver.status == DriverStatus.ON_DUTY and license_is_valid(driver, today)
