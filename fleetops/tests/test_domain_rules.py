"""
Pure availability and trip state machine rules.
"""

from datetime import date
from types import SimpleNamespace

import pytest

from fleetops.app.domain.fleet.availability import (
    cargo_fits, driver_is_assignable, license_is_valid, vehicle_is_assignable
)
from fleetops.app.domain.fleet.trip_lifecycle import (
    ALLOWED_TRANSITIONS, TERMINAL_STATUSES, can_transition, releases_vehicle
)
from fleetops.app.models.fleet_enums import DriverStatus, TripStatus, VehicleStatus

TODAY = date(2026, 6, 1)


@pytest.mark.parametrize("status,expected", [
    (VehicleStatus.AVAILABLE, True),
    (VehicleStatus.ON_TRIP, False),
    (VehicleStatus.IN_SHOP, False),
    (VehicleStatus.RETIRED, False),
])
def test_vehicle_is_assignable(status, expected):
    assert vehicle_is_assignable(SimpleNamespace(status=status)) is expected


def test_license_boundary():
    assert license_is_valid(SimpleNamespace(license_expiry=date(2026, 6, 2)), TODAY)
    assert not license_is_valid(SimpleNamespace(license_expiry=TODAY), TODAY)


def test_driver_is_assignable_needs_duty_and_license():
    valid = date(2027, 1, 1)
    assert driver_is_assignable(SimpleNamespace(status=DriverStatus.ON_DUTY, license_expiry=valid), TODAY)
    assert not driver_is_assignable(SimpleNamespace(status=DriverStatus.SUSPENDED, license_expiry=valid), TODAY)
    assert not driver_is_assignable(SimpleNamespace(status=DriverStatus.ON_DUTY, license_expiry=TODAY), TODAY)


def test_cargo_fits_is_inclusive():
    van = SimpleNamespace(max_capacity_kg=500)
    assert cargo_fits(500, van)
    assert not cargo_fits(501, van)


def test_terminal_statuses():
    assert TERMINAL_STATUSES == {TripStatus.COMPLETED, TripStatus.CANCELLED}
    for status in TERMINAL_STATUSES:
        assert not any(can_transition(status, target) for target in TripStatus)


def test_transition_table():
    assert can_transition(TripStatus.DRAFT, TripStatus.DISPATCHED)
    assert can_transition(TripStatus.DRAFT, TripStatus.COMPLETED)
    assert can_transition(TripStatus.DISPATCHED, TripStatus.CANCELLED)
    assert not can_transition(TripStatus.DISPATCHED, TripStatus.DRAFT)
    assert not can_transition(TripStatus.DRAFT, TripStatus.DRAFT)
    assert set(ALLOWED_TRANSITIONS) == set(TripStatus)


def test_only_leaving_dispatch_releases_vehicle():
    assert releases_vehicle(TripStatus.DISPATCHED, TripStatus.COMPLETED)
    assert releases_vehicle(TripStatus.DISPATCHED, TripStatus.CANCELLED)
    assert not releases_vehicle(TripStatus.DRAFT, TripStatus.CANCELLED)
    assert not releases_vehicle(TripStatus.DRAFT, TripStatus.DISPATCHED)
