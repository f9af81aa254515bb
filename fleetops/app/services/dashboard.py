"""
Dashboard KPI service.
"""

import math

from fleetops.app.db.store import EntityStore
from fleetops.app.models.fleet_enums import TripStatus, VehicleStatus
from fleetops.app.models.trip import Trip
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.analytics import DashboardKpis


def utilization_rate(on_trip: int, total: int) -> int:
    """Percentage of the fleet on the road, rounded half-up; 0 for an empty fleet."""
    if total <= 0:
        return 0
    return math.floor(on_trip / total * 100 + 0.5)


async def get_kpis(store: EntityStore) -> DashboardKpis:
    async with store.transaction() as tx:
        on_trip = await tx.count(Vehicle, Vehicle.status == VehicleStatus.ON_TRIP)
        in_shop = await tx.count(Vehicle, Vehicle.status == VehicleStatus.IN_SHOP)
        total = await tx.count(Vehicle)
        drafts = await tx.count(Trip, Trip.status == TripStatus.DRAFT)

    return DashboardKpis(
        active_fleet=on_trip,
        maintenance_alerts=in_shop,
        utilization_rate=utilization_rate(on_trip, total),
        pending_cargo=drafts
    )
