"""
Analytics Service.

Cost and fuel efficiency aggregation over the fleet ledger.
Focused on READ-ONLY operations.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy import select, func

from fleetops.app.db.store import EntityStore
from fleetops.app.models.expense import Expense
from fleetops.app.models.fleet_enums import TripStatus
from fleetops.app.models.maintenance_log import MaintenanceLog
from fleetops.app.models.trip import Trip
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.analytics import (
    AnalyticsSummary, CostSummaryItem, FuelEfficiencyItem
)


def km_per_liter(total_km: float, total_liters: float) -> Optional[float]:
    """Distance per liter rounded half-up to 2 places, None without fuel data."""
    if total_liters <= 0:
        return None
    ratio = Decimal(str(total_km)) / Decimal(str(total_liters))
    return float(ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class AnalyticsService:

    @staticmethod
    async def get_analytics_summary(store: EntityStore) -> AnalyticsSummary:
        """Per-vehicle operational cost and fuel efficiency across the fleet."""
        async with store.transaction() as tx:
            db = tx.session
            vehicles = (await db.execute(select(Vehicle).order_by(Vehicle.name))).scalars().all()

            # 1. Fuel + misc spend per vehicle
            expense_query = select(
                Expense.vehicle_id,
                func.sum(
                    func.coalesce(Expense.fuel_cost, 0) + func.coalesce(Expense.misc_expense, 0)
                )
            ).group_by(Expense.vehicle_id)
            expense_totals = {
                vehicle_id: float(total or 0)
                for vehicle_id, total in (await db.execute(expense_query)).all()
            }

            # 2. Maintenance spend per vehicle
            maintenance_query = select(
                MaintenanceLog.vehicle_id,
                func.sum(MaintenanceLog.cost)
            ).group_by(MaintenanceLog.vehicle_id)
            maintenance_totals = {
                vehicle_id: float(total or 0)
                for vehicle_id, total in (await db.execute(maintenance_query)).all()
            }

            # 3. Distance vs fuel over completed trips that have fuel expenses.
            # Liters are summed per trip first so each trip's distance counts once.
            liters_per_trip = select(
                Expense.trip_id.label("trip_id"),
                func.sum(func.coalesce(Expense.fuel_liters, 0)).label("liters")
            ).where(
                Expense.trip_id.is_not(None)
            ).group_by(Expense.trip_id).subquery()

            efficiency_query = select(
                Trip.vehicle_id,
                func.sum(Trip.end_odometer - Trip.start_odometer),
                func.coalesce(func.sum(liters_per_trip.c.liters), 0)
            ).join(
                liters_per_trip, liters_per_trip.c.trip_id == Trip.id
            ).where(
                Trip.status == TripStatus.COMPLETED,
                Trip.end_odometer.is_not(None)
            ).group_by(Trip.vehicle_id)
            efficiency_rows = (await db.execute(efficiency_query)).all()

        cost_summary = []
        for vehicle in vehicles:
            fuel_cost = expense_totals.get(vehicle.id, 0.0)
            maintenance_cost = maintenance_totals.get(vehicle.id, 0.0)
            cost_summary.append(CostSummaryItem(
                vehicle_id=vehicle.id,
                vehicle_name=vehicle.name,
                license_plate=vehicle.license_plate,
                total_fuel_cost=fuel_cost,
                total_maintenance_cost=maintenance_cost,
                total_operational_cost=fuel_cost + maintenance_cost
            ))

        by_id = {vehicle.id: vehicle for vehicle in vehicles}
        fuel_efficiency = []
        for vehicle_id, km, liters in efficiency_rows:
            vehicle = by_id.get(vehicle_id)
            total_km = float(km or 0)
            total_liters = float(liters or 0)
            fuel_efficiency.append(FuelEfficiencyItem(
                vehicle_id=vehicle_id,
                vehicle_name=vehicle.name if vehicle else "",
                license_plate=vehicle.license_plate if vehicle else "",
                total_km=total_km,
                total_liters=total_liters,
                km_per_liter=km_per_liter(total_km, total_liters)
            ))

        return AnalyticsSummary(
            cost_summary=cost_summary,
            fuel_efficiency=fuel_efficiency,
            total_operational_cost=sum(item.total_operational_cost for item in cost_summary)
        )
