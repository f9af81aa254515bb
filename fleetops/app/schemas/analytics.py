"""
Analytics and dashboard schemas.
"""

from pydantic import BaseModel
from typing import List, Optional


class CostSummaryItem(BaseModel):
    """Operational cost per vehicle."""
    vehicle_id: str
    vehicle_name: str
    license_plate: str
    total_fuel_cost: float  # fuel + misc expenses
    total_maintenance_cost: float
    total_operational_cost: float


class FuelEfficiencyItem(BaseModel):
    """Distance per liter over completed trips with recorded fuel."""
    vehicle_id: str
    vehicle_name: str
    license_plate: str
    total_km: float
    total_liters: float
    km_per_liter: Optional[float]


class AnalyticsSummary(BaseModel):
    cost_summary: List[CostSummaryItem]
    fuel_efficiency: List[FuelEfficiencyItem]
    total_operational_cost: float


class DashboardKpis(BaseModel):
    """Headline fleet indicators."""
    active_fleet: int
    maintenance_alerts: int
    utilization_rate: int  # percent of vehicles on a trip
    pending_cargo: int
