"""
Maintenance log schemas.
"""

from decimal import Decimal
from pydantic import BaseModel, Field
from datetime import date as date_type, datetime
from typing import Optional, List

from fleetops.app.models.fleet_enums import MaintenanceStatus


class MaintenanceCreate(BaseModel):
    """Schema for opening a maintenance log (vehicle goes to the shop)."""
    vehicle_id: str = Field(..., min_length=1)
    service_type: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cost: Decimal = Field(..., ge=0, decimal_places=2)
    date: date_type


class MaintenanceUpdate(BaseModel):
    """Schema for editing a maintenance log; status=completed closes it."""
    service_type: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    cost: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    date: Optional[date_type] = None
    status: Optional[MaintenanceStatus] = None


class MaintenanceResponse(BaseModel):
    id: str
    vehicle_id: str
    service_type: str
    description: Optional[str]
    cost: Decimal
    date: date_type
    status: MaintenanceStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MaintenanceListResponse(BaseModel):
    logs: List[MaintenanceResponse]
    total: int
    page: int
    page_size: int
