"""
Trip schemas.

Schemas for trip creation, status transitions and visibility.
"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from fleetops.app.models.fleet_enums import TripStatus


class TripCreate(BaseModel):
    """Schema for creating a draft trip."""
    vehicle_id: str = Field(..., min_length=1)
    driver_id: str = Field(..., min_length=1)
    cargo_weight_kg: int = Field(..., gt=0, description="Cargo weight in kg")
    origin_address: str = Field(..., min_length=1, max_length=500)
    destination: str = Field(..., min_length=1, max_length=500)
    start_odometer: int = Field(..., ge=0)
    estimated_fuel_cost: Optional[Decimal] = Field(None, ge=0, decimal_places=2)


class TripStatusUpdate(BaseModel):
    """Schema for moving a trip to its next status."""
    status: TripStatus
    end_odometer: Optional[int] = Field(None, ge=0, description="Required when completing")
    actual_fuel_cost: Optional[Decimal] = Field(None, ge=0, decimal_places=2)


class TripResponse(BaseModel):
    """Schema for trip response."""
    id: str
    vehicle_id: str
    driver_id: str
    cargo_weight_kg: int
    origin_address: str
    destination: str
    estimated_fuel_cost: Optional[Decimal]
    actual_fuel_cost: Optional[Decimal]
    start_odometer: int
    end_odometer: Optional[int]
    status: TripStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TripListResponse(BaseModel):
    """Schema for paginated trip list."""
    trips: List[TripResponse]
    total: int
    page: int
    page_size: int
