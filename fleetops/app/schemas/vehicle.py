"""
Vehicle Pydantic schemas.

Defines request and response models for the vehicle registry.
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, List

from fleetops.app.models.fleet_enums import VehicleStatus, VehicleType


class VehicleCreate(BaseModel):
    """Schema for registering a new vehicle."""
    license_plate: str = Field(..., min_length=1, max_length=20, description="Unique license plate")
    name: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    type: VehicleType
    max_capacity_kg: int = Field(..., gt=0, description="Maximum cargo capacity in kg")
    odometer: int = Field(0, ge=0, description="Current odometer reading in km")


class VehicleUpdate(BaseModel):
    """Schema for editing a vehicle. Status may only be set to available or retired."""
    license_plate: Optional[str] = Field(None, min_length=1, max_length=20)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[VehicleType] = None
    max_capacity_kg: Optional[int] = Field(None, gt=0)
    odometer: Optional[int] = Field(None, ge=0)
    status: Optional[VehicleStatus] = None


class VehicleResponse(BaseModel):
    """Schema for vehicle response."""
    id: str
    license_plate: str
    name: str
    model: str
    type: VehicleType
    max_capacity_kg: int
    odometer: int
    status: VehicleStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class VehicleListResponse(BaseModel):
    """Schema for paginated vehicle list."""
    vehicles: List[VehicleResponse]
    total: int
    page: int
    page_size: int
