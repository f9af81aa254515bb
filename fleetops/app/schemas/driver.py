"""
Driver Pydantic schemas.
"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional, List

from fleetops.app.models.fleet_enums import DriverStatus


class DriverCreate(BaseModel):
    """Schema for registering a driver. New drivers start on duty."""
    name: str = Field(..., min_length=1, max_length=100)
    license_number: str = Field(..., min_length=1, max_length=50)
    license_expiry: date
    safety_score: int = Field(100, ge=0, le=100)
    completion_rate: int = Field(0, ge=0, le=100)


class DriverUpdate(BaseModel):
    """Schema for editing driver profile fields (not duty status)."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    license_number: Optional[str] = Field(None, min_length=1, max_length=50)
    license_expiry: Optional[date] = None
    safety_score: Optional[int] = Field(None, ge=0, le=100)
    completion_rate: Optional[int] = Field(None, ge=0, le=100)
    complaints: Optional[int] = Field(None, ge=0)


class DriverStatusUpdate(BaseModel):
    """Schema for changing a driver's duty status."""
    status: DriverStatus


class DriverResponse(BaseModel):
    """Schema for driver response."""
    id: str
    name: str
    license_number: str
    license_expiry: date
    safety_score: int
    completion_rate: int
    complaints: int
    status: DriverStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DriverListResponse(BaseModel):
    """Schema for paginated driver list."""
    drivers: List[DriverResponse]
    total: int
    page: int
    page_size: int
