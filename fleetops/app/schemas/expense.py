"""
Expense schemas.
"""

from decimal import Decimal
from pydantic import BaseModel, Field
from datetime import date as date_type, datetime
from typing import Optional, List


class ExpenseCreate(BaseModel):
    """Schema for recording fuel or miscellaneous spend."""
    vehicle_id: str = Field(..., min_length=1)
    trip_id: Optional[str] = None
    fuel_liters: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    fuel_cost: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    misc_expense: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    misc_description: Optional[str] = Field(None, max_length=500)
    date: date_type


class ExpenseUpdate(BaseModel):
    trip_id: Optional[str] = None
    fuel_liters: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    fuel_cost: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    misc_expense: Optional[Decimal] = Field(None, ge=0, decimal_places=2)
    misc_description: Optional[str] = Field(None, max_length=500)
    date: Optional[date_type] = None


class ExpenseResponse(BaseModel):
    id: str
    vehicle_id: str
    trip_id: Optional[str]
    fuel_liters: Optional[Decimal]
    fuel_cost: Optional[Decimal]
    misc_expense: Optional[Decimal]
    misc_description: Optional[str]
    date: date_type
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExpenseListResponse(BaseModel):
    expenses: List[ExpenseResponse]
    total: int
    page: int
    page_size: int
