"""
Trip API endpoints.

Dispatchers and managers create trips and move them through
draft -> dispatched -> completed / cancelled.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Path, status

from fleetops.app.core.dependencies import get_current_session
from fleetops.app.core.guards import require_role
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.models.enums import UserRole
from fleetops.app.models.fleet_enums import TripStatus
from fleetops.app.schemas.auth import Session
from fleetops.app.schemas.trip import (
    TripCreate, TripStatusUpdate, TripResponse, TripListResponse
)
from fleetops.app.services import trip_service
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/trips", tags=["Trips"])

TRIP_ROLES = [UserRole.MANAGER, UserRole.DISPATCHER]


@router.get("", response_model=TripListResponse)
async def list_trips(
    status_filter: Optional[TripStatus] = Query(None, alias="status"),
    vehicle_id: Optional[str] = Query(None),
    driver_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    trips, total = await trip_service.list_trips(
        store, status_filter, vehicle_id, driver_id,
        offset=(page - 1) * page_size, limit=page_size
    )
    return TripListResponse(
        trips=[TripResponse.model_validate(t) for t in trips],
        total=total,
        page=page,
        page_size=page_size
    )


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: str = Path(..., description="Trip ID"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    trip = await trip_service.get_trip(store, trip_id)
    return TripResponse.model_validate(trip)


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    session: Session = Depends(require_role(TRIP_ROLES)),
    store: EntityStore = Depends(get_store)
):
    """
    Create a draft trip.

    The vehicle must be available, the driver on duty with a valid license,
    and the cargo within the vehicle's capacity.
    """
    trip = await trip_service.create_trip(store, trip_data)

    await log_event(
        store,
        AuditAction.TRIP_CREATED,
        session,
        entity_type="trip",
        entity_id=trip.id,
        metadata={
            "vehicle_id": trip.vehicle_id,
            "driver_id": trip.driver_id,
            "cargo_weight_kg": trip.cargo_weight_kg
        }
    )

    return TripResponse.model_validate(trip)


@router.patch("/{trip_id}/status", response_model=TripResponse)
async def update_trip_status(
    status_data: TripStatusUpdate,
    trip_id: str = Path(..., description="Trip ID"),
    session: Session = Depends(require_role(TRIP_ROLES)),
    store: EntityStore = Depends(get_store)
):
    """
    Move a trip to its next status.

    Completing requires end_odometer. Dispatch puts the vehicle on the road;
    completing or cancelling a dispatched trip releases it.
    """
    trip = await trip_service.update_trip_status(store, trip_id, status_data)

    await log_event(
        store,
        AuditAction.TRIP_STATUS_CHANGED,
        session,
        entity_type="trip",
        entity_id=trip.id,
        metadata={"status": trip.status.value, "vehicle_id": trip.vehicle_id}
    )

    return TripResponse.model_validate(trip)
