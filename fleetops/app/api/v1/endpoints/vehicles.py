"""
Vehicle registry API endpoints.

Anyone signed in may browse the fleet; only managers register, edit or
delete vehicles.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Path, status

from fleetops.app.core.dependencies import get_current_session
from fleetops.app.core.guards import require_role
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.models.enums import UserRole
from fleetops.app.models.fleet_enums import VehicleStatus, VehicleType
from fleetops.app.schemas.auth import Session
from fleetops.app.schemas.vehicle import (
    VehicleCreate, VehicleUpdate, VehicleResponse, VehicleListResponse
)
from fleetops.app.services import vehicle_service
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get("", response_model=VehicleListResponse)
async def list_vehicles(
    status_filter: Optional[VehicleStatus] = Query(None, alias="status"),
    type_filter: Optional[VehicleType] = Query(None, alias="type"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    """List vehicles, optionally filtered by status and type."""
    vehicles, total = await vehicle_service.list_vehicles(
        store, status_filter, type_filter, offset=(page - 1) * page_size, limit=page_size
    )
    return VehicleListResponse(
        vehicles=[VehicleResponse.model_validate(v) for v in vehicles],
        total=total,
        page=page,
        page_size=page_size
    )


@router.get("/available", response_model=List[VehicleResponse])
async def list_available_vehicles(
    session: Session = Depends(require_role([UserRole.MANAGER, UserRole.DISPATCHER])),
    store: EntityStore = Depends(get_store)
):
    """Vehicles that can be assigned to a new trip."""
    vehicles = await vehicle_service.list_available_vehicles(store)
    return [VehicleResponse.model_validate(v) for v in vehicles]


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: str = Path(..., description="Vehicle ID"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    vehicle = await vehicle_service.get_vehicle(store, vehicle_id)
    return VehicleResponse.model_validate(vehicle)


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    session: Session = Depends(require_role([UserRole.MANAGER])),
    store: EntityStore = Depends(get_store)
):
    """
    Register a vehicle (Manager only).

    License plates are unique; a duplicate returns 409.
    """
    vehicle = await vehicle_service.create_vehicle(store, vehicle_data)

    await log_event(
        store,
        AuditAction.VEHICLE_CREATED,
        session,
        entity_type="vehicle",
        entity_id=vehicle.id,
        metadata={"license_plate": vehicle.license_plate}
    )

    return VehicleResponse.model_validate(vehicle)


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_data: VehicleUpdate,
    vehicle_id: str = Path(..., description="Vehicle ID"),
    session: Session = Depends(require_role([UserRole.MANAGER])),
    store: EntityStore = Depends(get_store)
):
    """
    Edit a vehicle (Manager only).

    Status may only be set to available or retired by hand.
    """
    vehicle = await vehicle_service.update_vehicle(store, vehicle_id, vehicle_data)

    await log_event(
        store,
        AuditAction.VEHICLE_UPDATED,
        session,
        entity_type="vehicle",
        entity_id=vehicle.id,
        metadata={"updated_fields": list(vehicle_data.model_dump(exclude_unset=True).keys())}
    )

    return VehicleResponse.model_validate(vehicle)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: str = Path(..., description="Vehicle ID"),
    session: Session = Depends(require_role([UserRole.MANAGER])),
    store: EntityStore = Depends(get_store)
):
    """Delete a vehicle with no draft or dispatched trips (Manager only)."""
    await vehicle_service.delete_vehicle(store, vehicle_id)
    await log_event(store, AuditAction.VEHICLE_DELETED, session, entity_type="vehicle", entity_id=vehicle_id)
