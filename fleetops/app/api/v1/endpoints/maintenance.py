"""
Maintenance log API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Path, status

from fleetops.app.core.dependencies import get_current_session
from fleetops.app.core.guards import require_role
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.models.enums import UserRole
from fleetops.app.models.fleet_enums import MaintenanceStatus
from fleetops.app.schemas.auth import Session
from fleetops.app.schemas.maintenance import (
    MaintenanceCreate, MaintenanceUpdate, MaintenanceResponse, MaintenanceListResponse
)
from fleetops.app.services import maintenance_service
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/maintenance", tags=["Maintenance"])


@router.get("", response_model=MaintenanceListResponse)
async def list_maintenance(
    vehicle_id: Optional[str] = Query(None),
    status_filter: Optional[MaintenanceStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    logs, total = await maintenance_service.list_maintenance(
        store, vehicle_id, status_filter, offset=(page - 1) * page_size, limit=page_size
    )
    return MaintenanceListResponse(
        logs=[MaintenanceResponse.model_validate(log) for log in logs],
        total=total,
        page=page,
        page_size=page_size
    )


@router.get("/{log_id}", response_model=MaintenanceResponse)
async def get_maintenance(
    log_id: str = Path(..., description="Maintenance log ID"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    log = await maintenance_service.get_maintenance(store, log_id)
    return MaintenanceResponse.model_validate(log)


@router.post("", response_model=MaintenanceResponse, status_code=status.HTTP_201_CREATED)
async def create_maintenance(
    log_data: MaintenanceCreate,
    session: Session = Depends(require_role([UserRole.MANAGER])),
    store: EntityStore = Depends(get_store)
):
    """
    Open a maintenance log (Manager only).

    The vehicle goes to the shop; vehicles on a trip are refused with 409.
    """
    log = await maintenance_service.create_maintenance(store, log_data)

    await log_event(
        store,
        AuditAction.MAINTENANCE_OPENED,
        session,
        entity_type="maintenance_log",
        entity_id=log.id,
        metadata={"vehicle_id": log.vehicle_id, "service_type": log.service_type}
    )

    return MaintenanceResponse.model_validate(log)


@router.put("/{log_id}", response_model=MaintenanceResponse)
async def update_maintenance(
    log_data: MaintenanceUpdate,
    log_id: str = Path(..., description="Maintenance log ID"),
    session: Session = Depends(require_role([UserRole.MANAGER])),
    store: EntityStore = Depends(get_store)
):
    """Edit a maintenance log; setting status=completed closes it."""
    log = await maintenance_service.update_maintenance(store, log_id, log_data)

    await log_event(
        store,
        AuditAction.MAINTENANCE_UPDATED,
        session,
        entity_type="maintenance_log",
        entity_id=log.id,
        metadata={
            "status": log.status.value,
            "updated_fields": list(log_data.model_dump(exclude_unset=True).keys())
        }
    )

    return MaintenanceResponse.model_validate(log)
