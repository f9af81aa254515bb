"""
Driver API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Path, status

from fleetops.app.core.dependencies import get_current_session
from fleetops.app.core.guards import require_role
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.models.enums import UserRole
from fleetops.app.models.fleet_enums import DriverStatus
from fleetops.app.schemas.auth import Session
from fleetops.app.schemas.driver import (
    DriverCreate, DriverUpdate, DriverStatusUpdate, DriverResponse, DriverListResponse
)
from fleetops.app.services import driver_service
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/drivers", tags=["Drivers"])


@router.get("", response_model=DriverListResponse)
async def list_drivers(
    status_filter: Optional[DriverStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    drivers, total = await driver_service.list_drivers(
        store, status_filter, offset=(page - 1) * page_size, limit=page_size
    )
    return DriverListResponse(
        drivers=[DriverResponse.model_validate(d) for d in drivers],
        total=total,
        page=page,
        page_size=page_size
    )


@router.get("/available", response_model=List[DriverResponse])
async def list_available_drivers(
    session: Session = Depends(require_role([UserRole.MANAGER, UserRole.DISPATCHER])),
    store: EntityStore = Depends(get_store)
):
    """On-duty drivers whose license is still valid."""
    drivers = await driver_service.list_available_drivers(store)
    return [DriverResponse.model_validate(d) for d in drivers]


@router.get("/{driver_id}", response_model=DriverResponse)
async def get_driver(
    driver_id: str = Path(..., description="Driver ID"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    driver = await driver_service.get_driver(store, driver_id)
    return DriverResponse.model_validate(driver)


@router.post("", response_model=DriverResponse, status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    session: Session = Depends(require_role([UserRole.MANAGER, UserRole.SAFETY_OFFICER])),
    store: EntityStore = Depends(get_store)
):
    driver = await driver_service.create_driver(store, driver_data)

    await log_event(
        store,
        AuditAction.DRIVER_CREATED,
        session,
        entity_type="driver",
        entity_id=driver.id,
        metadata={"license_number": driver.license_number}
    )

    return DriverResponse.model_validate(driver)


@router.put("/{driver_id}", response_model=DriverResponse)
async def update_driver(
    driver_data: DriverUpdate,
    driver_id: str = Path(..., description="Driver ID"),
    session: Session = Depends(require_role([UserRole.MANAGER, UserRole.SAFETY_OFFICER])),
    store: EntityStore = Depends(get_store)
):
    """Edit driver profile fields. Duty status has its own endpoint."""
    driver = await driver_service.update_driver(store, driver_id, driver_data)

    await log_event(
        store,
        AuditAction.DRIVER_UPDATED,
        session,
        entity_type="driver",
        entity_id=driver.id,
        metadata={"updated_fields": list(driver_data.model_dump(exclude_unset=True).keys())}
    )

    return DriverResponse.model_validate(driver)


@router.patch("/{driver_id}/status", response_model=DriverResponse)
async def update_driver_status(
    status_data: DriverStatusUpdate,
    driver_id: str = Path(..., description="Driver ID"),
    session: Session = Depends(require_role([
        UserRole.MANAGER, UserRole.DISPATCHER, UserRole.SAFETY_OFFICER
    ])),
    store: EntityStore = Depends(get_store)
):
    """
    Change a driver's duty status.

    Returns 409 when taking a driver off duty while they hold draft or
    dispatched trips.
    """
    driver = await driver_service.update_driver_status(store, driver_id, status_data)

    await log_event(
        store,
        AuditAction.DRIVER_STATUS_CHANGED,
        session,
        entity_type="driver",
        entity_id=driver.id,
        metadata={"status": driver.status.value}
    )

    return DriverResponse.model_validate(driver)


@router.delete("/{driver_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_driver(
    driver_id: str = Path(..., description="Driver ID"),
    session: Session = Depends(require_role([UserRole.MANAGER])),
    store: EntityStore = Depends(get_store)
):
    await driver_service.delete_driver(store, driver_id)
    await log_event(store, AuditAction.DRIVER_DELETED, session, entity_type="driver", entity_id=driver_id)
