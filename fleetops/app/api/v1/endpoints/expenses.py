"""
Expense API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Path, status

from fleetops.app.core.dependencies import get_current_session
from fleetops.app.core.guards import require_role
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.models.enums import UserRole
from fleetops.app.schemas.auth import Session
from fleetops.app.schemas.expense import (
    ExpenseCreate, ExpenseUpdate, ExpenseResponse, ExpenseListResponse
)
from fleetops.app.services import expense_service
from fleetops.app.services.audit import log_event, AuditAction

router = APIRouter(prefix="/expenses", tags=["Expenses"])

EXPENSE_WRITERS = [UserRole.MANAGER, UserRole.DISPATCHER, UserRole.ANALYST]


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    vehicle_id: Optional[str] = Query(None),
    trip_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    expenses, total = await expense_service.list_expenses(
        store, vehicle_id, trip_id, offset=(page - 1) * page_size, limit=page_size
    )
    return ExpenseListResponse(
        expenses=[ExpenseResponse.model_validate(e) for e in expenses],
        total=total,
        page=page,
        page_size=page_size
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: str = Path(..., description="Expense ID"),
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    expense = await expense_service.get_expense(store, expense_id)
    return ExpenseResponse.model_validate(expense)


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    session: Session = Depends(require_role(EXPENSE_WRITERS)),
    store: EntityStore = Depends(get_store)
):
    expense = await expense_service.create_expense(store, expense_data)

    await log_event(
        store,
        AuditAction.EXPENSE_RECORDED,
        session,
        entity_type="expense",
        entity_id=expense.id,
        metadata={"vehicle_id": expense.vehicle_id, "trip_id": expense.trip_id}
    )

    return ExpenseResponse.model_validate(expense)


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_data: ExpenseUpdate,
    expense_id: str = Path(..., description="Expense ID"),
    session: Session = Depends(require_role(EXPENSE_WRITERS)),
    store: EntityStore = Depends(get_store)
):
    expense = await expense_service.update_expense(store, expense_id, expense_data)

    await log_event(
        store,
        AuditAction.EXPENSE_UPDATED,
        session,
        entity_type="expense",
        entity_id=expense.id,
        metadata={"updated_fields": list(expense_data.model_dump(exclude_unset=True).keys())}
    )

    return ExpenseResponse.model_validate(expense)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: str = Path(..., description="Expense ID"),
    session: Session = Depends(require_role([UserRole.MANAGER])),
    store: EntityStore = Depends(get_store)
):
    await expense_service.delete_expense(store, expense_id)
    await log_event(store, AuditAction.EXPENSE_DELETED, session, entity_type="expense", entity_id=expense_id)
