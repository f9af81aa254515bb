"""
Expense ledger service.

Fuel and miscellaneous spend recorded against a vehicle and, optionally, the
trip it was incurred on.
"""

import logging
from typing import List, Optional, Tuple

from fleetops.app.core.exceptions import BadRequestError, ResourceNotFoundError
from fleetops.app.db.store import EntityStore, Transaction
from fleetops.app.models.expense import Expense
from fleetops.app.models.trip import Trip
from fleetops.app.models.vehicle import Vehicle
from fleetops.app.schemas.expense import ExpenseCreate, ExpenseUpdate

logger = logging.getLogger("fleetops.expenses")


async def get_expense(store: EntityStore, expense_id: str) -> Expense:
    async with store.transaction() as tx:
        expense = await tx.get(Expense, expense_id)
    if not expense:
        raise ResourceNotFoundError("Expense", expense_id)
    return expense


async def list_expenses(
    store: EntityStore,
    vehicle_id: Optional[str] = None,
    trip_id: Optional[str] = None,
    offset: int = 0,
    limit: int = 50
) -> Tuple[List[Expense], int]:
    criteria = []
    if vehicle_id:
        criteria.append(Expense.vehicle_id == vehicle_id)
    if trip_id:
        criteria.append(Expense.trip_id == trip_id)

    async with store.transaction() as tx:
        total = await tx.count(Expense, *criteria)
        expenses = await tx.find(
            Expense, *criteria, order_by=Expense.date.desc(), offset=offset, limit=limit
        )
    return expenses, total


async def _check_trip(tx: Transaction, trip_id: str, vehicle_id: str) -> None:
    trip = await tx.get(Trip, trip_id)
    if not trip:
        raise ResourceNotFoundError("Trip", trip_id)
    if trip.vehicle_id != vehicle_id:
        raise BadRequestError(
            "Trip does not belong to the expense's vehicle",
            details={"trip_vehicle_id": trip.vehicle_id}
        )


async def create_expense(store: EntityStore, data: ExpenseCreate) -> Expense:
    """
    Record an expense.

    Raises:
        ResourceNotFoundError: Vehicle or trip missing
        BadRequestError: Trip belongs to another vehicle
    """
    async with store.transaction() as tx:
        vehicle = await tx.get(Vehicle, data.vehicle_id)
        if not vehicle:
            raise ResourceNotFoundError("Vehicle", data.vehicle_id)
        if data.trip_id:
            await _check_trip(tx, data.trip_id, vehicle.id)

        expense = await tx.insert(Expense, **data.model_dump())

    logger.info("Expense recorded", extra={"expense_id": expense.id, "vehicle_id": expense.vehicle_id})
    return expense


async def update_expense(store: EntityStore, expense_id: str, data: ExpenseUpdate) -> Expense:
    values = data.model_dump(exclude_unset=True)
    if values.get("date", True) is None:
        values.pop("date")

    async with store.transaction() as tx:
        expense = await tx.get(Expense, expense_id, for_update=True)
        if not expense:
            raise ResourceNotFoundError("Expense", expense_id)
        if values.get("trip_id"):
            await _check_trip(tx, values["trip_id"], expense.vehicle_id)

        expense = await tx.update(expense, values)
    return expense


async def delete_expense(store: EntityStore, expense_id: str) -> None:
    async with store.transaction() as tx:
        expense = await tx.get(Expense, expense_id, for_update=True)
        if not expense:
            raise ResourceNotFoundError("Expense", expense_id)
        await tx.delete(expense)

    logger.info("Expense deleted", extra={"expense_id": expense_id})
