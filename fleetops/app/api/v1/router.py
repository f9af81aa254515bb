"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from fleetops.app.api.v1.endpoints import (
    auth, vehicles, drivers, trips,
    maintenance, expenses,
    dashboard, analytics
)

router = APIRouter()

# Session endpoints
router.include_router(auth.router)

# Fleet registry
router.include_router(vehicles.router)
router.include_router(drivers.router)

# Dispatch
router.include_router(trips.router)

# Maintenance and expense ledger
router.include_router(maintenance.router)
router.include_router(expenses.router)

# Reporting
router.include_router(dashboard.router)
router.include_router(analytics.router)
