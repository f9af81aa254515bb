"""
Analytics API Endpoints.

Read-only cost and fuel efficiency reporting for managers and analysts.
"""

from fastapi import APIRouter, Depends

from fleetops.app.core.guards import require_role
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.models.enums import UserRole
from fleetops.app.schemas.analytics import AnalyticsSummary
from fleetops.app.schemas.auth import Session
from fleetops.app.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/summary", response_model=AnalyticsSummary)
async def get_analytics_summary(
    session: Session = Depends(require_role([UserRole.MANAGER, UserRole.ANALYST])),
    store: EntityStore = Depends(get_store)
):
    """Per-vehicle operational cost and km per liter."""
    return await AnalyticsService.get_analytics_summary(store)
