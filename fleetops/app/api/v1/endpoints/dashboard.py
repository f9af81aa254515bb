"""
Dashboard API endpoints.
"""

from fastapi import APIRouter, Depends

from fleetops.app.core.dependencies import get_current_session
from fleetops.app.db.store import EntityStore, get_store
from fleetops.app.schemas.analytics import DashboardKpis
from fleetops.app.schemas.auth import Session
from fleetops.app.services.dashboard import get_kpis

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/kpis", response_model=DashboardKpis)
async def dashboard_kpis(
    session: Session = Depends(get_current_session),
    store: EntityStore = Depends(get_store)
):
    """Headline fleet indicators for the command center."""
    return await get_kpis(store)
