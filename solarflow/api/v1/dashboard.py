"""
Dashboard API Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from solarflow.core.database import get_db
from solarflow.core.security import Scope, get_scope
from solarflow.schemas import DashboardMetrics
from solarflow.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/metrics", response_model=DashboardMetrics)
async def get_dashboard_metrics(
    db: Session = Depends(get_db),
    scope: Scope = Depends(get_scope)
):
    """Get dashboard summary for the current user"""
    return DashboardService(db).get_metrics(scope)
