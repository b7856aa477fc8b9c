"""
Statistics Router

Admin dashboard aggregates.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from src.estatehub.api.auth import get_token_payload
from src.estatehub.api.dependencies import get_db
from src.estatehub.api.schemas import DashboardStats
from src.estatehub.db.repository import get_dashboard_stats

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(get_token_payload)],
)


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)):
    """
    Listing, view, and lead counts for the dashboard.
    """
    return DashboardStats(**get_dashboard_stats(db))
