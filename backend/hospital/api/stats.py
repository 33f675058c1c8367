"""
Statistics endpoints.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from hospital.core.database import get_session
from hospital.schemas.stats import DashboardStatsResponse, AllocationStatsResponse
from hospital.services.stats_service import StatsService

router = APIRouter()


@router.get("", response_model=DashboardStatsResponse)
def dashboard_stats(session: Session = Depends(get_session)):
    """Dashboard summary: patients, rooms and occupancy rate."""
    return StatsService(session).dashboard()


@router.get("/allocation", response_model=AllocationStatsResponse)
def allocation_stats(session: Session = Depends(get_session)):
    """Counters of the allocation queue."""
    return StatsService(session).allocation_stats()
