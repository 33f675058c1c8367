"""
Main router grouping every sub-router.
"""
from fastapi import APIRouter

from hospital.api import health
from hospital.api import patients
from hospital.api import rooms
from hospital.api import stats
from hospital.api import websocket

api_router = APIRouter()

# ============================================
# INCLUDE ALL ROUTERS
# ============================================

api_router.include_router(health.router)

api_router.include_router(
    patients.router,
    prefix="/patients",
    tags=["Patients"]
)

api_router.include_router(
    rooms.router,
    prefix="/rooms",
    tags=["Rooms"]
)

api_router.include_router(
    stats.router,
    prefix="/stats",
    tags=["Statistics"]
)

api_router.include_router(
    websocket.router,
    tags=["WebSocket"]
)
