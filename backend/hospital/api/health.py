"""
Health check endpoints.
"""
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from datetime import datetime

from hospital.config import settings
from hospital.core.database import check_database_health
from hospital.core.websocket_manager import manager

router = APIRouter(
    prefix="/health",
    tags=["health"],
    responses={
        200: {"description": "System healthy"},
        503: {"description": "System unavailable"}
    }
)


@router.get(
    "",
    summary="Health Check",
    description="Checks the application and its database",
    response_model=None
)
async def health_check(request: Request) -> JSONResponse:
    """
    Returns 200 when the database answers, 503 otherwise.
    """
    database_ok = check_database_health(request.app.state.engine)
    
    status_code = status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "healthy" if database_ok else "unhealthy",
            "timestamp": datetime.utcnow().isoformat(),
            "version": settings.APP_VERSION,
            "environment": settings.APP_ENV,
            "components": {
                "database": "healthy" if database_ok else "unreachable",
                "websocket_connections": manager.connection_count,
            }
        }
    )
