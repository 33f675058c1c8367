"""
Hospital Management System API.
FastAPI application with WebSocket push for real-time dashboard updates.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from hospital.config import settings
from hospital.core.database import build_engine, create_db_and_tables
from hospital.api.router import api_router
from hospital.utils.logger import configure_logging

logger = configure_logging()


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    Builds the application.
    
    Args:
        engine: Engine to use; one is built from settings.DATABASE_URL on
            startup when omitted
    
    Returns:
        FastAPI application
    """
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.engine = engine or build_engine()
        create_db_and_tables(app.state.engine)
        logger.info(f"{settings.APP_TITLE} v{settings.APP_VERSION} started ({settings.APP_ENV})")
        yield
        if engine is None:
            app.state.engine.dispose()
        logger.info("Application stopped")
    
    app = FastAPI(
        title=settings.APP_TITLE,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    
    # ============================================
    # CORS
    # ============================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    
    # ============================================
    # ROUTERS
    # ============================================
    app.include_router(api_router, prefix=settings.API_PREFIX)
    
    @app.get("/")
    def root():
        return {
            "message": f"{settings.APP_TITLE} API",
            "version": settings.APP_VERSION,
            "docs": "/docs",
        }
    
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
