"""
HTTP and WebSocket endpoints.
"""
from hospital.api.router import api_router

__all__ = ["api_router"]
