"""
WebSocket connection manager.
Broadcasts notification events to connected dashboard clients.
"""
from typing import List, Any
from datetime import datetime
from fastapi import WebSocket

from hospital.utils.logger import get_logger

logger = get_logger("websocket")


class ConnectionManager:
    """
    WebSocket connection manager.
    
    Keeps the list of active connections and drops the ones that fail
    while sending.
    """
    
    def __init__(self):
        self.active_connections: List[WebSocket] = []
    
    async def connect(self, websocket: WebSocket) -> None:
        """
        Accepts a WebSocket client.
        
        Args:
            websocket: WebSocket connection
        """
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(
            f"WebSocket connected. Active connections: {len(self.active_connections)}"
        )
    
    def disconnect(self, websocket: WebSocket) -> None:
        """Forgets a WebSocket client."""
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
        logger.info(
            f"WebSocket disconnected. Active connections: {len(self.active_connections)}"
        )
    
    async def broadcast(self, message: dict) -> None:
        """
        Sends a message to every connected client.
        
        Args:
            message: JSON-serializable dictionary
        """
        disconnected: List[WebSocket] = []
        
        for connection in list(self.active_connections):
            try:
                await connection.send_json(message)
            except Exception as e:
                logger.warning(f"Error sending message: {e}")
                disconnected.append(connection)
        
        for conn in disconnected:
            self.disconnect(conn)
    
    async def send_event(self, event: str, data: Any, timestamp: datetime) -> None:
        """
        Broadcasts one notification event.
        
        Args:
            event: Event name (room-assigned, patient-admitted, ...)
            data: JSON-ready payload
            timestamp: When the change was committed
        """
        await self.broadcast({
            "event": event,
            "data": data,
            "timestamp": timestamp.isoformat(),
        })
    
    @property
    def connection_count(self) -> int:
        """Number of active connections."""
        return len(self.active_connections)


# Global manager instance
manager = ConnectionManager()
