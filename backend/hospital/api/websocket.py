"""
WebSocket endpoint.
"""
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from datetime import datetime
import logging

from hospital.core.websocket_manager import manager

router = APIRouter()
logger = logging.getLogger("hms.websocket")


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    Real-time notification channel.
    
    The server pushes ``{"event", "data", "timestamp"}`` messages. Clients may
    send ``{"action": "ping"}`` to keep the connection alive.
    """
    await manager.connect(websocket)
    await websocket.send_json({
        "event": "connected",
        "data": {"connections": manager.connection_count},
        "timestamp": datetime.utcnow().isoformat(),
    })
    
    try:
        while True:
            data = await websocket.receive_json()
            
            if isinstance(data, dict) and data.get("action") == "ping":
                await websocket.send_json({"event": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
