"""
Notification events for the real-time dashboard.

Services record an event only after their transaction commits; routers flush
the pending events to the WebSocket manager once the response is ready.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from hospital.core.websocket_manager import ConnectionManager, manager
from hospital.utils.logger import get_logger

logger = get_logger("notifications")


# ============================================
# EVENT NAMES
# ============================================
PATIENT_ADMITTED = "patient-admitted"
PATIENT_UPDATED = "patient-updated"
PATIENT_DISCHARGED = "patient-discharged"
ROOM_ASSIGNED = "room-assigned"
ROOM_RELEASED = "room-released"
AUTO_ALLOCATION_COMPLETE = "auto-allocation-complete"
ROOM_CREATED = "room-created"
ROOM_UPDATED = "room-updated"
ROOM_DELETED = "room-deleted"
ROOM_STATUS_CHANGED = "room-status-changed"


@dataclass
class NotificationEvent:
    """A committed change, ready to be pushed to clients."""
    event: str
    data: Any
    timestamp: datetime = field(default_factory=datetime.utcnow)


class Notifier:
    """
    Collects the events of one request.
    
    Usage:
        notifier.emit(ROOM_ASSIGNED, {"patient": ..., "room": ...})
        ...
        await notifier.flush()
    """
    
    def __init__(self, connection_manager: Optional[ConnectionManager] = None):
        self.connection_manager = connection_manager or manager
        self.pending: List[NotificationEvent] = []
    
    def emit(self, event: str, data: Any) -> NotificationEvent:
        """
        Queues an event.
        
        Args:
            event: Event name
            data: JSON-ready snapshot of the affected records
        
        Returns:
            The queued event
        """
        notification = NotificationEvent(event=event, data=data)
        self.pending.append(notification)
        logger.debug(f"Queued event {event}")
        return notification
    
    def events(self, name: Optional[str] = None) -> List[NotificationEvent]:
        """Pending events, optionally filtered by name."""
        if name is None:
            return list(self.pending)
        return [e for e in self.pending if e.event == name]
    
    async def flush(self) -> int:
        """
        Broadcasts and clears every pending event.
        
        Returns:
            Number of events sent
        """
        events, self.pending = self.pending, []
        for notification in events:
            await self.connection_manager.send_event(
                notification.event,
                notification.data,
                notification.timestamp
            )
        return len(events)


def get_notifier() -> Notifier:
    """FastAPI dependency: a fresh notifier per request."""
    return Notifier()
