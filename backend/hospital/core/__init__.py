"""
Core infrastructure: database, exceptions, notifications and WebSocket.
"""
from hospital.core.database import (
    build_engine,
    create_db_and_tables,
    get_session,
    check_database_health,
    transaction,
)
from hospital.core.exceptions import (
    BaseAppException,
    ValidationError,
    NotFoundError,
    PatientNotFoundError,
    RoomNotFoundError,
    ConflictError,
    RoomUnavailableError,
    PatientHasNoRoomError,
    PatientDischargedError,
    RoomOccupiedError,
    RoomNotOccupiedError,
    DuplicateRoomNumberError,
    InvalidRoomStatusError,
    InternalError,
)
from hospital.core.notifications import Notifier, NotificationEvent, get_notifier
from hospital.core.websocket_manager import ConnectionManager, manager

__all__ = [
    "build_engine",
    "create_db_and_tables",
    "get_session",
    "check_database_health",
    "transaction",
    "BaseAppException",
    "ValidationError",
    "NotFoundError",
    "PatientNotFoundError",
    "RoomNotFoundError",
    "ConflictError",
    "RoomUnavailableError",
    "PatientHasNoRoomError",
    "PatientDischargedError",
    "RoomOccupiedError",
    "RoomNotOccupiedError",
    "DuplicateRoomNumberError",
    "InvalidRoomStatusError",
    "InternalError",
    "Notifier",
    "NotificationEvent",
    "get_notifier",
    "ConnectionManager",
    "manager",
]
