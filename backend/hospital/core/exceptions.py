"""
Application exceptions.
Semantic errors that routers translate into HTTP responses.
"""
from typing import List, Optional


class BaseAppException(Exception):
    """
    Base application exception.
    Every custom exception inherits from this one.
    """
    def __init__(self, message: str, code: str = "ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================
# VALIDATION ERRORS
# ============================================

class ValidationError(BaseAppException):
    """Malformed input, rejected before any mutation."""
    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


# ============================================
# NOT FOUND ERRORS
# ============================================

class NotFoundError(BaseAppException):
    """Referenced resource does not exist."""
    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} with identifier '{identifier}' not found",
            "NOT_FOUND"
        )
        self.resource = resource
        self.identifier = identifier


class PatientNotFoundError(NotFoundError):
    """Patient not found."""
    def __init__(self, patient_id: str):
        super().__init__("Patient", patient_id)


class RoomNotFoundError(NotFoundError):
    """Room not found."""
    def __init__(self, room_id: str):
        super().__init__("Room", room_id)


# ============================================
# STATE CONFLICTS
# ============================================

class ConflictError(BaseAppException):
    """A state precondition of the requested operation does not hold."""
    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, code)


class RoomUnavailableError(ConflictError):
    """Room is occupied or not in Available status."""
    def __init__(self, room_id: str, current_status: str):
        super().__init__(
            f"Room {room_id} is not available. Current status: {current_status}",
            "ROOM_UNAVAILABLE"
        )
        self.room_id = room_id
        self.current_status = current_status


class PatientHasNoRoomError(ConflictError):
    """Patient does not currently hold a room."""
    def __init__(self, patient_id: str):
        super().__init__(
            f"Patient {patient_id} is not assigned to a room",
            "PATIENT_HAS_NO_ROOM"
        )
        self.patient_id = patient_id


class PatientDischargedError(ConflictError):
    """Discharged patients cannot be reopened."""
    def __init__(self, patient_id: str):
        super().__init__(
            f"Patient {patient_id} is already discharged",
            "PATIENT_DISCHARGED"
        )
        self.patient_id = patient_id


class RoomNotOccupiedError(ConflictError):
    """Room has no occupant to release."""
    def __init__(self, room_id: str):
        super().__init__(
            f"Room {room_id} is not occupied",
            "ROOM_NOT_OCCUPIED"
        )
        self.room_id = room_id


class RoomOccupiedError(ConflictError):
    """Operation requires an unoccupied room."""
    def __init__(self, room_id: str, operation: str = "delete"):
        super().__init__(
            f"Cannot {operation} occupied room {room_id}. Please discharge patient first.",
            "ROOM_OCCUPIED"
        )
        self.room_id = room_id


class DuplicateRoomNumberError(ConflictError):
    """Room number already in use."""
    def __init__(self, room_number: str):
        super().__init__(
            f"Room number {room_number} already exists",
            "DUPLICATE_ROOM_NUMBER"
        )
        self.room_number = room_number


class InvalidRoomStatusError(ConflictError):
    """Manual status change not allowed from the current state."""
    def __init__(
        self,
        current_status: str,
        requested_status: str,
        valid_statuses: Optional[List[str]] = None
    ):
        valid_msg = ""
        if valid_statuses:
            valid_msg = f" Valid targets: {', '.join(valid_statuses)}"
        
        super().__init__(
            f"Cannot change room status from '{current_status}' to '{requested_status}'.{valid_msg}",
            "INVALID_ROOM_STATUS"
        )
        self.current_status = current_status
        self.requested_status = requested_status
        self.valid_statuses = valid_statuses or []


# ============================================
# INTERNAL ERRORS
# ============================================

class InternalError(BaseAppException):
    """Store unreachable or a write failed; the transaction was rolled back."""
    def __init__(self, message: str):
        super().__init__(message, "INTERNAL_ERROR")
