"""
Pydantic schemas for validation and serialization.
"""
from hospital.schemas.responses import (
    MessageResponse,
    ErrorResponse,
    Pagination,
    RoomSummary,
    PatientSummary,
)
from hospital.schemas.room import (
    Equipment,
    RoomCreate,
    RoomUpdate,
    RoomStatusUpdate,
    RoomAssignRequest,
    RoomResponse,
    RoomListResponse,
    AvailableRoomsResponse,
    TransferSuggestionResponse,
    TransferSuggestionsResponse,
    RoomMutationResponse,
)
from hospital.schemas.patient import (
    EmergencyContact,
    Medication,
    PatientCreate,
    PatientUpdate,
    PatientDischargeRequest,
    AssignRoomRequest,
    PatientResponse,
    PatientListResponse,
    PriorityQueueResponse,
    PatientMutationResponse,
)
from hospital.schemas.allocation import (
    AssignmentData,
    AssignmentResponse,
    AutoAllocateRequest,
    AllocationResponse,
    DischargeData,
    DischargeResponse,
    AdmissionData,
    AdmissionResponse,
)
from hospital.schemas.stats import (
    PatientStatsResponse,
    RoomTypeStats,
    RoomStatsResponse,
    AllocationStatsResponse,
    DashboardStatsResponse,
)

__all__ = [
    # Common
    "MessageResponse",
    "ErrorResponse",
    "Pagination",
    "RoomSummary",
    "PatientSummary",
    # Room
    "Equipment",
    "RoomCreate",
    "RoomUpdate",
    "RoomStatusUpdate",
    "RoomAssignRequest",
    "RoomResponse",
    "RoomListResponse",
    "AvailableRoomsResponse",
    "TransferSuggestionResponse",
    "TransferSuggestionsResponse",
    "RoomMutationResponse",
    # Patient
    "EmergencyContact",
    "Medication",
    "PatientCreate",
    "PatientUpdate",
    "PatientDischargeRequest",
    "AssignRoomRequest",
    "PatientResponse",
    "PatientListResponse",
    "PriorityQueueResponse",
    "PatientMutationResponse",
    # Allocation
    "AssignmentData",
    "AssignmentResponse",
    "AutoAllocateRequest",
    "AllocationResponse",
    "DischargeData",
    "DischargeResponse",
    "AdmissionData",
    "AdmissionResponse",
    # Stats
    "PatientStatsResponse",
    "RoomTypeStats",
    "RoomStatsResponse",
    "AllocationStatsResponse",
    "DashboardStatsResponse",
]
