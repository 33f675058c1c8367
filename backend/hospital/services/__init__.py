"""
Business logic services.
"""
from hospital.services.priority import (
    derive_priority,
    required_room_category,
    room_search_tiers,
)
from hospital.services.assignment_service import (
    AssignmentService,
    AssignmentResult,
    ReleaseResult,
)
from hospital.services.allocation_service import AllocationService, AllocationResult
from hospital.services.transfer_service import TransferService, TransferSuggestion
from hospital.services.patient_service import (
    PatientService,
    AdmissionResult,
    DischargeResult,
)
from hospital.services.room_service import RoomService
from hospital.services.stats_service import StatsService

__all__ = [
    "derive_priority",
    "required_room_category",
    "room_search_tiers",
    "AssignmentService",
    "AssignmentResult",
    "ReleaseResult",
    "AllocationService",
    "AllocationResult",
    "TransferService",
    "TransferSuggestion",
    "PatientService",
    "AdmissionResult",
    "DischargeResult",
    "RoomService",
    "StatsService",
]
