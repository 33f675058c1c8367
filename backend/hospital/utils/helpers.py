"""
Shared helper functions.
"""
from typing import Any, Dict, List, Optional
import json
import math


def safe_json_loads(value: Any, default: Any = None) -> Any:
    """
    Parses JSON safely.
    
    Args:
        value: Value to parse
        default: Value returned when parsing fails
    
    Returns:
        Parsed value or default
    """
    if value is None or value == "":
        return default
    if isinstance(value, (list, dict)):
        return value
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return default


def safe_json_dumps(value: Any) -> Optional[str]:
    """
    Serializes a value to JSON, passing strings and None through.
    
    Args:
        value: Value to serialize
    
    Returns:
        JSON string or None
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def occupancy_rate(occupied: int, total: int) -> float:
    """Occupancy percentage rounded to two decimals."""
    if total <= 0:
        return 0.0
    return round(occupied / total * 100, 2)


def build_patient_response(patient: Any, room: Any = None) -> Any:
    """
    Builds the response schema for a patient.
    
    Args:
        patient: Patient object
        room: Room currently held by the patient, if already loaded
    
    Returns:
        PatientResponse
    """
    from hospital.schemas.patient import PatientResponse, EmergencyContact
    from hospital.schemas.responses import RoomSummary
    
    return PatientResponse(
        id=patient.id,
        name=patient.name,
        age=patient.age,
        condition=patient.condition,
        priority=patient.priority,
        status=patient.status,
        assigned_room_id=patient.assigned_room_id,
        assigned_room=RoomSummary.model_validate(room) if room is not None else None,
        admission_date=patient.admission_date,
        discharge_date=patient.discharge_date,
        length_of_stay=patient.length_of_stay,
        contact_number=patient.contact_number,
        emergency_contact=EmergencyContact(
            name=patient.emergency_contact_name,
            phone=patient.emergency_contact_phone,
            relationship=patient.emergency_contact_relationship,
        ),
        medical_history=patient.medical_history,
        allergies=patient.get_allergies(),
        current_medication=patient.get_current_medication(),
        created_at=patient.created_at,
        updated_at=patient.updated_at,
    )


def build_room_response(room: Any, patient: Any = None) -> Any:
    """
    Builds the response schema for a room.
    
    Args:
        room: Room object
        patient: Occupying patient, if already loaded
    
    Returns:
        RoomResponse
    """
    from hospital.schemas.room import RoomResponse
    from hospital.schemas.responses import PatientSummary
    
    return RoomResponse(
        id=room.id,
        room_number=room.room_number,
        type=room.type,
        floor=room.floor,
        capacity=room.capacity,
        occupied=room.occupied,
        patient_id=room.patient_id,
        patient=PatientSummary.model_validate(patient) if patient is not None else None,
        status=room.status,
        is_available=room.is_available,
        daily_rate=room.daily_rate,
        amenities=room.get_amenities(),
        equipment=room.get_equipment(),
        notes=room.notes,
        last_cleaned=room.last_cleaned,
        created_at=room.created_at,
        updated_at=room.updated_at,
    )


def snapshot(response: Any) -> Dict[str, Any]:
    """JSON-ready dict of a response schema, for notifications."""
    return response.model_dump(mode="json")


def snapshots(responses: List[Any]) -> List[Dict[str, Any]]:
    return [snapshot(r) for r in responses]


def build_pagination(page: int, limit: int, total: int) -> Any:
    """
    Builds the pagination metadata of a list response.
    
    Args:
        page: Current 1-based page
        limit: Page size
        total: Total matching records
    
    Returns:
        Pagination
    """
    from hospital.schemas.responses import Pagination
    
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total=total,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def build_assignment_data(patient: Any, room: Any, linked: bool = True) -> Any:
    """
    Builds the patient/room pair returned by assign and release.
    
    Args:
        patient: Patient object
        room: Room object
        linked: Whether the patient currently holds the room
    
    Returns:
        AssignmentData
    """
    from hospital.schemas.allocation import AssignmentData
    
    return AssignmentData(
        patient=build_patient_response(patient, room if linked else None),
        room=build_room_response(room, patient if linked else None),
    )


def build_allocation_response(result: Any) -> Any:
    """
    Builds the response of an automatic allocation.
    
    Args:
        result: AllocationResult
    
    Returns:
        AllocationResponse
    """
    from hospital.schemas.allocation import AllocationResponse
    
    if result.success:
        return AllocationResponse(
            success=True,
            message=result.message,
            data=build_assignment_data(result.patient, result.room),
        )
    return AllocationResponse(
        success=False,
        message=result.message,
        reason=result.reason,
        waiting_patient_id=result.patient.id if result.patient else None,
    )
