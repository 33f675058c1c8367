"""
Patient endpoints.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import Optional
import logging

from hospital.config import settings
from hospital.core.database import get_session
from hospital.core.exceptions import BaseAppException
from hospital.core.notifications import Notifier, get_notifier
from hospital.models.enums import ConditionEnum, PatientStatusEnum
from hospital.schemas.patient import (
    PatientCreate,
    PatientUpdate,
    PatientResponse,
    PatientListResponse,
    PatientMutationResponse,
    PatientDischargeRequest,
    AssignRoomRequest,
    PriorityQueueResponse,
)
from hospital.schemas.allocation import (
    AssignmentResponse,
    AutoAllocateRequest,
    AllocationResponse,
    AdmissionData,
    AdmissionResponse,
    DischargeData,
    DischargeResponse,
)
from hospital.schemas.stats import PatientStatsResponse
from hospital.services.patient_service import PatientService
from hospital.services.assignment_service import AssignmentService
from hospital.services.allocation_service import AllocationService
from hospital.services.stats_service import StatsService
from hospital.api.errors import to_http_exception
from hospital.utils.helpers import (
    build_patient_response,
    build_room_response,
    build_pagination,
    build_assignment_data,
    build_allocation_response,
)

router = APIRouter()
logger = logging.getLogger("hms.api.patients")


@router.post("", response_model=AdmissionResponse, status_code=status.HTTP_201_CREATED)
async def admit_patient(
    data: PatientCreate,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """
    Admits a patient.
    
    Admitted patients trigger an automatic room allocation.
    """
    service = PatientService(session, notifier)
    try:
        result = service.admit_patient(data)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return AdmissionResponse(
        success=True,
        message="Patient created successfully",
        data=AdmissionData(
            patient=build_patient_response(result.patient, service.get_room_of(result.patient)),
            allocation=build_allocation_response(result.allocation) if result.allocation else None,
        ),
    )


@router.get("", response_model=PatientListResponse)
def list_patients(
    status: Optional[PatientStatusEnum] = None,
    condition: Optional[ConditionEnum] = None,
    priority: Optional[int] = Query(default=None, ge=1, le=5),
    search: Optional[str] = None,
    sort_by: str = "admission_date",
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    session: Session = Depends(get_session)
):
    """Lists patients with filters, sorting and pagination."""
    service = PatientService(session)
    patients, total = service.list_patients(
        status=status,
        condition=condition,
        priority=priority,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    rooms = service.rooms_for(patients)
    
    return PatientListResponse(
        patients=[
            build_patient_response(p, rooms.get(p.assigned_room_id)) for p in patients
        ],
        pagination=build_pagination(page, limit, total),
    )


@router.get("/stats", response_model=PatientStatsResponse)
def patient_stats(session: Session = Depends(get_session)):
    """Patient counters."""
    return StatsService(session).patient_stats()


@router.get("/priority", response_model=PriorityQueueResponse)
def priority_queue(
    unassigned_only: bool = True,
    session: Session = Depends(get_session)
):
    """Admitted and Pending patients ordered by priority, then admission time."""
    service = PatientService(session)
    patients = service.priority_queue(unassigned_only)
    rooms = service.rooms_for(patients)
    
    return PriorityQueueResponse(
        patients=[
            build_patient_response(p, rooms.get(p.assigned_room_id)) for p in patients
        ],
        total_count=len(patients),
    )


@router.post("/auto-allocate", response_model=AllocationResponse)
async def auto_allocate(
    request: Optional[AutoAllocateRequest] = None,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """
    Assigns the most urgent waiting patient to the best free room.
    
    Nothing to do is reported with ``success: false`` and a reason.
    """
    room_type = request.room_type if request else None
    try:
        result = AllocationService(session, notifier).auto_allocate(room_type)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    return build_allocation_response(result)


@router.get("/{patient_id}", response_model=PatientResponse)
def get_patient(patient_id: str, session: Session = Depends(get_session)):
    """Returns a patient."""
    service = PatientService(session)
    try:
        patient = service.get_patient(patient_id)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    return build_patient_response(patient, service.get_room_of(patient))


@router.put("/{patient_id}", response_model=PatientMutationResponse)
async def update_patient(
    patient_id: str,
    data: PatientUpdate,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Edits a patient profile."""
    service = PatientService(session, notifier)
    try:
        patient = service.update_patient(patient_id, data)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return PatientMutationResponse(
        success=True,
        message="Patient updated successfully",
        data=build_patient_response(patient, service.get_room_of(patient)),
    )


@router.post("/{patient_id}/discharge", response_model=DischargeResponse)
async def discharge_patient(
    patient_id: str,
    request: Optional[PatientDischargeRequest] = None,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """
    Discharges a patient and releases their room, if any.
    
    A patient without a room is discharged as well; use ``/release-room`` to
    require that the patient holds one.
    """
    notes = request.discharge_notes if request else None
    try:
        result = PatientService(session, notifier).discharge_patient(patient_id, notes)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    room_released = None
    if result.room_released:
        room_released = build_room_response(result.room_released)
    
    return DischargeResponse(
        success=True,
        message="Patient discharged successfully",
        data=DischargeData(
            patient=build_patient_response(result.patient),
            room_released=room_released,
        ),
    )


@router.post("/{patient_id}/release-room", response_model=AssignmentResponse)
async def release_room(
    patient_id: str,
    request: Optional[PatientDischargeRequest] = None,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Releases the room held by a patient. The room goes to Cleaning."""
    notes = request.discharge_notes if request else None
    try:
        result = AssignmentService(session, notifier).release(patient_id, notes)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return AssignmentResponse(
        success=True,
        message="Room released successfully",
        data=build_assignment_data(result.patient, result.room, linked=False),
    )


@router.post("/{patient_id}/assign-room", response_model=AssignmentResponse)
async def assign_room(
    patient_id: str,
    request: AssignRoomRequest,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Places a patient in a specific room."""
    try:
        result = AssignmentService(session, notifier).assign(patient_id, request.room_id)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return AssignmentResponse(
        success=True,
        message="Room assigned successfully",
        data=build_assignment_data(result.patient, result.room),
    )
