"""
Schemas for room assignment, release and automatic allocation.
"""
from pydantic import BaseModel
from typing import Optional

from hospital.models.enums import RoomTypeEnum
from hospital.schemas.patient import PatientResponse
from hospital.schemas.room import RoomResponse


class AssignmentData(BaseModel):
    """Patient and room after an assignment or a release."""
    patient: PatientResponse
    room: RoomResponse


class AssignmentResponse(BaseModel):
    """Response of assign and release operations."""
    success: bool
    message: str
    data: AssignmentData


class AutoAllocateRequest(BaseModel):
    """Optional room type override for automatic allocation."""
    room_type: Optional[RoomTypeEnum] = None


class AllocationResponse(BaseModel):
    """
    Outcome of automatic allocation.
    
    ``success`` is False with a ``reason`` when there is nobody waiting or no
    suitable room; that is a normal outcome, not an error.
    """
    success: bool
    message: str
    reason: Optional[str] = None
    waiting_patient_id: Optional[str] = None
    data: Optional[AssignmentData] = None


class DischargeData(BaseModel):
    """Discharged patient and the room released, if any."""
    patient: PatientResponse
    room_released: Optional[RoomResponse] = None


class DischargeResponse(BaseModel):
    """Response of the discharge operation."""
    success: bool
    message: str
    data: DischargeData


class AdmissionData(BaseModel):
    """New patient and the allocation attempted right after admission."""
    patient: PatientResponse
    allocation: Optional[AllocationResponse] = None


class AdmissionResponse(BaseModel):
    """Response of the admission endpoint."""
    success: bool
    message: str
    data: AdmissionData
