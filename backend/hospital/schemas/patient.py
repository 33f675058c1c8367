"""
Patient schemas.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from hospital.models.enums import ConditionEnum, PatientStatusEnum
from hospital.schemas.responses import Pagination, RoomSummary
from hospital.utils.validators import validate_phone


class EmergencyContact(BaseModel):
    """Emergency contact of a patient."""
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    relationship: str = Field(..., min_length=1)


class Medication(BaseModel):
    """Medication the patient is currently taking."""
    name: str
    dosage: Optional[str] = None
    frequency: Optional[str] = None


class PatientCreate(BaseModel):
    """Schema to admit a new patient."""
    
    # Personal data
    name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=0, le=150)
    contact_number: str
    emergency_contact: EmergencyContact
    
    # Clinical data
    condition: ConditionEnum
    status: PatientStatusEnum = PatientStatusEnum.ADMITTED
    medical_history: Optional[str] = Field(default=None, max_length=1000)
    allergies: List[str] = []
    current_medication: List[Medication] = []
    admission_date: Optional[datetime] = None
    
    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Patient name is required')
        return v
    
    @field_validator('contact_number')
    @classmethod
    def check_contact_number(cls, v):
        return validate_phone(v)
    
    @field_validator('status')
    @classmethod
    def check_initial_status(cls, v):
        if v == PatientStatusEnum.DISCHARGED:
            raise ValueError('New patients cannot be created as Discharged')
        return v
    
    @field_validator('allergies')
    @classmethod
    def strip_allergies(cls, v):
        return [a.strip() for a in v if a and a.strip()]


class PatientUpdate(BaseModel):
    """
    Schema to edit a patient profile.
    
    The room link and discharge are handled by their own endpoints, so neither
    the assigned room nor the Discharged status can be set here.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    age: Optional[int] = Field(default=None, ge=0, le=150)
    contact_number: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None
    condition: Optional[ConditionEnum] = None
    status: Optional[PatientStatusEnum] = None
    medical_history: Optional[str] = Field(default=None, max_length=1000)
    allergies: Optional[List[str]] = None
    current_medication: Optional[List[Medication]] = None
    
    @field_validator('contact_number')
    @classmethod
    def check_contact_number(cls, v):
        if v is None:
            return v
        return validate_phone(v)
    
    @field_validator('status')
    @classmethod
    def check_status(cls, v):
        if v == PatientStatusEnum.DISCHARGED:
            raise ValueError('Use the discharge endpoint to discharge a patient')
        return v


class PatientDischargeRequest(BaseModel):
    """Request to discharge a patient."""
    discharge_notes: Optional[str] = Field(default=None, max_length=1000)


class AssignRoomRequest(BaseModel):
    """Request to assign a room to a patient."""
    room_id: str = Field(..., min_length=1)


class PatientResponse(BaseModel):
    """Patient response schema."""
    id: str
    name: str
    age: int
    condition: ConditionEnum
    priority: int
    status: PatientStatusEnum
    assigned_room_id: Optional[str] = None
    assigned_room: Optional[RoomSummary] = None
    admission_date: datetime
    discharge_date: Optional[datetime] = None
    length_of_stay: int
    contact_number: str
    emergency_contact: EmergencyContact
    medical_history: Optional[str] = None
    allergies: List[str] = []
    current_medication: List[Medication] = []
    created_at: datetime
    updated_at: datetime


class PatientListResponse(BaseModel):
    """Paginated patient list."""
    patients: List[PatientResponse]
    pagination: Pagination


class PriorityQueueResponse(BaseModel):
    """Patients ordered by priority, then admission time."""
    patients: List[PatientResponse]
    total_count: int


class PatientMutationResponse(BaseModel):
    """Response of patient edits."""
    success: bool
    message: str
    data: PatientResponse
