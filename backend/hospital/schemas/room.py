"""
Room schemas.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from hospital.models.enums import (
    RoomTypeEnum,
    RoomStatusEnum,
    AmenityEnum,
    EquipmentStatusEnum,
)
from hospital.schemas.responses import Pagination, PatientSummary, RoomSummary
from hospital.utils.validators import normalize_room_number


class Equipment(BaseModel):
    """Equipment installed in a room."""
    name: str = Field(..., min_length=1)
    status: EquipmentStatusEnum = EquipmentStatusEnum.WORKING
    last_checked: datetime = Field(default_factory=datetime.utcnow)


class RoomCreate(BaseModel):
    """Schema to create a room."""
    room_number: str
    type: RoomTypeEnum
    floor: int = Field(..., ge=1, le=20)
    capacity: int = Field(default=1, ge=1, le=4)
    daily_rate: float = Field(..., ge=0)
    amenities: List[AmenityEnum] = []
    equipment: List[Equipment] = []
    notes: Optional[str] = Field(default=None, max_length=500)
    
    @field_validator('room_number')
    @classmethod
    def check_room_number(cls, v):
        return normalize_room_number(v)


class RoomUpdate(BaseModel):
    """
    Schema to edit a room.
    
    Occupancy and status are not editable here: occupancy belongs to the
    assignment transaction and status has its own endpoint.
    """
    room_number: Optional[str] = None
    type: Optional[RoomTypeEnum] = None
    floor: Optional[int] = Field(default=None, ge=1, le=20)
    capacity: Optional[int] = Field(default=None, ge=1, le=4)
    daily_rate: Optional[float] = Field(default=None, ge=0)
    amenities: Optional[List[AmenityEnum]] = None
    equipment: Optional[List[Equipment]] = None
    notes: Optional[str] = Field(default=None, max_length=500)
    
    @field_validator('room_number')
    @classmethod
    def check_room_number(cls, v):
        if v is None:
            return v
        return normalize_room_number(v)


class RoomStatusUpdate(BaseModel):
    """Request to change the lifecycle status of a room."""
    status: RoomStatusEnum
    notes: Optional[str] = Field(default=None, max_length=500)


class RoomAssignRequest(BaseModel):
    """Request to place a patient in a room."""
    patient_id: str = Field(..., min_length=1)


class RoomResponse(BaseModel):
    """Room response schema."""
    id: str
    room_number: str
    type: RoomTypeEnum
    floor: int
    capacity: int
    occupied: bool
    patient_id: Optional[str] = None
    patient: Optional[PatientSummary] = None
    status: RoomStatusEnum
    is_available: bool
    daily_rate: float
    amenities: List[AmenityEnum] = []
    equipment: List[Equipment] = []
    notes: Optional[str] = None
    last_cleaned: datetime
    created_at: datetime
    updated_at: datetime


class RoomListResponse(BaseModel):
    """Paginated room list."""
    rooms: List[RoomResponse]
    pagination: Pagination


class AvailableRoomsResponse(BaseModel):
    """Available rooms ordered by floor and room number."""
    rooms: List[RoomResponse]
    total_count: int


class TransferSuggestionResponse(BaseModel):
    """A patient whose room type does not match the ideal category."""
    patient: PatientSummary
    current_room: RoomSummary
    ideal_category: RoomTypeEnum


class TransferSuggestionsResponse(BaseModel):
    """Advisory list of transfer suggestions."""
    suggestions: List[TransferSuggestionResponse]
    total_suggestions: int


class RoomMutationResponse(BaseModel):
    """Response of room creation, edits and status changes."""
    success: bool
    message: str
    data: RoomResponse
