"""
Common response schemas.
"""
from pydantic import BaseModel
from typing import Optional

from hospital.models.enums import (
    ConditionEnum,
    PatientStatusEnum,
    RoomTypeEnum,
)


class MessageResponse(BaseModel):
    """Generic response with a message."""
    success: bool
    message: str
    data: Optional[dict] = None


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: Optional[str] = None


class Pagination(BaseModel):
    """Pagination metadata for list endpoints."""
    current_page: int
    total_pages: int
    total: int
    has_next_page: bool
    has_prev_page: bool


class RoomSummary(BaseModel):
    """Reduced room data embedded in patient responses."""
    id: str
    room_number: str
    type: RoomTypeEnum
    floor: int
    
    class Config:
        from_attributes = True


class PatientSummary(BaseModel):
    """Reduced patient data embedded in room responses."""
    id: str
    name: str
    age: int
    condition: ConditionEnum
    priority: int
    status: PatientStatusEnum
    
    class Config:
        from_attributes = True
