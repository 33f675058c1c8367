"""
Room model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, List
from datetime import datetime
import uuid

from hospital.models.enums import RoomTypeEnum, RoomStatusEnum
from hospital.utils.helpers import safe_json_loads


class Room(SQLModel, table=True):
    """
    Hospital room.
    
    Invariants kept by the assignment transaction:
    ``occupied == (patient_id is not None)`` and ``status == Occupied``
    whenever ``occupied`` is true.
    """
    __tablename__ = "room"
    
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    room_number: str = Field(unique=True, index=True)  # ICU-101
    type: RoomTypeEnum = Field(index=True)
    floor: int = Field(index=True)
    capacity: int = Field(default=1)
    
    # ============================================
    # OCCUPANCY
    # ============================================
    occupied: bool = Field(default=False, index=True)
    patient_id: Optional[str] = Field(default=None, index=True)
    status: RoomStatusEnum = Field(default=RoomStatusEnum.AVAILABLE, index=True)
    
    # ============================================
    # DETAILS
    # ============================================
    daily_rate: float = Field(default=0.0)
    amenities: Optional[str] = Field(default=None)  # JSON list
    equipment: Optional[str] = Field(default=None)  # JSON list
    notes: Optional[str] = Field(default=None, max_length=500)
    last_cleaned: datetime = Field(default_factory=datetime.utcnow)
    
    # ============================================
    # TIMESTAMPS
    # ============================================
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    
    @property
    def is_available(self) -> bool:
        """Whether the room can receive a patient."""
        return self.status == RoomStatusEnum.AVAILABLE and not self.occupied
    
    def get_amenities(self) -> List[str]:
        return safe_json_loads(self.amenities, default=[])
    
    def get_equipment(self) -> List[dict]:
        return safe_json_loads(self.equipment, default=[])
    
    def __repr__(self) -> str:
        return f"Room(id={self.id}, room_number={self.room_number}, status={self.status})"
