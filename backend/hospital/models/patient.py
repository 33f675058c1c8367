"""
Patient model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional, List
from datetime import datetime
import math
import uuid

from hospital.models.enums import (
    ConditionEnum,
    PatientStatusEnum,
)
from hospital.utils.helpers import safe_json_loads


class Patient(SQLModel, table=True):
    """
    Patient model.
    
    ``priority`` is derived from ``condition`` by the service layer on every
    write; ``assigned_room_id`` is only written by the assignment transaction.
    """
    __tablename__ = "patient"
    
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )
    
    # ============================================
    # PERSONAL DATA
    # ============================================
    name: str = Field(max_length=100)
    age: int
    contact_number: str
    emergency_contact_name: str
    emergency_contact_phone: str
    emergency_contact_relationship: str
    
    # ============================================
    # CLINICAL DATA
    # ============================================
    condition: ConditionEnum = Field(index=True)
    priority: int = Field(index=True)
    medical_history: Optional[str] = Field(default=None, max_length=1000)
    allergies: Optional[str] = Field(default=None)  # JSON list
    current_medication: Optional[str] = Field(default=None)  # JSON list
    
    # ============================================
    # ADMISSION AND ROOM
    # ============================================
    status: PatientStatusEnum = Field(default=PatientStatusEnum.ADMITTED, index=True)
    assigned_room_id: Optional[str] = Field(default=None, foreign_key="room.id", index=True)
    admission_date: datetime = Field(default_factory=datetime.utcnow, index=True)
    discharge_date: Optional[datetime] = Field(default=None)
    
    # ============================================
    # TIMESTAMPS
    # ============================================
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    
    @property
    def length_of_stay(self) -> int:
        """Days between admission and discharge (or now), rounded up."""
        end_date = self.discharge_date or datetime.utcnow()
        seconds = abs((end_date - self.admission_date).total_seconds())
        return math.ceil(seconds / 86400)
    
    @property
    def is_discharged(self) -> bool:
        return self.status == PatientStatusEnum.DISCHARGED
    
    def get_allergies(self) -> List[str]:
        return safe_json_loads(self.allergies, default=[])
    
    def get_current_medication(self) -> List[dict]:
        return safe_json_loads(self.current_medication, default=[])
    
    def __repr__(self) -> str:
        return f"Patient(id={self.id}, name={self.name}, condition={self.condition})"
