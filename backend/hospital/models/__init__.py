"""
Data models.
Re-exports every model for simpler imports.
"""
from hospital.models.enums import (
    ConditionEnum,
    PatientStatusEnum,
    RoomTypeEnum,
    RoomStatusEnum,
    AmenityEnum,
    EquipmentStatusEnum,
)

from hospital.models.room import Room
from hospital.models.patient import Patient

__all__ = [
    # Enums
    "ConditionEnum",
    "PatientStatusEnum",
    "RoomTypeEnum",
    "RoomStatusEnum",
    "AmenityEnum",
    "EquipmentStatusEnum",
    # Models
    "Room",
    "Patient",
]
