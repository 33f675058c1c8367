"""
Data access repositories.
"""
from hospital.repositories.base import BaseRepository
from hospital.repositories.patient_repo import PatientRepository
from hospital.repositories.room_repo import RoomRepository

__all__ = [
    "BaseRepository",
    "PatientRepository",
    "RoomRepository",
]
