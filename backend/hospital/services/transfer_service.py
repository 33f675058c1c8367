"""
Transfer suggestions.
Read-only: flags patients placed in a room type their condition does not call for.
"""
from typing import List
from sqlmodel import Session
from dataclasses import dataclass

from hospital.models.patient import Patient
from hospital.models.room import Room
from hospital.models.enums import RoomTypeEnum
from hospital.repositories.patient_repo import PatientRepository
from hospital.services.priority import required_room_category


@dataclass
class TransferSuggestion:
    patient: Patient
    current_room: Room
    ideal_category: RoomTypeEnum


class TransferService:
    """Service for transfer suggestions."""
    
    def __init__(self, session: Session):
        self.session = session
        self.patient_repo = PatientRepository(session)
    
    def suggest_transfers(self) -> List[TransferSuggestion]:
        """
        Patients whose room type differs from their ideal category.
        
        Returns:
            Suggestions ordered by patient priority, then admission time
        """
        suggestions = []
        for patient, room in self.patient_repo.list_with_rooms():
            ideal = required_room_category(patient.condition)
            if room.type != ideal:
                suggestions.append(
                    TransferSuggestion(patient=patient, current_room=room, ideal_category=ideal)
                )
        return suggestions
