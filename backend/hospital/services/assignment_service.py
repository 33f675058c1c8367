"""
Room assignment service.
The only writer of the link between a patient and a room.

Both sides of the link change in one transaction, through conditional
updates, so two requests racing for the same room cannot both win.
"""
from typing import Optional, Dict, Any
from sqlmodel import Session
from dataclasses import dataclass
from datetime import datetime
import logging

from hospital.models.patient import Patient
from hospital.models.room import Room
from hospital.repositories.patient_repo import PatientRepository
from hospital.repositories.room_repo import RoomRepository
from hospital.core.database import transaction
from hospital.core.exceptions import (
    ConflictError,
    PatientNotFoundError,
    RoomNotFoundError,
    RoomUnavailableError,
    PatientHasNoRoomError,
    PatientDischargedError,
)
from hospital.core.notifications import Notifier, ROOM_ASSIGNED, ROOM_RELEASED
from hospital.utils.helpers import build_patient_response, build_room_response, snapshot

logger = logging.getLogger("hms.assignment")


@dataclass
class AssignmentResult:
    """Patient and room after an assignment."""
    patient: Patient
    room: Room
    previous_room: Optional[Room] = None


@dataclass
class ReleaseResult:
    """Patient and room after a release."""
    patient: Patient
    room: Room


def link_snapshot(patient: Patient, room: Room, linked: bool = True) -> Dict[str, Any]:
    """
    JSON-ready view of a patient and a room.
    
    Args:
        patient: Patient
        room: Room
        linked: Whether the patient currently holds the room
    """
    return {
        "patient": snapshot(build_patient_response(patient, room if linked else None)),
        "room": snapshot(build_room_response(room, patient if linked else None)),
    }


def append_discharge_notes(medical_history: Optional[str], notes: Optional[str]) -> Optional[str]:
    """Adds discharge notes to the end of a medical history."""
    if not notes or not notes.strip():
        return medical_history
    entry = f"Discharge Notes: {notes.strip()}"
    if medical_history:
        return f"{medical_history}\n\n{entry}"
    return entry


class AssignmentService:
    """
    Service for assigning and releasing rooms.
    """
    
    def __init__(self, session: Session, notifier: Optional[Notifier] = None):
        self.session = session
        self.notifier = notifier or Notifier()
        self.patient_repo = PatientRepository(session)
        self.room_repo = RoomRepository(session)
    
    # ============================================
    # ASSIGN
    # ============================================
    
    def assign(self, patient_id: str, room_id: str, notify: bool = True) -> AssignmentResult:
        """
        Places a patient in a room.
        
        A room the patient already holds is sent to Cleaning in the same
        transaction.
        
        Args:
            patient_id: Patient ID
            room_id: Target room ID
            notify: Emit ``room-assigned`` after the commit
        
        Returns:
            AssignmentResult with the refreshed records
        
        Raises:
            PatientNotFoundError, RoomNotFoundError: Unknown IDs
            PatientDischargedError: The patient was already discharged
            RoomUnavailableError: The room is occupied or not Available
            ConflictError: A concurrent request changed the records first
        """
        patient = self.patient_repo.get_by_id(patient_id)
        if not patient:
            raise PatientNotFoundError(patient_id)
        
        room = self.room_repo.get_by_id(room_id)
        if not room:
            raise RoomNotFoundError(room_id)
        
        if patient.is_discharged:
            logger.warning(f"Assignment rejected: patient {patient_id} is discharged")
            raise PatientDischargedError(patient_id)
        
        if not room.is_available:
            logger.warning(
                f"Assignment rejected: room {room.room_number} is {room.status.value}"
            )
            raise RoomUnavailableError(room_id, room.status.value)
        
        previous_room_id = patient.assigned_room_id
        now = datetime.utcnow()
        
        with transaction(self.session, "assign room"):
            if previous_room_id:
                if not self.room_repo.vacate(previous_room_id, patient_id, now):
                    raise ConflictError(
                        f"Room {previous_room_id} changed while moving patient {patient_id}"
                    )
            
            if not self.room_repo.occupy_if_available(room_id, patient_id):
                logger.warning(
                    f"Room {room.room_number} was taken by a concurrent assignment"
                )
                raise RoomUnavailableError(room_id, "Occupied")
            
            if not self.patient_repo.link_room(patient_id, previous_room_id, room_id):
                raise ConflictError(f"Patient {patient_id} changed during the assignment")
        
        self.session.refresh(patient)
        self.session.refresh(room)
        previous_room = None
        if previous_room_id:
            previous_room = self.room_repo.get_by_id(previous_room_id)
        
        logger.info(f"Patient {patient.name} assigned to room {room.room_number}")
        
        if notify:
            self.notifier.emit(ROOM_ASSIGNED, link_snapshot(patient, room))
        
        return AssignmentResult(patient=patient, room=room, previous_room=previous_room)
    
    # ============================================
    # RELEASE
    # ============================================
    
    def release(
        self,
        patient_id: str,
        discharge_notes: Optional[str] = None,
        notify: bool = True
    ) -> ReleaseResult:
        """
        Discharges a patient and frees their room.
        
        The room goes to Cleaning, never straight back to Available.
        
        Args:
            patient_id: Patient ID
            discharge_notes: Appended to the medical history
            notify: Emit ``room-released`` after the commit
        
        Returns:
            ReleaseResult with the refreshed records
        
        Raises:
            PatientNotFoundError: Unknown patient
            PatientHasNoRoomError: The patient does not hold a room
            ConflictError: A concurrent request changed the records first
        """
        patient = self.patient_repo.get_by_id(patient_id)
        if not patient:
            raise PatientNotFoundError(patient_id)
        
        room_id = patient.assigned_room_id
        if not room_id:
            logger.warning(f"Release rejected: patient {patient_id} holds no room")
            raise PatientHasNoRoomError(patient_id)
        
        room = self.room_repo.get_by_id(room_id)
        if not room:
            raise RoomNotFoundError(room_id)
        
        now = datetime.utcnow()
        
        with transaction(self.session, "release room"):
            new_history = append_discharge_notes(patient.medical_history, discharge_notes)
            if new_history != patient.medical_history:
                patient.medical_history = new_history
                self.session.add(patient)
                self.session.flush()
            
            if not self.patient_repo.unlink_room(patient_id, room_id, now):
                raise PatientHasNoRoomError(patient_id)
            
            if not self.room_repo.vacate(room_id, patient_id, now):
                raise ConflictError(f"Room {room_id} changed during the release")
        
        self.session.refresh(patient)
        self.session.refresh(room)
        
        logger.info(f"Patient {patient.name} released from room {room.room_number}")
        
        if notify:
            self.notifier.emit(ROOM_RELEASED, link_snapshot(patient, room, linked=False))
        
        return ReleaseResult(patient=patient, room=room)
