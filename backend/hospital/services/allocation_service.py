"""
Automatic room allocation.

Picks the most urgent waiting patient, works out the room category their
condition needs and hands the pair to the assignment transaction.
"""
from typing import Optional
from sqlmodel import Session
from dataclasses import dataclass
import logging

from hospital.config import settings
from hospital.models.patient import Patient
from hospital.models.room import Room
from hospital.models.enums import ConditionEnum, RoomTypeEnum
from hospital.repositories.patient_repo import PatientRepository
from hospital.repositories.room_repo import RoomRepository
from hospital.core.exceptions import ConflictError
from hospital.core.notifications import Notifier, AUTO_ALLOCATION_COMPLETE
from hospital.services.assignment_service import AssignmentService, link_snapshot
from hospital.services.priority import required_room_category, room_search_tiers

logger = logging.getLogger("hms.allocation")

NO_WAITING_PATIENTS = "no waiting patients"


@dataclass
class AllocationResult:
    """
    Outcome of an automatic allocation.
    
    On a no-op ``success`` is False and ``reason`` says why; ``patient`` is
    then the patient left waiting, if any.
    """
    success: bool
    message: str
    reason: Optional[str] = None
    patient: Optional[Patient] = None
    room: Optional[Room] = None


class AllocationService:
    """
    Service for priority-based room allocation.
    """
    
    def __init__(
        self,
        session: Session,
        notifier: Optional[Notifier] = None,
        max_attempts: Optional[int] = None
    ):
        self.session = session
        self.notifier = notifier or Notifier()
        self.max_attempts = max_attempts or settings.AUTO_ALLOCATE_MAX_ATTEMPTS
        self.patient_repo = PatientRepository(session)
        self.room_repo = RoomRepository(session)
        self.assignment = AssignmentService(session, self.notifier)
    
    def select_next_patient(self) -> Optional[Patient]:
        """
        Most urgent patient without a room.
        
        Only Admitted or Pending patients qualify. Lower priority number wins,
        ties go to the earliest admission.
        """
        return self.patient_repo.first_waiting()
    
    def find_best_room(
        self,
        category: RoomTypeEnum,
        condition: ConditionEnum
    ) -> Optional[Room]:
        """
        Finds an Available, unoccupied room for a patient.
        
        Tries the exact category first, then ICU for Critical patients or
        General/Private for the others. Within a tier the lowest floor and
        room number win.
        
        Args:
            category: Requested room category
            condition: Patient condition
        
        Returns:
            The room or None
        """
        for room_types in room_search_tiers(category, condition):
            room = self.room_repo.find_first_available(room_types)
            if room:
                return room
        return None
    
    def auto_allocate(self, room_type: Optional[RoomTypeEnum] = None) -> AllocationResult:
        """
        Assigns the most urgent waiting patient to the best free room.
        
        Losing the room to a concurrent assignment triggers a new search, up
        to ``max_attempts`` times. Nothing waiting and nothing free are
        reported as no-op outcomes, not errors.
        
        Args:
            room_type: Category to look for instead of the one implied by the
                patient's condition
        
        Returns:
            AllocationResult
        """
        patient = None
        
        for attempt in range(1, self.max_attempts + 1):
            patient = self.select_next_patient()
            if not patient:
                logger.info("Auto allocation skipped: no waiting patients")
                return AllocationResult(
                    success=False,
                    message="No unassigned patients found",
                    reason=NO_WAITING_PATIENTS
                )
            
            category = room_type or required_room_category(patient.condition)
            room = self.find_best_room(category, patient.condition)
            if not room:
                category_name = RoomTypeEnum(category).value
                logger.info(
                    f"Auto allocation skipped: no {category_name} room for {patient.name}"
                )
                return AllocationResult(
                    success=False,
                    message=f"No available {category_name} rooms found",
                    reason=f"no suitable room for category {category_name}, patient still waiting",
                    patient=patient
                )
            
            try:
                result = self.assignment.assign(patient.id, room.id, notify=False)
            except ConflictError as e:
                logger.warning(
                    f"Auto allocation attempt {attempt}/{self.max_attempts} lost a race: {e.message}"
                )
                continue
            
            logger.info(
                f"Auto allocation: {result.patient.name} -> room {result.room.room_number}"
            )
            self.notifier.emit(
                AUTO_ALLOCATION_COMPLETE,
                link_snapshot(result.patient, result.room)
            )
            return AllocationResult(
                success=True,
                message="Patient successfully allocated to room",
                patient=result.patient,
                room=result.room
            )
        
        return AllocationResult(
            success=False,
            message="Rooms kept being taken by concurrent assignments",
            reason="allocation conflict, patient still waiting",
            patient=patient
        )
