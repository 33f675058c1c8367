"""
Patient service.
Admission, profile edits, discharge and the waiting queue.
"""
from typing import Optional, List, Tuple, Dict
from sqlmodel import Session
from dataclasses import dataclass
from datetime import datetime
import logging

from hospital.models.patient import Patient
from hospital.models.room import Room
from hospital.models.enums import ConditionEnum, PatientStatusEnum
from hospital.repositories.patient_repo import PatientRepository
from hospital.repositories.room_repo import RoomRepository
from hospital.schemas.patient import PatientCreate, PatientUpdate
from hospital.core.database import transaction
from hospital.core.exceptions import (
    ValidationError,
    ConflictError,
    PatientNotFoundError,
    PatientDischargedError,
)
from hospital.core.notifications import (
    Notifier,
    PATIENT_ADMITTED,
    PATIENT_UPDATED,
    PATIENT_DISCHARGED,
)
from hospital.services.priority import derive_priority
from hospital.services.assignment_service import AssignmentService, append_discharge_notes
from hospital.services.allocation_service import AllocationService, AllocationResult
from hospital.utils.helpers import (
    build_patient_response,
    build_room_response,
    safe_json_dumps,
    snapshot,
)

logger = logging.getLogger("hms.patients")


@dataclass
class AdmissionResult:
    """New patient and the allocation attempted right after admission."""
    patient: Patient
    allocation: Optional[AllocationResult] = None


@dataclass
class DischargeResult:
    """Discharged patient and the room released, if they held one."""
    patient: Patient
    room_released: Optional[Room] = None


class PatientService:
    """
    Service for patient management.
    """
    
    def __init__(self, session: Session, notifier: Optional[Notifier] = None):
        self.session = session
        self.notifier = notifier or Notifier()
        self.patient_repo = PatientRepository(session)
        self.room_repo = RoomRepository(session)
        self.assignment = AssignmentService(session, self.notifier)
    
    # ============================================
    # QUERIES
    # ============================================
    
    def get_patient(self, patient_id: str) -> Patient:
        """
        Returns a patient.
        
        Raises:
            PatientNotFoundError: If it does not exist
        """
        patient = self.patient_repo.get_by_id(patient_id)
        if not patient:
            raise PatientNotFoundError(patient_id)
        return patient
    
    def get_room_of(self, patient: Patient) -> Optional[Room]:
        """Room currently held by a patient."""
        if not patient.assigned_room_id:
            return None
        return self.room_repo.get_by_id(patient.assigned_room_id)
    
    def rooms_for(self, patients: List[Patient]) -> Dict[str, Room]:
        """Rooms held by a list of patients, keyed by room ID."""
        return self.room_repo.get_many([p.assigned_room_id for p in patients])
    
    def list_patients(
        self,
        status: Optional[PatientStatusEnum] = None,
        condition: Optional[ConditionEnum] = None,
        priority: Optional[int] = None,
        search: Optional[str] = None,
        sort_by: str = "admission_date",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Patient], int]:
        """
        Filtered and paginated patient list.
        
        Returns:
            Tuple (patients of the page, total matching patients)
        """
        return self.patient_repo.search(
            status=status,
            condition=condition,
            priority=priority,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit
        )
    
    def priority_queue(self, unassigned_only: bool = True) -> List[Patient]:
        """
        Admitted and Pending patients, most urgent first.
        
        Args:
            unassigned_only: Keep only patients waiting for a room
        """
        return self.patient_repo.waiting_queue(unassigned_only)
    
    # ============================================
    # ADMISSION
    # ============================================
    
    def admit_patient(self, data: PatientCreate) -> AdmissionResult:
        """
        Registers a new patient.
        
        Admitted patients trigger an automatic allocation right away; the
        allocation picks whoever is most urgent, not necessarily this patient.
        
        Args:
            data: Patient data
        
        Returns:
            AdmissionResult
        """
        patient = Patient(
            name=data.name,
            age=data.age,
            contact_number=data.contact_number,
            emergency_contact_name=data.emergency_contact.name,
            emergency_contact_phone=data.emergency_contact.phone,
            emergency_contact_relationship=data.emergency_contact.relationship,
            condition=data.condition,
            priority=derive_priority(data.condition),
            status=data.status,
            medical_history=data.medical_history,
            allergies=safe_json_dumps(data.allergies),
            current_medication=safe_json_dumps(
                [m.model_dump() for m in data.current_medication]
            ),
        )
        if data.admission_date:
            patient.admission_date = data.admission_date
        
        with transaction(self.session, "admit patient"):
            self.patient_repo.add(patient)
        self.session.refresh(patient)
        
        logger.info(
            f"Patient admitted: {patient.name} ({patient.condition.value}, priority {patient.priority})"
        )
        self.notifier.emit(PATIENT_ADMITTED, {
            "patient": snapshot(build_patient_response(patient))
        })
        
        allocation = None
        if patient.status == PatientStatusEnum.ADMITTED:
            allocation = AllocationService(self.session, self.notifier).auto_allocate()
            self.session.refresh(patient)
        
        return AdmissionResult(patient=patient, allocation=allocation)
    
    # ============================================
    # UPDATE
    # ============================================
    
    def update_patient(self, patient_id: str, data: PatientUpdate) -> Patient:
        """
        Edits a patient profile.
        
        The room link is never touched here. Changing the condition
        recomputes the priority.
        
        Raises:
            PatientNotFoundError: Unknown patient
            PatientDischargedError: Status change on a discharged patient
            ValidationError: Pending requested for a patient holding a room
            ConflictError: The patient was assigned or discharged concurrently
        """
        patient = self.get_patient(patient_id)
        changes = data.model_dump(exclude_unset=True)
        
        new_status = changes.pop("status", None)
        if new_status is not None:
            if patient.is_discharged:
                raise PatientDischargedError(patient_id)
            if patient.assigned_room_id and new_status != PatientStatusEnum.ADMITTED:
                raise ValidationError("A patient holding a room must stay Admitted")
        
        contact = changes.pop("emergency_contact", None)
        if contact:
            patient.emergency_contact_name = contact["name"]
            patient.emergency_contact_phone = contact["phone"]
            patient.emergency_contact_relationship = contact["relationship"]
        
        for field_name in ("allergies", "current_medication"):
            if field_name in changes:
                setattr(patient, field_name, safe_json_dumps(changes.pop(field_name)))
        
        for field_name, value in changes.items():
            if value is None and field_name in ("name", "age", "contact_number", "condition"):
                continue
            setattr(patient, field_name, value)
        
        if "condition" in changes and changes["condition"] is not None:
            patient.priority = derive_priority(patient.condition)
        
        now = datetime.utcnow()
        patient.updated_at = now
        
        with transaction(self.session, "update patient"):
            # A linked patient stays Admitted, checked against the stored row
            if new_status is not None:
                if not self.patient_repo.change_status(patient_id, new_status, now):
                    logger.warning(
                        f"Status change to {new_status.value} rejected for patient {patient_id}"
                    )
                    raise ConflictError(
                        f"Patient {patient_id} was assigned or discharged during the update"
                    )
            self.patient_repo.add(patient)
        self.session.refresh(patient)
        
        logger.info(f"Patient updated: {patient.name}")
        self.notifier.emit(PATIENT_UPDATED, {
            "patient": snapshot(build_patient_response(patient, self.get_room_of(patient)))
        })
        return patient
    
    # ============================================
    # DISCHARGE
    # ============================================
    
    def discharge_patient(
        self,
        patient_id: str,
        discharge_notes: Optional[str] = None
    ) -> DischargeResult:
        """
        Discharges a patient.
        
        A patient holding a room goes through the release transaction and the
        room is sent to Cleaning.
        
        Raises:
            PatientNotFoundError: Unknown patient
            PatientDischargedError: Already discharged
        """
        patient = self.get_patient(patient_id)
        if patient.is_discharged:
            logger.warning(f"Discharge rejected: patient {patient_id} already discharged")
            raise PatientDischargedError(patient_id)
        
        room_released = None
        if patient.assigned_room_id:
            result = self.assignment.release(patient_id, discharge_notes, notify=False)
            patient, room_released = result.patient, result.room
        else:
            now = datetime.utcnow()
            with transaction(self.session, "discharge patient"):
                patient.medical_history = append_discharge_notes(
                    patient.medical_history, discharge_notes
                )
                self.patient_repo.add(patient)
                self.session.flush()
                if not self.patient_repo.unlink_room(patient_id, None, now):
                    raise ConflictError(f"Patient {patient_id} changed during the discharge")
            self.session.refresh(patient)
        
        logger.info(f"Patient discharged: {patient.name}")
        self.notifier.emit(PATIENT_DISCHARGED, {
            "patient": snapshot(build_patient_response(patient)),
            "room_released": (
                snapshot(build_room_response(room_released)) if room_released else None
            ),
        })
        return DischargeResult(patient=patient, room_released=room_released)
