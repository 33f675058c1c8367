"""
Patient repository.
"""
from typing import Optional, List, Tuple, Dict
from sqlmodel import Session, select, func, col, or_
from sqlalchemy import update
from datetime import datetime

from hospital.repositories.base import BaseRepository
from hospital.models.patient import Patient
from hospital.models.room import Room
from hospital.models.enums import (
    ConditionEnum,
    PatientStatusEnum,
    WAITING_PATIENT_STATUSES,
)

SORTABLE_FIELDS = {
    "admission_date": Patient.admission_date,
    "priority": Patient.priority,
    "name": Patient.name,
    "age": Patient.age,
    "condition": Patient.condition,
    "status": Patient.status,
    "created_at": Patient.created_at,
}


class PatientRepository(BaseRepository[Patient]):
    """Repository for patient operations."""
    
    def __init__(self, session: Session):
        super().__init__(session, Patient)
    
    def search(
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
        Filtered, sorted and paginated patient list.
        
        Args:
            status: Filter by status
            condition: Filter by condition
            priority: Filter by priority
            search: Case-insensitive text matched against name and contact number
            sort_by: Sort field (unknown fields fall back to admission date)
            sort_order: "asc" or "desc"
            page: 1-based page number
            limit: Page size
        
        Returns:
            Tuple (patients of the page, total matching patients)
        """
        query = select(Patient)
        
        if status:
            query = query.where(Patient.status == status)
        if condition:
            query = query.where(Patient.condition == condition)
        if priority is not None:
            query = query.where(Patient.priority == priority)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    col(Patient.name).ilike(pattern),
                    col(Patient.contact_number).ilike(pattern)
                )
            )
        
        column = SORTABLE_FIELDS.get(sort_by, Patient.admission_date)
        order = col(column).desc() if sort_order == "desc" else col(column).asc()
        query = query.order_by(order, col(Patient.id))
        
        return self.paginate(query, page, limit)
    
    def _waiting_query(self, unassigned_only: bool = True):
        query = select(Patient).where(col(Patient.status).in_(WAITING_PATIENT_STATUSES))
        if unassigned_only:
            query = query.where(col(Patient.assigned_room_id).is_(None))
        return query.order_by(
            col(Patient.priority).asc(),
            col(Patient.admission_date).asc(),
            col(Patient.created_at).asc()
        )
    
    def waiting_queue(self, unassigned_only: bool = True) -> List[Patient]:
        """
        Admitted and Pending patients, most urgent first.
        
        Args:
            unassigned_only: Keep only patients without a room
        
        Returns:
            Patients ordered by priority, then admission time
        """
        return list(self.session.exec(self._waiting_query(unassigned_only)).all())
    
    def first_waiting(self) -> Optional[Patient]:
        """Highest priority patient without a room, or None."""
        return self.session.exec(self._waiting_query().limit(1)).first()
    
    def list_with_rooms(self) -> List[Tuple[Patient, Room]]:
        """Patients currently holding a room, together with that room."""
        query = (
            select(Patient, Room)
            .join(Room, Patient.assigned_room_id == Room.id)
            .where(Patient.status != PatientStatusEnum.DISCHARGED)
            .order_by(col(Patient.priority).asc(), col(Patient.admission_date).asc())
        )
        return list(self.session.exec(query).all())
    
    # ============================================
    # CONDITIONAL UPDATES
    # The affected row count decides which concurrent writer wins.
    # None of these commit; the caller owns the transaction.
    # ============================================
    
    def link_room(
        self,
        patient_id: str,
        expected_room_id: Optional[str],
        room_id: str
    ) -> bool:
        """
        Points a patient at a room and marks them Admitted.
        
        Args:
            patient_id: Patient ID
            expected_room_id: Room the patient must still hold (None for no room)
            room_id: New room
        
        Returns:
            True if the patient still held ``expected_room_id`` and was not
            Discharged
        """
        if expected_room_id is None:
            held = col(Patient.assigned_room_id).is_(None)
        else:
            held = Patient.assigned_room_id == expected_room_id
        
        statement = (
            update(Patient)
            .where(
                Patient.id == patient_id,
                held,
                Patient.status != PatientStatusEnum.DISCHARGED
            )
            .values(
                assigned_room_id=room_id,
                status=PatientStatusEnum.ADMITTED,
                updated_at=datetime.utcnow()
            )
            .execution_options(synchronize_session=False)
        )
        return self.session.exec(statement).rowcount == 1
    
    def unlink_room(self, patient_id: str, room_id: Optional[str], when: datetime) -> bool:
        """
        Marks a patient Discharged and clears their room.
        
        Args:
            patient_id: Patient ID
            room_id: Room the patient must still hold (None for no room)
            when: Discharge timestamp
        
        Returns:
            True if the patient still held ``room_id`` and was not Discharged
        """
        if room_id is None:
            held = col(Patient.assigned_room_id).is_(None)
        else:
            held = Patient.assigned_room_id == room_id
        
        statement = (
            update(Patient)
            .where(
                Patient.id == patient_id,
                held,
                Patient.status != PatientStatusEnum.DISCHARGED
            )
            .values(
                assigned_room_id=None,
                status=PatientStatusEnum.DISCHARGED,
                discharge_date=when,
                updated_at=when
            )
            .execution_options(synchronize_session=False)
        )
        return self.session.exec(statement).rowcount == 1
    
    def change_status(self, patient_id: str, status: PatientStatusEnum, when: datetime) -> bool:
        """
        Sets the status of a patient who is not Discharged.
        
        Any status other than Admitted additionally requires the patient to
        hold no room, checked against the stored row.
        
        Returns:
            True if the row matched and was updated
        """
        conditions = [
            Patient.id == patient_id,
            Patient.status != PatientStatusEnum.DISCHARGED,
        ]
        if status != PatientStatusEnum.ADMITTED:
            conditions.append(col(Patient.assigned_room_id).is_(None))
        
        statement = (
            update(Patient)
            .where(*conditions)
            .values(status=status, updated_at=when)
            .execution_options(synchronize_session=False)
        )
        return self.session.exec(statement).rowcount == 1
    
    # ============================================
    # COUNTERS
    # ============================================
    
    def count_by_status(self) -> Dict[str, int]:
        """Number of patients per status, every status present."""
        rows = self.session.exec(
            select(Patient.status, func.count()).group_by(Patient.status)
        ).all()
        counts = {status.value: 0 for status in PatientStatusEnum}
        for status, total in rows:
            counts[PatientStatusEnum(status).value] = total
        return counts
    
    def count_by_condition(self) -> Dict[str, int]:
        """Number of patients per condition, every condition present."""
        rows = self.session.exec(
            select(Patient.condition, func.count()).group_by(Patient.condition)
        ).all()
        counts = {condition.value: 0 for condition in ConditionEnum}
        for condition, total in rows:
            counts[ConditionEnum(condition).value] = total
        return counts
    
    def count_waiting(self, condition: Optional[ConditionEnum] = None) -> int:
        """
        Counts patients waiting for a room.
        
        Args:
            condition: Optional condition filter
        """
        query = (
            select(func.count())
            .select_from(Patient)
            .where(
                col(Patient.status).in_(WAITING_PATIENT_STATUSES),
                col(Patient.assigned_room_id).is_(None)
            )
        )
        if condition:
            query = query.where(Patient.condition == condition)
        return self.session.exec(query).one()
