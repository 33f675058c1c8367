"""
Unit tests for the assignment transaction.
"""
import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from hospital.models.patient import Patient
from hospital.models.room import Room
from hospital.models.enums import (
    ConditionEnum,
    PatientStatusEnum,
    RoomTypeEnum,
    RoomStatusEnum,
)
from hospital.core.database import build_engine, create_db_and_tables
from hospital.core.exceptions import (
    ConflictError,
    PatientNotFoundError,
    RoomNotFoundError,
    RoomUnavailableError,
    PatientHasNoRoomError,
    PatientDischargedError,
    InternalError,
)
from hospital.core.notifications import ROOM_ASSIGNED, ROOM_RELEASED
from hospital.services.assignment_service import AssignmentService, append_discharge_notes
from hospital.services.patient_service import PatientService
from hospital.schemas.patient import PatientUpdate


class TestAssign:
    """Tests for placing a patient in a room."""
    
    def test_assign_links_both_sides(self, session, create_patient, create_room):
        patient = create_patient(status=PatientStatusEnum.PENDING)
        room = create_room()
        
        result = AssignmentService(session).assign(patient.id, room.id)
        
        assert result.patient.status == PatientStatusEnum.ADMITTED
        assert result.patient.assigned_room_id == room.id
        assert result.room.occupied is True
        assert result.room.status == RoomStatusEnum.OCCUPIED
        assert result.room.patient_id == patient.id
    
    def test_assign_emits_room_assigned(self, session, create_patient, create_room, notifier):
        patient = create_patient()
        room = create_room()
        
        AssignmentService(session, notifier).assign(patient.id, room.id)
        
        assert [e.event for e in notifier.pending] == [ROOM_ASSIGNED]
        assert notifier.pending[0].data["room"]["patient"]["id"] == patient.id
    
    def test_assign_occupied_room_rejected(self, session, create_patient, create_room, assign):
        room = create_room()
        first = create_patient(name="First")
        second = create_patient(name="Second")
        assign(first, room)
        
        with pytest.raises(RoomUnavailableError):
            AssignmentService(session).assign(second.id, room.id)
        
        session.refresh(room)
        session.refresh(second)
        assert room.patient_id == first.id
        assert second.assigned_room_id is None
    
    @pytest.mark.parametrize("status", [RoomStatusEnum.CLEANING, RoomStatusEnum.MAINTENANCE])
    def test_assign_room_not_available_rejected(
        self, session, create_patient, create_room, notifier, status
    ):
        patient = create_patient()
        room = create_room(status=status)
        
        with pytest.raises(RoomUnavailableError):
            AssignmentService(session, notifier).assign(patient.id, room.id)
        
        session.refresh(room)
        assert room.status == status
        assert notifier.pending == []
    
    def test_assign_discharged_patient_rejected(self, session, create_patient, create_room):
        patient = create_patient(status=PatientStatusEnum.DISCHARGED)
        room = create_room()
        
        with pytest.raises(PatientDischargedError):
            AssignmentService(session).assign(patient.id, room.id)
    
    def test_assign_unknown_ids(self, session, create_patient, create_room):
        patient = create_patient()
        room = create_room()
        service = AssignmentService(session)
        
        with pytest.raises(PatientNotFoundError):
            service.assign("missing", room.id)
        with pytest.raises(RoomNotFoundError):
            service.assign(patient.id, "missing")
    
    def test_move_releases_previous_room(self, session, create_patient, create_room, assign):
        patient = create_patient(condition=ConditionEnum.CRITICAL)
        general = create_room(room_number="GEN-201", type=RoomTypeEnum.GENERAL)
        icu = create_room(room_number="ICU-101", type=RoomTypeEnum.ICU)
        assign(patient, general)
        
        result = AssignmentService(session).assign(patient.id, icu.id)
        
        assert result.patient.assigned_room_id == icu.id
        assert result.patient.status == PatientStatusEnum.ADMITTED
        assert result.patient.discharge_date is None
        assert result.previous_room.id == general.id
        assert result.previous_room.status == RoomStatusEnum.CLEANING
        assert result.previous_room.occupied is False
        assert result.previous_room.patient_id is None


class TestRelease:
    """Tests for releasing a patient's room."""
    
    def test_release_sends_room_to_cleaning(self, session, create_patient, create_room, assign):
        patient = create_patient()
        room = create_room()
        assign(patient, room)
        cleaned_before = room.last_cleaned
        
        result = AssignmentService(session).release(patient.id)
        
        assert result.patient.status == PatientStatusEnum.DISCHARGED
        assert result.patient.discharge_date is not None
        assert result.patient.assigned_room_id is None
        assert result.room.status == RoomStatusEnum.CLEANING
        assert result.room.occupied is False
        assert result.room.patient_id is None
        assert result.room.last_cleaned >= cleaned_before
    
    def test_release_emits_room_released(
        self, session, create_patient, create_room, assign, notifier
    ):
        patient = create_patient()
        room = create_room()
        assign(patient, room)
        
        AssignmentService(session, notifier).release(patient.id)
        
        assert [e.event for e in notifier.pending] == [ROOM_RELEASED]
        assert notifier.pending[0].data["room"]["status"] == "Cleaning"
    
    def test_release_without_room_rejected(self, session, create_patient, notifier):
        patient = create_patient()
        
        with pytest.raises(PatientHasNoRoomError):
            AssignmentService(session, notifier).release(patient.id)
        
        session.refresh(patient)
        assert patient.status == PatientStatusEnum.ADMITTED
        assert notifier.pending == []
    
    def test_release_unknown_patient(self, session):
        with pytest.raises(PatientNotFoundError):
            AssignmentService(session).release("missing")
    
    def test_release_appends_discharge_notes(
        self, session, create_patient, create_room, assign
    ):
        patient = create_patient(medical_history="Asthma")
        room = create_room()
        assign(patient, room)
        
        result = AssignmentService(session).release(patient.id, "Recovered well")
        
        assert result.patient.medical_history == "Asthma\n\nDischarge Notes: Recovered well"
    
    def test_append_discharge_notes(self):
        assert append_discharge_notes(None, "Done") == "Discharge Notes: Done"
        assert append_discharge_notes("History", None) == "History"
        assert append_discharge_notes("History", "   ") == "History"


@pytest.fixture
def race_engine(tmp_path):
    """File-based database shared by independent sessions."""
    engine = build_engine(f"sqlite:///{tmp_path / 'race.db'}", echo=False)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


def make_patient(name, phone):
    return Patient(
        name=name, age=30, contact_number=phone,
        emergency_contact_name="Contact", emergency_contact_phone="+1555000900",
        emergency_contact_relationship="Sibling",
        condition=ConditionEnum.CRITICAL, priority=1,
    )


class TestConcurrentAssignment:
    """Requests racing for the same room or the same patient."""
    
    def test_only_one_assignment_wins(self, race_engine):
        with Session(race_engine) as setup:
            room = Room(room_number="ICU-101", type=RoomTypeEnum.ICU, floor=1)
            first = make_patient("First", "+1555000001")
            second = make_patient("Second", "+1555000003")
            setup.add_all([room, first, second])
            setup.commit()
            room_id, first_id, second_id = room.id, first.id, second.id
        
        with Session(race_engine) as session_a, Session(race_engine) as session_b:
            # Both requests have already seen the room as available
            assert session_a.get(Room, room_id).is_available
            assert session_b.get(Room, room_id).is_available
            
            AssignmentService(session_a).assign(first_id, room_id)
            
            with pytest.raises(ConflictError):
                AssignmentService(session_b).assign(second_id, room_id)
        
        with Session(race_engine) as check:
            room = check.get(Room, room_id)
            assert room.occupied is True
            assert room.patient_id == first_id
            assert check.get(Patient, first_id).assigned_room_id == room_id
            assert check.get(Patient, second_id).assigned_room_id is None
    
    def test_patient_placed_elsewhere_leaves_room_free(self, race_engine):
        with Session(race_engine) as setup:
            icu = Room(room_number="ICU-101", type=RoomTypeEnum.ICU, floor=1)
            other = Room(room_number="ICU-102", type=RoomTypeEnum.ICU, floor=1)
            patient = make_patient("Placed Twice", "+1555000001")
            setup.add_all([icu, other, patient])
            setup.commit()
            icu_id, other_id, patient_id = icu.id, other.id, patient.id
        
        with Session(race_engine) as session_a, Session(race_engine) as session_b:
            # Session B still sees the patient without a room
            assert session_b.get(Patient, patient_id).assigned_room_id is None
            
            AssignmentService(session_a).assign(patient_id, icu_id)
            
            with pytest.raises(ConflictError):
                AssignmentService(session_b).assign(patient_id, other_id)
        
        with Session(race_engine) as check:
            other = check.get(Room, other_id)
            assert other.occupied is False
            assert other.patient_id is None
            assert other.status == RoomStatusEnum.AVAILABLE
            assert check.get(Patient, patient_id).assigned_room_id == icu_id
    
    def test_status_edit_loses_to_assignment(self, race_engine):
        with Session(race_engine) as setup:
            room = Room(room_number="ICU-101", type=RoomTypeEnum.ICU, floor=1)
            patient = make_patient("Edited", "+1555000001")
            setup.add_all([room, patient])
            setup.commit()
            room_id, patient_id = room.id, patient.id
        
        with Session(race_engine) as session_a, Session(race_engine) as session_b:
            assert session_b.get(Patient, patient_id).assigned_room_id is None
            
            AssignmentService(session_a).assign(patient_id, room_id)
            
            with pytest.raises(ConflictError):
                PatientService(session_b).update_patient(
                    patient_id, PatientUpdate(status=PatientStatusEnum.PENDING)
                )
        
        with Session(race_engine) as check:
            patient = check.get(Patient, patient_id)
            assert patient.status == PatientStatusEnum.ADMITTED
            assert patient.assigned_room_id == room_id
    
    def test_status_edit_without_room(self, session, create_patient):
        patient = create_patient()
        
        updated = PatientService(session).update_patient(
            patient.id, PatientUpdate(status=PatientStatusEnum.PENDING)
        )
        
        assert updated.status == PatientStatusEnum.PENDING


def failing_commit():
    raise OperationalError("COMMIT", {}, Exception("database is locked"))


class TestStoreFailure:
    """A store error during the transaction leaves no partial link."""
    
    def test_assign_rolls_back(self, session, create_patient, create_room, monkeypatch):
        patient = create_patient()
        room = create_room()
        patient_id, room_id = patient.id, room.id
        
        monkeypatch.setattr(session, "commit", failing_commit)
        with pytest.raises(InternalError):
            AssignmentService(session).assign(patient_id, room_id)
        monkeypatch.undo()
        
        room = session.get(Room, room_id)
        assert room.occupied is False
        assert room.patient_id is None
        assert room.status == RoomStatusEnum.AVAILABLE
        assert session.get(Patient, patient_id).assigned_room_id is None
    
    def test_release_rolls_back(self, session, create_patient, create_room, assign, monkeypatch):
        patient = create_patient()
        room = create_room()
        assign(patient, room)
        patient_id, room_id = patient.id, room.id
        
        monkeypatch.setattr(session, "commit", failing_commit)
        with pytest.raises(InternalError):
            AssignmentService(session).release(patient_id)
        monkeypatch.undo()
        
        patient = session.get(Patient, patient_id)
        assert patient.status == PatientStatusEnum.ADMITTED
        assert patient.assigned_room_id == room_id
        assert session.get(Room, room_id).status == RoomStatusEnum.OCCUPIED
    
    def test_assign_endpoint_returns_500(
        self, client, session, create_patient, create_room, monkeypatch
    ):
        patient = create_patient()
        room = create_room()
        patient_id, room_id = patient.id, room.id
        
        monkeypatch.setattr(session, "commit", failing_commit)
        response = client.post(
            f"/api/patients/{patient_id}/assign-room", json={"room_id": room_id}
        )
        monkeypatch.undo()
        
        assert response.status_code == 500
        assert client.get(f"/api/rooms/{room_id}").json()["occupied"] is False
